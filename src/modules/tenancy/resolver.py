"""Tenant resolution: principal id -> principal + owning organization."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.models.organization import Organization
from src.models.user import User

logger = logging.getLogger(__name__)


class PrincipalNotFoundError(Exception):
    """The principal id produced by the session does not match any account."""

    def __init__(self, principal_id: uuid.UUID) -> None:
        super().__init__(f"Principal {principal_id} not found")
        self.principal_id = principal_id


class NoTenantError(Exception):
    """The principal exists but has no resolvable organization."""

    def __init__(self, principal_id: uuid.UUID) -> None:
        super().__init__(f"Principal {principal_id} has no organization")
        self.principal_id = principal_id


class TenantResolver:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_principal(self, principal_id: uuid.UUID) -> User:
        """Load the principal with its organization eagerly attached.

        Raises PrincipalNotFoundError or NoTenantError; never returns a
        principal without an organization.
        """
        result = await self.db.execute(
            select(User)
            .options(joinedload(User.organization))
            .where(User.id == principal_id)
        )
        principal = result.unique().scalar_one_or_none()
        if principal is None:
            raise PrincipalNotFoundError(principal_id)
        if principal.organization is None:
            logger.error(
                "Principal %s references missing organization %s",
                principal_id,
                principal.organization_id,
            )
            raise NoTenantError(principal_id)
        return principal

    async def resolve(self, principal_id: uuid.UUID) -> Organization:
        principal = await self.resolve_principal(principal_id)
        return principal.organization
