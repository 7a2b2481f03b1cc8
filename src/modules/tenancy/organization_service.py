"""Organization provisioning service."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.errors import conflict_from_integrity_error
from src.database.session import unit_of_work
from src.exceptions import ConflictException
from src.models.enums import PlanType, Role
from src.models.organization import Organization
from src.models.user import User
from src.modules.tenancy.security import PasswordHasher, hash_password

logger = logging.getLogger(__name__)


class OrganizationService:
    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def create_organization(
        self,
        name: str,
        slug: str,
        owner_name: str,
        owner_email: str,
        owner_password: str,
        plan: PlanType | None = None,
    ) -> tuple[Organization, User]:
        """Create an organization and its OWNER in one transaction.

        The slug and email lookups are a fast-path rejection only; concurrent
        creates are caught by the unique indexes and reported the same way.
        """
        if await self._get_by_slug(slug):
            raise ConflictException("Organization slug already exists")
        if await self._get_user_by_email(owner_email):
            raise ConflictException("User email already exists")

        password_hash = await hash_password(self.hasher, owner_password)

        org = Organization(name=name, slug=slug, plan=plan or PlanType.FREE)
        owner = User(
            name=owner_name,
            email=owner_email,
            password_hash=password_hash,
            role=Role.OWNER,
            organization=org,
        )
        try:
            async with unit_of_work(self.db):
                self.db.add(org)
                await self.db.flush()
                self.db.add(owner)
                await self.db.flush()
        except IntegrityError as exc:
            conflict = conflict_from_integrity_error(exc)
            if conflict is None:
                raise
            logger.warning("Organization provisioning for slug=%s lost a uniqueness race", slug)
            raise conflict from exc

        logger.info("Provisioned organization %s with owner %s", org.id, owner.id)
        return org, owner

    async def _get_by_slug(self, slug: str) -> Organization | None:
        result = await self.db.execute(
            select(Organization).where(Organization.slug == slug)
        )
        return result.scalar_one_or_none()

    async def _get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
