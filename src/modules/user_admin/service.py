"""User administration within a single organization."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.errors import conflict_from_integrity_error
from src.exceptions import ConflictException, ForbiddenException, NotFoundException, ValidationException
from src.models.enums import Role
from src.models.user import User
from src.modules.tenancy.roles import UserAction, can_act_on, can_manage_users, is_assignable
from src.modules.tenancy.schemas import TenantContext
from src.modules.tenancy.security import PasswordHasher, hash_password

logger = logging.getLogger(__name__)


class UserAdminService:
    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_user(
        self,
        ctx: TenantContext,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        self._require_user_manager(ctx, "create")
        if not is_assignable(role):
            raise ValidationException(
                "Role must be USER or ADMIN",
                details=[{"field": "role", "message": "Role must be USER or ADMIN"}],
            )
        if await self._get_by_email(email):
            raise ConflictException("User already exists")

        user = User(
            name=name,
            email=email,
            password_hash=await hash_password(self.hasher, password),
            role=role,
            organization_id=ctx.organization_id,
        )
        self.db.add(user)
        await self._flush()
        logger.info(
            "User %s (%s) created in organization %s by %s",
            user.id, role.value, ctx.organization_id, ctx.user_id,
        )
        return user

    async def list_users(self, ctx: TenantContext) -> list[User]:
        """All principals of the caller's organization, newest first."""
        self._require_user_manager(ctx, "list")
        result = await self.db.execute(
            select(User)
            .where(User.organization_id == ctx.organization_id)
            .order_by(User.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_user(self, ctx: TenantContext, user_id: uuid.UUID, changes: dict) -> User:
        """Apply ``changes`` (name, email, password, role) to a principal of the same organization."""
        self._require_user_manager(ctx, "update")
        target = await self._get_tenant_user(ctx, user_id)
        if not can_act_on(ctx.role, target.role, UserAction.UPDATE):
            logger.warning("User %s denied update of owner %s", ctx.user_id, target.id)
            raise ForbiddenException("Only owners can modify owner accounts")

        if not changes:
            raise ValidationException("No fields to update")

        if "role" in changes:
            new_role = Role(changes["role"])
            if target.role == Role.OWNER and new_role != Role.OWNER:
                raise ForbiddenException("Owner role cannot be changed")
            if target.role != Role.OWNER and not is_assignable(new_role):
                raise ValidationException(
                    "Role must be USER or ADMIN",
                    details=[{"field": "role", "message": "Role must be USER or ADMIN"}],
                )
            target.role = new_role

        if "email" in changes and changes["email"] != target.email:
            if await self._get_by_email(changes["email"]):
                raise ConflictException("User email already exists")
            target.email = changes["email"]

        if "name" in changes:
            target.name = changes["name"]

        if "password" in changes:
            target.password_hash = await hash_password(self.hasher, changes["password"])

        await self._flush()
        logger.info(
            "User %s updated by %s (fields: %s)",
            target.id, ctx.user_id, ", ".join(sorted(changes)),
        )
        return target

    async def delete_user(self, ctx: TenantContext, user_id: uuid.UUID) -> None:
        self._require_user_manager(ctx, "delete")
        target = await self._get_tenant_user(ctx, user_id)
        if not can_act_on(ctx.role, target.role, UserAction.DELETE):
            logger.warning("User %s denied delete of owner %s", ctx.user_id, target.id)
            raise ForbiddenException("Cannot delete organization owner")

        await self.db.delete(target)
        await self.db.flush()
        logger.info("User %s deleted from organization %s by %s", user_id, ctx.organization_id, ctx.user_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_user_manager(self, ctx: TenantContext, verb: str) -> None:
        if not can_manage_users(ctx.role):
            logger.warning("User %s (%s) denied %s on users", ctx.user_id, ctx.role.value, verb)
            raise ForbiddenException(f"Unauthorized: Only admins can {verb} users")

    async def _get_tenant_user(self, ctx: TenantContext, user_id: uuid.UUID) -> User:
        # Targets in other organizations are reported exactly like missing ones.
        result = await self.db.execute(
            select(User).where(
                User.id == user_id,
                User.organization_id == ctx.organization_id,
            )
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundException("User not found")
        return user

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as exc:
            conflict = conflict_from_integrity_error(exc)
            await self.db.rollback()
            if conflict is None:
                raise
            raise conflict from exc
