"""Helpers shared by the API tests: session tokens and seeded tenants."""

import uuid
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import settings
from src.models.enums import PlanType, Role
from src.models.organization import Organization
from src.models.user import User

SEED_PASSWORD_HASH = "$2b$04$seeded.users.never.log.in.with.this.digest"


def make_token(principal_id: uuid.UUID, **claims) -> str:
    """Mint a session token the way the external session service would."""
    payload = {
        "sub": str(principal_id),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=15),
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def auth_headers(principal_id: uuid.UUID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(principal_id)}"}


@dataclass
class SeededTenant:
    organization_id: uuid.UUID
    owner_id: uuid.UUID
    admin_id: uuid.UUID
    user_id: uuid.UUID

    def id_for(self, role: Role) -> uuid.UUID:
        return {Role.OWNER: self.owner_id, Role.ADMIN: self.admin_id, Role.USER: self.user_id}[role]


async def seed_tenant(
    factory: async_sessionmaker[AsyncSession],
    slug: str,
    base_time: datetime | None = None,
) -> SeededTenant:
    """Create an organization with one OWNER, one ADMIN and one USER (created in that order)."""
    base_time = base_time or datetime(2026, 1, 1, tzinfo=timezone.utc)
    async with factory() as session:
        org = Organization(name=slug.title(), slug=slug, plan=PlanType.FREE)
        session.add(org)
        await session.flush()
        members = {}
        for offset, role in enumerate((Role.OWNER, Role.ADMIN, Role.USER)):
            member = User(
                name=f"{slug} {role.value.lower()}",
                email=f"{role.value.lower()}@{slug}.io",
                password_hash=SEED_PASSWORD_HASH,
                role=role,
                organization_id=org.id,
                created_at=base_time + timedelta(minutes=offset),
            )
            session.add(member)
            members[role] = member
        await session.flush()
        seeded = SeededTenant(
            organization_id=org.id,
            owner_id=members[Role.OWNER].id,
            admin_id=members[Role.ADMIN].id,
            user_id=members[Role.USER].id,
        )
        await session.commit()
    return seeded


def db_override(factory: async_sessionmaker[AsyncSession]) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """Replacement for ``get_db`` that opens sessions on the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db
