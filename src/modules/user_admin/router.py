"""User administration API router: manage principals of the caller's organization."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.tenancy.dependencies import require_user_manager
from src.modules.tenancy.schemas import TenantContext
from src.modules.tenancy.security import PasswordHasher, get_password_hasher
from src.modules.user_admin.schemas import (
    DeleteResponse,
    UserCreate,
    UserDelete,
    UserResponse,
    UserUpdate,
)
from src.modules.user_admin.service import UserAdminService
from src.schemas.responses import error_responses

router = APIRouter(
    prefix="/users/admin",
    tags=["user-admin"],
    responses=error_responses(401, 403, 404, 500),
)


def _service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserAdminService:
    return UserAdminService(db, hasher)


@router.get("", response_model=list[UserResponse])
async def list_users(
    ctx: TenantContext = Depends(require_user_manager),
    svc: UserAdminService = Depends(_service),
):
    """List the organization's users, newest first. Requires ADMIN or OWNER."""
    return await svc.list_users(ctx)


@router.post("", response_model=UserResponse, status_code=201, responses=error_responses(400))
async def create_user(
    body: UserCreate,
    ctx: TenantContext = Depends(require_user_manager),
    svc: UserAdminService = Depends(_service),
    db: AsyncSession = Depends(get_db),
):
    """Create a USER or ADMIN in the caller's organization."""
    user = await svc.create_user(
        ctx,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    await db.commit()
    return user


@router.patch("", response_model=UserResponse, responses=error_responses(400))
async def update_user(
    body: UserUpdate,
    ctx: TenantContext = Depends(require_user_manager),
    svc: UserAdminService = Depends(_service),
    db: AsyncSession = Depends(get_db),
):
    """Update a user of the caller's organization. Owner accounts require an OWNER."""
    user = await svc.update_user(ctx, body.user_id, body.changes())
    await db.commit()
    return user


@router.delete("", response_model=DeleteResponse, responses=error_responses(400))
async def delete_user(
    body: UserDelete,
    ctx: TenantContext = Depends(require_user_manager),
    svc: UserAdminService = Depends(_service),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user of the caller's organization. The owner can never be deleted."""
    await svc.delete_user(ctx, body.user_id)
    await db.commit()
    return DeleteResponse()
