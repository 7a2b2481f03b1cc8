"""Organization provisioning endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.tenancy.organization_schemas import (
    OrganizationCreate,
    OrganizationProvisionResponse,
    OrganizationResponse,
    OwnerResponse,
)
from src.modules.tenancy.organization_service import OrganizationService
from src.modules.tenancy.security import PasswordHasher, get_password_hasher
from src.schemas.responses import error_responses

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.post(
    "",
    response_model=OrganizationProvisionResponse,
    status_code=201,
    responses=error_responses(400, 500),
)
async def create_organization(
    body: OrganizationCreate,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Create an organization together with its owner account."""
    svc = OrganizationService(db, hasher)
    org, owner = await svc.create_organization(
        name=body.name,
        slug=body.slug,
        owner_name=body.user.name,
        owner_email=body.user.email,
        owner_password=body.user.password,
        plan=body.plan,
    )
    return OrganizationProvisionResponse(
        organization=OrganizationResponse.model_validate(org),
        owner=OwnerResponse.model_validate(owner),
    )
