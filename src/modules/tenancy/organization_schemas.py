"""Pydantic v2 schemas for organization provisioning."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.models.enums import PlanType, Role
from src.modules.tenancy.security import check_password_strength


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class OwnerCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str

    check_password = field_validator("password")(check_password_strength)


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9][a-z0-9\-]*$")
    plan: PlanType | None = None
    user: OwnerCreate


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    plan: PlanType
    created_at: datetime
    updated_at: datetime


class OwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: Role
    created_at: datetime


class OrganizationProvisionResponse(BaseModel):
    organization: OrganizationResponse
    owner: OwnerResponse
