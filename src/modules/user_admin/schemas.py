import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.models.enums import Role
from src.modules.tenancy.roles import is_assignable
from src.modules.tenancy.security import check_password_strength


def _check_assignable_role(value: Role | None) -> Role | None:
    if value is not None and not is_assignable(value):
        raise ValueError("Role must be USER or ADMIN")
    return value


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str
    role: Role = Role.USER

    check_password = field_validator("password")(check_password_strength)
    check_role = field_validator("role")(_check_assignable_role)


class UserUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_id: uuid.UUID = Field(alias="userId")
    name: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = None
    password: str | None = None
    role: Role | None = None

    check_role = field_validator("role")(_check_assignable_role)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_password_strength(value)

    def changes(self) -> dict:
        """Fields the caller actually supplied, without the target id."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True, exclude={"user_id"}).items()
            if value is not None
        }


class UserDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(alias="userId")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: Role
    created_at: datetime


class DeleteResponse(BaseModel):
    success: bool = True
