"""Request-scoped tenant context."""

import uuid
from dataclasses import dataclass

from src.models.enums import Role
from src.models.organization import Organization
from src.models.user import User


@dataclass(frozen=True)
class TenantContext:
    """The authenticated principal and its organization, resolved once per request.

    Passed explicitly to every tenant-scoped handler.
    """

    principal: User
    organization: Organization

    @property
    def organization_id(self) -> uuid.UUID:
        return self.organization.id

    @property
    def user_id(self) -> uuid.UUID:
        return self.principal.id

    @property
    def role(self) -> Role:
        return self.principal.role
