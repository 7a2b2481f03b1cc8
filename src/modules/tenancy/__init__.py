"""Tenancy module: session resolution, tenant context and role hierarchy."""

from src.modules.tenancy.auth import JwtSessionService, SessionService, get_session_service
from src.modules.tenancy.dependencies import get_tenant_context, require_user_manager
from src.modules.tenancy.resolver import NoTenantError, PrincipalNotFoundError, TenantResolver
from src.modules.tenancy.roles import UserAction, can_act_on, can_manage_users
from src.modules.tenancy.schemas import TenantContext
from src.modules.tenancy.security import BcryptPasswordHasher, PasswordHasher, get_password_hasher

__all__ = [
    # Context
    "TenantContext",
    # Sessions
    "SessionService",
    "JwtSessionService",
    "get_session_service",
    # Resolution and guard
    "TenantResolver",
    "PrincipalNotFoundError",
    "NoTenantError",
    "get_tenant_context",
    "require_user_manager",
    # Role hierarchy
    "UserAction",
    "can_manage_users",
    "can_act_on",
    # Password hashing
    "PasswordHasher",
    "BcryptPasswordHasher",
    "get_password_hasher",
]
