"""Authorization guard: FastAPI dependency establishing tenant context for a request."""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.exceptions import (
    ForbiddenException,
    InternalErrorException,
    TenantNotFoundException,
    UnauthorizedException,
)
from src.modules.tenancy.auth import SessionService, bearer_scheme, get_session_service
from src.modules.tenancy.resolver import NoTenantError, PrincipalNotFoundError, TenantResolver
from src.modules.tenancy.roles import can_manage_users
from src.modules.tenancy.schemas import TenantContext

logger = logging.getLogger(__name__)


async def get_tenant_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    sessions: SessionService = Depends(get_session_service),
    db: AsyncSession = Depends(get_db),
) -> TenantContext:
    """Resolve session -> principal -> organization before any tenant-scoped handler runs.

    Only tenant membership is enforced here. Role checks belong to
    ``require_user_manager`` and to the handler's service, which receives
    the resolved context.

    Raises:
        UnauthorizedException: no session, an invalid session, or a session whose
            principal no longer exists.
        TenantNotFoundException: the principal has no organization.
        InternalErrorException: any other failure while resolving.
    """
    if credentials is None:
        raise UnauthorizedException("Authentication required")

    try:
        principal_id = await sessions.resolve(credentials.credentials)
        principal = await TenantResolver(db).resolve_principal(principal_id)
    except UnauthorizedException:
        raise
    except PrincipalNotFoundError as exc:
        logger.warning("Session resolved to unknown principal %s", exc.principal_id)
        raise UnauthorizedException("Authentication required") from exc
    except NoTenantError as exc:
        logger.warning("No organization for principal %s", exc.principal_id)
        raise TenantNotFoundException("No organization found") from exc
    except Exception as exc:
        logger.exception("Tenant resolution failed")
        raise InternalErrorException("Internal server error") from exc

    return TenantContext(principal=principal, organization=principal.organization)


async def require_user_manager(ctx: TenantContext = Depends(get_tenant_context)) -> TenantContext:
    """Guard for user administration routes: ADMIN or OWNER only.

    Runs ahead of request-body validation, so a USER is refused with 403
    whatever the payload looks like.
    """
    if not can_manage_users(ctx.role):
        logger.warning("User %s (%s) denied user administration", ctx.user_id, ctx.role.value)
        raise ForbiddenException("Unauthorized: Only admins can manage users")
    return ctx
