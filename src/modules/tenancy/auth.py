"""Session collaborator: resolves a bearer session token to a principal identifier.

Sessions are issued elsewhere. This module only verifies the signed token
presented on the ``Authorization`` header and extracts the principal id
from its ``sub`` claim.
"""

import logging
import uuid
from typing import Protocol

from fastapi.security import HTTPBearer
from jose import JWTError, jwt

from src.config import settings
from src.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

# FastAPI security scheme, extracts Bearer token from Authorization header
bearer_scheme = HTTPBearer(auto_error=False)


class SessionService(Protocol):
    async def resolve(self, token: str) -> uuid.UUID:
        """Return the principal id for ``token`` or raise UnauthorizedException."""
        ...


class JwtSessionService:
    """Verifies HS/RS-signed JWT session tokens."""

    def __init__(self, secret_key: str, algorithm: str) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm

    async def resolve(self, token: str) -> uuid.UUID:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.warning("JWT validation failed: %s", exc)
            raise UnauthorizedException("Invalid or expired session") from exc

        try:
            return uuid.UUID(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedException("Session is missing a valid subject") from exc


def get_session_service() -> SessionService:
    """FastAPI dependency providing the session collaborator."""
    return JwtSessionService(settings.jwt_secret_key, settings.jwt_algorithm)
