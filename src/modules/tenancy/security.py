"""Password hashing collaborator."""

from typing import Protocol

import bcrypt
from starlette.concurrency import run_in_threadpool

from src.config import settings

PASSWORD_MIN_LENGTH = 6
# bcrypt only considers the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...


class BcryptPasswordHasher:
    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")


def check_password_strength(value: str) -> str:
    """Pydantic validator body shared by every schema that accepts a password."""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


async def hash_password(hasher: PasswordHasher, plaintext: str) -> str:
    """Hash off the event loop; bcrypt is deliberately slow."""
    return await run_in_threadpool(hasher.hash, plaintext)


def get_password_hasher() -> PasswordHasher:
    """FastAPI dependency providing the hashing collaborator."""
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
