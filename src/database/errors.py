"""Translate storage-level uniqueness violations into domain conflicts."""

from sqlalchemy.exc import IntegrityError

from src.exceptions import ConflictException

# Constraint names (PostgreSQL) and column paths (SQLite) for every unique index
_UNIQUE_VIOLATIONS: dict[str, str] = {
    "ix_organizations_slug": "Organization slug already exists",
    "organizations.slug": "Organization slug already exists",
    "ix_users_email": "User email already exists",
    "users.email": "User email already exists",
    "uq_users_one_owner_per_org": "Organization already has an owner",
    "users.organization_id": "Organization already has an owner",
}


def conflict_from_integrity_error(exc: IntegrityError) -> ConflictException | None:
    """Return the ConflictException for a known unique violation, or None for anything else."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for marker, message in _UNIQUE_VIOLATIONS.items():
        if marker in text:
            return ConflictException(message)
    return None
