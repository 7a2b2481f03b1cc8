"""Role hierarchy and the permission decisions derived from it.

Every role check in the service goes through this module so that endpoints
never re-derive the OWNER > ADMIN > USER rules on their own.
"""

import enum

from src.models.enums import Role

ROLE_RANK: dict[Role, int] = {
    Role.USER: 0,
    Role.ADMIN: 1,
    Role.OWNER: 2,
}

# Roles that the user-administration endpoints may assign
ASSIGNABLE_ROLES: frozenset[Role] = frozenset({Role.USER, Role.ADMIN})

USER_MANAGER_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.OWNER})


class UserAction(str, enum.Enum):
    """Mutations one principal can attempt on another principal's account."""

    UPDATE = "update"
    DELETE = "delete"


def rank(role: Role) -> int:
    return ROLE_RANK[role]


def outranks(role: Role, other: Role) -> bool:
    """True when ``role`` is strictly above ``other``."""
    return rank(role) > rank(other)


def is_at_least(role: Role, minimum: Role) -> bool:
    return rank(role) >= rank(minimum)


def can_manage_users(role: Role) -> bool:
    """Whether ``role`` may create, list, update or delete principals in its tenant."""
    return role in USER_MANAGER_ROLES


def can_act_on(actor_role: Role, target_role: Role, action: UserAction) -> bool:
    """Whether a principal with ``actor_role`` may perform ``action`` on a ``target_role`` account.

    Deleting an OWNER is never allowed. Updating an OWNER requires an OWNER.
    Any user manager may act on ADMIN and USER accounts.
    """
    if not can_manage_users(actor_role):
        return False
    if target_role == Role.OWNER:
        if action == UserAction.DELETE:
            return False
        return actor_role == Role.OWNER
    return True


def is_assignable(role: Role) -> bool:
    return role in ASSIGNABLE_ROLES
