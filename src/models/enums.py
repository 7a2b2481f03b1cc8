import enum


class Role(str, enum.Enum):
    """Principal role within its organization. Ordered OWNER > ADMIN > USER."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    USER = "USER"


class PlanType(str, enum.Enum):
    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"
