# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from src.models.enums import PlanType, Role
from src.models.organization import Organization
from src.models.post import Post
from src.models.user import User

__all__ = [
    "Organization",
    "PlanType",
    "Post",
    "Role",
    "User",
]
