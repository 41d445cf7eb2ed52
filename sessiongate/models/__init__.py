"""SQLAlchemy ORM models."""

from sessiongate.models.base import Base
from sessiongate.models.refresh_credential import RefreshCredential
from sessiongate.models.user import BLOCKED_STATUSES, User, UserRole, UserStatus

__all__ = ["BLOCKED_STATUSES", "Base", "RefreshCredential", "User", "UserRole", "UserStatus"]
