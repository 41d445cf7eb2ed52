"""ORM model for user accounts (identity, credentials and login metadata)."""

from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, func

from sessiongate.models.base import Base


class UserRole(str, Enum):
    ADMIN = "Admin"
    EDITOR = "Editor"
    CONTRIBUTOR = "Contributor"
    VIEWER = "Viewer"


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    PENDING = "Pending"


# Statuses that may not log in or renew a session.
BLOCKED_STATUSES = frozenset({UserStatus.SUSPENDED.value, UserStatus.PENDING.value})


class User(Base):
    """
    User account. Rows are created at signup or provisioning and never deleted here.

    email is stored lower-cased; password_hash is empty for invited users who
    have not set a password yet.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=UserRole.CONTRIBUTOR.value)
    status = Column(String(32), nullable=False, default=UserStatus.PENDING.value)
    image = Column(String(1024), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    last_login_ip = Column(String(64), nullable=True)
    login_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def is_blocked(self) -> bool:
        return self.status in BLOCKED_STATUSES
