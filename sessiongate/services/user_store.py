"""Lookup and update of user identity, credentials and status."""

from datetime import datetime

from sqlalchemy.orm import Session

from sessiongate.models import User, UserStatus
from sessiongate.schemas.auth import normalize_email


class UserStore:
    """Thin query layer over the users table. Callers own the transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def record_login(self, user: User, ip: str | None, at: datetime) -> None:
        user.status = UserStatus.ACTIVE.value
        user.last_login_at = at
        user.last_login_ip = ip
        user.login_count = (user.login_count or 0) + 1
        self.db.flush()

    def mark_inactive(self, user_id: int) -> int:
        """Set status Inactive; returns the number of rows touched (0 if the user is gone)."""
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({User.status: UserStatus.INACTIVE.value}, synchronize_session=False)
        )
