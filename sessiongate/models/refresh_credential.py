"""ORM model for the persisted half of a session."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from sessiongate.models.base import Base


class RefreshCredential(Base):
    """
    Hash of the refresh token issued at the user's last login.

    user_id is unique: a user has zero or one live credential. Login replaces
    the row, logout deletes it, renewal only reads it.
    """

    __tablename__ = "refresh_credentials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    token_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
