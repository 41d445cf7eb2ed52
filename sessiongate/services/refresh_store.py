"""Persistence of at most one hashed refresh credential per user."""

from datetime import datetime

from sqlalchemy.orm import Session

from sessiongate.models import RefreshCredential


class RefreshStore:
    """
    Access to the refresh_credentials table. Callers own the transaction.

    replace() is the only writer used by login; the renewal path only calls
    get_for_user().
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_for_user(self, user_id: int) -> RefreshCredential | None:
        return (
            self.db.query(RefreshCredential)
            .filter(RefreshCredential.user_id == user_id)
            .first()
        )

    def delete_for_user(self, user_id: int) -> int:
        return (
            self.db.query(RefreshCredential)
            .filter(RefreshCredential.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def replace(
        self,
        user_id: int,
        token_hash: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> RefreshCredential:
        """Delete any prior credential for user_id, then insert the new one."""
        self.delete_for_user(user_id)
        credential = RefreshCredential(
            user_id=user_id,
            token_hash=token_hash,
            created_at=created_at,
            expires_at=expires_at,
        )
        self.db.add(credential)
        self.db.flush()
        return credential

    def purge_expired(self, now: datetime) -> int:
        return (
            self.db.query(RefreshCredential)
            .filter(RefreshCredential.expires_at < now)
            .delete(synchronize_session=False)
        )
