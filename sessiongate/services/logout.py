"""Session revocation (logout)."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sessiongate.core.exceptions import InternalError, Unauthorized
from sessiongate.schemas.auth import Identity
from sessiongate.services.refresh_store import RefreshStore
from sessiongate.services.user_store import UserStore

logger = logging.getLogger(__name__)


class RevocationHandler:
    """Delete the user's refresh credential and mark the user Inactive."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = UserStore(db)
        self.refresh_credentials = RefreshStore(db)

    def logout(self, identity: Identity) -> None:
        """
        Revoke the session of an authenticated identity.

        Deleting a credential that is already gone is a no-op, so concurrent
        or repeated logouts are safe.
        """
        if not identity.is_authenticated:
            raise Unauthorized()
        user_id = identity.id
        try:
            deleted = self.refresh_credentials.delete_for_user(user_id)
            self.users.mark_inactive(user_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Logout failed for user_id=%s", user_id)
            raise InternalError() from e
        logger.info("Logout for user_id=%s: credentials_deleted=%s", user_id, deleted)
