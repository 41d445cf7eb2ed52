"""Removal of refresh credentials whose expiry has passed."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from sessiongate.core.tokens import utcnow
from sessiongate.services.refresh_store import RefreshStore

if TYPE_CHECKING:
    from sessiongate.core.config import Settings

logger = logging.getLogger(__name__)


def purge_expired_refresh_credentials(session: Session, settings: "Settings") -> int:
    """
    Delete refresh credentials past their expires_at. Live credentials are untouched.

    Returns the number of rows deleted. Idempotent: safe to run repeatedly.
    """
    if not settings.REFRESH_PURGE_ENABLED:
        logger.info("Refresh purge is disabled (REFRESH_PURGE_ENABLED=false); skipping.")
        return 0

    now = utcnow()
    deleted_count = RefreshStore(session).purge_expired(now)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Refresh purge run: cutoff=%s, credentials_deleted=%s",
            now.isoformat(),
            deleted_count,
        )
    return deleted_count
