"""
CLI entrypoint for the expired refresh-credential purge. Run from cron, e.g.:

  python -m sessiongate.purge

Or hourly: 0 * * * * cd /path/to/sessiongate && .venv/bin/python -m sessiongate.purge
"""

import logging
import sys

from sessiongate.core.config import get_settings
from sessiongate.core.database import create_db_engine, create_session_factory
from sessiongate.core.logging import setup_logging
from sessiongate.services.cleanup import purge_expired_refresh_credentials

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete refresh credentials past their expiry."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    engine = create_db_engine(settings.DATABASE_URL)
    db = create_session_factory(engine)()
    try:
        deleted = purge_expired_refresh_credentials(db, settings)
        logger.info("Refresh purge completed: credentials_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Refresh purge failed: %s", e)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
