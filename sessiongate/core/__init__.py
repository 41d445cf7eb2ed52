"""Core app configuration, database and security primitives."""

from sessiongate.core.config import Settings, get_settings
from sessiongate.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
