"""Core app configuration, database, errors and security."""

from blogapi.core.config import get_settings, settings
from blogapi.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
