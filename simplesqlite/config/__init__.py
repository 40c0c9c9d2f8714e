"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from simplesqlite.config import settings

    print(settings.default_db_filename)  # "DB.db3"
"""

from simplesqlite.config.settings import Settings, settings, get_settings

__all__ = [
    "Settings",
    "settings",
    "get_settings",
]
