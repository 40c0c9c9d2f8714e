import logging
import logging.config
from typing import Optional

from simplesqlite.config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None):
    """
    Configure log output for applications using the library.

    The library only emits records through ``logging.getLogger(__name__)``;
    calling this is left to the application.
    """
    settings = settings or get_settings()
    log_level = settings.log_level

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "simplesqlite": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
