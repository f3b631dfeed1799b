"""
Development settings.

These settings are used during local development.
"""

import os

import dj_database_url

from core.config import get_settings

from .base import *

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# Postgres when DATABASE_URL or DB_HOST is set, else the sqlite default
if os.environ.get("DATABASE_URL") or os.environ.get("DB_HOST"):
    DATABASES = {"default": dj_database_url.parse(get_settings().database.connection_url)}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "DEBUG",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
