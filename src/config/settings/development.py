"""
Development settings: debug on, SQLite, verbose logging of the app code.
"""

from .base import *  # noqa: F401,F403
from .base import LOGGING, REST_FRAMEWORK

DEBUG = True
ALLOWED_HOSTS = ["*"]

CORS_ALLOW_ALL_ORIGINS = True

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": [],
}

LOGGING["loggers"]["src"]["level"] = "DEBUG"
