"""
Settings used by the pytest suite.
"""

from .base import *  # noqa: F403,F405

SECRET_KEY = "test-secret-key-not-for-production"

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django_prometheus.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": True,
    }
}

# Month boundaries are exercised against a non-UTC zone
TIME_ZONE = "Asia/Kolkata"

SHOP_NAME = "Test Shop"
SHOP_ADDRESS = "1 Test Street"
SHOP_PHONE = "+91 0000000000"

# Keep test output quiet and off disk
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {"class": "logging.NullHandler"},
    },
    "root": {"handlers": ["null"], "level": "DEBUG"},
}
