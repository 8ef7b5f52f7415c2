"""
Base Django settings for the retail point-of-sale ledger.
Common settings shared across all environments.
"""

import os
import shlex
from pathlib import Path

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Application definition
INSTALLED_APPS = [
    "django_prometheus",  # Must be first for proper metrics collection
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party apps
    "rest_framework",
    # Local apps
    "apps.core",
    "apps.inventory",
    "apps.crm",
    "apps.sales",
    "apps.reporting",
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",  # Must be first
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",  # Must be last
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database
# A single SQLite file is the durable record store; it is loaded on start and
# every committed transaction is persisted to it.
DATABASE_PATH = Path(os.getenv("DATABASE_PATH", str(BASE_DIR / "database.sqlite3")))

DATABASES = {
    "default": {
        "ENGINE": "django_prometheus.db.backends.sqlite3",
        "NAME": DATABASE_PATH,
        "ATOMIC_REQUESTS": True,
    }
}

# Internationalization
LANGUAGE_CODE = "en"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Media files
MEDIA_URL = "media/"
MEDIA_ROOT = BASE_DIR / "media"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Browser Security Headers
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Django REST Framework Configuration
# The point-of-sale runs on a single trusted workstation/LAN; there is no login.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    # Amounts travel as JSON numbers, matching the desktop client
    "COERCE_DECIMAL_TO_STRING": False,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
    ],
}

# Shop details printed on receipts
SHOP_NAME = os.getenv("SHOP_NAME", "Your Shop Name")
SHOP_ADDRESS = os.getenv("SHOP_ADDRESS", "123, Shop Street, City - 123456")
SHOP_PHONE = os.getenv("SHOP_PHONE", "+91 1234567890")
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")
RECEIPT_TERMS = [
    "Goods once sold cannot be returned",
    "All disputes are subject to local jurisdiction",
]

# Receipt storage and printing
RECEIPTS_ROOT = Path(os.getenv("RECEIPTS_ROOT", str(MEDIA_ROOT / "receipts")))
# e.g. "lp -d thermal"; the PDF path is appended as the last argument
RECEIPT_PRINT_COMMAND = shlex.split(os.getenv("RECEIPT_PRINT_COMMAND", ""))

# Prometheus Monitoring Configuration
PROMETHEUS_EXPORT_MIGRATIONS = False

VERSION = "1.0.0"
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Create logs directory if it doesn't exist
LOGS_DIR = BASE_DIR / "logs"
LOGS_DIR.mkdir(exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "file": {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOGS_DIR / "pos.log",
            "maxBytes": 1024 * 1024 * 10,  # 10 MB
            "backupCount": 5,
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console", "file"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "apps": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}


def validate_security_settings(debug_mode):
    """
    Validate security-critical settings based on environment.
    """
    if not debug_mode:
        secret_key = os.getenv("DJANGO_SECRET_KEY", "")
        if secret_key == "dev-secret-key-change-in-production":
            raise ValueError("DJANGO_SECRET_KEY must be changed from default value in production!")

        if len(secret_key) < 50:
            raise ValueError("DJANGO_SECRET_KEY must be at least 50 characters long in production!")
