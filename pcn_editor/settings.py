# pcn_editor/settings.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_list(name, default):
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


SECRET_KEY = os.environ.get("PCN_SECRET_KEY", "dev-only-insecure-key-change-me")
DEBUG = os.environ.get("PCN_DEBUG", "false").lower() in ("1", "true", "yes")
ALLOWED_HOSTS = env_list("PCN_ALLOWED_HOSTS", "localhost,127.0.0.1")

INSTALLED_APPS = [
    "pcn_editor.core",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "pcn_editor.urls"
WSGI_APPLICATION = "pcn_editor.wsgi.application"

# Uploaded files are never stored
DATABASES = {}

USE_TZ = True
LANGUAGE_CODE = "en-us"

# Receipt files
PCN_LAYOUT = os.environ.get("PCN_LAYOUT", "delimited")
PCN_MAX_UPLOAD_BYTES = int(os.environ.get("PCN_MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
PCN_MAX_ROWS = int(os.environ.get("PCN_MAX_ROWS", 50000))
PCN_API_TOKEN = os.environ.get("PCN_API_TOKEN", "")

# JSON requests carry the whole file, edits send it back and forth
DATA_UPLOAD_MAX_MEMORY_SIZE = PCN_MAX_UPLOAD_BYTES * 2
FILE_UPLOAD_MAX_MEMORY_SIZE = PCN_MAX_UPLOAD_BYTES

LOG_LEVEL = os.environ.get("PCN_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "pcn_editor": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
