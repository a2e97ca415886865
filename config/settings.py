"""
GSL – Django Settings (Infrastructure Only)
============================================
Django serves as the framework container for the guest stay ledger.
The ledger architecture is the authority — Django does not dictate structure.

Every deploy-time value comes from a GSL_* environment variable with a
development default.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("GSL_SECRET_KEY", "gsl-dev-key-replace-before-deployment")

DEBUG = _env_bool("GSL_DEBUG", True)

ALLOWED_HOSTS = _env_list("GSL_ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── GSL Modules ───────────────────────────────────────
    "core.event_store",
    "core.read_store",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# Routes have no trailing slash; never redirect a POST.
APPEND_SLASH = False

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Set GSL_DB_ENGINE for anything else.
_DB_ENGINE = os.environ.get("GSL_DB_ENGINE", "django.db.backends.sqlite3")

if _DB_ENGINE.endswith("sqlite3"):
    DATABASES = {
        "default": {
            "ENGINE": _DB_ENGINE,
            "NAME": os.environ.get("GSL_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": _DB_ENGINE,
            "NAME": os.environ.get("GSL_DB_NAME", "gsl"),
            "USER": os.environ.get("GSL_DB_USER", ""),
            "PASSWORD": os.environ.get("GSL_DB_PASSWORD", ""),
            "HOST": os.environ.get("GSL_DB_HOST", "localhost"),
            "PORT": os.environ.get("GSL_DB_PORT", ""),
        }
    }

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Guest Stay Accounts ───────────────────────────────────────
GUEST_STAY_ACCOUNTS = {
    # "django" persists through the ORM, "memory" keeps state in process.
    "STORE_BACKEND": os.environ.get("GSL_STORE_BACKEND", "django"),
    "MAX_COMMAND_ATTEMPTS": int(os.environ.get("GSL_COMMAND_MAX_ATTEMPTS", "3")),
}

# ── Logging ───────────────────────────────────────────────────
GSL_LOG_LEVEL = os.environ.get("GSL_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "gsl": {
            "handlers": ["console"],
            "level": GSL_LOG_LEVEL,
            "propagate": True,
        },
    },
}
