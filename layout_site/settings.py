"""
Django settings for the layout_site project.

Values that differ between deployments are read from the environment (or a
``.env`` file next to ``manage.py``) through django-environ.
"""

from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    LOG_LEVEL=(str, "INFO"),
)
environ.Env.read_env(BASE_DIR / ".env")

SECRET_KEY = env("SECRET_KEY")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "apps.customizable_layout",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
]

ROOT_URLCONF = "layout_site.urls"
TEMPLATES = []

DATABASES = {
    "default": {
        "ENGINE": env("DATABASE_ENGINE", default="django.db.backends.sqlite3"),
        "NAME": env("DATABASE_NAME", default=str(BASE_DIR / "db.sqlite3")),
        "USER": env("DATABASE_USER", default=""),
        "PASSWORD": env("DATABASE_PASS", default=""),
        "HOST": env("DATABASE_HOST", default=""),
        "PORT": env("DATABASE_PORT", default=""),
    }
}

CACHES = {
    "default": env.cache("CACHE_URL", default="locmemcache://"),
}

USE_TZ = True
TIME_ZONE = "UTC"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "apps.customizable_layout": {
            "handlers": ["console"],
            "level": env("LOG_LEVEL"),
            "propagate": False,
        },
    },
}

# Customizable layouts
CUSTOMIZABLE_LAYOUT_BREAKPOINTS = {
    "desktop": env.int("LAYOUT_DESKTOP_BREAKPOINT", default=1024),
    "tablet": env.int("LAYOUT_TABLET_BREAKPOINT", default=990),
    "mobile": env.int("LAYOUT_MOBILE_BREAKPOINT", default=420),
}
# MemoryStore is for tests and previews; use DatabaseStore or CacheStore otherwise.
CUSTOMIZABLE_LAYOUT_STORE = env(
    "CUSTOMIZABLE_LAYOUT_STORE",
    default="apps.customizable_layout.storage.DatabaseStore",
)
CUSTOMIZABLE_LAYOUT_DEFAULTS = env.list(
    "CUSTOMIZABLE_LAYOUT_DEFAULTS",
    default=["layout_site.layouts:register"],
)
