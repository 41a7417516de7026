"""SQLite-backed settings used for test runs in CI/local development."""

from __future__ import annotations

import environ

env = environ.Env(
    DEBUG=(bool, False),
    GRID_STRICT_RELATIONS=(bool, False),
)

SECRET_KEY = env("SECRET_KEY", default="test-secret-key")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = ["testserver", "localhost"]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django_grid",
    "testproject.library",
]

# Use an in-memory SQLite database unless DATABASE_URL says otherwise.
DATABASES = {"default": env.db("DATABASE_URL", default="sqlite://:memory:")}

MIDDLEWARE = []
ROOT_URLCONF = "testproject.urls"
TEMPLATES = []
USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

GRID_PER_PAGE = 10
GRID_MAX_PER_PAGE = 50
GRID_STRICT_RELATIONS = env("GRID_STRICT_RELATIONS")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {"django_grid": {"handlers": ["console"], "level": env("GRID_LOG_LEVEL", default="WARNING")}},
}
