"""Minimal Django project used to exercise entity_translations in tests."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "sandbox-not-secret")
DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() in ("true", "1", "yes")
ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "entity_translations",
    "sandbox",
]

MIDDLEWARE = [
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "sandbox.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "entity-translations-sandbox",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en"
LANGUAGES = [
    ("en", "English"),
    ("fr", "French"),
    ("de", "German"),
]
USE_I18N = True
USE_TZ = True
TIME_ZONE = "UTC"

ENTITY_TRANSLATIONS = {
    "CONFIG_FILE": str(BASE_DIR / "translatable.yaml"),
    "ENTITIES": {
        "sandbox.Product": {
            "alias": "product",
            "id_getter": "sku",
            "fields": ["name"],
        },
    },
    "AUTO_TRANSLATE": True,
    "LOCALES": ["en", "fr", "de"],
    "CACHE_TTL": 300,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "entity_translations": {
            "handlers": ["console"],
            "level": os.getenv("ENTITY_TRANSLATIONS_LOG_LEVEL", "WARNING"),
        },
    },
}
