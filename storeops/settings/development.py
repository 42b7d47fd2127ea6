"""
Development settings for StoreOps.

These settings override the base settings for local development environments.
"""

import os

from .base import *  # noqa: F401,F403

SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")

DEBUG = env("DEBUG", "True") == "True"

ALLOWED_HOSTS = ["*"]

if os.environ.get("USE_SQLITE", "False").lower() != "true":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("POSTGRES_DB", "storeops"),
            "USER": os.environ.get("POSTGRES_USER", "storeops"),
            "PASSWORD": os.environ.get("POSTGRES_PASSWORD", "storeops"),
            "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
            "PORT": os.environ.get("POSTGRES_PORT", "5432"),
            "CONN_MAX_AGE": 300,
            "OPTIONS": {
                "connect_timeout": 5,
                "sslmode": os.environ.get("POSTGRES_SSL_MODE", "disable"),
            },
            "ATOMIC_REQUESTS": True,
        }
    }

CORS_ALLOW_ALL_ORIGINS = True

LOGGING["loggers"]["apps"]["level"] = "DEBUG"
