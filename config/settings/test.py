"""
GeoCascade — Test Settings

In-memory SQLite and local-memory cache so the suite runs without
PostgreSQL or Redis. Activated by pytest (see pyproject.toml).

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production-use-0123456789'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'geocascade-tests',
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

GEOGRAPHY_STRICT_TYPES = False
GEOGRAPHY_AUTO_ADVANCE = True

LOGGING['loggers']['geocascade']['level'] = 'WARNING'  # noqa: F405
