"""
MedStock — Test Settings

In-memory SQLite, local cache and an eager Celery so the suite runs
without PostgreSQL or Redis. Activated by pytest via pyproject.toml.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

IDENTITY_PROVIDER = {  # noqa: F405
    **IDENTITY_PROVIDER,  # noqa: F405
    'URL': 'http://identity.test',
    'API_KEY': 'test-anon-key',
}

LOGGING['loggers']['medstock']['level'] = 'WARNING'  # noqa: F405
