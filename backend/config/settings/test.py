# config/settings/test.py
from .base import *
import tempfile

# Enable testing mode
DEBUG = False
ALLOWED_HOSTS = ['*']
SECRET_KEY = 'test-secret-key-not-for-production'
TESTING = True

# Use in-memory database for speed
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None

MIGRATION_MODULES = DisableMigrations()

# Cache configuration for tests
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

# Test media root
MEDIA_ROOT = tempfile.mkdtemp()

# Celery eager execution for tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# Disable logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'INFO',
    },
}

# Storefront values the tests assert against
STOREFRONT = {
    **STOREFRONT,
    'WHATSAPP_NUMBER': '918248333655',
    'CURRENCY_SYMBOL': '₹',
    'DESIGN_ASSET_URL_PREFIX': '/media/',
    'SETTINGS_CACHE_TIMEOUT': 300,
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',  # Fast for tests
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}
