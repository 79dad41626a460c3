"""
Django Settings for the test suite
In-memory SQLite and a fixed tracker configuration
"""
from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

GPS_TRACKER = {
    'KEY': 'test-key',
    'MAX_PARAM_LENGTH': 20,
    'CONVERT_TIMESTAMP': False,
    'TIME_ZONE': 'Europe/Warsaw',
    'MAX_HISTORY_POINTS': 0,
    'ALLOW_MAX_POINTS_OVERRIDE': False,
    'LIVE_REFRESH_INTERVAL': '0.01',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'loggers': {
        'apps.tracking': {
            'handlers': ['null'],
            'level': 'DEBUG',
            'propagate': True,
        },
    },
}
