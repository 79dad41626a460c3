"""
Django Settings for GPS Live Tracking
Configuration for PostgreSQL; every deployment value can come from the environment
"""
import os
from pathlib import Path

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    return os.environ.get(name, str(default)).lower() in ('1', 'true', 'yes', 'on')


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('DJANGO_SECRET', 'django-insecure-change-this-in-production-!!!')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env_bool('DEBUG')

ALLOWED_HOSTS = os.environ.get('ALLOWED_HOSTS', '*').split(',')

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.tracking',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# The live stream needs an ASGI server; WSGI still serves every other endpoint
ASGI_APPLICATION = 'core.asgi.application'
WSGI_APPLICATION = 'core.wsgi.application'

# Database configuration - PostgreSQL
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.environ.get('DB_NAME', 'gps'),
        'USER': os.environ.get('DB_USER', 'gps_receiver'),  # Read-write user
        'PASSWORD': os.environ.get('DB_PASSWORD', ''),
        'HOST': os.environ.get('DB_HOST', 'localhost'),
        'PORT': os.environ.get('DB_PORT', '5432'),
    }
}

# Optional read-only user for history/live queries
if os.environ.get('DB_ANALYTICS_USER'):
    DATABASES['analytics'] = {
        **DATABASES['default'],
        'USER': os.environ['DB_ANALYTICS_USER'],
        'PASSWORD': os.environ.get('DB_ANALYTICS_PASSWORD', ''),
    }

# Database router to use the analytics user for read operations
DATABASE_ROUTERS = ['apps.tracking.db_router.TrackingRouter']

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static files (admin only)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# GPS tracker behaviour
GPS_TRACKER = {
    # Shared secret required by addpoint, resetpoint, sessions and export
    'KEY': os.environ.get('GPS_TRACKER_KEY', 'change-me'),
    # Longest accepted raw parameter, guards against oversized payloads
    'MAX_PARAM_LENGTH': int(os.environ.get('GPS_TRACKER_MAX_PARAM_LENGTH', '32')),
    # Store timestamps as local time in TIME_ZONE instead of epoch millis
    'CONVERT_TIMESTAMP': env_bool('GPS_TRACKER_CONVERT_TIMESTAMP'),
    'TIME_ZONE': os.environ.get('GPS_TRACKER_TIME_ZONE', 'Europe/Warsaw'),
    # History cap, 0 = no limit
    'MAX_HISTORY_POINTS': int(os.environ.get('GPS_TRACKER_MAX_HISTORY_POINTS', '0')),
    # Let clients pass maxPoints to change the cap
    'ALLOW_MAX_POINTS_OVERRIDE': env_bool('GPS_TRACKER_ALLOW_MAX_POINTS_OVERRIDE'),
    # Seconds between two live position lookups
    'LIVE_REFRESH_INTERVAL': os.environ.get('GPS_TRACKER_LIVE_REFRESH_INTERVAL', '5'),
}

# Logging configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] {levelname} {name} {message}',
            'style': '{',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': os.environ.get('GPS_LOG_FILE', BASE_DIR / 'gps.log'),
            'formatter': 'verbose',
        },
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
        },
        'apps.tracking': {
            'handlers': ['console', 'file'],
            # DEBUG prints every incoming parameter set
            'level': os.environ.get('GPS_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}

# Devices can't send CSRF tokens, receiver views use @csrf_exempt
CSRF_TRUSTED_ORIGINS = []
