from pathlib import Path
import os
from decouple import config
from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

# Quick-start development settings - unsuitable for production
# See https://docs.djangoproject.com/en/5.2/howto/deployment/checklist/

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-vetcare-connect-dev')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '127.0.0.1,localhost').split(',') if not DEBUG else ['*']
TIME_ZONE = os.getenv('TIME_ZONE', 'UTC')

# --- App-specific ---
# Base URL used to resolve relative navigation links into absolute GETs
SITE_URL = config('SITE_URL', default='http://127.0.0.1:8000')
SEARCH_ENDPOINT = config('SEARCH_ENDPOINT', default='/api/search/')
SEARCH_DEBOUNCE_MS = config('SEARCH_DEBOUNCE_MS', default=300, cast=int)
NAVIGATION_TIMEOUT = config('NAVIGATION_TIMEOUT', default=5.0, cast=float)
PREFERENCE_TTL_DAYS = config('PREFERENCE_TTL_DAYS', default=30, cast=int)
MIRROR_TTL_DAYS = config('MIRROR_TTL_DAYS', default=7, cast=int)
TOAST_DELAY_MS = config('TOAST_DELAY_MS', default=3000, cast=int)
STICKY_HEADER_OFFSET = config('STICKY_HEADER_OFFSET', default=50, cast=int)

# Application definition

INSTALLED_APPS = [
    'website',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'vetcare.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'vetcare.wsgi.application'


# Persistence tiers
# "default" is the short-lived tier (per-key expiry, mirrors cookies),
# "durable" never expires (mirrors localStorage).
# https://docs.djangoproject.com/en/5.2/topics/cache/

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'vetcare-short-lived',
    },
    'durable': {
        'BACKEND': 'django.core.cache.backends.filebased.FileBasedCache',
        'LOCATION': config('DURABLE_CACHE_LOCATION', default=str(BASE_DIR / '.vetcare' / 'durable')),
        'TIMEOUT': None,
        'OPTIONS': {
            'MAX_ENTRIES': 100000,
        },
    },
}


# Logging
# https://docs.djangoproject.com/en/5.2/topics/logging/

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'website': {
            'handlers': ['console'],
            'level': config('VETCARE_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    },
}

# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'en-us'
USE_I18N = False
USE_TZ = True
