"""
Development settings for Identity Service
"""

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['*']

# Development database (can use SQLite for simplicity)
if os.environ.get('DB_ENGINE') == 'sqlite':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

# CORS - Allow all in development
CORS_ALLOW_ALL_ORIGINS = True

# Simplified logging
LOGGING['handlers']['console']['formatter'] = 'standard'
LOGGING['root']['level'] = 'DEBUG'

# Browsable API in development
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = [
    'rest_framework.renderers.JSONRenderer',
    'rest_framework.renderers.BrowsableAPIRenderer',
]
