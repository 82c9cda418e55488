from pathlib import Path
import os


# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

from dotenv import load_dotenv
load_dotenv(BASE_DIR / '.env')

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY')
if not SECRET_KEY:
    # Only acceptable for local development; deployments must set DJANGO_SECRET_KEY.
    SECRET_KEY = 'django-insecure-fallback-dev-key-!!change-me!!'
    print("WARNING: DJANGO_SECRET_KEY not found in environment or .env. Using fallback. THIS IS INSECURE FOR PRODUCTION.")

DEBUG = os.getenv('DJANGO_DEBUG', 'True').lower() in ('true', '1', 't')

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', '*').split(',') if h.strip()]


# Application definition

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'corsheaders',
    'rest_framework',
    'storage',
    'files',
    'accounts',
]

MIDDLEWARE = [
    'fmngr.middleware.RequestLoggingMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'fmngr.urls'

WSGI_APPLICATION = 'fmngr.wsgi.application'

# Routes are declared without trailing slashes (/files, /storage/<id>).
APPEND_SLASH = False


# Database
# The catalog holds two tables, `storage` and `file`. Connection parameters
# come from the environment; sqlite is the local default.

DB_PROTOCOL = os.getenv('DB_PROTOCOL', 'sqlite').lower()

if DB_PROTOCOL in ('postgres', 'postgresql'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME', 'fmngr'),
            'USER': os.getenv('DB_USER', 'fmngr'),
            'PASSWORD': os.getenv('DB_PASSWORD', ''),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / os.getenv('DB_NAME', 'db.sqlite3'),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# REST Framework
# Authentication is not enforced by this service.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.MultiPartParser",
        "rest_framework.parsers.FormParser",
    ],
    "EXCEPTION_HANDLER": "fmngr.exceptions.api_exception_handler",
}


# CORS
# Any http(s) origin may call the API; credentials are not allowed.
CORS_ALLOWED_ORIGIN_REGEXES = [
    r'^https://.+$',
    r'^http://.+$',
]
CORS_ALLOW_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
CORS_ALLOW_HEADERS = ['accept', 'authorization', 'content-type']
CORS_EXPOSE_HEADERS = ['Link']
CORS_ALLOW_CREDENTIALS = False


# Uploads
# Blobs are written with these permissions; larger uploads spill to a temp file first.
FILE_UPLOAD_PERMISSIONS = 0o644
FILE_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv("FMNGR_UPLOAD_MAX_MEMORY_SIZE", 2621440))


# Logging

FMNGR_LOG_LEVEL = os.getenv('FMNGR_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - [%(levelname)s] - %(message)s',
        },
    },
    'handlers': {
        'stdout': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout',
            'formatter': 'default',
        },
    },
    'root': {
        'handlers': ['stdout'],
        'level': FMNGR_LOG_LEVEL,
    },
    'loggers': {
        # Silence noisy libraries
        'django.db.backends': {'level': 'WARNING'},
        'django.request': {'level': 'ERROR'},
    },
}
