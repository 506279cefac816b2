from pathlib import Path
from decouple import config, Csv


# BASE DIRECTORY
# Build paths inside the project like this: BASE_DIR / 'subdir'
# BASE_DIR points to the project root (where manage.py is)
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY SETTINGS

# SECURITY WARNING: keep the secret key used in production secret!
# Generate new key: python -c 'from django.core.management.utils import get_random_secret_key; print(get_random_secret_key())'
SECRET_KEY = config('SECRET_KEY', default='django-insecure-CHANGE-THIS-IN-PRODUCTION')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

# Format: 'domain.com,www.domain.com'
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0', cast=Csv())


# INSTALLED APPS

INSTALLED_APPS = [
    # Django built-in apps
    'django.contrib.admin',  # Admin interface
    'django.contrib.auth',  # Authentication framework
    'django.contrib.contenttypes',  # Content types framework
    'django.contrib.sessions',  # Session framework
    'django.contrib.messages',  # Messaging framework
    'django.contrib.staticfiles',  # Static files management

    # Third-party apps
    'crispy_forms',  # Better form rendering
    'crispy_bootstrap5',  # Bootstrap 5 template pack
    'taggit',  # Contact tags

    # Our custom apps
    # IMPORTANT: accounts must be first (custom user model)
    'apps.accounts',  # Users, team members & login audit
    'apps.core',  # Companies, tags, dashboard, theme
    'apps.contacts',  # Contact management & search
    'apps.opportunities',  # Sales pipeline
    'apps.activities',  # Calls, emails, meetings & tasks
]


# MIDDLEWARE

# Each request passes through these in order (top to bottom)
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',  # Security enhancements
    'django.contrib.sessions.middleware.SessionMiddleware',  # Session support
    'django.middleware.common.CommonMiddleware',  # Common utilities
    'django.middleware.csrf.CsrfViewMiddleware',  # CSRF protection
    'django.contrib.auth.middleware.AuthenticationMiddleware',  # Authentication
    'django.contrib.messages.middleware.MessageMiddleware',  # Messages framework
    'django.middleware.clickjacking.XFrameOptionsMiddleware',  # Clickjacking protection
]


# URL CONFIGURATION

ROOT_URLCONF = 'config.urls'


# TEMPLATES
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',

        # Directories where Django looks for templates
        'DIRS': [
            BASE_DIR / 'templates',  # Global templates directory
        ],

        # Look for templates inside each app's templates/ directory
        'APP_DIRS': True,

        # Context processors: variables available in all templates
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',  # Debug info
                'django.template.context_processors.request',  # Request object
                'django.contrib.auth.context_processors.auth',  # User object
                'django.contrib.messages.context_processors.messages',  # Messages
                'apps.core.context_processors.theme',  # Accent palette CSS variables
            ],
        },
    },
]


# ASGI/WSGI APPLICATION

ASGI_APPLICATION = 'config.asgi.application'
WSGI_APPLICATION = 'config.wsgi.application'


# DATABASE

# SQLite for local development, PostgreSQL in production:
# DB_ENGINE=django.db.backends.postgresql
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default='crm_db'),
            'USER': config('DB_USER', default='crm_user'),
            'PASSWORD': config('DB_PASSWORD', default='crm_pass'),
            'HOST': config('DB_HOST', default='db'),  # 'db' is Docker service name
            'PORT': config('DB_PORT', default='5432'),

            # Keep connection open for 10 minutes
            'CONN_MAX_AGE': 600,

            'OPTIONS': {
                'connect_timeout': 10,  # Timeout if connection fails
            }
        }
    }


# CACHE

# Rendered page data (dashboard metrics) is cached per topic and
# invalidated by the mutation layer, see apps/core/cache.py
CACHE_TIMEOUT = config('CACHE_TIMEOUT', default=300, cast=int)

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'crm-default',
        'TIMEOUT': CACHE_TIMEOUT,
    }
}


# AUTHENTICATION

# Custom user model (instead of Django's default User)
# IMPORTANT: This MUST be set before first migration!
AUTH_USER_MODEL = 'accounts.User'

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {
            'min_length': 8,  # Minimum 8 characters
        }
    },
    {
        # Upper case, lower case and digit
        'NAME': 'apps.accounts.validators.PasswordComplexityValidator',
    },
]

# Login/Logout URLs
LOGIN_URL = '/accounts/login/'  # Redirect here if not authenticated
LOGIN_REDIRECT_URL = '/'  # Redirect after successful login
LOGOUT_REDIRECT_URL = '/accounts/login/'  # Redirect after logout


# INTERNATIONALIZATION

LANGUAGE_CODE = 'en-us'

TIME_ZONE = config('TIME_ZONE', default='UTC')

USE_I18N = True

# All datetimes in database are stored in UTC
USE_TZ = True


# STATIC FILES (CSS, JavaScript, Images)

STATIC_URL = '/static/'

STATICFILES_DIRS = [
    BASE_DIR / 'static',  # Global static files
]

# Directory where collectstatic command collects all static files
STATIC_ROOT = BASE_DIR / 'staticfiles'


# CRISPY FORMS (Form Styling)
CRISPY_ALLOWED_TEMPLATE_PACKS = 'bootstrap5'
CRISPY_TEMPLATE_PACK = 'bootstrap5'


# TAGGIT

# Tags are separated by commas only, so "High Priority" stays a single tag
TAGGIT_CASE_INSENSITIVE = True
TAGGIT_TAGS_FROM_STRING = 'apps.contacts.utils.comma_splitter'
TAGGIT_STRING_FROM_TAGS = 'apps.contacts.utils.comma_joiner'


# LOGGING

LOG_LEVEL = config('LOG_LEVEL', default='INFO')

# Optional log file, e.g. LOG_FILE=logs/crm.log
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,

    # Log formatters
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },

    # Log handlers (where to send logs)
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },

    # Loggers
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
        'apps': {  # Our custom apps
            'handlers': ['console'],
            'level': config('APPS_LOG_LEVEL', default='DEBUG'),
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': BASE_DIR / LOG_FILE,
        'maxBytes': 1024 * 1024 * 10,  # 10 MB
        'backupCount': 5,
        'formatter': 'verbose',
    }
    for logger_name in ('django', 'apps'):
        LOGGING['loggers'][logger_name]['handlers'].append('file')


# CUSTOM SETTINGS

# Page sizes
CONTACTS_PAGE_SIZE = config('CONTACTS_PAGE_SIZE', default=20, cast=int)
ACTIVITIES_PAGE_SIZE = config('ACTIVITIES_PAGE_SIZE', default=20, cast=int)
PIPELINE_PREVIEW_SIZE = config('PIPELINE_PREVIEW_SIZE', default=3, cast=int)  # Cards per status column
PIPELINE_PAGE_SIZE = config('PIPELINE_PAGE_SIZE', default=12, cast=int)  # Single-status listing

# Session settings
SESSION_COOKIE_AGE = 86400  # 24 hours in seconds
SESSION_SAVE_EVERY_REQUEST = False  # Only save if modified

# Demo data (manage.py seed_crm / backfill_team_users)
SEED_TEAM_SIZE = config('SEED_TEAM_SIZE', default=500, cast=int)
SEED_CONTACT_SIZE = config('SEED_CONTACT_SIZE', default=5000, cast=int)
SEED_OPPORTUNITY_SIZE = config('SEED_OPPORTUNITY_SIZE', default=30, cast=int)
SEED_ACTIVITY_SIZE = config('SEED_ACTIVITY_SIZE', default=800, cast=int)
SEED_TEAM_PASSWORD = config('SEED_TEAM_PASSWORD', default='Cambia123')
SEED_ADMIN_EMAIL = config('SEED_ADMIN_EMAIL', default='admin@crm.local')
SEED_ADMIN_PASSWORD = config('SEED_ADMIN_PASSWORD', default='Cambiar123!')


# SECURITY SETTINGS (Production)

if not DEBUG:
    # HTTPS/SSL settings
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

    # Security headers
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'

    # HSTS (HTTP Strict Transport Security)
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True


# DEFAULT AUTO FIELD

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
