# resumebot/resumebot/settings.py
"""
Django settings for the resumebot project.

This file contains the core configuration for the Django application, including
database settings, cache and Celery configuration, and the Discord/Slack
credentials. Sensitive values are loaded from a .env file so the same settings
module works locally and in production.
"""

from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# ==============================================================================
# CORE SETTINGS
# ==============================================================================

# Build paths inside the project like this: BASE_DIR / 'subdir'
BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-resumebot-local-development-key')
# The DEBUG flag is loaded as a boolean from an environment variable.
DEBUG = os.getenv('DJANGO_DEBUG', 'True') == 'True'

ALLOWED_HOSTS = [
    "127.0.0.1",
    "localhost",
    "testserver",
    os.getenv('PRODUCTION_HOST'),  # e.g., your ngrok URL or final domain
]
ALLOWED_HOSTS = [host for host in ALLOWED_HOSTS if host]


# ==============================================================================
# APPLICATION-SPECIFIC SETTINGS (Loaded from Environment Variables)
# ==============================================================================

# Hex-encoded Ed25519 public key from the Discord developer portal.
DISCORD_PUBLIC_KEY = os.getenv("DISCORD_PUBLIC_KEY")
DISCORD_APP_ID = os.getenv("DISCORD_APP_ID")

# If set, /resume-review is only accepted in this channel.
RESUME_REVIEW_CHANNEL_ID = os.getenv("RESUME_REVIEW_CHANNEL_ID") or None
RESUME_REVIEW_MAX_PER_USER = int(os.getenv("RESUME_REVIEW_MAX_PER_USER", "1"))
# "modal" asks for the email in a follow-up form, "option" reads it from the command.
RESUME_REVIEW_EMAIL_MODE = os.getenv("RESUME_REVIEW_EMAIL_MODE", "modal")
# Seconds an uploaded resume waits for its email modal before it is forgotten.
PENDING_RESUME_TTL = int(os.getenv("PENDING_RESUME_TTL", "900"))

SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN")
SLACK_OPS_CHANNEL = os.getenv("SLACK_OPS_CHANNEL")


# ==============================================================================
# DJANGO-SPECIFIC CONFIGURATION
# ==============================================================================

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'discordapp.apps.DiscordappConfig',
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

ROOT_URLCONF = 'resumebot.urls'

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


# Database Configuration
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}


# Cache Configuration
# Pending resumes live here between the slash command and the email modal.
# Use Redis in production so every web worker sees the same entries.
REDIS_CACHE_URL = os.getenv('REDIS_CACHE_URL')
if REDIS_CACHE_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_CACHE_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'resumebot-pending',
        }
    }


# Password validation
# https://docs.djangoproject.com/en/4.2/ref/settings/#auth-password-validators
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/4.2/howto/static-files/
STATIC_URL = 'static/'


# Default primary key field type
# https://docs.djangoproject.com/en/4.2/ref/settings/#default-auto-field
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Logging Configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': os.getenv('RESUMEBOT_LOG_FILE', 'resumebot.log'),
            'delay': True,
        },
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        'discordapp': {
            'handlers': ['file', 'console'],
            'level': os.getenv('RESUMEBOT_LOG_LEVEL', 'INFO'),
            'propagate': True,
        },
    },
}

# ==============================================================================
# CELERY CONFIGURATION
# ==============================================================================
# URL for the Redis message broker.
CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
# URL for the result backend (can be the same as the broker).
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
# Use JSON as the content type for tasks.
CELERY_ACCEPT_CONTENT = ['json']
# Use JSON as the task serializer.
CELERY_TASK_SERIALIZER = 'json'
# Ops notifications are fire-and-forget; nobody reads their results.
CELERY_TASK_IGNORE_RESULT = True
