import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _getenv(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


SECRET_KEY = _getenv("DJANGO_SECRET_KEY", "dev-insecure-secret-key")
DEBUG = _getenv("DJANGO_DEBUG", "true").lower() in ("1", "true", "yes")
ALLOWED_HOSTS = [h for h in _getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "taste.apps.TasteConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "backend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "backend.wsgi.application"

# Postgres si hay DB_NAME, sqlite para desarrollo/tests
if _getenv("DB_NAME"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": _getenv("DB_NAME"),
            "USER": _getenv("DB_USER"),
            "PASSWORD": _getenv("DB_PASSWORD"),
            "HOST": _getenv("DB_HOST", "localhost"),
            "PORT": _getenv("DB_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=8),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

# ---------------------------
# AWS / taste
# ---------------------------
AWS_REGION                 = _getenv("AWS_REGION", "us-east-1")
AWS_ACCESS_KEY_ID          = _getenv("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY      = _getenv("AWS_SECRET_ACCESS_KEY")
AWS_REKOGNITION_COLLECTION = _getenv("AWS_REKOGNITION_COLLECTION")
AWS_S3_BUCKET              = _getenv("AWS_S3_BUCKET")
AWS_CONNECT_TIMEOUT        = float(_getenv("AWS_CONNECT_TIMEOUT", "10"))
AWS_READ_TIMEOUT           = float(_getenv("AWS_READ_TIMEOUT", "60"))

TASTE_HTTP_TIMEOUT    = float(_getenv("TASTE_HTTP_TIMEOUT", "30"))
TASTE_CONCURRENCY     = int(_getenv("TASTE_CONCURRENCY", "2"))
TASTE_RESOURCE_PREFIX = _getenv("TASTE_RESOURCE_PREFIX", "get-me-a-date-")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "taste": {
            "handlers": ["console"],
            "level": _getenv("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
