import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


SECRET_KEY = os.getenv("OJT_SECRET_KEY", "django-insecure-ojt-development-key")
DEBUG = _env_bool("OJT_DEBUG")
ALLOWED_HOSTS = _env_list("OJT_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework_simplejwt.token_blacklist",
    "apps.core",
    "apps.authn",
    "apps.profiles",
    "apps.daily_logs",
    "apps.journals",
    "apps.summaries",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "apps.core.middleware.request_timezone.RequestTimezoneMiddleware",
    "apps.core.middleware.request_logging.ApiRequestLoggingMiddleware",
]

ROOT_URLCONF = "config.urls"

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

WSGI_APPLICATION = "config.wsgi.application"

if os.getenv("OJT_DB_ENGINE"):
    DATABASES = {
        "default": {
            "ENGINE": os.environ["OJT_DB_ENGINE"],
            "NAME": os.getenv("OJT_DB_NAME", "ojt"),
            "USER": os.getenv("OJT_DB_USER", ""),
            "PASSWORD": os.getenv("OJT_DB_PASSWORD", ""),
            "HOST": os.getenv("OJT_DB_HOST", ""),
            "PORT": os.getenv("OJT_DB_PORT", ""),
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
TIME_ZONE = os.getenv("OJT_TIME_ZONE", "UTC")
USE_I18N = False
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "EXCEPTION_HANDLER": "apps.core.api.handlers.ojt_exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.getenv("OJT_ACCESS_TOKEN_MINUTES", "60"))),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=int(os.getenv("OJT_REFRESH_TOKEN_DAYS", "14"))),
    "ROTATE_REFRESH_TOKENS": False,
    "BLACKLIST_AFTER_ROTATION": True,
}

# Tracker rules
OJT_HOUR_CAP = os.getenv("OJT_HOUR_CAP", "500")
OJT_DAILY_LOG_PAGE_SIZE = int(os.getenv("OJT_DAILY_LOG_PAGE_SIZE", "10"))
OJT_JOURNAL_PAGE_SIZE = int(os.getenv("OJT_JOURNAL_PAGE_SIZE", "5"))

# Summary providers
OJT_OPENAI_API_KEY = os.getenv("OJT_OPENAI_API_KEY", "")
OJT_OPENAI_MODEL = os.getenv("OJT_OPENAI_MODEL", "gpt-4o-mini")
OJT_GEMINI_API_KEY = os.getenv("OJT_GEMINI_API_KEY", "")
OJT_GEMINI_MODEL = os.getenv("OJT_GEMINI_MODEL", "gemini-2.0-flash")
OJT_GEMINI_BASE_URL = os.getenv(
    "OJT_GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta/openai/",
)
OJT_DEFAULT_SUMMARY_PROVIDER = os.getenv("OJT_DEFAULT_SUMMARY_PROVIDER", "gemini")
OJT_AI_TIMEOUT_SECONDS = float(os.getenv("OJT_AI_TIMEOUT_SECONDS", "30"))

OJT_VERBOSE_API_LOGGING = _env_bool("OJT_VERBOSE_API_LOGGING")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "ojt.api": {
            "handlers": ["console"],
            "level": os.getenv("OJT_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "apps": {
            "handlers": ["console"],
            "level": os.getenv("OJT_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
