"""
Django settings for fusionmail project.

Values come from environment variables, layered from .env and .env.test/.env.prod
(see common.utils.env_util). App specific values (storage paths, SMTP relay, token
secret) are read by each app's config module.
"""
from pathlib import Path

from common.utils.env_util import load_env, get_run_env

BASE_DIR = Path(__file__).resolve().parent.parent

env = load_env(BASE_DIR)

RUN_ENV = get_run_env()

SECRET_KEY = env("SECRET_KEY", default="django-insecure-fusionmail-change-me")

DEBUG = env.bool("DEBUG", default=False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

# Apps switch
APP_WEBMAIL_ENABLED = env.bool("APP_WEBMAIL_ENABLED", default=True)
APP_CONSOLE_ENABLED = env.bool("APP_CONSOLE_ENABLED", default=True)

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "app_webmail",
    "app_console",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "fusionmail.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "app_console.context_processors.console_context",
            ],
        },
    },
]

WSGI_APPLICATION = "fusionmail.wsgi.application"

# Database
# "default" keeps data owned by this project (send log),
# "vmail" is the mail server's mailbox directory, read only.
if RUN_ENV == "test":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        },
        "vmail": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        },
    }
else:
    DATABASES = {
        "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
        "vmail": {
            "ENGINE": "django.db.backends.mysql",
            "HOST": env("VMAIL_DB_HOST", default="localhost"),
            "PORT": env.int("VMAIL_DB_PORT", default=3306),
            "USER": env("VMAIL_DB_USER", default="vmailadmin"),
            "PASSWORD": env("VMAIL_DB_PASSWORD", default=""),
            "NAME": env("VMAIL_DB_NAME", default="vmail"),
            "OPTIONS": {
                "charset": "utf8mb4",
                "connect_timeout": env.int("VMAIL_DB_CONNECT_TIMEOUT", default=5),
            },
            # one connection per request, closed when the request ends
            "CONN_MAX_AGE": 0,
        },
    }

DATABASE_ROUTERS = ["app_webmail.db_routers.VmailRouter"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Sessions live in a signed cookie, the console keeps only the connector token in it
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = env.int("WEBMAIL_TOKEN_MAX_AGE", default=86400)

MESSAGE_STORAGE = "django.contrib.messages.storage.cookie.CookieStorage"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "common.utils.http_util.api_exception_handler",
}

# Console
CONSOLE_API_BASE_URL = env("CONSOLE_API_BASE_URL", default="http://localhost:8000/api")
CONSOLE_API_TIMEOUT = env.int("CONSOLE_API_TIMEOUT", default=10)
CONSOLE_DEMO_MODE = env.bool("CONSOLE_DEMO_MODE", default=True)

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = env("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

LOG_LEVEL = env("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": env("DJANGO_LOG_LEVEL", default="WARNING"),
            "propagate": False,
        },
    },
}
