# ventushub/settings.py

"""Django settings for ventushub project."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-key-for-development-only")
DEBUG = os.environ.get("DJANGO_DEBUG", "True") == "True"
TESTING = bool(os.environ.get("PYTEST_CURRENT_TEST")) or os.environ.get("DJANGO_TESTING") == "True"

ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h]

CSRF_TRUSTED_ORIGINS = [
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:5173",
]

INSTALLED_APPS = [
    # Aplicação ASGI em primeiro lugar
    "daphne",
    # Aplicações do Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Aplicações de terceiros
    "rest_framework",
    "rest_framework.authtoken",
    "drf_yasg",
    "corsheaders",
    "django_filters",
    "channels",
    # Aplicações do VentusHub
    "core.apps.CoreConfig",
    "imoveis.apps.ImoveisConfig",
    "pendencias.apps.PendenciasConfig",
    "notifications.apps.NotificationsConfig",
    "clientes.apps.ClientesConfig",
    "registros.apps.RegistrosConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "ventushub.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "DIRS": [],
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "ventushub.wsgi.application"
ASGI_APPLICATION = "ventushub.asgi.application"

REDIS_URL = os.environ.get("REDIS_URL") or os.environ.get("REDIS_HOST")
if REDIS_URL:
    # Permitir formatos: redis://host:port/0 ou apenas host
    if not REDIS_URL.startswith("redis://"):
        host = REDIS_URL
        port = os.environ.get("REDIS_PORT", "6379")
        REDIS_URL = f"redis://{host}:{port}/0"
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels_redis.core.RedisChannelLayer",
            "CONFIG": {"hosts": [REDIS_URL]},
        },
    }
else:
    CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
        "OPTIONS": {
            "timeout": 30,
        },
    },
}

# Configuração específica para habilitar foreign keys no SQLite
engine_val = DATABASES["default"].get("ENGINE")
if isinstance(engine_val, str) and "sqlite" in engine_val:
    import sqlite3

    def enable_foreign_keys(connection: sqlite3.Connection, **_kwargs: object) -> None:
        """Enable SQLite foreign keys pragma when using sqlite backend."""
        if isinstance(connection, sqlite3.Connection):
            connection.execute("PRAGMA foreign_keys = ON;")

    from django.db.backends.signals import connection_created

    connection_created.connect(enable_foreign_keys)

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]
AUTH_USER_MODEL = "core.CustomUser"

LANGUAGE_CODE = "pt-br"
TIME_ZONE = "America/Sao_Paulo"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_ALL_ORIGINS = False

EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = os.environ.get("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "587"))
EMAIL_USE_TLS = os.environ.get("EMAIL_USE_TLS", "True") == "True"
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", EMAIL_HOST_USER or "nao-responda@ventushub.com.br")

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.TokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 50,
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ],
    "EXCEPTION_HANDLER": "shared.api.exception_handler",
}

SWAGGER_SETTINGS = {
    "SECURITY_DEFINITIONS": {
        "Token": {"type": "apiKey", "name": "Authorization", "in": "header"},
    },
}

# =============================
# PENDÊNCIAS / NOTIFICAÇÕES
# =============================
NOTIFICATIONS_SWEEP_INTERVAL_SECONDS = int(os.environ.get("NOTIFICATIONS_SWEEP_INTERVAL_SECONDS", "300"))
NOTIFICATIONS_SWEEP_BATCH_SIZE = int(os.environ.get("NOTIFICATIONS_SWEEP_BATCH_SIZE", "100"))
NOTIFICATIONS_SCHEDULER_AUTOSTART = os.environ.get("NOTIFICATIONS_SCHEDULER_AUTOSTART", "False") == "True"
PENDENCY_NOTIFICATION_AUTO_RESOLVE_HOURS = int(os.environ.get("PENDENCY_NOTIFICATION_AUTO_RESOLVE_HOURS", "24"))

# =============================
# INTEGRAÇÕES EXTERNAS
# =============================
STORAGE_CALL_TIMEOUT_SECONDS = float(os.environ.get("STORAGE_CALL_TIMEOUT_SECONDS", "8"))
CARTORIO_MOCK_FALLBACK = os.environ.get("CARTORIO_MOCK_FALLBACK", str(DEBUG)) == "True"
CARTORIO_MOCK_DELAY_MS = int(os.environ.get("CARTORIO_MOCK_DELAY_MS", "0"))
B2B_LOGIN_URL = os.environ.get("B2B_LOGIN_URL", "http://localhost:5173/b2b/login")

if TESTING:
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    AUTH_PASSWORD_VALIDATORS = []
    EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    CELERY_TASK_ALWAYS_EAGER = True
    CELERY_TASK_EAGER_PROPAGATES = True
    NOTIFICATIONS_SCHEDULER_AUTOSTART = False

if not DEBUG and not TESTING:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_HSTS_SECONDS = int(os.environ.get("SECURE_HSTS_SECONDS", "31536000"))  # 1 ano
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
    SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "True") == "True"

X_FRAME_OPTIONS = "DENY"

"""
=============================================================================
LOGGING
=============================================================================
Console por padrão; JSON estruturado quando STRUCTURED_LOG_JSON=True.
"""

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": LOG_LEVEL},
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

if os.environ.get("STRUCTURED_LOG_JSON", "False") == "True":
    LOGGING["formatters"]["json"] = {
        "()": "django.utils.log.ServerFormatter",
        "format": '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
    }
    LOGGING["handlers"]["console"]["formatter"] = "json"


"""
=============================================================================
CELERY / TAREFAS ASSÍNCRONAS
=============================================================================
Usa Redis como broker/result backend quando REDIS_URL está definido. Em
desenvolvimento (sem Redis) cai para um broker em memória.
"""

if REDIS_URL:
    CELERY_BROKER_URL = REDIS_URL
    CELERY_RESULT_BACKEND = REDIS_URL
else:
    CELERY_BROKER_URL = "memory://"
    CELERY_RESULT_BACKEND = "rpc://"

CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_ENABLE_UTC = True
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TIME_LIMIT = 60 * 5  # 5 minutos hard limit
CELERY_TASK_SOFT_TIME_LIMIT = 60 * 4  # 4 minutos soft
CELERY_TASK_ACKS_LATE = True
CELERY_WORKER_PREFETCH_MULTIPLIER = 1
CELERY_TASK_DEFAULT_QUEUE = "default"

CELERY_BEAT_SCHEDULE = {
    "notificacoes-agendadas-sweep": {
        "task": "notifications.tasks.processar_notificacoes_agendadas",
        "schedule": timedelta(seconds=NOTIFICATIONS_SWEEP_INTERVAL_SECONDS),
    },
    "pendencias-resolver-expiradas": {
        "task": "pendencias.tasks.resolver_notificacoes_expiradas",
        "schedule": timedelta(hours=1),
    },
}

CELERY_BEAT_DISABLE = os.environ.get("CELERY_BEAT_DISABLE", "False") == "True"
if CELERY_BEAT_DISABLE:
    CELERY_BEAT_SCHEDULE = {}
