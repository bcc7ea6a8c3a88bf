import os
import sys
from corsheaders.defaults import default_headers, default_methods
from django.core.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Environment flags and safety
SECRET_KEY = os.environ.get("SECRET_KEY", "your_generated_secret_key")
DEBUG = os.environ.get("DEBUG", "False").lower() in ("true", "1", "yes")
TESTING = any(arg in ("test", "pytest") for arg in sys.argv) or "pytest" in sys.modules

# Security check for production
if not DEBUG and not TESTING and (not SECRET_KEY or SECRET_KEY == "your_generated_secret_key"):
    raise ImproperlyConfigured(
        "SECRET_KEY must be set to a secure value in production. "
        "Set the SECRET_KEY environment variable."
    )

# Parse ALLOWED_HOSTS from environment (comma-separated)
ALLOWED_HOSTS_ENV = os.environ.get("ALLOWED_HOSTS", "")
if ALLOWED_HOSTS_ENV:
    ALLOWED_HOSTS = [
        host.strip() for host in ALLOWED_HOSTS_ENV.split(",") if host.strip()
    ]
else:
    # Development default
    ALLOWED_HOSTS = ["localhost", "127.0.0.1"] if DEBUG else []

# Ensure test-friendly hosts when testing
if TESTING:
    for host in ["testserver", "localhost", "127.0.0.1"]:
        if host not in ALLOWED_HOSTS:
            ALLOWED_HOSTS.append(host)

# CSRF trusted origins
CSRF_TRUSTED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CSRF_TRUSTED_ORIGINS", "").split(",")
    if origin.strip()
]

USE_TZ = True
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"
USE_I18N = False

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "question_service.middleware.sqlalchemy_session.SQLAlchemySessionMiddleware",
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "drf_spectacular",
    "question_service.apps.QuestionServiceConfig",
]

ROOT_URLCONF = "question_service.urls"
WSGI_APPLICATION = "question_service.wsgi.application"

# Questions and answers live in the SQLAlchemy store (see lib/db.py). Django's
# own database only backs framework internals, so SQLite is enough unless
# DJANGO_DATABASE_URL says otherwise.
import dj_database_url

DJANGO_DATABASE_URL = os.environ.get("DJANGO_DATABASE_URL")
if DJANGO_DATABASE_URL:
    DATABASES = {"default": dj_database_url.parse(DJANGO_DATABASE_URL)}
else:
    DATABASES = {
        "default": dj_database_url.parse(
            "sqlite:///" + os.path.join(BASE_DIR, "django.sqlite3")
        )
    }

# Trailing slashes are optional on API routes
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "question_service.api.jsonapi.VndApiJSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "question_service.api.jsonapi.VndApiJSONParser",
    ],
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": os.environ.get("DRF_ANON_THROTTLE_RATE", "10000/hour"),
    },
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

if TESTING:
    REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []

# OpenAPI schema at /api/v1/schema/, Swagger UI at /swagger/
SPECTACULAR_SETTINGS = {
    "TITLE": "Question Service API",
    "DESCRIPTION": "Questions and their answers, served as JSON:API documents.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SCHEMA_PATH_PREFIX": r"/api/v1",
}

STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

# CORS Configuration
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]
if DEBUG or not CORS_ALLOWED_ORIGINS:
    CORS_ALLOWED_ORIGINS.extend([
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ])
# De-duplicate any origins added above
CORS_ALLOWED_ORIGINS = list(dict.fromkeys(CORS_ALLOWED_ORIGINS))

CORS_ALLOW_HEADERS = list(default_headers)
CORS_ALLOW_METHODS = list(default_methods)
CORS_PREFLIGHT_MAX_AGE = 86400  # 24 hours

# Security headers (production only)
if not DEBUG and not TESTING:
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
    SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "True") == "True"
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    X_FRAME_OPTIONS = "DENY"
    SECURE_CONTENT_TYPE_NOSNIFF = True
    REFERRER_POLICY = "same-origin"
else:
    SECURE_SSL_REDIRECT = False

# Application log level; unknown names fall back to INFO (warned in apps.py)
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_RAW = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = LOG_LEVEL_RAW if LOG_LEVEL_RAW in _LOG_LEVELS else "INFO"

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
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
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "question_service": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
