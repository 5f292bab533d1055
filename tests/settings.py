"""
Django settings for testing django-blog-api.
"""
import os
import tempfile

SECRET_KEY = "test-secret-key-not-for-production"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "blog_api",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        # File-backed so threads in transactional tests share one database
        "TEST": {"NAME": os.path.join(tempfile.gettempdir(), "blog_api_tests.sqlite3")},
        "OPTIONS": {"timeout": 30},
    }
}

AUTH_USER_MODEL = "blog_api.User"

ROOT_URLCONF = "tests.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
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

# Fast hashing for tests
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

USE_TZ = True
TIME_ZONE = "UTC"

STATIC_URL = "/static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "blog_api": {"handlers": ["console"], "level": "INFO"},
    },
}

# Blog API test settings
BLOG_API = {
    "TOKEN_SECRET": "test-token-secret-with-at-least-32-bytes",
    "IMAGE_HOST": {
        "cloud_name": "test-cloud",
        "api_key": "test-key",
        "api_secret": "test-secret",
    },
    "PASSWORD_MIN_LENGTH": 8,
    "COMMENT_MAX_LENGTH": 500,
    "IMAGE_MAX_SIZE_MB": 1,
}
