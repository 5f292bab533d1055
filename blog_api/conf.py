"""
Configuration settings for django-blog-api.

Override these in your Django settings.py:

    BLOG_API = {
        'TOKEN_SECRET': os.environ['BLOG_TOKEN_SECRET'],
        'IMAGE_HOST': {
            'cloud_name': os.environ['CLOUDINARY_CLOUD_NAME'],
            'api_key': os.environ['CLOUDINARY_API_KEY'],
            'api_secret': os.environ['CLOUDINARY_API_SECRET'],
        },
        'PASSWORD_MIN_LENGTH': 8,
        ...
    }

TOKEN_SECRET and IMAGE_HOST have no defaults and must be present at startup.
"""
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS = {
    # Registration
    "PASSWORD_MIN_LENGTH": 8,

    # Session tokens
    "TOKEN_LIFETIME_SECONDS": 60 * 60,
    "TOKEN_ALGORITHM": "HS256",
    "TOKEN_HEADER": "Authorization",
    "TOKEN_PREFIX": "Bearer",

    # Posts and comments
    "TITLE_MAX_LENGTH": 255,
    "COMMENT_MAX_LENGTH": 5000,

    # Images
    "IMAGE_MAX_SIZE_MB": 10,
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],
    "IMAGE_FOLDER": "blog",
}

REQUIRED = ["TOKEN_SECRET", "IMAGE_HOST"]

IMAGE_HOST_KEYS = ["cloud_name", "api_key", "api_secret"]


class BlogApiSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_api.conf import blog_settings
    """

    def __getattr__(self, name):
        user_settings = getattr(settings, "BLOG_API", {})
        if name in REQUIRED:
            if name not in user_settings:
                raise ImproperlyConfigured(f"BLOG_API['{name}'] is required")
            return user_settings[name]
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_api setting: {name}")
        return user_settings.get(name, DEFAULTS[name])


blog_settings = BlogApiSettings()


def validate_settings():
    """
    Check that the opaque secrets the app depends on are configured.

    Called from AppConfig.ready() so a misconfigured process fails at
    startup rather than on the first request.

    Raises:
        ImproperlyConfigured: if a required value is missing or empty.
    """
    user_settings = getattr(settings, "BLOG_API", {})

    missing = [name for name in REQUIRED if not user_settings.get(name)]
    if missing:
        raise ImproperlyConfigured(
            "Missing required BLOG_API settings: " + ", ".join(missing)
        )

    image_host = user_settings["IMAGE_HOST"]
    missing = [key for key in IMAGE_HOST_KEYS if not image_host.get(key)]
    if missing:
        raise ImproperlyConfigured(
            "Missing required BLOG_API['IMAGE_HOST'] keys: " + ", ".join(missing)
        )
