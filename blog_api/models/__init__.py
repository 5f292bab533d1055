"""
Models for django-blog-api.

All models are importable from blog_api.models:

    from blog_api.models import User, Role, Post, Comment
"""
from .users import Role, User, UserManager
from .posts import Post, Comment

__all__ = [
    # Users
    "Role",
    "User",
    "UserManager",
    # Posts
    "Post",
    "Comment",
]
