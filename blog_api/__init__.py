"""
django-blog-api - JSON backend for a basic blog.

Features:
- Registration and login with hashed passwords and signed session tokens
- Post CRUD restricted to the author (or an admin)
- Append-only comments kept in insertion order
- Post images hosted on Cloudinary
- Typed HTTP client for the API
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
