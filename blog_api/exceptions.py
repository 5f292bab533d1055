"""
Error taxonomy for django-blog-api.

Every failure a caller can observe is one of the BlogError subclasses
below. views.JsonErrorMixin renders them as JSON responses through
middleware.error_response, using ``status_code`` and ``code``.
"""


class BlogError(Exception):
    """Base exception for blog_api."""

    status_code = 500
    code = "error"
    default_message = "Request failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(BlogError):
    """Malformed or missing fields. User-correctable."""

    status_code = 400
    code = "invalid_input"
    default_message = "Invalid input"


class DuplicateUser(BlogError):
    """Username or email already registered."""

    status_code = 409
    code = "duplicate_user"
    default_message = "Username or email already registered"


class InvalidCredentials(BlogError):
    """
    Login failed.

    Deliberately generic: the same message is used for an unknown
    identifier and a wrong password.
    """

    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid username/email or password"


class Unauthorized(BlogError):
    """Missing or invalid session token."""

    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required"


class Forbidden(BlogError):
    """Authenticated, but not permitted to perform the operation."""

    status_code = 403
    code = "forbidden"
    default_message = "You do not have permission to modify this post"


class NotFound(BlogError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InternalError(BlogError):
    """Store-level or unexpected failure. Details are logged, never returned."""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"


class ImageUploadFailed(InternalError):
    """The external image host rejected or failed the upload."""

    status_code = 502
    code = "image_upload_failed"
    default_message = "Image upload failed"


class InvalidToken(Exception):
    """
    Token could not be verified.

    Raised by TokenService only; the access-control layer translates it to
    Unauthorized. Carries no detail about the cause.
    """

    def __init__(self):
        super().__init__("Invalid token")
