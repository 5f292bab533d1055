"""
Access control for django-blog-api.

Authentication is an explicit pipeline over an AuthContext:

    UNAUTHENTICATED -> TOKEN_PRESENT -> VERIFIED
                   \\-> REJECTED      \\-> REJECTED

Each stage takes the context and either advances it or raises
Unauthorized. Views opt in with TokenRequiredMixin, which leaves the
verified Identity on ``request.identity``.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from django.http import JsonResponse

from .conf import blog_settings
from .exceptions import InvalidToken, Unauthorized
from .tokens import Identity, TokenService

logger = logging.getLogger(__name__)


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    TOKEN_PRESENT = "token_present"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass
class AuthContext:
    state: AuthState = AuthState.UNAUTHENTICATED
    token: Optional[str] = None
    identity: Optional[Identity] = None

    def reject(self, message):
        self.state = AuthState.REJECTED
        raise Unauthorized(message)


def extract_token(context, headers):
    """Read the bearer token from ``headers`` into ``context``."""
    value = (headers.get(blog_settings.TOKEN_HEADER) or "").strip()
    prefix = blog_settings.TOKEN_PREFIX
    if prefix:
        scheme, _, value = value.partition(" ")
        if scheme.lower() != prefix.lower():
            value = ""
    value = value.strip()
    if not value:
        context.reject("Authentication required")

    context.token = value
    context.state = AuthState.TOKEN_PRESENT
    return context


def verify_token(context, token_service):
    """Verify ``context.token`` and attach the resulting identity."""
    if context.state is not AuthState.TOKEN_PRESENT:
        context.reject("Authentication required")
    try:
        context.identity = token_service.verify(context.token)
    except InvalidToken:
        context.reject("Invalid token")

    context.state = AuthState.VERIFIED
    return context


def authenticate(request, token_service=None):
    """
    Run the pipeline for ``request`` and return the caller's Identity.

    The identity is also stored on ``request.identity``.

    Raises:
        Unauthorized: no token, or the token did not verify.
    """
    token_service = token_service or TokenService.from_settings()
    context = AuthContext()
    try:
        extract_token(context, request.headers)
        verify_token(context, token_service)
    except Unauthorized as exc:
        logger.info("Rejected %s %s: %s", request.method, request.path, exc.message)
        raise

    request.identity = context.identity
    return context.identity


class TokenRequiredMixin:
    """
    Class-based view mixin requiring a verified token.

    Set ``token_exempt_methods`` to let some HTTP methods through without
    one (e.g. public GET on a resource that is also written to).
    """

    token_exempt_methods = ()
    token_service = None

    def dispatch(self, request, *args, **kwargs):
        request.identity = None
        if request.method.upper() not in self.token_exempt_methods:
            authenticate(request, self.token_service)
        return super().dispatch(request, *args, **kwargs)


def error_response(error):
    return JsonResponse(
        {"error": error.code, "detail": error.message},
        status=error.status_code,
    )
