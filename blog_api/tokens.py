"""
Signed session tokens for django-blog-api.

Tokens are HS256 JWTs carrying the user id (``sub``) and role. The secret
is passed in at construction; use TokenService.from_settings() to build one
from BLOG_API settings.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from .conf import blog_settings
from .exceptions import InvalidToken
from .models import Role

REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


@dataclass(frozen=True)
class Identity:
    """Who is calling: attached to a request after token verification."""

    user_id: int
    role: str = Role.USER

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @classmethod
    def for_user(cls, user):
        return cls(user_id=user.pk, role=user.role)


class TokenService:
    """Issue and verify time-bounded signed tokens."""

    def __init__(self, secret: str, lifetime: timedelta, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.lifetime = lifetime
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls) -> "TokenService":
        return cls(
            secret=blog_settings.TOKEN_SECRET,
            lifetime=timedelta(seconds=blog_settings.TOKEN_LIFETIME_SECONDS),
            algorithm=blog_settings.TOKEN_ALGORITHM,
        )

    def issue(self, identity: Identity, now: datetime = None) -> str:
        """Return a signed token for ``identity`` valid for ``self.lifetime``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(identity.user_id),
            "role": str(identity.role),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode ``token`` and return the identity it carries.

        Raises:
            InvalidToken: for a bad signature, malformed or expired token,
                missing claims or an unknown role. The cause is not exposed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
            user_id = int(payload["sub"])
        except (jwt.InvalidTokenError, TypeError, ValueError):
            raise InvalidToken() from None

        role = payload["role"]
        if role not in Role.values:
            raise InvalidToken()
        return Identity(user_id=user_id, role=role)
