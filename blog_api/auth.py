"""
Registration and login for django-blog-api.
"""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q

from .conf import blog_settings
from .exceptions import DuplicateUser, InternalError, InvalidCredentials, InvalidInput
from .models import Role, User
from .tokens import Identity, TokenService

logger = logging.getLogger(__name__)


class AuthGateway:
    """
    Validates credentials and delegates to the user table and TokenService.

    Only salted hashes are ever stored; login failures are reported with a
    single InvalidCredentials error whatever the cause.
    """

    def __init__(self, token_service: TokenService = None):
        self.token_service = token_service or TokenService.from_settings()

    def register(self, username, email, password):
        """
        Create a user with role ``user``.

        Raises:
            InvalidInput: a field is empty, the username contains "@", the
                email is malformed or the password is too short.
            DuplicateUser: username or email is already taken.
        """
        username = (username or "").strip()
        email = User.objects.normalize_email((email or "").strip())
        password = password or ""

        if not username or not email or not password:
            raise InvalidInput("username, email and password are required")
        if "@" in username:
            # "@" marks an email at login, so usernames may not contain it
            raise InvalidInput('username must not contain "@"')
        try:
            validate_email(email)
        except ValidationError:
            raise InvalidInput("email is not a valid address") from None
        min_length = blog_settings.PASSWORD_MIN_LENGTH
        if len(password) < min_length:
            raise InvalidInput(f"password must be at least {min_length} characters")

        try:
            if User.objects.filter(Q(username=username) | Q(email__iexact=email)).exists():
                raise DuplicateUser()
            with transaction.atomic():
                user = User.objects.create_user(
                    username=username,
                    email=email,
                    password=password,
                    role=Role.USER,
                )
        except IntegrityError:
            # Lost a race with a concurrent registration
            raise DuplicateUser() from None
        except DatabaseError:
            logger.exception("Failed to register user %s", username)
            raise InternalError() from None

        logger.info("Registered user %s (id=%s)", user.username, user.pk)
        return user

    def login(self, username_or_email, password):
        """
        Verify credentials and return a signed session token.

        Raises:
            InvalidCredentials: unknown user or wrong password.
        """
        identifier = (username_or_email or "").strip()
        password = password or ""
        if not identifier or not password:
            raise InvalidCredentials()

        try:
            if "@" in identifier:
                user = User.objects.filter(email__iexact=identifier).first()
            else:
                user = User.objects.filter(username=identifier).first()
        except DatabaseError:
            logger.exception("Failed to look up user for login")
            raise InternalError() from None

        if user is None:
            # Hash anyway so response time does not reveal whether the user exists
            User().set_password(password)
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        if not user.check_password(password):
            logger.warning("Failed login attempt for user id=%s", user.pk)
            raise InvalidCredentials()

        return self.token_service.issue(Identity.for_user(user))
