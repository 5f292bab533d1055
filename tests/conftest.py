"""
Shared fixtures for django-blog-api tests.
"""
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from blog_api.auth import AuthGateway
from blog_api.models import Post, Role, User
from blog_api.services import PostService
from blog_api.tokens import Identity, TokenService

from .fakes import FakeImageHost


@pytest.fixture
def token_service():
    return TokenService.from_settings()


@pytest.fixture
def gateway(token_service):
    return AuthGateway(token_service=token_service)


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def service(image_host):
    return PostService(image_host=image_host)


@pytest.fixture
def alice(db):
    return User.objects.create_user(
        username="alice",
        email="alice@x.com",
        password="password1",
    )


@pytest.fixture
def bob(db):
    return User.objects.create_user(
        username="bob",
        email="bob@x.com",
        password="password2",
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        username="root",
        email="root@x.com",
        password="password3",
    )


@pytest.fixture
def alice_identity(alice):
    return Identity.for_user(alice)


@pytest.fixture
def bob_identity(bob):
    return Identity.for_user(bob)


@pytest.fixture
def admin_identity(admin_user):
    assert admin_user.role == Role.ADMIN
    return Identity.for_user(admin_user)


@pytest.fixture
def post(db, alice):
    return Post.objects.create(title="Hi", content="World", author=alice)


@pytest.fixture
def auth_header(token_service):
    """Return request headers carrying a token for ``user``."""

    def _auth_header(user):
        token = token_service.issue(Identity.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    return _auth_header


@pytest.fixture
def png_upload():
    return SimpleUploadedFile("cat.png", b"\x89PNG\r\n\x1a\nfake", content_type="image/png")
