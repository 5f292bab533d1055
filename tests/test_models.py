"""
Tests for django-blog-api models.
"""
import pytest
from django.db import IntegrityError

from blog_api.models import Comment, Post, Role, User


class TestUser:
    """Tests for User model."""

    def test_create_user_hashes_password(self, db):
        user = User.objects.create_user(
            username="carol",
            email="carol@EXAMPLE.com",
            password="password1",
        )
        assert user.password != "password1"
        assert user.check_password("password1")
        assert user.role == Role.USER
        assert user.email == "carol@example.com"

    def test_create_superuser_is_admin(self, db):
        user = User.objects.create_superuser("root", "root@x.com", "password3")
        assert user.role == Role.ADMIN
        assert user.is_admin
        assert user.is_staff

    def test_username_unique(self, db, alice):
        with pytest.raises(IntegrityError):
            User.objects.create_user("alice", "other@x.com", "password1")

    def test_email_unique(self, db, alice):
        with pytest.raises(IntegrityError):
            User.objects.create_user("alice2", "alice@x.com", "password1")


class TestPost:
    """Tests for Post model."""

    def test_create_post(self, db, alice):
        post = Post.objects.create(title="Hello World", content="My first post!", author=alice)
        assert str(post) == "Hello World"
        assert post.created_at is not None
        assert not post.has_image

    def test_preview_truncation(self, db, alice):
        post = Post.objects.create(title="Long", content="x" * 500, author=alice)
        assert len(post.preview) == 103  # 100 + "..."

    def test_newest_first(self, db, alice):
        first = Post.objects.create(title="First", content="1", author=alice)
        second = Post.objects.create(title="Second", content="2", author=alice)
        assert list(Post.objects.all()) == [second, first]


class TestComment:
    """Tests for Comment model."""

    def test_comments_in_insertion_order(self, db, post, alice, bob):
        texts = ["one", "two", "three", "four"]
        for i, text in enumerate(texts):
            Comment.objects.create(post=post, author=alice if i % 2 else bob, text=text)

        assert [c.text for c in post.comments.all()] == texts

    def test_delete_post_cascades_comments(self, db, post, bob):
        Comment.objects.create(post=post, author=bob, text="Great post!")
        post.delete()
        assert Comment.objects.count() == 0
