"""
Post operations for django-blog-api.

PostService enforces the ownership rule: only the author of a post, or an
admin, may update it, delete it or attach an image to it. Anyone with a
verified identity may comment.
"""
import logging
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from .conf import blog_settings
from .exceptions import Forbidden, InternalError, InvalidInput, NotFound
from .models import Comment, Post, User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content")


@contextmanager
def store_errors(action):
    """Log database failures and re-raise them as InternalError."""
    try:
        yield
    except DatabaseError:
        logger.exception("Store failure while trying to %s", action)
        raise InternalError() from None


def can_modify(identity, post):
    """Return True if ``identity`` may mutate ``post``. Admins always may."""
    return post.author_id == identity.user_id or identity.is_admin


def _clean_text(name, value, max_length=None):
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{name} must not be empty")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise InvalidInput(f"{name} must be at most {max_length} characters")
    return value


class PostService:
    """CRUD and comments for posts, with ownership checks."""

    def __init__(self, image_host=None):
        self._image_host = image_host

    @property
    def image_host(self):
        if self._image_host is None:
            from .images import CloudinaryImageHost

            self._image_host = CloudinaryImageHost.from_settings()
        return self._image_host

    # Reads

    def list(self):
        """Return every post, newest first."""
        with store_errors("list posts"):
            return list(self._posts())

    def get(self, post_id):
        with store_errors("load post"):
            try:
                return self._posts().get(pk=post_id)
            except (Post.DoesNotExist, ValueError, TypeError):
                raise NotFound("Post not found") from None

    # Writes

    def create(self, identity, title, content):
        title = _clean_text("title", title, blog_settings.TITLE_MAX_LENGTH)
        content = _clean_text("content", content)

        with store_errors("create post"):
            if not User.objects.filter(pk=identity.user_id).exists():
                raise InvalidInput("author does not exist")
            post = Post.objects.create(
                title=title,
                content=content,
                author_id=identity.user_id,
            )

        logger.info("User %s created post %s", identity.user_id, post.pk)
        return post

    def update(self, identity, post_id, fields):
        """
        Change ``title`` and/or ``content`` of a post.

        The post is loaded and ownership checked before the fields are
        looked at, so non-owners always get Forbidden.

        Raises:
            NotFound, Forbidden
            InvalidInput: unknown or immutable field (e.g. author), or an
                empty value.
        """
        with store_errors("update post"), transaction.atomic():
            post = self._get_for_update(post_id)
            self._check_owner(identity, post, "update")
            changes = self._clean_changes(fields)
            for name, value in changes.items():
                setattr(post, name, value)
            post.save(update_fields=list(changes) + ["updated_at"])

        return self.get(post.pk)

    def delete(self, identity, post_id):
        """Delete a post together with its comments."""
        with store_errors("delete post"), transaction.atomic():
            post = self._get_for_update(post_id)
            self._check_owner(identity, post, "delete")
            post.delete()

        logger.info("User %s deleted post %s", identity.user_id, post_id)

    def attach_image(self, identity, post_id, upload):
        """
        Upload ``upload`` to the image host and store its reference on the post.

        No transaction is held while the host is called. The post is only
        written after a successful upload, so a failed upload leaves it
        unchanged.

        Raises:
            NotFound, Forbidden, InvalidInput
            ImageUploadFailed: the image host failed.
        """
        post = self.get(post_id)
        self._check_owner(identity, post, "attach an image to")
        self._validate_image(upload)

        ref = self.image_host.upload(upload, getattr(upload, "name", None))

        with store_errors("store image reference"):
            updated = Post.objects.filter(pk=post.pk).update(
                image_url=ref.url,
                image_public_id=ref.public_id,
                updated_at=timezone.now(),
            )
        if not updated:
            raise NotFound("Post not found")

        logger.info("User %s attached image %s to post %s", identity.user_id, ref.public_id, post.pk)
        return self.get(post.pk)

    def add_comment(self, identity, post_id, text):
        """
        Append a comment by ``identity`` to the end of the post's comments.

        The append is a single INSERT, so concurrent comments on the same
        post are all kept.
        """
        text = _clean_text("text", text, blog_settings.COMMENT_MAX_LENGTH)

        post = self.get(post_id)

        with store_errors("add comment"):
            if not User.objects.filter(pk=identity.user_id).exists():
                raise InvalidInput("author does not exist")
            try:
                with transaction.atomic():
                    Comment.objects.create(
                        post_id=post.pk,
                        author_id=identity.user_id,
                        text=text,
                    )
            except IntegrityError:
                if Post.objects.filter(pk=post.pk).exists():
                    logger.exception("Failed to add comment to post %s", post.pk)
                    raise InternalError() from None
                # Post deleted after the lookup above
                raise NotFound("Post not found") from None

        return self.get(post.pk)

    # Helpers

    def _posts(self):
        return Post.objects.select_related("author").prefetch_related("comments__author")

    def _get_for_update(self, post_id):
        try:
            return Post.objects.select_for_update().get(pk=post_id)
        except (Post.DoesNotExist, ValueError, TypeError):
            raise NotFound("Post not found") from None

    def _check_owner(self, identity, post, action):
        if not can_modify(identity, post):
            logger.warning(
                "User %s is not allowed to %s post %s", identity.user_id, action, post.pk
            )
            raise Forbidden()

    def _clean_changes(self, fields):
        if not fields:
            raise InvalidInput("nothing to update")
        if "author" in fields or "author_id" in fields:
            raise InvalidInput("author cannot be changed")
        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise InvalidInput("cannot update field(s): " + ", ".join(unknown))

        changes = {}
        if "title" in fields:
            changes["title"] = _clean_text(
                "title", fields["title"], blog_settings.TITLE_MAX_LENGTH
            )
        if "content" in fields:
            changes["content"] = _clean_text("content", fields["content"])
        return changes

    def _validate_image(self, upload):
        if upload is None:
            raise InvalidInput("image file is required")
        content_type = getattr(upload, "content_type", None)
        if content_type not in blog_settings.ALLOWED_IMAGE_TYPES:
            raise InvalidInput(f"unsupported image type: {content_type}")
        max_bytes = blog_settings.IMAGE_MAX_SIZE_MB * 1024 * 1024
        if getattr(upload, "size", 0) > max_bytes:
            raise InvalidInput(f"image must be at most {blog_settings.IMAGE_MAX_SIZE_MB} MB")
