"""
Post and Comment models for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class Post(models.Model):
    """
    Blog post.

    The author is fixed at creation. Comments live in their own table but
    are only reachable through ``post.comments``, which yields them in
    insertion order.
    """

    title = models.CharField(max_length=255)
    content = models.TextField()

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
    )

    # Reference returned by the external image host
    image_url = models.URLField(max_length=500, blank=True)
    image_public_id = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["author", "-created_at"], name="post_author_created_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def has_image(self):
        return bool(self.image_url)

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content


class Comment(models.Model):
    """
    Comment on a post.

    Append-only: comments are never edited and disappear only with their
    post. Appending is a single INSERT, so concurrent writers cannot
    overwrite each other's comments.
    """

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_comments",
    )
    text = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        # Primary key breaks ties between comments in the same clock tick
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["post", "created_at", "id"], name="comment_post_order_idx"),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"

    @property
    def preview(self):
        if len(self.text) > 100:
            return self.text[:100] + "..."
        return self.text
