"""
Django admin configuration for blog_api.
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import Comment, Post, User


class CommentInline(admin.TabularInline):
    """Read-only view of a post's comments; comments are append-only."""

    model = Comment
    extra = 0
    can_delete = False
    fields = ["author", "text", "created_at"]
    readonly_fields = ["author", "text", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["username", "email", "role", "date_joined"]
    list_filter = ["role"]
    search_fields = ["username", "email"]
    exclude = ["password"]
    readonly_fields = ["last_login", "date_joined"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["title", "author", "comment_count", "image_thumbnail", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["title", "content", "author__username"]
    date_hierarchy = "created_at"
    inlines = [CommentInline]
    readonly_fields = ["author", "image_url", "image_public_id", "created_at", "updated_at"]

    @admin.display(description="Comments")
    def comment_count(self, obj):
        return obj.comments.count()

    @admin.display(description="Image")
    def image_thumbnail(self, obj):
        if not obj.image_url:
            return "-"
        return format_html('<img src="{}" style="max-height: 40px;" />', obj.image_url)
