"""
Typed request bodies and response serializers for django-blog-api views.
"""
import json
from dataclasses import dataclass

from .exceptions import InvalidInput


def parse_json(request):
    """Return the JSON object in ``request.body``."""
    try:
        data = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise InvalidInput("request body must be valid JSON") from None
    if not isinstance(data, dict):
        raise InvalidInput("request body must be a JSON object")
    return data


def _text(data, key):
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(f"{key} must be a string")
    return value


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    email: str
    password: str

    @classmethod
    def from_request(cls, request):
        data = parse_json(request)
        return cls(
            username=_text(data, "username"),
            email=_text(data, "email"),
            password=_text(data, "password"),
        )


@dataclass(frozen=True)
class LoginRequest:
    username_or_email: str
    password: str

    @classmethod
    def from_request(cls, request):
        data = parse_json(request)
        return cls(
            username_or_email=_text(data, "usernameOrEmail"),
            password=_text(data, "password"),
        )


@dataclass(frozen=True)
class PostRequest:
    title: str
    content: str

    @classmethod
    def from_request(cls, request):
        data = parse_json(request)
        return cls(title=_text(data, "title"), content=_text(data, "content"))


@dataclass(frozen=True)
class CommentRequest:
    text: str

    @classmethod
    def from_request(cls, request):
        return cls(text=_text(parse_json(request), "text"))


def serialize_user(user):
    return {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "role": user.role,
    }


def serialize_comment(comment):
    return {
        "text": comment.text,
        "author": comment.author_id,
        "authorUsername": comment.author.username,
        "createdAt": comment.created_at.isoformat(),
    }


def serialize_post(post, include_comments=True):
    data = {
        "id": post.pk,
        "title": post.title,
        "content": post.content,
        "author": post.author_id,
        "authorUsername": post.author.username,
        "imageUrl": post.image_url or None,
        "createdAt": post.created_at.isoformat(),
        "updatedAt": post.updated_at.isoformat(),
    }
    if include_comments:
        data["comments"] = [serialize_comment(c) for c in post.comments.all()]
    return data
