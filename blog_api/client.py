"""
HTTP client for the django-blog-api endpoints.

    client = BlogClient("https://example.com/api/")
    client.login("alice", "password1")
    post = client.create_post("Hi", "World")
    client.add_comment(post.id, "First!")
"""
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urljoin

import requests


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, code: str, detail: str):
        self.status_code = status_code
        self.code = code
        self.detail = detail
        super().__init__(f"{status_code} {code}: {detail}")


@dataclass
class UserInfo:
    id: int
    username: str
    email: str
    role: str

    @classmethod
    def from_json(cls, data):
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            role=data["role"],
        )


@dataclass
class CommentInfo:
    text: str
    author: int
    author_username: str
    created_at: str

    @classmethod
    def from_json(cls, data):
        return cls(
            text=data["text"],
            author=data["author"],
            author_username=data["authorUsername"],
            created_at=data["createdAt"],
        )


@dataclass
class PostInfo:
    id: int
    title: str
    content: str
    author: int
    author_username: str
    created_at: str
    updated_at: str
    image_url: Optional[str] = None
    comments: List[CommentInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            author=data["author"],
            author_username=data["authorUsername"],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
            image_url=data.get("imageUrl"),
            comments=[CommentInfo.from_json(c) for c in data.get("comments", [])],
        )


class BlogClient:
    """Thin typed wrapper over the blog API."""

    def __init__(self, base_url: str, session: requests.Session = None, timeout: float = 10):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None

    # Auth

    def register(self, username: str, email: str, password: str) -> UserInfo:
        data = self._request(
            "POST",
            "auth/register/",
            json={"username": username, "email": email, "password": password},
        )
        return UserInfo.from_json(data)

    def login(self, username_or_email: str, password: str) -> str:
        """Log in and remember the token for subsequent calls."""
        data = self._request(
            "POST",
            "auth/login/",
            json={"usernameOrEmail": username_or_email, "password": password},
        )
        self.token = data["token"]
        return self.token

    def logout(self):
        self.token = None

    # Posts

    def list_posts(self) -> List[PostInfo]:
        data = self._request("GET", "posts/")
        return [PostInfo.from_json(p) for p in data["posts"]]

    def get_post(self, post_id: int) -> PostInfo:
        return PostInfo.from_json(self._request("GET", f"posts/{post_id}/"))

    def create_post(self, title: str, content: str) -> PostInfo:
        data = self._request("POST", "posts/", json={"title": title, "content": content})
        return PostInfo.from_json(data)

    def update_post(self, post_id: int, **fields) -> PostInfo:
        return PostInfo.from_json(self._request("PUT", f"posts/{post_id}/", json=fields))

    def delete_post(self, post_id: int) -> None:
        self._request("DELETE", f"posts/{post_id}/")

    def upload_image(self, post_id: int, fileobj, filename: str, content_type: str) -> PostInfo:
        data = self._request(
            "POST",
            f"posts/{post_id}/image/",
            files={"image": (filename, fileobj, content_type)},
        )
        return PostInfo.from_json(data)

    # Comments

    def list_comments(self, post_id: int) -> List[CommentInfo]:
        data = self._request("GET", f"posts/{post_id}/comments/")
        return [CommentInfo.from_json(c) for c in data["comments"]]

    def add_comment(self, post_id: int, text: str) -> PostInfo:
        data = self._request("POST", f"posts/{post_id}/comments/", json={"text": text})
        return PostInfo.from_json(data)

    def _request(self, method, path, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.session.request(
            method,
            urljoin(self.base_url, path),
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise ApiError(
                response.status_code,
                body.get("error", "http_error"),
                body.get("detail", response.reason or ""),
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()
