"""
JSON views for django-blog-api.

Views raise BlogError subclasses; JsonErrorMixin renders them as JSON with
the matching status code. Every method requires a verified token unless
listed in ``token_exempt_methods``.
"""
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .auth import AuthGateway
from .exceptions import BlogError
from .middleware import TokenRequiredMixin, error_response
from .payloads import (
    CommentRequest,
    LoginRequest,
    PostRequest,
    RegisterRequest,
    parse_json,
    serialize_comment,
    serialize_post,
    serialize_user,
)
from .services import PostService


class JsonErrorMixin:
    """Render BlogError raised anywhere below dispatch() as a JSON response."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BlogError as exc:
            return error_response(exc)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(JsonErrorMixin, TokenRequiredMixin, View):
    """Base view: token auth is header based, so CSRF does not apply."""

    def get_post_service(self):
        return PostService()


class RegisterView(ApiView):
    """Create an account."""

    token_exempt_methods = ("POST",)

    def post(self, request):
        body = RegisterRequest.from_request(request)
        user = AuthGateway().register(body.username, body.email, body.password)
        return JsonResponse(serialize_user(user), status=201)


class LoginView(ApiView):
    """Exchange credentials for a session token."""

    token_exempt_methods = ("POST",)

    def post(self, request):
        body = LoginRequest.from_request(request)
        token = AuthGateway().login(body.username_or_email, body.password)
        return JsonResponse({"token": token})


class PostListView(ApiView):
    """List posts (public) or create one."""

    token_exempt_methods = ("GET",)

    def get(self, request):
        posts = self.get_post_service().list()
        return JsonResponse({"posts": [serialize_post(p) for p in posts]})

    def post(self, request):
        body = PostRequest.from_request(request)
        post = self.get_post_service().create(request.identity, body.title, body.content)
        return JsonResponse(serialize_post(post), status=201)


class PostDetailView(ApiView):
    """Read (public), update or delete a single post."""

    token_exempt_methods = ("GET",)

    def get(self, request, pk):
        return JsonResponse(serialize_post(self.get_post_service().get(pk)))

    def put(self, request, pk):
        fields = parse_json(request)
        post = self.get_post_service().update(request.identity, pk, fields)
        return JsonResponse(serialize_post(post))

    def delete(self, request, pk):
        self.get_post_service().delete(request.identity, pk)
        return HttpResponse(status=204)


class PostImageView(ApiView):
    """Upload an image for a post (multipart field ``image``)."""

    def post(self, request, pk):
        upload = request.FILES.get("image")
        post = self.get_post_service().attach_image(request.identity, pk, upload)
        return JsonResponse(serialize_post(post))


class CommentListView(ApiView):
    """Fetch a post's comments (public) or append one."""

    token_exempt_methods = ("GET",)

    def get(self, request, pk):
        post = self.get_post_service().get(pk)
        return JsonResponse({"comments": [serialize_comment(c) for c in post.comments.all()]})

    def post(self, request, pk):
        body = CommentRequest.from_request(request)
        post = self.get_post_service().add_comment(request.identity, pk, body.text)
        return JsonResponse(serialize_post(post), status=201)
