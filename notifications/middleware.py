# notifications/middleware.py
from urllib.parse import parse_qs
import logging

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_for_token(raw_token):
    try:
        token = AccessToken(raw_token)
    except (InvalidToken, TokenError) as e:
        logger.warning("Rejected websocket token: %s", e)
        return AnonymousUser()

    User = get_user_model()
    try:
        return User.objects.get(pk=token["user_id"], is_active=True)
    except (User.DoesNotExist, KeyError):
        return AnonymousUser()


def extract_token(scope):
    query = parse_qs(scope.get("query_string", b"").decode())
    if query.get("token"):
        return query["token"][0]

    for name, value in scope.get("headers", []):
        if name == b"authorization":
            parts = value.decode().split()
            if len(parts) == 2 and parts[0].lower() == "bearer":
                return parts[1]
    return None


class JWTAuthMiddleware(BaseMiddleware):
    """
    Authenticate websocket connections with a Simple JWT access token taken
    from the ``token`` query parameter or a bearer Authorization header.
    Falls back to whatever user the session middleware put in scope.
    """

    async def __call__(self, scope, receive, send):
        raw_token = extract_token(scope)
        if raw_token:
            scope = dict(scope)
            scope["user"] = await get_user_for_token(raw_token)
        return await super().__call__(scope, receive, send)


def JWTAuthMiddlewareStack(inner):
    return AuthMiddlewareStack(JWTAuthMiddleware(inner))
