import pytest
from asgiref.sync import sync_to_async
from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.tokens import AccessToken

from notifications.middleware import JWTAuthMiddleware
from notifications.routing import websocket_urlpatterns
from notifications.services import AdminNotificationService, admin_connections
from users.factories import AdminFactory, UserFactory

PATH = "/ws/admin/notifications/"


def build_communicator(user=None, path=PATH):
    communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), path)
    communicator.scope["user"] = user if user is not None else AnonymousUser()
    return communicator


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_anonymous_connection_is_closed():
    communicator = build_communicator()
    connected, _ = await communicator.connect()
    assert not connected


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_admin_joins_room_and_receives_events():
    admin = await database_sync_to_async(AdminFactory)()
    communicator = build_communicator(admin)

    connected, _ = await communicator.connect()
    assert connected

    greeting = await communicator.receive_json_from()
    assert greeting["event"] == "admin-connected"
    assert admin_connections.is_user_connected(admin.id)

    service = AdminNotificationService(channel_layer=get_channel_layer(), queued=False)
    sent = await sync_to_async(service.emit_to_admins)(
        "report:update", {"reportId": 5, "status": "resolved"}
    )
    assert sent is True

    message = await communicator.receive_json_from()
    assert message["event"] == "report:update"
    assert message["data"]["reportId"] == 5
    assert "timestamp" in message["data"]

    await communicator.disconnect()
    assert not admin_connections.is_user_connected(admin.id)


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_regular_user_is_accepted_but_not_in_room():
    user = await database_sync_to_async(UserFactory)()
    communicator = build_communicator(user)

    connected, _ = await communicator.connect()
    assert connected

    await communicator.send_json_to({"type": "check-admin-room"})
    status = await communicator.receive_json_from()
    assert status == {
        "event": "admin-room-status",
        "data": {"isInAdminRoom": False, "userRole": "user"},
    }

    await sync_to_async(
        AdminNotificationService(channel_layer=get_channel_layer(), queued=False).emit_to_admins
    )("book:new", {"bookId": 1})
    assert await communicator.receive_nothing()

    await communicator.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_ping_pong():
    admin = await database_sync_to_async(AdminFactory)()
    communicator = build_communicator(admin)
    await communicator.connect()
    await communicator.receive_json_from()

    await communicator.send_json_to({"type": "ping"})
    assert await communicator.receive_json_from() == {"type": "pong"}

    await communicator.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_jwt_query_token_authenticates_socket():
    admin = await database_sync_to_async(AdminFactory)()
    token = str(AccessToken.for_user(admin))
    application = JWTAuthMiddleware(URLRouter(websocket_urlpatterns))
    communicator = WebsocketCommunicator(application, f"{PATH}?token={token}")

    connected, _ = await communicator.connect()
    assert connected
    greeting = await communicator.receive_json_from()
    assert greeting["event"] == "admin-connected"

    await communicator.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_invalid_jwt_is_rejected():
    application = JWTAuthMiddleware(URLRouter(websocket_urlpatterns))
    communicator = WebsocketCommunicator(application, f"{PATH}?token=not-a-token")
    connected, _ = await communicator.connect()
    assert not connected
