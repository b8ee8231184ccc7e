import uuid

import pytest
from django.core.cache.backends.locmem import LocMemCache
from rest_framework.test import APIClient

import core.cache
from core.cache import ResponseCache
from users.factories import AdminFactory, UserFactory


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_backend(max_entries=1000):
    return LocMemCache(
        f"test-{uuid.uuid4()}",
        {"OPTIONS": {"MAX_ENTRIES": max_entries, "CULL_FREQUENCY": 4}},
    )


@pytest.fixture
def locmem_backend():
    """Factory for isolated LocMemCache backends."""
    return make_backend


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def response_cache(monkeypatch):
    """Give every test its own process-wide response cache."""
    cache = ResponseCache(backend=make_backend(), ttl=60)
    monkeypatch.setattr(core.cache, "_response_cache", cache)
    return cache


@pytest.fixture(autouse=True)
def in_memory_channel_layer(settings):
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
    }
    settings.ADMIN_NOTIFICATIONS_QUEUED = False


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return UserFactory()


@pytest.fixture
def admin_user(db):
    return AdminFactory()


@pytest.fixture
def user_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
