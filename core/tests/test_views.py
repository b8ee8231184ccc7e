import pytest
from django.urls import reverse

from books.factories import BookFactory
from core.cache import clear_cache

pytestmark = pytest.mark.django_db


def test_cache_clear_requires_admin(user_client):
    response = user_client.post(reverse("cache-clear"), {}, format="json")
    assert response.status_code == 403
    assert response.data["code"] == "admin_required"


def test_cache_clear_requires_authentication(api_client):
    response = api_client.post(reverse("cache-clear"), {}, format="json")
    assert response.status_code == 401
    assert response.data["code"] == "not_authenticated"


def test_cache_clear_by_pattern(admin_client, response_cache):
    response_cache.set("/api/books/", {"a": 1})
    response_cache.set("/api/reviews/", {"b": 1})

    response = admin_client.post(
        reverse("cache-clear"), {"pattern": "books"}, format="json"
    )

    assert response.status_code == 200
    assert response.data["data"] == {"cleared": ["/api/books/"], "count": 1}
    assert response_cache.keys() == ["/api/reviews/"]


def test_cache_clear_all(admin_client, response_cache):
    response_cache.set("/api/books/", {"a": 1})
    response_cache.set("/api/reviews/", {"b": 1})

    response = admin_client.post(reverse("cache-clear"), {}, format="json")

    assert response.data["data"]["count"] == 2
    assert len(response_cache) == 0


def test_book_list_cached_until_books_pattern_cleared(user_client):
    """End to end: cached list survives new rows until invalidated."""
    BookFactory(title="Dune")

    first = user_client.get("/api/books/")
    assert first["X-Cache"] == "MISS"
    assert first.data["count"] == 1

    # Written straight to the DB so no handler invalidates the cache
    BookFactory(title="Emma")
    second = user_client.get("/api/books/")
    assert second["X-Cache"] == "HIT"
    assert second.data["count"] == 1

    clear_cache("books")
    third = user_client.get("/api/books/")
    assert third["X-Cache"] == "MISS"
    assert third.data["count"] == 2
