import pytest
from rest_framework import status
from rest_framework.response import Response
from rest_framework.test import APIRequestFactory
from rest_framework.views import APIView

from core.cache import ResponseCache
from core.decorators import cache_response

factory = APIRequestFactory()


@pytest.fixture
def cache(clock, locmem_backend):
    return ResponseCache(backend=locmem_backend(), ttl=60, clock=clock)


def make_view(cache, status_code=status.HTTP_200_OK):
    calls = []

    class CountingView(APIView):
        authentication_classes = []
        permission_classes = []

        @cache_response(cache=cache)
        def get(self, request):
            calls.append(request.method)
            return Response({"count": len(calls)}, status=status_code)

        @cache_response(cache=cache)
        def post(self, request):
            calls.append(request.method)
            return Response({"count": len(calls)})

    return CountingView.as_view(), calls


def test_second_get_is_served_from_cache(cache):
    view, calls = make_view(cache)

    first = view(factory.get("/api/books/"))
    second = view(factory.get("/api/books/"))

    assert first["X-Cache"] == "MISS"
    assert second["X-Cache"] == "HIT"
    assert second.data == first.data == {"count": 1}
    assert calls == ["GET"]


def test_query_string_is_part_of_the_key(cache):
    view, calls = make_view(cache)

    view(factory.get("/api/books/?page=1"))
    view(factory.get("/api/books/?page=2"))

    assert len(calls) == 2
    assert cache.keys() == ["/api/books/?page=1", "/api/books/?page=2"]


def test_expired_entry_calls_view_again(cache, clock):
    view, calls = make_view(cache)

    view(factory.get("/api/books/"))
    clock.advance(60)
    response = view(factory.get("/api/books/"))

    assert response["X-Cache"] == "MISS"
    assert response.data == {"count": 2}


def test_non_get_requests_bypass_cache(cache):
    view, calls = make_view(cache)

    view(factory.post("/api/books/"))
    view(factory.post("/api/books/"))

    assert calls == ["POST", "POST"]
    assert cache.keys() == []


def test_non_200_responses_are_not_stored(cache):
    view, calls = make_view(cache, status_code=status.HTTP_404_NOT_FOUND)

    view(factory.get("/api/books/99/"))
    response = view(factory.get("/api/books/99/"))

    assert response.status_code == 404
    assert not response.has_header("X-Cache")
    assert len(calls) == 2
