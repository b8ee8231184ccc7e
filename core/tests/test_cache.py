import logging

import pytest

from core.cache import ResponseCache, clear_all_cache, clear_cache, get_response_cache


@pytest.fixture
def cache(clock, locmem_backend):
    return ResponseCache(backend=locmem_backend(), ttl=60, clock=clock)


def test_get_returns_value_within_ttl(cache, clock):
    cache.set("/api/books/", {"results": [1, 2]})
    clock.advance(59.9)
    assert cache.get("/api/books/") == {"results": [1, 2]}


def test_get_is_a_miss_at_ttl_and_removes_entry(cache, clock):
    cache.set("/api/books/", {"results": []})
    clock.advance(60)
    assert cache.get("/api/books/") is None
    assert "/api/books/" not in cache.keys()


def test_unknown_key_is_a_miss(cache):
    assert cache.get("/api/nothing/") is None


def test_per_entry_ttl_overrides_default(cache, clock):
    cache.set("/api/books/1/", {"id": 1}, ttl=5)
    clock.advance(5)
    assert cache.get("/api/books/1/") is None


def test_invalidate_removes_only_matching_keys(cache):
    cache.set("/api/books/", {"a": 1})
    cache.set("/api/books/?page=2", {"a": 2})
    cache.set("/api/reviews/", {"b": 1})

    cleared = cache.invalidate("books")

    assert cleared == ["/api/books/", "/api/books/?page=2"]
    assert cache.get("/api/books/") is None
    assert cache.get("/api/books/?page=2") is None
    assert cache.get("/api/reviews/") == {"b": 1}


def test_invalidate_without_match_returns_empty_list(cache):
    cache.set("/api/reviews/", {"b": 1})
    assert cache.invalidate("wallet") == []
    assert len(cache) == 1


def test_clear_empties_cache(cache):
    cache.set("/api/books/", {"a": 1})
    cache.set("/api/reviews/", {"b": 1})
    assert cache.clear() == ["/api/books/", "/api/reviews/"]
    assert len(cache) == 0


def test_backend_bound_evicts_entries(clock, locmem_backend):
    cache = ResponseCache(backend=locmem_backend(max_entries=4), ttl=60, clock=clock)
    for i in range(20):
        cache.set(f"/api/books/?page={i}", {"page": i})

    assert len(cache) <= 4
    # The newest entry always survives culling
    assert cache.get("/api/books/?page=19") == {"page": 19}


def test_set_and_invalidate_are_logged(cache, caplog):
    with caplog.at_level(logging.INFO, logger="core.cache"):
        cache.set("/api/books/", {"a": 1}, ttl=30)
        cache.invalidate("books")

    messages = [record.getMessage() for record in caplog.records]
    assert "Cache SET for /api/books/ (ttl: 30s)" in messages
    assert "Cache CLEARED for /api/books/" in messages


def test_module_helpers_use_process_cache(response_cache):
    assert get_response_cache() is response_cache
    response_cache.set("/api/books/", {"a": 1})
    response_cache.set("/api/reports/", {"b": 1})

    assert clear_cache("books") == ["/api/books/"]
    assert clear_all_cache() == ["/api/reports/"]


def test_key_index_stays_within_backend_bound(clock, locmem_backend):
    cache = ResponseCache(backend=locmem_backend(max_entries=4), ttl=60, clock=clock)
    for i in range(500):
        cache.set(f"/api/books/?page={i}", {"page": i})

    assert len(cache._keys) <= 4


def test_invalidate_reports_only_entries_still_held(clock, locmem_backend):
    cache = ResponseCache(backend=locmem_backend(max_entries=4), ttl=60, clock=clock)
    for i in range(20):
        cache.set(f"/api/books/?page={i}", {"page": i})
    held = [key for key in cache._keys if cache.backend.has_key(f"response:{key}")]

    cleared = cache.invalidate("books")

    assert cleared == sorted(held)
    assert len(cleared) <= 4
    assert cache.clear() == []
