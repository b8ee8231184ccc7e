# core/decorators.py
from functools import wraps

from rest_framework import status
from rest_framework.response import Response

from .cache import get_response_cache


def cache_response(ttl=None, cache=None):
    """
    Cache the payload of a DRF view method by request path.

    Only GET requests are looked up and only 200 responses are stored. A hit
    returns the stored payload as-is without calling the view.
    """

    def decorator(view_method):
        @wraps(view_method)
        def wrapper(view, request, *args, **kwargs):
            if request.method != "GET":
                return view_method(view, request, *args, **kwargs)

            response_cache = cache if cache is not None else get_response_cache()
            key = request.get_full_path()

            cached = response_cache.get(key)
            if cached is not None:
                response = Response(cached)
                response["X-Cache"] = "HIT"
                return response

            response = view_method(view, request, *args, **kwargs)
            if response.status_code == status.HTTP_200_OK and getattr(
                response, "data", None
            ) is not None:
                response_cache.set(key, response.data, ttl=ttl)
                response["X-Cache"] = "MISS"
            return response

        return wrapper

    return decorator
