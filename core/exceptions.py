# core/exceptions.py
import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework import exceptions
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AdminRequired(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Admin access required."
    default_code = "admin_required"


class InsufficientBalance(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Insufficient balance for this operation."
    default_code = "insufficient_balance"


class InvalidStateTransition(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This action is not allowed in the current state."
    default_code = "invalid_state"


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def bookhive_exception_handler(exc, context):
    """
    Normalize error responses to ``{"success": false, "message", "code"}``.

    Validation errors keep their field messages under ``errors``. Exceptions
    DRF does not handle become a generic 500.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(*exc.args)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(*exc.args)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "view"
        )
        data = {
            "success": False,
            "message": "Internal server error",
            "code": "server_error",
        }
        if getattr(settings, "EXPOSE_ERROR_DETAILS", False):
            data["error"] = str(exc)
        return Response(data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        errors = response.data
        if not isinstance(errors, dict):
            errors = {"non_field_errors": errors}
        response.data = {
            "success": False,
            "message": _first_message(errors),
            "code": "validation_error",
            "errors": errors,
        }
        return response

    codes = exc.get_codes() if isinstance(exc, APIException) else None
    response.data = {
        "success": False,
        "message": _first_message(getattr(exc, "detail", response.data)),
        "code": codes if isinstance(codes, str) else "error",
    }
    return response
