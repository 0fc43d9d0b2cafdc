"""
Error taxonomy shared by every Quest app and the DRF exception handler
that renders it as ``{"error": "<message>"}``.

Status mapping:
- missing or invalid session -> 401
- authenticated without workspace access -> 403
- referenced entity absent -> 404
- validation, conflicts, invalid actions and store failures -> 400
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from django.http import Http404

from rest_framework import exceptions, status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """A unique constraint would be violated (duplicate slug, key, name)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."
    default_code = "conflict"


class InvalidAction(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid action."
    default_code = "invalid_action"


class MixedProjectBatch(APIException):
    """A bulk request referenced issues from more than one project."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "All issues in a bulk operation must belong to the same project."
    default_code = "mixed_project_batch"


class InternalError(APIException):
    """
    Unexpected store failure. The detail is always generic so no store
    error text reaches the caller.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Something went wrong. Please try again."
    default_code = "internal_error"


def first_error_message(detail):
    """
    Reduce a DRF error detail (str, list or nested dict) to its first
    human-readable message. Field errors are prefixed with the field name.
    """
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            return f"{field}: {message}"
        return "Invalid input."
    if isinstance(detail, (list, tuple)):
        if not detail:
            return "Invalid input."
        return first_error_message(detail[0])
    return str(detail)


def _translate_store_error(exc):
    if isinstance(exc, IntegrityError) and "unique" in str(exc).lower():
        return Conflict()
    return InternalError()


def quest_exception_handler(exc, context):
    """
    Render every error as ``{"error": message}`` with the taxonomy status.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()
    elif isinstance(exc, DjangoValidationError):
        # Malformed identifiers in query params, e.g. a non-UUID ?project=
        exc = exceptions.ValidationError(exc.messages)
    elif isinstance(exc, DatabaseError):
        request = context.get("request")
        logger.error(f"Store failure in {context.get('view').__class__.__name__}: {exc}")

        from apps.logging.services import LoggerService

        LoggerService.log_error(
            action="store_failure",
            error=exc.__class__.__name__,
            user=getattr(request, "user", None),
            ip_address=request.META.get("REMOTE_ADDR") if request else None,
            details={"path": request.path if request else ""},
        )
        exc = _translate_store_error(exc)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.NotAuthenticated) and response.status_code == 403:
        # Session-only requests carry no WWW-Authenticate header
        response.status_code = status.HTTP_401_UNAUTHORIZED

    response.data = {"error": first_error_message(response.data)}
    return response
