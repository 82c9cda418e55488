# fmngr/exceptions.py

import logging

from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The request conflicts with the current state of the catalog.'
    default_code = 'conflict'


class BlobMissing(NotFound):
    """
    The catalog row exists but the bytes it points to are gone.
    Reported separately from an unknown id so the divergence is visible.
    """
    default_detail = 'File metadata exists but its content is missing from storage.'
    default_code = 'blob_missing'


class StorageIOError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'A filesystem operation failed.'
    default_code = 'io_error'


class CatalogError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'A catalog operation failed.'
    default_code = 'database_error'


def _error_kind(exc: APIException) -> str:
    return getattr(exc, "default_code", "error")


def api_exception_handler(exc, context):
    """
    DRF exception handler that renders every failure as
    {"error": <kind>, "message": <detail>}.
    """
    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DatabaseError):
        logger.error(f"Unhandled catalog error in {context.get('view')}: {exc}", exc_info=True)
        exc = CatalogError(f"Catalog operation failed: {exc}")
    elif isinstance(exc, OSError):
        logger.error(f"Unhandled filesystem error in {context.get('view')}: {exc}", exc_info=True)
        exc = StorageIOError(f"Filesystem operation failed: {exc}")

    response = exception_handler(exc, context)

    if response is None:
        logger.error(f"Unexpected error in {context.get('view')}: {exc}", exc_info=True)
        return Response(
            {"error": "internal_error", "message": "An unexpected server error occurred."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data.get('detail', response.data) if isinstance(response.data, dict) else response.data
    response.data = {"error": _error_kind(exc), "message": detail}
    return response
