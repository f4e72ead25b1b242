"""DRF exception handler producing the common error envelope.

Every exception raised inside an API view ends here.  Domain errors are
translated through ``HTTP_STATUS_BY_KIND``; framework validation errors are
aggregated into one envelope; anything unclassified becomes a generic 500
that never leaks the internal exception text.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

import structlog
from django.core.exceptions import PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error
from rest_framework.views import set_rollback

from modules.core.errors import CommonErrorFormat, ErrorKind, OrderManagementError

logger = structlog.get_logger(__name__)

HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNPROCESSABLE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.DATA_INTEGRITY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

VALIDATION_RECOVERY = "Please check your input and correct the validation errors"
INTEGRITY_DETAIL = "A data integrity constraint was violated"
INTEGRITY_RECOVERY = "Check that your data doesn't violate any unique constraints"
INTERNAL_DETAIL = "Internal server error"
INTERNAL_RECOVERY = "Please contact support if the problem persists"


def common_error_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """Translate *exc* into a ``CommonErrorFormat`` response."""
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()
    elif isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(as_serializer_error(exc))

    if isinstance(exc, OrderManagementError):
        http_status, envelope = _handle_domain_error(exc)
    elif isinstance(exc, exceptions.ValidationError):
        http_status, envelope = _handle_validation_error(exc)
    elif isinstance(exc, exceptions.APIException):
        http_status, envelope = _handle_api_exception(exc)
    elif isinstance(exc, IntegrityError):
        http_status, envelope = _handle_integrity_error(exc)
    else:
        http_status, envelope = _handle_unclassified(exc)

    set_rollback()
    return Response(envelope.to_dict(), status=http_status)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_domain_error(exc: OrderManagementError) -> Tuple[int, CommonErrorFormat]:
    http_status = HTTP_STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    log = logger.bind(
        error_id=exc.error_id,
        error_kind=exc.kind.value,
        status_code=http_status,
    )

    if exc.rewrapped:
        log.critical(
            "error.domain_error_rewrapped",
            detail=exc.message,
            cause=repr(exc.cause),
        )

    if http_status >= 500:
        log.error("error.domain", detail=exc.message, exc_info=exc)
    else:
        log.warning("error.domain", detail=exc.message)
    return http_status, exc.error_format


def _handle_validation_error(
    exc: exceptions.ValidationError,
) -> Tuple[int, CommonErrorFormat]:
    field_errors = list(_flatten_validation_errors(exc.detail))

    if len(field_errors) == 1:
        main_detail = _describe_field_error(*field_errors[0])
    else:
        main_detail = "Multiple validation errors occurred"

    envelope = CommonErrorFormat.critical(main_detail).with_other_errors(
        CommonErrorFormat.recovery_suggestion(VALIDATION_RECOVERY)
    )
    if len(field_errors) > 1:
        envelope = envelope.with_other_errors(
            *(
                CommonErrorFormat.critical(_describe_field_error(field, message))
                for field, message in field_errors
            )
        )

    logger.warning(
        "error.validation",
        error_id=envelope.id,
        field_count=len(field_errors),
        detail=main_detail,
    )
    return status.HTTP_400_BAD_REQUEST, envelope


def _handle_api_exception(exc: exceptions.APIException) -> Tuple[int, CommonErrorFormat]:
    envelope = CommonErrorFormat.critical(str(exc.detail))
    logger.warning(
        "error.api",
        error_id=envelope.id,
        status_code=exc.status_code,
        detail=envelope.detail,
    )
    return exc.status_code, envelope


def _handle_integrity_error(exc: IntegrityError) -> Tuple[int, CommonErrorFormat]:
    envelope = CommonErrorFormat.critical(INTEGRITY_DETAIL).with_other_errors(
        CommonErrorFormat.recovery_suggestion(INTEGRITY_RECOVERY)
    )
    logger.error("error.data_integrity", error_id=envelope.id, cause=str(exc))
    return status.HTTP_400_BAD_REQUEST, envelope


def _handle_unclassified(exc: Exception) -> Tuple[int, CommonErrorFormat]:
    envelope = CommonErrorFormat.critical(INTERNAL_DETAIL).with_other_errors(
        CommonErrorFormat.recovery_suggestion(INTERNAL_RECOVERY)
    )
    logger.error("error.unhandled", error_id=envelope.id, exc_info=exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, envelope


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _describe_field_error(field: Optional[str], message: str) -> str:
    if not field:
        return f"Validation error: {message}"
    return f"Validation error for field '{field}': {message}"


def _flatten_validation_errors(
    detail: Any, prefix: str = ""
) -> Iterator[Tuple[Optional[str], str]]:
    """Yield ``(field_path, message)`` pairs from a DRF error structure.

    Nested list indexes are rendered as ``items[0].quantity``.
    """
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key == "non_field_errors":
                path = prefix
            else:
                path = f"{prefix}.{key}" if prefix else str(key)
            yield from _flatten_validation_errors(value, path)
    elif isinstance(detail, list):
        if all(not isinstance(item, (dict, list)) for item in detail):
            for item in detail:
                yield prefix or None, str(item)
            return
        for index, item in enumerate(detail):
            yield from _flatten_validation_errors(item, f"{prefix}[{index}]")
    else:
        yield prefix or None, str(detail)


__all__: List[str] = ["HTTP_STATUS_BY_KIND", "common_error_handler"]
