"""Request correlation for the order management API.

Every request carries one correlation id. A caller-supplied ``X-Request-ID``
is reused when it is a plausible token; anything else (missing, too long,
unexpected characters) is replaced by a fresh UUIDv7 so a header value can
never inject text into the JSON logs. The id, method and path are bound to
structlog contextvars for the lifetime of the request only.
"""

import re
import time
from typing import Callable

import structlog
import uuid6
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(raw: str | None) -> str:
    """Return *raw* when it is a usable request id, otherwise a new UUIDv7."""
    if raw and REQUEST_ID_PATTERN.match(raw):
        return raw
    return str(uuid6.uuid7())


class CorrelationIdMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        supplied = request.META.get("HTTP_X_REQUEST_ID")
        cid = resolve_request_id(supplied)
        started = time.monotonic()

        structlog.contextvars.clear_contextvars()
        with structlog.contextvars.bound_contextvars(
            correlation_id=cid, method=request.method, path=request.path
        ):
            if supplied and supplied != cid:
                logger.warning("request.id_rejected", supplied_length=len(supplied))
            logger.info("request.started")

            response = self.get_response(request)

            logger.info(
                "request.finished",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )

        response[REQUEST_ID_HEADER] = cid
        return response
