"""Common error model for the order management service.

Provides:
- ``Criticality``: severity tag carried by every error envelope.
- ``ErrorKind``: classification of a domain failure.  The HTTP layer maps
  kinds to status codes through an explicit table (see
  ``modules.core.exception_handler``).
- ``CommonErrorFormat``: immutable error envelope with a trace id, a detail
  message and nested errors (recovery suggestions, field errors).
- ``OrderManagementError``: the single domain exception raised by the
  service layer.

Constructing an error never logs.  The translation layer logs the trace id
when the error leaves the service, so server logs and responses correlate.
"""

from __future__ import annotations

import enum
from typing import Any, Iterable, Optional, Tuple

import uuid6
from pydantic import BaseModel, ConfigDict, Field

RECOVERY_SUGGESTION_PREFIX = "Recovery suggestion: "


class Criticality(str, enum.Enum):
    CRITICAL = "critical"
    NON_CRITICAL = "non-critical"
    UNKNOWN = "unknown"


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    UNPROCESSABLE = "unprocessable"
    SERVICE_UNAVAILABLE = "service_unavailable"
    DATA_INTEGRITY = "data_integrity"
    INTERNAL = "internal"


def new_trace_id() -> str:
    """Return a fresh, time-ordered trace id (UUIDv7)."""
    return str(uuid6.uuid7())


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


class CommonErrorFormat(BaseModel):
    """Immutable error envelope returned to API callers.

    Only ``criticality``, ``id`` and ``detail`` are required.  ``id`` is
    generated per instance unless an existing trace id is passed in to
    preserve it across a wrap.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    criticality: Criticality
    id: str = Field(default_factory=new_trace_id)
    detail: str
    other_errors: Tuple["CommonErrorFormat", ...] = Field(
        default=(), alias="otherErrors"
    )

    @classmethod
    def critical(cls, detail: str) -> CommonErrorFormat:
        return cls(criticality=Criticality.CRITICAL, detail=detail)

    @classmethod
    def non_critical(cls, detail: str) -> CommonErrorFormat:
        return cls(criticality=Criticality.NON_CRITICAL, detail=detail)

    @classmethod
    def unknown(cls, detail: str) -> CommonErrorFormat:
        return cls(criticality=Criticality.UNKNOWN, detail=detail)

    @classmethod
    def recovery_suggestion(cls, suggestion: str) -> CommonErrorFormat:
        return cls.non_critical(RECOVERY_SUGGESTION_PREFIX + suggestion)

    def with_other_errors(self, *errors: CommonErrorFormat) -> CommonErrorFormat:
        """Return a copy with *errors* appended to ``other_errors``."""
        if not errors:
            return self
        return self.model_copy(update={"other_errors": self.other_errors + errors})

    def to_dict(self) -> dict[str, Any]:
        """Outward JSON shape; ``otherErrors`` is omitted when empty."""
        data: dict[str, Any] = {
            "criticality": self.criticality.value,
            "id": self.id,
            "detail": self.detail,
        }
        if self.other_errors:
            data["otherErrors"] = [error.to_dict() for error in self.other_errors]
        return data


CommonErrorFormat.model_rebuild()


# ---------------------------------------------------------------------------
# Domain exception
# ---------------------------------------------------------------------------


class OrderManagementError(Exception):
    """Domain failure raised by the service layer.

    The ``kind`` decides the transport status; ``error_format`` is what the
    caller sees.  When ``cause`` is itself an ``OrderManagementError`` its
    trace id is kept and ``rewrapped`` is set: that indicates a layering
    bug and is reported by the translation layer.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        criticality: Criticality = Criticality.CRITICAL,
        recovery_suggestion: Optional[str] = None,
        cause: Optional[BaseException] = None,
        other_errors: Iterable[CommonErrorFormat] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.criticality = criticality
        self.recovery_suggestion = recovery_suggestion
        self.cause = cause
        self.rewrapped = isinstance(cause, OrderManagementError)

        envelope_kwargs: dict[str, Any] = {"criticality": criticality, "detail": message}
        if self.rewrapped:
            envelope_kwargs["id"] = cause.error_id  # type: ignore[union-attr]
        envelope = CommonErrorFormat(**envelope_kwargs)

        if recovery_suggestion:
            envelope = envelope.with_other_errors(
                CommonErrorFormat.recovery_suggestion(recovery_suggestion)
            )
        self.error_format = envelope.with_other_errors(*other_errors)

    @property
    def error_id(self) -> str:
        return self.error_format.id

    # ------------------------------------------------------------------
    # Common constructors
    # ------------------------------------------------------------------

    @classmethod
    def not_found(cls, resource_type: str, resource_id: Any) -> OrderManagementError:
        error = cls(
            ErrorKind.NOT_FOUND,
            f"{resource_type} not found with ID: {resource_id}",
        )
        error.resource_type = resource_type
        error.resource_id = resource_id
        return error

    @classmethod
    def invalid_order(cls, message: str) -> OrderManagementError:
        return cls(
            ErrorKind.INVALID,
            message,
            recovery_suggestion="Correct the order data and try again",
        )

    def __repr__(self) -> str:
        return f"OrderManagementError({self.kind.value!r}, {self.message!r}, id={self.error_id})"
