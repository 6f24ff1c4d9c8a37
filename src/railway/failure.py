"""
Failure description — structured error information for the failure track.

An ErrorCode enum member plus a human-readable message, the originating
exception (if any) and the moment the failure was recorded.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Organized by HTTP status range for natural REST API mapping:
    - Client errors (4xx): VALIDATION_ERROR, NOT_FOUND
    - Server errors (5xx): TECHNICAL_ERROR, UNKNOWN_ERROR
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Malformed input: bad path parameter, undecodable body, missing upload (→ 400)."""

    NOT_FOUND = "NOT_FOUND"
    """Resource doesn't exist (→ 404)."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """File I/O, CSV parsing, template rendering failures (→ 500)."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures (→ 500)."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.NOT_FOUND, "Certificate not found")
    >>> desc.code
    <ErrorCode.NOT_FOUND: 'NOT_FOUND'>
    >>> desc.message
    'Certificate not found'
    """

    code: ErrorCode
    message: str
    exception: BaseException | None = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def with_message(self, message: str) -> FailureDescription:
        """Same code and exception, new public-facing message."""
        return FailureDescription(code=self.code, message=message, exception=self.exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if there is one."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
        )
        return f"{self.message}\n{tb}"
