"""
HTTP integration — ErrorCode→HTTP status mapping and response builders.

Framework-agnostic core plus a FastAPI adapter.

Usage (standalone):
    status = HttpStatusMapper.map_error_code(ErrorCode.NOT_FOUND)  # → 404

Usage (FastAPI):
    from railway.http_support import build_fastapi_response
    return build_fastapi_response(result, success_status=201)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


# ──────────────────────── Error Code → HTTP Status Mapping ────────────────────────


class HttpStatusMapper:
    """Maps ErrorCode enum values to HTTP status codes."""

    _CODE_TO_STATUS: dict[ErrorCode, int] = {
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.NOT_FOUND: 404,
        ErrorCode.TECHNICAL_ERROR: 500,
        ErrorCode.UNKNOWN_ERROR: 500,
    }

    @classmethod
    def map_error_code(cls, code: ErrorCode) -> int:
        return cls._CODE_TO_STATUS.get(code, 500)

    @classmethod
    def map_failure(cls, failure: FailureDescription) -> int:
        return cls.map_error_code(failure.code)


# ──────────────────────── Error Response DTO ────────────────────────


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """
    Error response body shared by every endpoint.

        {"error": "Certificate not found"}
    """

    error: str

    @staticmethod
    def from_failure(failure: FailureDescription) -> ErrorResponse:
        return ErrorResponse(error=failure.message)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


# ──────────────────────── Generic Response Builder ────────────────────────


def build_response(
    result: Result[T],
    success_status: int = 200,
) -> tuple[Any, int]:
    """
    Build a (body, status_code) tuple from a Result.

        body, status = build_response(result, success_status=201)
    """
    return result.either(
        on_success=lambda value: (value, success_status),
        on_failure=lambda error: (
            ErrorResponse.from_failure(error).to_dict(),
            HttpStatusMapper.map_failure(error),
        ),
    )


# ──────────────────────── FastAPI Adapter ────────────────────────


def build_fastapi_response(
    result: Result[T],
    success_status: int = 200,
) -> Any:
    """
    Build a FastAPI JSONResponse from a Result.

    Dataclass and pydantic success values are converted with jsonable_encoder.

        @app.post("/certificates", status_code=201)
        def create_certificate(...):
            return build_fastapi_response(store.create(cert), success_status=201)
    """
    from fastapi.encoders import jsonable_encoder
    from fastapi.responses import JSONResponse

    body, status = build_response(result, success_status)
    return JSONResponse(content=jsonable_encoder(body), status_code=status)
