"""
Request body schemas — JSON → domain Certificate.

Decoding rules:
  - unknown fields are ignored
  - missing fields take their zero value ("" or 0)
  - JSON types must match exactly (a number where a string is expected fails)
  - a bare `null` body is an all-default certificate
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError
from railway import ErrorCode
from railway.result import Result

from certificate_service.domain.models import Certificate


class CertificatePayload(BaseModel):
    """Body of POST /certificates and PUT /certificates/{id}. `id` is accepted but never trusted."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: int = 0
    name: str = ""
    course: str = ""
    issued_to: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    issuer: str = ""
    content: str = ""

    def to_certificate(self) -> Certificate:
        return Certificate(**self.model_dump())


def _describe(exc: ValidationError) -> str:
    """First decode error as `field: message`, or just the message for whole-body errors."""
    first = exc.errors(include_url=False)[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def decode_certificate(raw: bytes) -> Result[Certificate]:
    """Decode a JSON request body; any decode problem is a VALIDATION_ERROR carrying its text."""
    if raw.strip() == b"null":
        return Result.success(CertificatePayload().to_certificate())
    try:
        payload = CertificatePayload.model_validate_json(raw)
    except ValidationError as exc:
        return Result.failure(ErrorCode.VALIDATION_ERROR, _describe(exc), exc)
    return Result.success(payload.to_certificate())
