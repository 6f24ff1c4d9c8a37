"""
Domain models — immutable data structures for certificates and import results.

Certificates are frozen dataclasses: updating a certificate replaces the
stored value, it never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

CONTENT_TEMPLATE = (
    "Certificate of Completion awarded to {issued_to} "
    "for successfully completing {course}, issued by {issuer}"
)


@dataclass(frozen=True, slots=True)
class Certificate:
    """
    A certificate record as held by the store and returned over HTTP.

    `id` is 0 until the store assigns one. Dates are free-form strings.
    """

    id: int = 0
    name: str = ""
    course: str = ""
    issued_to: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    issuer: str = ""
    content: str = ""

    @staticmethod
    def completion(
        name: str,
        course: str,
        issued_to: str,
        issue_date: str,
        expiry_date: str,
        issuer: str,
    ) -> Certificate:
        """Build a certificate whose content is the standard completion sentence."""
        return Certificate(
            name=name,
            course=course,
            issued_to=issued_to,
            issue_date=issue_date,
            expiry_date=expiry_date,
            issuer=issuer,
            content=CONTENT_TEMPLATE.format(issued_to=issued_to, course=course, issuer=issuer),
        )


class ImportMode(StrEnum):
    """
    What an uploaded CSV becomes.

      RECORDS          — typed certificates appended to the store
      TEMPLATE         — one rendered template per data row
      SINGLE_TEMPLATE  — the first data row rendered once
    """

    RECORDS = "records"
    TEMPLATE = "template"
    SINGLE_TEMPLATE = "single_template"


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Result of a processed upload; exactly one of the payload fields is set per mode."""

    mode: ImportMode
    certificates: list[Certificate] = field(default_factory=list)
    filled_templates: list[str] = field(default_factory=list)
    filled_template: str | None = None

    def to_body(self) -> dict[str, Any]:
        match self.mode:
            case ImportMode.RECORDS:
                return {
                    "imported": len(self.certificates),
                    "certificates": self.certificates,
                }
            case ImportMode.TEMPLATE:
                return {"filled_templates": self.filled_templates}
            case ImportMode.SINGLE_TEMPLATE:
                return {"filled_template": self.filled_template}
        raise ValueError(f"Unsupported import mode: {self.mode!r}")  # pragma: no cover
