"""
Ports — Protocol-based interfaces for the service's adapters.

Handlers and the upload pipeline depend on these contracts only; the
composition root decides which concrete adapter satisfies each one.

  Domain ← Ports (protocols) ← Adapters (implementations)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from railway.result import Result

from certificate_service.domain.models import Certificate


@runtime_checkable
class CertificateStore(Protocol):
    """
    Port: ordered, in-process certificate collection.

    Identifiers are assigned by the store as `count + 1` at insertion time.
    Every method returns a Result; a missing id is Failure(NOT_FOUND).
    """

    def get(self, certificate_id: int) -> Result[Certificate]: ...

    def create(self, certificate: Certificate) -> Result[Certificate]: ...

    def list_all(self) -> Result[list[Certificate]]: ...

    def update(self, certificate_id: int, replacement: Certificate) -> Result[Certificate]: ...

    def append_batch(self, certificates: Sequence[Certificate]) -> Result[list[Certificate]]:
        """Append all certificates under one lock acquisition, assigning consecutive ids."""
        ...

    def count(self) -> int: ...


@runtime_checkable
class CsvImporter(Protocol):
    """
    Port: turn a CSV file (header row + data rows) into import input.

    All three methods fail when the file cannot be read or parsed,
    or holds no data row.
    """

    def read_mappings(self, path: Path) -> Result[list[dict[str, str]]]: ...

    def read_first_mapping(self, path: Path) -> Result[dict[str, str]]: ...

    def read_certificates(self, path: Path) -> Result[list[Certificate]]: ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """
    Port: substitute mapping values into the certificate text template.

    The template is loaded on every call.
    """

    def render(self, values: Mapping[str, str]) -> Result[str]: ...

    def render_all(self, rows: Sequence[Mapping[str, str]]) -> Result[list[str]]: ...
