"""
Shared test fixtures and helpers for the certificate-service test suite.

Provides CSV/template file builders under pytest's tmp_path and a settings
object pointing every path at the temporary directory.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from certificate_service.config import AppSettings, StorageSettings, TemplateSettings
from certificate_service.domain.models import ImportMode


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write lines to a CSV file in tmp_path and return its path."""

    def _write(*lines: str, name: str = "certificates.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def template_file(tmp_path: Path) -> Path:
    """A two-placeholder template: issued_to and course."""
    path = tmp_path / "template.txt"
    path.write_text("Awarded to {{ issued_to }} for {{ course }}", encoding="utf-8")
    return path


@pytest.fixture()
def make_settings(tmp_path: Path, template_file: Path) -> Callable[[ImportMode], AppSettings]:
    """Settings with uploads and template under tmp_path, for a chosen import mode."""

    def _make(mode: ImportMode = ImportMode.RECORDS) -> AppSettings:
        return AppSettings(
            storage=StorageSettings(uploads_dir=tmp_path / "uploads"),
            template=TemplateSettings(path=template_file),
            import_mode=mode,
        )

    return _make
