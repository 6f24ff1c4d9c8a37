"""
CSV importer adapter — uploaded CSV file → mappings or typed certificates.

Implements the CsvImporter port with the standard library csv module.

File layout:
  row 0      header (column names)
  row 1..n   data rows

A file that cannot be opened or parsed, or that has no data row after the
header, is a failure. Blank lines are ignored.

Two output shapes:
  - generic mappings: {header[i]: row[i]} for i < min(len(header), len(row))
  - typed certificates: fixed columns name, course, issued_to, issue_date,
    expiry_date, issuer; shorter rows are skipped, extra columns ignored.
    Certificates leave the importer without ids (the store assigns them).
"""

from __future__ import annotations

import csv
from pathlib import Path

import structlog
from railway import ErrorCode
from railway.result import Result

from certificate_service.domain.models import Certificate

log = structlog.get_logger()

TYPED_COLUMNS = ("name", "course", "issued_to", "issue_date", "expiry_date", "issuer")

_NO_DATA_ROWS = "CSV file must have at least one data row"


def _load_rows(path: Path) -> list[list[str]]:
    """Read every non-blank row. `utf-8-sig` drops a leading BOM from the header."""
    with path.open(newline="", encoding="utf-8-sig") as handle:
        return [row for row in csv.reader(handle, strict=True) if row]


def _row_to_mapping(header: list[str], row: list[str]) -> dict[str, str]:
    return dict(zip(header, row, strict=False))


def _row_to_certificate(row: list[str]) -> Certificate:
    name, course, issued_to, issue_date, expiry_date, issuer = row[: len(TYPED_COLUMNS)]
    return Certificate.completion(
        name=name,
        course=course,
        issued_to=issued_to,
        issue_date=issue_date,
        expiry_date=expiry_date,
        issuer=issuer,
    )


class StdlibCsvImporter:
    """
    Parse comma-separated files from disk.

    Implements the CsvImporter port.
    All exceptions are caught at this adapter boundary via Result.from_computation().
    """

    def read_rows(self, path: Path) -> Result[list[list[str]]]:
        """Header plus data rows, or a failure when there is no data row."""
        return (
            Result.from_computation(
                lambda: _load_rows(path),
                ErrorCode.TECHNICAL_ERROR,
                f"Failed to read CSV file {path.name}",
            )
            .ensure(lambda rows: len(rows) >= 2, ErrorCode.TECHNICAL_ERROR, _NO_DATA_ROWS)
            .peek(lambda rows: log.info("csv.parsed", file=path.name, data_rows=len(rows) - 1))
        )

    def read_mappings(self, path: Path) -> Result[list[dict[str, str]]]:
        return self.read_rows(path).map(
            lambda rows: [_row_to_mapping(rows[0], row) for row in rows[1:]]
        )

    def read_first_mapping(self, path: Path) -> Result[dict[str, str]]:
        return self.read_rows(path).map(lambda rows: _row_to_mapping(rows[0], rows[1]))

    def read_certificates(self, path: Path) -> Result[list[Certificate]]:
        return self.read_rows(path).map(self._typed_rows)

    def _typed_rows(self, rows: list[list[str]]) -> list[Certificate]:
        data_rows = rows[1:]
        certificates = [
            _row_to_certificate(row) for row in data_rows if len(row) >= len(TYPED_COLUMNS)
        ]
        skipped = len(data_rows) - len(certificates)
        if skipped:
            log.info("csv.rows_skipped", skipped=skipped, required_columns=len(TYPED_COLUMNS))
        return certificates
