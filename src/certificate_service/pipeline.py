"""
Upload pipeline — CSV file on disk → ImportOutcome.

Domain layer — no direct I/O. The importer, renderer and store are
injected via ports (Protocol interfaces).

Depending on the import mode, the railway is:

  RECORDS:          read_certificates(path) → store.append_batch(certs)
  TEMPLATE:         read_mappings(path)     → renderer.render_all(rows)
  SINGLE_TEMPLATE:  read_first_mapping(path) → renderer.render(row)

Each stage's failure is rewritten to the message the HTTP layer reports
for that stage; the original exception stays on the FailureDescription.
"""

from __future__ import annotations

from pathlib import Path

from railway.result import Result

from certificate_service.domain.models import ImportMode, ImportOutcome
from certificate_service.domain.ports import CertificateStore, CsvImporter, TemplateRenderer

CSV_FAILURE_MESSAGE = "Failed to read CSV file"
TEMPLATE_FAILURE_MESSAGE = "Failed to process template"
STORE_FAILURE_MESSAGE = "Failed to store certificates"


def _import_records(
    csv_path: Path,
    importer: CsvImporter,
    store: CertificateStore,
) -> Result[ImportOutcome]:
    return (
        importer.read_certificates(csv_path)
        .map_failure(lambda err: err.with_message(CSV_FAILURE_MESSAGE))
        .flat_map(
            lambda certs: store.append_batch(certs).map_failure(
                lambda err: err.with_message(STORE_FAILURE_MESSAGE)
            )
        )
        .map(lambda stored: ImportOutcome(mode=ImportMode.RECORDS, certificates=stored))
    )


def _render_all_rows(
    csv_path: Path,
    importer: CsvImporter,
    renderer: TemplateRenderer,
) -> Result[ImportOutcome]:
    return (
        importer.read_mappings(csv_path)
        .map_failure(lambda err: err.with_message(CSV_FAILURE_MESSAGE))
        .flat_map(
            lambda rows: renderer.render_all(rows).map_failure(
                lambda err: err.with_message(TEMPLATE_FAILURE_MESSAGE)
            )
        )
        .map(lambda texts: ImportOutcome(mode=ImportMode.TEMPLATE, filled_templates=texts))
    )


def _render_first_row(
    csv_path: Path,
    importer: CsvImporter,
    renderer: TemplateRenderer,
) -> Result[ImportOutcome]:
    return (
        importer.read_first_mapping(csv_path)
        .map_failure(lambda err: err.with_message(CSV_FAILURE_MESSAGE))
        .flat_map(
            lambda row: renderer.render(row).map_failure(
                lambda err: err.with_message(TEMPLATE_FAILURE_MESSAGE)
            )
        )
        .map(lambda text: ImportOutcome(mode=ImportMode.SINGLE_TEMPLATE, filled_template=text))
    )


def run_import(
    csv_path: Path,
    mode: ImportMode,
    importer: CsvImporter,
    renderer: TemplateRenderer,
    store: CertificateStore,
) -> Result[ImportOutcome]:
    """
    Process an uploaded CSV file according to `mode`.

    Returns Result[ImportOutcome] on success, or the failure of the first
    stage that failed (CSV read, template rendering, or store append).
    """
    match mode:
        case ImportMode.RECORDS:
            return _import_records(csv_path, importer, store)
        case ImportMode.TEMPLATE:
            return _render_all_rows(csv_path, importer, renderer)
        case ImportMode.SINGLE_TEMPLATE:
            return _render_first_row(csv_path, importer, renderer)
    raise ValueError(f"Unsupported import mode: {mode!r}")
