"""
FastAPI application — the HTTP surface of the certificate store.

Routes:
  GET  /certificates            list all certificates (insertion order)
  POST /certificates            create (server-assigned id) → 201
  GET  /certificates/{id}       fetch one
  PUT  /certificates/{id}       replace all fields except id
  POST /certificates/upload     multipart `file` CSV → import / template fill
  GET  /health, GET /info       probes

Collaborators (store, CSV importer, template renderer, settings) are built
once by create_app, or injected by its caller, and kept on `app.state`;
handlers reach them through FastAPI dependencies, never through module
globals.

Every handler result is a railway Result, turned into a JSON response by
build_fastapi_response: failures become {"error": message} with the status
mapped from their ErrorCode.

Entry point: python -m certificate_service.main
"""

from __future__ import annotations

import re
import shutil
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, Any

import structlog
from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from railway import ErrorCode, FailureDescription
from railway.http_support import build_fastapi_response
from railway.result import Result

from certificate_service import __version__
from certificate_service.adapters.csv_importer import StdlibCsvImporter
from certificate_service.adapters.memory_store import InMemoryCertificateStore
from certificate_service.adapters.template_renderer import JinjaTemplateRenderer
from certificate_service.config import AppSettings
from certificate_service.domain.ports import CertificateStore, CsvImporter, TemplateRenderer
from certificate_service.pipeline import run_import
from certificate_service.schemas import decode_certificate

log = structlog.get_logger()

INVALID_ID_MESSAGE = "Invalid certificate ID"
UPLOAD_FAILED_MESSAGE = "File upload failed"
SAVE_FAILED_MESSAGE = "Failed to save file"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = 19


# ─────────────────────── Request helpers ───────────────────────


def parse_certificate_id(raw: str) -> Result[int]:
    """
    Path segment → int. An optional sign followed by ASCII digits, nothing else.

    The value must fit a signed 64-bit integer. Leading zeros are allowed and
    are dropped before conversion, so long zero-padded ids stay valid.
    """
    if _INTEGER.fullmatch(raw) is None:
        return Result.failure(ErrorCode.VALIDATION_ERROR, INVALID_ID_MESSAGE)
    sign = "-" if raw.startswith("-") else ""
    digits = raw.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _INT64_DIGITS:
        return Result.failure(ErrorCode.VALIDATION_ERROR, INVALID_ID_MESSAGE)
    return Result.success(int(sign + digits)).ensure(
        lambda value: _INT64_MIN <= value <= _INT64_MAX,
        ErrorCode.VALIDATION_ERROR,
        INVALID_ID_MESSAGE,
    )


def _upload_target(upload: UploadFile | None, uploads_dir: Path) -> Result[Path]:
    """Destination path for an upload: the client's file name without any directory part."""
    filename = Path(upload.filename).name if upload is not None and upload.filename else ""
    if not filename:
        return Result.failure(ErrorCode.VALIDATION_ERROR, UPLOAD_FAILED_MESSAGE)
    return Result.success(uploads_dir / filename)


def _write_upload(upload: UploadFile, target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return target


def save_upload(upload: UploadFile, target: Path) -> Result[Path]:
    """Write the upload to `target`, replacing any file of the same name."""
    return Result.from_computation(
        lambda: _write_upload(upload, target),
        ErrorCode.TECHNICAL_ERROR,
        SAVE_FAILED_MESSAGE,
    ).peek(lambda path: log.info("upload.saved", path=str(path)))


def _log_failure(operation: str) -> Callable[[FailureDescription], None]:
    def _log(error: FailureDescription) -> None:
        log.warning(
            f"{operation}.failed",
            error_code=error.code.value,
            message=error.message,
            cause=str(error.exception) if error.exception else None,
        )
        if error.exception is not None:
            log.debug(f"{operation}.traceback", trace=error.full_stack_trace())

    return _log


# ─────────────────────── Dependencies ───────────────────────


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_store(request: Request) -> CertificateStore:
    return request.app.state.store


def get_importer(request: Request) -> CsvImporter:
    return request.app.state.importer


def get_renderer(request: Request) -> TemplateRenderer:
    return request.app.state.renderer


async def read_body(request: Request) -> bytes:
    return await request.body()


SettingsDep = Annotated[AppSettings, Depends(get_settings)]
StoreDep = Annotated[CertificateStore, Depends(get_store)]
ImporterDep = Annotated[CsvImporter, Depends(get_importer)]
RendererDep = Annotated[TemplateRenderer, Depends(get_renderer)]
BodyDep = Annotated[bytes, Depends(read_body)]


# ─────────────────────── Lifespan ───────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: make sure the uploads directory exists."""
    settings: AppSettings = app.state.settings
    settings.storage.uploads_dir.mkdir(parents=True, exist_ok=True)
    log.info(
        "asgi.startup_complete",
        uploads_dir=str(settings.storage.uploads_dir),
        template=str(settings.template.path),
        import_mode=settings.import_mode.value,
    )

    yield

    log.info("asgi.shutdown_complete", certificates=app.state.store.count())


# ─────────────────────── Routes ───────────────────────


def get_all_certificates(store: StoreDep) -> JSONResponse:
    return build_fastapi_response(store.list_all())


def create_certificate(body: BodyDep, store: StoreDep) -> JSONResponse:
    result = decode_certificate(body).flat_map(store.create)
    return build_fastapi_response(result, success_status=201)


def get_certificate(certificate_id: str, store: StoreDep) -> JSONResponse:
    return build_fastapi_response(parse_certificate_id(certificate_id).flat_map(store.get))


def update_certificate(certificate_id: str, body: BodyDep, store: StoreDep) -> JSONResponse:
    result = parse_certificate_id(certificate_id).flat_map(
        lambda cid: decode_certificate(body).flat_map(
            lambda replacement: store.update(cid, replacement)
        )
    )
    return build_fastapi_response(result)


def upload_certificate_data(
    settings: SettingsDep,
    store: StoreDep,
    importer: ImporterDep,
    renderer: RendererDep,
    file: Annotated[UploadFile | None, File()] = None,
) -> JSONResponse:
    """
    Save the uploaded CSV, then import or render it according to the configured mode.

    400 when no file was sent; 500 when saving, CSV parsing or templating fails.
    """
    result = (
        _upload_target(file, settings.storage.uploads_dir)
        .flat_map(lambda target: save_upload(file, target))  # type: ignore[arg-type]
        .flat_map(
            lambda path: run_import(
                path,
                mode=settings.import_mode,
                importer=importer,
                renderer=renderer,
                store=store,
            )
        )
        .peek_failure(_log_failure("upload"))
        .peek(lambda outcome: log.info("upload.processed", mode=outcome.mode.value))
        .map(lambda outcome: outcome.to_body())
    )
    return build_fastapi_response(result)


def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed multipart forms and similar request errors keep the {"error": ...} shape."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    log.warning("request.invalid", path=request.url.path, message=message)
    return JSONResponse(status_code=400, content={"error": message})


def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    log.error("request.unhandled", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def health() -> dict[str, str]:
    return {"status": "healthy"}


def info(settings: SettingsDep, store: StoreDep) -> dict[str, Any]:
    return {
        "name": "certificate-service",
        "version": __version__,
        "import_mode": settings.import_mode.value,
        "certificates": store.count(),
    }


# ─────────────────────── Application factory ───────────────────────


def create_app(
    settings: AppSettings | None = None,
    store: CertificateStore | None = None,
    importer: CsvImporter | None = None,
    renderer: TemplateRenderer | None = None,
) -> FastAPI:
    """
    Build the FastAPI application around its collaborators.

    Anything not supplied gets the default adapter built from `settings`.
    """
    if settings is None:
        settings = AppSettings()

    app = FastAPI(
        title="certificate-service",
        description="In-memory certificate records with CSV import and template rendering",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryCertificateStore()
    app.state.importer = importer if importer is not None else StdlibCsvImporter()
    app.state.renderer = (
        renderer if renderer is not None else JinjaTemplateRenderer(settings.template.path)
    )

    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)

    # /certificates/upload is registered before the {certificate_id} routes.
    app.add_api_route("/certificates/upload", upload_certificate_data, methods=["POST"])
    app.add_api_route("/certificates", get_all_certificates, methods=["GET"])
    app.add_api_route("/certificates", create_certificate, methods=["POST"])
    app.add_api_route("/certificates/{certificate_id}", get_certificate, methods=["GET"])
    app.add_api_route("/certificates/{certificate_id}", update_certificate, methods=["PUT"])
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route("/info", info, methods=["GET"])
    return app
