"""
Application entry point — wires dependencies and starts Uvicorn.

Composition root: loads settings and hands them to the FastAPI application
factory, which builds the default adapters, then serves the app.

Handlers and the pipeline depend only on Protocol interfaces; create_app
is the one place that picks the concrete adapters.

Responsibilities:
  1. Configure structlog for structured logging
  2. Load and validate configuration from environment
  3. Build the FastAPI app with its default adapters
  4. Serve it on the configured port (8080 by default)
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn
from fastapi import FastAPI

from certificate_service import __version__
from certificate_service.asgi import create_app
from certificate_service.config import AppSettings


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output with ISO timestamps.
    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_app(settings: AppSettings) -> FastAPI:
    """The production application: every collaborator is create_app's default."""
    return create_app(settings=settings)


def main() -> None:
    """Load settings, wire the application and serve it until interrupted."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        log_level=settings.log_level,
        host=settings.server.host,
        port=settings.server.port,
        import_mode=settings.import_mode.value,
    )

    app = build_app(settings)

    try:
        uvicorn.run(
            app,
            host=settings.server.host,
            port=settings.server.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        log.info("app.shutdown", reason="signal received")
    except Exception as e:
        log.error("app.fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
