"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to .env file
  - Validate types and constraints at startup

Every field has a default, so the service starts with no configuration at
all: port 8080, uploads under ./uploads, template at
./templates/sample_template.txt, typed-record import.

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so SERVER__PORT maps to
server.port, TEMPLATE__PATH maps to template.path, etc.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from certificate_service.domain.models import ImportMode

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ServerSettings(BaseModel):
    """Listening address for Uvicorn."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8080, ge=1, le=65535, description="TCP port")


class StorageSettings(BaseModel):
    """Where uploaded CSV files are written (created at startup if absent)."""

    uploads_dir: Path = Field(default=Path("uploads"), description="Upload directory")


class TemplateSettings(BaseModel):
    """
    Certificate text template.

    Read from disk on every render; placeholders use Jinja2 syntax,
    e.g. {{ issued_to }}.
    """

    path: Path = Field(
        default=Path("templates/sample_template.txt"),
        description="Template file path",
    )


class AppSettings(BaseSettings):
    """
    Root application settings — aggregates all sub-settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerSettings = Field(default_factory=lambda: ServerSettings())
    storage: StorageSettings = Field(default_factory=lambda: StorageSettings())
    template: TemplateSettings = Field(default_factory=lambda: TemplateSettings())

    import_mode: ImportMode = Field(default=ImportMode.RECORDS)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names in any case; store them upper-case."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            )
        return level
