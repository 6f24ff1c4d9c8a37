"""
Template renderer adapter — mapping values → certificate text via Jinja2.

Implements the TemplateRenderer port.

The template file is read and compiled on every call, so edits on disk take
effect without a restart. Placeholders use Jinja2 syntax keyed by the
mapping's keys, e.g. `{{ issued_to }}`. Rendering uses StrictUndefined:
a placeholder with no matching key is a failure, not an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import structlog
from jinja2 import BaseLoader, Environment, StrictUndefined, Template
from railway import ErrorCode
from railway.result import Result

log = structlog.get_logger()


def _environment() -> Environment:
    return Environment(
        loader=BaseLoader(),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


class JinjaTemplateRenderer:
    """
    Render the certificate text template found at `template_path`.

    Relative paths resolve against the process working directory.
    """

    def __init__(self, template_path: Path) -> None:
        self._template_path = template_path

    @property
    def template_path(self) -> Path:
        return self._template_path

    def render(self, values: Mapping[str, str]) -> Result[str]:
        return self._load().flat_map(lambda template: self._render_one(template, values))

    def render_all(self, rows: Sequence[Mapping[str, str]]) -> Result[list[str]]:
        """One rendering per row against a single load of the template; first failure wins."""
        return (
            self._load()
            .flat_map(
                lambda template: Result.all_of([self._render_one(template, row) for row in rows])
            )
            .peek(lambda texts: log.info("template.rendered", count=len(texts)))
        )

    def _load(self) -> Result[Template]:
        return Result.from_computation(
            lambda: self._template_path.read_text(encoding="utf-8"),
            ErrorCode.TECHNICAL_ERROR,
            f"Failed to load template {self._template_path}",
        ).flat_map(
            lambda source: Result.from_computation(
                lambda: _environment().from_string(source),
                ErrorCode.TECHNICAL_ERROR,
                f"Invalid template syntax in {self._template_path}",
            )
        )

    def _render_one(self, template: Template, values: Mapping[str, str]) -> Result[str]:
        return Result.from_computation(
            lambda: template.render(dict(values)),
            ErrorCode.TECHNICAL_ERROR,
            "Failed to render template",
        )
