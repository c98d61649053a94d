"""Jinja2 rendering of generated Go files.

Templates live in ``templates/`` next to this module. Rendering is pure:
nothing here touches the destination directory. ``format_go`` pipes text
through ``gofmt`` when it is installed and returns the input unchanged
otherwise.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from metamodel.config.constants import (
    COMMON_FILENAME,
    GORM_OPERATOR_FILENAME,
    MONGO_OPERATOR_FILENAME,
)
from metamodel.core.errors import EmissionError
from metamodel.emission.naming import table_name_for
from metamodel.extraction.models import ExtractionResult, TypeMetadata

log = structlog.get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

METAMODEL_TEMPLATE = "metamodel.go.j2"

SUPPORT_TEMPLATES: dict[str, str] = {
    COMMON_FILENAME: "common.go.j2",
    GORM_OPERATOR_FILENAME: "gorm_operator.go.j2",
    MONGO_OPERATOR_FILENAME: "mongo_operator.go.j2",
}

GOFMT_TIMEOUT = 30


@dataclass(frozen=True, slots=True)
class RenderedField:
    field_name: str
    tag_name: str


@dataclass(frozen=True, slots=True)
class RenderedType:
    name: str
    table_name: str
    fields: tuple[RenderedField, ...]


def go_quote(value: str) -> str:
    """Quote ``value`` as a Go interpreted string literal."""
    return json.dumps(value, ensure_ascii=False)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["go_quote"] = go_quote
    return env


def _render(template_name: str, **context: object) -> str:
    try:
        return _environment().get_template(template_name).render(**context)
    except TemplateError as e:
        raise EmissionError.template_failed(template_name, str(e)) from e


def _rendered_type(metadata: TypeMetadata, table_name: str | None) -> RenderedType:
    # Go rejects duplicate members; an outer field shadows an embedded one.
    seen: set[str] = set()
    fields: list[RenderedField] = []
    for field in metadata.fields:
        if field.field_name in seen:
            log.debug(
                "render.duplicate_field",
                type=metadata.type_name,
                field=field.field_name,
                declaring_type=field.declaring_type,
            )
            continue
        seen.add(field.field_name)
        fields.append(RenderedField(field.field_name, field.tag_name))
    return RenderedType(
        name=metadata.type_name,
        table_name=table_name_for(metadata.type_name, table_name),
        fields=tuple(fields),
    )


def render_metamodel(
    result: ExtractionResult,
    *,
    package_name: str,
    table_name: str | None = None,
) -> str:
    """Render the metamodel file: one ``<Type>_`` variable per struct."""
    types = [_rendered_type(t, table_name) for t in result.types]
    return _render(
        METAMODEL_TEMPLATE,
        source_name=result.source_path.name,
        package_name=package_name,
        tag=result.tag,
        types=types,
    )


def render_support_files(package_name: str) -> dict[str, str]:
    """Render the helper files shared by every metamodel of a package."""
    return {
        filename: _render(template, package_name=package_name)
        for filename, template in SUPPORT_TEMPLATES.items()
    }


def format_go(source: str, *, enabled: bool = True) -> str:
    """Format Go source with gofmt; unformatted text is kept on any failure."""
    if not enabled:
        return source
    gofmt = shutil.which("gofmt")
    if gofmt is None:
        return source

    try:
        result = subprocess.run(
            [gofmt],
            input=source,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT,
        )
    except (subprocess.SubprocessError, OSError) as e:
        log.warning("render.gofmt_failed", error=str(e))
        return source

    if result.returncode != 0:
        log.warning("render.gofmt_rejected", stderr=result.stderr.strip())
        return source
    return result.stdout
