"""Emission operations - extract a Go file and write its generated helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from metamodel.config.constants import DEFAULT_OUTPUT_SUFFIX
from metamodel.config.models import GenerationConfig, GrammarConfig
from metamodel.core.errors import EmissionError
from metamodel.emission.naming import package_name_for
from metamodel.emission.render import (
    format_go,
    render_metamodel,
    render_support_files,
)
from metamodel.extraction import ModuleDirectoryResolver, extract_file
from metamodel.extraction.models import ExtractionResult

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationReport:
    """Files written by one ``generate`` call."""

    result: ExtractionResult
    package_name: str
    metamodel_path: Path
    support_paths: tuple[Path, ...]

    @property
    def written(self) -> tuple[Path, ...]:
        return (self.metamodel_path, *self.support_paths)


def _is_directory_destination(destination: str) -> bool:
    separators = {os.sep, "/"}
    if os.altsep:
        separators.add(os.altsep)
    return destination[-1] in separators


def resolve_destination(
    source: Path,
    destination: str | os.PathLike[str] | None = None,
    *,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> Path:
    """Path of the metamodel file for ``source``.

    - no destination: ``<stem><suffix>`` beside the source
    - destination ending with a path separator: ``<stem><suffix>`` inside it
    - anything else: the destination itself
    """
    default_name = source.stem + output_suffix
    if destination is None:
        return source.parent / default_name

    text = os.fspath(destination)
    if not text:
        return source.parent / default_name
    if _is_directory_destination(text):
        return Path(text) / default_name
    return Path(text)


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise EmissionError.write_failed(str(path), e.strerror or str(e)) from e


def generate(
    source: Path,
    *,
    destination: str | os.PathLike[str] | None = None,
    generation: GenerationConfig | None = None,
    grammar: GrammarConfig | None = None,
    directories: ModuleDirectoryResolver | None = None,
) -> GenerationReport:
    """Extract ``source`` and write its metamodel plus the support files.

    Everything is rendered before anything is written, so a template failure
    leaves the destination untouched.

    Raises:
        ExtractionError: From the engine.
        EmissionError: TEMPLATE_FAILED or WRITE_FAILED.
    """
    generation = generation or GenerationConfig()
    result = extract_file(
        source,
        generation.tag,
        grammar=grammar,
        directories=directories,
    )

    package_name = package_name_for(result.namespace, generation.package_name)
    target = resolve_destination(source, destination, output_suffix=generation.output_suffix)

    rendered: dict[Path, str] = {
        target: render_metamodel(
            result,
            package_name=package_name,
            table_name=generation.table_name,
        )
    }
    for filename, text in render_support_files(package_name).items():
        rendered[target.parent / filename] = text

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise EmissionError.write_failed(str(target.parent), e.strerror or str(e)) from e

    for path, text in rendered.items():
        _write(path, format_go(text, enabled=generation.gofmt))
        log.debug("generate.wrote", path=str(path))

    log.info(
        "generate.done",
        source=str(source),
        destination=str(target),
        package=package_name,
        types=len(result.types),
    )
    return GenerationReport(
        result=result,
        package_name=package_name,
        metamodel_path=target,
        support_paths=tuple(p for p in rendered if p != target),
    )
