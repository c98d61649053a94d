"""Extraction operations - public entry point of the engine.

One call to ``extract_file`` is one extraction run: it parses the input
file, locates its go.mod, builds a fresh resolver (with its own cache) and
walks every top-level struct depth-first.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from metamodel.config.constants import NAMESPACE_SUFFIX
from metamodel.config.models import GrammarConfig
from metamodel.core.errors import ExtractionError
from metamodel.extraction._internal.fields import FieldExtractor
from metamodel.extraction._internal.module_locator import (
    ModuleDirectoryResolver,
    find_module_info,
)
from metamodel.extraction._internal.parsing import GoSourceParser
from metamodel.extraction._internal.resolver import CrossModuleResolver
from metamodel.extraction._internal.tag_grammar import grammar_for
from metamodel.extraction.models import ExtractionResult, TypeMetadata

log = structlog.get_logger(__name__)


def extract_file(
    source: Path,
    tag: str,
    *,
    grammar: GrammarConfig | None = None,
    directories: ModuleDirectoryResolver | None = None,
    parser: GoSourceParser | None = None,
) -> ExtractionResult:
    """Extract the tagged fields of every struct declared in ``source``.

    Args:
        source: Go file to read.
        tag: Tag namespace to extract (``json``, ``bson``, ``gorm``, ...).
        grammar: Grammar settings (directive namespaces, keys, markers).
        directories: Override for mapping project import paths to directories.
        parser: Parser to reuse across runs.

    Returns:
        ExtractionResult with one TypeMetadata per struct that has at least
        one resolved field, in declaration order.

    Raises:
        ExtractionError: SOURCE_NOT_FOUND, PARSE_FAILED,
            NO_MATCHING_DECLARATIONS or EMBEDDING_CYCLE.
    """
    parser = parser or GoSourceParser()
    module = parser.parse_file(source)

    module_info = find_module_info(source)
    if module_info is None:
        log.debug("extract.no_module", source=str(source))
    else:
        log.debug("extract.module", module=module_info.module_path, root=str(module_info.root_dir))

    resolver = CrossModuleResolver(parser, module, module_info, directories)
    extractor = FieldExtractor(grammar_for(tag, grammar), resolver)

    types: list[TypeMetadata] = []
    for declaration in module.types:
        fields = extractor.extract(declaration)
        if fields:
            types.append(TypeMetadata(type_name=declaration.name, fields=tuple(fields)))

    if not types:
        raise ExtractionError.no_matching_declarations(str(source), tag)

    package_name = module.package_name
    log.info(
        "extract.done",
        source=str(source),
        tag=tag,
        types=len(types),
        fields=sum(len(t.fields) for t in types),
        cached_modules=len(resolver.cached_modules),
    )
    return ExtractionResult(
        source_path=source,
        tag=tag,
        package_name=package_name,
        namespace=package_name + NAMESPACE_SUFFIX,
        types=tuple(types),
        module_info=module_info,
    )
