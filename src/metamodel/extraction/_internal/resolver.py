"""Resolution of embedded struct types outside the declaring file.

Two lookups exist:

* ``resolve(alias, name, imports)`` for qualified references (``entity.Entity``).
  The alias is mapped to an import path through the declaring file's import
  table. Only the project's own packages (the go.mod module path or a
  sub-path of it) are resolved; third-party modules are never looked up.
* ``resolve_sibling(name, directory)`` for unqualified references that are
  not declared in the same file but in another file of the same package.

Each package directory is parsed at most once per resolver. Every ``.go``
file directly inside it is parsed; files that fail to parse are skipped.
A resolver belongs to one extraction run and is not shared between runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import structlog

from metamodel.config.constants import SOURCE_SUFFIX
from metamodel.core.errors import ExtractionError
from metamodel.extraction._internal.declarations import (
    DeclarationMap,
    collect_type_declarations,
    merge_declarations,
)
from metamodel.extraction._internal.imports import (
    EMPTY_IMPORT_TABLE,
    ImportTable,
    import_table_for,
)
from metamodel.extraction._internal.module_locator import (
    GoModuleLayout,
    ModuleDirectoryResolver,
)
from metamodel.extraction._internal.parsing import GoSourceParser
from metamodel.extraction.models import ModuleInfo, SourceModule, TypeDeclaration

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DeclarationScope:
    """Declarations visible to unqualified references inside one scope.

    ``package_dir`` is set when the scope covers a single file; unqualified
    misses then fall back to the other files of that directory.
    """

    declarations: Mapping[str, TypeDeclaration]
    package_dir: Path | None = None


@dataclass(frozen=True, slots=True)
class Resolution:
    """A resolved struct and the scope its own embedded fields resolve in."""

    declaration: TypeDeclaration
    scope: DeclarationScope


class CrossModuleResolver:
    """Per-run resolver with a cache keyed by import path.

    Usage::

        resolver = CrossModuleResolver(parser, root_module, module_info)
        hit = resolver.resolve("entity", "Entity", resolver.imports_for(decl))
        if hit is not None:
            ...  # walk hit.declaration within hit.scope
    """

    def __init__(
        self,
        parser: GoSourceParser,
        root: SourceModule,
        module_info: ModuleInfo | None,
        directories: ModuleDirectoryResolver | None = None,
    ) -> None:
        self._parser = parser
        self._root = root
        self._module_info = module_info
        self._directories = directories or GoModuleLayout(module_info)

        # import path -> merged declarations of that package
        self._cache: dict[str, DeclarationMap] = {}
        # package directory -> merged declarations (same-package siblings)
        self._sibling_cache: dict[Path, DeclarationMap] = {}
        self._import_tables: dict[Path, ImportTable] = {root.path: import_table_for(root)}

        self.root_scope = DeclarationScope(
            declarations=collect_type_declarations(root),
            package_dir=root.path.parent,
        )

    @property
    def cached_modules(self) -> tuple[str, ...]:
        return tuple(self._cache)

    def imports_for(self, declaration: TypeDeclaration) -> ImportTable:
        """Import table of the file that declares ``declaration``."""
        return self._import_tables.get(declaration.source_path, EMPTY_IMPORT_TABLE)

    def resolve(self, alias: str, type_name: str, imports: ImportTable) -> Resolution | None:
        """Resolve ``alias.type_name`` to a struct of one of the project's packages."""
        import_path = imports.get(alias)
        if import_path is None:
            log.debug("resolver.unknown_alias", alias=alias, type=type_name)
            return None

        declarations = self._cache.get(import_path)
        if declarations is None:
            if self._module_info is None or not self._module_info.contains(import_path):
                log.debug("resolver.external_module", import_path=import_path)
                return None
            directory = self._directories.directory_for(import_path)
            declarations = self._load_package(directory) if directory is not None else {}
            self._cache[import_path] = declarations
            log.debug(
                "resolver.cache_fill",
                import_path=import_path,
                directory=str(directory),
                types=len(declarations),
            )

        decl = declarations.get(type_name)
        if decl is None:
            log.debug("resolver.type_not_found", import_path=import_path, type=type_name)
            return None
        return Resolution(decl, DeclarationScope(declarations=declarations))

    def resolve_sibling(self, type_name: str, package_dir: Path) -> Resolution | None:
        """Resolve an unqualified name declared in another file of ``package_dir``."""
        declarations = self._sibling_cache.get(package_dir)
        if declarations is None:
            declarations = self._load_package(package_dir)
            self._sibling_cache[package_dir] = declarations

        decl = declarations.get(type_name)
        if decl is None:
            return None
        return Resolution(decl, DeclarationScope(declarations=declarations))

    def _load_package(self, directory: Path) -> DeclarationMap:
        """Parse every Go file directly inside ``directory``; unparsable files are skipped."""
        try:
            paths = sorted(
                p for p in directory.iterdir() if p.is_file() and p.suffix == SOURCE_SUFFIX
            )
        except OSError as e:
            log.debug("resolver.directory_unreadable", directory=str(directory), error=str(e))
            return {}

        modules: list[SourceModule] = []
        for path in paths:
            if path.resolve() == self._root.path.resolve():
                modules.append(self._root)
                continue
            try:
                module = self._parser.parse_file(path)
            except ExtractionError as e:
                log.debug("resolver.file_skipped", path=str(path), reason=e.message)
                continue
            self._import_tables[module.path] = import_table_for(module)
            modules.append(module)
        return merge_declarations(modules)
