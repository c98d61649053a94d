"""Data model of the extraction engine.

Structural types (``SourceModule``, ``TypeDeclaration``, ``FieldDeclaration``)
are produced by the Go parser and never mutated afterwards. Output types
(``FieldMetadata``, ``TypeMetadata``, ``ExtractionResult``) are what the
emission pipeline consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# =============================================================================
# Structural model
# =============================================================================


@dataclass(frozen=True, slots=True)
class ImportEntry:
    """One import statement: local alias -> fully-qualified module path."""

    alias: str
    module_path: str


@dataclass(frozen=True, slots=True)
class TypeRef:
    """Type of an embedded field.

    ``package`` is the import alias for qualified references
    (``entity.Entity``) and ``None`` for same-package ones.
    """

    name: str
    package: str | None = None
    pointer: bool = False

    def __str__(self) -> str:
        star = "*" if self.pointer else ""
        if self.package:
            return f"{star}{self.package}.{self.name}"
        return f"{star}{self.name}"


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """A struct field.

    Named fields carry one or more identifiers sharing one type and tag.
    Anonymous (embedded) fields have no names and an ``embedded`` type ref;
    ``embedded`` is ``None`` for named fields and for embedded types the
    parser cannot express as a ``TypeRef``.
    """

    names: tuple[str, ...]
    raw_tag: str | None = None
    tags: Mapping[str, str] = field(default_factory=dict)
    embedded: TypeRef | None = None
    line: int = 0

    @property
    def is_anonymous(self) -> bool:
        return not self.names

    @property
    def has_tag(self) -> bool:
        return self.raw_tag is not None


@dataclass(frozen=True, slots=True)
class TypeDeclaration:
    """A named struct type declared at the top level of a file."""

    name: str
    fields: tuple[FieldDeclaration, ...]
    source_path: Path
    line: int = 0


@dataclass(frozen=True, slots=True)
class SourceModule:
    """One parsed Go source file."""

    path: Path
    package_name: str
    imports: tuple[ImportEntry, ...]
    types: tuple[TypeDeclaration, ...]


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """Canonical module path and root directory from the nearest go.mod."""

    module_path: str
    root_dir: Path

    def contains(self, import_path: str) -> bool:
        """True if ``import_path`` is this module or one of its packages."""
        return import_path == self.module_path or import_path.startswith(self.module_path + "/")


# =============================================================================
# Tag grammar output
# =============================================================================


class DirectiveKind(Enum):
    NAME = "name"
    EXCLUDE = "exclude"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class TagDirective:
    """Parsed value of one tag namespace for one field."""

    kind: DirectiveKind
    name: str | None = None

    @classmethod
    def named(cls, name: str) -> TagDirective:
        return cls(DirectiveKind.NAME, name)

    @classmethod
    def exclude(cls) -> TagDirective:
        return cls(DirectiveKind.EXCLUDE)

    @classmethod
    def absent(cls) -> TagDirective:
        return cls(DirectiveKind.ABSENT)

    @property
    def is_named(self) -> bool:
        return self.kind is DirectiveKind.NAME


# =============================================================================
# Extraction output
# =============================================================================


@dataclass(frozen=True, slots=True)
class FieldMetadata:
    """A resolved field: where it was declared, its identifier and canonical name."""

    declaring_type: str
    field_name: str
    tag_name: str


@dataclass(frozen=True, slots=True)
class TypeMetadata:
    """One output record: a struct and its flattened, resolved fields."""

    type_name: str
    fields: tuple[FieldMetadata, ...]


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Result of one extraction run over one source file."""

    source_path: Path
    tag: str
    package_name: str
    namespace: str
    types: tuple[TypeMetadata, ...]
    module_info: ModuleInfo | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize for JSON output."""
        return {
            "source": str(self.source_path),
            "tag": self.tag,
            "package": self.package_name,
            "namespace": self.namespace,
            "module": self.module_info.module_path if self.module_info else None,
            "types": [
                {
                    "name": t.type_name,
                    "fields": [
                        {
                            "field": f.field_name,
                            "name": f.tag_name,
                            "declared_in": f.declaring_type,
                        }
                        for f in t.fields
                    ],
                }
                for t in self.types
            ],
        }
