"""Import table: local package alias -> import path for one source file."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from metamodel.extraction.models import ImportEntry, SourceModule

ImportTable = Mapping[str, str]

EMPTY_IMPORT_TABLE: ImportTable = MappingProxyType({})


def build_import_table(entries: Iterable[ImportEntry]) -> ImportTable:
    """Map each alias to its module path. A repeated alias keeps the last import."""
    table: dict[str, str] = {}
    for entry in entries:
        table[entry.alias] = entry.module_path
    return MappingProxyType(table)


def import_table_for(module: SourceModule) -> ImportTable:
    return build_import_table(module.imports)
