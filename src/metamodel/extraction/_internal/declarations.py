"""Struct declaration lookup tables used to resolve embedded fields."""

from __future__ import annotations

from collections.abc import Iterable

from metamodel.extraction.models import SourceModule, TypeDeclaration

DeclarationMap = dict[str, TypeDeclaration]


def collect_type_declarations(module: SourceModule) -> DeclarationMap:
    """Map every struct declared in ``module`` by name, tagged or not.

    A later declaration with the same name replaces an earlier one.
    """
    declarations: DeclarationMap = {}
    for decl in module.types:
        declarations[decl.name] = decl
    return declarations


def merge_declarations(modules: Iterable[SourceModule]) -> DeclarationMap:
    """Merge the declaration maps of several files of one package, in order."""
    merged: DeclarationMap = {}
    for module in modules:
        merged.update(collect_type_declarations(module))
    return merged
