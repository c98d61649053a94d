"""Depth-first field extraction with embedded struct flattening.

For every field of a struct, in declaration order:

1. Untagged fields are skipped.
2. Named fields yield one ``FieldMetadata`` per identifier when the selected
   grammar resolves a canonical name.
3. Anonymous fields are flattened in place when the grammar inlines them
   (directive grammar with the embedded marker). The embedded struct is
   looked up in the current scope, then in sibling files of the same
   package, then, for ``alias.Type``, through the cross-module resolver.
   Unresolvable embedded types contribute nothing.

Embedding the same struct twice through different paths is fine; embedding
a struct inside itself (directly or transitively) raises EMBEDDING_CYCLE.
"""

from __future__ import annotations

import structlog

from metamodel.core.errors import ExtractionError
from metamodel.extraction._internal.resolver import (
    CrossModuleResolver,
    DeclarationScope,
    Resolution,
)
from metamodel.extraction._internal.tag_grammar import TagGrammar
from metamodel.extraction.models import (
    FieldDeclaration,
    FieldMetadata,
    TypeDeclaration,
    TypeRef,
)

log = structlog.get_logger(__name__)


class FieldExtractor:
    """Flattens the tagged fields of struct declarations for one grammar."""

    def __init__(self, grammar: TagGrammar, resolver: CrossModuleResolver) -> None:
        self._grammar = grammar
        self._resolver = resolver
        self._expanding: list[tuple[str, str]] = []

    def extract(self, declaration: TypeDeclaration) -> list[FieldMetadata]:
        """Fields of a top-level struct of the input file."""
        return self._parse_fields(declaration, self._resolver.root_scope)

    def _parse_fields(
        self, declaration: TypeDeclaration, scope: DeclarationScope
    ) -> list[FieldMetadata]:
        key = (str(declaration.source_path), declaration.name)
        if key in self._expanding:
            chain = [name for _path, name in self._expanding[self._expanding.index(key) :]]
            raise ExtractionError.embedding_cycle([*chain, declaration.name])

        self._expanding.append(key)
        try:
            fields: list[FieldMetadata] = []
            for field_decl in declaration.fields:
                if not field_decl.has_tag:
                    continue
                if field_decl.is_anonymous:
                    fields.extend(self._embedded_fields(declaration, field_decl, scope))
                    continue

                directive = self._grammar.parse(field_decl.tags)
                if not directive.is_named:
                    continue
                assert directive.name is not None
                for ident in field_decl.names:
                    fields.append(
                        FieldMetadata(
                            declaring_type=declaration.name,
                            field_name=ident,
                            tag_name=directive.name,
                        )
                    )
            return fields
        finally:
            self._expanding.pop()

    def _embedded_fields(
        self,
        owner: TypeDeclaration,
        field_decl: FieldDeclaration,
        scope: DeclarationScope,
    ) -> list[FieldMetadata]:
        if not self._grammar.inlines_embedded(field_decl.tags):
            return []
        ref = field_decl.embedded
        if ref is None:
            return []

        hit = self._resolve(owner, ref, scope)
        if hit is None:
            log.debug("extract.embedded_unresolved", owner=owner.name, embedded=str(ref))
            return []
        return self._parse_fields(hit.declaration, hit.scope)

    def _resolve(
        self, owner: TypeDeclaration, ref: TypeRef, scope: DeclarationScope
    ) -> Resolution | None:
        if ref.package is not None:
            return self._resolver.resolve(ref.package, ref.name, self._resolver.imports_for(owner))

        local = scope.declarations.get(ref.name)
        if local is not None:
            return Resolution(local, scope)
        if scope.package_dir is not None:
            return self._resolver.resolve_sibling(ref.name, scope.package_dir)
        return None
