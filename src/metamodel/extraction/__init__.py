"""Extraction module - struct tag metadata engine.

Public API is in `metamodel.extraction.ops`:
- extract_file: parse one Go file and resolve its tagged fields

Internal implementations are in `metamodel.extraction._internal/`.
"""

from metamodel.extraction._internal.module_locator import (
    GoModuleLayout,
    ModuleDirectoryResolver,
    find_module_info,
    parse_go_mod,
)
from metamodel.extraction._internal.tag_grammar import (
    DirectiveGrammar,
    ListGrammar,
    TagGrammar,
    grammar_for,
)
from metamodel.extraction.models import (
    DirectiveKind,
    ExtractionResult,
    FieldDeclaration,
    FieldMetadata,
    ImportEntry,
    ModuleInfo,
    SourceModule,
    TagDirective,
    TypeDeclaration,
    TypeMetadata,
    TypeRef,
)
from metamodel.extraction.ops import extract_file

__all__ = [
    # Operations
    "extract_file",
    "find_module_info",
    "parse_go_mod",
    "grammar_for",
    # Grammars
    "TagGrammar",
    "ListGrammar",
    "DirectiveGrammar",
    # Module layout
    "GoModuleLayout",
    "ModuleDirectoryResolver",
    # Models
    "DirectiveKind",
    "ExtractionResult",
    "FieldDeclaration",
    "FieldMetadata",
    "ImportEntry",
    "ModuleInfo",
    "SourceModule",
    "TagDirective",
    "TypeDeclaration",
    "TypeMetadata",
    "TypeRef",
]
