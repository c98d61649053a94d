"""Tree-sitter parsing of Go declaration files.

Turns one ``.go`` file into a ``SourceModule``: the package clause, the
import specs and every top-level ``type X struct {...}`` declaration with
its fields and struct tags. Function bodies, methods and non-struct types
are ignored.

Tree-sitter recovers from syntax errors instead of failing, so a parse is
rejected when the tree contains any ERROR or missing node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter
import tree_sitter_go
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from metamodel.core.errors import ExtractionError
from metamodel.extraction._internal.parsing.struct_tag import (
    parse_struct_tag,
    unquote_go_string,
)
from metamodel.extraction.models import (
    FieldDeclaration,
    ImportEntry,
    SourceModule,
    TypeDeclaration,
    TypeRef,
)

_IMPORT_QUERY = """
    (import_spec) @import_node
"""

_STRING_LITERALS = frozenset({"interpreted_string_literal", "raw_string_literal"})


def _text(node: Any) -> str:
    return node.text.decode("utf-8") if node is not None and node.text else ""


@dataclass
class GoSourceParser:
    """
    Tree-sitter parser for Go declaration files.

    Usage::

        parser = GoSourceParser()
        module = parser.parse_file(Path("models/user.go"))
        for decl in module.types:
            ...
    """

    _parser: Any = field(default=None, repr=False)
    _language: Any = field(default=None, repr=False)
    _import_query: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)
        self._import_query = _TSQuery(self._language, _IMPORT_QUERY)

    def parse_file(self, path: Path) -> SourceModule:
        """Read and parse ``path``.

        Raises:
            ExtractionError: SOURCE_NOT_FOUND if the file cannot be read,
                PARSE_FAILED if it is not valid Go.
        """
        try:
            content = path.read_bytes()
        except FileNotFoundError as e:
            raise ExtractionError.source_not_found(str(path)) from e
        except OSError as e:
            raise ExtractionError.parse_failed(str(path), e.strerror or str(e)) from e
        return self.parse(path, content)

    def parse(self, path: Path, content: bytes) -> SourceModule:
        """Parse Go source ``content`` read from ``path``."""
        tree = self._parser.parse(content)
        root = tree.root_node

        error_line = self._first_error_line(root)
        if error_line is not None:
            raise ExtractionError.parse_failed(str(path), f"syntax error near line {error_line}")

        package_name = self._package_name(root)
        if package_name is None:
            raise ExtractionError.parse_failed(str(path), "missing package clause")

        return SourceModule(
            path=path,
            package_name=package_name,
            imports=tuple(self._extract_imports(root)),
            types=tuple(self._extract_types(root, path)),
        )

    # -------------------------------------------------------------------------
    # Tree inspection
    # -------------------------------------------------------------------------

    @staticmethod
    def _first_error_line(root: Any) -> int | None:
        """1-based line of the first ERROR/missing node, or None."""
        if not root.has_error:
            return None
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return int(node.start_point[0]) + 1
            if node.has_error:
                stack.extend(reversed(node.children))
        return int(root.start_point[0]) + 1

    @staticmethod
    def _package_name(root: Any) -> str | None:
        for child in root.children:
            if child.type == "package_clause":
                for sub in child.children:
                    if sub.type == "package_identifier":
                        return _text(sub) or None
        return None

    def _extract_imports(self, root: Any) -> list[ImportEntry]:
        cursor = _TSQueryCursor(self._import_query)
        matches: list[tuple[int, dict[str, list[Any]]]] = cursor.matches(root)

        specs = [node for _idx, captures in matches for node in captures.get("import_node", [])]
        specs.sort(key=lambda n: n.start_byte)

        imports: list[ImportEntry] = []
        for spec in specs:
            entry = self._process_import_spec(spec)
            if entry is not None:
                imports.append(entry)
        return imports

    @staticmethod
    def _process_import_spec(node: Any) -> ImportEntry | None:
        """Turn one import_spec into an entry; dot and blank imports bind no alias."""
        path_node = node.child_by_field_name("path")
        if path_node is None:
            return None
        try:
            module_path = unquote_go_string(_text(path_node))
        except ValueError:
            return None

        name_node = node.child_by_field_name("name")
        if name_node is None:
            return ImportEntry(alias=module_path.rsplit("/", 1)[-1], module_path=module_path)
        if name_node.type != "package_identifier":
            return None
        return ImportEntry(alias=_text(name_node), module_path=module_path)

    def _extract_types(self, root: Any, path: Path) -> list[TypeDeclaration]:
        types: list[TypeDeclaration] = []
        for decl in root.children:
            if decl.type != "type_declaration":
                continue
            for spec in decl.children:
                # type_alias covers `type A = struct{...}`
                if spec.type not in ("type_spec", "type_alias"):
                    continue
                body = spec.child_by_field_name("type")
                if body is None or body.type != "struct_type":
                    continue
                types.append(
                    TypeDeclaration(
                        name=_text(spec.child_by_field_name("name")),
                        fields=tuple(self._extract_fields(body)),
                        source_path=path,
                        line=spec.start_point[0] + 1,
                    )
                )
        return types

    def _extract_fields(self, struct_node: Any) -> list[FieldDeclaration]:
        field_list = next(
            (c for c in struct_node.children if c.type == "field_declaration_list"), None
        )
        if field_list is None:
            return []

        fields: list[FieldDeclaration] = []
        for node in field_list.children:
            if node.type != "field_declaration":
                continue
            names = tuple(_text(n) for n in node.children_by_field_name("name"))

            raw_tag: str | None = None
            tag_node = node.child_by_field_name("tag")
            if tag_node is not None and tag_node.type in _STRING_LITERALS:
                try:
                    raw_tag = unquote_go_string(_text(tag_node))
                except ValueError:
                    raw_tag = None

            fields.append(
                FieldDeclaration(
                    names=names,
                    raw_tag=raw_tag,
                    tags=parse_struct_tag(raw_tag) if raw_tag else {},
                    embedded=None if names else self._embedded_ref(node),
                    line=node.start_point[0] + 1,
                )
            )
        return fields

    @staticmethod
    def _embedded_ref(node: Any) -> TypeRef | None:
        """Type reference of an anonymous field: ``T``, ``*T``, ``pkg.T`` or ``*pkg.T``."""
        pointer = any(c.type == "*" for c in node.children)
        type_node = node.child_by_field_name("type")
        while type_node is not None and type_node.type in ("pointer_type", "generic_type"):
            if type_node.type == "pointer_type":
                pointer = True
                type_node = next((c for c in type_node.named_children), None)
            else:
                type_node = type_node.child_by_field_name("type")

        if type_node is None:
            return None
        if type_node.type == "type_identifier":
            return TypeRef(name=_text(type_node), pointer=pointer)
        if type_node.type == "qualified_type":
            package = type_node.child_by_field_name("package")
            name = type_node.child_by_field_name("name")
            if package is None or name is None:
                return None
            return TypeRef(name=_text(name), package=_text(package), pointer=pointer)
        return None
