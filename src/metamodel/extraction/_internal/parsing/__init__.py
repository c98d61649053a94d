"""Tree-sitter parsing of Go declaration files."""

from metamodel.extraction._internal.parsing.struct_tag import (
    parse_struct_tag,
    unquote_go_string,
)
from metamodel.extraction._internal.parsing.treesitter import GoSourceParser

__all__ = [
    "GoSourceParser",
    "parse_struct_tag",
    "unquote_go_string",
]
