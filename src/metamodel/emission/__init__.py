"""Emission module - Go code generation from extraction results.

Public API is in `metamodel.emission.ops`:
- generate: extract one Go file and write its metamodel and helper files
"""

from metamodel.emission.naming import (
    default_table_name,
    package_name_for,
    table_name_for,
    to_snake_case,
)
from metamodel.emission.ops import GenerationReport, generate, resolve_destination
from metamodel.emission.render import (
    format_go,
    render_metamodel,
    render_support_files,
)

__all__ = [
    # Operations
    "generate",
    "resolve_destination",
    "GenerationReport",
    # Rendering
    "render_metamodel",
    "render_support_files",
    "format_go",
    # Naming
    "to_snake_case",
    "default_table_name",
    "table_name_for",
    "package_name_for",
]
