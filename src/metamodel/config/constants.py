"""Configuration constants.

This module contains values that are protocol constraints of the Go toolchain
or naming conventions of the generated code. Defaults that users may change
live in models.py and only take their initial values from here.
"""

# =============================================================================
# Go Project Layout
# =============================================================================

MANIFEST_FILENAME = "go.mod"
"""Module manifest looked up in ancestor directories of the input file."""

SOURCE_SUFFIX = ".go"
"""Files parsed when scanning a package directory."""

# =============================================================================
# Tag Grammar Defaults
# =============================================================================

DEFAULT_TAG = "json"

DEFAULT_DIRECTIVE_NAMESPACES = ("gorm",)

DEFAULT_DIRECTIVE_KEYS = ("column", "many2many", "one2many")

DEFAULT_SECONDARY_NAMESPACE = "json"

DEFAULT_EMBEDDED_MARKER = "embedded"

EXCLUDE_MARKER = "-"
"""Canonical name that drops a field under either grammar."""

READ_ONLY_MARKER = "->"
"""Directive-grammar permission marker; such fields are never generated."""

# =============================================================================
# Generated Code Conventions
# =============================================================================

NAMESPACE_SUFFIX = "_"
"""Appended to the package name of generated files (e.g. models -> models_)."""

DEFAULT_OUTPUT_SUFFIX = "_metamodel.go"

TABLE_NAME_SUFFIX = "s"

COMMON_FILENAME = "common_metamodel.go"
GORM_OPERATOR_FILENAME = "gorm_operator_metamodel.go"
MONGO_OPERATOR_FILENAME = "mongo_operator_metamodel.go"
