"""Naming conventions of generated code."""

from __future__ import annotations

from metamodel.config.constants import NAMESPACE_SUFFIX, TABLE_NAME_SUFFIX


def to_snake_case(name: str) -> str:
    """Lower-case ``name``, starting a new ``_`` segment at every upper-case rune.

    Acronyms are not grouped.

    >>> to_snake_case("GormTest")
    'gorm_test'
    >>> to_snake_case("UUID")
    'u_u_i_d'
    """
    out: list[str] = []
    for i, ch in enumerate(name):
        if ch.isupper():
            if i > 0:
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def default_table_name(type_name: str) -> str:
    return to_snake_case(type_name) + TABLE_NAME_SUFFIX


def table_name_for(type_name: str, override: str | None = None) -> str:
    """Table (or collection) name for a struct; ``override`` applies to every struct."""
    return override or default_table_name(type_name)


def package_name_for(namespace: str, override: str | None = None) -> str:
    """Go package of generated files: the extracted namespace or ``<override>_``."""
    if override:
        return override + NAMESPACE_SUFFIX
    return namespace
