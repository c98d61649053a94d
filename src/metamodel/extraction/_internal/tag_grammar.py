"""Per-namespace struct tag grammars.

List grammar (``json``, ``bson``, ``yaml``, ...)::

    json:"user_name,omitempty"   -> user_name
    json:"-"                     -> excluded
    json:",omitempty"            -> absent

Directive grammar (``gorm``)::

    gorm:"column:user_name;not null"   -> user_name
    gorm:"many2many:user_roles"        -> user_roles
    gorm:"primaryKey" json:"id"        -> id  (secondary namespace)
    gorm:"->"                          -> excluded (read-only)
    gorm:"not null"                    -> absent
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from metamodel.config.constants import (
    DEFAULT_DIRECTIVE_KEYS,
    DEFAULT_EMBEDDED_MARKER,
    DEFAULT_SECONDARY_NAMESPACE,
    EXCLUDE_MARKER,
    READ_ONLY_MARKER,
)
from metamodel.config.models import GrammarConfig
from metamodel.extraction.models import TagDirective

_EXCLUDED_NAMES = frozenset({EXCLUDE_MARKER, READ_ONLY_MARKER})


class TagGrammar(ABC):
    """Parses one namespace of a field's struct tag."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    @abstractmethod
    def parse(self, tags: Mapping[str, str]) -> TagDirective:
        """Resolve the canonical name of a field from its parsed tag."""

    def inlines_embedded(self, tags: Mapping[str, str]) -> bool:  # noqa: ARG002
        """Whether an anonymous field carrying ``tags`` is flattened into its parent."""
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.namespace!r})"


class ListGrammar(TagGrammar):
    """Comma-separated option list; the first item is the name."""

    def parse(self, tags: Mapping[str, str]) -> TagDirective:
        raw = tags.get(self.namespace, "")
        if not raw:
            return TagDirective.absent()
        name = raw.split(",", 1)[0].strip()
        if name == EXCLUDE_MARKER:
            return TagDirective.exclude()
        if not name:
            return TagDirective.absent()
        return TagDirective.named(name)


class DirectiveGrammar(TagGrammar):
    """Semicolon-separated ``key:value`` directives with a secondary fallback."""

    def __init__(
        self,
        namespace: str,
        *,
        keys: Sequence[str] = DEFAULT_DIRECTIVE_KEYS,
        secondary: TagGrammar | None = None,
        embedded_marker: str = DEFAULT_EMBEDDED_MARKER,
    ) -> None:
        super().__init__(namespace)
        self.prefixes = tuple(f"{key}:" for key in keys)
        self.secondary = secondary or ListGrammar(DEFAULT_SECONDARY_NAMESPACE)
        self.embedded_marker = embedded_marker

    def parse(self, tags: Mapping[str, str]) -> TagDirective:
        raw = tags.get(self.namespace, "")
        if not raw:
            return TagDirective.absent()
        directives = [d.strip() for d in raw.split(";")]

        if raw.strip() == EXCLUDE_MARKER:
            return TagDirective.exclude()
        # "->" reads like a column prefix; it must win over directive matching
        if any(_is_read_only(d) for d in directives):
            return TagDirective.exclude()

        for directive in directives:
            for prefix in self.prefixes:
                if directive.startswith(prefix):
                    name = directive[len(prefix) :].strip()
                    if name in _EXCLUDED_NAMES:
                        return TagDirective.exclude()
                    if not name:
                        return TagDirective.absent()
                    return TagDirective.named(name)

        return self.secondary.parse(tags)

    def inlines_embedded(self, tags: Mapping[str, str]) -> bool:
        return self.embedded_marker in tags.get(self.namespace, "")


def _is_read_only(directive: str) -> bool:
    return directive == READ_ONLY_MARKER or directive.startswith(READ_ONLY_MARKER + ":")


def grammar_for(tag: str, config: GrammarConfig | None = None) -> TagGrammar:
    """Select the grammar for namespace ``tag``."""
    config = config or GrammarConfig()
    if tag in config.directive_namespaces:
        return DirectiveGrammar(
            tag,
            keys=config.directive_keys,
            secondary=ListGrammar(config.secondary_namespace),
            embedded_marker=config.embedded_marker,
        )
    return ListGrammar(tag)
