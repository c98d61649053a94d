"""Go struct tag tokenizer.

A struct tag is the string literal after a field's type, conventionally a
space-separated list of ``key:"value"`` pairs::

    `gorm:"column:user_name;not null" json:"user_name,omitempty"`

``parse_struct_tag`` follows ``reflect.StructTag.Lookup``: keys are scanned
left to right, the first occurrence of a key wins, values are Go-unquoted,
and scanning stops at the first malformed pair.
"""

from __future__ import annotations

import re

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:"
    r"(?P<simple>[abfnrtv\\'\"])"
    r"|x(?P<hex>[0-9a-fA-F]{2})"
    r"|u(?P<u4>[0-9a-fA-F]{4})"
    r"|U(?P<u8>[0-9a-fA-F]{8})"
    r"|(?P<oct>[0-7]{3})"
    r")"
)


def unquote_go_string(literal: str) -> str:
    """Unquote a Go string literal (interpreted ``"..."`` or raw `` `...` ``).

    Raises:
        ValueError: If ``literal`` is not a well-formed Go string literal.
    """
    if len(literal) < 2:
        raise ValueError(f"not a string literal: {literal!r}")
    quote = literal[0]
    if quote != literal[-1] or quote not in ('"', "`"):
        raise ValueError(f"not a string literal: {literal!r}")
    body = literal[1:-1]
    if quote == "`":
        if "`" in body:
            raise ValueError(f"backquote inside raw string: {literal!r}")
        # Carriage returns are discarded from raw strings
        return body.replace("\r", "")

    out: list[str] = []
    pos = 0
    for m in _ESCAPE_RE.finditer(body):
        chunk = body[pos : m.start()]
        if "\\" in chunk or '"' in chunk or "\n" in chunk:
            raise ValueError(f"invalid interpreted string: {literal!r}")
        out.append(chunk)
        if m.group("simple"):
            out.append(_SIMPLE_ESCAPES[m.group("simple")])
        elif m.group("oct"):
            out.append(chr(int(m.group("oct"), 8)))
        else:
            digits = m.group("hex") or m.group("u4") or m.group("u8")
            out.append(chr(int(digits, 16)))
        pos = m.end()
    tail = body[pos:]
    if "\\" in tail or '"' in tail or "\n" in tail:
        raise ValueError(f"invalid interpreted string: {literal!r}")
    out.append(tail)
    return "".join(out)


def parse_struct_tag(tag: str) -> dict[str, str]:
    """Split a struct tag into ``{key: value}``.

    >>> parse_struct_tag('json:"id,omitempty" gorm:"primaryKey"')
    {'json': 'id,omitempty', 'gorm': 'primaryKey'}
    """
    result: dict[str, str] = {}
    seen: set[str] = set()
    rest = tag
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break

        # Key: non-control, non-space chars up to the colon
        i = 0
        while i < len(rest) and rest[i] > " " and rest[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(rest) or rest[i] != ":" or rest[i + 1] != '"':
            break
        key = rest[:i]
        rest = rest[i + 1 :]

        # Quoted value, honouring backslash escapes
        i = 1
        while i < len(rest) and rest[i] != '"':
            if rest[i] == "\\":
                i += 1
            i += 1
        if i >= len(rest):
            break
        quoted = rest[: i + 1]
        rest = rest[i + 1 :]

        if key in seen:
            continue
        seen.add(key)
        # An undecodable value hides the key but not the pairs after it
        try:
            result[key] = unquote_go_string(quoted)
        except ValueError:
            continue
    return result
