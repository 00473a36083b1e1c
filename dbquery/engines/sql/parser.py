"""
Token grammar for query templates.

Placeholders::

    ?    value, formatted by its Python type
    ?d   integer
    ?f   float
    ?a   array (list -> "1, 2"; mapping -> "`k` = 1, `j` = 'x'")
    ?#   identifier or list of identifiers

Conditional blocks are ``{ ... }`` spans, one level deep. A block is
dropped as a whole when any of its placeholders receives the skip marker.

``compile_template`` validates a template and splits it into literal text,
``Placeholder`` and ``Fragment`` parts; ``parse_placeholders`` lists the
placeholder kinds in the order they consume arguments.
"""

import re
from enum import Enum
from typing import NamedTuple, Union

from dbquery.engines.sql.validator import validate_template

PLACEHOLDER_PATTERN = r"\?[dfa#]?"
FRAGMENT_PATTERN = r"\{([^{}]*)\}"

_PLACEHOLDER_RE = re.compile(PLACEHOLDER_PATTERN)
_TOKEN_RE = re.compile(f"{PLACEHOLDER_PATTERN}|{FRAGMENT_PATTERN}")


class PlaceholderKind(str, Enum):
    """Placeholder kinds, valued by their token text."""

    DEFAULT = "?"
    INT = "?d"
    FLOAT = "?f"
    ARRAY = "?a"
    IDENTIFIER = "?#"


class Placeholder(NamedTuple):
    kind: PlaceholderKind
    offset: int  # start of the token within its enclosing text


class Fragment(NamedTuple):
    """A ``{ ... }`` block; ``body`` excludes the braces."""

    body: str
    parts: tuple[Union[str, Placeholder], ...]
    offset: int

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(p for p in self.parts if isinstance(p, Placeholder))


Part = Union[str, Placeholder, Fragment]


class CompiledTemplate(NamedTuple):
    source: str
    parts: tuple[Part, ...]

    @property
    def placeholder_count(self) -> int:
        count = 0
        for part in self.parts:
            if isinstance(part, Placeholder):
                count += 1
            elif isinstance(part, Fragment):
                count += len(part.placeholders)
        return count


def _split_placeholders(text: str) -> tuple[Union[str, Placeholder], ...]:
    parts: list[Union[str, Placeholder]] = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(text):
        if m.start() > pos:
            parts.append(text[pos : m.start()])
        parts.append(Placeholder(PlaceholderKind(m.group(0)), m.start()))
        pos = m.end()
    if pos < len(text):
        parts.append(text[pos:])
    return tuple(parts)


def compile_template(template: str) -> CompiledTemplate:
    """Validate *template* and split it into parts.

    Raises ``TemplateFormatError`` subclasses for malformed blocks.
    """
    validate_template(template)

    parts: list[Part] = []
    pos = 0
    for m in _TOKEN_RE.finditer(template):
        if m.start() > pos:
            parts.append(template[pos : m.start()])
        token = m.group(0)
        if token.startswith("{"):
            body = m.group(1)
            parts.append(Fragment(body, _split_placeholders(body), m.start()))
        else:
            parts.append(Placeholder(PlaceholderKind(token), m.start()))
        pos = m.end()
    if pos < len(template):
        parts.append(template[pos:])
    return CompiledTemplate(template, tuple(parts))


def parse_placeholders(template: str) -> list[PlaceholderKind]:
    """
    Placeholder kinds in *template*, in argument order.

    Placeholders inside conditional blocks are included: a block consumes
    its arguments whether or not it is emitted.
    """
    kinds: list[PlaceholderKind] = []
    for part in compile_template(template).parts:
        if isinstance(part, Placeholder):
            kinds.append(part.kind)
        elif isinstance(part, Fragment):
            kinds.extend(p.kind for p in part.placeholders)
    return kinds
