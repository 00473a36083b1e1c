"""
Query template engine: substitutes positional arguments into ``?``
placeholders and resolves ``{ ... }`` conditional blocks.

Arguments are consumed strictly left to right by an ``ArgumentCursor`` that
lives for one ``build`` call. A conditional block always consumes one
argument per placeholder it contains; if any of those arguments is
``SKIP`` the whole block renders as an empty string.

Note the positional rule when skipping: once ``SKIP`` is seen at the i-th
placeholder of a block, the arguments for the remaining placeholders of
that block are consumed without being looked at. ``"{ a = ?d AND b = ?d}"``
with ``[SKIP, 5]`` drops the block and also uses up the ``5``.

Performance: compiled templates are cached in an LRU dict keyed by template
source, so repeated builds of the same template skip validation and
tokenizing.
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterable, Sequence
from typing import Any

from pymysql.converters import escape_string

from dbquery.core.config import settings
from dbquery.engines.sql.errors import MisplacedSkipError, MissingArgumentError
from dbquery.engines.sql.formatter import EscapeFunc, format_value
from dbquery.engines.sql.parser import (
    CompiledTemplate,
    Fragment,
    PlaceholderKind,
    compile_template,
    parse_placeholders,
)

_log = logging.getLogger(__name__)

_template_cache: OrderedDict[str, CompiledTemplate] = OrderedDict()
_cache_lock = threading.Lock()


class _SkipMarker:
    """Type of ``SKIP``; only one instance ever exists."""

    _instance: "_SkipMarker | None" = None

    def __new__(cls) -> "_SkipMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __reduce__(self) -> tuple[type, tuple[()]]:
        return (_SkipMarker, ())


# Pass in place of an argument to drop the conditional block holding its placeholder.
SKIP = _SkipMarker()


class ArgumentCursor:
    """Index of the next argument to consume; never moves backwards.

    Skipping a block may move it past the end of the arguments. That only
    fails if a later placeholder then asks for a value.
    """

    def __init__(self, args: Sequence[Any]) -> None:
        self._args = args
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def peek(self) -> Any:
        if self._position >= len(self._args):
            raise MissingArgumentError(
                "Not enough parameters provided for placeholders: "
                f"no argument at position {self._position} ({len(self._args)} given)."
            )
        return self._args[self._position]

    def take(self) -> Any:
        value = self.peek()
        self._position += 1
        return value

    def advance_to(self, position: int) -> None:
        if position < self._position:
            raise ValueError(
                f"Argument cursor cannot move back from {self._position} to {position}"
            )
        self._position = position


def resolve_fragment(
    fragment: Fragment,
    cursor: ArgumentCursor,
    escape: EscapeFunc = escape_string,
) -> str:
    """Render *fragment* without its braces, or ``""`` if it is skipped.

    On return the cursor has advanced by exactly the number of placeholders
    in the block.
    """
    start = cursor.position
    total = len(fragment.placeholders)
    out: list[str] = []
    for part in fragment.parts:
        if isinstance(part, str):
            out.append(part)
            continue
        if cursor.peek() is SKIP:
            cursor.advance_to(start + total)
            _log.debug("Skipped conditional block at offset %d: {%s}", fragment.offset, fragment.body)
            return ""
        out.append(format_value(cursor.take(), part.kind, escape))
    return "".join(out)


def _resolve(compiled: CompiledTemplate, args: Sequence[Any], escape: EscapeFunc) -> str:
    cursor = ArgumentCursor(args)
    out: list[str] = []
    for part in compiled.parts:
        if isinstance(part, str):
            out.append(part)
        elif isinstance(part, Fragment):
            out.append(resolve_fragment(part, cursor, escape))
        else:
            value = cursor.take()
            if value is SKIP:
                raise MisplacedSkipError(
                    f"Skip marker at argument {cursor.position - 1} can only be "
                    "used inside a conditional block."
                )
            out.append(format_value(value, part.kind, escape))
    return "".join(out)


def _compile_cached(source: str) -> CompiledTemplate:
    """Return a compiled template from cache or compile & cache it."""
    max_size = settings.TEMPLATE_CACHE_MAX_SIZE
    if max_size <= 0:
        return compile_template(source)
    with _cache_lock:
        compiled = _template_cache.get(source)
        if compiled is not None:
            _template_cache.move_to_end(source)
            return compiled
    compiled = compile_template(source)
    with _cache_lock:
        _template_cache[source] = compiled
        while len(_template_cache) > max_size:
            evicted, _ = _template_cache.popitem(last=False)
            _log.debug("Evicted compiled template from cache: %.80s", evicted)
    return compiled


def clear_template_cache() -> None:
    with _cache_lock:
        _template_cache.clear()


class QueryTemplateEngine:
    """Builds SQL from placeholder templates and positional arguments."""

    def __init__(self, escape: EscapeFunc | None = None) -> None:
        self._escape: EscapeFunc = escape or escape_string

    def build(self, template: str, args: Iterable[Any] = ()) -> str:
        """Substitute *args* into *template* and return the final SQL.

        Raises a ``QueryBuildError`` subclass if the template is malformed,
        an argument is missing or an argument does not fit its placeholder.
        Extra arguments are ignored.
        """
        compiled = _compile_cached(template)
        sql = _resolve(compiled, tuple(args), self._escape)
        _log.debug("Built SQL: %s", sql)
        return sql

    def parse_placeholders(self, template: str) -> list[PlaceholderKind]:
        """Placeholder kinds in *template*, in the order they consume arguments."""
        return parse_placeholders(template)


def build_query(
    template: str,
    args: Iterable[Any] = (),
    *,
    escape: EscapeFunc | None = None,
) -> str:
    return QueryTemplateEngine(escape).build(template, args)
