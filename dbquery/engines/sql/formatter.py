"""
Per-placeholder value formatting for the query template engine.

Each formatter turns one argument into SQL text or raises a typed
``QueryBuildError``. String and identifier escaping is delegated to an
``escape`` callable (MySQL ``real_escape_string`` semantics); the default is
``pymysql.converters.escape_string``, and ``dbquery.core.connect`` provides
one bound to a live connection.
"""

import math
import re
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from pymysql.converters import escape_string

from dbquery.engines.sql.errors import (
    EmptyArrayError,
    InvalidIdentifierError,
    NullArgumentError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from dbquery.engines.sql.parser import PlaceholderKind

EscapeFunc = Callable[[str], str]

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")

# Leading numeric part of a string, e.g. "12.5kg" -> "12.5"
_NUMERIC_PREFIX_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# String keys that count as positional in an ?a mapping ("0", "7", "-3"; not "07")
_INT_KEY_RE = re.compile(r"0|-?[1-9][0-9]*")

# Integral floats below this are written without a fractional part
_INTEGRAL_FLOAT_LIMIT = 1e15


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset, Mapping))


def _is_finite(value: float | Decimal) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def _float_text(value: float) -> str:
    """29.0 -> "29", 29.8 -> "29.8", 1e20 -> "1e+20"."""
    if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def _numeric_prefix(text: str) -> str | None:
    m = _NUMERIC_PREFIX_RE.match(text)
    return m.group(0) if m else None


def _parse_int(text: str) -> int:
    """Integer value of the numeric prefix of *text*; 0 if there is none."""
    prefix = _numeric_prefix(text)
    if prefix is None:
        return 0
    try:
        return int(prefix)
    except ValueError:
        pass
    number = float(prefix)
    if not math.isfinite(number):
        raise TypeMismatchError(f"Value {text!r} is out of integer range.")
    return int(number)


def _parse_float(text: str) -> float:
    prefix = _numeric_prefix(text)
    return float(prefix) if prefix is not None else 0.0


def _is_positional_key(key: Any) -> bool:
    if isinstance(key, int):
        return True
    return isinstance(key, str) and _INT_KEY_RE.fullmatch(key) is not None


def quote_identifier(name: Any, escape: EscapeFunc = escape_string) -> str:
    """Validate *name* against ``[A-Za-z0-9_]+`` and wrap it in backticks."""
    if not isinstance(name, str):
        raise TypeMismatchError(
            f"Identifier must be a string, got {type(name).__name__}."
        )
    if not _IDENTIFIER_RE.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid identifier: {name!r}.")
    return f"`{escape(name)}`"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_default(value: Any, escape: EscapeFunc = escape_string) -> str:
    """
    ``?``: None -> NULL, bool -> 1/0, str -> quoted and escaped,
    int/float/Decimal -> unquoted literal.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return f"'{escape(value)}'"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        if not _is_finite(value):
            raise UnsupportedTypeError(f"Non-finite number {value!r} is not supported.")
        return _float_text(value) if isinstance(value, float) else str(value)
    raise UnsupportedTypeError(f"Unsupported parameter type: {type(value).__name__}.")


def format_int(value: Any, escape: EscapeFunc = escape_string) -> str:
    """
    ``?d``: None -> NULL; otherwise coerced to an integer.
    Floats truncate toward zero; strings use their leading number ("abc" -> 0).
    """
    if value is None:
        return "NULL"
    if _is_collection(value):
        raise TypeMismatchError("Array parameter cannot be used as an integer.")
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, (float, Decimal)):
        if not _is_finite(value):
            raise TypeMismatchError(f"Non-finite number {value!r} cannot be used as an integer.")
        return str(int(value))
    if isinstance(value, str):
        return str(_parse_int(value))
    raise TypeMismatchError(f"Cannot use {type(value).__name__} as an integer.")


def format_float(value: Any, escape: EscapeFunc = escape_string) -> str:
    """
    ``?f``: None -> NULL; otherwise coerced to a float.
    """
    if value is None:
        return "NULL"
    if _is_collection(value):
        raise TypeMismatchError("Array parameter cannot be used as a float.")
    if isinstance(value, str):
        number = _parse_float(value)
    elif isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        raise TypeMismatchError(f"Cannot use {type(value).__name__} as a float.")
    if not math.isfinite(number):
        raise TypeMismatchError(f"Non-finite number {value!r} cannot be used as a float.")
    return _float_text(number)


def format_array(value: Any, escape: EscapeFunc = escape_string) -> str:
    """
    ``?a``: a non-empty list/tuple or mapping.

    Positional entries are formatted like ``?``; string keys produce
    `` `key` = value `` pairs (for ``SET`` clauses). Order is preserved.
    """
    if value is None:
        raise NullArgumentError("Array parameter cannot be NULL.")
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        raise TypeMismatchError(f"Array parameter expected, got {type(value).__name__}.")
    if not value:
        raise EmptyArrayError("Array parameter cannot be empty.")

    parts = []
    for key, item in items:
        if _is_positional_key(key):
            parts.append(format_default(item, escape))
        elif isinstance(key, str):
            parts.append(f"{quote_identifier(key, escape)} = {format_default(item, escape)}")
        else:
            raise TypeMismatchError(
                f"Array keys must be integers or strings, got {type(key).__name__}."
            )
    return ", ".join(parts)


def format_identifier(value: Any, escape: EscapeFunc = escape_string) -> str:
    """
    ``?#``: a name or a non-empty list of names, each backtick-quoted.
    For a mapping the values are used.
    """
    if value is None:
        raise NullArgumentError("Identifier parameter cannot be NULL.")
    if isinstance(value, str):
        return quote_identifier(value, escape)
    if isinstance(value, Mapping):
        names = list(value.values())
    elif isinstance(value, (list, tuple)):
        names = list(value)
    else:
        raise TypeMismatchError("Identifier parameter must be a string or an array.")
    if not names:
        raise EmptyArrayError("Identifier array cannot be empty.")
    return ", ".join(quote_identifier(name, escape) for name in names)


FORMATTERS: dict[PlaceholderKind, Callable[[Any, EscapeFunc], str]] = {
    PlaceholderKind.DEFAULT: format_default,
    PlaceholderKind.INT: format_int,
    PlaceholderKind.FLOAT: format_float,
    PlaceholderKind.ARRAY: format_array,
    PlaceholderKind.IDENTIFIER: format_identifier,
}


def format_value(
    value: Any,
    kind: PlaceholderKind | str,
    escape: EscapeFunc = escape_string,
) -> str:
    """Format *value* for a placeholder of *kind* (a ``PlaceholderKind`` or token text)."""
    return FORMATTERS[PlaceholderKind(kind)](value, escape)
