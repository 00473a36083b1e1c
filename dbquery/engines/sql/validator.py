"""
Structural checks for query templates, run before any substitution.

Conditional blocks (``{ ... }``) may not nest and every ``{`` needs a ``}``.
Nothing else about the surrounding SQL is inspected.
"""

import re

from dbquery.engines.sql.errors import (
    NestedFragmentError,
    TemplateFormatError,
    UnbalancedFragmentError,
)

# A block whose body holds another complete {...} pair
_NESTED_FRAGMENT_RE = re.compile(r"\{[^{}]*\{[^{}]*\}[^{}]*\}")


def validate_template(template: str) -> None:
    """Raise ``NestedFragmentError`` or ``UnbalancedFragmentError`` for a
    malformed template; return ``None`` otherwise.

    The nesting check runs first, so ``"{a {b} c}"`` reports nesting even
    though its braces are balanced.
    """
    if _NESTED_FRAGMENT_RE.search(template):
        raise NestedFragmentError("Conditional block must not be nested.")
    opened = template.count("{")
    closed = template.count("}")
    if opened != closed:
        raise UnbalancedFragmentError(
            f"Conditional block must be closed: found {opened} '{{' "
            f"and {closed} '}}'."
        )


def is_valid_template(template: str) -> bool:
    try:
        validate_template(template)
    except TemplateFormatError:
        return False
    return True
