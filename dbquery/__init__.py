"""
dbquery: build MySQL queries from templates with typed placeholders
(``?``, ``?d``, ``?f``, ``?a``, ``?#``) and ``{ ... }`` conditional blocks.
"""

from dbquery.database import Database
from dbquery.engines.sql import (
    SKIP,
    PlaceholderKind,
    QueryTemplateEngine,
    build_query,
    parse_placeholders,
)
from dbquery.engines.sql.errors import QueryBuildError

__all__ = [
    "Database",
    "QueryTemplateEngine",
    "QueryBuildError",
    "PlaceholderKind",
    "build_query",
    "parse_placeholders",
    "SKIP",
]
