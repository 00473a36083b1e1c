"""
SQL query template engine.

Exports: QueryTemplateEngine, build_query, parse_placeholders, SKIP.
"""

from dbquery.engines.sql.parser import PlaceholderKind, parse_placeholders
from dbquery.engines.sql.template_engine import SKIP, QueryTemplateEngine, build_query

__all__ = [
    "QueryTemplateEngine",
    "build_query",
    "parse_placeholders",
    "PlaceholderKind",
    "SKIP",
]
