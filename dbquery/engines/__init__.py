"""
Engines: SQL query templates (placeholders + conditional blocks).
"""

from dbquery.engines.sql import SKIP, QueryTemplateEngine, build_query, parse_placeholders

__all__ = [
    "QueryTemplateEngine",
    "build_query",
    "parse_placeholders",
    "SKIP",
]
