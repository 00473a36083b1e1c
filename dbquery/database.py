"""
``Database``: the query builder bound to a MySQL connection.

    db = Database(connect())
    sql = db.build_query(
        "SELECT ?# FROM users WHERE id = ?d{ AND block = ?d}",
        [["name", "email"], 7, db.skip()],
    )
    # SELECT `name`, `email` FROM users WHERE id = 7
"""

from collections.abc import Iterable
from typing import Any

from dbquery.core.connect import connection_escaper
from dbquery.engines.sql import SKIP, QueryTemplateEngine
from dbquery.engines.sql.formatter import EscapeFunc


class Database:
    """
    Database(connection=None, *, escape=None)

    Strings and identifiers are escaped with ``connection.escape_string`` when
    a connection is given, with *escape* when that is given instead, and with
    ``pymysql.converters.escape_string`` otherwise. The connection is never
    used to run queries.
    """

    def __init__(self, connection: Any = None, *, escape: EscapeFunc | None = None) -> None:
        if connection is not None and escape is not None:
            raise ValueError("Pass either connection or escape, not both")
        self._connection = connection
        if connection is not None:
            escape = connection_escaper(connection)
        self._engine = QueryTemplateEngine(escape)

    @property
    def connection(self) -> Any:
        return self._connection

    def build_query(self, query: str, args: Iterable[Any] = ()) -> str:
        """Return *query* with *args* substituted into its placeholders."""
        return self._engine.build(query, args)

    def skip(self) -> Any:
        """Marker argument that drops the conditional block it is passed to."""
        return SKIP
