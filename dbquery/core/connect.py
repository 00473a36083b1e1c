"""
MySQL connection helpers.

Uses pymysql. The template engine only needs a connection for its
``escape_string`` method, which honours the server's SQL mode (for example
``NO_BACKSLASH_ESCAPES``); ``connection_escaper`` adapts one to the
``escape(str) -> str`` callable the engine expects.
"""

import logging
from typing import Any

import pymysql

from dbquery.core.config import settings
from dbquery.engines.sql.formatter import EscapeFunc

_log = logging.getLogger(__name__)


def connect(**overrides: Any) -> pymysql.connections.Connection:
    """
    Open a MySQL connection from settings (MYSQL_HOST, MYSQL_PORT, ...).

    Keyword arguments override individual ``pymysql.connect`` parameters,
    e.g. ``connect(database="other")``.
    """
    params = {**settings.mysql_connect_kwargs, **overrides}
    for name in ("host", "user", "database"):
        if not params.get(name):
            raise ValueError(f"MySQL connection requires {name}")
    _log.info(
        "Opening MySQL connection to %s:%s/%s",
        params["host"],
        params["port"],
        params["database"],
    )
    return pymysql.connect(**params)


def connection_escaper(conn: Any) -> EscapeFunc:
    """Return an escape function bound to *conn*'s ``escape_string``."""
    escape = getattr(conn, "escape_string", None)
    if not callable(escape):
        raise TypeError(
            f"{type(conn).__name__} does not provide escape_string(); "
            "pass a pymysql connection"
        )
    return escape
