"""Unit tests for the Database facade."""

from unittest.mock import MagicMock

import pytest

from dbquery import SKIP, Database, QueryBuildError


class TestDatabase:
    def test_build_query_without_connection(self):
        db = Database()
        sql = db.build_query("UPDATE ?# SET ?a WHERE id = ?d", ["products", {"name": "Product 1", "price": 100}, 1])
        assert sql == "UPDATE `products` SET `name` = 'Product 1', `price` = 100 WHERE id = 1"

    def test_skip(self):
        db = Database()
        assert db.skip() is SKIP
        assert db.build_query("SELECT * FROM products WHERE id = 1{ AND price > ?d}", [db.skip()]) == (
            "SELECT * FROM products WHERE id = 1"
        )
        assert db.build_query("SELECT * FROM products WHERE id = 1{ AND price > ?d}", [100]) == (
            "SELECT * FROM products WHERE id = 1 AND price > 100"
        )

    def test_connection_escape_is_used(self):
        conn = MagicMock()
        conn.escape_string.side_effect = lambda s: s.replace("'", "''")
        db = Database(conn)

        assert db.build_query("SELECT ?# FROM t WHERE name = ?", ["name", "O'Brien"]) == (
            "SELECT `name` FROM t WHERE name = 'O''Brien'"
        )
        assert [c.args[0] for c in conn.escape_string.call_args_list] == ["name", "O'Brien"]
        assert db.connection is conn

    def test_connection_not_used_for_queries(self):
        conn = MagicMock()
        conn.escape_string.side_effect = lambda s: s
        Database(conn).build_query("SELECT ?d", [1])
        conn.cursor.assert_not_called()

    def test_escape_callable(self):
        db = Database(escape=str.upper)
        assert db.build_query("SELECT ?", ["abc"]) == "SELECT 'ABC'"

    def test_connection_and_escape_exclusive(self):
        with pytest.raises(ValueError):
            Database(MagicMock(), escape=str.upper)

    def test_unbalanced_block(self):
        with pytest.raises(QueryBuildError):
            Database().build_query("SELECT name FROM users WHERE id = 1{ AND price > ?d", [None])
