"""Unit tests for engines.sql.parser."""

import pytest

from dbquery.engines.sql import parse_placeholders
from dbquery.engines.sql.errors import NestedFragmentError
from dbquery.engines.sql.parser import (
    Fragment,
    Placeholder,
    PlaceholderKind,
    compile_template,
)


class TestCompileTemplate:
    def test_no_tokens(self):
        compiled = compile_template("SELECT 1")
        assert compiled.parts == ("SELECT 1",)
        assert compiled.placeholder_count == 0

    def test_placeholders_and_text(self):
        compiled = compile_template("WHERE id = ?d AND name = ?")
        assert compiled.parts == (
            "WHERE id = ",
            Placeholder(PlaceholderKind.INT, 11),
            " AND name = ",
            Placeholder(PlaceholderKind.DEFAULT, 25),
        )

    def test_unknown_specifier_is_default_placeholder(self):
        compiled = compile_template("?x")
        assert compiled.parts == (Placeholder(PlaceholderKind.DEFAULT, 0), "x")

    def test_fragment(self):
        compiled = compile_template("id = 1{ AND price > ?d}")
        assert compiled.parts[0] == "id = 1"
        fragment = compiled.parts[1]
        assert isinstance(fragment, Fragment)
        assert fragment.body == " AND price > ?d"
        assert fragment.offset == 6
        assert fragment.parts == (" AND price > ", Placeholder(PlaceholderKind.INT, 13))
        assert compiled.placeholder_count == 1

    def test_fragment_without_placeholders(self):
        compiled = compile_template("SELECT 1{ LIMIT 1}")
        assert compiled.parts[1] == Fragment(" LIMIT 1", (" LIMIT 1",), 8)
        assert compiled.parts[1].placeholders == ()

    def test_invalid_template_raises(self):
        with pytest.raises(NestedFragmentError):
            compile_template("{a {b}}")


class TestParsePlaceholders:
    def test_all_kinds(self):
        assert parse_placeholders("? ?d ?f ?a ?#") == [
            PlaceholderKind.DEFAULT,
            PlaceholderKind.INT,
            PlaceholderKind.FLOAT,
            PlaceholderKind.ARRAY,
            PlaceholderKind.IDENTIFIER,
        ]

    def test_includes_fragment_placeholders_in_order(self):
        kinds = parse_placeholders("SELECT ?# FROM t WHERE id = ?d{ AND a > ?f AND b IN (?a)}{ AND c = ?}")
        assert [k.value for k in kinds] == ["?#", "?d", "?f", "?a", "?"]

    def test_none(self):
        assert parse_placeholders("SELECT 1") == []

    def test_kind_values_are_tokens(self):
        assert PlaceholderKind("?d") is PlaceholderKind.INT
        assert PlaceholderKind.IDENTIFIER == "?#"
