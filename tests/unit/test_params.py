"""Unit tests for placeholder normalization."""

from __future__ import annotations

import pytest

from row_mapper.core.params import count_placeholders, normalize_params


class TestNormalizeParams:
    def test_qmark_passthrough(self) -> None:
        sql = "SELECT * FROM users WHERE id = ?"
        assert normalize_params(sql, "qmark") == sql

    def test_format_conversion(self) -> None:
        sql = "SELECT * FROM users WHERE id = ?"
        expected = "SELECT * FROM users WHERE id = %s"
        assert normalize_params(sql, "format") == expected

    def test_numeric_conversion(self) -> None:
        sql = "SELECT * FROM users WHERE id = ? AND name = ?"
        expected = "SELECT * FROM users WHERE id = :1 AND name = :2"
        assert normalize_params(sql, "numeric") == expected

    def test_string_literal_exclusion(self) -> None:
        sql = "SELECT * FROM t WHERE col = 'why?' AND id = ?"
        expected = "SELECT * FROM t WHERE col = 'why?' AND id = :1"
        assert normalize_params(sql, "numeric") == expected

    def test_doubled_quote_in_literal(self) -> None:
        sql = "SELECT * FROM t WHERE col = 'it''s?' AND id = ?"
        expected = "SELECT * FROM t WHERE col = 'it''s?' AND id = %s"
        assert normalize_params(sql, "format") == expected

    def test_quoted_identifier_exclusion(self) -> None:
        sql = 'SELECT "name?" FROM t WHERE id = ?'
        expected = 'SELECT "name?" FROM t WHERE id = :1'
        assert normalize_params(sql, "numeric") == expected

    def test_line_comment_exclusion(self) -> None:
        sql = "SELECT * FROM t -- which one?\nWHERE id = ?"
        expected = "SELECT * FROM t -- which one?\nWHERE id = %s"
        assert normalize_params(sql, "format") == expected

    def test_block_comment_exclusion(self) -> None:
        sql = "SELECT /* id?\n or name? */ id FROM t WHERE id = ?"
        expected = "SELECT /* id?\n or name? */ id FROM t WHERE id = :1"
        assert normalize_params(sql, "numeric") == expected

    def test_format_escapes_percent(self) -> None:
        sql = "SELECT * FROM t WHERE name LIKE 'A%' AND id = ?"
        expected = "SELECT * FROM t WHERE name LIKE 'A%%' AND id = %s"
        assert normalize_params(sql, "format") == expected

    def test_no_params(self) -> None:
        sql = "SELECT 1"
        assert normalize_params(sql, "numeric") == sql

    def test_unsupported_paramstyle(self) -> None:
        with pytest.raises(ValueError, match="pyformat"):
            normalize_params("SELECT ?", "pyformat")

    def test_cache_returns_same_result(self) -> None:
        sql = "SELECT * FROM t WHERE id = ?"
        result1 = normalize_params(sql, "format")
        result2 = normalize_params(sql, "format")
        assert result1 == result2


class TestCountPlaceholders:
    def test_counts_outside_literals(self) -> None:
        assert count_placeholders("SELECT * FROM t WHERE a = ? AND b = '?' AND c = ?") == 2

    def test_ignores_comments_and_identifiers(self) -> None:
        sql = 'SELECT "a?" FROM t /* b? */ WHERE c = ? -- d?'
        assert count_placeholders(sql) == 1

    def test_zero(self) -> None:
        assert count_placeholders("DELETE FROM t") == 0
