"""Contract tests for adapter protocol compliance."""

from __future__ import annotations

import pytest

from row_mapper.adapters.protocol import Adapter
from row_mapper.adapters.sqlite import SqliteAdapter
from row_mapper.core.connection import ConnectionConfig


class TestSqliteAdapterProtocol:
    def test_implements_protocol(self) -> None:
        adapter = SqliteAdapter()
        assert isinstance(adapter, Adapter)

    def test_paramstyle(self) -> None:
        adapter = SqliteAdapter()
        assert adapter.paramstyle == "qmark"

    def test_lifecycle(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteAdapter()
        conn = adapter.connect(sqlite_config)
        assert conn is not None

        cursor = conn.cursor()
        cursor.execute("SELECT ? AS val", (1,))
        assert cursor.description[0][0] == "val"
        assert cursor.fetchone() == (1,)
        cursor.close()

        adapter.close(conn)


# --- PostgreSQL protocol compliance ---


class TestPostgresqlAdapterProtocol:
    def test_implements_protocol(self) -> None:
        from row_mapper.adapters.postgresql import PostgresqlAdapter

        adapter = PostgresqlAdapter()
        assert isinstance(adapter, Adapter)

    def test_paramstyle(self) -> None:
        from row_mapper.adapters.postgresql import PostgresqlAdapter

        adapter = PostgresqlAdapter()
        assert adapter.paramstyle == "format"

    def test_conninfo(self) -> None:
        from row_mapper.adapters.postgresql import _build_conninfo

        config = ConnectionConfig(
            driver="postgresql", host="db", port=5432, user="app", database="shop"
        )
        assert _build_conninfo(config) == "host=db port=5432 user=app dbname=shop"


# --- MySQL protocol compliance ---


class TestMysqlAdapterProtocol:
    def test_implements_protocol(self) -> None:
        from row_mapper.adapters.mysql import MysqlAdapter

        adapter = MysqlAdapter()
        assert isinstance(adapter, Adapter)

    def test_paramstyle(self) -> None:
        from row_mapper.adapters.mysql import MysqlAdapter

        adapter = MysqlAdapter()
        assert adapter.paramstyle == "format"


# --- Oracle protocol compliance ---


class TestOracleAdapterProtocol:
    def test_implements_protocol(self) -> None:
        from row_mapper.adapters.oracle import OracleAdapter

        adapter = OracleAdapter()
        assert isinstance(adapter, Adapter)

    def test_paramstyle(self) -> None:
        from row_mapper.adapters.oracle import OracleAdapter

        adapter = OracleAdapter()
        assert adapter.paramstyle == "numeric"

    @pytest.mark.parametrize(("host", "port", "expected"), [("db", 1521, "db:1521/xe")])
    def test_dsn(self, host: str, port: int, expected: str) -> None:
        from row_mapper.adapters.oracle import _build_dsn

        config = ConnectionConfig(driver="oracle", host=host, port=port, database="xe")
        assert _build_dsn(config) == expected
