"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from row_mapper.core.connection import ConnectionConfig
from tests.fakes import FakeConnection, FakeConnectionProvider, FakeCursor


@pytest.fixture
def sqlite_config(tmp_path: Path) -> ConnectionConfig:
    """SQLite file-backed connection config.

    Every acquisition opens a fresh connection, so an in-memory database
    would not survive between calls.
    """
    return ConnectionConfig(driver="sqlite", database=str(tmp_path / "test.db"))


@pytest.fixture
def fake_provider():
    """Build a FakeConnectionProvider over scripted rows.

    Usage:
        provider = fake_provider(["id", "name"], [("7", "Ann")])
    """

    def _build(
        columns: list[str] | None = None,
        rows: list[tuple[Any, ...]] | None = None,
        *,
        fail_cursor: bool = False,
        fail_execute: bool = False,
        fail_fetch: bool = False,
    ) -> FakeConnectionProvider:
        cursor = FakeCursor(
            columns or [], rows or [], fail_execute=fail_execute, fail_fetch=fail_fetch
        )
        return FakeConnectionProvider(FakeConnection(cursor, fail_cursor=fail_cursor))

    return _build
