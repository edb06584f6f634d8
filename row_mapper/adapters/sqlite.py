"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3

from row_mapper.core.connection import ConnectionConfig


class SqliteAdapter:
    """SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a connection to the configured database file."""
        return sqlite3.connect(config.database, **config.extra)

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()
