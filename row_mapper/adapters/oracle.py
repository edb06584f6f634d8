"""Oracle adapter using oracledb."""

from __future__ import annotations

from typing import Any

from row_mapper.core.connection import ConnectionConfig


def _build_dsn(config: ConnectionConfig) -> str:
    """Build an Oracle DSN string from config fields (host:port/database)."""
    return f"{config.host}:{config.port}/{config.database}"


class OracleAdapter:
    """Oracle adapter using oracledb.

    Oracle reports column labels in upper case; ResultRow lookups fall back
    to case-insensitive matching, so no row factory is installed here.
    """

    @property
    def paramstyle(self) -> str:
        return "numeric"

    def connect(self, config: ConnectionConfig) -> Any:
        """Open an Oracle connection."""
        import oracledb

        return oracledb.connect(
            user=config.user,
            password=config.password,
            dsn=_build_dsn(config),
            **config.extra,
        )

    def close(self, connection: Any) -> None:
        """Close an Oracle connection."""
        connection.close()
