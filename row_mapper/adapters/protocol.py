"""Database adapter protocol.

Every adapter module MUST implement this protocol so ConnectionManager can
treat all backends identically.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_mapper.core.connection import ConnectionConfig


@runtime_checkable
class Adapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """DB-API placeholder style: 'qmark' (?), 'format' (%s) or 'numeric' (:1)."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a new DB-API connection."""
        ...

    def close(self, connection: Any) -> None:
        """Close a connection opened by ``connect``."""
        ...
