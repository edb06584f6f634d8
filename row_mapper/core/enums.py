"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(str, Enum):
    """Supported database backends.

    The value doubles as the adapter module name under ``row_mapper.adapters``.
    """

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"

    @property
    def adapter_path(self) -> tuple[str, str]:
        """Return ``(module_path, class_name)`` of the backend's adapter."""
        return f"row_mapper.adapters.{self.value}", f"{self.name.capitalize()}Adapter"
