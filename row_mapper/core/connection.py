"""Connection configuration and scoped acquisition.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager opens one driver connection per ``acquire()`` and closes
it when the ``with`` block exits, whatever the outcome.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel

from row_mapper.core.enums import DatabaseBackend
from row_mapper.core.exceptions import AdapterError, ConnectionError  # noqa: A004

if TYPE_CHECKING:
    from row_mapper.adapters.protocol import Adapter

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: DatabaseBackend
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    extra: dict[str, Any] = {}


@runtime_checkable
class ConnectionProvider(Protocol):
    """Anything that hands out DB-API connections for the duration of a block."""

    @property
    def paramstyle(self) -> str:
        """DB-API paramstyle of the connections: 'qmark', 'format' or 'numeric'."""
        ...

    def acquire(self) -> Any:
        """Return a context manager yielding a DB-API connection."""
        ...


def _load_adapter(driver: DatabaseBackend) -> Adapter:
    """Load the adapter for a backend."""
    module_path, cls_name = driver.adapter_path
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver.value}': {e}") from e


class ConnectionManager:
    """Connection provider backed by a driver adapter.

    No pooling: every acquisition opens a fresh connection and releases it
    on exit from the ``with`` block.
    """

    def __init__(self, config: ConnectionConfig, adapter: Adapter | None = None) -> None:
        self.config = config
        self._adapter = adapter if adapter is not None else _load_adapter(config.driver)

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    @property
    def paramstyle(self) -> str:
        return str(self._adapter.paramstyle)

    @contextmanager
    def acquire(self) -> Iterator[Any]:
        """Open a connection and close it when the block exits."""
        try:
            connection = self._adapter.connect(self.config)
        except Exception as e:
            raise ConnectionError(
                f"Cannot connect to {self.config.driver.value} database "
                f"'{self.config.database}': {e}"
            ) from e
        logger.debug("Acquired %s connection", self.config.driver.value)
        try:
            yield connection
        finally:
            self._adapter.close(connection)
            logger.debug("Released %s connection", self.config.driver.value)
