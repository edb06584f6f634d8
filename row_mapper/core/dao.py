"""Query façade.

A Dao binds positional arguments into a SQL template, executes it on a
connection acquired for the duration of the call, and materializes result
rows into instances of its target class.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from row_mapper.core.binder import Statement, bind_arguments, prepare
from row_mapper.core.connection import ConnectionConfig, ConnectionManager, ConnectionProvider
from row_mapper.core.exceptions import (
    BindError,
    ExecutionError,
    NotUniqueError,
    QueryExecutionError,
)
from row_mapper.mapping.materializer import RowMaterializer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Dao(Generic[T]):
    """Typed data access object for one target class.

    Args:
        target_class: Class that result rows are materialized into.
        connection_provider: Source of scoped connections.
        materializer: Row materializer; defaults to ``RowMaterializer(target_class)``.
    """

    def __init__(
        self,
        target_class: type[T],
        connection_provider: ConnectionProvider,
        *,
        materializer: RowMaterializer[T] | None = None,
    ) -> None:
        self._target_class = target_class
        self._connection_provider = connection_provider
        self._materializer = materializer or RowMaterializer(target_class)

    @classmethod
    def from_config(cls, target_class: type[T], config: ConnectionConfig) -> Dao[T]:
        """Create a Dao from a ConnectionConfig.

        Args:
            target_class: Class that result rows are materialized into.
            config: ConnectionConfig instance

        Returns:
            Dao instance
        """
        return cls(target_class, ConnectionManager(config))

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def _prepare(self, connection: Any, sql: str, args: tuple[Any, ...]) -> Statement:
        statement = prepare(connection, sql, self._connection_provider.paramstyle)
        try:
            return bind_arguments(statement, args)
        except BindError:
            statement.close()
            raise

    def execute(self, sql: str, *args: Any) -> None:
        """Execute a statement that returns no rows (INSERT/UPDATE/DDL) and commit.

        Any failure, from acquisition and binding through commit, is raised
        as ExecutionError.
        """
        try:
            with self._connection_provider.acquire() as conn:
                statement = self._prepare(conn, sql, args)
                try:
                    affected = statement.execute_update()
                    conn.commit()
                finally:
                    statement.close()
        except Exception as e:
            raise ExecutionError(str(e)) from e
        logger.debug("Executed statement, %d row(s) affected", affected)

    def find_all(self, sql: str, *args: Any) -> list[T]:
        """Fetch all matching rows as target instances, in result order."""
        # Resolve before touching the database so an unusable type fails fast
        descriptor = self._materializer.describe()
        with self._connection_provider.acquire() as conn:
            statement = self._prepare(conn, sql, args)
            try:
                try:
                    cursor = statement.execute_query()
                except Exception as e:
                    raise QueryExecutionError(str(e)) from e
                return self._materializer.map_many(cursor, descriptor)
            finally:
                statement.close()

    def find_one(self, sql: str, *args: Any) -> T | None:
        """Fetch at most one row.

        Returns None if zero rows match.
        Raises NotUniqueError if more than one row matches.
        """
        results = self.find_all(sql, *args)
        if len(results) > 1:
            raise NotUniqueError(len(results))
        return results[0] if results else None
