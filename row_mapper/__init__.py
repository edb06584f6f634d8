"""RowMapper - parameterized SQL execution with row-to-object materialization."""

from __future__ import annotations

from row_mapper.core.connection import ConnectionConfig, ConnectionManager, ConnectionProvider
from row_mapper.core.cursor import ResultCursor, ResultRow
from row_mapper.core.dao import Dao
from row_mapper.core.enums import DatabaseBackend
from row_mapper.core.exceptions import (
    AdapterError,
    BindError,
    CoercionError,
    ConnectionError,  # noqa: A004
    ConversionError,
    DescriptorError,
    ExecutionError,
    MappingError,
    NotUniqueError,
    QueryExecutionError,
    RowMapperError,
    StatementError,
)
from row_mapper.mapping.coercion import ValueCoercer
from row_mapper.mapping.descriptor import (
    DescriptorResolver,
    ExplicitParameterNameDiscoverer,
    SignatureParameterNameDiscoverer,
)
from row_mapper.mapping.materializer import RowMaterializer

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "ConnectionProvider",
    # Facade
    "Dao",
    # Cursor
    "ResultCursor",
    "ResultRow",
    # Mapping
    "RowMaterializer",
    "DescriptorResolver",
    "SignatureParameterNameDiscoverer",
    "ExplicitParameterNameDiscoverer",
    "ValueCoercer",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "RowMapperError",
    "StatementError",
    "BindError",
    "ExecutionError",
    "QueryExecutionError",
    "NotUniqueError",
    "MappingError",
    "DescriptorError",
    "ConversionError",
    "CoercionError",
    "AdapterError",
    "ConnectionError",
]
