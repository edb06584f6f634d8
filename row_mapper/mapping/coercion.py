"""Column value coercion.

Converts the textual or native value a driver returns for a column into
the type declared by a constructor parameter or field. Validation is
delegated to pydantic in lax mode, so any annotation a pydantic field
accepts (Optional, Literal, NewType, Annotated constraints, enums, nested
models) works as a destination type. Values that fail validation raise
CoercionError.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from datetime import datetime, time, timedelta
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from row_mapper.core.exceptions import CoercionError

Converter = Callable[[Any, type], Any]

_PASS_THROUGH = (Any, object, inspect.Parameter.empty)

# Numbers may land in str targets; classes without a schema are checked by isinstance
_LAX_CONFIG = ConfigDict(coerce_numbers_to_str=True, arbitrary_types_allowed=True)


def _build_adapter(target_type: Any) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(target_type, config=_LAX_CONFIG)
    except PydanticUserError as e:
        # Models, dataclasses and TypedDicts carry their own config
        if e.code != "type-adapter-config-unused":
            raise
    return TypeAdapter(target_type)


_cached_adapter = lru_cache(maxsize=512)(_build_adapter)


def _adapter(target_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(target_type)
    except TypeError:
        # Unhashable annotation metadata
        return _build_adapter(target_type)


def _is_model(target_type: Any) -> bool:
    return isinstance(target_type, type) and issubclass(target_type, BaseModel)


def _time_of_day(value: timedelta) -> time:
    if not timedelta(0) <= value < timedelta(days=1):
        raise CoercionError(value, time, "interval is outside a single day")
    return (datetime.min + value).time()


def _summary(error: ValidationError) -> str:
    return "; ".join(detail["msg"] for detail in error.errors())


class ValueCoercer:
    """Converts raw column values into declared Python types.

    Registered converters take precedence over pydantic validation. They are
    looked up by exact type first, then along the target's MRO, so
    registering a base class covers its subclasses.
    """

    def __init__(self, converters: Mapping[type, Converter] | None = None) -> None:
        self._converters: dict[type, Converter] = dict(converters or {})

    def register(self, target_type: type, converter: Converter) -> None:
        """Register *converter* for *target_type* and its subclasses."""
        self._converters[target_type] = converter

    def _lookup(self, target_type: Any) -> Converter | None:
        if not self._converters or not isinstance(target_type, type):
            return None
        for klass in target_type.__mro__:
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        return None

    def coerce(self, value: Any, target_type: Any) -> Any:
        """Coerce *value* into *target_type*.

        Raises:
            CoercionError: If the type pair is unsupported or the value cannot be parsed.
        """
        if any(target_type is p for p in _PASS_THROUGH):
            return value

        converter = self._lookup(target_type)
        if converter is not None:
            try:
                return converter(value, target_type)
            except CoercionError:
                raise
            except (ValueError, TypeError, ArithmeticError) as e:
                raise CoercionError(value, target_type, str(e)) from e

        # MySQL drivers return TIME columns as timedelta
        if target_type is time and isinstance(value, timedelta):
            return _time_of_day(value)

        try:
            adapter = _adapter(target_type)
        except PydanticUserError as e:
            raise CoercionError(value, target_type, "unsupported destination type") from e

        try:
            if isinstance(value, (str, bytes, bytearray)) and _is_model(target_type):
                return adapter.validate_json(value)
            return adapter.validate_python(value)
        except ValidationError as e:
            raise CoercionError(value, target_type, _summary(e)) from e
