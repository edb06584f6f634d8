"""Target type descriptors.

A TypeDescriptor captures the shape of a target class for one mapping
operation: its constructors (with ordered parameter names and annotations)
and its declared fields (with an optional setter-style mutator each).

Constructors are taken from ``__row_constructors__`` when a class declares
it (``"__init__"`` or names of classmethod/staticmethod factories, in
preference order), otherwise ``__init__`` alone. Parameter names come from an
injected ParameterNameDiscoverer.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, get_origin, get_type_hints

from pydantic import BaseModel

from row_mapper.core.exceptions import DescriptorError

logger = logging.getLogger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class ParameterDescriptor:
    """One constructor parameter, matched to the column of the same name."""

    name: str
    annotation: Any = Any
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD
    has_default: bool = False


@dataclass(frozen=True)
class ConstructorDescriptor:
    """A callable that produces a target instance."""

    name: str
    factory: Callable[..., Any]
    parameters: tuple[ParameterDescriptor, ...]

    def invoke(self, values: Mapping[str, Any]) -> Any:
        """Call the factory, positional-only parameters by position and the rest by keyword.

        Parameters missing from *values* are left to their defaults. A
        positional-only value cannot follow a missing positional-only one.

        Raises:
            TypeError: If a positional-only value would land in the slot of an
                earlier missing parameter.
        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        gap: str | None = None
        for param in self.parameters:
            positional = param.kind is inspect.Parameter.POSITIONAL_ONLY
            if param.name not in values:
                if positional and gap is None:
                    gap = param.name
                continue
            if positional:
                if gap is not None:
                    raise TypeError(
                        f"positional-only parameter '{param.name}' cannot be passed "
                        f"without '{gap}'"
                    )
                args.append(values[param.name])
            else:
                kwargs[param.name] = values[param.name]
        return self.factory(*args, **kwargs)


@dataclass(frozen=True)
class FieldDescriptor:
    """A declared field and the mutator that assigns it, if any."""

    name: str
    annotation: Any = Any
    setter: Callable[[Any, Any], Any] | None = None


@dataclass(frozen=True)
class TypeDescriptor:
    """Resolved shape of a target class."""

    target_class: type
    constructors: tuple[ConstructorDescriptor, ...]
    fields: tuple[FieldDescriptor, ...]

    @property
    def constructor(self) -> ConstructorDescriptor:
        """The constructor used for materialization: always the first one."""
        return self.constructors[0]

    @property
    def mutable_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.setter is not None)


class ParameterNameDiscoverer(Protocol):
    """Recovers ordered parameter descriptors for a constructor.

    Returns None when names cannot be recovered; such a constructor is
    treated as unusable.
    """

    def get_parameters(
        self, target_class: type, constructor_name: str, factory: Callable[..., Any]
    ) -> Sequence[ParameterDescriptor] | None: ...


class SignatureParameterNameDiscoverer:
    """Reads parameter names and annotations from ``inspect.signature``.

    String annotations (``from __future__ import annotations``) are
    evaluated. Works for plain classes, dataclasses and Pydantic models.
    """

    def get_parameters(
        self, target_class: type, constructor_name: str, factory: Callable[..., Any]
    ) -> list[ParameterDescriptor] | None:
        try:
            signature = inspect.signature(factory, eval_str=True)
        except (TypeError, ValueError):
            return None
        return [
            ParameterDescriptor(
                name=p.name,
                annotation=Any if p.annotation is inspect.Parameter.empty else p.annotation,
                kind=p.kind,
                has_default=p.default is not inspect.Parameter.empty,
            )
            for p in signature.parameters.values()
            if p.kind not in _VARIADIC
        ]


class ExplicitParameterNameDiscoverer:
    """Uses caller-supplied column names for constructor parameters.

    Keys of *names* are a target class (for ``__init__``) or a
    ``(target_class, factory_name)`` pair; values are column names in
    parameter order. Arguments are passed positionally, so the column names
    need not match the Python parameter names. Annotations are taken
    positionally from the signature when it is available.

    Constructors without an entry are delegated to *fallback*, if given.
    """

    def __init__(
        self,
        names: Mapping[Any, Sequence[str]],
        fallback: ParameterNameDiscoverer | None = None,
    ) -> None:
        self._names = dict(names)
        self._fallback = fallback

    def get_parameters(
        self, target_class: type, constructor_name: str, factory: Callable[..., Any]
    ) -> list[ParameterDescriptor] | None:
        key: Any = target_class if constructor_name == "__init__" else (target_class, constructor_name)
        columns = self._names.get(key)
        if columns is None:
            if self._fallback is None:
                return None
            found = self._fallback.get_parameters(target_class, constructor_name, factory)
            return list(found) if found is not None else None

        annotations: list[Any] = []
        try:
            signature = inspect.signature(factory, eval_str=True)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            annotations = [
                Any if p.annotation is inspect.Parameter.empty else p.annotation
                for p in signature.parameters.values()
                if p.kind not in _VARIADIC and p.kind is not inspect.Parameter.KEYWORD_ONLY
            ]
        return [
            ParameterDescriptor(
                name=column,
                annotation=annotations[i] if i < len(annotations) else Any,
                kind=inspect.Parameter.POSITIONAL_ONLY,
            )
            for i, column in enumerate(columns)
        ]


def _method_setter(method_name: str) -> Callable[[Any, Any], Any]:
    def setter(instance: Any, value: Any) -> Any:
        return getattr(instance, method_name)(value)

    return setter


def _property_setter(attribute: str) -> Callable[[Any, Any], Any]:
    def setter(instance: Any, value: Any) -> None:
        setattr(instance, attribute, value)

    return setter


class DescriptorResolver:
    """Inspects target classes into TypeDescriptors.

    Args:
        discoverer: Parameter-name discovery capability. Defaults to
            SignatureParameterNameDiscoverer.
    """

    def __init__(self, discoverer: ParameterNameDiscoverer | None = None) -> None:
        self._discoverer = discoverer or SignatureParameterNameDiscoverer()

    def resolve(self, target_class: type) -> TypeDescriptor:
        """Describe *target_class*.

        Raises:
            DescriptorError: If the class has no usable constructor.
        """
        if not isinstance(target_class, type):
            raise DescriptorError(repr(target_class), "target is not a class")
        class_name = target_class.__qualname__
        if inspect.isabstract(target_class):
            raise DescriptorError(class_name, "abstract class has no usable constructor")

        constructors = self._resolve_constructors(target_class)
        fields = self._resolve_fields(target_class)
        logger.debug(
            "Resolved %s: constructors=%s fields=%s",
            class_name,
            [c.name for c in constructors],
            [f.name for f in fields],
        )
        return TypeDescriptor(target_class, constructors, fields)

    def _resolve_constructors(self, target_class: type) -> tuple[ConstructorDescriptor, ...]:
        class_name = target_class.__qualname__
        names = getattr(target_class, "__row_constructors__", ("__init__",))
        if isinstance(names, str):
            names = (names,)

        constructors: list[ConstructorDescriptor] = []
        for name in names:
            if name == "__init__":
                factory: Any = target_class
            else:
                factory = getattr(target_class, name, None)
                if not callable(factory):
                    raise DescriptorError(class_name, f"constructor '{name}' not found")
            try:
                params = self._discoverer.get_parameters(target_class, name, factory)
            except NameError as e:
                raise DescriptorError(
                    class_name, f"cannot resolve annotations of constructor '{name}': {e}"
                ) from e
            if params is None:
                logger.debug("No parameter names for %s.%s; skipped", class_name, name)
                continue
            constructors.append(ConstructorDescriptor(name, factory, tuple(params)))

        if not constructors:
            raise DescriptorError(class_name, "supported constructor is empty")
        return tuple(constructors)

    def _resolve_fields(self, target_class: type) -> tuple[FieldDescriptor, ...]:
        if issubclass(target_class, BaseModel):
            hints = {name: info.annotation for name, info in target_class.model_fields.items()}
        else:
            try:
                hints = get_type_hints(target_class)
            except NameError as e:
                raise DescriptorError(
                    target_class.__qualname__, f"cannot resolve field annotations: {e}"
                ) from e
            hints = {
                n: tp
                for n, tp in hints.items()
                if tp is not ClassVar and get_origin(tp) is not ClassVar
            }

        # Properties with a setter and bare set_<name> methods declare fields too
        for name in dir(target_class):
            attr = inspect.getattr_static(target_class, name, None)
            if isinstance(attr, property):
                if name not in hints and attr.fset is not None:
                    hints[name] = _property_type(attr)
            elif name.startswith("set_") and inspect.isfunction(attr):
                field_name = name[len("set_"):]
                if field_name and field_name not in hints:
                    hints[field_name] = _setter_type(attr)

        fields: list[FieldDescriptor] = []
        for name, annotation in hints.items():
            fields.append(FieldDescriptor(name, annotation, self._find_setter(target_class, name)))
        return tuple(fields)

    @staticmethod
    def _find_setter(target_class: type, name: str) -> Callable[[Any, Any], Any] | None:
        method_name = f"set_{name}"
        if inspect.isfunction(inspect.getattr_static(target_class, method_name, None)):
            return _method_setter(method_name)
        attr = inspect.getattr_static(target_class, name, None)
        if isinstance(attr, property) and attr.fset is not None:
            return _property_setter(name)
        return None


def _property_type(prop: property) -> Any:
    try:
        return get_type_hints(prop.fget).get("return", Any)
    except NameError:
        return Any


def _setter_type(method: Callable[..., Any]) -> Any:
    """Annotation of the value parameter of an unbound ``set_<name>`` method."""
    try:
        hints = get_type_hints(method)
        names = list(inspect.signature(method).parameters)
    except (NameError, TypeError, ValueError):
        return Any
    return hints.get(names[1], Any) if len(names) > 1 else Any
