"""Unit tests for DescriptorResolver and parameter-name discoverers."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, ClassVar

import pytest
from pydantic import BaseModel

from row_mapper.core.exceptions import DescriptorError
from row_mapper.mapping.descriptor import (
    DescriptorResolver,
    ExplicitParameterNameDiscoverer,
    SignatureParameterNameDiscoverer,
)


class Person:
    def __init__(self, id: int, name: str) -> None:
        self.id = id
        self.name = name
        self.email: str | None = None

    def set_email(self, email: str) -> None:
        self.email = email


@dataclass
class Product:
    sku: str
    price: float
    stock: int = 0


class Account(BaseModel):
    id: int
    owner: str


class Temperature:
    unit: ClassVar[str] = "C"

    def __init__(self, celsius: float) -> None:
        self._celsius = celsius

    @property
    def celsius(self) -> float:
        return self._celsius

    @celsius.setter
    def celsius(self, value: float) -> None:
        self._celsius = value

    @property
    def fahrenheit(self) -> float:
        return self._celsius * 9 / 5 + 32


class Point:
    __row_constructors__ = ("from_columns", "__init__")

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    @classmethod
    def from_columns(cls, px: int, py: int) -> Point:
        return cls(px, py)


class NoConstructors:
    __row_constructors__ = ()


class MissingFactory:
    __row_constructors__ = ("build",)


class Shape(abc.ABC):
    @abc.abstractmethod
    def area(self) -> float: ...


class Tally:
    count: int

    def __init__(self) -> None:
        self.count = 0

    @classmethod
    def set_count(cls, value: int) -> None:
        raise AssertionError("not a mutator")

    @staticmethod
    def set_label(value: str) -> None:
        raise AssertionError("not a mutator")


class Flexible:
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.args = args


class TestConstructors:
    def test_init_parameters_in_order(self) -> None:
        descriptor = DescriptorResolver().resolve(Person)
        params = descriptor.constructor.parameters
        assert [p.name for p in params] == ["id", "name"]
        assert [p.annotation for p in params] == [int, str]

    def test_dataclass_parameters_and_defaults(self) -> None:
        descriptor = DescriptorResolver().resolve(Product)
        params = {p.name: p for p in descriptor.constructor.parameters}
        assert params["price"].annotation is float
        assert params["stock"].has_default
        assert not params["sku"].has_default

    def test_pydantic_parameters(self) -> None:
        descriptor = DescriptorResolver().resolve(Account)
        assert [p.name for p in descriptor.constructor.parameters] == ["id", "owner"]

    def test_declared_constructor_order_first_wins(self) -> None:
        descriptor = DescriptorResolver().resolve(Point)
        assert [c.name for c in descriptor.constructors] == ["from_columns", "__init__"]
        assert descriptor.constructor.name == "from_columns"
        assert [p.name for p in descriptor.constructor.parameters] == ["px", "py"]

    def test_variadic_parameters_are_not_mapped(self) -> None:
        descriptor = DescriptorResolver().resolve(Flexible)
        assert descriptor.constructor.parameters == ()

    def test_invoke_passes_keywords(self) -> None:
        descriptor = DescriptorResolver().resolve(Product)
        product = descriptor.constructor.invoke({"sku": "A1", "price": 2.5})
        assert product == Product("A1", 2.5)


class TestFields:
    def test_setter_method_is_mutator(self) -> None:
        descriptor = DescriptorResolver().resolve(Person)
        fields = {f.name: f for f in descriptor.fields}
        assert "email" in fields
        assert fields["email"].annotation is str
        assert fields["email"].setter is not None

        person = Person(1, "Ann")
        fields["email"].setter(person, "a@x.com")
        assert person.email == "a@x.com"

    def test_dataclass_fields_have_no_mutator(self) -> None:
        descriptor = DescriptorResolver().resolve(Product)
        assert [f.name for f in descriptor.fields] == ["sku", "price", "stock"]
        assert descriptor.mutable_fields == ()

    def test_property_setter_is_mutator(self) -> None:
        descriptor = DescriptorResolver().resolve(Temperature)
        fields = {f.name: f for f in descriptor.fields}
        assert fields["celsius"].annotation is float
        assert fields["celsius"].setter is not None
        assert "fahrenheit" not in fields

    def test_classvar_is_not_a_field(self) -> None:
        descriptor = DescriptorResolver().resolve(Temperature)
        assert "unit" not in [f.name for f in descriptor.fields]

    def test_class_and_static_setters_are_not_mutators(self) -> None:
        descriptor = DescriptorResolver().resolve(Tally)
        assert [f.name for f in descriptor.fields] == ["count"]
        assert descriptor.mutable_fields == ()

    def test_pydantic_fields(self) -> None:
        descriptor = DescriptorResolver().resolve(Account)
        assert [(f.name, f.annotation) for f in descriptor.fields] == [("id", int), ("owner", str)]


class TestDescriptorErrors:
    def test_empty_constructor_list(self) -> None:
        with pytest.raises(DescriptorError, match="supported constructor is empty"):
            DescriptorResolver().resolve(NoConstructors)

    def test_missing_factory(self) -> None:
        with pytest.raises(DescriptorError, match="'build' not found"):
            DescriptorResolver().resolve(MissingFactory)

    def test_abstract_class(self) -> None:
        with pytest.raises(DescriptorError, match="abstract"):
            DescriptorResolver().resolve(Shape)

    def test_not_a_class(self) -> None:
        with pytest.raises(DescriptorError, match="not a class"):
            DescriptorResolver().resolve("Person")  # type: ignore[arg-type]

    def test_discoverer_without_names(self) -> None:
        resolver = DescriptorResolver(ExplicitParameterNameDiscoverer({}))
        with pytest.raises(DescriptorError, match="supported constructor is empty"):
            resolver.resolve(Person)


class TestExplicitDiscoverer:
    def test_column_names_bound_positionally(self) -> None:
        discoverer = ExplicitParameterNameDiscoverer({Person: ["person_id", "full_name"]})
        descriptor = DescriptorResolver(discoverer).resolve(Person)
        params = descriptor.constructor.parameters
        assert [p.name for p in params] == ["person_id", "full_name"]
        assert [p.annotation for p in params] == [int, str]

        person = descriptor.constructor.invoke({"person_id": 3, "full_name": "Bo"})
        assert (person.id, person.name) == (3, "Bo")

    def test_factory_key(self) -> None:
        discoverer = ExplicitParameterNameDiscoverer(
            {(Point, "from_columns"): ["a", "b"]},
            fallback=SignatureParameterNameDiscoverer(),
        )
        descriptor = DescriptorResolver(discoverer).resolve(Point)
        assert [p.name for p in descriptor.constructors[0].parameters] == ["a", "b"]
        assert [p.name for p in descriptor.constructors[1].parameters] == ["x", "y"]

    def test_unknown_constructor_is_skipped(self) -> None:
        discoverer = ExplicitParameterNameDiscoverer({Point: ["x", "y"]})
        descriptor = DescriptorResolver(discoverer).resolve(Point)
        assert [c.name for c in descriptor.constructors] == ["__init__"]
