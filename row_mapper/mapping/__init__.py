"""Mapping layer - turn result rows into typed objects."""

from __future__ import annotations

from row_mapper.mapping.coercion import ValueCoercer
from row_mapper.mapping.descriptor import (
    ConstructorDescriptor,
    DescriptorResolver,
    ExplicitParameterNameDiscoverer,
    FieldDescriptor,
    ParameterDescriptor,
    ParameterNameDiscoverer,
    SignatureParameterNameDiscoverer,
    TypeDescriptor,
)
from row_mapper.mapping.materializer import RowMaterializer

__all__ = [
    "RowMaterializer",
    "ValueCoercer",
    "DescriptorResolver",
    "TypeDescriptor",
    "ConstructorDescriptor",
    "FieldDescriptor",
    "ParameterDescriptor",
    "ParameterNameDiscoverer",
    "SignatureParameterNameDiscoverer",
    "ExplicitParameterNameDiscoverer",
]
