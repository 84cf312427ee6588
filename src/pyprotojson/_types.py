"""Mapping from field wire kinds to the value types converters work with."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper
from google.protobuf.message import Message

from pyprotojson._errors import ERR_MSG_UNSUPPORTED_FIELD_TYPE, UnsupportedFieldTypeError
from pyprotojson.schema import FieldKind, FieldSchema


class ValueType(enum.StrEnum):
    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BOOL = "bool"
    STRING = "string"


@dataclass(frozen=True)
class RepeatedType:
    """Host type of a repeated field: a container of ``element``."""

    element: Any


@dataclass(frozen=True)
class MapType:
    """Host type of a map field."""

    key: ValueType
    value: Any


FieldValueType = ValueType | EnumTypeWrapper | type[Message] | MapType

_SCALAR_TYPES: dict[FieldKind, ValueType] = {
    FieldKind.DOUBLE: ValueType.DOUBLE,
    FieldKind.FLOAT: ValueType.FLOAT,
    FieldKind.INT32: ValueType.INT32,
    FieldKind.SINT32: ValueType.INT32,
    FieldKind.SFIXED32: ValueType.INT32,
    FieldKind.INT64: ValueType.INT64,
    FieldKind.SINT64: ValueType.INT64,
    FieldKind.SFIXED64: ValueType.INT64,
    FieldKind.UINT32: ValueType.UINT32,
    FieldKind.FIXED32: ValueType.UINT32,
    FieldKind.UINT64: ValueType.UINT64,
    FieldKind.FIXED64: ValueType.UINT64,
    FieldKind.BOOL: ValueType.BOOL,
    FieldKind.STRING: ValueType.STRING,
}


def scalar_value_type(kind: FieldKind) -> ValueType | None:
    return _SCALAR_TYPES.get(kind)


def resolve_value_type(
    field: FieldSchema, property_types: dict[str, Any]
) -> FieldValueType:
    """Resolve the value type a converter uses for ``field``.

    Enum fields and message fields without a generated class (map entries)
    are looked up in ``property_types`` by property name.

    Raises:
        UnsupportedFieldTypeError: If the field kind cannot be mapped.
    """
    scalar = _SCALAR_TYPES.get(field.kind)
    if scalar is not None:
        return scalar

    if field.kind is FieldKind.MESSAGE and field.message_type is not None:
        return field.message_type

    if field.kind is FieldKind.ENUM and field.repeated:
        host_type = property_types[field.property_name]
        return host_type.element

    if field.kind in (FieldKind.ENUM, FieldKind.MESSAGE):
        return property_types[field.property_name]

    raise UnsupportedFieldTypeError(
        ERR_MSG_UNSUPPORTED_FIELD_TYPE,
        f"field {field.name!r} of kind {field.kind.name} is not supported",
    )
