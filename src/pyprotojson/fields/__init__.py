"""Per-kind value converters and the factory that selects them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper
from google.protobuf.message import Message

from pyprotojson._errors import ERR_MSG_UNSUPPORTED_FIELD_TYPE, UnsupportedFieldTypeError
from pyprotojson._types import MapType, ValueType
from pyprotojson.fields._base import FieldConverter, ValueConverter
from pyprotojson.fields.enum import EnumConverter
from pyprotojson.fields.map import MapFieldConverter
from pyprotojson.fields.message import MessageConverter
from pyprotojson.fields.repeated import RepeatedFieldConverter
from pyprotojson.fields.scalar import ScalarConverter
from pyprotojson.fields.singular import SingularFieldConverter

if TYPE_CHECKING:
    from pyprotojson._model import FieldModel

__all__ = [
    "FieldConverter",
    "ValueConverter",
    "EnumConverter",
    "MapFieldConverter",
    "MessageConverter",
    "RepeatedFieldConverter",
    "ScalarConverter",
    "SingularFieldConverter",
    "create_field_converter",
    "create_value_converter",
]


def create_value_converter(value_type: Any) -> ValueConverter:
    """Select the converter for a single value of ``value_type``.

    Raises:
        UnsupportedFieldTypeError: If no converter handles ``value_type``.
    """
    if isinstance(value_type, ValueType):
        return ScalarConverter(value_type)
    if isinstance(value_type, EnumTypeWrapper):
        return EnumConverter(value_type)
    if isinstance(value_type, type) and issubclass(value_type, Message):
        return MessageConverter(value_type)
    raise UnsupportedFieldTypeError(
        ERR_MSG_UNSUPPORTED_FIELD_TYPE,
        f"no converter for value type {value_type!r}",
    )


def create_field_converter(model: FieldModel) -> FieldConverter:
    """Select the field converter matching the shape of ``model``."""
    value_type = model.value_type
    if model.is_map:
        if not isinstance(value_type, MapType):
            raise UnsupportedFieldTypeError(
                ERR_MSG_UNSUPPORTED_FIELD_TYPE,
                f"map field {model.json_name!r} has value type {value_type!r}",
            )
        return MapFieldConverter(
            ScalarConverter(value_type.key), create_value_converter(value_type.value)
        )
    if model.is_repeated:
        return RepeatedFieldConverter(create_value_converter(value_type))
    return SingularFieldConverter(create_value_converter(value_type))
