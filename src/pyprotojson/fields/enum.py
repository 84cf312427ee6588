"""Converter for enum values."""

from __future__ import annotations

from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper

from pyprotojson._constants import INT32_MAX, INT32_MIN
from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import ValueConverter
from pyprotojson.options import SerializerOptions


class EnumConverter(ValueConverter):
    """Reads enum values by number or name; writes numbers unless
    ``write_enums_as_strings`` is set.

    Numbers without a declared name are kept as-is, since proto3 enums are open.
    """

    def __init__(self, enum_type: EnumTypeWrapper) -> None:
        self._enum_type = enum_type

    @property
    def type_name(self) -> str:
        return self._enum_type.DESCRIPTOR.full_name

    def read_value(self, reader: JsonReader, options: SerializerOptions) -> int:
        token = reader.token_type
        if token is JsonTokenType.STRING:
            try:
                return self._enum_type.Value(reader.value)
            except ValueError:
                raise type_mismatch(
                    self.type_name, f"{reader.value!r} is not a value name"
                ) from None
        if token is JsonTokenType.NUMBER and isinstance(reader.value, int):
            if not INT32_MIN <= reader.value <= INT32_MAX:
                raise type_mismatch(self.type_name, f"{reader.value} is out of range")
            return reader.value
        raise type_mismatch(self.type_name, f"found {token.value} token")

    def write_value(self, writer: JsonWriter, value: int, options: SerializerOptions) -> None:
        if options.write_enums_as_strings:
            try:
                writer.write_string_value(self._enum_type.Name(value))
                return
            except ValueError:
                pass
        writer.write_number_value(value)

    def __repr__(self) -> str:
        return f"EnumConverter({self.type_name})"
