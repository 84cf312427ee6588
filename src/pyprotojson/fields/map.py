"""Field converter for map fields (JSON objects keyed by string)."""

from __future__ import annotations

from typing import Any

from google.protobuf.message import Message

from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import FieldConverter, ValueConverter
from pyprotojson.fields.scalar import ScalarConverter
from pyprotojson.options import SerializerOptions
from pyprotojson.schema import FieldAccessor


class MapFieldConverter(FieldConverter):
    def __init__(self, key_converter: ScalarConverter, value_converter: ValueConverter) -> None:
        self._key = key_converter
        self._value = value_converter

    def read(
        self,
        reader: JsonReader,
        target: Message,
        value_type: Any,
        options: SerializerOptions,
        accessor: FieldAccessor,
    ) -> None:
        if reader.token_type is JsonTokenType.NULL:
            accessor.clear(target)
            return
        if reader.token_type is not JsonTokenType.START_OBJECT:
            raise type_mismatch(
                f"map<{self._key.type_name}, {self._value.type_name}>",
                f"found {reader.token_type.value} token",
            )

        items: dict[Any, Any] = {}
        reader.read()
        while reader.token_type is not JsonTokenType.END_OBJECT:
            if reader.token_type is not JsonTokenType.PROPERTY_NAME:
                reader.skip()
                reader.read()
                continue
            key = self._key.from_string(reader.value)
            reader.read()
            if reader.token_type is JsonTokenType.NULL:
                raise type_mismatch(self._value.type_name, "null map value")
            items[key] = self._value.read_value(reader, options)
            reader.read()
        self.assign(
            accessor, target, items, f"map<{self._key.type_name}, {self._value.type_name}>"
        )

    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        writer.write_start_object()
        for key, item in value.items():
            if isinstance(key, bool):
                writer.write_property_name("true" if key else "false")
            else:
                writer.write_property_name(str(key))
            self._value.write_value(writer, item, options)
        writer.write_end_object()
