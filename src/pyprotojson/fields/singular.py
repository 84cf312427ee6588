"""Field converter for singular (non-repeated) fields."""

from __future__ import annotations

from typing import Any

from google.protobuf.message import Message

from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import FieldConverter, ValueConverter
from pyprotojson.options import SerializerOptions
from pyprotojson.schema import FieldAccessor


class SingularFieldConverter(FieldConverter):
    def __init__(self, value_converter: ValueConverter) -> None:
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
        self.assign(
            accessor, target, self._value.read_value(reader, options), self._value.type_name
        )

    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        self._value.write_value(writer, value, options)
