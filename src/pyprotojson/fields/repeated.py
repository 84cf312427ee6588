"""Field converter for repeated fields (JSON arrays)."""

from __future__ import annotations

from typing import Any

from google.protobuf.message import Message

from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import FieldConverter, ValueConverter
from pyprotojson.options import SerializerOptions
from pyprotojson.schema import FieldAccessor


class RepeatedFieldConverter(FieldConverter):
    def __init__(self, element_converter: ValueConverter) -> None:
        self._element = element_converter

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
        if reader.token_type is not JsonTokenType.START_ARRAY:
            raise type_mismatch(
                f"repeated {self._element.type_name}",
                f"found {reader.token_type.value} token",
            )

        items: list[Any] = []
        reader.read()
        while reader.token_type is not JsonTokenType.END_ARRAY:
            if reader.token_type is JsonTokenType.NULL:
                raise type_mismatch(self._element.type_name, "null array element")
            items.append(self._element.read_value(reader, options))
            reader.read()
        self.assign(accessor, target, items, f"repeated {self._element.type_name}")

    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        writer.write_start_array()
        for item in value:
            self._element.write_value(writer, item, options)
        writer.write_end_array()
