"""Converter for nested message values."""

from __future__ import annotations

from google.protobuf.message import Message

from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import ValueConverter
from pyprotojson.options import SerializerOptions


class MessageConverter(ValueConverter):
    """Recurses into the cached converter of the nested message type."""

    def __init__(self, message_type: type[Message]) -> None:
        self._message_type = message_type

    @property
    def type_name(self) -> str:
        return self._message_type.DESCRIPTOR.full_name

    def read_value(self, reader: JsonReader, options: SerializerOptions) -> Message:
        from pyprotojson._converter import get_converter

        value = get_converter(self._message_type, options).read(
            reader, self._message_type, options
        )
        if value is None:
            raise type_mismatch(self.type_name, "found null token")
        return value

    def write_value(self, writer: JsonWriter, value: Message, options: SerializerOptions) -> None:
        from pyprotojson._converter import get_converter

        get_converter(self._message_type, options).write(writer, value, options)

    def __repr__(self) -> str:
        return f"MessageConverter({self.type_name})"
