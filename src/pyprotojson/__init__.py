"""pyprotojson - Convert protobuf messages to and from JSON."""

from __future__ import annotations

__version__ = "0.1.0"

from typing import TypeVar

from google.protobuf.message import Message

from pyprotojson._converter import ProtobufConverter, clear_cache, get_converter
from pyprotojson._errors import (
    ConversionError,
    InvalidJSONError,
    InvalidNamingPolicyError,
    JSONTypeMismatchError,
    MaxDepthExceededError,
    UnsupportedFieldTypeError,
)
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.introspect import introspect
from pyprotojson.naming import get_naming_policy
from pyprotojson.options import DefaultIgnoreCondition, SerializerOptions

__all__ = [
    "serialize",
    "deserialize",
    "get_converter",
    "clear_cache",
    "get_naming_policy",
    "introspect",
    "ConversionError",
    "InvalidJSONError",
    "InvalidNamingPolicyError",
    "JSONTypeMismatchError",
    "MaxDepthExceededError",
    "UnsupportedFieldTypeError",
    "DefaultIgnoreCondition",
    "JsonReader",
    "JsonTokenType",
    "JsonWriter",
    "ProtobufConverter",
    "SerializerOptions",
]

M = TypeVar("M", bound=Message)


def serialize(message: Message | None, *, options: SerializerOptions | None = None) -> str:
    """Convert a protobuf message to JSON text.

    Args:
        message: The message to convert. None is written as ``null``.
        options: Serializer options. Defaults to ``SerializerOptions()``.

    Returns:
        The JSON text.

    Raises:
        UnsupportedFieldTypeError: If the message declares an unsupported field kind.
        MaxDepthExceededError: If message nesting exceeds ``options.max_depth``.
    """
    if options is None:
        options = SerializerOptions()
    writer = JsonWriter(indent=options.indent, max_depth=options.max_depth)
    if message is None:
        writer.write_null_value()
    else:
        get_converter(type(message), options).write(writer, message, options)
    return writer.result


def deserialize(
    text: str, message_type: type[M], *, options: SerializerOptions | None = None
) -> M | None:
    """Convert JSON text to a new message of ``message_type``.

    Args:
        text: JSON text holding one object, or ``null``.
        message_type: The protobuf message class to create.
        options: Serializer options. Defaults to ``SerializerOptions()``.

    Returns:
        The populated message, or None if the text is ``null``.

    Raises:
        InvalidJSONError: If the text is not valid JSON.
        JSONTypeMismatchError: If the JSON does not fit ``message_type``.
        MaxDepthExceededError: If JSON nesting exceeds ``options.max_depth``.
        UnsupportedFieldTypeError: If the message declares an unsupported field kind.
    """
    if options is None:
        options = SerializerOptions()
    converter = get_converter(message_type, options)
    reader = JsonReader(text, max_depth=options.max_depth)
    reader.read()
    return converter.read(reader, message_type, options)
