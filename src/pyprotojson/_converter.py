"""Core ProtobufConverter: descriptor-driven JSON decode and encode."""

from __future__ import annotations

import logging
import threading
from typing import Any, Generic, TypeVar

from google.protobuf.message import Message

from pyprotojson._errors import type_mismatch
from pyprotojson._model import FieldModel, FieldModelSet, build_field_models
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._writer import JsonWriter
from pyprotojson.introspect import introspect
from pyprotojson.options import DefaultIgnoreCondition, SerializerOptions

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Message)


def _is_default_value(model: FieldModel, value: Any) -> bool:
    if model.is_repeated or model.is_map:
        return len(value) == 0
    if isinstance(value, Message):
        return False
    return not value


class ProtobufConverter(Generic[M]):
    """Converts one message type to and from JSON.

    The field models are built once, on construction, from the message
    descriptor and the options; ``read`` and ``write`` only consult them.
    """

    def __init__(self, message_type: type[M], options: SerializerOptions) -> None:
        self._message_type = message_type
        self._ignore_condition = options.default_ignore_condition
        self._fields: FieldModelSet = build_field_models(
            introspect(message_type),
            naming_policy=options.naming_policy,
            use_proto_json_names=options.use_proto_json_names,
            case_insensitive=options.property_name_case_insensitive,
        )

    @property
    def message_type(self) -> type[M]:
        return self._message_type

    @property
    def fields(self) -> FieldModelSet:
        return self._fields

    def read(
        self, reader: JsonReader, message_type: type[M], options: SerializerOptions
    ) -> M | None:
        """Read one JSON value at the reader's current token into a new message.

        Returns None for a JSON null. Unknown keys are skipped.

        Raises:
            JSONTypeMismatchError: If the value is neither null nor an object,
                or a field value does not fit its field.
        """
        if reader.token_type is JsonTokenType.NULL:
            return None
        if reader.token_type is not JsonTokenType.START_OBJECT:
            raise type_mismatch(
                message_type.DESCRIPTOR.full_name,
                f"found {reader.token_type.value} token",
            )

        message = message_type()

        while True:
            reader.read()
            if reader.token_type in (JsonTokenType.END_OBJECT, JsonTokenType.NONE):
                break
            if reader.token_type is not JsonTokenType.PROPERTY_NAME:
                reader.skip()
                continue

            name = reader.value
            reader.read()
            model = self._fields.find(name)
            if model is None:
                logger.debug(
                    "ignoring unknown key %r for %s", name, message_type.DESCRIPTOR.full_name
                )
                reader.skip()
                continue

            model.converter.read(reader, message, model.value_type, options, model.accessor)

        return message

    def write(self, writer: JsonWriter, message: M | None, options: SerializerOptions) -> None:
        """Write ``message`` as a JSON object, or null for None."""
        if message is None:
            writer.write_null_value()
            return

        writer.write_start_object()

        for model in self._fields:
            if model.is_one_of and not model.accessor.has_value(message):
                continue

            value = model.accessor.get_value(message)
            if value is not None:
                # A set oneof member is written even when it holds its default.
                if (
                    self._ignore_condition is DefaultIgnoreCondition.WHEN_WRITING_DEFAULT
                    and not model.is_one_of
                    and _is_default_value(model, value)
                ):
                    continue
                writer.write_property_name(model.json_name)
                model.converter.write(writer, value, options)
            elif self._ignore_condition is DefaultIgnoreCondition.NEVER:
                writer.write_property_name(model.json_name)
                writer.write_null_value()

        writer.write_end_object()


_cache: dict[tuple[type[Message], SerializerOptions], ProtobufConverter[Any]] = {}
_cache_lock = threading.Lock()


def get_converter(
    message_type: type[M], options: SerializerOptions | None = None
) -> ProtobufConverter[M]:
    """Get the cached converter for ``message_type`` under ``options``.

    The converter is built on first request; later requests with equal
    options share it.

    Raises:
        TypeError: If ``message_type`` is not a protobuf message class.
        UnsupportedFieldTypeError: If the message declares an unsupported field kind.
    """
    if options is None:
        options = SerializerOptions()
    key = (message_type, options)
    converter = _cache.get(key)
    if converter is not None:
        return converter

    with _cache_lock:
        converter = _cache.get(key)
        if converter is None:
            logger.debug("building converter for %s", message_type)
            converter = ProtobufConverter(message_type, options)
            _cache[key] = converter
    return converter


def clear_cache() -> None:
    """Drop every cached converter."""
    with _cache_lock:
        _cache.clear()
