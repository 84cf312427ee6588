"""Schema introspection over ``google.protobuf`` descriptors.

Builds a :class:`~pyprotojson.schema.MessageSchema` from a generated (or
dynamically created) message class.
"""

from __future__ import annotations

from typing import Any

from google.protobuf import message_factory
from google.protobuf.descriptor import Descriptor, FieldDescriptor
from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper
from google.protobuf.message import Message

from pyprotojson._errors import ERR_MSG_UNSUPPORTED_FIELD_TYPE, UnsupportedFieldTypeError
from pyprotojson._types import MapType, RepeatedType, scalar_value_type
from pyprotojson.schema import FieldAccessor, FieldKind, FieldSchema, MessageSchema

__all__ = ["introspect", "is_map_entry"]


def is_map_entry(descriptor: Descriptor | None) -> bool:
    return descriptor is not None and descriptor.GetOptions().map_entry


def _is_repeated(fd: FieldDescriptor) -> bool:
    # Newer protobuf releases expose is_repeated and deprecate label.
    is_repeated = getattr(fd, "is_repeated", None)
    if callable(is_repeated):
        is_repeated = is_repeated()
    if isinstance(is_repeated, bool):
        return is_repeated
    return fd.label == FieldDescriptor.LABEL_REPEATED


def _real_oneof(fd: FieldDescriptor) -> str | None:
    """Name of the oneof ``fd`` belongs to, ignoring proto3 ``optional`` wrappers."""
    oneof = fd.containing_oneof
    if oneof is None:
        return None
    # proto3 optional fields sit alone in a synthetic oneof named "_<field>".
    if len(oneof.fields) == 1 and oneof.name == f"_{fd.name}":
        return None
    return oneof.name


def _element_type(fd: FieldDescriptor) -> Any:
    """Host type of a single value of ``fd`` (map keys and values)."""
    kind = FieldKind(fd.type)
    scalar = scalar_value_type(kind)
    if scalar is not None:
        return scalar
    if kind is FieldKind.ENUM:
        return EnumTypeWrapper(fd.enum_type)
    if kind is FieldKind.MESSAGE:
        return message_factory.GetMessageClass(fd.message_type)
    raise UnsupportedFieldTypeError(
        ERR_MSG_UNSUPPORTED_FIELD_TYPE,
        f"field {fd.full_name!r} of kind {kind.name} is not supported",
    )


def _property_type(fd: FieldDescriptor) -> Any:
    """Host property type for enum and map fields, None for everything else."""
    if is_map_entry(fd.message_type):
        entry = fd.message_type
        return MapType(
            key=_element_type(entry.fields_by_name["key"]),
            value=_element_type(entry.fields_by_name["value"]),
        )
    if fd.type == FieldDescriptor.TYPE_ENUM:
        enum_type = EnumTypeWrapper(fd.enum_type)
        return RepeatedType(enum_type) if _is_repeated(fd) else enum_type
    return None


def introspect(message_type: type[Message]) -> MessageSchema:
    """Describe the fields of ``message_type`` in declaration order.

    Args:
        message_type: A protobuf message class.

    Returns:
        The message schema, including host property types for enum and
        map fields.

    Raises:
        TypeError: If ``message_type`` is not a protobuf message class.
        UnsupportedFieldTypeError: If a map declares an unsupported key or value kind.
    """
    if not (isinstance(message_type, type) and issubclass(message_type, Message)):
        raise TypeError(f"expected a protobuf message class, got {message_type!r}")

    descriptor: Descriptor = message_type.DESCRIPTOR
    fields: list[FieldSchema] = []
    property_types: dict[str, Any] = {}

    for fd in descriptor.fields:
        kind = FieldKind(fd.type)
        repeated = _is_repeated(fd)
        is_map = is_map_entry(fd.message_type)
        message_class = None
        if kind is FieldKind.MESSAGE and not is_map:
            message_class = message_factory.GetMessageClass(fd.message_type)

        host_type = _property_type(fd)
        if host_type is not None:
            property_types[fd.name] = host_type

        accessor = FieldAccessor(
            fd.name,
            has_presence=fd.has_presence,
            is_message=kind is FieldKind.MESSAGE,
            is_repeated=repeated,
            is_map=is_map,
        )
        fields.append(
            FieldSchema(
                name=fd.name,
                kind=kind,
                accessor=accessor,
                json_name=fd.json_name,
                property_name=fd.name,
                repeated=repeated,
                is_map=is_map,
                oneof=_real_oneof(fd),
                message_type=message_class,
            )
        )

    return MessageSchema(descriptor.full_name, fields, property_types)
