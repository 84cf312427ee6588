"""Schema types describing protobuf messages for JSON conversion."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from google.protobuf.message import Message


class FieldKind(enum.IntEnum):
    """Field wire kinds, numbered as in ``FieldDescriptorProto.Type``."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18


class FieldAccessor:
    """Reads and writes one field of a message instance."""

    __slots__ = ("_name", "_has_presence", "_is_message", "_is_repeated", "_is_map")

    def __init__(
        self,
        name: str,
        *,
        has_presence: bool = False,
        is_message: bool = False,
        is_repeated: bool = False,
        is_map: bool = False,
    ) -> None:
        self._name = name
        self._has_presence = has_presence
        self._is_message = is_message
        self._is_repeated = is_repeated
        self._is_map = is_map

    @property
    def name(self) -> str:
        return self._name

    def get_value(self, message: Message) -> Any:
        """Return the field value, or None when a field with presence is unset."""
        if self._has_presence and not message.HasField(self._name):
            return None
        return getattr(message, self._name)

    def has_value(self, message: Message) -> bool:
        if self._has_presence:
            return message.HasField(self._name)
        value = getattr(message, self._name)
        if self._is_repeated or self._is_map:
            return len(value) > 0
        return bool(value)

    def set_value(self, message: Message, value: Any) -> None:
        if self._is_map:
            container = getattr(message, self._name)
            container.clear()
            for key, item in value.items():
                if isinstance(item, Message):
                    container[key].CopyFrom(item)
                else:
                    container[key] = item
        elif self._is_repeated:
            container = getattr(message, self._name)
            del container[:]
            container.extend(value)
        elif self._is_message:
            getattr(message, self._name).CopyFrom(value)
        else:
            setattr(message, self._name, value)

    def clear(self, message: Message) -> None:
        message.ClearField(self._name)

    def __repr__(self) -> str:
        return f"FieldAccessor({self._name!r})"


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a single message field."""

    name: str
    kind: FieldKind
    accessor: FieldAccessor
    json_name: str = ""
    property_name: str = ""
    repeated: bool = False
    is_map: bool = False
    oneof: str | None = None
    message_type: type[Message] | None = None

    def __post_init__(self) -> None:
        if not self.json_name:
            object.__setattr__(self, "json_name", self.name)
        if not self.property_name:
            object.__setattr__(self, "property_name", self.name)


class MessageSchema:
    """Message schema with declaration-ordered fields and O(1) lookup.

    ``property_types`` maps each field's property name to its host type
    (enum wrapper, map type, or repeated type) for fields whose value type
    cannot be read off the descriptor alone.
    """

    def __init__(
        self,
        full_name: str,
        fields: list[FieldSchema],
        property_types: dict[str, Any] | None = None,
    ) -> None:
        self.full_name = full_name
        self._fields = list(fields)
        self._index: dict[str, FieldSchema] = {f.name: f for f in fields}
        self.property_types: dict[str, Any] = dict(property_types or {})

    @property
    def fields(self) -> list[FieldSchema]:
        return list(self._fields)

    def find_field(self, name: str) -> FieldSchema | None:
        return self._index.get(name)

    def __len__(self) -> int:
        return len(self._fields)
