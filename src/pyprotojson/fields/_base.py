"""Abstract base classes for per-kind value converters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from google.protobuf.message import Message

from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader
from pyprotojson._writer import JsonWriter
from pyprotojson.options import SerializerOptions
from pyprotojson.schema import FieldAccessor


class ValueConverter(ABC):
    """Reads and writes a single JSON value of one type.

    ``read_value`` is called with the reader positioned on the value's first
    token and must leave it on the value's last token.
    """

    @property
    @abstractmethod
    def type_name(self) -> str: ...

    @abstractmethod
    def read_value(self, reader: JsonReader, options: SerializerOptions) -> Any: ...

    @abstractmethod
    def write_value(
        self, writer: JsonWriter, value: Any, options: SerializerOptions
    ) -> None: ...


class FieldConverter(ABC):
    """Reads a JSON value into a message field and writes a field value out.

    Field converters are bound to a field's shape (singular, repeated or map)
    and hold no per-message state, so one instance serves every message of
    the type.
    """

    @abstractmethod
    def read(
        self,
        reader: JsonReader,
        target: Message,
        value_type: Any,
        options: SerializerOptions,
        accessor: FieldAccessor,
    ) -> None: ...

    @abstractmethod
    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None: ...

    @staticmethod
    def assign(
        accessor: FieldAccessor, target: Message, value: Any, type_name: str
    ) -> None:
        """Store a decoded value, reporting values the message rejects as mismatches.

        Raises:
            JSONTypeMismatchError: If protobuf refuses the value, e.g. an
                unknown number for a closed enum or a string with lone surrogates.
        """
        try:
            accessor.set_value(target, value)
        except (TypeError, ValueError) as e:
            raise type_mismatch(type_name, f"field {accessor.name!r}: {e}", wrapped=e) from e
