"""Serializer configuration."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from pyprotojson._constants import DEFAULT_MAX_DEPTH


class DefaultIgnoreCondition(enum.StrEnum):
    """When a field is left out of the JSON output."""

    NEVER = "never"
    """Always write every key; absent values are written as ``null``."""

    WHEN_WRITING_NULL = "when_writing_null"
    """Skip absent values but still write present default values."""

    WHEN_WRITING_DEFAULT = "when_writing_default"
    """Skip absent values and present values equal to the field default."""


NamingPolicy = Callable[[str], str]
"""Maps a field's property name to its JSON key."""


@dataclass(frozen=True)
class SerializerOptions:
    """Options shared by every conversion of a message type.

    Instances are hashable so they can key the per-type converter cache.

    Attributes:
        naming_policy: Applied to the property name of each field to obtain
            its JSON key. Ignored when ``use_proto_json_names`` is set.
        use_proto_json_names: Use the ``json_name`` declared by the schema.
        property_name_case_insensitive: Match JSON keys to fields ignoring case.
        default_ignore_condition: Omission policy for absent and default values.
        write_enums_as_strings: Write enum values by name instead of number.
        indent: Pretty-print with this many spaces per level.
        max_depth: Maximum nesting depth accepted when reading or writing.
    """

    naming_policy: NamingPolicy | None = None
    use_proto_json_names: bool = False
    property_name_case_insensitive: bool = False
    default_ignore_condition: DefaultIgnoreCondition = DefaultIgnoreCondition.NEVER
    write_enums_as_strings: bool = False
    indent: int | None = None
    max_depth: int = DEFAULT_MAX_DEPTH
