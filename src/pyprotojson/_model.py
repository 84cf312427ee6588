"""Field model builder: per-message-type conversion metadata."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pyprotojson._types import FieldValueType, resolve_value_type
from pyprotojson.fields import create_field_converter
from pyprotojson.options import NamingPolicy
from pyprotojson.schema import FieldAccessor, FieldSchema, MessageSchema

if TYPE_CHECKING:
    from pyprotojson.fields._base import FieldConverter

logger = logging.getLogger(__name__)


class FieldModel:
    """Resolved conversion metadata for one field.

    Everything but the converter is fixed at construction. The converter
    is created on first use; concurrent first uses may each create one, and
    any of them is valid since converters hold no per-instance state.
    """

    __slots__ = (
        "accessor",
        "is_repeated",
        "is_map",
        "is_one_of",
        "value_type",
        "json_name",
        "_converter",
    )

    def __init__(
        self,
        accessor: FieldAccessor,
        value_type: FieldValueType,
        json_name: str,
        *,
        is_repeated: bool = False,
        is_map: bool = False,
        is_one_of: bool = False,
    ) -> None:
        self.accessor = accessor
        self.value_type = value_type
        self.json_name = json_name
        self.is_repeated = is_repeated
        self.is_map = is_map
        self.is_one_of = is_one_of
        self._converter: FieldConverter | None = None

    @property
    def converter(self) -> FieldConverter:
        converter = self._converter
        if converter is None:
            converter = create_field_converter(self)
            self._converter = converter
        return converter

    def __repr__(self) -> str:
        return f"FieldModel({self.json_name!r}, {self.value_type!r})"


class FieldModelSet:
    """Field models in declaration order plus a JSON-name index."""

    def __init__(self, models: list[FieldModel], case_insensitive: bool = False) -> None:
        self._models = tuple(models)
        self._case_insensitive = case_insensitive
        self._index: dict[str, FieldModel] = {
            self._key(m.json_name): m for m in self._models
        }

    def _key(self, name: str) -> str:
        return name.casefold() if self._case_insensitive else name

    @property
    def case_insensitive(self) -> bool:
        return self._case_insensitive

    def find(self, json_name: str) -> FieldModel | None:
        return self._index.get(self._key(json_name))

    def __iter__(self) -> Iterator[FieldModel]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)


def _json_name_resolver(
    naming_policy: NamingPolicy | None, use_proto_json_names: bool
):
    if use_proto_json_names:
        return lambda field: field.json_name
    if naming_policy is not None:
        return lambda field: naming_policy(field.property_name)
    return lambda field: field.property_name


def build_field_models(
    schema: MessageSchema,
    naming_policy: NamingPolicy | None = None,
    use_proto_json_names: bool = False,
    case_insensitive: bool = False,
) -> FieldModelSet:
    """Build the field model set for one message schema.

    Args:
        schema: The message schema, fields in declaration order.
        naming_policy: Maps property names to JSON keys.
        use_proto_json_names: Use the schema's own JSON names, ignoring
            ``naming_policy``.
        case_insensitive: Match JSON keys ignoring case when decoding.

    Raises:
        UnsupportedFieldTypeError: If a field kind cannot be mapped.
    """
    resolve_name = _json_name_resolver(naming_policy, use_proto_json_names)

    models: list[FieldModel] = []
    field: FieldSchema
    for field in schema.fields:
        models.append(
            FieldModel(
                field.accessor,
                resolve_value_type(field, schema.property_types),
                resolve_name(field),
                is_repeated=field.repeated,
                is_map=field.is_map,
                is_one_of=field.oneof is not None,
            )
        )

    logger.debug("built %d field models for %s", len(models), schema.full_name)
    return FieldModelSet(models, case_insensitive)
