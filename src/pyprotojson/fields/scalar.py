"""Converters for numeric, string and bool values."""

from __future__ import annotations

import math
import re
from typing import Any

from pyprotojson._constants import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    UINT32_MAX,
    UINT64_MAX,
)
from pyprotojson._errors import type_mismatch
from pyprotojson._reader import JsonReader, JsonTokenType
from pyprotojson._types import ValueType
from pyprotojson._writer import JsonWriter
from pyprotojson.fields._base import ValueConverter
from pyprotojson.options import SerializerOptions

_INT_RANGES: dict[ValueType, tuple[int, int]] = {
    ValueType.INT32: (INT32_MIN, INT32_MAX),
    ValueType.INT64: (INT64_MIN, INT64_MAX),
    ValueType.UINT32: (0, UINT32_MAX),
    ValueType.UINT64: (0, UINT64_MAX),
}

FLOAT32_MAX = 3.4028234663852886e38

_INT_TEXT = re.compile(r"-?(?:0|[1-9][0-9]*)")
_FLOAT_TEXT = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

_NON_FINITE: dict[str, float] = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "-Infinity": -math.inf,
}


class ScalarConverter(ValueConverter):
    """Converter for one of the :class:`~pyprotojson._types.ValueType` scalars."""

    def __init__(self, value_type: ValueType) -> None:
        self._value_type = value_type

    @property
    def type_name(self) -> str:
        return self._value_type.value

    def _check_int(self, value: int) -> int:
        low, high = _INT_RANGES[self._value_type]
        if not low <= value <= high:
            raise type_mismatch(self.type_name, f"{value} is out of range [{low}, {high}]")
        return value

    def _to_float(self, value: int | float | str) -> float:
        try:
            value = float(value)
        except OverflowError:
            raise type_mismatch(self.type_name, "number is too large for a float") from None
        if (
            self._value_type is ValueType.FLOAT
            and math.isfinite(value)
            and abs(value) > FLOAT32_MAX
        ):
            raise type_mismatch(self.type_name, f"{value!r} is out of range for float")
        return value

    def from_string(self, text: str) -> Any:
        """Convert the text of a quoted JSON value (or map key) to this type."""
        vt = self._value_type
        if vt is ValueType.STRING:
            return text
        if vt is ValueType.BOOL:
            if text in ("true", "false"):
                return text == "true"
            raise type_mismatch(self.type_name, f"{text!r} is not a bool")
        if vt in _INT_RANGES:
            if not _INT_TEXT.fullmatch(text):
                raise type_mismatch(self.type_name, f"{text!r} is not an integer")
            return self._check_int(int(text))
        if text in _NON_FINITE:
            return _NON_FINITE[text]
        if not _FLOAT_TEXT.fullmatch(text):
            raise type_mismatch(self.type_name, f"{text!r} is not a number")
        return self._to_float(text)

    def read_value(self, reader: JsonReader, options: SerializerOptions) -> Any:
        token = reader.token_type
        value = reader.value
        vt = self._value_type

        if vt is ValueType.STRING:
            return reader.get_string()
        if vt is ValueType.BOOL:
            return reader.get_bool()
        if token is JsonTokenType.STRING:
            return self.from_string(value)
        if token is not JsonTokenType.NUMBER:
            raise type_mismatch(self.type_name, f"found {token.value} token")

        if vt in _INT_RANGES:
            if isinstance(value, float):
                if not value.is_integer():
                    raise type_mismatch(self.type_name, f"{value!r} is not an integer")
                value = int(value)
            return self._check_int(value)
        return self._to_float(value)

    def write_value(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        vt = self._value_type
        if vt is ValueType.STRING:
            writer.write_string_value(value)
        elif vt is ValueType.BOOL:
            writer.write_bool_value(value)
        elif vt in _INT_RANGES:
            writer.write_number_value(int(value))
        elif math.isnan(value):
            writer.write_string_value("NaN")
        elif math.isinf(value):
            writer.write_string_value("Infinity" if value > 0 else "-Infinity")
        else:
            writer.write_number_value(float(value))

    def __repr__(self) -> str:
        return f"ScalarConverter({self._value_type.value})"
