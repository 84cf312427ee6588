"""Sequential JSON token writer."""

from __future__ import annotations

import json
import math
from io import StringIO

from pyprotojson._constants import DEFAULT_MAX_DEPTH
from pyprotojson._errors import ERR_MSG_MAX_DEPTH_EXCEEDED, MaxDepthExceededError


class JsonWriter:
    """Writes JSON tokens into a StringIO buffer.

    Separators are inserted automatically; callers only emit structural
    calls, property names and values in order.
    """

    def __init__(self, indent: int | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._w = StringIO()
        self._indent = indent
        self._max_depth = max_depth
        # One entry per open container: True once it holds an element.
        self._stack: list[bool] = []
        self._after_name = False

    @property
    def result(self) -> str:
        return self._w.getvalue()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _newline(self) -> None:
        if self._indent is not None:
            self._w.write("\n" + " " * (self._indent * len(self._stack)))

    def _begin_value(self) -> None:
        if self._after_name:
            self._after_name = False
            return
        if self._stack:
            if self._stack[-1]:
                self._w.write(",")
            self._stack[-1] = True
            self._newline()

    def _open(self, token: str) -> None:
        self._begin_value()
        if len(self._stack) >= self._max_depth:
            raise MaxDepthExceededError(
                ERR_MSG_MAX_DEPTH_EXCEEDED,
                f"JSON nesting depth exceeds limit {self._max_depth}",
            )
        self._w.write(token)
        self._stack.append(False)

    def _close(self, token: str) -> None:
        has_elements = self._stack.pop()
        if has_elements:
            self._newline()
        self._w.write(token)

    def write_start_object(self) -> None:
        self._open("{")

    def write_end_object(self) -> None:
        self._close("}")

    def write_start_array(self) -> None:
        self._open("[")

    def write_end_array(self) -> None:
        self._close("]")

    def write_property_name(self, name: str) -> None:
        self._begin_value()
        self._w.write(json.dumps(name, ensure_ascii=False))
        self._w.write(": " if self._indent is not None else ":")
        self._after_name = True

    def write_string_value(self, value: str) -> None:
        self._begin_value()
        self._w.write(json.dumps(value, ensure_ascii=False))

    def write_number_value(self, value: int | float) -> None:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"{value!r} is not a valid JSON number")
        self._begin_value()
        self._w.write(repr(value) if isinstance(value, float) else str(int(value)))

    def write_bool_value(self, value: bool) -> None:
        self._begin_value()
        self._w.write("true" if value else "false")

    def write_null_value(self) -> None:
        self._begin_value()
        self._w.write("null")
