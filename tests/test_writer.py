"""JSON token writer tests."""

import math

import pytest

from pyprotojson._errors import MaxDepthExceededError
from pyprotojson._writer import JsonWriter


class TestCompact:
    def test_object(self):
        w = JsonWriter()
        w.write_start_object()
        w.write_property_name("id")
        w.write_number_value(7)
        w.write_property_name("tags")
        w.write_start_array()
        w.write_string_value("a")
        w.write_string_value("b")
        w.write_end_array()
        w.write_end_object()
        assert w.result == '{"id":7,"tags":["a","b"]}'

    def test_empty_containers(self):
        w = JsonWriter()
        w.write_start_array()
        w.write_start_object()
        w.write_end_object()
        w.write_start_array()
        w.write_end_array()
        w.write_end_array()
        assert w.result == "[{},[]]"

    def test_scalars(self):
        w = JsonWriter()
        w.write_start_array()
        w.write_bool_value(True)
        w.write_bool_value(False)
        w.write_null_value()
        w.write_number_value(0.25)
        w.write_number_value(-3)
        w.write_end_array()
        assert w.result == "[true,false,null,0.25,-3]"

    def test_string_escaping(self):
        w = JsonWriter()
        w.write_string_value('a"b\\c\né')
        assert w.result == '"a\\"b\\\\c\\né"'

    def test_non_finite_number_rejected(self):
        w = JsonWriter()
        with pytest.raises(ValueError):
            w.write_number_value(math.inf)

    def test_depth(self):
        w = JsonWriter()
        assert w.depth == 0
        w.write_start_object()
        w.write_property_name("a")
        w.write_start_array()
        assert w.depth == 2


class TestIndented:
    def test_indent(self):
        w = JsonWriter(indent=2)
        w.write_start_object()
        w.write_property_name("id")
        w.write_number_value(7)
        w.write_property_name("tags")
        w.write_start_array()
        w.write_string_value("a")
        w.write_end_array()
        w.write_property_name("empty")
        w.write_start_object()
        w.write_end_object()
        w.write_end_object()
        assert w.result == (
            '{\n'
            '  "id": 7,\n'
            '  "tags": [\n'
            '    "a"\n'
            '  ],\n'
            '  "empty": {}\n'
            '}'
        )


class TestMaxDepth:
    def test_limit(self):
        w = JsonWriter(max_depth=2)
        w.write_start_array()
        w.write_start_array()
        with pytest.raises(MaxDepthExceededError):
            w.write_start_array()
