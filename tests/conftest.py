"""Shared test fixtures.

Test messages are built at runtime from a FileDescriptorProto in a private
descriptor pool, equivalent to this proto3 file:

    package pyprotojson.testing;

    enum Color { COLOR_UNSPECIFIED = 0; RED = 1; GREEN = 2; }

    message Address { string street = 1; int32 number = 2; }
    message Tagged { int32 id = 1; repeated string tags = 2; }
    message Blob { bytes data = 1; }
    message Node { Node child = 1; int32 value = 2; }

    message User {
      int32 id = 1;
      repeated string tags = 2;
      string user_name = 3 [json_name = "login"];
      Address address = 4;
      repeated Address previous_addresses = 5;
      map<string, int64> scores = 6;
      Color color = 7;
      repeated Color colors = 8;
      oneof contact { string email = 9; string phone = 10; }
      double ratio = 11;
      float weight = 12;
      uint32 visits = 13;
      uint64 big = 14;
      sint32 delta = 15;
      fixed64 checksum = 16;
      bool active = 17;
      map<string, Address> addresses_by_label = 18;
      map<int32, bool> flags = 19;
      int64 balance = 20;
      User manager = 21;
    }

    message Counter { optional int32 count = 1; }

plus a proto2 file in the same package, for closed enums:

    enum Level { LEVEL_LOW = 0; LEVEL_HIGH = 1; }
    message Legacy { optional Level level = 1; }
"""

from types import SimpleNamespace

import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper

from pyprotojson import clear_cache

FDP = descriptor_pb2.FieldDescriptorProto
PACKAGE = "pyprotojson.testing"


def _json_name(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


def _add_field(msg, name, number, type_, *, repeated=False, type_name=None,
               json_name=None, oneof_index=None, proto3_optional=False):
    field = msg.field.add()
    field.name = name
    field.number = number
    field.type = type_
    field.label = FDP.LABEL_REPEATED if repeated else FDP.LABEL_OPTIONAL
    field.json_name = json_name or _json_name(name)
    if type_name is not None:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index
    if proto3_optional:
        field.proto3_optional = True
    return field


def _add_map_entry(msg, entry_name, key_type, value_type, value_type_name=None):
    entry = msg.nested_type.add()
    entry.name = entry_name
    entry.options.map_entry = True
    _add_field(entry, "key", 1, key_type)
    _add_field(entry, "value", 2, value_type, type_name=value_type_name)
    return f".{PACKAGE}.{msg.name}.{entry_name}"


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    fp = descriptor_pb2.FileDescriptorProto()
    fp.name = "pyprotojson/testing/messages.proto"
    fp.package = PACKAGE
    fp.syntax = "proto3"

    color = fp.enum_type.add()
    color.name = "Color"
    for number, value_name in enumerate(["COLOR_UNSPECIFIED", "RED", "GREEN"]):
        value = color.value.add()
        value.name = value_name
        value.number = number

    address = fp.message_type.add()
    address.name = "Address"
    _add_field(address, "street", 1, FDP.TYPE_STRING)
    _add_field(address, "number", 2, FDP.TYPE_INT32)

    tagged = fp.message_type.add()
    tagged.name = "Tagged"
    _add_field(tagged, "id", 1, FDP.TYPE_INT32)
    _add_field(tagged, "tags", 2, FDP.TYPE_STRING, repeated=True)

    blob = fp.message_type.add()
    blob.name = "Blob"
    _add_field(blob, "data", 1, FDP.TYPE_BYTES)

    node = fp.message_type.add()
    node.name = "Node"
    _add_field(node, "child", 1, FDP.TYPE_MESSAGE, type_name=f".{PACKAGE}.Node")
    _add_field(node, "value", 2, FDP.TYPE_INT32)

    user = fp.message_type.add()
    user.name = "User"
    user.oneof_decl.add().name = "contact"
    address_type = f".{PACKAGE}.Address"
    scores_entry = _add_map_entry(user, "ScoresEntry", FDP.TYPE_STRING, FDP.TYPE_INT64)
    by_label_entry = _add_map_entry(
        user, "AddressesByLabelEntry", FDP.TYPE_STRING, FDP.TYPE_MESSAGE, address_type
    )
    flags_entry = _add_map_entry(user, "FlagsEntry", FDP.TYPE_INT32, FDP.TYPE_BOOL)

    _add_field(user, "id", 1, FDP.TYPE_INT32)
    _add_field(user, "tags", 2, FDP.TYPE_STRING, repeated=True)
    _add_field(user, "user_name", 3, FDP.TYPE_STRING, json_name="login")
    _add_field(user, "address", 4, FDP.TYPE_MESSAGE, type_name=address_type)
    _add_field(user, "previous_addresses", 5, FDP.TYPE_MESSAGE, repeated=True,
               type_name=address_type)
    _add_field(user, "scores", 6, FDP.TYPE_MESSAGE, repeated=True, type_name=scores_entry)
    _add_field(user, "color", 7, FDP.TYPE_ENUM, type_name=f".{PACKAGE}.Color")
    _add_field(user, "colors", 8, FDP.TYPE_ENUM, repeated=True,
               type_name=f".{PACKAGE}.Color")
    _add_field(user, "email", 9, FDP.TYPE_STRING, oneof_index=0)
    _add_field(user, "phone", 10, FDP.TYPE_STRING, oneof_index=0)
    _add_field(user, "ratio", 11, FDP.TYPE_DOUBLE)
    _add_field(user, "weight", 12, FDP.TYPE_FLOAT)
    _add_field(user, "visits", 13, FDP.TYPE_UINT32)
    _add_field(user, "big", 14, FDP.TYPE_UINT64)
    _add_field(user, "delta", 15, FDP.TYPE_SINT32)
    _add_field(user, "checksum", 16, FDP.TYPE_FIXED64)
    _add_field(user, "active", 17, FDP.TYPE_BOOL)
    _add_field(user, "addresses_by_label", 18, FDP.TYPE_MESSAGE, repeated=True,
               type_name=by_label_entry)
    _add_field(user, "flags", 19, FDP.TYPE_MESSAGE, repeated=True, type_name=flags_entry)
    _add_field(user, "balance", 20, FDP.TYPE_INT64)
    _add_field(user, "manager", 21, FDP.TYPE_MESSAGE, type_name=f".{PACKAGE}.User")

    counter = fp.message_type.add()
    counter.name = "Counter"
    counter.oneof_decl.add().name = "_count"
    _add_field(counter, "count", 1, FDP.TYPE_INT32, oneof_index=0, proto3_optional=True)
    return fp


def _build_legacy_file() -> descriptor_pb2.FileDescriptorProto:
    fp = descriptor_pb2.FileDescriptorProto()
    fp.name = "pyprotojson/testing/legacy.proto"
    fp.package = PACKAGE
    fp.syntax = "proto2"

    level = fp.enum_type.add()
    level.name = "Level"
    for number, value_name in enumerate(["LEVEL_LOW", "LEVEL_HIGH"]):
        value = level.value.add()
        value.name = value_name
        value.number = number

    legacy = fp.message_type.add()
    legacy.name = "Legacy"
    _add_field(legacy, "level", 1, FDP.TYPE_ENUM, type_name=f".{PACKAGE}.Level")
    return fp


def _build_messages() -> SimpleNamespace:
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(_build_file().SerializeToString())
    pool.AddSerializedFile(_build_legacy_file().SerializeToString())

    def message(name):
        return message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))

    return SimpleNamespace(
        Address=message("Address"),
        Tagged=message("Tagged"),
        Blob=message("Blob"),
        Node=message("Node"),
        User=message("User"),
        Counter=message("Counter"),
        Legacy=message("Legacy"),
        Color=EnumTypeWrapper(pool.FindEnumTypeByName(f"{PACKAGE}.Color")),
    )


_MESSAGES = _build_messages()


@pytest.fixture
def pb():
    return _MESSAGES


@pytest.fixture(autouse=True)
def _fresh_converter_cache():
    clear_cache()
    yield
    clear_cache()
