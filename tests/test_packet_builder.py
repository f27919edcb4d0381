import json

import pytest
from txbuilder.errors import (BuildError, ErrorCode, PacketError,
                              ValueConversionError)
from txbuilder.packet import (PacketArray, PacketBuilder, PacketObject,
                              PacketString, packet_value)


def test_object_tree_converts_to_isomorphic_json():
    value = packet_value(
        {
            "array": ["array", "of", "strings"],
            "subobj": {"object style": "in brackets"},
            "nested": [["a", "b"], {"k": "v"}],
        }
    )
    data = PacketBuilder(value).build()
    assert data.get() == {
        "array": ["array", "of", "strings"],
        "subobj": {"object style": "in brackets"},
        "nested": [["a", "b"], {"k": "v"}],
    }
    # serialized snapshot parses back to the same tree
    assert json.loads(data.get_string()) == data.get()


def test_serialized_form_is_compact_and_sorted():
    data = PacketBuilder(packet_value({"b": "2", "a": "1"})).build()
    assert data.get_string() == '{"a":"1","b":"2"}'


def test_array_order_is_preserved():
    data = PacketBuilder(packet_value({"xs": ["3", "1", "2"]})).build()
    assert data.get()["xs"] == ["3", "1", "2"]


@pytest.mark.parametrize(
    "root",
    [PacketString("just text"), PacketArray((PacketString("a"),))],
)
def test_non_object_root_fails_to_build(root):
    with pytest.raises(BuildError) as ei:
        PacketBuilder(root).build()
    assert ei.value.code == ErrorCode.BUILD


def test_malformed_node_in_array_reports_array_conversion():
    bad = PacketObject({"xs": PacketArray((PacketString("ok"), 42))})  # type: ignore[arg-type]
    with pytest.raises(ValueConversionError) as ei:
        PacketBuilder(bad).build()
    assert ei.value.code == ErrorCode.ARRAY_CONVERSION


def test_malformed_node_in_object_reports_object_conversion():
    bad = PacketObject({"outer": PacketObject({"n": 7})})  # type: ignore[dict-item]
    with pytest.raises(ValueConversionError) as ei:
        PacketBuilder(bad).build()
    assert ei.value.code == ErrorCode.OBJECT_CONVERSION


def test_external_json_is_passed_through_unchanged():
    raw = {"I am": "json", "heres": ["an", "array"], "andbool": True, "n": 3}
    data = PacketBuilder.from_json(raw).build()
    assert data.is_json
    assert data.get() == raw
    assert json.loads(data.get_string()) == raw


def test_external_json_is_copied_at_construction():
    raw = {"a": ["x"]}
    builder = PacketBuilder.from_json(raw)
    raw["a"].append("y")
    assert builder.build().get() == {"a": ["x"]}


def test_value_source_stays_marked_as_value_after_build():
    data = PacketBuilder(packet_value({"a": "b"})).build()
    assert data.is_built
    assert data.is_json is False
    assert repr(data) == "PacketData(value, built)"


def test_external_null_builds_and_reads_back():
    data = PacketBuilder.from_json(None).build()
    assert data.is_built
    assert data.get() is None
    assert data.get_string() == "null"


def test_unserializable_external_json_fails_to_build():
    with pytest.raises(BuildError):
        PacketBuilder.from_json({"bad": object()}).build()


def test_built_snapshot_is_independent_of_later_reads():
    data = PacketBuilder(packet_value({"a": {"b": "c"}})).build()
    got = data.get()
    got["a"]["b"] = "mutated"
    assert data.get() == {"a": {"b": "c"}}


def test_unbuilt_packet_data_access_fails():
    from txbuilder.packet import PacketData

    empty = PacketData()
    assert not empty.is_built
    with pytest.raises(PacketError) as ei:
        empty.get()
    assert ei.value.code == ErrorCode.PACKET_JSON
    with pytest.raises(PacketError) as ei:
        empty.get_string()
    assert ei.value.code == ErrorCode.PACKET_STRING


def test_packet_value_rejects_non_string_scalars():
    for bad in (1, 1.5, True, None):
        with pytest.raises(TypeError):
            packet_value({"x": bad})
    with pytest.raises(TypeError):
        packet_value({1: "x"})


def test_from_string_helper():
    assert PacketBuilder.from_string("abc") == PacketString("abc")
