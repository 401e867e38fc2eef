"""Tests for the typed JSON layer, data entries and the protobuf messages."""

from __future__ import annotations

import pytest

from waves_sdk.data_entry import DataEntry, EntryType
from waves_sdk.errors import (
    ArrayExpectedError,
    Base64DecodeError,
    BoolExpectedError,
    IntExpectedError,
    KeyMissingError,
    ObjectExpectedError,
    StringExpectedError,
    UnknownTypeError,
)
from waves_sdk.proto import put, serialize, transaction_pb2
from waves_sdk.types import AssetId, ChainId
from waves_sdk.values import Json, Value


class TestJson:
    """Key access on JSON objects."""

    def test_get_present_key(self) -> None:
        assert Json({"a": 1}).get("a").as_int() == 1

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyMissingError) as exc_info:
            Json({}).get("a")
        assert exc_info.value.key == "a"

    def test_null_counts_as_absent(self) -> None:
        json = Json({"a": None})
        assert not json.exists("a")
        assert "a" not in json
        with pytest.raises(KeyMissingError):
            json.get("a")

    def test_get_or_default(self) -> None:
        assert Json({}).get_or("a", 5).as_int() == 5
        assert Json({"a": None}).get_or("a", 5).as_int() == 5

    def test_put_and_remove(self) -> None:
        json = Json().put("a", 1).put("b", Json({"c": 2}))
        assert json.data == {"a": 1, "b": {"c": 2}}
        json.remove("a").remove("missing")
        assert json.data == {"b": {"c": 2}}

    def test_loads_dumps(self) -> None:
        json = Json.loads('{"a": [1, 2], "b": "x"}')
        assert json.dumps() == '{"a":[1,2],"b":"x"}'

    def test_loads_rejects_non_object(self) -> None:
        with pytest.raises(ObjectExpectedError):
            Json.loads("[1, 2]")


class TestValue:
    """Typed projections of a single JSON value."""

    def test_as_int_accepts_exact_decimal_string(self) -> None:
        assert Value("123").as_int() == 123
        assert Value("-5").as_int() == -5

    @pytest.mark.parametrize("raw", ["0123", "1.0", "abc", 1.5, True, None, [1]])
    def test_as_int_rejects(self, raw: object) -> None:
        with pytest.raises(IntExpectedError):
            Value(raw).as_int()

    def test_type_mismatches(self) -> None:
        with pytest.raises(BoolExpectedError):
            Value(1).as_bool()
        with pytest.raises(StringExpectedError):
            Value(1).as_str()
        with pytest.raises(ArrayExpectedError):
            Value("x").as_list()
        with pytest.raises(ObjectExpectedError):
            Value([]).as_json()

    def test_errors_are_type_errors(self) -> None:
        with pytest.raises(TypeError):
            Value("x").as_bool()

    def test_lists(self) -> None:
        assert Value([1, "2"]).as_int_list() == [1, 2]
        assert Value(["a", "b"]).as_str_list() == ["a", "b"]
        assert [v.as_int() for v in Value([3, 4])] == [3, 4]

    def test_str_int_map(self) -> None:
        assert Value({"a": 1, "b": "2"}).as_str_int_map() == {"a": 1, "b": 2}

    def test_base64_decoded_requires_prefix(self) -> None:
        assert Value("base64:AQI=").as_base64_decoded() == b"\x01\x02"
        with pytest.raises(Base64DecodeError):
            Value("AQI=").as_base64_decoded()

    def test_chain_id_from_int_or_char(self) -> None:
        assert Value(84).as_chain_id() == ChainId.TESTNET
        assert Value("T").as_chain_id() == ChainId.TESTNET

    def test_null_asset_id_is_waves(self) -> None:
        assert Value(None).as_asset_id() is AssetId.WAVES

    def test_recipient_alias_uses_given_chain(self) -> None:
        recipient = Value("alice").as_recipient(ChainId.TESTNET)
        assert recipient.is_alias
        assert recipient.to_string() == "alias:T:alice"


class TestDataEntry:
    """Account storage entries."""

    def test_integer_entry_json(self) -> None:
        entry = DataEntry.integer("k", 5)
        assert entry.to_json() == {"key": "k", "type": "integer", "value": 5}
        assert entry.type is EntryType.INTEGER
        assert entry.value == 5

    def test_binary_entry_json(self) -> None:
        entry = DataEntry.binary("k", b"\x01\x02")
        assert entry.to_json()["value"] == "base64:AQI="
        assert entry.value == b"\x01\x02"

    def test_delete_entry(self) -> None:
        entry = DataEntry.delete("k")
        assert entry.to_json() == {"key": "k", "type": None}
        assert entry.type is EntryType.DELETE
        assert entry.value is None

    def test_parsed_node_entry(self) -> None:
        entry = Value({"key": "flag", "type": "boolean", "value": True}).as_data_entry()
        assert entry.key == "flag"
        assert entry.value is True

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(UnknownTypeError):
            DataEntry.build("k", 9, 1)
        with pytest.raises(UnknownTypeError):
            EntryType.parse("float")

    def test_value_type_checked(self) -> None:
        with pytest.raises(IntExpectedError):
            DataEntry.build("k", EntryType.INTEGER, True)
        with pytest.raises(StringExpectedError):
            DataEntry.build("k", EntryType.STRING, 1)

    def test_proto_integer_zero_is_written(self) -> None:
        assert serialize(DataEntry.integer("a", 0).to_proto()) == b"\x0a\x01a\x50\x00"

    def test_proto_string(self) -> None:
        assert serialize(DataEntry.string("a", "hi").to_proto()) == b"\x0a\x01a\x6a\x02hi"

    def test_proto_delete_has_only_key(self) -> None:
        assert serialize(DataEntry.delete("a").to_proto()) == b"\x0a\x01a"



    def test_proto_boolean_false_is_written(self) -> None:
        assert serialize(DataEntry.boolean("a", False).to_proto()) == b"\x0a\x01a\x58\x00"

    def test_proto_negative_integer(self) -> None:
        assert serialize(DataEntry.integer("a", -1).to_proto()) == b"\x0a\x01a\x50" + b"\xff" * 9 + b"\x01"


class TestProtoMessages:
    """Transaction messages built from the registered schemas."""

    def test_default_scalars_omitted(self) -> None:
        message = transaction_pb2.Transaction(chain_id=0, sender_public_key=b"", timestamp=0, version=0)
        assert serialize(message) == b""

    def test_put_writes_empty_message(self) -> None:
        message = transaction_pb2.Transaction()
        put(message, "fee")
        assert serialize(message) == b"\x1a\x00"

    def test_put_merges_value(self) -> None:
        message = transaction_pb2.Transaction()
        put(message, "lease_cancel", transaction_pb2.LeaseCancelTransactionData(lease_id=b"\x01"))
        assert serialize(message) == b"\xea\x06\x03\x0a\x01\x01"

    def test_large_field_number(self) -> None:
        message = transaction_pb2.Transaction()
        put(message, "lease_cancel")
        assert serialize(message) == b"\xea\x06\x00"

    def test_data_field_numbers(self) -> None:
        fields = transaction_pb2.Transaction.DESCRIPTOR.fields_by_number
        assert fields[104].name == "transfer"
        assert fields[116].name == "invoke_script"
        assert fields[117].containing_oneof.name == "data"
