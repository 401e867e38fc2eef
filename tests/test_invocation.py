"""Tests for dApp function call encoding."""

from __future__ import annotations

import pytest

from waves_sdk.errors import UnknownTypeError
from waves_sdk.transactions import Arg, ArgType, FunctionCall
from waves_sdk.values import Json


class TestArgEncoding:
    """Binary form of single arguments."""

    def test_integer(self) -> None:
        assert Arg.integer(1).to_bytes() == b"\x00" + b"\x00" * 7 + b"\x01"
        assert Arg.integer(-1).to_bytes() == b"\x00" + b"\xff" * 8

    def test_binary(self) -> None:
        assert Arg.binary(b"\xaa\xbb").to_bytes() == b"\x01\x00\x00\x00\x02\xaa\xbb"

    def test_string_is_utf8(self) -> None:
        assert Arg.string("é").to_bytes() == b"\x02\x00\x00\x00\x02\xc3\xa9"

    def test_booleans(self) -> None:
        assert Arg.boolean(True).to_bytes() == b"\x06"
        assert Arg.boolean(False).to_bytes() == b"\x07"

    def test_list(self) -> None:
        arg = Arg.list([Arg.boolean(True), Arg.boolean(False)])
        assert arg.to_bytes() == b"\x0b\x00\x00\x00\x02\x06\x07"

    def test_constructors_check_types(self) -> None:
        with pytest.raises(TypeError):
            Arg.integer(True)
        with pytest.raises(TypeError):
            Arg.string(5)  # type: ignore[arg-type]


class TestFunctionCall:
    """Named and default calls."""

    def test_default_call_bytes(self) -> None:
        assert FunctionCall.default().to_bytes() == b"\x00"
        assert FunctionCall().is_default

    def test_named_call_bytes(self) -> None:
        call = FunctionCall("retransmit", [Arg.string("ab")])
        assert call.to_bytes() == (
            b"\x01\x09\x01"
            + b"\x00\x00\x00\x0aretransmit"
            + b"\x00\x00\x00\x01"
            + b"\x02\x00\x00\x00\x02ab"
        )

    def test_named_call_without_args(self) -> None:
        assert FunctionCall("ping").to_bytes() == b"\x01\x09\x01\x00\x00\x00\x04ping\x00\x00\x00\x00"

    def test_default_call_json_is_null(self) -> None:
        assert FunctionCall.default().to_json() is None
        assert FunctionCall.from_json(None).is_default

    def test_json(self) -> None:
        call = FunctionCall("f", [Arg.binary(b"\x01\x02"), Arg.list([Arg.integer(3)])])
        assert call.to_json() == {
            "function": "f",
            "args": [
                {"type": "binary", "value": "base64:AQI="},
                {"type": "list", "value": [{"type": "integer", "value": 3}]},
            ],
        }

    def test_from_json(self) -> None:
        data = {
            "function": "f",
            "args": [
                {"type": "boolean", "value": True},
                {"type": "string", "value": "s"},
                {"type": "binary", "value": "base64:AQI="},
            ],
        }
        call = FunctionCall.from_json(Json(data))
        assert call.name == "f"
        assert call.args == (Arg.boolean(True), Arg.string("s"), Arg.binary(b"\x01\x02"))
        assert call.to_json() == data

    def test_unknown_arg_type(self) -> None:
        with pytest.raises(UnknownTypeError):
            ArgType.parse("float")
        with pytest.raises(UnknownTypeError):
            Arg.from_json(Json({"type": "union", "value": 1}))

    def test_equality(self) -> None:
        assert FunctionCall("f", [Arg.integer(1)]) == FunctionCall("f", [Arg.integer(1)])
        assert FunctionCall("f", [Arg.integer(1)]) != FunctionCall("f", [Arg.integer(2)])
