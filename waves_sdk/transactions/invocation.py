"""dApp function calls carried by InvokeScript transactions.

Binary layout of a call (all integers big-endian)::

    default call   0x00
    named call     0x01 0x09 0x01  len(name):u32  name  argc:u32  args...

    integer arg    0x00  value:i64
    binary arg     0x01  len:u32  bytes
    string arg     0x02  len:u32  utf-8 bytes
    boolean arg    0x06 (true) | 0x07 (false)
    list arg       0x0B  count:u32  args...
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable, Sequence

from waves_sdk.encoding import Base64String, framed, pack_int, pack_len
from waves_sdk.errors import UnknownTypeError
from waves_sdk.values import Json, Value


class ArgType(IntEnum):
    BINARY = 1
    BOOLEAN = 2
    INTEGER = 3
    STRING = 4
    LIST = 5

    @classmethod
    def parse(cls, text: str) -> "ArgType":
        try:
            return cls[text.upper()]
        except KeyError:
            raise UnknownTypeError(f"unknown argument type `{text}`") from None

    def json_name(self) -> str:
        return self.name.lower()


_INTEGER_TAG = b"\x00"
_BINARY_TAG = b"\x01"
_STRING_TAG = b"\x02"
_TRUE_TAG = b"\x06"
_FALSE_TAG = b"\x07"
_LIST_TAG = b"\x0b"


class Arg:
    """A typed dApp function argument."""

    __slots__ = ("_type", "_value")

    def __init__(self, arg_type: ArgType, value: Any) -> None:
        self._type = ArgType(arg_type)
        self._value = value

    @classmethod
    def binary(cls, value: bytes) -> "Arg":
        return cls(ArgType.BINARY, bytes(value))

    @classmethod
    def boolean(cls, value: bool) -> "Arg":
        return cls(ArgType.BOOLEAN, Value(value).as_bool())

    @classmethod
    def integer(cls, value: int) -> "Arg":
        return cls(ArgType.INTEGER, Value(value).as_int())

    @classmethod
    def string(cls, value: str) -> "Arg":
        return cls(ArgType.STRING, Value(value).as_str())

    @classmethod
    def list(cls, args: Iterable["Arg"]) -> "Arg":
        return cls(ArgType.LIST, tuple(args))

    @classmethod
    def from_json(cls, json_data: Json) -> "Arg":
        arg_type = ArgType.parse(json_data.get("type").as_str())
        value = json_data.get("value")
        if arg_type is ArgType.LIST:
            return cls.list(cls.from_json(item) for item in value.as_json_list())
        if arg_type is ArgType.BINARY:
            return cls.binary(value.as_base64_decoded())
        if arg_type is ArgType.BOOLEAN:
            return cls.boolean(value.as_bool())
        if arg_type is ArgType.INTEGER:
            return cls.integer(value.as_int())
        return cls.string(value.as_str())

    @property
    def type(self) -> ArgType:
        return self._type

    @property
    def value(self) -> Any:
        return self._value

    def to_json(self) -> dict[str, Any]:
        if self._type is ArgType.BINARY:
            value: Any = Base64String.from_bytes(self._value).to_string()
        elif self._type is ArgType.LIST:
            value = [arg.to_json() for arg in self._value]
        else:
            value = self._value
        return {"type": self._type.json_name(), "value": value}

    def to_bytes(self) -> bytes:
        if self._type is ArgType.INTEGER:
            return _INTEGER_TAG + pack_int(self._value)
        if self._type is ArgType.BINARY:
            return _BINARY_TAG + framed(self._value)
        if self._type is ArgType.STRING:
            return _STRING_TAG + framed(self._value.encode("utf-8"))
        if self._type is ArgType.BOOLEAN:
            return _TRUE_TAG if self._value else _FALSE_TAG
        return _LIST_TAG + encode_args(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arg):
            return NotImplemented
        return self._type == other._type and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._type, self._value))

    def __repr__(self) -> str:
        return f"Arg({self._type.name}, {self._value!r})"


def encode_args(args: Sequence[Arg]) -> bytes:
    """Count-prefixed concatenation of encoded arguments."""
    return pack_len(len(args)) + b"".join(arg.to_bytes() for arg in args)


class FunctionCall:
    """Name and arguments of a dApp callable; ``default`` means no explicit call."""

    __slots__ = ("_name", "_args")

    DEFAULT_NAME = "default"
    # call present, FUNCTION_CALL expression, user-defined function
    _HEADER = b"\x01\x09\x01"

    def __init__(self, name: str | None = None, args: Iterable[Arg] | None = None) -> None:
        self._name = self.DEFAULT_NAME if name is None else name
        self._args = tuple(args or ())

    @classmethod
    def default(cls) -> "FunctionCall":
        return cls()

    @classmethod
    def from_json(cls, json_data: Json | None) -> "FunctionCall":
        """Parse the ``call`` object; ``None`` is the default call."""
        if json_data is None:
            return cls.default()
        name = json_data.get_or("function", cls.DEFAULT_NAME).as_str()
        args = [Arg.from_json(item) for item in json_data.get_or("args", []).as_json_list()]
        return cls(name, args)

    @property
    def name(self) -> str:
        return self._name

    @property
    def args(self) -> tuple[Arg, ...]:
        return self._args

    @property
    def is_default(self) -> bool:
        return self._name == self.DEFAULT_NAME

    def to_json(self) -> dict[str, Any] | None:
        if self.is_default:
            return None
        return {"function": self._name, "args": [arg.to_json() for arg in self._args]}

    def to_bytes(self) -> bytes:
        if self.is_default:
            return b"\x00"
        return self._HEADER + framed(self._name.encode("utf-8")) + encode_args(self._args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionCall):
            return NotImplemented
        return self._name == other._name and self._args == other._args

    def __hash__(self) -> int:
        return hash((self._name, self._args))

    def __repr__(self) -> str:
        return f"FunctionCall({self._name!r}, {list(self._args)!r})"
