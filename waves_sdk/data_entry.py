"""Account data storage entries (Data transaction payload and node reads)."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from waves_sdk.encoding import Base64String
from waves_sdk.errors import UnknownTypeError
from waves_sdk.proto import transaction_pb2
from waves_sdk.values import Json, JsonView, Value


class EntryType(IntEnum):
    BINARY = 1
    BOOLEAN = 2
    INTEGER = 3
    STRING = 4
    DELETE = 5

    @classmethod
    def parse(cls, text: str) -> "EntryType":
        for entry_type, name in _ENTRY_TYPE_NAMES.items():
            if name == text:
                return entry_type
        raise UnknownTypeError(f"unknown data entry type `{text}`")

    def json_name(self) -> str:
        if self not in _ENTRY_TYPE_NAMES:
            raise UnknownTypeError(f"data entry type {self.name} has no JSON name")
        return _ENTRY_TYPE_NAMES[self]


_ENTRY_TYPE_NAMES = {
    EntryType.BINARY: "binary",
    EntryType.BOOLEAN: "boolean",
    EntryType.INTEGER: "integer",
    EntryType.STRING: "string",
}

_PROTO_VALUE_FIELDS = {
    EntryType.INTEGER: "int_value",
    EntryType.BOOLEAN: "bool_value",
    EntryType.BINARY: "binary_value",
    EntryType.STRING: "string_value",
}


class DataEntry(JsonView):
    """One key/value pair; a delete entry has a key and no value.

    JSON form: ``{"key", "type", "value"}`` with binary values written as
    ``base64:`` strings. A delete entry is ``{"key", "type": null}``.
    """

    @classmethod
    def build(cls, key: str, entry_type: EntryType | int, value: Any = None) -> "DataEntry":
        try:
            entry_type = EntryType(entry_type)
        except ValueError:
            raise UnknownTypeError(f"unknown data entry type {entry_type!r}") from None
        if entry_type is EntryType.DELETE:
            return cls(Json({"key": key, "type": None}))
        if value is None:
            raise ValueError(f"data entry `{key}`: value expected for type {entry_type.name}")
        if entry_type is EntryType.BINARY:
            value = Base64String.from_bytes(value).to_string()
        elif entry_type is EntryType.BOOLEAN:
            Value(value).as_bool()
        elif entry_type is EntryType.INTEGER:
            value = Value(value).as_int()
        else:
            Value(value).as_str()
        return cls(Json({"key": key, "type": entry_type.json_name(), "value": value}))

    @classmethod
    def binary(cls, key: str, value: bytes) -> "DataEntry":
        return cls.build(key, EntryType.BINARY, value)

    @classmethod
    def string(cls, key: str, value: str) -> "DataEntry":
        return cls.build(key, EntryType.STRING, value)

    @classmethod
    def integer(cls, key: str, value: int) -> "DataEntry":
        return cls.build(key, EntryType.INTEGER, value)

    @classmethod
    def boolean(cls, key: str, value: bool) -> "DataEntry":
        return cls.build(key, EntryType.BOOLEAN, value)

    @classmethod
    def delete(cls, key: str) -> "DataEntry":
        return cls.build(key, EntryType.DELETE)

    @property
    def key(self) -> str:
        return self._json.get("key").as_str()

    @property
    def type(self) -> EntryType:
        if not self._json.exists("type"):
            return EntryType.DELETE
        return EntryType.parse(self._json.get("type").as_str())

    @property
    def value(self) -> bytes | bool | int | str | None:
        entry_type = self.type
        if entry_type is EntryType.DELETE:
            return None
        value = self._json.get("value")
        if entry_type is EntryType.BINARY:
            return value.as_base64_decoded()
        if entry_type is EntryType.BOOLEAN:
            return value.as_bool()
        if entry_type is EntryType.INTEGER:
            return value.as_int()
        return value.as_str()

    def to_proto(self) -> transaction_pb2.DataEntry:
        """``DataEntry`` message; a delete entry carries only its key.

        Assigning a ``oneof`` member marks it present, so zero, ``False``
        and empty values are still written.
        """
        message = transaction_pb2.DataEntry(key=self.key)
        field = _PROTO_VALUE_FIELDS.get(self.type)
        if field is not None:
            setattr(message, field, self.value)
        return message
