"""Typed access to weakly-typed JSON trees.

:class:`Json` wraps one parsed JSON object and is the in-memory form of
every wire entity: node responses, transactions, data entries. Reading a
key yields a :class:`Value`, whose ``as_*`` projections check the dynamic
type and raise a specific :class:`~waves_sdk.errors.JsonTypeError` subclass
on mismatch.

A key holding JSON ``null`` is treated as absent.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Callable, Iterator, TypeVar

from waves_sdk.account import Address, PublicKey
from waves_sdk.encoding import BASE64_PREFIX, Base58String, Base64String, base64_decode
from waves_sdk.errors import (
    ArrayExpectedError,
    Base64DecodeError,
    BoolExpectedError,
    IntExpectedError,
    KeyMissingError,
    ObjectExpectedError,
    StringExpectedError,
)
from waves_sdk.types import Alias, AssetId, ChainId, Id

if TYPE_CHECKING:
    from waves_sdk.data_entry import DataEntry
    from waves_sdk.models import ApplicationStatus, ArgMeta, LeaseStatus, Status
    from waves_sdk.transactions.common import Recipient

T = TypeVar("T")


class Json:
    """Mutable view over a JSON object (``dict``)."""

    __slots__ = ("_data",)

    def __init__(self, data: dict[Any, Any] | None = None) -> None:
        self._data: dict[Any, Any] = {} if data is None else data

    @classmethod
    def loads(cls, text: str | bytes) -> "Json":
        return Value(json.loads(text)).as_json()

    def dumps(self) -> str:
        return json.dumps(self._data, separators=(",", ":"))

    @property
    def data(self) -> dict[Any, Any]:
        """The underlying dictionary (not a copy)."""
        return self._data

    def exists(self, key: Any) -> bool:
        return self._data.get(key) is not None

    def get(self, key: Any) -> "Value":
        """Value at ``key``; raises :class:`KeyMissingError` if absent or null."""
        value = self._data.get(key)
        if value is None:
            raise KeyMissingError(key)
        return Value(value)

    def get_or(self, key: Any, default: Any) -> "Value":
        return self.get(key) if self.exists(key) else Value(default)

    def put(self, key: Any, value: Any) -> "Json":
        if isinstance(value, (Json, Value)):
            value = value.data
        self._data[key] = value
        return self

    def remove(self, key: Any) -> "Json":
        self._data.pop(key, None)
        return self

    def __contains__(self, key: object) -> bool:
        return self.exists(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Json):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Json({self._data!r})"


class Value:
    """A single JSON value with typed projections."""

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    @property
    def data(self) -> Any:
        return self._value

    def is_null(self) -> bool:
        return self._value is None

    # -- scalars ------------------------------------------------------------

    def as_bool(self) -> bool:
        if not isinstance(self._value, bool):
            raise BoolExpectedError(self._value)
        return self._value

    def as_int(self) -> int:
        """Integer, or a decimal string that converts back to itself exactly."""
        value = self._value
        if isinstance(value, bool):
            raise IntExpectedError(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                converted = int(value)
            except ValueError:
                raise IntExpectedError(value) from None
            if str(converted) == value:
                return converted
        raise IntExpectedError(value)

    def as_str(self) -> str:
        if not isinstance(self._value, str):
            raise StringExpectedError(self._value)
        return self._value

    # -- containers ---------------------------------------------------------

    def as_list(self) -> list[Any]:
        if not isinstance(self._value, list):
            raise ArrayExpectedError(self._value)
        return self._value

    def as_json(self) -> Json:
        if not isinstance(self._value, dict):
            raise ObjectExpectedError(self._value)
        return Json(self._value)

    def _map(self, project: Callable[["Value"], T]) -> list[T]:
        return [project(Value(item)) for item in self.as_list()]

    def as_int_list(self) -> list[int]:
        return self._map(Value.as_int)

    def as_str_list(self) -> list[str]:
        return self._map(Value.as_str)

    def as_json_list(self) -> list[Json]:
        return self._map(Value.as_json)

    def as_str_int_map(self) -> dict[str, int]:
        if not isinstance(self._value, dict):
            raise ObjectExpectedError(self._value)
        return {Value(key).as_str(): Value(item).as_int() for key, item in self._value.items()}

    def __iter__(self) -> Iterator["Value"]:
        return (Value(item) for item in self.as_list())

    # -- encoded strings ----------------------------------------------------

    def as_base58(self) -> Base58String:
        return Base58String.from_string(self.as_str())

    def as_base64(self) -> Base64String:
        return Base64String.from_string(self.as_str())

    def as_base64_decoded(self) -> bytes:
        """Bytes of a ``base64:``-prefixed string; the prefix is required."""
        text = self.as_str()
        if not text.startswith(BASE64_PREFIX):
            raise Base64DecodeError(f"missing `{BASE64_PREFIX}` prefix in `{text}`")
        return base64_decode(text)

    # -- domain types -------------------------------------------------------

    def as_chain_id(self) -> ChainId:
        if isinstance(self._value, int) and not isinstance(self._value, bool):
            return ChainId.from_int(self._value)
        return ChainId.from_string(self.as_str())

    def as_address(self) -> Address:
        return Address.from_string(self.as_str())

    def as_public_key(self) -> PublicKey:
        return PublicKey.from_string(self.as_str())

    def as_asset_id(self) -> AssetId:
        """Asset id; JSON ``null`` means WAVES."""
        if self._value is None:
            return AssetId.WAVES
        return AssetId.from_string(self.as_str())

    def as_id(self) -> Id:
        return Id.from_string(self.as_str())

    def as_alias(self) -> Alias:
        return Alias.from_full_alias(self.as_str())

    def as_recipient(self, chain_id: ChainId | None = None) -> "Recipient":
        from waves_sdk.transactions.common import Recipient

        return Recipient.from_address_or_alias(self.as_str(), chain_id)

    def as_data_entry(self) -> "DataEntry":
        from waves_sdk.data_entry import DataEntry

        return DataEntry(self.as_json())

    def as_arg_meta(self) -> "ArgMeta":
        from waves_sdk.models import ArgMeta

        return ArgMeta(self.as_json())

    def as_status(self) -> "Status":
        from waves_sdk.models import Status

        return Status.parse(self.as_str())

    def as_application_status(self) -> "ApplicationStatus":
        from waves_sdk.models import ApplicationStatus

        return ApplicationStatus.parse(self.as_str())

    def as_lease_status(self) -> "LeaseStatus":
        from waves_sdk.models import LeaseStatus

        return LeaseStatus.parse(self.as_str())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._value == other._value

    def __repr__(self) -> str:
        return f"Value({self._value!r})"


class JsonView:
    """Base for typed read models over one :class:`Json` object."""

    __slots__ = ("_json",)

    def __init__(self, json_data: Json | dict[str, Any] | None = None) -> None:
        if json_data is None:
            json_data = Json()
        elif isinstance(json_data, dict):
            json_data = Json(json_data)
        self._json = json_data

    @property
    def json(self) -> Json:
        return self._json

    def to_json(self) -> dict[str, Any]:
        return self._json.data

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._json == other._json  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._json.data!r})"
