"""Declarative transaction fields.

A field is declared once on the transaction class and backs one attribute:

* reading loads the value from the transaction's JSON on first access and
  caches it;
* assigning writes the typed cache and the JSON together, then drops the
  cached body bytes and id (unless the field is not part of the body).

Subclasses convert between :class:`~waves_sdk.values.Value` and the typed
form (``parse``), the typed form and JSON (``format``), and accept
convenient inputs on assignment (``coerce``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, overload

from waves_sdk.account import Address, PublicKey
from waves_sdk.data_entry import DataEntry
from waves_sdk.encoding import Base58String, Base64String
from waves_sdk.errors import KeyMissingError
from waves_sdk.transactions.common import Amount, Recipient, Transfer
from waves_sdk.transactions.invocation import FunctionCall
from waves_sdk.types import Alias, AssetId, ChainId, Id
from waves_sdk.values import Value

if TYPE_CHECKING:
    from waves_sdk.transactions.base import TransactionOrOrder

T = TypeVar("T")

_REQUIRED: Any = object()


class JsonField(Generic[T]):
    """A transaction attribute stored under one JSON key."""

    def __init__(
        self,
        key: str,
        *,
        default: Callable[[], T] | None = None,
        in_body: bool = True,
    ) -> None:
        self.key = key
        self.default = default
        self.in_body = in_body
        self.name = key

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, tx: None, owner: type) -> "JsonField[T]": ...

    @overload
    def __get__(self, tx: "TransactionOrOrder", owner: type) -> T: ...

    def __get__(self, tx: "TransactionOrOrder | None", owner: type) -> "T | JsonField[T]":
        if tx is None:
            return self
        cache = tx._fields
        if self.name not in cache:
            cache[self.name] = self.load(tx)
        return cache[self.name]

    def __set__(self, tx: "TransactionOrOrder", value: Any) -> None:
        value = self.coerce(value, tx)
        tx._fields[self.name] = value
        self.store(tx, value)
        if self.in_body:
            tx._invalidate()

    def load(self, tx: "TransactionOrOrder") -> T:
        if not tx.json.exists(self.key):
            if self.default is not None:
                return self.default()
            raise KeyMissingError(self.key)
        return self.parse(tx.json.get(self.key), tx)

    def store(self, tx: "TransactionOrOrder", value: T) -> None:
        tx.json.put(self.key, self.format(value))

    def parse(self, value: Value, tx: "TransactionOrOrder") -> T:
        return value.data

    def format(self, value: T) -> Any:
        return value

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> T:
        return value


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class IntField(JsonField[int]):
    def parse(self, value: Value, tx: "TransactionOrOrder") -> int:
        return value.as_int()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> int:
        return Value(value).as_int()


class BoolField(JsonField[bool]):
    def parse(self, value: Value, tx: "TransactionOrOrder") -> bool:
        return value.as_bool()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> bool:
        return Value(value).as_bool()


class StringField(JsonField[str]):
    def parse(self, value: Value, tx: "TransactionOrOrder") -> str:
        return value.as_str()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> str:
        return Value(value).as_str()


# ---------------------------------------------------------------------------
# Identifiers and encoded bytes
# ---------------------------------------------------------------------------


class IdField(JsonField[Id]):
    def parse(self, value: Value, tx: "TransactionOrOrder") -> Id:
        return value.as_id()

    def format(self, value: Id) -> str:
        return value.to_string()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Id:
        return Id._validate(value)


class AssetIdField(JsonField[AssetId]):
    """Asset id; absent or ``null`` reads as WAVES."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=lambda: AssetId.WAVES)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> AssetId:
        return value.as_asset_id()

    def format(self, value: AssetId) -> str | None:
        return value.to_json_value()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> AssetId:
        return AssetId._validate(value)


class Base58Field(JsonField[Base58String]):
    """Base58 bytes such as a transfer attachment; absent reads as empty."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=Base58String.empty)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> Base58String:
        return value.as_base58()

    def format(self, value: Base58String) -> str:
        return value.to_string()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Base58String:
        if value is None:
            return Base58String.empty()
        if isinstance(value, (bytes, bytearray)):
            return Base58String.from_bytes(bytes(value))
        if isinstance(value, str):
            return Base58String.from_string(value)
        return value


class ScriptField(JsonField[Base64String]):
    """Compiled script as ``base64:`` text; ``null`` means no script."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=Base64String.empty)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> Base64String:
        return value.as_base64()

    def format(self, value: Base64String) -> str | None:
        return value.to_json_value()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Base64String:
        if value is None:
            return Base64String.empty()
        if isinstance(value, (bytes, bytearray)):
            return Base64String.from_bytes(bytes(value))
        if isinstance(value, str):
            return Base64String.from_string(value)
        return value


def _on_chain(recipient: Recipient, chain_id: ChainId) -> Recipient:
    """Rebind an alias recipient to ``chain_id``; addresses are returned as is.

    Body bytes carry only the alias name, so the JSON form must name the
    transaction's chain too.
    """
    if recipient.is_alias and recipient.alias.chain_id != chain_id:
        return Recipient.from_alias(Alias(recipient.alias.name, chain_id))
    return recipient


class RecipientField(JsonField[Recipient]):
    """Address or alias; aliases resolve on the transaction's chain."""

    def parse(self, value: Value, tx: "TransactionOrOrder") -> Recipient:
        return value.as_recipient(tx.chain_id)

    def format(self, value: Recipient) -> str:
        return value.to_string()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Recipient:
        if isinstance(value, str):
            value = Recipient.from_address_or_alias(value, tx.chain_id)
        return _on_chain(Recipient._validate(value), tx.chain_id)


class AliasField(JsonField[Alias]):
    """Alias stored by name only; its chain is the transaction's chain."""

    def parse(self, value: Value, tx: "TransactionOrOrder") -> Alias:
        return Alias(value.as_str(), tx.chain_id)

    def format(self, value: Alias) -> str:
        return value.name

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Alias:
        if isinstance(value, str):
            return Alias(value, tx.chain_id)
        return value


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


class AmountField(JsonField[Amount]):
    """Amount stored as two sibling keys, e.g. ``amount`` and ``assetId``."""

    def __init__(self, key: str, asset_id_key: str) -> None:
        super().__init__(key)
        self.asset_id_key = asset_id_key

    def load(self, tx: "TransactionOrOrder") -> Amount:
        return Amount.from_json(tx.json, self.key, self.asset_id_key)

    def store(self, tx: "TransactionOrOrder", value: Amount) -> None:
        tx.json.put(self.key, value.value)
        tx.json.put(self.asset_id_key, value.asset_id.to_json_value())

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> Amount:
        if isinstance(value, Amount):
            return value
        return Amount.of(Value(value).as_int())


# ---------------------------------------------------------------------------
# Sequences
#
# Held as tuples; the JSON and body bytes only follow assignment.
# ---------------------------------------------------------------------------


class PaymentsField(JsonField[tuple[Amount, ...]]):
    """InvokeScript payments: ``[{"amount", "assetId"}]``."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=tuple)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> tuple[Amount, ...]:
        return tuple(Amount.from_json(item) for item in value.as_json_list())

    def format(self, value: tuple[Amount, ...]) -> list[dict[str, Any]]:
        return [payment.to_json() for payment in value]

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> tuple[Amount, ...]:
        return tuple(value or ())


class TransfersField(JsonField[tuple[Transfer, ...]]):
    """MassTransfer legs: ``[{"recipient", "amount"}]``."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=tuple)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> tuple[Transfer, ...]:
        return tuple(
            Transfer(
                recipient=item.get("recipient").as_recipient(tx.chain_id),
                amount=item.get("amount").as_int(),
            )
            for item in value.as_json_list()
        )

    def format(self, value: tuple[Transfer, ...]) -> list[dict[str, Any]]:
        return [transfer.to_json() for transfer in value]

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> tuple[Transfer, ...]:
        chain_id = tx.chain_id
        return tuple(
            transfer.model_copy(update={"recipient": _on_chain(transfer.recipient, chain_id)})
            for transfer in value or ()
        )


class DataEntriesField(JsonField[tuple[DataEntry, ...]]):
    def __init__(self, key: str) -> None:
        super().__init__(key, default=tuple)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> tuple[DataEntry, ...]:
        return tuple(item.as_data_entry() for item in value)

    def format(self, value: tuple[DataEntry, ...]) -> list[dict[str, Any]]:
        return [entry.to_json() for entry in value]

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> tuple[DataEntry, ...]:
        return tuple(value or ())


class FunctionCallField(JsonField[FunctionCall]):
    """InvokeScript ``call``; absent or ``null`` is the default call."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=FunctionCall.default)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> FunctionCall:
        return FunctionCall.from_json(value.as_json())

    def format(self, value: FunctionCall) -> dict[str, Any] | None:
        return value.to_json()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> FunctionCall:
        return FunctionCall.default() if value is None else value


# ---------------------------------------------------------------------------
# Base transaction fields
# ---------------------------------------------------------------------------


class ChainIdField(JsonField[ChainId]):
    """Chain id: JSON ``chainId``, else the sender address, else the default."""

    def load(self, tx: "TransactionOrOrder") -> ChainId:
        if tx.json.exists(self.key):
            return tx.json.get(self.key).as_chain_id()
        if tx.json.exists("sender"):
            return tx.json.get("sender").as_address().chain_id()
        return tx.default_chain_id

    def format(self, value: ChainId) -> int:
        return value.as_int()

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> ChainId:
        if value is None:
            return tx.default_chain_id
        return ChainId.of(value)

    def store(self, tx: "TransactionOrOrder", value: ChainId) -> None:
        super().store(tx, value)
        if tx.json.exists("senderPublicKey"):
            tx.json.put("sender", tx.sender.address(value).to_string())


class SenderField(JsonField[PublicKey]):
    """Sender public key; also writes the derived ``sender`` address."""

    def load(self, tx: "TransactionOrOrder") -> PublicKey:
        sender = tx.json.get(self.key).as_public_key()
        if tx.json.exists("sender"):
            sender.attach_address(tx.json.get("sender").as_address())
        return sender

    def store(self, tx: "TransactionOrOrder", value: PublicKey) -> None:
        tx.json.put(self.key, value.to_string())
        tx.json.put("sender", value.address(tx.chain_id).to_string())

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> PublicKey:
        if isinstance(value, Address):
            raise TypeError("sender must be a public key, not an address")
        return PublicKey._validate(value)


class ProofsField(JsonField[tuple[str, ...]]):
    """Ordered base58 signatures; not part of the body bytes."""

    def __init__(self, key: str) -> None:
        super().__init__(key, default=tuple, in_body=False)

    def parse(self, value: Value, tx: "TransactionOrOrder") -> tuple[str, ...]:
        return tuple(value.as_str_list())

    def format(self, value: tuple[str, ...]) -> list[str]:
        return list(value)

    def coerce(self, value: Any, tx: "TransactionOrOrder") -> tuple[str, ...]:
        return () if value is None else tuple(Value(proof).as_str() for proof in value)
