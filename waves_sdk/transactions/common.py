"""Value models shared by several transaction types."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from waves_sdk.account import Address
from waves_sdk.proto import amount_pb2, put, recipient_pb2, transaction_pb2
from waves_sdk.types import Alias, AssetId, ChainId
from waves_sdk.values import Json


class Amount(BaseModel):
    """Integer quantity of an asset in its smallest unit."""

    model_config = ConfigDict(frozen=True)

    value: Annotated[int, Field(ge=0, description="Amount in the smallest asset unit")]
    asset_id: AssetId = AssetId.WAVES

    @classmethod
    def of(cls, value: int, asset_id: AssetId | str | None = None) -> "Amount":
        return cls(value=value, asset_id=AssetId.WAVES if asset_id is None else asset_id)

    @classmethod
    def from_json(cls, json_data: Json, amount_key: str = "amount", asset_id_key: str = "assetId") -> "Amount":
        """Read an amount stored as two sibling keys (e.g. ``fee``/``feeAssetId``)."""
        return cls.of(
            json_data.get(amount_key).as_int(),
            json_data.get_or(asset_id_key, None).as_asset_id(),
        )

    def to_json(self) -> dict[str, Any]:
        return {"amount": self.value, "assetId": self.asset_id.to_json_value()}

    def to_proto(self) -> amount_pb2.Amount:
        return amount_pb2.Amount(asset_id=self.asset_id.to_bytes(), amount=self.value)


class Recipient:
    """Transfer target: exactly one of an :class:`Address` or an :class:`Alias`."""

    __slots__ = ("_address", "_alias")

    def __init__(self, address: Address | None = None, alias: Alias | None = None) -> None:
        if (address is None) == (alias is None):
            raise ValueError("recipient needs exactly one of address or alias")
        self._address = address
        self._alias = alias

    @classmethod
    def from_address(cls, address: Address) -> "Recipient":
        return cls(address=address)

    @classmethod
    def from_alias(cls, alias: Alias) -> "Recipient":
        return cls(alias=alias)

    @classmethod
    def from_address_or_alias(
        cls, text: str, chain_id: ChainId | str | int | None = None
    ) -> "Recipient":
        """Parse a recipient string.

        A string with the ``alias:`` prefix is a full alias. Otherwise a
        string of the encoded address length is an address and anything
        else is a bare alias name on ``chain_id`` (mainnet when omitted).
        """
        if text.startswith(Alias.PREFIX):
            return cls.from_alias(Alias.from_full_alias(text))
        if len(text) == Address.STRING_LENGTH:
            return cls.from_address(Address.from_string(text))
        return cls.from_alias(Alias(text, chain_id))

    @property
    def is_alias(self) -> bool:
        return self._alias is not None

    @property
    def address(self) -> Address:
        if self._address is None:
            raise AttributeError("recipient is an alias")
        return self._address

    @property
    def alias(self) -> Alias:
        if self._alias is None:
            raise AttributeError("recipient is an address")
        return self._alias

    def to_string(self) -> str:
        if self._alias is not None:
            return self._alias.to_string()
        return self._address.to_string()  # type: ignore[union-attr]

    def to_proto(self) -> recipient_pb2.Recipient:
        if self._alias is not None:
            return recipient_pb2.Recipient(alias=self._alias.name)
        return recipient_pb2.Recipient(public_key_hash=self.address.public_key_hash())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Recipient({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipient):
            return NotImplemented
        return self.to_string() == other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Recipient":
        if isinstance(value, Recipient):
            return value
        if isinstance(value, Address):
            return cls.from_address(value)
        if isinstance(value, Alias):
            return cls.from_alias(value)
        if isinstance(value, str):
            return cls.from_address_or_alias(value)
        raise ValueError("recipient must be Recipient, Address, Alias or str")


class Transfer(BaseModel):
    """One leg of a mass transfer."""

    model_config = ConfigDict(frozen=True)

    recipient: Recipient
    amount: Annotated[int, Field(ge=0)]

    @classmethod
    def of(cls, recipient: Recipient | Address | Alias | str, amount: int) -> "Transfer":
        return cls(recipient=recipient, amount=amount)

    def to_json(self) -> dict[str, Any]:
        return {"recipient": self.recipient.to_string(), "amount": self.amount}

    def to_proto(self) -> transaction_pb2.MassTransfer:
        """``MassTransferTransactionData.Transfer`` message."""
        message = transaction_pb2.MassTransfer(amount=self.amount)
        put(message, "recipient", self.recipient.to_proto())
        return message
