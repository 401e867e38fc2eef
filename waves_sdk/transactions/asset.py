"""Asset lifecycle transactions: issue, reissue, burn, sponsorship, script
and info updates."""

from __future__ import annotations

from waves_sdk.account import PublicKey
from waves_sdk.encoding import Base64String
from waves_sdk.proto import put, transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.common import Amount
from waves_sdk.transactions.fields import (
    AssetIdField,
    BoolField,
    IntField,
    ScriptField,
    StringField,
)
from waves_sdk.types import AssetId, ChainId


class IssueTransaction(Transaction):
    TYPE = TransactionType.ISSUE
    LATEST_VERSION = 3
    MIN_FEE = 100_000_000
    NFT_MIN_FEE = 100_000

    name = StringField("name")
    description = StringField("description")
    quantity = IntField("quantity")
    decimals = IntField("decimals")
    reissuable = BoolField("reissuable")
    script = ScriptField("script")

    @staticmethod
    def is_nft(quantity: int, decimals: int, reissuable: bool) -> bool:
        return quantity == 1 and decimals == 0 and not reissuable

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        name: str,
        description: str,
        quantity: int,
        decimals: int,
        reissuable: bool,
        script: Base64String | bytes | None = None,
        chain_id: ChainId | str | int | None = None,
    ) -> "IssueTransaction":
        fee = cls.NFT_MIN_FEE if cls.is_nft(quantity, decimals, reissuable) else cls.MIN_FEE
        return cls.create(sender, chain_id, fee=fee).set(
            name=name,
            description=description,
            quantity=quantity,
            decimals=decimals,
            reissuable=reissuable,
            script=script,
        )

    def _payload(self) -> transaction_pb2.IssueTransactionData:
        return transaction_pb2.IssueTransactionData(
            name=self.name,
            description=self.description,
            amount=self.quantity,
            decimals=self.decimals,
            reissuable=self.reissuable,
            script=self.script.to_bytes(),
        )


class ReissueTransaction(Transaction):
    TYPE = TransactionType.REISSUE
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    asset_id = AssetIdField("assetId")
    quantity = IntField("quantity")
    reissuable = BoolField("reissuable")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str,
        quantity: int,
        reissuable: bool,
        chain_id: ChainId | str | int | None = None,
    ) -> "ReissueTransaction":
        return cls.create(sender, chain_id).set(
            asset_id=asset_id, quantity=quantity, reissuable=reissuable
        )

    def _payload(self) -> transaction_pb2.ReissueTransactionData:
        message = transaction_pb2.ReissueTransactionData(reissuable=self.reissuable)
        put(message, "asset_amount", Amount.of(self.quantity, self.asset_id).to_proto())
        return message


class BurnTransaction(Transaction):
    TYPE = TransactionType.BURN
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    asset_id = AssetIdField("assetId")
    amount = IntField("amount")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str,
        amount: int,
        chain_id: ChainId | str | int | None = None,
    ) -> "BurnTransaction":
        return cls.create(sender, chain_id).set(asset_id=asset_id, amount=amount)

    def _payload(self) -> transaction_pb2.BurnTransactionData:
        message = transaction_pb2.BurnTransactionData()
        put(message, "asset_amount", Amount.of(self.amount, self.asset_id).to_proto())
        return message


class SponsorFeeTransaction(Transaction):
    """Enable (or, with a zero minimum fee, disable) fee sponsorship."""

    TYPE = TransactionType.SPONSOR_FEE
    LATEST_VERSION = 2
    MIN_FEE = 100_000

    asset_id = AssetIdField("assetId")
    min_sponsored_fee = IntField("minSponsoredAssetFee")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str,
        min_sponsored_fee: int,
        chain_id: ChainId | str | int | None = None,
    ) -> "SponsorFeeTransaction":
        return cls.create(sender, chain_id).set(
            asset_id=asset_id, min_sponsored_fee=min_sponsored_fee
        )

    def _payload(self) -> transaction_pb2.SponsorFeeTransactionData:
        message = transaction_pb2.SponsorFeeTransactionData()
        put(message, "min_fee", Amount.of(self.min_sponsored_fee, self.asset_id).to_proto())
        return message


class SetAssetScriptTransaction(Transaction):
    TYPE = TransactionType.SET_ASSET_SCRIPT
    LATEST_VERSION = 2
    MIN_FEE = 100_000_000

    asset_id = AssetIdField("assetId")
    script = ScriptField("script")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str,
        script: Base64String | bytes | None,
        chain_id: ChainId | str | int | None = None,
    ) -> "SetAssetScriptTransaction":
        return cls.create(sender, chain_id).set(asset_id=asset_id, script=script)

    def _payload(self) -> transaction_pb2.SetAssetScriptTransactionData:
        return transaction_pb2.SetAssetScriptTransactionData(
            asset_id=self.asset_id.to_bytes(), script=self.script.to_bytes()
        )


class UpdateAssetInfoTransaction(Transaction):
    TYPE = TransactionType.UPDATE_ASSET_INFO
    LATEST_VERSION = 1
    MIN_FEE = 100_000

    asset_id = AssetIdField("assetId")
    name = StringField("name")
    description = StringField("description")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str,
        name: str,
        description: str,
        chain_id: ChainId | str | int | None = None,
    ) -> "UpdateAssetInfoTransaction":
        return cls.create(sender, chain_id).set(
            asset_id=asset_id, name=name, description=description
        )

    def _payload(self) -> transaction_pb2.UpdateAssetInfoTransactionData:
        return transaction_pb2.UpdateAssetInfoTransactionData(
            asset_id=self.asset_id.to_bytes(),
            name=self.name,
            description=self.description,
        )
