"""Transfer and MassTransfer transactions."""

from __future__ import annotations

from typing import Iterable

from waves_sdk.account import PublicKey
from waves_sdk.encoding import Base58String
from waves_sdk.proto import put, transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.common import Amount, Recipient, Transfer
from waves_sdk.transactions.fields import AmountField, AssetIdField, Base58Field, RecipientField, TransfersField
from waves_sdk.types import AssetId, ChainId


class TransferTransaction(Transaction):
    TYPE = TransactionType.TRANSFER
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    recipient = RecipientField("recipient")
    amount = AmountField("amount", "assetId")
    attachment = Base58Field("attachment")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        recipient: Recipient | str,
        amount: Amount | int,
        attachment: Base58String | bytes | None = None,
        chain_id: ChainId | str | int | None = None,
    ) -> "TransferTransaction":
        return cls.create(sender, chain_id).set(
            recipient=recipient, amount=amount, attachment=attachment
        )

    def _payload(self) -> transaction_pb2.TransferTransactionData:
        message = transaction_pb2.TransferTransactionData(attachment=self.attachment.to_bytes())
        put(message, "recipient", self.recipient.to_proto())
        put(message, "amount", self.amount.to_proto())
        return message


class MassTransferTransaction(Transaction):
    TYPE = TransactionType.MASS_TRANSFER
    LATEST_VERSION = 2
    MIN_FEE = 100_000
    FEE_PER_TRANSFER = 50_000

    asset_id = AssetIdField("assetId")
    transfers = TransfersField("transfers")
    attachment = Base58Field("attachment")

    @classmethod
    def calculate_fee(cls, transfers_count: int) -> int:
        """Minimum fee; the transfer count is rounded up to an even number."""
        return cls.MIN_FEE + (transfers_count + (transfers_count & 1)) * cls.FEE_PER_TRANSFER

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        asset_id: AssetId | str | None,
        transfers: Iterable[Transfer],
        attachment: Base58String | bytes | None = None,
        chain_id: ChainId | str | int | None = None,
    ) -> "MassTransferTransaction":
        transfers = list(transfers)
        return cls.create(sender, chain_id, fee=cls.calculate_fee(len(transfers))).set(
            asset_id=asset_id, transfers=transfers, attachment=attachment
        )

    def _payload(self) -> transaction_pb2.MassTransferTransactionData:
        return transaction_pb2.MassTransferTransactionData(
            asset_id=self.asset_id.to_bytes(),
            transfers=[transfer.to_proto() for transfer in self.transfers],
            attachment=self.attachment.to_bytes(),
        )
