"""Lease and LeaseCancel transactions."""

from __future__ import annotations

from waves_sdk.account import PublicKey
from waves_sdk.proto import put, transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.common import Recipient
from waves_sdk.transactions.fields import IdField, IntField, RecipientField
from waves_sdk.types import ChainId, Id


class LeaseTransaction(Transaction):
    TYPE = TransactionType.LEASE
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    recipient = RecipientField("recipient")
    amount = IntField("amount")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        recipient: Recipient | str,
        amount: int,
        chain_id: ChainId | str | int | None = None,
    ) -> "LeaseTransaction":
        return cls.create(sender, chain_id).set(recipient=recipient, amount=amount)

    def _payload(self) -> transaction_pb2.LeaseTransactionData:
        message = transaction_pb2.LeaseTransactionData(amount=self.amount)
        put(message, "recipient", self.recipient.to_proto())
        return message


class LeaseCancelTransaction(Transaction):
    TYPE = TransactionType.LEASE_CANCEL
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    lease_id = IdField("leaseId")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        lease_id: Id | str,
        chain_id: ChainId | str | int | None = None,
    ) -> "LeaseCancelTransaction":
        return cls.create(sender, chain_id).set(lease_id=lease_id)

    def _payload(self) -> transaction_pb2.LeaseCancelTransactionData:
        return transaction_pb2.LeaseCancelTransactionData(lease_id=self.lease_id.to_bytes())
