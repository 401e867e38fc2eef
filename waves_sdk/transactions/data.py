"""Data transaction: writes or deletes entries of the sender's account storage."""

from __future__ import annotations

from typing import Iterable

from waves_sdk.account import PublicKey
from waves_sdk.data_entry import DataEntry
from waves_sdk.proto import transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.fields import DataEntriesField
from waves_sdk.types import ChainId

FEE_UNIT = 100_000
FEE_BLOCK_SIZE = 1024


def fee_for_size(body_length: int) -> int:
    """One fee unit per started kilobyte of body bytes."""
    return FEE_UNIT * (1 + (body_length - 1) // FEE_BLOCK_SIZE)


class DataTransaction(Transaction):
    TYPE = TransactionType.DATA
    LATEST_VERSION = 2
    MIN_FEE = FEE_UNIT

    data = DataEntriesField("data")

    @classmethod
    def calculate_fee(cls, body_length: int) -> int:
        return fee_for_size(body_length)

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        data: Iterable[DataEntry],
        chain_id: ChainId | str | int | None = None,
    ) -> "DataTransaction":
        """Build with the fee sized to the encoded body.

        The fee is set after the body bytes are measured, which drops the
        cached body so signing sees the final fee.
        """
        tx = cls.create(sender, chain_id).set(data=list(data))
        return tx.set_fee(cls.calculate_fee(len(tx.body_bytes())))

    def _payload(self) -> transaction_pb2.DataTransactionData:
        return transaction_pb2.DataTransactionData(data=[entry.to_proto() for entry in self.data])
