"""CreateAlias transaction."""

from __future__ import annotations

from waves_sdk.account import PublicKey
from waves_sdk.proto import transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.fields import AliasField
from waves_sdk.types import Alias, ChainId


class CreateAliasTransaction(Transaction):
    TYPE = TransactionType.CREATE_ALIAS
    LATEST_VERSION = 3
    MIN_FEE = 100_000

    alias = AliasField("alias")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        alias: Alias | str,
        chain_id: ChainId | str | int | None = None,
    ) -> "CreateAliasTransaction":
        return cls.create(sender, chain_id).set(alias=alias)

    def _payload(self) -> transaction_pb2.CreateAliasTransactionData:
        return transaction_pb2.CreateAliasTransactionData(alias=self.alias.name)
