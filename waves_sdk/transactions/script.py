"""Account scripting: SetScript and InvokeScript transactions."""

from __future__ import annotations

from typing import Iterable

from waves_sdk.account import PublicKey
from waves_sdk.encoding import Base64String
from waves_sdk.proto import put, transaction_pb2
from waves_sdk.transactions.base import Transaction, TransactionType
from waves_sdk.transactions.common import Amount, Recipient
from waves_sdk.transactions.data import FEE_UNIT, fee_for_size
from waves_sdk.transactions.fields import FunctionCallField, PaymentsField, RecipientField, ScriptField
from waves_sdk.transactions.invocation import FunctionCall
from waves_sdk.types import ChainId


class SetScriptTransaction(Transaction):
    TYPE = TransactionType.SET_SCRIPT
    LATEST_VERSION = 2
    MIN_FEE = FEE_UNIT

    script = ScriptField("script")

    @classmethod
    def calculate_fee(cls, body_length: int) -> int:
        return fee_for_size(body_length)

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        script: Base64String | bytes | None,
        chain_id: ChainId | str | int | None = None,
    ) -> "SetScriptTransaction":
        """Build with the fee sized to the encoded body; ``None`` removes the script."""
        tx = cls.create(sender, chain_id).set(script=script)
        return tx.set_fee(cls.calculate_fee(len(tx.body_bytes())))

    def _payload(self) -> transaction_pb2.SetScriptTransactionData:
        return transaction_pb2.SetScriptTransactionData(script=self.script.to_bytes())


class InvokeScriptTransaction(Transaction):
    TYPE = TransactionType.INVOKE_SCRIPT
    LATEST_VERSION = 2
    MIN_FEE = 500_000

    dapp = RecipientField("dApp")
    function = FunctionCallField("call")
    payments = PaymentsField("payment")

    @classmethod
    def build(
        cls,
        sender: PublicKey,
        dapp: Recipient | str,
        function: FunctionCall | None = None,
        payments: Iterable[Amount] | None = None,
        chain_id: ChainId | str | int | None = None,
    ) -> "InvokeScriptTransaction":
        return cls.create(sender, chain_id).set(dapp=dapp, function=function, payments=payments)

    def _payload(self) -> transaction_pb2.InvokeScriptTransactionData:
        message = transaction_pb2.InvokeScriptTransactionData(
            function_call=self.function.to_bytes(),
            payments=[payment.to_proto() for payment in self.payments],
        )
        put(message, "d_app", self.dapp.to_proto())
        return message
