"""Transaction model: building, encoding, signing and parsing.

Importing this package registers every concrete type so that
:meth:`Transaction.from_json` can dispatch on the ``type`` key.
"""

from waves_sdk.transactions.alias import CreateAliasTransaction
from waves_sdk.transactions.asset import (
    BurnTransaction,
    IssueTransaction,
    ReissueTransaction,
    SetAssetScriptTransaction,
    SponsorFeeTransaction,
    UpdateAssetInfoTransaction,
)
from waves_sdk.transactions.base import Transaction, TransactionOrOrder, TransactionType
from waves_sdk.transactions.common import Amount, Recipient, Transfer
from waves_sdk.transactions.data import DataTransaction
from waves_sdk.transactions.invocation import Arg, ArgType, FunctionCall
from waves_sdk.transactions.lease import LeaseCancelTransaction, LeaseTransaction
from waves_sdk.transactions.script import InvokeScriptTransaction, SetScriptTransaction
from waves_sdk.transactions.transfer import MassTransferTransaction, TransferTransaction

__all__ = [
    # Base
    "Transaction",
    "TransactionOrOrder",
    "TransactionType",
    # Values
    "Amount",
    "Arg",
    "ArgType",
    "FunctionCall",
    "Recipient",
    "Transfer",
    # Types
    "BurnTransaction",
    "CreateAliasTransaction",
    "DataTransaction",
    "InvokeScriptTransaction",
    "IssueTransaction",
    "LeaseCancelTransaction",
    "LeaseTransaction",
    "MassTransferTransaction",
    "ReissueTransaction",
    "SetAssetScriptTransaction",
    "SetScriptTransaction",
    "SponsorFeeTransaction",
    "TransferTransaction",
    "UpdateAssetInfoTransaction",
]
