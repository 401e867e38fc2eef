"""Waves blockchain Python SDK.

Provides everything needed to build, sign and inspect Waves transactions
and to talk to a node: keys and addresses, a typed JSON layer, the
transaction model with its binary encoding, a wallet and an async client
for the node REST API.

Quick start::

    from waves_sdk import Node, Wallet, TESTNET_URL

    wallet = Wallet.from_seed("my seed phrase", chain_id="T")
    tx = wallet.build_transfer("3N...", 100_000)

    async with await Node.connect(TESTNET_URL) as node:
        await node.broadcast(tx)
"""

from waves_sdk.account import Address, PrivateKey, PublicKey
from waves_sdk.client import (
    Node,
    NodeConnectionError,
    NodeError,
    NodeNotFoundError,
    NodeTimeoutError,
)
from waves_sdk.config import (
    LOCAL_URL,
    MAINNET_URL,
    STAGENET_URL,
    TESTNET_URL,
    WavesSettings,
    configure_logging,
)
from waves_sdk.data_entry import DataEntry, EntryType
from waves_sdk.encoding import Base58String, Base64String
from waves_sdk.errors import (
    ArrayExpectedError,
    BadAliasError,
    BadChainIdError,
    BadLengthError,
    Base58DecodeError,
    Base64DecodeError,
    BoolExpectedError,
    IntExpectedError,
    JsonTypeError,
    KeyMissingError,
    ObjectExpectedError,
    StringExpectedError,
    UnexpectedVersionError,
    UnknownTypeError,
    WavesError,
)
from waves_sdk.models import (
    ApplicationStatus,
    LeaseStatus,
    Status,
    TransactionInfo,
    TransactionStatus,
)
from waves_sdk.transactions import (
    Amount,
    Arg,
    ArgType,
    BurnTransaction,
    CreateAliasTransaction,
    DataTransaction,
    FunctionCall,
    InvokeScriptTransaction,
    IssueTransaction,
    LeaseCancelTransaction,
    LeaseTransaction,
    MassTransferTransaction,
    Recipient,
    ReissueTransaction,
    SetAssetScriptTransaction,
    SetScriptTransaction,
    SponsorFeeTransaction,
    Transaction,
    TransactionType,
    Transfer,
    TransferTransaction,
    UpdateAssetInfoTransaction,
)
from waves_sdk.types import Alias, AssetId, ChainId, Id
from waves_sdk.values import Json, Value
from waves_sdk.wallet import Wallet

__all__ = [
    # Client
    "Node",
    "NodeConnectionError",
    "NodeError",
    "NodeNotFoundError",
    "NodeTimeoutError",
    # Config
    "LOCAL_URL",
    "MAINNET_URL",
    "STAGENET_URL",
    "TESTNET_URL",
    "WavesSettings",
    "configure_logging",
    # Keys & identifiers
    "Address",
    "Alias",
    "AssetId",
    "Base58String",
    "Base64String",
    "ChainId",
    "Id",
    "PrivateKey",
    "PublicKey",
    # JSON
    "DataEntry",
    "EntryType",
    "Json",
    "Value",
    # Read models
    "ApplicationStatus",
    "LeaseStatus",
    "Status",
    "TransactionInfo",
    "TransactionStatus",
    # Transactions
    "Amount",
    "Arg",
    "ArgType",
    "BurnTransaction",
    "CreateAliasTransaction",
    "DataTransaction",
    "FunctionCall",
    "InvokeScriptTransaction",
    "IssueTransaction",
    "LeaseCancelTransaction",
    "LeaseTransaction",
    "MassTransferTransaction",
    "Recipient",
    "ReissueTransaction",
    "SetAssetScriptTransaction",
    "SetScriptTransaction",
    "SponsorFeeTransaction",
    "Transaction",
    "TransactionType",
    "Transfer",
    "TransferTransaction",
    "UpdateAssetInfoTransaction",
    # Errors
    "ArrayExpectedError",
    "BadAliasError",
    "BadChainIdError",
    "BadLengthError",
    "Base58DecodeError",
    "Base64DecodeError",
    "BoolExpectedError",
    "IntExpectedError",
    "JsonTypeError",
    "KeyMissingError",
    "ObjectExpectedError",
    "StringExpectedError",
    "UnexpectedVersionError",
    "UnknownTypeError",
    "WavesError",
    # Wallet
    "Wallet",
]

__version__ = "0.1.0"
