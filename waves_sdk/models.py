"""Read models for node REST responses.

Each model is a typed view over one parsed JSON object: accessors read and
check the underlying keys on demand and raise
:class:`~waves_sdk.errors.KeyMissingError` or a
:class:`~waves_sdk.errors.JsonTypeError` when the node's answer does not
have the expected shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from waves_sdk.account import Address, PublicKey
from waves_sdk.encoding import Base64String
from waves_sdk.transactions import Recipient, Transaction
from waves_sdk.types import AssetId, ChainId, Id
from waves_sdk.values import Json, JsonView


# ---------------------------------------------------------------------------
# Status enums
# ---------------------------------------------------------------------------


class _ParsedStatus(str, Enum):
    @classmethod
    def parse(cls, text: str) -> Any:
        try:
            return cls(text)
        except ValueError:
            return cls("unknown")


class Status(_ParsedStatus):
    """Where a transaction is: in a block, in the UTX pool, or nowhere."""

    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ApplicationStatus(_ParsedStatus):
    """Outcome of applying a transaction with a script."""

    SUCCEEDED = "succeeded"
    SCRIPT_EXECUTION_FAILED = "script_execution_failed"
    UNKNOWN = "unknown"


class LeaseStatus(_ParsedStatus):
    ACTIVE = "active"
    CANCELED = "canceled"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------


class Balance(JsonView):
    """Regular WAVES balance of one address."""

    @property
    def address(self) -> Address:
        return self._json.get("id").as_address()

    @property
    def balance(self) -> int:
        return self._json.get("balance").as_int()


class BalanceDetails(JsonView):
    @property
    def address(self) -> Address:
        return self._json.get("address").as_address()

    @property
    def available(self) -> int:
        return self._json.get("available").as_int()

    @property
    def regular(self) -> int:
        return self._json.get("regular").as_int()

    @property
    def generating(self) -> int:
        return self._json.get("generating").as_int()

    @property
    def effective(self) -> int:
        return self._json.get("effective").as_int()


class HistoryBalance(JsonView):
    @property
    def height(self) -> int:
        return self._json.get("height").as_int()

    @property
    def balance(self) -> int:
        return self._json.get("balance").as_int()


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


class ScriptDetails(JsonView):
    """Script of an asset; empty with zero complexity when the asset has none."""

    @property
    def script(self) -> Base64String:
        return self._json.get_or("script", "").as_base64()

    @property
    def complexity(self) -> int:
        return self._json.get_or("scriptComplexity", 0).as_int()


class ScriptInfo(JsonView):
    """Account script and its complexity figures."""

    @property
    def script(self) -> Base64String:
        return self._json.get_or("script", "").as_base64()

    @property
    def complexity(self) -> int:
        return self._json.get("complexity").as_int()

    @property
    def verifier_complexity(self) -> int:
        return self._json.get("verifierComplexity").as_int()

    @property
    def extra_fee(self) -> int:
        return self._json.get("extraFee").as_int()

    @property
    def callable_complexities(self) -> dict[str, int]:
        return self._json.get_or("callableComplexities", {}).as_str_int_map()


class ArgMeta(JsonView):
    """Name and Ride type of one callable argument."""

    @property
    def name(self) -> str:
        return self._json.get("name").as_str()

    @property
    def type(self) -> str:
        return self._json.get("type").as_str()


class ScriptMeta(JsonView):
    @property
    def meta_version(self) -> int:
        return self._json.get("version").as_int()

    @property
    def callable_functions(self) -> dict[str, list[ArgMeta]]:
        """Callable name to its argument list."""
        functions = self._json.get_or("callableFuncTypes", {}).as_json()
        return {
            name: [arg.as_arg_meta() for arg in functions.get(name)]
            for name in functions.data
        }


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


class AssetDetails(JsonView):
    @property
    def asset_id(self) -> AssetId:
        return self._json.get("assetId").as_asset_id()

    @property
    def issue_height(self) -> int:
        return self._json.get("issueHeight").as_int()

    @property
    def issue_timestamp(self) -> int:
        return self._json.get("issueTimestamp").as_int()

    @property
    def issuer(self) -> Address:
        return self._json.get("issuer").as_address()

    @property
    def issuer_public_key(self) -> PublicKey:
        return self._json.get("issuerPublicKey").as_public_key()

    @property
    def name(self) -> str:
        return self._json.get("name").as_str()

    @property
    def description(self) -> str:
        return self._json.get("description").as_str()

    @property
    def decimals(self) -> int:
        return self._json.get("decimals").as_int()

    @property
    def reissuable(self) -> bool:
        return self._json.get("reissuable").as_bool()

    @property
    def quantity(self) -> int:
        return self._json.get("quantity").as_int()

    @property
    def scripted(self) -> bool:
        return self._json.get("scripted").as_bool()

    @property
    def min_sponsored_asset_fee(self) -> int:
        return self._json.get_or("minSponsoredAssetFee", 0).as_int()

    @property
    def origin_transaction_id(self) -> Id:
        return self._json.get("originTransactionId").as_id()

    @property
    def script_details(self) -> ScriptDetails:
        return ScriptDetails(self._json.get_or("scriptDetails", {}).as_json())


class AssetBalance(JsonView):
    @property
    def asset_id(self) -> AssetId:
        return self._json.get("assetId").as_asset_id()

    @property
    def balance(self) -> int:
        return self._json.get("balance").as_int()

    @property
    def reissuable(self) -> bool:
        return self._json.get("reissuable").as_bool()

    @property
    def quantity(self) -> int:
        return self._json.get("quantity").as_int()

    @property
    def min_sponsored_asset_fee(self) -> int:
        return self._json.get_or("minSponsoredAssetFee", 0).as_int()

    @property
    def sponsor_balance(self) -> int:
        return self._json.get_or("sponsorBalance", 0).as_int()

    @property
    def issue_transaction(self) -> Transaction:
        return Transaction.from_json(self._json.get("issueTransaction").as_json())


class AssetDistribution(JsonView):
    """One page of asset holders."""

    @property
    def items(self) -> dict[str, int]:
        return self._json.get("items").as_str_int_map()

    @property
    def last_item(self) -> str | None:
        return self._json.get("lastItem").as_str() if self._json.exists("lastItem") else None

    @property
    def has_next(self) -> bool:
        return self._json.get_or("hasNext", False).as_bool()


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class BlockHeaders(JsonView):
    @property
    def id(self) -> Id:
        return self._json.get("id").as_id()

    @property
    def height(self) -> int:
        return self._json.get("height").as_int()

    @property
    def version(self) -> int:
        return self._json.get("version").as_int()

    @property
    def timestamp(self) -> int:
        return self._json.get("timestamp").as_int()

    @property
    def reference(self) -> str:
        return self._json.get("reference").as_str()

    @property
    def features(self) -> list[int]:
        return self._json.get_or("features", []).as_int_list()

    @property
    def base_target(self) -> int:
        return self._json.get("nxt-consensus").as_json().get("base-target").as_int()

    @property
    def generation_signature(self) -> str:
        return self._json.get("nxt-consensus").as_json().get("generation-signature").as_str()

    @property
    def transactions_root(self) -> str:
        return self._json.get("transactionsRoot").as_str()

    @property
    def desired_reward(self) -> int:
        return self._json.get("desiredReward").as_int()

    @property
    def generator(self) -> Address:
        return self._json.get("generator").as_address()

    @property
    def signature(self) -> str:
        return self._json.get("signature").as_str()

    @property
    def size(self) -> int:
        return self._json.get("blocksize").as_int()

    @property
    def transactions_count(self) -> int:
        return self._json.get("transactionCount").as_int()

    @property
    def total_fee(self) -> int:
        return self._json.get("totalFee").as_int()

    @property
    def reward(self) -> int:
        return self._json.get("reward").as_int()

    @property
    def vrf(self) -> str:
        return self._json.get("VRF").as_str()


class Block(BlockHeaders):
    def __init__(self, json_data: Json | dict[str, Any] | None = None, chain_id: ChainId | None = None) -> None:
        super().__init__(json_data)
        self._chain_id = chain_id

    @property
    def fee(self) -> int:
        return self._json.get("fee").as_int()

    @property
    def transactions(self) -> list["TransactionWithStatus"]:
        return [
            TransactionWithStatus(item, self._chain_id)
            for item in self._json.get("transactions").as_json_list()
        ]


class Votes(JsonView):
    @property
    def increase(self) -> int:
        return self._json.get("increase").as_int()

    @property
    def decrease(self) -> int:
        return self._json.get("decrease").as_int()


class BlockchainRewards(JsonView):
    @property
    def height(self) -> int:
        return self._json.get("height").as_int()

    @property
    def current_reward(self) -> int:
        return self._json.get("currentReward").as_int()

    @property
    def total_waves_amount(self) -> int:
        return self._json.get("totalWavesAmount").as_int()

    @property
    def min_increment(self) -> int:
        return self._json.get("minIncrement").as_int()

    @property
    def term(self) -> int:
        return self._json.get("term").as_int()

    @property
    def next_check(self) -> int:
        return self._json.get("nextCheck").as_int()

    @property
    def voting_interval_start(self) -> int:
        return self._json.get("votingIntervalStart").as_int()

    @property
    def voting_interval(self) -> int:
        return self._json.get("votingInterval").as_int()

    @property
    def voting_threshold(self) -> int:
        return self._json.get("votingThreshold").as_int()

    @property
    def votes(self) -> Votes:
        return Votes(self._json.get("votes").as_json())


# ---------------------------------------------------------------------------
# Leasing
# ---------------------------------------------------------------------------


class LeaseInfo(JsonView):
    @property
    def id(self) -> Id:
        return self._json.get("id").as_id()

    @property
    def origin_transaction_id(self) -> Id:
        return self._json.get("originTransactionId").as_id()

    @property
    def sender(self) -> Address:
        return self._json.get("sender").as_address()

    @property
    def recipient(self) -> Recipient:
        return self._json.get("recipient").as_recipient()

    @property
    def amount(self) -> int:
        return self._json.get("amount").as_int()

    @property
    def height(self) -> int:
        return self._json.get("height").as_int()

    @property
    def status(self) -> LeaseStatus:
        return self._json.get_or("status", LeaseStatus.UNKNOWN.value).as_lease_status()

    @property
    def cancel_height(self) -> int | None:
        return self._json.get("cancelHeight").as_int() if self._json.exists("cancelHeight") else None

    @property
    def cancel_transaction_id(self) -> Id | None:
        if not self._json.exists("cancelTransactionId"):
            return None
        return self._json.get("cancelTransactionId").as_id()


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TransactionWithStatus(JsonView):
    """A transaction as listed by the node, with its application status."""

    def __init__(self, json_data: Json | dict[str, Any] | None = None, chain_id: ChainId | None = None) -> None:
        super().__init__(json_data)
        self._chain_id = chain_id
        self._transaction: Transaction | None = None

    @property
    def transaction(self) -> Transaction:
        if self._transaction is None:
            self._transaction = Transaction.from_json(self._json, self._chain_id)
        return self._transaction

    @property
    def application_status(self) -> ApplicationStatus:
        return self._json.get_or(
            "applicationStatus", ApplicationStatus.SUCCEEDED.value
        ).as_application_status()


class TransactionInfo(TransactionWithStatus):
    """A confirmed transaction with the height of its block."""

    @property
    def height(self) -> int:
        return self._json.get("height").as_int()


class TransactionStatus(JsonView):
    @property
    def id(self) -> Id:
        return self._json.get("id").as_id()

    @property
    def status(self) -> Status:
        return self._json.get("status").as_status()

    @property
    def application_status(self) -> ApplicationStatus:
        return self._json.get_or(
            "applicationStatus", ApplicationStatus.UNKNOWN.value
        ).as_application_status()

    @property
    def height(self) -> int:
        return self._json.get_or("height", 0).as_int()

    @property
    def confirmations(self) -> int:
        return self._json.get_or("confirmations", 0).as_int()


class Validation(JsonView):
    """Result of ``/debug/validate``."""

    @property
    def valid(self) -> bool:
        return self._json.get("valid").as_bool()

    @property
    def validation_time(self) -> int:
        return self._json.get("validationTime").as_int()

    @property
    def error(self) -> str | None:
        return self._json.get("error").as_str() if self._json.exists("error") else None
