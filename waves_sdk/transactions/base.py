"""Transaction base: common fields, body bytes, id and proofs.

Every concrete transaction type is a subclass that declares its fields
(see :mod:`waves_sdk.transactions.fields`) and encodes its payload message.
Base-field setters, body-bytes caching, id derivation, signing and JSON
dispatch live here and are shared.
"""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, ClassVar, Self

import structlog
from google.protobuf.message import Message

from waves_sdk import crypto
from waves_sdk.account import PrivateKey, PublicKey
from waves_sdk.encoding import base58_decode
from waves_sdk.errors import UnexpectedVersionError, UnknownTypeError
from waves_sdk.proto import put, serialize, transaction_pb2
from waves_sdk.transactions.common import Amount
from waves_sdk.transactions.fields import (
    AmountField,
    ChainIdField,
    IntField,
    JsonField,
    ProofsField,
    SenderField,
)
from waves_sdk.types import ChainId, Id, resolve_chain_id
from waves_sdk.values import Json

logger = structlog.get_logger()


class TransactionType(IntEnum):
    """Transaction type codes of the Waves protocol."""

    GENESIS = 1
    PAYMENT = 2
    ISSUE = 3
    TRANSFER = 4
    REISSUE = 5
    BURN = 6
    EXCHANGE = 7
    LEASE = 8
    LEASE_CANCEL = 9
    CREATE_ALIAS = 10
    MASS_TRANSFER = 11
    DATA = 12
    SET_SCRIPT = 13
    SPONSOR_FEE = 14
    SET_ASSET_SCRIPT = 15
    INVOKE_SCRIPT = 16
    UPDATE_ASSET_INFO = 17
    ETHEREUM = 18
    INVOKE_EXPRESSION = 19

    @property
    def proto_field(self) -> int:
        """Field number of this type's data message in ``waves.Transaction``."""
        return 100 + self.value


def now_millis() -> int:
    return time.time_ns() // 1_000_000


class TransactionOrOrder:
    """Fields shared by transactions and exchange orders.

    State lives in a :class:`Json` backing store; declared fields keep a
    typed cache next to it. Body bytes and the derived id are cached until
    a body field is assigned.
    """

    version = IntField("version")
    chain_id = ChainIdField("chainId")
    sender = SenderField("senderPublicKey")
    timestamp = IntField("timestamp")
    fee = AmountField("fee", "feeAssetId")
    proofs = ProofsField("proofs")

    def __init__(
        self,
        json_data: Json | dict[str, Any] | None = None,
        chain_id: ChainId | str | int | None = None,
    ) -> None:
        if json_data is None:
            json_data = Json()
        elif isinstance(json_data, dict):
            json_data = Json(json_data)
        self._json = json_data
        self._fields: dict[str, Any] = {}
        self._body_bytes: bytes | None = None
        self._id: Id | None = None
        self.default_chain_id = resolve_chain_id(chain_id)

    @property
    def json(self) -> Json:
        return self._json

    def to_json(self) -> dict[str, Any]:
        """JSON object accepted by the node's broadcast endpoint."""
        return dict(self._json.data)

    # -- body bytes and id --------------------------------------------------

    def body_bytes(self) -> bytes:
        """Canonical signable bytes, built on first request and cached."""
        if self._body_bytes is None:
            self._body_bytes = self._build_body_bytes()
            logger.debug(
                "body_bytes_built",
                tx_type=type(self).__name__,
                size=len(self._body_bytes),
            )
        return self._body_bytes

    def _build_body_bytes(self) -> bytes:
        raise UnknownTypeError(f"{type(self).__name__} has no body bytes encoding")

    def _invalidate(self) -> None:
        self._body_bytes = None
        self._id = None
        self._json.remove("id")

    @property
    def id(self) -> Id:
        """Id from the source JSON, or ``blake2b256(body bytes)``."""
        if self._id is None:
            if self._json.exists("id"):
                self._id = self._json.get("id").as_id()
            else:
                self._id = Id.from_bytes(crypto.blake2b256(self.body_bytes()))
                self._json.put("id", self._id.to_string())
        return self._id

    # -- fluent setters -----------------------------------------------------

    def set(self, **fields: Any) -> Self:
        """Assign declared fields by attribute name."""
        for name, value in fields.items():
            if not isinstance(getattr(type(self), name, None), JsonField):
                raise AttributeError(f"{type(self).__name__} has no field `{name}`")
            setattr(self, name, value)
        return self

    def set_version(self, version: int) -> Self:
        self.version = version
        return self

    def set_chain_id(self, chain_id: ChainId | str | int | None = None) -> Self:
        """Set the chain id; ``None`` means this transaction's default chain."""
        self.chain_id = chain_id
        return self

    def set_sender(self, sender: PublicKey) -> Self:
        self.sender = sender
        return self

    def set_timestamp(self, timestamp: int | None = None) -> Self:
        """Set the timestamp in ms; ``None`` means now."""
        self.timestamp = now_millis() if timestamp is None else timestamp
        return self

    def set_fee(self, fee: Amount | int) -> Self:
        self.fee = fee
        return self

    def set_proofs(self, proofs: list[str] | None = None) -> Self:
        self.proofs = proofs
        return self

    # -- proofs -------------------------------------------------------------

    def add_proof(self, private_key: PrivateKey, index: int | None = None) -> Self:
        """Sign the body bytes and store the proof.

        Args:
            private_key: Signer's key.
            index: Position in the proofs list. Appends when omitted; pads
                with empty proofs when past the end.
        """
        proof = private_key.sign_base58(self.body_bytes())
        proofs = list(self.proofs)
        if index is None:
            proofs.append(proof)
            index = len(proofs) - 1
        else:
            if index < 0:
                raise ValueError(f"proof index must be non-negative, got {index}")
            if index >= len(proofs):
                proofs.extend([""] * (index + 1 - len(proofs)))
            proofs[index] = proof
        self.proofs = proofs
        logger.debug("proof_added", tx_type=type(self).__name__, index=index)
        return self

    def verify_proof(self, index: int = 0, public_key: PublicKey | None = None) -> bool:
        """Check the proof at ``index`` against the body bytes.

        The sender's key is used unless ``public_key`` is given (e.g. a
        co-signer of a multi-signature account).
        """
        proofs = self.proofs
        if index >= len(proofs) or not proofs[index]:
            return False
        key = self.sender if public_key is None else public_key
        return key.verify(self.body_bytes(), base58_decode(proofs[index]))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._json.data!r})"


_REGISTRY: dict[int, type["Transaction"]] = {}


class Transaction(TransactionOrOrder):
    """A blockchain transaction.

    Concrete subclasses set ``TYPE``, ``LATEST_VERSION`` and ``MIN_FEE`` and
    implement :meth:`_payload`. A plain ``Transaction`` (unknown type parsed
    from node JSON) exposes the base fields but has no body bytes.
    """

    TYPE: ClassVar[TransactionType | None] = None
    LATEST_VERSION: ClassVar[int] = 0
    MIN_FEE: ClassVar[int] = 0

    type = IntField("type")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.TYPE is not None:
            _REGISTRY[int(cls.TYPE)] = cls

    @classmethod
    def from_json(
        cls,
        json_data: Json | dict[str, Any] | str | bytes,
        chain_id: ChainId | str | int | None = None,
    ) -> "Transaction":
        """Parse node JSON into the transaction class of its ``type``.

        Args:
            json_data: Parsed or raw JSON of one transaction.
            chain_id: Chain used when neither ``chainId`` nor ``sender`` is
                present (mainnet when omitted).
        """
        if isinstance(json_data, (str, bytes)):
            json_data = Json.loads(json_data)
        elif isinstance(json_data, dict):
            json_data = Json(json_data)
        tx_class = _REGISTRY.get(json_data.get("type").as_int(), Transaction)
        return tx_class(json_data, chain_id)

    @classmethod
    def create(
        cls,
        sender: PublicKey,
        chain_id: ChainId | str | int | None = None,
        fee: int | None = None,
    ) -> Self:
        """New unsigned transaction with the base fields filled in.

        Sets type, latest version, minimum fee (or ``fee``), chain id,
        sender, the current timestamp and an empty proofs list.
        """
        if cls.TYPE is None:
            raise UnknownTypeError("cannot create a transaction without a type")
        tx = cls(chain_id=chain_id)
        tx.set_chain_id()
        tx.set_sender(sender)
        tx.set_type(cls.TYPE)
        tx.set_version(cls.LATEST_VERSION)
        tx.set_fee(cls.MIN_FEE if fee is None else fee)
        tx.set_timestamp()
        tx.set_proofs()
        return tx

    def set_type(self, tx_type: int) -> Self:
        self.type = int(tx_type)
        return self

    def _build_body_bytes(self) -> bytes:
        if self.TYPE is None:
            return super()._build_body_bytes()
        if self.version != self.LATEST_VERSION:
            raise UnexpectedVersionError(type(self).__name__, self.version, self.LATEST_VERSION)
        message = transaction_pb2.Transaction(
            chain_id=self.chain_id.as_int(),
            sender_public_key=self.sender.to_bytes(),
            timestamp=self.timestamp,
            version=self.version,
        )
        put(message, "fee", self.fee.to_proto())
        data_field = message.DESCRIPTOR.fields_by_number[self.TYPE.proto_field]
        put(message, data_field.name, self._payload())
        return serialize(message)

    def _payload(self) -> Message:
        """Type-specific data message."""
        raise NotImplementedError
