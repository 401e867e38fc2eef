"""Tests for the transaction model: body bytes, ids, proofs, fees and JSON parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from waves_sdk.account import PrivateKey, PublicKey
from waves_sdk.crypto import blake2b256
from waves_sdk.data_entry import DataEntry
from waves_sdk.errors import IntExpectedError, UnexpectedVersionError, UnknownTypeError
from waves_sdk.proto import serialize
from waves_sdk.transactions import (
    Amount,
    Arg,
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
from waves_sdk.transactions.data import fee_for_size
from waves_sdk.types import Alias, AssetId, ChainId, Id

SENDER = PublicKey.from_bytes(b"\x01" * 32)
LEASE_ID = Id.from_bytes(b"\x02" * 32)
ASSET = AssetId.from_bytes(b"\x03" * 32)


@pytest.fixture
def signer() -> PrivateKey:
    return PrivateKey.from_seed("test seed")


def _lease_cancel() -> LeaseCancelTransaction:
    return LeaseCancelTransaction.build(SENDER, LEASE_ID, "T").set_timestamp(1)


# ---------------------------------------------------------------------------
# Body bytes
# ---------------------------------------------------------------------------


class TestBodyBytes:
    """Canonical protobuf body encoding."""

    def test_lease_cancel_layout(self) -> None:
        expected = (
            b"\x08\x54"
            + b"\x12\x20" + b"\x01" * 32
            + b"\x1a\x04\x10\xa0\x8d\x06"
            + b"\x20\x01"
            + b"\x28\x03"
            + b"\xea\x06\x22\x0a\x20" + b"\x02" * 32
        )
        assert _lease_cancel().body_bytes() == expected

    def test_transfer_layout(self) -> None:
        recipient = PublicKey.from_bytes(b"\x04" * 32).address("T")
        tx = TransferTransaction.build(SENDER, Recipient.from_address(recipient), 1000, b"hi", "T")
        tx.set_timestamp(1)
        payload = (
            b"\x0a\x16\x0a\x14" + recipient.public_key_hash()
            + b"\x12\x03\x10\xe8\x07"
            + b"\x1a\x02hi"
        )
        expected = (
            b"\x08\x54"
            + b"\x12\x20" + b"\x01" * 32
            + b"\x1a\x04\x10\xa0\x8d\x06"
            + b"\x20\x01"
            + b"\x28\x03"
            + b"\xc2\x06" + bytes([len(payload)]) + payload
        )
        assert tx.body_bytes() == expected

    def test_alias_recipient_encoding(self) -> None:
        tx = TransferTransaction.build(SENDER, "alice", 1, chain_id="T")
        assert b"\x0a\x07\x12\x05alice" in tx.body_bytes()
        assert tx.recipient.alias == Alias("alice", "T")

    def test_full_alias_of_address_length(self) -> None:
        text = "alias:T:" + "a" * 27
        assert len(text) == 35
        recipient = Recipient.from_address_or_alias(text)
        assert recipient.is_alias
        assert recipient.alias.chain_id == ChainId.TESTNET

    def test_bare_alias_defaults_to_mainnet(self) -> None:
        recipient = Recipient.from_address_or_alias("test")
        assert recipient.to_string() == "alias:W:test"

    def test_address_length_string_is_address(self) -> None:
        address = PublicKey.from_bytes(b"\x04" * 32).address("T")
        recipient = Recipient.from_address_or_alias(address.to_string())
        assert not recipient.is_alias
        assert recipient.address == address

    def test_asset_amount_encoding(self) -> None:
        amount = Amount.of(7, ASSET)
        assert serialize(amount.to_proto()) == b"\x0a\x20" + b"\x03" * 32 + b"\x10\x07"

    def test_body_bytes_cached(self) -> None:
        tx = _lease_cancel()
        assert tx.body_bytes() is tx.body_bytes()

    def test_body_field_change_rebuilds(self) -> None:
        tx = _lease_cancel()
        before = tx.body_bytes()
        tx.set_fee(200_000)
        assert tx.body_bytes() != before
        tx.set_fee(100_000)
        assert tx.body_bytes() == before

    def test_proofs_do_not_change_body(self, signer: PrivateKey) -> None:
        tx = _lease_cancel()
        before = tx.body_bytes()
        tx.add_proof(signer)
        assert tx.body_bytes() is before

    def test_non_latest_version_rejected(self) -> None:
        tx = _lease_cancel().set_version(2)
        with pytest.raises(UnexpectedVersionError) as exc_info:
            tx.body_bytes()
        assert exc_info.value.version == 2
        assert exc_info.value.supported == 3


# ---------------------------------------------------------------------------
# Ids
# ---------------------------------------------------------------------------


class TestTransactionId:
    """Id derivation and its relation to the JSON ``id`` key."""

    def test_id_is_body_hash(self) -> None:
        tx = _lease_cancel()
        assert tx.id == Id.from_bytes(blake2b256(tx.body_bytes()))

    def test_id_written_to_json(self) -> None:
        tx = _lease_cancel()
        assert tx.to_json()["id"] == tx.id.to_string()

    def test_mutation_drops_id(self) -> None:
        tx = _lease_cancel()
        old = tx.id
        tx.set_timestamp(2)
        assert "id" not in tx.json
        assert tx.id != old

    def test_parsed_json_keeps_node_id(self) -> None:
        data = _lease_cancel().to_json()
        data["id"] = LEASE_ID.to_string()
        parsed = Transaction.from_json(data)
        assert parsed.id == LEASE_ID

    def test_parsed_then_mutated_derives_id(self) -> None:
        data = _lease_cancel().to_json()
        data["id"] = LEASE_ID.to_string()
        parsed = Transaction.from_json(data)
        parsed.set_timestamp(5)
        assert parsed.id == Id.from_bytes(blake2b256(parsed.body_bytes()))

    def test_proof_keeps_id(self, signer: PrivateKey) -> None:
        tx = _lease_cancel()
        before = tx.id
        tx.add_proof(signer)
        assert tx.id == before


# ---------------------------------------------------------------------------
# Proofs
# ---------------------------------------------------------------------------


class TestProofs:
    """Signing and multi-signature proofs."""

    def test_single_proof_verifies(self, signer: PrivateKey) -> None:
        tx = LeaseCancelTransaction.build(signer.public_key(), LEASE_ID, "T")
        tx.add_proof(signer)
        assert len(tx.proofs) == 1
        assert tx.verify_proof()

    def test_proof_from_other_key_fails(self, signer: PrivateKey) -> None:
        tx = LeaseCancelTransaction.build(SENDER, LEASE_ID, "T")
        tx.add_proof(signer)
        assert not tx.verify_proof()

    def test_multiple_proofs(self, signer: PrivateKey) -> None:
        cosigner = PrivateKey.from_seed("cosigner")
        tx = LeaseCancelTransaction.build(signer.public_key(), LEASE_ID, "T")
        tx.add_proof(signer).add_proof(cosigner)
        assert len(tx.proofs) == 2
        assert tx.verify_proof(0)
        assert tx.verify_proof(1, cosigner.public_key())
        assert not tx.verify_proof(1)

    def test_indexed_proof_pads(self, signer: PrivateKey) -> None:
        tx = LeaseCancelTransaction.build(signer.public_key(), LEASE_ID, "T")
        tx.add_proof(signer, index=2)
        assert tx.proofs[:2] == ("", "")
        assert tx.verify_proof(2, signer.public_key())
        assert not tx.verify_proof(0)
        assert not tx.verify_proof(5)

    def test_indexed_proof_replaces(self, signer: PrivateKey) -> None:
        tx = LeaseCancelTransaction.build(signer.public_key(), LEASE_ID, "T")
        tx.set_proofs(["x", "y"])
        tx.add_proof(signer, index=0)
        assert tx.proofs[1] == "y"
        assert tx.verify_proof(0)

    def test_explicit_indexes_in_order(self, signer: PrivateKey) -> None:
        cosigner = PrivateKey.from_seed("cosigner")
        tx = LeaseCancelTransaction.build(signer.public_key(), LEASE_ID, "T")
        tx.add_proof(signer, index=0).add_proof(cosigner, index=1)
        assert len(tx.proofs) == 2
        assert all(tx.proofs)
        assert tx.verify_proof(0, signer.public_key())
        assert tx.verify_proof(1, cosigner.public_key())
        assert not tx.verify_proof(1, signer.public_key())

    def test_proofs_are_immutable(self, signer: PrivateKey) -> None:
        tx = _lease_cancel().add_proof(signer)
        with pytest.raises(AttributeError):
            tx.proofs.append("x")  # type: ignore[attr-defined]
        assert len(tx.to_json()["proofs"]) == 1

    def test_negative_index_rejected(self, signer: PrivateKey) -> None:
        with pytest.raises(ValueError):
            _lease_cancel().add_proof(signer, index=-1)

    def test_proofs_in_json(self, signer: PrivateKey) -> None:
        tx = _lease_cancel().add_proof(signer)
        assert tx.to_json()["proofs"] == list(tx.proofs)


# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------


class TestFees:
    """Minimum fee rules per type."""

    @pytest.mark.parametrize(
        ("size", "fee"),
        [(1, 100_000), (1024, 100_000), (1025, 200_000), (2048, 200_000), (2049, 300_000)],
    )
    def test_size_based_fee(self, size: int, fee: int) -> None:
        assert fee_for_size(size) == fee

    def test_small_data_fee(self) -> None:
        tx = DataTransaction.build(SENDER, [DataEntry.integer("k", 1)], "T")
        assert tx.fee.value == 100_000

    def test_large_data_fee_matches_signed_body(self) -> None:
        tx = DataTransaction.build(SENDER, [DataEntry.binary("blob", b"\x00" * 1100)], "T")
        assert tx.fee.value == 200_000
        assert len(tx.body_bytes()) > 1024
        assert b"\x1a\x04\x10\xc0\x9a\x0c" in tx.body_bytes()

    def test_set_script_fee(self) -> None:
        tx = SetScriptTransaction.build(SENDER, b"\x06" * 1500, "T")
        assert tx.fee.value == 200_000

    @pytest.mark.parametrize(("count", "fee"), [(0, 100_000), (1, 200_000), (2, 200_000), (3, 300_000)])
    def test_mass_transfer_fee(self, count: int, fee: int) -> None:
        assert MassTransferTransaction.calculate_fee(count) == fee

    def test_nft_issue_fee(self) -> None:
        assert IssueTransaction.build(SENDER, "nft1", "", 1, 0, False).fee.value == 100_000
        assert IssueTransaction.build(SENDER, "coin", "", 10, 2, True).fee.value == 100_000_000

    def test_fee_in_sponsored_asset(self) -> None:
        tx = _lease_cancel().set_fee(Amount.of(5, ASSET))
        assert tx.to_json()["feeAssetId"] == ASSET.to_string()

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Amount.of(-1)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _all_types() -> list[Transaction]:
    recipient = PublicKey.from_bytes(b"\x04" * 32).address("T")
    call = FunctionCall(
        "deposit",
        [
            Arg.integer(-5),
            Arg.string("x"),
            Arg.binary(b"\x01"),
            Arg.boolean(True),
            Arg.list([Arg.integer(1), Arg.string("y")]),
        ],
    )
    return [
        TransferTransaction.build(SENDER, Recipient.from_address(recipient), Amount.of(5, ASSET), b"memo", "T"),
        MassTransferTransaction.build(
            SENDER,
            None,
            [Transfer.of(recipient, 1), Transfer.of(Alias("alice", "T"), 2)],
            chain_id="T",
        ),
        LeaseTransaction.build(SENDER, Recipient.from_address(recipient), 10, "T"),
        LeaseCancelTransaction.build(SENDER, LEASE_ID, "T"),
        CreateAliasTransaction.build(SENDER, "alice", "T"),
        IssueTransaction.build(SENDER, "coin", "desc", 1000, 2, True, b"\x06\x01", "T"),
        ReissueTransaction.build(SENDER, ASSET, 50, False, "T"),
        BurnTransaction.build(SENDER, ASSET, 7, "T"),
        SponsorFeeTransaction.build(SENDER, ASSET, 10, "T"),
        SetAssetScriptTransaction.build(SENDER, ASSET, b"\x06\x02", "T"),
        UpdateAssetInfoTransaction.build(SENDER, ASSET, "new", "text", "T"),
        DataTransaction.build(
            SENDER,
            [
                DataEntry.integer("i", 1),
                DataEntry.boolean("b", False),
                DataEntry.binary("x", b"\x09"),
                DataEntry.string("s", "v"),
                DataEntry.delete("d"),
            ],
            "T",
        ),
        SetScriptTransaction.build(SENDER, b"\x06\x03", "T"),
        InvokeScriptTransaction.build(SENDER, Recipient.from_address(recipient), call, [Amount.of(3)], "T"),
        InvokeScriptTransaction.build(SENDER, "dapp-alias", chain_id="T"),
    ]


class TestJsonParsing:
    """Dispatching node JSON to transaction classes."""

    @pytest.mark.parametrize("tx", _all_types(), ids=lambda tx: type(tx).__name__)
    def test_parsed_json_encodes_identically(self, tx: Transaction) -> None:
        parsed = Transaction.from_json(tx.to_json())
        assert type(parsed) is type(tx)
        assert parsed.body_bytes() == tx.body_bytes()
        assert parsed.chain_id == ChainId.TESTNET

    def test_parse_from_text(self) -> None:
        text = _lease_cancel().json.dumps()
        parsed = Transaction.from_json(text)
        assert isinstance(parsed, LeaseCancelTransaction)
        assert parsed.lease_id == LEASE_ID

    def test_chain_from_sender_address(self) -> None:
        data = _lease_cancel().to_json()
        del data["chainId"]
        assert Transaction.from_json(data).chain_id == ChainId.TESTNET

    def test_chain_from_argument(self) -> None:
        data = _lease_cancel().to_json()
        del data["chainId"]
        del data["sender"]
        assert Transaction.from_json(data, "S").chain_id == ChainId.STAGENET
        assert Transaction.from_json(data).chain_id == ChainId.MAINNET

    def test_sender_address_written(self) -> None:
        data = _lease_cancel().to_json()
        assert data["sender"] == SENDER.address("T").to_string()

    def test_chain_change_rewrites_sender(self) -> None:
        tx = _lease_cancel().set_chain_id("S")
        assert tx.to_json()["sender"] == SENDER.address("S").to_string()

    def test_unknown_type(self) -> None:
        data = _lease_cancel().to_json()
        data["type"] = 99
        parsed = Transaction.from_json(data)
        assert type(parsed) is Transaction
        assert parsed.sender == SENDER
        with pytest.raises(UnknownTypeError):
            parsed.body_bytes()

    def test_default_call_is_null(self) -> None:
        tx = InvokeScriptTransaction.build(SENDER, "dapp-alias", chain_id="T")
        assert tx.to_json()["call"] is None
        parsed = Transaction.from_json(tx.to_json())
        assert parsed.function.is_default

    def test_mass_transfer_uses_transfers_key(self) -> None:
        recipient = PublicKey.from_bytes(b"\x04" * 32).address("T")
        tx = MassTransferTransaction.build(SENDER, ASSET, [Transfer.of(recipient, 9)], chain_id="T")
        data = tx.to_json()
        assert data["transfers"] == [{"recipient": recipient.to_string(), "amount": 9}]
        parsed = Transaction.from_json(data)
        assert parsed.transfers[0].amount == 9

    def test_issue_without_script_is_null(self) -> None:
        tx = IssueTransaction.build(SENDER, "coin", "", 10, 2, True)
        assert tx.to_json()["script"] is None
        assert tx.script.to_bytes() == b""

    def test_type_and_version(self) -> None:
        data = _lease_cancel().to_json()
        assert data["type"] == TransactionType.LEASE_CANCEL
        assert data["version"] == 3
        assert data["fee"] == 100_000
        assert data["feeAssetId"] is None


class TestFieldAssignment:
    """Declared field setters."""

    def test_set_unknown_field(self) -> None:
        with pytest.raises(AttributeError):
            _lease_cancel().set(bogus=1)

    def test_sender_must_be_public_key(self) -> None:
        with pytest.raises(TypeError):
            _lease_cancel().set_sender(SENDER.address())  # type: ignore[arg-type]

    def test_create_on_base_class_rejected(self) -> None:
        with pytest.raises(UnknownTypeError):
            Transaction.create(SENDER)

    def test_timestamp_defaults_to_now(self) -> None:
        tx = LeaseCancelTransaction.build(SENDER, LEASE_ID)
        assert tx.timestamp > 1_600_000_000_000
        assert tx.chain_id == ChainId.MAINNET

    def test_fee_rejects_bool(self) -> None:
        with pytest.raises(IntExpectedError):
            _lease_cancel().set_fee(True)  # type: ignore[arg-type]

    def test_data_entries_are_immutable(self) -> None:
        tx = DataTransaction.build(SENDER, [DataEntry.integer("a", 1)], "T")
        with pytest.raises(AttributeError):
            tx.data.append(DataEntry.integer("b", 2))  # type: ignore[attr-defined]
        assert tx.data == (DataEntry.integer("a", 1),)

    def test_data_reassignment_updates_json_and_body(self) -> None:
        tx = DataTransaction.build(SENDER, [DataEntry.integer("a", 1)], "T")
        body = tx.body_bytes()
        tx.data = [*tx.data, DataEntry.integer("b", 2)]
        assert [entry["key"] for entry in tx.to_json()["data"]] == ["a", "b"]
        assert tx.body_bytes() != body
        assert Transaction.from_json(tx.to_json()).body_bytes() == tx.body_bytes()

    def test_mass_transfer_alias_on_transaction_chain(self) -> None:
        tx = MassTransferTransaction.build(SENDER, None, [Transfer.of("alice", 2)], chain_id="T")
        assert tx.to_json()["transfers"][0]["recipient"] == "alias:T:alice"
        assert tx.transfers[0].recipient.alias.chain_id == ChainId.TESTNET
        assert Transaction.from_json(tx.to_json()).body_bytes() == tx.body_bytes()

    def test_recipient_alias_on_transaction_chain(self) -> None:
        alias = Recipient.from_alias(Alias("alice"))
        tx = TransferTransaction.build(SENDER, alias, 1, chain_id="T")
        assert tx.to_json()["recipient"] == "alias:T:alice"

    def test_payments_are_tuples(self) -> None:
        tx = InvokeScriptTransaction.build(SENDER, "alice", payments=[Amount.of(1)], chain_id="T")
        assert tx.payments == (Amount.of(1),)
        assert tx.to_json()["dApp"] == "alias:T:alice"
