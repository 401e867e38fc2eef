"""Tests for waves_sdk.types and waves_sdk.account: chain ids, identifiers, keys, addresses."""

from __future__ import annotations

import pytest

from waves_sdk.account import Address, PrivateKey, PublicKey
from waves_sdk.encoding import Base58String, Base64String, base58_decode, base64_decode
from waves_sdk.errors import (
    BadAliasError,
    BadChainIdError,
    BadLengthError,
    Base58DecodeError,
    Base64DecodeError,
)
from waves_sdk.types import Alias, AssetId, ChainId, Id, resolve_chain_id


class TestChainId:
    """Single-byte network identifiers."""

    def test_well_known_chains(self) -> None:
        assert ChainId.MAINNET.as_string() == "W"
        assert ChainId.TESTNET.as_int() == 84
        assert ChainId.STAGENET.as_string() == "S"
        assert ChainId.PRIVATE.as_string() == "R"

    def test_of_accepts_char_and_byte(self) -> None:
        assert ChainId.of("T") == ChainId.TESTNET
        assert ChainId.of(84) == ChainId.TESTNET
        assert ChainId.of(ChainId.TESTNET) is ChainId.TESTNET

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(BadChainIdError):
            ChainId.from_int(256)
        with pytest.raises(BadChainIdError):
            ChainId.from_int(-1)

    def test_multi_char_rejected(self) -> None:
        with pytest.raises(BadChainIdError):
            ChainId.from_string("WW")
        with pytest.raises(BadChainIdError):
            ChainId.from_string("")

    def test_default_is_mainnet(self) -> None:
        assert resolve_chain_id(None) == ChainId.MAINNET
        assert resolve_chain_id("S") == ChainId.STAGENET

    def test_hashable(self) -> None:
        assert {ChainId.of("T"): 1}[ChainId.TESTNET] == 1


class TestIdentifiers:
    """Fixed-length base58 identifiers."""

    def test_zero_id_encoding(self) -> None:
        assert Id.from_bytes(bytes(32)).to_string() == "1" * 32

    def test_string_round_trip(self) -> None:
        encoded = Id.from_bytes(b"\x07" * 32).to_string()
        assert Id.from_string(encoded).to_bytes() == b"\x07" * 32
        assert Id.from_string(encoded) == Id.from_bytes(b"\x07" * 32)

    def test_from_bytes_checks_length(self) -> None:
        with pytest.raises(BadLengthError) as exc_info:
            Id.from_bytes(bytes(31))
        assert exc_info.value.expected == 32
        assert exc_info.value.actual == 31

    def test_from_string_checks_length_lazily(self) -> None:
        short = Id.from_string("1" * 31)
        with pytest.raises(BadLengthError):
            short.to_bytes()

    def test_bad_base58_rejected(self) -> None:
        with pytest.raises(Base58DecodeError):
            Id.from_string("0OIl" * 8).to_bytes()


class TestAssetId:
    """Asset ids and the WAVES sentinel."""

    def test_waves_sentinel(self) -> None:
        assert AssetId.WAVES.is_waves
        assert AssetId.WAVES.to_bytes() == b""
        assert AssetId.WAVES.to_string() == "WAVES"
        assert AssetId.WAVES.to_json_value() is None

    def test_empty_bytes_and_waves_text_are_waves(self) -> None:
        assert AssetId.from_bytes(b"") is AssetId.WAVES
        assert AssetId.from_string("waves") is AssetId.WAVES

    def test_regular_asset(self) -> None:
        asset = AssetId.from_bytes(b"\x05" * 32)
        assert not asset.is_waves
        assert asset.to_json_value() == asset.to_string()

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(BadLengthError):
            AssetId.from_bytes(b"\x05" * 20)


class TestAlias:
    """Alias names and full alias strings."""

    def test_full_alias_text(self) -> None:
        alias = Alias("alice", "T")
        assert alias.to_string() == "alias:T:alice"
        assert alias.chain_id == ChainId.TESTNET

    def test_default_chain_is_mainnet(self) -> None:
        assert Alias("alice").to_string() == "alias:W:alice"

    def test_from_full_alias(self) -> None:
        alias = Alias.from_full_alias("alias:T:alice")
        assert alias.name == "alice"
        assert alias == Alias("alice", "T")

    @pytest.mark.parametrize("name", ["bob", "Alice", "a" * 31, "with space", ""])
    def test_invalid_names(self, name: str) -> None:
        assert not Alias.is_valid(name)
        with pytest.raises(BadAliasError):
            Alias(name)

    @pytest.mark.parametrize("name", ["abcd", "a" * 30, "x-y.z@0_9"])
    def test_valid_names(self, name: str) -> None:
        assert Alias.is_valid(name)

    @pytest.mark.parametrize("text", ["alias:T", "alice", "alias:TT:alice", "aliaz:T:alice"])
    def test_bad_full_alias(self, text: str) -> None:
        with pytest.raises(BadAliasError):
            Alias.from_full_alias(text)


class TestAddress:
    """Address derivation from public keys."""

    def test_layout(self) -> None:
        pk = PublicKey.from_bytes(b"\x01" * 32)
        address = pk.address("T")
        data = address.to_bytes()
        assert len(data) == Address.BYTE_LENGTH
        assert data[0] == Address.VERSION
        assert data[1] == ord("T")
        assert address.chain_id() == ChainId.TESTNET
        assert address.is_valid()

    def test_string_length(self) -> None:
        address = PrivateKey.random().address()
        assert len(address.to_string()) == Address.STRING_LENGTH

    def test_chains_give_different_addresses(self) -> None:
        pk = PublicKey.from_bytes(b"\x01" * 32)
        assert pk.address("W") != pk.address("T")

    def test_address_cached_per_chain(self) -> None:
        pk = PublicKey.from_bytes(b"\x01" * 32)
        assert pk.address("T") is pk.address("T")

    def test_ethereum_key(self) -> None:
        pk = PublicKey.from_bytes(b"\x02" * 64)
        address = pk.address("W")
        assert address.is_valid()
        assert len(address.public_key_hash()) == 20

    def test_bytes_round_trip(self) -> None:
        data = PublicKey.from_bytes(b"\x01" * 32).address("T").to_bytes()
        assert Address.from_bytes(data).to_bytes() == data

    @pytest.mark.parametrize("length", [25, 27])
    def test_wrong_byte_length_rejected(self, length: int) -> None:
        with pytest.raises(BadLengthError) as exc_info:
            Address.from_bytes(bytes(length))
        assert exc_info.value.expected == Address.BYTE_LENGTH
        assert exc_info.value.actual == length

    def test_corrupted_checksum_is_invalid(self) -> None:
        data = bytearray(PublicKey.from_bytes(b"\x01" * 32).address().to_bytes())
        data[-1] ^= 0xFF
        assert not Address.from_bytes(bytes(data)).is_valid()

    def test_attached_address(self) -> None:
        pk = PublicKey.from_bytes(b"\x01" * 32)
        assert pk.attached_address() is None
        address = Address.from_public_key(pk, "S")
        pk.attach_address(address)
        assert pk.attached_address(ChainId.STAGENET) == address


class TestKeys:
    """Private/public key handling."""

    def test_seed_is_deterministic(self) -> None:
        a = PrivateKey.from_seed("seed phrase")
        b = PrivateKey.from_seed("seed phrase")
        assert a.to_bytes() == b.to_bytes()
        assert a.public_key() == b.public_key()

    def test_nonce_changes_key(self) -> None:
        assert PrivateKey.from_seed("seed phrase", 0) != PrivateKey.from_seed("seed phrase", 1)

    def test_public_key_length(self) -> None:
        assert len(PrivateKey.random().public_key().to_bytes()) == 32

    def test_public_key_rejects_other_lengths(self) -> None:
        with pytest.raises(BadLengthError):
            PublicKey.from_bytes(b"\x01" * 33)

    def test_repr_hides_secret(self) -> None:
        key = PrivateKey.random()
        assert key.to_string() not in repr(key)

    def test_sign_and_verify(self) -> None:
        key = PrivateKey.from_seed("seed phrase")
        signature = key.sign(b"message")
        assert len(signature) == 64
        assert key.public_key().verify(b"message", signature)
        assert not key.public_key().verify(b"other", signature)


class TestEncodedStrings:
    """Lazily converted base58/base64 strings."""

    def test_base64_prefix_stripped(self) -> None:
        assert base64_decode("base64:AQI=") == b"\x01\x02"
        assert base64_decode("AQI=") == b"\x01\x02"

    def test_base64_to_string_has_prefix(self) -> None:
        value = Base64String.from_bytes(b"\x01\x02")
        assert value.to_string() == "base64:AQI="
        assert value.encoded() == "AQI="

    def test_empty_script_is_json_null(self) -> None:
        assert Base64String.empty().to_json_value() is None

    def test_bad_base64(self) -> None:
        with pytest.raises(Base64DecodeError):
            base64_decode("!!!")

    def test_bad_base58(self) -> None:
        with pytest.raises(Base58DecodeError):
            base58_decode("0")

    def test_base58_equality_by_bytes(self) -> None:
        assert Base58String.from_bytes(b"abc") == Base58String.from_string(
            Base58String.from_bytes(b"abc").to_string()
        )
