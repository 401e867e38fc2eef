"""Account keys and addresses.

A :class:`PrivateKey` derives its :class:`PublicKey`, which in turn derives
an :class:`Address` for a given chain id. Both derivations are one-way and
cached on the owning object.
"""

from __future__ import annotations

from waves_sdk import crypto
from waves_sdk.encoding import base58_encode
from waves_sdk.types import Base58Identifier, ChainId, resolve_chain_id


class Address(Base58Identifier):
    """26-byte account address: version, chain id, key hash, checksum."""

    __slots__ = ()

    BYTE_LENGTH = 26
    STRING_LENGTH = 35
    VERSION = 1
    LENGTHS = (BYTE_LENGTH,)
    KIND = "address"

    @classmethod
    def from_public_key(
        cls, public_key: "PublicKey | bytes", chain_id: ChainId | str | int | None = None
    ) -> "Address":
        """Derive the address of ``public_key`` on ``chain_id`` (mainnet by default)."""
        key = bytes(public_key)
        chain = resolve_chain_id(chain_id)
        if len(key) == PublicKey.ETH_BYTE_LENGTH:
            key_hash = crypto.keccak256(key)[-20:]
        else:
            key_hash = crypto.secure_hash(key)[:20]
        prefix = bytes([cls.VERSION, chain.as_int()]) + key_hash
        return cls(data=prefix + crypto.secure_hash(prefix)[:4])

    def chain_id(self) -> ChainId:
        return ChainId(self.to_bytes()[1])

    def public_key_hash(self) -> bytes:
        return self.to_bytes()[2:22]

    def is_valid(self) -> bool:
        """Check the version byte and checksum."""
        data = self.to_bytes()
        return data[0] == self.VERSION and crypto.secure_hash(data[:22])[:4] == data[22:]


class PublicKey(Base58Identifier):
    """Account public key: 32 bytes (Curve25519) or 64 bytes (Ethereum)."""

    __slots__ = ("_addresses",)

    BYTE_LENGTH = 32
    ETH_BYTE_LENGTH = 64
    LENGTHS = (BYTE_LENGTH, ETH_BYTE_LENGTH)
    KIND = "public key"

    def __init__(self, data: bytes | None = None, encoded: str | None = None) -> None:
        super().__init__(data, encoded)
        self._addresses: dict[ChainId, Address] = {}

    def address(self, chain_id: ChainId | str | int | None = None) -> Address:
        """Address of this key on ``chain_id``, derived once per chain."""
        chain = resolve_chain_id(chain_id)
        if chain not in self._addresses:
            self._addresses[chain] = Address.from_public_key(self.to_bytes(), chain)
        return self._addresses[chain]

    def attach_address(self, address: Address) -> "PublicKey":
        """Pin a known address (e.g. the ``sender`` field of node JSON)."""
        self._addresses[address.chain_id()] = address
        return self

    def attached_address(self, chain_id: ChainId | None = None) -> Address | None:
        """Already known address; any chain when ``chain_id`` is omitted."""
        if chain_id is not None:
            return self._addresses.get(chain_id)
        return next(iter(self._addresses.values()), None)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return crypto.verify(self.to_bytes(), message, signature)


class PrivateKey(Base58Identifier):
    """32-byte Curve25519 private key."""

    __slots__ = ("_public_key",)

    BYTE_LENGTH = crypto.PRIVATE_KEY_LENGTH
    LENGTHS = (BYTE_LENGTH,)
    KIND = "private key"

    def __init__(self, data: bytes | None = None, encoded: str | None = None) -> None:
        super().__init__(data, encoded)
        self._public_key: PublicKey | None = None

    @classmethod
    def from_seed(cls, seed: str | bytes, nonce: int = 0) -> "PrivateKey":
        return cls.from_bytes(crypto.private_key_from_seed(seed, nonce))

    @classmethod
    def random(cls) -> "PrivateKey":
        return cls.from_bytes(crypto.generate_private_key())

    def public_key(self) -> PublicKey:
        if self._public_key is None:
            self._public_key = PublicKey.from_bytes(crypto.public_key_from_private(self.to_bytes()))
        return self._public_key

    def address(self, chain_id: ChainId | str | int | None = None) -> Address:
        return self.public_key().address(chain_id)

    def sign(self, message: bytes) -> bytes:
        return crypto.sign(self.to_bytes(), message)

    def sign_base58(self, message: bytes) -> str:
        return base58_encode(self.sign(message))

    def __repr__(self) -> str:
        return "PrivateKey(***)"

