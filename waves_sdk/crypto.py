"""Waves cryptographic primitives: hashing, key derivation, signing.

Waves accounts use Curve25519 keys. Signatures are Ed25519-style
signatures produced with the Curve25519 private scalar (the XEdDSA-like
scheme of the reference ``curve25519-donna`` signer): the sign bit of the
Edwards public key travels in the top bit of the last signature byte.

Scalar and point arithmetic goes through PyNaCl's libsodium bindings.
Keccak-256 (the pre-standard SHA-3) comes from pycryptodome.
"""

from __future__ import annotations

import hashlib
import os
import struct

from Crypto.Hash import keccak
from nacl import bindings
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

_P = 2**255 - 19
_NONCE_PREFIX = b"\xfe" + b"\xff" * 31


def blake2b256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def keccak256(data: bytes) -> bytes:
    return keccak.new(data=data, digest_bits=256).digest()


def secure_hash(data: bytes) -> bytes:
    """``keccak256(blake2b256(data))``, used for addresses and seeds."""
    return keccak256(blake2b256(data))


def private_key_from_seed(seed: str | bytes, nonce: int = 0) -> bytes:
    """Derive the 32-byte Curve25519 private key of a seed phrase.

    Args:
        seed: The seed phrase (UTF-8 text) or its raw bytes.
        nonce: Account index; prepended as a 4-byte big-endian integer.
    """
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    account_seed = secure_hash(struct.pack(">I", nonce) + seed)
    key = bytearray(hashlib.sha256(account_seed).digest())
    key[0] &= 248
    key[31] &= 127
    key[31] |= 64
    return bytes(key)


def generate_private_key() -> bytes:
    """Random clamped Curve25519 private key."""
    key = bytearray(os.urandom(PRIVATE_KEY_LENGTH))
    key[0] &= 248
    key[31] &= 127
    key[31] |= 64
    return bytes(key)


def public_key_from_private(private_key: bytes) -> bytes:
    """Curve25519 (Montgomery u) public key of ``private_key``."""
    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise ValueError(f"private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(private_key)}")
    return bindings.crypto_scalarmult_base(private_key)


def sign(private_key: bytes, message: bytes, random: bytes | None = None) -> bytes:
    """Sign ``message`` with a Curve25519 private key.

    Args:
        private_key: 32-byte clamped Curve25519 private key.
        message: Bytes to sign (transaction body bytes).
        random: 64 bytes mixed into the nonce; drawn from the OS when omitted.

    Returns:
        The 64-byte signature ``R || S`` with the Edwards sign bit in the top
        bit of ``S[31]``.
    """
    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise ValueError(f"private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(private_key)}")
    if random is None:
        random = os.urandom(64)

    scalar = bindings.crypto_core_ed25519_scalar_reduce(private_key + bytes(32))
    ed_public = bindings.crypto_scalarmult_ed25519_base_noclamp(scalar)
    sign_bit = ed_public[31] & 0x80

    nonce = bindings.crypto_core_ed25519_scalar_reduce(
        hashlib.sha512(_NONCE_PREFIX + private_key + message + random).digest()
    )
    r_point = bindings.crypto_scalarmult_ed25519_base_noclamp(nonce)
    challenge = bindings.crypto_core_ed25519_scalar_reduce(
        hashlib.sha512(r_point + ed_public + message).digest()
    )
    s = bindings.crypto_core_ed25519_scalar_add(
        bindings.crypto_core_ed25519_scalar_mul(challenge, scalar), nonce
    )
    return r_point + s[:31] + bytes([(s[31] & 0x7F) | sign_bit])


def _edwards_public_key(public_key: bytes, sign_bit: int) -> bytes:
    u = int.from_bytes(public_key, "little") & ((1 << 255) - 1)
    y = (u - 1) * pow(u + 1, _P - 2, _P) % _P
    encoded = bytearray(y.to_bytes(32, "little"))
    encoded[31] = (encoded[31] & 0x7F) | sign_bit
    return bytes(encoded)


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """Check a signature made by :func:`sign`.

    Returns:
        ``True`` if the signature is valid, ``False`` otherwise.
    """
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    ed_public = _edwards_public_key(public_key, signature[63] & 0x80)
    ed_signature = signature[:63] + bytes([signature[63] & 0x7F])
    try:
        VerifyKey(ed_public).verify(message, ed_signature)
    except BadSignatureError:
        return False
    return True
