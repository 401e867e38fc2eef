"""Text and binary codecs shared by the value types and transactions.

``Base58String`` and ``Base64String`` keep both representations of a byte
string and compute whichever one is missing on first request. Only one of
the two has to be supplied at construction.
"""

from __future__ import annotations

import base64
import binascii
import struct

import base58

from waves_sdk.errors import Base58DecodeError, Base64DecodeError

BASE64_PREFIX = "base64:"


def base58_encode(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def base58_decode(text: str) -> bytes:
    """Decode base58 text, raising :class:`Base58DecodeError` on bad input."""
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        raise Base58DecodeError(f"failed to decode base58 `{text}`: {exc}") from exc


def base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_decode(text: str) -> bytes:
    """Decode base64 text with or without the ``base64:`` prefix."""
    if text.startswith(BASE64_PREFIX):
        text = text[len(BASE64_PREFIX) :]
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(f"failed to decode base64 `{text}`: {exc}") from exc


# ---------------------------------------------------------------------------
# Fixed-width integers and length-prefixed framing (big-endian)
# ---------------------------------------------------------------------------


def pack_int(value: int) -> bytes:
    """Signed 64-bit big-endian integer."""
    return struct.pack(">q", value)


def pack_len(length: int) -> bytes:
    """Unsigned 32-bit big-endian length or count."""
    return struct.pack(">I", length)


def framed(data: bytes) -> bytes:
    """``data`` prefixed with its 4-byte big-endian length."""
    return pack_len(len(data)) + data


# ---------------------------------------------------------------------------
# Lazily converted strings
# ---------------------------------------------------------------------------


class Base58String:
    """Bytes with a base58 text form, converted lazily in either direction."""

    __slots__ = ("_bytes", "_encoded")

    def __init__(self, data: bytes | None = None, encoded: str | None = None) -> None:
        if data is None and encoded is None:
            raise ValueError("Base58String needs bytes or encoded text")
        self._bytes = data
        self._encoded = encoded

    @classmethod
    def empty(cls) -> "Base58String":
        return cls(b"", "")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Base58String":
        return cls(data=bytes(data))

    @classmethod
    def from_string(cls, encoded: str) -> "Base58String":
        return cls(encoded=encoded)

    def to_bytes(self) -> bytes:
        if self._bytes is None:
            self._bytes = base58_decode(self._encoded)  # type: ignore[arg-type]
        return self._bytes

    def to_string(self) -> str:
        if self._encoded is None:
            self._encoded = base58_encode(self._bytes)  # type: ignore[arg-type]
        return self._encoded

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Base58String({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Base58String):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


class Base64String:
    """Bytes with a ``base64:``-prefixed text form, converted lazily."""

    __slots__ = ("_bytes", "_encoded")

    def __init__(self, data: bytes | None = None, encoded: str | None = None) -> None:
        if data is None and encoded is None:
            raise ValueError("Base64String needs bytes or encoded text")
        if encoded is not None and encoded.startswith(BASE64_PREFIX):
            encoded = encoded[len(BASE64_PREFIX) :]
        self._bytes = data
        self._encoded = encoded

    @classmethod
    def empty(cls) -> "Base64String":
        return cls(b"", "")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Base64String":
        return cls(data=bytes(data))

    @classmethod
    def from_string(cls, encoded: str) -> "Base64String":
        return cls(encoded=encoded)

    def to_bytes(self) -> bytes:
        if self._bytes is None:
            self._bytes = base64_decode(self._encoded)  # type: ignore[arg-type]
        return self._bytes

    def encoded(self) -> str:
        """Plain base64 text without the prefix."""
        if self._encoded is None:
            self._encoded = base64_encode(self._bytes)  # type: ignore[arg-type]
        return self._encoded

    def to_string(self) -> str:
        return BASE64_PREFIX + self.encoded()

    def to_json_value(self) -> str | None:
        """JSON form used by the node: ``null`` for an empty script."""
        if self.to_bytes() == b"":
            return None
        return self.to_string()

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Base64String({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Base64String):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())
