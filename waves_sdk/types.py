"""Identifier value types: chain ids, ids, asset ids and aliases.

All identifiers are immutable and keep both a byte form and a canonical
text form. Either form may be supplied; the other is computed on first
request and cached. Text input is not decoded or validated until its bytes
are actually needed.

Value types plug into pydantic v2 through ``__get_pydantic_core_schema__``
so they can be used directly as model fields (see :class:`Amount`).
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from waves_sdk.encoding import base58_decode, base58_encode
from waves_sdk.errors import BadAliasError, BadChainIdError, BadLengthError


# ---------------------------------------------------------------------------
# Chain id
# ---------------------------------------------------------------------------


class ChainId:
    """Single-byte network identifier; text form is one ASCII character."""

    __slots__ = ("_byte",)

    MAINNET: ClassVar["ChainId"]
    TESTNET: ClassVar["ChainId"]
    STAGENET: ClassVar["ChainId"]
    PRIVATE: ClassVar["ChainId"]

    def __init__(self, byte: int) -> None:
        self._byte = byte

    @classmethod
    def from_int(cls, value: int) -> "ChainId":
        if not 0 <= value <= 255:
            raise BadChainIdError(f"bad chain id value: {value}")
        return cls(value)

    @classmethod
    def from_string(cls, value: str) -> "ChainId":
        if len(value) != 1 or ord(value) > 255:
            raise BadChainIdError(f"bad chain id value: `{value}`")
        return cls(ord(value))

    @classmethod
    def of(cls, value: "ChainId | str | int") -> "ChainId":
        """Coerce a character, byte value or existing chain id."""
        if isinstance(value, ChainId):
            return value
        if isinstance(value, int):
            return cls.from_int(value)
        return cls.from_string(value)

    def as_int(self) -> int:
        return self._byte

    def as_string(self) -> str:
        return chr(self._byte)

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"ChainId({self.as_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self._byte == other._byte

    def __hash__(self) -> int:
        return hash(self._byte)


ChainId.MAINNET = ChainId(ord("W"))
ChainId.TESTNET = ChainId(ord("T"))
ChainId.STAGENET = ChainId(ord("S"))
ChainId.PRIVATE = ChainId(ord("R"))


def resolve_chain_id(chain_id: "ChainId | str | int | None") -> ChainId:
    """Explicit chain id, or mainnet when none is given."""
    if chain_id is None:
        return ChainId.MAINNET
    return ChainId.of(chain_id)


# ---------------------------------------------------------------------------
# Base58 identifiers
# ---------------------------------------------------------------------------


class Base58Identifier:
    """Fixed-length bytes with a base58 text form.

    Subclasses set ``LENGTHS`` (accepted byte lengths) and ``KIND`` (used in
    error messages). ``from_bytes`` validates eagerly; ``from_string``
    defers decoding and validation to the first :meth:`to_bytes` call.
    """

    __slots__ = ("_bytes", "_encoded")

    LENGTHS: ClassVar[tuple[int, ...]] = ()
    KIND: ClassVar[str] = "identifier"

    def __init__(self, data: bytes | None = None, encoded: str | None = None) -> None:
        self._bytes = data
        self._encoded = encoded

    @classmethod
    def _check_length(cls, data: bytes) -> bytes:
        if len(data) not in cls.LENGTHS:
            expected = cls.LENGTHS[0] if len(cls.LENGTHS) == 1 else cls.LENGTHS
            raise BadLengthError(cls.KIND, expected, len(data))
        return data

    @classmethod
    def from_bytes(cls, data: bytes) -> Any:
        return cls(data=cls._check_length(bytes(data)))

    @classmethod
    def from_string(cls, encoded: str) -> Any:
        return cls(encoded=encoded)

    def to_bytes(self) -> bytes:
        if self._bytes is None:
            self._bytes = self._check_length(base58_decode(self._encoded))  # type: ignore[arg-type]
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
        return f"{type(self).__name__}({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_string() == other.to_string()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.to_string()))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        raise ValueError(f"{cls.KIND} must be {cls.__name__}, str or bytes")


class Id(Base58Identifier):
    """32-byte transaction / block / lease id."""

    __slots__ = ()

    BYTE_LENGTH = 32
    LENGTHS = (BYTE_LENGTH,)
    KIND = "id"


class AssetId(Base58Identifier):
    """Asset identifier: 32 bytes, or the native WAVES asset.

    ``AssetId.WAVES`` has an empty byte form, text ``"WAVES"`` and JSON
    ``null``.
    """

    __slots__ = ("_is_waves",)

    BYTE_LENGTH = 32
    LENGTHS = (BYTE_LENGTH,)
    KIND = "asset id"
    WAVES_STRING = "WAVES"

    WAVES: ClassVar["AssetId"]

    def __init__(self, data: bytes | None = None, encoded: str | None = None, *, waves: bool = False) -> None:
        super().__init__(data, encoded)
        self._is_waves = waves

    @classmethod
    def waves(cls) -> "AssetId":
        return cls.WAVES

    @classmethod
    def from_bytes(cls, data: bytes) -> "AssetId":
        if data == b"":
            return cls.WAVES
        return cls(data=cls._check_length(bytes(data)))

    @classmethod
    def from_string(cls, encoded: str) -> "AssetId":
        if encoded.upper() == cls.WAVES_STRING:
            return cls.WAVES
        return cls(encoded=encoded)

    @property
    def is_waves(self) -> bool:
        return self._is_waves

    def to_bytes(self) -> bytes:
        if self._is_waves:
            return b""
        return super().to_bytes()

    def to_string(self) -> str:
        if self._is_waves:
            return self.WAVES_STRING
        return super().to_string()

    def to_json_value(self) -> str | None:
        return None if self._is_waves else self.to_string()

    @classmethod
    def _validate(cls, value: Any) -> Any:
        if value is None:
            return cls.WAVES
        return super()._validate(value)


AssetId.WAVES = AssetId(b"", AssetId.WAVES_STRING, waves=True)


# ---------------------------------------------------------------------------
# Alias
# ---------------------------------------------------------------------------


class Alias:
    """A short account name valid on one chain: ``alias:<chain>:<name>``."""

    __slots__ = ("_name", "_chain_id")

    PREFIX = "alias:"
    MIN_LENGTH = 4
    MAX_LENGTH = 30
    ALPHABET = "-.0-9@_a-z"
    PATTERN = re.compile(f"[{ALPHABET}]{{{MIN_LENGTH},{MAX_LENGTH}}}")

    def __init__(self, name: str, chain_id: ChainId | str | int | None = None) -> None:
        if not isinstance(name, str) or self.PATTERN.fullmatch(name) is None:
            raise BadAliasError(f"bad alias name `{name!r}`")
        self._name = name
        self._chain_id = resolve_chain_id(chain_id)

    @classmethod
    def from_string(cls, name: str, chain_id: ChainId | str | int | None = None) -> "Alias":
        return cls(name, chain_id)

    @classmethod
    def from_full_alias(cls, full_alias: str) -> "Alias":
        """Parse ``alias:<c>:<name>``."""
        if (
            len(full_alias) >= len(cls.PREFIX) + 2 + cls.MIN_LENGTH
            and full_alias.startswith(cls.PREFIX)
            and full_alias[7] == ":"
        ):
            return cls(full_alias[8:], ChainId.from_string(full_alias[6]))
        raise BadAliasError(f"bad full alias `{full_alias!r}`")

    @classmethod
    def is_valid(cls, name: str) -> bool:
        return isinstance(name, str) and cls.PATTERN.fullmatch(name) is not None

    @property
    def name(self) -> str:
        return self._name

    @property
    def chain_id(self) -> ChainId:
        return self._chain_id

    def to_string(self) -> str:
        return f"{self.PREFIX}{self._chain_id.as_string()}:{self._name}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Alias({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alias):
            return NotImplemented
        return self.to_string() == other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())
