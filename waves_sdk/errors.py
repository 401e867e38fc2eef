"""Error taxonomy for the Waves SDK core.

Every error raised by value types, the JSON accessor and transaction
encoding derives from :class:`WavesError`. Each kind also derives from the
closest builtin so callers can catch ``ValueError`` / ``TypeError`` /
``LookupError`` without importing this module.
"""

from __future__ import annotations


class WavesError(Exception):
    """Base class for all SDK errors."""


# ---------------------------------------------------------------------------
# Value types and codecs
# ---------------------------------------------------------------------------


class BadLengthError(WavesError, ValueError):
    """A fixed-size identifier was given the wrong number of bytes."""

    def __init__(self, kind: str, expected: int | tuple[int, ...], actual: int) -> None:
        self.kind = kind
        self.expected = expected
        self.actual = actual
        if isinstance(expected, tuple):
            want = " or ".join(str(n) for n in expected)
        else:
            want = str(expected)
        super().__init__(f"bad {kind} length: expected {want} bytes, got {actual}")


class Base58DecodeError(WavesError, ValueError):
    """A string is not valid base58."""


class Base64DecodeError(WavesError, ValueError):
    """A string is not valid base64."""


class BadAliasError(WavesError, ValueError):
    """An alias name or full alias string is malformed."""


class BadChainIdError(WavesError, ValueError):
    """A chain id is out of range or not a single character."""


class UnknownTypeError(WavesError, ValueError):
    """An enum-like tag (entry type, arg type, transaction type) is unknown."""


class UnexpectedVersionError(WavesError, ValueError):
    """A transaction version cannot be encoded by this SDK."""

    def __init__(self, type_name: str, version: int, supported: int) -> None:
        self.version = version
        self.supported = supported
        super().__init__(
            f"{type_name}: unexpected version {version}, only version {supported} can be serialized"
        )


# ---------------------------------------------------------------------------
# JSON accessor
# ---------------------------------------------------------------------------


class KeyMissingError(WavesError, LookupError):
    """A required JSON key is absent (or null)."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"failed to find key `{key}`")


class JsonTypeError(WavesError, TypeError):
    """A JSON value does not have the expected dynamic type."""

    expected = "value"

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"{self.expected} expected at `{value!r}`")


class BoolExpectedError(JsonTypeError):
    expected = "boolean"


class IntExpectedError(JsonTypeError):
    expected = "integer"


class StringExpectedError(JsonTypeError):
    expected = "string"


class ArrayExpectedError(JsonTypeError):
    expected = "array"


class ObjectExpectedError(JsonTypeError):
    expected = "object"
