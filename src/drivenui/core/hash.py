"""Digests for cache keys and bundle fingerprints.

xxhash64 is the default; SHA256 is available when a digest has to match
one computed by other tooling.
"""

import hashlib
from collections.abc import Callable
from enum import Enum

import xxhash


class Algorithm(str, Enum):
    XXHASH64 = "xxhash64"
    SHA256 = "sha256"


_DIGESTS: dict[Algorithm, Callable[[bytes], str]] = {
    Algorithm.XXHASH64: lambda data: xxhash.xxh64(data).hexdigest(),
    Algorithm.SHA256: lambda data: hashlib.sha256(data).hexdigest(),
}

# Joins fields; cannot occur in well-formed XML text
FIELD_SEPARATOR = "\x00"


def digest_bytes(data: bytes, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hex digest of ``data``.

    Raises:
        ValueError: For an unsupported algorithm
    """
    try:
        digest = _DIGESTS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None
    return digest(data)


def hash_string(text: str, algorithm: Algorithm = Algorithm.XXHASH64, truncate: int | None = None) -> str:
    """Digest of the UTF-8 text, optionally cut to ``truncate`` characters."""
    digest = digest_bytes(text.encode("utf-8"), algorithm)
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Order-sensitive digest over several markup sections.

    Examples:
        >>> hash_fields("<microapp/>", "<allStyles/>") == hash_fields("<microapp/>", "<allStyles/>")
        True
        >>> hash_fields("ab", "c") == hash_fields("a", "bc")
        False
    """
    return hash_string(FIELD_SEPARATOR.join(fields), algorithm)


__all__ = ["Algorithm", "digest_bytes", "hash_string", "hash_fields"]
