"""Fixed-size hash values and helpers for comparing and formatting them.

Hashes are plain ``bytes`` objects: 32 bytes for a 256-bit hash,
64 bytes for 512-bit, 128 bytes for 1024-bit and 256 bytes for 2048-bit.
"""

from __future__ import annotations

HASH256_SIZE = 32
HASH512_SIZE = 64
HASH1024_SIZE = 128
HASH2048_SIZE = 256


def hash256_from_bytes(data: bytes | bytearray | memoryview) -> bytes:
    """Return a 256-bit hash made of the first 32 bytes of ``data``."""
    raw = bytes(data)
    if len(raw) < HASH256_SIZE:
        raise ValueError(f"need at least {HASH256_SIZE} bytes, got {len(raw)}")
    return raw[:HASH256_SIZE]


def to_hex(h: bytes | bytearray | memoryview) -> str:
    """Return the lower-case hexadecimal form of a hash."""
    return bytes(h).hex()


def to_hash256(hex_str: str) -> bytes:
    """Parse a hexadecimal string into a 256-bit hash.

    Missing trailing bytes are zero, so an empty string gives the zero hash.
    """
    raw = bytes.fromhex(hex_str)
    if len(raw) > HASH256_SIZE:
        raise ValueError(f"hex string encodes {len(raw)} bytes, more than {HASH256_SIZE}")
    return raw + bytes(HASH256_SIZE - len(raw))


def is_less_or_equal(x: bytes, y: bytes) -> bool:
    """Compare two hashes as big-endian unsigned integers: ``x <= y``."""
    a, b = bytes(x), bytes(y)
    if len(a) != len(b):
        raise ValueError("hashes of different sizes cannot be compared")
    return a <= b


def is_equal(x: bytes, y: bytes) -> bool:
    """Return whether two hashes hold the same bytes."""
    return bytes(x) == bytes(y)