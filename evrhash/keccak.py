"""Keccak permutations and the original (pre-SHA-3) Keccak hash functions."""

from __future__ import annotations

from collections.abc import Sequence

from Crypto.Hash import keccak as _keccak


def _rc_bit(t: int) -> int:
    r = 1
    for _ in range(t % 255):
        r <<= 1
        if r & 0x100:
            r ^= 0x171
    return r & 1


def _round_constant(round_index: int) -> int:
    return sum(_rc_bit(j + 7 * round_index) << ((1 << j) - 1) for j in range(7))


_RC64 = tuple(_round_constant(i) for i in range(24))
_RC32 = tuple(rc & 0xFFFFFFFF for rc in _RC64[:22])

_RHO = (0, 1, 62, 28, 27, 36, 44, 6, 55, 20, 3, 10, 43, 25, 39, 41, 45, 15, 21, 8, 18, 2, 61, 56, 14)

# (source lane, destination lane) for the combined rho and pi steps.
_PI = tuple((x + 5 * y, y + 5 * ((2 * x + 3 * y) % 5)) for y in range(5) for x in range(5))


def _permute(state: Sequence[int], width: int, constants: Sequence[int]) -> list[int]:
    mask = (1 << width) - 1
    lanes = list(state)
    if len(lanes) != 25:
        raise ValueError(f"Keccak state must have 25 lanes, got {len(lanes)}")
    if any(not 0 <= v <= mask for v in lanes):
        raise ValueError(f"Keccak lanes must be unsigned {width}-bit integers")

    rho = [r % width for r in _RHO]

    def rotl(v: int, n: int) -> int:
        return ((v << n) | (v >> (width - n))) & mask

    for rc in constants:
        columns = [lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20] for x in range(5)]
        delta = [columns[(x - 1) % 5] ^ rotl(columns[(x + 1) % 5], 1) for x in range(5)]
        lanes = [v ^ delta[i % 5] for i, v in enumerate(lanes)]

        moved = [0] * 25
        for src, dst in _PI:
            moved[dst] = rotl(lanes[src], rho[src])

        lanes = [
            moved[i] ^ (~moved[i - i % 5 + (i % 5 + 1) % 5] & moved[i - i % 5 + (i % 5 + 2) % 5])
            for i in range(25)
        ]
        lanes[0] ^= rc
    return lanes


def keccakf1600(state: Sequence[int]) -> list[int]:
    """Apply Keccak-f[1600] to 25 64-bit lanes and return the new state."""
    return _permute(state, 64, _RC64)


def keccakf800(state: Sequence[int]) -> list[int]:
    """Apply Keccak-f[800] to 25 32-bit lanes and return the new state."""
    return _permute(state, 32, _RC32)


def keccak256(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 of ``data`` (original Keccak padding)."""
    return _keccak.new(digest_bits=256, data=data).digest()


def keccak512(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-512 of ``data`` (original Keccak padding)."""
    return _keccak.new(digest_bits=512, data=data).digest()


def keccak256_32(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 of the first 32 bytes of ``data``."""
    raw = bytes(data)
    if len(raw) < 32:
        raise ValueError(f"need at least 32 bytes, got {len(raw)}")
    return keccak256(raw[:32])


def keccak512_64(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-512 of the first 64 bytes of ``data``."""
    raw = bytes(data)
    if len(raw) < 64:
        raise ValueError(f"need at least 64 bytes, got {len(raw)}")
    return keccak512(raw[:64])