"""Ethash hashing, verification and nonce search."""

from __future__ import annotations

import struct
from collections.abc import Callable
from dataclasses import dataclass

from .epoch import (
    NUM_DATASET_ACCESSES,
    EpochContext,
    EpochContextFull,
    calculate_dataset_item_1024,
)
from .hash_types import is_equal, is_less_or_equal
from .keccak import keccak256, keccak512, keccakf800

VERSION = "0.5.1-alpha.1"
REVISION = "23"

_FNV_PRIME = 0x01000193
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_WORDS8 = struct.Struct("<8I")
_WORDS16 = struct.Struct("<16I")
_WORDS32 = struct.Struct("<32I")
_ZERO_HASH256 = bytes(32)

# Input constraints absorbed into the Keccak-f[800] state by light_verify().
_EVRPROGPOW = tuple(b"EVRMORE-PROGPOW")

Lookup = Callable[[int], bytes]


@dataclass(frozen=True)
class Result:
    """Final hash and mix hash produced by one Ethash evaluation."""

    final_hash: bytes
    mix_hash: bytes


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a nonce search; ``solution_found`` is False when nothing matched."""

    solution_found: bool = False
    nonce: int = 0
    final_hash: bytes = _ZERO_HASH256
    mix_hash: bytes = _ZERO_HASH256


def _fnv1(u: int, v: int) -> int:
    return ((u * _FNV_PRIME) ^ v) & _MASK32


def _check_hash256(value: bytes, name: str) -> bytes:
    raw = bytes(value)
    if len(raw) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(raw)}")
    return raw


def _check_nonce(nonce: int) -> int:
    if not 0 <= nonce <= _MASK64:
        raise ValueError(f"nonce must be an unsigned 64-bit integer, got {nonce}")
    return nonce


def _hash_seed(header_hash: bytes, nonce: int) -> bytes:
    header = _check_hash256(header_hash, "header_hash")
    return keccak512(header + _check_nonce(nonce).to_bytes(8, "little"))


def _hash_final(seed: bytes, mix_hash: bytes) -> bytes:
    return keccak256(seed + mix_hash)


def _hash_kernel(context: EpochContext, seed: bytes, lookup: Lookup) -> bytes:
    index_limit = context.full_dataset_num_items & _MASK32
    seed_words = _WORDS16.unpack(seed)
    seed_init = seed_words[0]
    mix = list(seed_words + seed_words)
    num_words = len(mix)

    for i in range(NUM_DATASET_ACCESSES):
        p = _fnv1(i ^ seed_init, mix[i % num_words]) % index_limit
        newdata = _WORDS32.unpack(lookup(p))
        mix = [_fnv1(m, d) for m, d in zip(mix, newdata)]

    compressed = [
        _fnv1(_fnv1(_fnv1(mix[i], mix[i + 1]), mix[i + 2]), mix[i + 3])
        for i in range(0, num_words, 4)
    ]
    return _WORDS8.pack(*compressed)


def _light_lookup(context: EpochContext) -> Lookup:
    return lambda index: calculate_dataset_item_1024(context, index)


def compute_hash(context: EpochContext, header_hash: bytes, nonce: int) -> Result:
    """Evaluate Ethash for a header hash and nonce.

    A full context serves dataset items from its lazily filled dataset,
    a light context derives each item from the light cache.
    """
    lookup = context.lookup if isinstance(context, EpochContextFull) else _light_lookup(context)
    seed = _hash_seed(header_hash, nonce)
    mix_hash = _hash_kernel(context, seed, lookup)
    return Result(_hash_final(seed, mix_hash), mix_hash)


def verify_final_hash(header_hash: bytes, mix_hash: bytes, nonce: int, boundary: bytes) -> bool:
    """Check only that the final hash implied by ``mix_hash`` meets the boundary."""
    seed = _hash_seed(header_hash, nonce)
    final = _hash_final(seed, _check_hash256(mix_hash, "mix_hash"))
    return is_less_or_equal(final, _check_hash256(boundary, "boundary"))


def verify(
    context: EpochContext, header_hash: bytes, mix_hash: bytes, nonce: int, boundary: bytes
) -> bool:
    """Full verification: the final hash meets the boundary and the mix hash is correct."""
    seed = _hash_seed(header_hash, nonce)
    mix = _check_hash256(mix_hash, "mix_hash")
    if not is_less_or_equal(_hash_final(seed, mix), _check_hash256(boundary, "boundary")):
        return False
    expected_mix_hash = _hash_kernel(context, seed, _light_lookup(context))
    return is_equal(expected_mix_hash, mix)


def _search(
    context: EpochContext, header_hash: bytes, boundary: bytes, start_nonce: int, iterations: int
) -> SearchResult:
    _check_nonce(start_nonce)
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    target = _check_hash256(boundary, "boundary")
    end_nonce = (start_nonce + iterations) & _MASK64
    for nonce in range(start_nonce, end_nonce):
        r = compute_hash(context, header_hash, nonce)
        if is_less_or_equal(r.final_hash, target):
            return SearchResult(True, nonce, r.final_hash, r.mix_hash)
    return SearchResult()


def search_light(
    context: EpochContext, header_hash: bytes, boundary: bytes, start_nonce: int, iterations: int
) -> SearchResult:
    """Try ``iterations`` nonces from ``start_nonce`` using light evaluation."""
    light = context
    if isinstance(context, EpochContextFull):
        light = EpochContext(
            context.epoch_number,
            context.light_cache_num_items,
            context.light_cache,
            context.l1_cache,
            context.full_dataset_num_items,
        )
    return _search(light, header_hash, boundary, start_nonce, iterations)


def search(
    context: EpochContextFull,
    header_hash: bytes,
    boundary: bytes,
    start_nonce: int,
    iterations: int,
) -> SearchResult:
    """Try ``iterations`` nonces from ``start_nonce`` using the full dataset."""
    if not isinstance(context, EpochContextFull):
        raise TypeError("search() needs a full epoch context")
    return _search(context, header_hash, boundary, start_nonce, iterations)


def light_verify(header_hash: bytes, mix_hash: bytes, nonce: int) -> bytes:
    """Final hash of the ProgPoW variant computed from the header, mix hash and nonce."""
    header = _check_hash256(header_hash, "header_hash")
    mix = _check_hash256(mix_hash, "mix_hash")
    _check_nonce(nonce)

    state = [
        *_WORDS8.unpack(header),
        nonce & _MASK32,
        nonce >> 32,
        *_EVRPROGPOW,
    ]
    carry = keccakf800(state)[:8]

    state = [*carry, *_WORDS8.unpack(mix), *_EVRPROGPOW[:9]]
    return _WORDS8.pack(*keccakf800(state)[:8])