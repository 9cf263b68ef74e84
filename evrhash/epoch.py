"""Epoch parameters, light cache and dataset item generation for Ethash."""

from __future__ import annotations

import struct
import threading
from dataclasses import dataclass, field

from .keccak import keccak256, keccak512
from .primes import find_largest_prime

EPOCH_LENGTH = 12000
LIGHT_CACHE_ITEM_SIZE = 64
FULL_DATASET_ITEM_SIZE = 128
NUM_DATASET_ACCESSES = 64

_LIGHT_CACHE_INIT_SIZE = 1 << 24
_LIGHT_CACHE_GROWTH = 1 << 17
_LIGHT_CACHE_ROUNDS = 3
_FULL_DATASET_INIT_SIZE = (1 << 30) * 3
_FULL_DATASET_GROWTH = 1 << 23
_FULL_DATASET_ITEM_PARENTS = 512
_L1_CACHE_SIZE = 16 * 1024

_FNV_PRIME = 0x01000193
_MASK32 = 0xFFFFFFFF
_WORDS16 = struct.Struct("<16I")
_ZERO_HASH256 = bytes(32)
_FIND_EPOCH_TRIES = 30000


@dataclass(frozen=True)
class EpochContext:
    """Light verification data for one epoch."""

    epoch_number: int
    light_cache_num_items: int
    light_cache: tuple[bytes, ...] = field(repr=False)
    l1_cache: tuple[int, ...] = field(repr=False)
    full_dataset_num_items: int


@dataclass(frozen=True)
class EpochContextFull(EpochContext):
    """Epoch context whose full dataset items are generated on first use."""

    full_dataset: dict[int, bytes] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def lookup(self, index: int) -> bytes:
        """Return full dataset item ``index``, generating and storing it if needed."""
        if not 0 <= index < self.full_dataset_num_items:
            raise IndexError(f"dataset index {index} out of range")
        item = self.full_dataset.get(index)
        if item is None:
            item = calculate_dataset_item_1024(self, index)
            self.full_dataset[index] = item
        return item


def _check_hash256(value: bytes, name: str) -> bytes:
    raw = bytes(value)
    if len(raw) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(raw)}")
    return raw


def calculate_light_cache_num_items(epoch_number: int) -> int:
    """Number of 64-byte items in the light cache of an epoch."""
    init = _LIGHT_CACHE_INIT_SIZE // LIGHT_CACHE_ITEM_SIZE
    growth = _LIGHT_CACHE_GROWTH // LIGHT_CACHE_ITEM_SIZE
    return find_largest_prime(init + epoch_number * growth)


def calculate_full_dataset_num_items(epoch_number: int) -> int:
    """Number of 128-byte items in the full dataset of an epoch."""
    init = _FULL_DATASET_INIT_SIZE // FULL_DATASET_ITEM_SIZE
    growth = _FULL_DATASET_GROWTH // FULL_DATASET_ITEM_SIZE
    return find_largest_prime(init + epoch_number * growth)


def calculate_epoch_seed(epoch_number: int) -> bytes:
    """Seed hash of an epoch: Keccak-256 applied ``epoch_number`` times to zero."""
    seed = _ZERO_HASH256
    for _ in range(epoch_number):
        seed = keccak256(seed)
    return seed


def get_epoch_number(block_number: int) -> int:
    """Epoch that a block belongs to (division truncating toward zero)."""
    quotient = abs(block_number) // EPOCH_LENGTH
    return quotient if block_number >= 0 else -quotient


def get_light_cache_size(num_items: int) -> int:
    """Size in bytes of a light cache with ``num_items`` items."""
    return num_items * LIGHT_CACHE_ITEM_SIZE


def get_full_dataset_size(num_items: int) -> int:
    """Size in bytes of a full dataset with ``num_items`` items."""
    return num_items * FULL_DATASET_ITEM_SIZE


_seed_cache = threading.local()


def find_epoch_number(seed: bytes) -> int | None:
    """Recover the epoch number from its seed hash, or None if not found.

    The last match is remembered per thread so that repeated and sequential
    lookups are fast.
    """
    seed_part = _check_hash256(seed, "seed")[:4]
    cached_epoch = getattr(_seed_cache, "epoch", 0)
    candidate = getattr(_seed_cache, "seed", _ZERO_HASH256)

    if candidate[:4] == seed_part:
        return cached_epoch

    candidate = keccak256(candidate)
    if candidate[:4] == seed_part:
        _seed_cache.seed, _seed_cache.epoch = candidate, cached_epoch + 1
        return cached_epoch + 1

    candidate = _ZERO_HASH256
    for epoch in range(_FIND_EPOCH_TRIES):
        if candidate[:4] == seed_part:
            _seed_cache.seed, _seed_cache.epoch = candidate, epoch
            return epoch
        candidate = keccak256(candidate)
    return None


def _xor64(x: bytes, y: bytes) -> bytes:
    return (int.from_bytes(x, "little") ^ int.from_bytes(y, "little")).to_bytes(64, "little")


def build_light_cache(num_items: int, seed: bytes) -> list[bytes]:
    """Build the light cache: a list of ``num_items`` 64-byte items."""
    if num_items < 1:
        raise ValueError("light cache needs at least one item")
    item = keccak512(_check_hash256(seed, "seed"))
    cache = [item]
    for _ in range(1, num_items):
        item = keccak512(item)
        cache.append(item)

    for _ in range(_LIGHT_CACHE_ROUNDS):
        for i in range(num_items):
            v = int.from_bytes(cache[i][:4], "little") % num_items
            w = (num_items + i - 1) % num_items
            cache[i] = keccak512(_xor64(cache[v], cache[w]))
    return cache


def _item512(cache: tuple[bytes, ...] | list[bytes], num_items: int, index: int) -> bytes:
    seed = index & _MASK32
    mix = list(_WORDS16.unpack(cache[index % num_items]))
    mix[0] ^= seed
    mix = _WORDS16.unpack(keccak512(_WORDS16.pack(*mix)))

    unpack = _WORDS16.unpack
    for j in range(_FULL_DATASET_ITEM_PARENTS):
        t = (((seed ^ j) * _FNV_PRIME) ^ mix[j & 15]) & _MASK32
        parent = unpack(cache[t % num_items])
        mix = [((m * _FNV_PRIME) ^ p) & _MASK32 for m, p in zip(mix, parent)]
    return keccak512(_WORDS16.pack(*mix))


def calculate_dataset_item_512(context: EpochContext, index: int) -> bytes:
    """One 512-bit dataset item derived from the light cache."""
    return _item512(context.light_cache, context.light_cache_num_items, index)


def calculate_dataset_item_1024(context: EpochContext, index: int) -> bytes:
    """Full dataset item ``index``: two consecutive 512-bit items."""
    base = (index & _MASK32) * 2
    return b"".join(
        _item512(context.light_cache, context.light_cache_num_items, base + k) for k in range(2)
    )


def calculate_dataset_item_2048(context: EpochContext, index: int) -> bytes:
    """A 2048-bit item: four consecutive 512-bit items."""
    base = (index & _MASK32) * 4
    return b"".join(
        _item512(context.light_cache, context.light_cache_num_items, base + k) for k in range(4)
    )


def _build(epoch_number: int, full: bool) -> EpochContext:
    num_items = calculate_light_cache_num_items(epoch_number)
    full_num_items = calculate_full_dataset_num_items(epoch_number)
    cache = tuple(build_light_cache(num_items, calculate_epoch_seed(epoch_number)))

    l1_bytes = b"".join(
        _item512(cache, num_items, k) for k in range(_L1_CACHE_SIZE // LIGHT_CACHE_ITEM_SIZE)
    )
    l1_cache = struct.unpack(f"<{len(l1_bytes) // 4}I", l1_bytes)

    if not full:
        return EpochContext(epoch_number, num_items, cache, l1_cache, full_num_items)

    context = EpochContextFull(epoch_number, num_items, cache, l1_cache, full_num_items)
    prefilled = min(len(l1_bytes) // FULL_DATASET_ITEM_SIZE, full_num_items)
    for k in range(prefilled):
        context.full_dataset[k] = l1_bytes[k * FULL_DATASET_ITEM_SIZE : (k + 1) * FULL_DATASET_ITEM_SIZE]
    return context


def create_epoch_context(epoch_number: int) -> EpochContext:
    """Build the light epoch context: light cache and L1 cache."""
    return _build(epoch_number, full=False)


def create_epoch_context_full(epoch_number: int) -> EpochContextFull:
    """Build an epoch context whose full dataset is filled lazily."""
    context = _build(epoch_number, full=True)
    assert isinstance(context, EpochContextFull)
    return context