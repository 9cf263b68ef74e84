import pytest

from evrhash.epoch import (
    EpochContext,
    EpochContextFull,
    build_light_cache,
    calculate_epoch_seed,
)
from evrhash.hashing import (
    Result,
    SearchResult,
    compute_hash,
    light_verify,
    search,
    search_light,
    verify,
    verify_final_hash,
)

MAX_BOUNDARY = b"\xff" * 32
ZERO_BOUNDARY = bytes(32)
HEADER = bytes(range(32))

_CACHE_ITEMS = 11
_DATASET_ITEMS = 7


@pytest.fixture(scope="module")
def light_cache():
    return tuple(build_light_cache(_CACHE_ITEMS, calculate_epoch_seed(0)))


@pytest.fixture(scope="module")
def context(light_cache):
    return EpochContext(0, _CACHE_ITEMS, light_cache, (), _DATASET_ITEMS)


@pytest.fixture()
def full_context(light_cache):
    return EpochContextFull(0, _CACHE_ITEMS, light_cache, (), _DATASET_ITEMS)


@pytest.fixture(scope="module")
def result(context):
    return compute_hash(context, HEADER, 5)


def test_hash_is_deterministic(context, result):
    again = compute_hash(context, HEADER, 5)
    assert again == result
    assert len(result.final_hash) == 32
    assert len(result.mix_hash) == 32


def test_hash_depends_on_nonce(context, result):
    other = compute_hash(context, HEADER, 6)
    assert other.final_hash != result.final_hash


def test_full_context_matches_light(full_context, result):
    r = compute_hash(full_context, HEADER, 5)
    assert r == result
    assert 0 < len(full_context.full_dataset) <= _DATASET_ITEMS


def test_verify_accepts_own_result(context, result):
    assert verify(context, HEADER, result.mix_hash, 5, MAX_BOUNDARY) is True
    assert verify(context, HEADER, result.mix_hash, 5, result.final_hash) is True


def test_verify_rejects_wrong_mix(context, result):
    wrong_mix = bytes(b ^ 0xFF for b in result.mix_hash)
    assert verify(context, HEADER, wrong_mix, 5, MAX_BOUNDARY) is False


def test_verify_rejects_boundary(context, result):
    assert verify(context, HEADER, result.mix_hash, 5, ZERO_BOUNDARY) is False


def test_verify_final_hash(result):
    assert verify_final_hash(HEADER, result.mix_hash, 5, result.final_hash) is True
    assert verify_final_hash(HEADER, result.mix_hash, 5, ZERO_BOUNDARY) is False


def test_search_light_finds_first_nonce(context, result):
    found = search_light(context, HEADER, result.final_hash, 5, 1)
    assert found == SearchResult(True, 5, result.final_hash, result.mix_hash)


def test_search_full_finds_first_nonce(full_context, result):
    found = search(full_context, HEADER, MAX_BOUNDARY, 5, 3)
    assert found.solution_found is True
    assert found.nonce == 5
    assert Result(found.final_hash, found.mix_hash) == result


def test_search_not_found(context):
    found = search_light(context, HEADER, ZERO_BOUNDARY, 0, 2)
    assert found == SearchResult()
    assert found.solution_found is False


def test_search_nonce_range_wraps_to_empty(context):
    found = search_light(context, HEADER, MAX_BOUNDARY, 2**64 - 1, 2)
    assert found.solution_found is False


def test_search_requires_full_context(context):
    with pytest.raises(TypeError):
        search(context, HEADER, MAX_BOUNDARY, 0, 1)


def test_nonce_out_of_range(context):
    with pytest.raises(ValueError):
        compute_hash(context, HEADER, 2**64)
    with pytest.raises(ValueError):
        verify_final_hash(HEADER, HEADER, -1, MAX_BOUNDARY)


def test_bad_header_length(context):
    with pytest.raises(ValueError):
        compute_hash(context, b"\x00" * 31, 0)


def test_light_verify_deterministic():
    a = light_verify(HEADER, bytes(32), 1)
    assert a == light_verify(HEADER, bytes(32), 1)
    assert len(a) == 32


def test_light_verify_depends_on_inputs():
    base = light_verify(HEADER, bytes(32), 1)
    assert light_verify(HEADER, bytes(32), 2) != base
    assert light_verify(HEADER, b"\x01" + bytes(31), 1) != base
    assert light_verify(bytes(32), bytes(32), 1) != base
    assert light_verify(HEADER, bytes(32), 1 << 32) != light_verify(HEADER, bytes(32), 0)


def test_light_verify_rejects_bad_sizes():
    with pytest.raises(ValueError):
        light_verify(HEADER, bytes(16), 0)
    with pytest.raises(ValueError):
        light_verify(HEADER, bytes(32), 2**64)