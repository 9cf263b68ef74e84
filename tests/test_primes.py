import pytest

from evrhash.primes import find_largest_prime


@pytest.mark.parametrize("n", [-5, 0, 1])
def test_below_two_gives_zero(n):
    assert find_largest_prime(n) == 0


def test_two():
    assert find_largest_prime(2) == 2


@pytest.mark.parametrize("p", [3, 5, 7, 97, 262139])
def test_primes_are_fixed_points(p):
    assert find_largest_prime(p) == p


def test_composites_step_down():
    assert find_largest_prime(100) == 97
    assert find_largest_prime(262144) == 262139


def test_step_function_invariants():
    previous = find_largest_prime(2)
    for n in range(3, 600):
        r = find_largest_prime(n)
        assert 2 <= r <= n
        assert find_largest_prime(r) == r
        assert r == n or r == previous
        previous = r