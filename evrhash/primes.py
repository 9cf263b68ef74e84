"""Prime search used to size the Ethash caches."""

from __future__ import annotations

from math import isqrt


def _is_odd_prime(number: int) -> bool:
    """Primality test for odd numbers greater than 2."""
    return all(number % d for d in range(3, isqrt(number) + 1, 2))


def find_largest_prime(upper_bound: int) -> int:
    """Return the largest prime not greater than ``upper_bound``, or 0 below 2."""
    n = upper_bound
    if n < 2:
        return 0
    if n == 2:
        return 2
    if n % 2 == 0:
        n -= 1
    while not _is_odd_prime(n):
        n -= 2
    return n