"""Ethash proof-of-work primitives: Keccak, epoch contexts, hashing and verification."""

__version__ = "0.5.1a1"

__all__ = ["epoch", "hash_types", "hashing", "keccak", "primes"]