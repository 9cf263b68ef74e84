# evrhash

A pure-Python library for the Ethash family of proof-of-work primitives:

- Keccak-256/512 hashing and the Keccak-f[1600] and Keccak-f[800]
  permutations (`evrhash.keccak`)
- hash values as plain `bytes`, hex conversion and comparison
  (`evrhash.hash_types`)
- the largest-prime search used to size caches (`evrhash.primes`)
- epoch parameters: seeds, light cache and full dataset sizes, epoch lookup
  from a seed hash; light and lazily filled full epoch contexts; dataset item
  generation (`evrhash.epoch`)
- hashing, verification, nonce search and light verification
  (`evrhash.hashing`)

## Installation

```
pip install evrhash
```

Running the tests needs the `test` extra:

```
pip install "evrhash[test]"
pytest
```

## Usage

```python
from evrhash.keccak import keccak256
from evrhash.hash_types import to_hex

print(to_hex(keccak256(b"")))
# c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470
```

`to_hash256` parses a hex string into a 32-byte hash, padding missing
trailing bytes with zeros; `is_less_or_equal` compares two hashes as
big-endian numbers.

Epoch parameters:

```python
from evrhash.epoch import (
    get_epoch_number,
    calculate_epoch_seed,
    calculate_light_cache_num_items,
    calculate_full_dataset_num_items,
    find_epoch_number,
)

epoch = get_epoch_number(30000)          # 2
seed = calculate_epoch_seed(epoch)
assert find_epoch_number(seed) == epoch  # None when no epoch matches
print(calculate_light_cache_num_items(epoch))
print(calculate_full_dataset_num_items(epoch))
```

Hashing and verification with a light context:

```python
from evrhash.epoch import create_epoch_context
from evrhash.hashing import compute_hash, verify
from evrhash.hash_types import to_hash256

context = create_epoch_context(0)
header = to_hash256("00" * 32)
result = compute_hash(context, header, nonce=0)
boundary = to_hash256("ff" * 32)
assert verify(context, header, result.mix_hash, 0, boundary)
```

`create_epoch_context_full` returns an `EpochContextFull`, whose `lookup`
method generates full dataset items on first use and keeps them. Passing such
a context to `compute_hash` uses those stored items.

`search_light` and `search` scan `iterations` nonces from `start_nonce` and
return a `SearchResult` whose `solution_found` tells whether a final hash at
or below the boundary was found. `search` requires a full context.
`verify_final_hash` checks only the boundary, without recomputing the mix
hash. `light_verify` recomputes the final hash of the Keccak-f[800] based
variant from a header hash, mix hash and nonce.

## Limitations

- Building an epoch context computes the whole light cache in Python and is
  slow. The package keeps no shared, per-epoch context cache: each call to
  `create_epoch_context` builds a new context, and holding on to it is up to
  the caller.
- There is no command-line tool and no network service; the package is a
  library only.