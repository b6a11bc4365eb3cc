"""Proof-of-History primitives -- SHA256 hash chain and canonical bytes.

Public API:
    HashChain: the tick/stamp state machine
    tick_digest, stamp_digest: the pure transitions behind it
    canonicalize: deterministic bytes for JSON-like values
    length_prefixed: injective field framing for hashing
"""

from pohchain.crypto.canonical import (
    LENGTH_PREFIX,
    canonicalize,
    length_prefixed,
    normalize,
)
from pohchain.crypto.poh import (
    HASH_ALGORITHM,
    HashChain,
    stamp_digest,
    tick_digest,
)

__all__ = [
    "HASH_ALGORITHM",
    "LENGTH_PREFIX",
    "HashChain",
    "canonicalize",
    "length_prefixed",
    "normalize",
    "stamp_digest",
    "tick_digest",
]
