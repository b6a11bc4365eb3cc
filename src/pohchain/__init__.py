"""pohchain -- Proof-of-History hash chain and Entry construction.

    from pohchain import HashChain, Event, build_entry, hash_entry

    chain = HashChain.from_seed("cc" * 32)
    entry = build_entry(chain, 4, [Event.tx(id=7, amount=100)])
    digest = hash_entry(entry)
"""

from pohchain.crypto import HashChain, canonicalize
from pohchain.domain import DIGEST_SIZE, Entry, Event
from pohchain.errors import (
    InvalidSeed,
    InvalidSeedLength,
    PohError,
    SerializationError,
)
from pohchain.ledger import (
    EntryBuilder,
    EntryVerificationResult,
    EntryVerifier,
    build_entry,
    hash_entry,
)

__version__ = "0.1.0"

__all__ = [
    "DIGEST_SIZE",
    "Entry",
    "EntryBuilder",
    "EntryVerificationResult",
    "EntryVerifier",
    "Event",
    "HashChain",
    "InvalidSeed",
    "InvalidSeedLength",
    "PohError",
    "SerializationError",
    "build_entry",
    "canonicalize",
    "hash_entry",
]
