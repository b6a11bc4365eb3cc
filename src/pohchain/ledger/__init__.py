"""Entry layer -- builds, hashes and verifies Entries over a HashChain.

Public API:
    build_entry, hash_entry: the two core operations
    EntryBuilder: drives one chain and records its Entries
    EntryVerifier: replay and linkage verification
    EntryVerificationResult: verification outcome
"""

from pohchain.ledger.builder import EntryBuilder, build_entry, hash_entry
from pohchain.ledger.verifier import (
    EntryVerificationResult,
    EntryVerifier,
    replay_end_hash,
)

__all__ = [
    "EntryBuilder",
    "EntryVerificationResult",
    "EntryVerifier",
    "build_entry",
    "hash_entry",
    "replay_end_hash",
]
