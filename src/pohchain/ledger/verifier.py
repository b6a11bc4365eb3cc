"""Replay verification for Entries.

An Entry claims that ticking start_hash tick_count times and then
stamping its events yields end_hash. The verifier does that work again
from scratch and compares. Since every step is a SHA256, a forged or
edited Entry (different events, different tick count, different
boundary hashes) will not reproduce its own end_hash.

verify_sequence additionally checks linkage: each entry must start
where the previous one ended. A deleted, inserted or reordered entry
breaks that link even if every entry is individually valid.

Verification costs one hash per tick plus one per event, the same as
producing the entry in the first place.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pohchain.crypto.canonical import canonicalize
from pohchain.crypto.poh import stamp_digest, tick_digest
from pohchain.domain.entry import Entry
from pohchain.errors import PohError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntryVerificationResult:
    """Result of an entry verification operation."""

    is_valid: bool
    entries_verified: int
    first_invalid_index: int | None = None
    expected_hash: str | None = None
    actual_hash: str | None = None
    error_message: str | None = None


def replay_end_hash(entry: Entry) -> str:
    """Recompute the end_hash an Entry should have."""
    state = bytes.fromhex(entry.start_hash)
    for _ in range(entry.tick_count):
        state = tick_digest(state)
    for event in entry.events:
        state = stamp_digest(state, canonicalize(event))
    return state.hex()


class EntryVerifier:
    """Verifies Entries by replaying the hashing they claim to summarize."""

    def verify_entry(self, entry: Entry, index: int = 0) -> EntryVerificationResult:
        """Verify a single entry in isolation.

        An entry whose fields cannot be replayed at all (malformed hex,
        unserializable events) is reported as invalid rather than raised.
        """
        try:
            recomputed = replay_end_hash(entry)
        except (PohError, ValueError, TypeError) as exc:
            return self._fail(
                index,
                verified=0,
                expected=None,
                actual=entry.end_hash,
                message=f"Entry {index} cannot be replayed: {exc}",
            )

        if recomputed != entry.end_hash:
            return self._fail(
                index,
                verified=0,
                expected=recomputed,
                actual=entry.end_hash,
                message=(
                    f"Hash mismatch at entry {index}: "
                    f"expected {recomputed[:16]}..., "
                    f"got {entry.end_hash[:16]}..."
                ),
            )
        return EntryVerificationResult(is_valid=True, entries_verified=1)

    def verify_sequence(
        self,
        entries: Sequence[Entry],
        start_hash: str | None = None,
    ) -> EntryVerificationResult:
        """Verify a run of entries and the links between them.

        If ``start_hash`` is given, the first entry must start there
        (e.g. the seed, or a trusted checkpoint). Otherwise the first
        entry's own start_hash is trusted. Stops at the first failure.
        """
        expected_prev = start_hash
        verified = 0

        for index, entry in enumerate(entries):
            if expected_prev is not None and entry.start_hash != expected_prev:
                return self._fail(
                    index,
                    verified=verified,
                    expected=expected_prev,
                    actual=entry.start_hash,
                    message=(
                        f"Chain link broken at entry {index}: start_hash does "
                        f"not match the previous end_hash. An entry may have "
                        f"been deleted, inserted or reordered."
                    ),
                )

            result = self.verify_entry(entry, index)
            if not result.is_valid:
                return EntryVerificationResult(
                    is_valid=False,
                    entries_verified=verified,
                    first_invalid_index=index,
                    expected_hash=result.expected_hash,
                    actual_hash=result.actual_hash,
                    error_message=result.error_message,
                )

            expected_prev = entry.end_hash
            verified += 1

        return EntryVerificationResult(is_valid=True, entries_verified=verified)

    @staticmethod
    def _fail(
        index: int,
        verified: int,
        expected: str | None,
        actual: str | None,
        message: str,
    ) -> EntryVerificationResult:
        log.warning(message)
        return EntryVerificationResult(
            is_valid=False,
            entries_verified=verified,
            first_invalid_index=index,
            expected_hash=expected,
            actual_hash=actual,
            error_message=message,
        )
