"""Entry construction and entry hashing.

build_entry drives a chain through a fixed number of ticks and then
stamps a batch of events, always in that order: ticks first, events
after, never interleaved. The result is an Entry whose start_hash and
end_hash bracket the work.

Every event is serialized before the chain is touched. If any event
cannot be serialized, SerializationError propagates and the chain is
left exactly where it was, so there is never a half-applied batch.
The Entry keeps a deep copy of the events, detached from the caller.

hash_entry condenses an Entry into a single SHA256 for equality and
integrity checks downstream. Its input is four length-prefixed fields
in a fixed order:

    start_hash (32 raw bytes)
    tick_count (ASCII decimal)
    events     (canonical JSON of the whole list)
    end_hash   (32 raw bytes)

Field order is fixed and must never change once entries have been
hashed -- changing it would silently change every entry hash.
"""
from __future__ import annotations

import copy
import hashlib
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from pohchain.crypto.canonical import canonicalize, length_prefixed
from pohchain.crypto.poh import HashChain
from pohchain.domain.entry import Entry

log = logging.getLogger(__name__)


def check_tick_count(tick_count: int) -> int:
    """Reject anything that is not a non-negative int (bools included)."""
    if isinstance(tick_count, bool) or not isinstance(tick_count, int):
        raise TypeError(
            f"tick_count must be an int, got {type(tick_count).__name__}"
        )
    if tick_count < 0:
        raise ValueError(f"tick_count must be non-negative, got {tick_count}")
    return tick_count


def build_entry(
    chain: HashChain,
    tick_count: int,
    events: Iterable[Any] = (),
) -> Entry:
    """Tick ``chain`` ``tick_count`` times, stamp ``events``, return the Entry.

    The chain is advanced in place; the next entry built from it starts
    where this one ended.
    """
    check_tick_count(tick_count)
    events = tuple(events)
    serialized = [canonicalize(event) for event in events]
    # The entry owns its events; later edits to caller payloads must not
    # reach it.
    events = copy.deepcopy(events)

    start_hash = chain.current()
    chain.tick_n(tick_count)
    for data in serialized:
        chain.stamp(data)
    end_hash = chain.current()

    log.debug(
        "Built entry %s... ticks=%d events=%d -> %s...",
        start_hash[:12], tick_count, len(events), end_hash[:12],
    )
    return Entry(
        start_hash=start_hash,
        tick_count=tick_count,
        events=events,
        end_hash=end_hash,
    )


def _canonical_entry(entry: Entry) -> bytes:
    parts: list[bytes] = [
        length_prefixed(bytes.fromhex(entry.start_hash)),
        length_prefixed(str(entry.tick_count).encode("ascii")),
        length_prefixed(canonicalize(list(entry.events))),
        length_prefixed(bytes.fromhex(entry.end_hash)),
    ]
    return b"".join(parts)


def hash_entry(entry: Entry) -> str:
    """SHA256 over the entry's canonical form, as 64 lowercase hex chars."""
    return hashlib.sha256(_canonical_entry(entry)).hexdigest()


class EntryBuilder:
    """Produces a linear run of Entries from one chain.

    Each Entry starts where the previous one ended, as long as nobody
    advances the chain behind the builder's back. The builder keeps the
    Entries it produced, in order. There is no delete or update.
    """

    def __init__(self, chain: HashChain) -> None:
        self._chain = chain
        self._entries: list[Entry] = []

    @property
    def chain(self) -> HashChain:
        return self._chain

    @property
    def head_hash(self) -> str:
        """The chain's current state (end_hash of the last entry, if any)."""
        return self._chain.current()

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def build(self, tick_count: int, events: Iterable[Any] = ()) -> Entry:
        """Build the next entry and record it."""
        entry = build_entry(self._chain, tick_count, events)
        self._entries.append(entry)
        return entry

    def get(self, index: int) -> Entry:
        """Retrieve a recorded entry by position.

        Raises IndexError if out of range.
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(
                f"Entry {index} out of range "
                f"(builder has {len(self._entries)} entries)"
            )
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]
