"""Event and Entry -- the records woven into a Proof-of-History chain.

An Event is whatever the caller wants to bind to a position in the
chain: a discriminant ``kind`` plus an open, JSON-like payload. Nothing
about the payload is checked here. It is validated when it is
serialized, just before it is stamped.

An Entry summarizes one advancement episode of a chain: the state it
started from, how many ticks were run, which events were stamped (in
order) and the state it ended at. Entries are produced by the ledger
builder and never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pohchain.domain.types import HexDigest, JsonValue, TickCount


@dataclass(frozen=True, slots=True)
class Event:
    """A caller-defined record to stamp into the chain.

    Canonical form is ``{"kind": kind, "payload": payload}``.
    """
    kind: str
    payload: JsonValue = None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "payload": self.payload}

    @classmethod
    def tx(cls, **payload: Any) -> Event:
        """Shorthand for a transaction event: ``Event.tx(id=7, amount=100)``."""
        return cls(kind="tx", payload=payload)


@dataclass(frozen=True, slots=True)
class Entry:
    """Immutable summary of ticks and events applied to a chain.

    end_hash is a pure function of (start_hash, tick_count, events):
    replaying them on a chain seeded with start_hash reproduces it.
    """
    start_hash: HexDigest
    tick_count: TickCount
    events: tuple[Any, ...]
    end_hash: HexDigest

    @property
    def is_tick_only(self) -> bool:
        """True if no events were stamped in this entry."""
        return not self.events

    @property
    def num_hashes(self) -> int:
        """Number of chain transitions this entry accounts for."""
        return self.tick_count + len(self.events)

    def __str__(self) -> str:
        return (
            f"Entry({self.start_hash[:12]}... +{self.tick_count} ticks "
            f"+{len(self.events)} events -> {self.end_hash[:12]}...)"
        )
