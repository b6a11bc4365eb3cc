"""Domain records for pohchain.

Re-exports the public types for convenient access:
    from pohchain.domain import Entry, Event
"""
from pohchain.domain.entry import Entry, Event
from pohchain.domain.types import (
    DIGEST_SIZE,
    HexDigest,
    JsonValue,
    RawDigest,
    TickCount,
)

__all__ = [
    "DIGEST_SIZE",
    "Entry",
    "Event",
    "HexDigest",
    "JsonValue",
    "RawDigest",
    "TickCount",
]
