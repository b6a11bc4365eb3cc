"""Exception types raised by pohchain.

The taxonomy is narrow. Seed validation is the only input check on the
chain itself; everything else is pure hashing and cannot fail once the
chain exists. Events are validated at the serialization boundary.
"""
from __future__ import annotations


class PohError(Exception):
    """Base class for every error raised by this package."""


class InvalidSeed(PohError, ValueError):
    """Raised when a seed cannot be turned into a chain state."""


class InvalidSeedLength(InvalidSeed):
    """Raised when a seed does not decode to exactly 32 bytes."""

    def __init__(self, length: int, expected: int = 32) -> None:
        self.length = length
        self.expected = expected
        super().__init__(f"seed must be {expected} bytes, got {length}")


class SerializationError(PohError, ValueError):
    """Raised when a value has no canonical byte representation.

    ``path`` points at the offending element, e.g. ``$[0].payload.items[2]``.
    """

    def __init__(self, message: str, path: str = "$") -> None:
        self.path = path
        super().__init__(f"{message} at {path}")
