"""Proof-of-History hash chain.

The chain holds a single 32-byte state and knows two moves:

- tick:  state = SHA256(state)
- stamp: state = SHA256(state || SHA256(data))

Nothing else feeds into the state, so any two chains created from the
same seed and driven through the same moves end up with identical
digests. Because SHA256 cannot be computed ahead of its input, a digest
proves that the work of every preceding move was actually done, in
order. That is the "history" in Proof of History: a verifiable count of
sequential steps rather than a wall-clock timestamp.

Stamped data is hashed on its own first. The second hash therefore
always sees exactly 64 bytes (state plus data digest), whatever the size
of the data, and there is no ambiguity about where the state ends and
the data begins.

A chain is a single-writer object. It does no locking; callers that
need concurrent producers should give each one its own chain (see
``fork``) or serialize access themselves.
"""
from __future__ import annotations

import hashlib

from pohchain.domain.types import DIGEST_SIZE, HexDigest, RawDigest
from pohchain.errors import InvalidSeed, InvalidSeedLength

HASH_ALGORITHM = "sha256"


def tick_digest(state: bytes) -> bytes:
    """One tick: SHA256(state)."""
    return hashlib.sha256(state).digest()


def stamp_digest(state: bytes, data: bytes) -> bytes:
    """One stamp: SHA256(state || SHA256(data))."""
    data_hash = hashlib.sha256(data).digest()
    return hashlib.sha256(state + data_hash).digest()


def _coerce_seed(seed: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(seed, str):
        try:
            raw = bytes.fromhex(seed)
        except ValueError:
            raise InvalidSeed(f"seed is not a valid hex string: {seed!r}") from None
    elif isinstance(seed, (bytes, bytearray, memoryview)):
        # bytes() copies; the chain never aliases caller storage.
        raw = bytes(seed)
    else:
        raise InvalidSeed(
            f"seed must be bytes or a hex string, got {type(seed).__name__}"
        )
    if len(raw) != DIGEST_SIZE:
        raise InvalidSeedLength(len(raw), DIGEST_SIZE)
    return raw


class HashChain:
    """A deterministic, tamper-evident 32-byte state.

    Create one from a 32-byte seed (raw bytes or 64 hex characters),
    then advance it with tick() and stamp(). Both return the chain so
    calls can be chained: ``chain.tick().tick().current()``.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: bytes | bytearray | memoryview | str) -> None:
        self._state: bytes = _coerce_seed(seed)

    @classmethod
    def from_seed(cls, seed: bytes | bytearray | memoryview | str) -> HashChain:
        """Create a chain from a 32-byte seed or its 64-char hex form.

        Raises InvalidSeedLength if the seed is not exactly 32 bytes.
        """
        return cls(seed)

    def current(self) -> HexDigest:
        """The current state as 64 lowercase hex characters."""
        return self._state.hex()

    def digest(self) -> RawDigest:
        """The current state as 32 raw bytes."""
        return self._state

    def tick(self) -> HashChain:
        """Advance the state by hashing it once."""
        self._state = tick_digest(self._state)
        return self

    def tick_n(self, n: int) -> HashChain:
        """Advance the state by ``n`` ticks (``n`` may be zero)."""
        if n < 0:
            raise ValueError(f"tick count must be non-negative, got {n}")
        state = self._state
        for _ in range(n):
            state = tick_digest(state)
        self._state = state
        return self

    def stamp(self, data: bytes | bytearray | memoryview) -> HashChain:
        """Bind ``data`` into the chain at the current position."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"stamp() needs bytes, got {type(data).__name__}; "
                f"serialize the value first"
            )
        self._state = stamp_digest(self._state, bytes(data))
        return self

    def fork(self) -> HashChain:
        """An independent chain starting from this chain's current state."""
        return HashChain(self._state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashChain):
            return NotImplemented
        return self._state == other._state

    # Mutable, so not hashable even though __eq__ is defined.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HashChain({self.current()[:16]}...)"
