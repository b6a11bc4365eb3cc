"""Shared test fixtures for the PoH chain and entry tests."""
from __future__ import annotations

import pytest

from pohchain.crypto.poh import HashChain
from pohchain.domain.entry import Event


ZERO_SEED = b"\x00" * 32
CC_SEED = b"\xcc" * 32


def make_events(n: int, kind: str = "tx") -> list[Event]:
    """Build n distinct transaction-like events."""
    return [
        Event(kind=kind, payload={"id": i, "amount": 10 * i, "note": f"n{i}"})
        for i in range(n)
    ]


@pytest.fixture
def zero_chain() -> HashChain:
    return HashChain.from_seed(ZERO_SEED)


@pytest.fixture
def cc_chain() -> HashChain:
    return HashChain.from_seed(CC_SEED)


@pytest.fixture
def chain_factory():
    """Fresh, independent chains from a repeated seed byte."""
    def _make(byte: int = 0xCC) -> HashChain:
        return HashChain.from_seed(bytes([byte]) * 32)
    return _make


@pytest.fixture
def tx_event() -> Event:
    return Event(kind="tx", payload={"id": 7, "amount": 100, "note": "abc"})


@pytest.fixture
def event_factory():
    return make_events
