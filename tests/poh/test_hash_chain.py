"""Tests for the PoH hash chain: seeding, ticking, stamping."""
from __future__ import annotations

import hashlib

import pytest

from pohchain.crypto.poh import HashChain, stamp_digest, tick_digest
from pohchain.errors import InvalidSeed, InvalidSeedLength, PohError


class TestSeedValidation:
    """Only exactly-32-byte seeds produce a chain."""

    @pytest.mark.parametrize("length", [0, 1, 16, 31, 33, 64])
    def test_wrong_length_rejected(self, length):
        with pytest.raises(InvalidSeedLength) as excinfo:
            HashChain.from_seed(b"\x01" * length)
        assert excinfo.value.length == length
        assert excinfo.value.expected == 32

    @pytest.mark.parametrize("byte", [0x00, 0x01, 0x7F, 0x80, 0xCC, 0xFF])
    def test_any_32_bytes_accepted(self, byte):
        chain = HashChain.from_seed(bytes([byte]) * 32)
        assert chain.digest() == bytes([byte]) * 32

    def test_hex_seed(self):
        chain = HashChain.from_seed("aa" * 32)
        assert chain.current() == "aa" * 32

    def test_uppercase_hex_is_normalized(self):
        chain = HashChain.from_seed("AB" * 32)
        assert chain.current() == "ab" * 32

    def test_short_hex_rejected(self):
        with pytest.raises(InvalidSeedLength):
            HashChain.from_seed("aa" * 31)

    def test_malformed_hex_rejected(self):
        with pytest.raises(InvalidSeed):
            HashChain.from_seed("zz" * 32)

    def test_wrong_type_rejected(self):
        with pytest.raises(InvalidSeed):
            HashChain.from_seed(12345)  # type: ignore[arg-type]

    def test_errors_share_base(self):
        assert issubclass(InvalidSeedLength, InvalidSeed)
        assert issubclass(InvalidSeed, PohError)
        assert issubclass(InvalidSeed, ValueError)

    def test_seed_is_copied(self):
        seed = bytearray(b"\x11" * 32)
        chain = HashChain.from_seed(seed)
        seed[0] = 0xFF
        assert chain.current() == "11" * 32

    def test_memoryview_seed(self):
        chain = HashChain.from_seed(memoryview(b"\x22" * 32))
        assert chain.current() == "22" * 32


class TestCurrent:

    def test_current_is_lowercase_hex(self, zero_chain):
        value = zero_chain.current()
        assert value == "00" * 32
        assert len(value) == 64

    def test_current_is_pure(self, cc_chain):
        assert cc_chain.current() == cc_chain.current()

    def test_digest_matches_current(self, cc_chain):
        cc_chain.tick()
        assert cc_chain.digest().hex() == cc_chain.current()
        assert len(cc_chain.digest()) == 32


class TestTick:
    """tick() is SHA256 of the state, deterministic, and always moves."""

    def test_tick_is_sha256_of_state(self, zero_chain):
        zero_chain.tick()
        assert zero_chain.digest() == hashlib.sha256(b"\x00" * 32).digest()

    def test_tick_returns_self(self, zero_chain):
        assert zero_chain.tick() is zero_chain

    def test_deterministic_from_seed(self):
        poh = HashChain.from_seed("00" * 32)
        a1 = poh.tick().current()
        a2 = poh.tick().current()

        poh2 = HashChain.from_seed("00" * 32)
        poh2.tick()
        assert poh2.current() == a1
        poh2.tick()
        assert poh2.current() == a2

    @pytest.mark.parametrize("n", [0, 1, 2, 10, 100])
    def test_independent_chains_agree(self, chain_factory, n):
        c1 = chain_factory(0x42)
        c2 = chain_factory(0x42)
        for _ in range(n):
            c1.tick()
            c2.tick()
        assert c1.current() == c2.current()

    def test_tick_changes_state(self, chain_factory):
        for byte in (0x00, 0x11, 0xCC, 0xFF):
            chain = chain_factory(byte)
            seen = {chain.current()}
            for _ in range(50):
                chain.tick()
                assert chain.current() not in seen
                seen.add(chain.current())

    def test_tick_n_matches_repeated_tick(self, chain_factory):
        c1 = chain_factory()
        c2 = chain_factory()
        c1.tick_n(25)
        for _ in range(25):
            c2.tick()
        assert c1 == c2

    def test_tick_n_zero_is_noop(self, cc_chain):
        before = cc_chain.current()
        cc_chain.tick_n(0)
        assert cc_chain.current() == before

    def test_tick_n_negative_rejected(self, cc_chain):
        with pytest.raises(ValueError):
            cc_chain.tick_n(-1)


class TestStamp:
    """stamp() binds data: SHA256(state || SHA256(data))."""

    def test_stamp_formula(self, cc_chain):
        state = cc_chain.digest()
        cc_chain.stamp(b"hello")
        data_hash = hashlib.sha256(b"hello").digest()
        assert cc_chain.digest() == hashlib.sha256(state + data_hash).digest()

    def test_stamp_changes_state(self):
        poh = HashChain.from_seed("11" * 32)
        before = poh.current()
        poh.stamp(b"hello")
        assert poh.current() != before

    def test_stamp_empty_changes_state(self, cc_chain):
        before = cc_chain.current()
        cc_chain.stamp(b"")
        assert cc_chain.current() != before

    def test_stamp_differs_from_tick(self, chain_factory):
        ticked = chain_factory().tick()
        stamped = chain_factory().stamp(b"")
        assert ticked.current() != stamped.current()

    def test_stamp_order_matters(self, chain_factory):
        ab = chain_factory().stamp(b"a").stamp(b"b")
        ba = chain_factory().stamp(b"b").stamp(b"a")
        assert ab.current() != ba.current()

    def test_stamp_accepts_bytearray(self, chain_factory):
        c1 = chain_factory().stamp(b"payload")
        c2 = chain_factory().stamp(bytearray(b"payload"))
        assert c1 == c2

    def test_stamp_rejects_str(self, cc_chain):
        before = cc_chain.current()
        with pytest.raises(TypeError):
            cc_chain.stamp("hello")  # type: ignore[arg-type]
        assert cc_chain.current() == before


class TestTransitions:
    """Module-level transitions match the chain's methods."""

    def test_tick_digest(self, cc_chain):
        state = cc_chain.digest()
        assert tick_digest(state) == cc_chain.tick().digest()

    def test_stamp_digest(self, cc_chain):
        state = cc_chain.digest()
        assert stamp_digest(state, b"x") == cc_chain.stamp(b"x").digest()


class TestFork:

    def test_fork_starts_equal(self, cc_chain):
        cc_chain.tick()
        forked = cc_chain.fork()
        assert forked == cc_chain
        assert forked is not cc_chain

    def test_fork_is_independent(self, cc_chain):
        forked = cc_chain.fork()
        forked.tick()
        assert forked != cc_chain
        assert cc_chain.current() == "cc" * 32

    def test_not_hashable(self, cc_chain):
        with pytest.raises(TypeError):
            hash(cc_chain)

    def test_repr_shows_prefix(self, cc_chain):
        assert "cccccccc" in repr(cc_chain)
