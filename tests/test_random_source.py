"""Tests for the seeded LCG and the random source factory."""

from __future__ import annotations

import pytest

from mab_runner.bandit.random_source import (
    SeededRandom,
    SystemRandomSource,
    create_random_source,
)


class TestSeededRandom:
    def test_first_draw_matches_lcg(self):
        rng = SeededRandom(42)
        expected_state = (1664525 * 42 + 1013904223) % 2**32
        assert rng.next() == expected_state / 2**32
        assert rng.get_state() == expected_state

    def test_draws_in_unit_interval(self):
        rng = SeededRandom(123)
        for _ in range(1000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_same_seed_same_stream(self):
        a = SeededRandom(7)
        b = SeededRandom(7)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_different_seeds_differ(self):
        a = SeededRandom(1)
        b = SeededRandom(2)
        assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]

    @pytest.mark.parametrize("seed", [0, 2**31 - 1, 2 * (2**31 - 1)])
    def test_zero_residue_normalized(self, seed):
        assert SeededRandom(seed).get_state() == 2**31 - 2

    def test_large_and_negative_seeds_in_range(self):
        for seed in (-1, -123456789, 2**40 + 5):
            state = SeededRandom(seed).get_state()
            assert 1 <= state <= 2**31 - 2

    def test_negative_seed_uses_floored_modulo(self):
        assert SeededRandom(-5).get_state() == 2**31 - 1 - 5

    def test_set_state_resumes_stream(self):
        original = SeededRandom(99)
        for _ in range(10):
            original.next()
        captured = original.get_state()
        expected = [original.next() for _ in range(20)]

        resumed = SeededRandom(99)
        resumed.set_state(captured)
        assert [resumed.next() for _ in range(20)] == expected

    def test_set_state_accepts_signed_32bit(self):
        a = SeededRandom(5)
        a.set_state(2**32 - 10)
        b = SeededRandom(5)
        b.set_state(-10)
        assert a.get_state() == b.get_state()
        assert a.next() == b.next()


class TestCreateRandomSource:
    def test_unseeded_is_system_source(self):
        rng = create_random_source(None)
        assert isinstance(rng, SystemRandomSource)
        assert rng.get_state() is None
        assert 0.0 <= rng.next() < 1.0

    def test_unseeded_ignores_state(self):
        assert isinstance(create_random_source(None, 12345), SystemRandomSource)

    def test_seeded_without_state(self):
        rng = create_random_source(42)
        assert isinstance(rng, SeededRandom)
        assert rng.get_state() == 42

    def test_seeded_with_state_restores(self):
        rng = create_random_source(42, 777)
        assert rng.get_state() == 777
