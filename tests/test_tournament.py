"""Tests for the in-memory Tournament: validation, mutation and RNG flow."""

from __future__ import annotations

import pytest

from mab_runner.bandit.random_source import SeededRandom, SystemRandomSource
from mab_runner.errors import (
    ExitCode,
    InvalidAgentIdError,
    InvalidCommandArgumentsError,
    InvalidScoreRangeError,
    NotInitializedError,
)
from mab_runner.state import TournamentState
from mab_runner.tournament import Tournament

from conftest import FixedRandom


@pytest.fixture
def tournament():
    return Tournament.create(3, seed=42)


class TestCreate:
    def test_seeded(self, tournament):
        assert isinstance(tournament.rng, SeededRandom)
        assert tournament.state.seed == 42
        assert tournament.state.initialized is True

    def test_unseeded(self):
        t = Tournament.create(2)
        assert isinstance(t.rng, SystemRandomSource)
        assert t.snapshot().rng_state is None

    def test_injected_rng(self, fixed_random):
        t = Tournament.create(2, rng=fixed_random)
        assert t.rng is fixed_random

    @pytest.mark.parametrize("agents", [0, -1, 2.5, True, "3"])
    def test_rejects_bad_agent_count(self, agents):
        with pytest.raises(InvalidCommandArgumentsError):
            Tournament.create(agents)

    def test_rejects_bad_seed(self):
        with pytest.raises(InvalidCommandArgumentsError):
            Tournament.create(2, seed="abc")


class TestUpdate:
    def test_records_score(self, tournament):
        stats = tournament.update("agent_1", 0.95)
        assert stats.scores == [0.95]
        assert tournament.state.total_evaluations == 1

    @pytest.mark.parametrize("score", [-0.0001, 1.0001, float("inf")])
    def test_out_of_range_score_mutates_nothing(self, tournament, score):
        before = tournament.state.model_copy(deep=True)
        with pytest.raises(InvalidScoreRangeError) as exc_info:
            tournament.update("agent_0", score)
        assert exc_info.value.exit_code == ExitCode.INVALID_SCORE
        assert tournament.state == before

    @pytest.mark.parametrize("score", [0.0, 1.0])
    def test_bounds_inclusive(self, tournament, score):
        tournament.update("agent_0", score)
        assert tournament.state.total_evaluations == 1

    @pytest.mark.parametrize("agent_id", ["agent_3", "agent_-1", "bogus", ""])
    def test_unknown_agent_mutates_nothing(self, tournament, agent_id):
        before = tournament.state.model_copy(deep=True)
        with pytest.raises(InvalidAgentIdError) as exc_info:
            tournament.update(agent_id, 0.5)
        assert exc_info.value.exit_code == ExitCode.INVALID_AGENT_ID
        assert "agent_0, agent_1, agent_2" in exc_info.value.hint
        assert tournament.state == before

    def test_agent_checked_before_score(self, tournament):
        with pytest.raises(InvalidAgentIdError):
            tournament.update("agent_9", 5.0)

    def test_update_does_not_touch_rng(self, tournament):
        before = tournament.rng.get_state()
        tournament.update("agent_0", 0.3)
        assert tournament.rng.get_state() == before


class TestSelect:
    def test_advances_two_draws_per_agent(self):
        rng = FixedRandom([0.5, 0.5])
        t = Tournament.create(4, rng=rng)
        t.select_next()
        assert rng.draws == 8

    def test_does_not_touch_stats(self, tournament):
        before = [s.model_copy(deep=True) for s in tournament.state.agent_stats]
        tournament.select_next()
        assert tournament.state.agent_stats == before

    def test_snapshot_captures_rng_state(self, tournament):
        tournament.select_next()
        assert tournament.snapshot().rng_state == tournament.rng.get_state()
        assert tournament.state.rng_state != 42


class TestNotInitialized:
    def test_operations_fail(self):
        state = TournamentState.fresh(2)
        state.initialized = False
        t = Tournament.from_state(state)
        for op in (t.select_next, t.status, t.winner, lambda: t.update("agent_0", 0.5)):
            with pytest.raises(NotInitializedError):
                op()


class TestFromState:
    def test_restores_rng_position(self, tournament):
        for _ in range(3):
            tournament.select_next()
        state = tournament.snapshot().model_copy(deep=True)
        resumed = Tournament.from_state(state)
        assert resumed.rng.get_state() == tournament.rng.get_state()
        assert [resumed.select_next() for _ in range(10)] == [
            tournament.select_next() for _ in range(10)
        ]

    def test_without_rng_state_starts_from_seed(self):
        state = TournamentState.fresh(2, seed=42)
        assert Tournament.from_state(state).rng.get_state() == 42


class TestWinner:
    def test_stamps_last_check(self, tournament):
        assert tournament.state.last_winner_check == 0
        tournament.winner()
        assert tournament.state.last_winner_check > 0
