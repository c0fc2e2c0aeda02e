"""In-memory tournament: state plus random source, no I/O.

A :class:`Tournament` owns one :class:`TournamentState` and the random
source that drives selection. Persisting it is the job of
:mod:`mab_runner.session`.
"""

from __future__ import annotations

import logging
import time

from mab_runner.bandit.convergence import evaluate_winner, summarize_status
from mab_runner.bandit.posterior import record_score
from mab_runner.bandit.random_source import RandomSource, create_random_source
from mab_runner.bandit.thompson import select_agent
from mab_runner.errors import (
    InvalidAgentIdError,
    InvalidCommandArgumentsError,
    InvalidScoreRangeError,
    NotInitializedError,
)
from mab_runner.schemas import StatusResponse, WinnerResponse
from mab_runner.state import AgentStats, TournamentState

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Tournament:
    """Thompson sampling tournament over a fixed set of agents."""

    def __init__(self, state: TournamentState, rng: RandomSource) -> None:
        self._state = state
        self._rng = rng

    @classmethod
    def create(
        cls,
        agent_count: int,
        seed: int | None = None,
        rng: RandomSource | None = None,
    ) -> Tournament:
        """Start a tournament with every agent at the prior."""
        if not _is_int(agent_count) or agent_count <= 0:
            raise InvalidCommandArgumentsError("--agents must be a positive integer")
        if seed is not None and not _is_int(seed):
            raise InvalidCommandArgumentsError("--seed must be an integer")

        state = TournamentState.fresh(agent_count, seed)
        logger.info("Initialized tournament with %d agents (seed=%s)", agent_count, seed)
        return cls(state, rng or create_random_source(seed))

    @classmethod
    def from_state(cls, state: TournamentState) -> Tournament:
        """Resume a persisted tournament.

        The seeded generator is rebuilt and advanced to ``rng_state`` before
        anything else runs; skipping that would silently restart the random
        stream.
        """
        return cls(state, create_random_source(state.seed, state.rng_state))

    @property
    def state(self) -> TournamentState:
        return self._state

    @property
    def rng(self) -> RandomSource:
        return self._rng

    def _require_initialized(self) -> None:
        if not self._state.initialized:
            raise NotInitializedError()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select_next(self) -> str:
        """Pick the next agent to evaluate. Advances the random source only."""
        self._require_initialized()
        agent_id = select_agent(self._state.agent_stats, self._rng)
        logger.debug("Selected %s", agent_id)
        return agent_id

    def update(self, agent_id: str, score: float) -> AgentStats:
        """Record one evaluation score for ``agent_id``."""
        self._require_initialized()
        stats = self._state.find_agent(agent_id)
        if stats is None:
            raise InvalidAgentIdError(agent_id, self._state.agent_ids)
        if not 0.0 <= score <= 1.0:
            raise InvalidScoreRangeError(score)

        record_score(stats, score)
        self._state.total_evaluations += 1
        logger.debug(
            "%s scored %.4f -> posterior N(%.4f, %.6f)",
            agent_id,
            score,
            stats.posterior_mean,
            stats.posterior_variance,
        )
        return stats

    def status(self) -> StatusResponse:
        self._require_initialized()
        return summarize_status(self._state)

    def winner(self) -> WinnerResponse:
        self._require_initialized()
        self._state.last_winner_check = time.time() * 1000
        return evaluate_winner(self._state)

    def snapshot(self) -> TournamentState:
        """State with the random source position captured into ``rng_state``."""
        rng_state = self._rng.get_state()
        if rng_state is not None:
            self._state.rng_state = rng_state
        return self._state
