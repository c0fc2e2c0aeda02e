"""Winner determination and convergence diagnostics."""

from __future__ import annotations

import math

from mab_runner.schemas import (
    AgentStatusEntry,
    StatusResponse,
    WinnerResponse,
    WinnerStats,
)
from mab_runner.state import AgentStats, TournamentState

# Evaluation budget per agent after which the tournament is always complete
EVALUATIONS_PER_AGENT = 50

# Early-stop criteria for a clear winner
MIN_WINNER_EVALUATIONS = 15
MAX_WINNER_STD_DEV = 0.05
SEPARATION_STD_DEVS = 2.0

_Z_95 = 1.96
_MIN_CONFIDENCE = 0.5
_MAX_CONFIDENCE = 0.99


def _clip(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _best_by_posterior(agents: list[AgentStats]) -> AgentStats:
    """First agent with the highest posterior mean."""
    best = agents[0]
    for stats in agents[1:]:
        if stats.posterior_mean > best.posterior_mean:
            best = stats
    return best


def evaluate_winner(state: TournamentState) -> WinnerResponse:
    """Current best agent, how sure we are, and whether to stop."""
    best = _best_by_posterior(state.agent_stats)
    std_dev = math.sqrt(best.posterior_variance)
    interval = (
        _clip(best.posterior_mean - _Z_95 * std_dev),
        _clip(best.posterior_mean + _Z_95 * std_dev),
    )

    rivals = [s for s in state.agent_stats if s.agent_id != best.agent_id]
    if rivals:
        second = _best_by_posterior(rivals)
        separation = best.posterior_mean - second.posterior_mean
        combined_std_dev = math.sqrt(
            best.posterior_variance + second.posterior_variance
        )
        z_score = separation / combined_std_dev
        confidence = _clip(
            0.5 + 0.5 * math.tanh(z_score), _MIN_CONFIDENCE, _MAX_CONFIDENCE
        )
        separated = separation > SEPARATION_STD_DEVS * combined_std_dev
    else:
        # A lone agent has nobody to be separated from
        confidence = _MAX_CONFIDENCE
        separated = True

    complete = state.total_evaluations >= EVALUATIONS_PER_AGENT * state.agent_count or (
        best.evaluations >= MIN_WINNER_EVALUATIONS
        and std_dev < MAX_WINNER_STD_DEV
        and separated
    )

    return WinnerResponse(
        complete=complete,
        winner_id=best.agent_id,
        confidence=confidence,
        total_evaluations=state.total_evaluations,
        winner_stats=WinnerStats(
            evaluations=best.evaluations,
            mean_score=best.mean_score,
            std_dev=math.sqrt(best.variance),
            confidence_interval=interval,
        ),
    )


def summarize_status(state: TournamentState) -> StatusResponse:
    """Per-agent sample statistics plus rough progress estimates.

    These figures are diagnostic only; completion is decided by
    :func:`evaluate_winner`.
    """
    min_evaluations = min(s.evaluations for s in state.agent_stats)
    budget = EVALUATIONS_PER_AGENT * state.agent_count
    return StatusResponse(
        total_evaluations=state.total_evaluations,
        agent_stats=[
            AgentStatusEntry(
                agent_id=s.agent_id,
                evaluations=s.evaluations,
                mean_score=s.mean_score,
                std_dev=math.sqrt(s.variance),
            )
            for s in state.agent_stats
        ],
        convergence_progress=min(1.0, min_evaluations / EVALUATIONS_PER_AGENT),
        estimated_evaluations_remaining=max(0, budget - state.total_evaluations),
    )
