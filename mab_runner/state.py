"""Persisted tournament state.

The models serialize with camelCase keys so the JSON record keeps the
layout ``agents, initialized, seed, rngState, totalEvaluations,
agentStats[], lastWinnerCheck``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Gaussian prior N(0.5, 0.25), i.e. std 0.5 over the [0, 1] score range
PRIOR_MEAN = 0.5
PRIOR_VARIANCE = 0.25


def agent_id_for(index: int) -> str:
    return f"agent_{index}"


class AgentStats(BaseModel):
    """Score history and Gaussian posterior for one agent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    agent_id: str
    evaluations: int = Field(default=0, ge=0)
    scores: list[float] = Field(default_factory=list)
    mean_score: float = PRIOR_MEAN
    variance: float = 0.0
    posterior_mean: float = PRIOR_MEAN
    posterior_variance: float = Field(default=PRIOR_VARIANCE, gt=0)

    @model_validator(mode="after")
    def _check_history(self) -> AgentStats:
        if len(self.scores) != self.evaluations:
            raise ValueError(
                f"{self.agent_id}: {len(self.scores)} scores recorded "
                f"for {self.evaluations} evaluations"
            )
        return self


class TournamentState(BaseModel):
    """Aggregate record for one tournament."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    agent_count: int = Field(alias="agents", gt=0)
    initialized: bool = False
    seed: int | None = None
    rng_state: int | None = None
    total_evaluations: int = Field(default=0, ge=0)
    agent_stats: list[AgentStats] = Field(default_factory=list)
    last_winner_check: float = 0

    @model_validator(mode="after")
    def _check_agents(self) -> TournamentState:
        if len(self.agent_stats) != self.agent_count:
            raise ValueError(
                f"expected {self.agent_count} agents, found {len(self.agent_stats)}"
            )
        return self

    @classmethod
    def fresh(cls, agent_count: int, seed: int | None = None) -> TournamentState:
        """New initialized tournament with every agent at the prior."""
        return cls(
            agent_count=agent_count,
            initialized=True,
            seed=seed,
            agent_stats=[AgentStats(agent_id=agent_id_for(i)) for i in range(agent_count)],
        )

    def find_agent(self, agent_id: str) -> AgentStats | None:
        for stats in self.agent_stats:
            if stats.agent_id == agent_id:
                return stats
        return None

    @property
    def agent_ids(self) -> list[str]:
        return [stats.agent_id for stats in self.agent_stats]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)
