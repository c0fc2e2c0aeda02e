"""Thompson sampling over Gaussian posteriors."""

from __future__ import annotations

import math

from mab_runner.bandit.distributions import normal_sample
from mab_runner.bandit.random_source import RandomSource
from mab_runner.state import AgentStats


def draw_samples(agents: list[AgentStats], rng: RandomSource) -> list[float]:
    """One posterior draw per agent, in agent order, clipped to [0, 1]."""
    samples: list[float] = []
    for stats in agents:
        sample = normal_sample(
            rng, stats.posterior_mean, math.sqrt(stats.posterior_variance)
        )
        samples.append(max(0.0, min(1.0, sample)))
    return samples


def select_agent(agents: list[AgentStats], rng: RandomSource) -> str:
    """Pick the agent with the highest posterior draw.

    Uncertain agents have wide posteriors and still win draws now and then,
    which is where exploration comes from. Exact ties go to the lowest index.
    """
    if not agents:
        raise ValueError("No agents to choose from")
    samples = draw_samples(agents, rng)
    best = max(range(len(samples)), key=samples.__getitem__)
    return agents[best].agent_id
