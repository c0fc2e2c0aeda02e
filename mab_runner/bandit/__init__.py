"""Bandit core: random sources, posterior updates, selection, convergence.

Everything here is pure computation over an explicit state object and an
injected random source; nothing touches the filesystem.
"""

from mab_runner.bandit.convergence import evaluate_winner, summarize_status
from mab_runner.bandit.distributions import gamma_sample, normal_sample
from mab_runner.bandit.posterior import posterior_params, record_score
from mab_runner.bandit.random_source import (
    RandomSource,
    SeededRandom,
    SystemRandomSource,
    create_random_source,
)
from mab_runner.bandit.thompson import select_agent

__all__ = [
    "RandomSource",
    "SeededRandom",
    "SystemRandomSource",
    "create_random_source",
    "normal_sample",
    "gamma_sample",
    "posterior_params",
    "record_score",
    "select_agent",
    "evaluate_winner",
    "summarize_status",
]
