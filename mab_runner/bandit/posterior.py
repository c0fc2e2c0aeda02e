"""Score statistics and the conjugate Gaussian posterior update.

Sample statistics are recomputed from the full score history on every
update instead of being accumulated, so they cannot drift.
"""

from __future__ import annotations

import statistics

from mab_runner.state import PRIOR_MEAN, PRIOR_VARIANCE, AgentStats

# Observation variance used while the sample variance is still zero
# (one score, or a run of identical scores)
DEFAULT_OBSERVATION_VARIANCE = 0.1

# Lower bound on variance / n so the precision stays finite for
# near-identical scores
MIN_OBSERVATION_VARIANCE = 1e-12


def sample_variance(scores: list[float]) -> float:
    """(n-1)-denominator sample variance, 0 for fewer than two scores."""
    if len(scores) < 2:
        return 0.0
    return statistics.variance(scores)


def posterior_params(
    evaluations: int, mean_score: float, variance: float
) -> tuple[float, float]:
    """Posterior (mean, variance) under the N(0.5, 0.25) prior."""
    if variance > 0:
        obs_variance = max(variance / evaluations, MIN_OBSERVATION_VARIANCE)
    else:
        obs_variance = DEFAULT_OBSERVATION_VARIANCE

    precision = 1.0 / PRIOR_VARIANCE + evaluations / obs_variance
    posterior_variance = 1.0 / precision
    posterior_mean = posterior_variance * (
        PRIOR_MEAN / PRIOR_VARIANCE + evaluations * mean_score / obs_variance
    )
    return posterior_mean, posterior_variance


def record_score(stats: AgentStats, score: float) -> AgentStats:
    """Append ``score`` and refresh the agent's statistics in place.

    The caller validates the score range.
    """
    stats.scores.append(score)
    stats.evaluations = len(stats.scores)
    stats.mean_score = statistics.fmean(stats.scores)
    stats.variance = sample_variance(stats.scores)
    stats.posterior_mean, stats.posterior_variance = posterior_params(
        stats.evaluations, stats.mean_score, stats.variance
    )
    return stats
