"""Tests for score statistics and the Gaussian posterior update."""

from __future__ import annotations

import math
import statistics

import pytest

from mab_runner.bandit.posterior import (
    DEFAULT_OBSERVATION_VARIANCE,
    MIN_OBSERVATION_VARIANCE,
    posterior_params,
    record_score,
    sample_variance,
)
from mab_runner.state import PRIOR_MEAN, PRIOR_VARIANCE, AgentStats


@pytest.fixture
def stats():
    return AgentStats(agent_id="agent_0")


class TestSampleVariance:
    def test_empty_and_single(self):
        assert sample_variance([]) == 0.0
        assert sample_variance([0.7]) == 0.0

    def test_uses_n_minus_one(self):
        assert sample_variance([0.2, 0.4]) == pytest.approx(0.02)

    def test_identical_scores_exactly_zero(self):
        assert sample_variance([0.1, 0.1, 0.1]) == 0.0


class TestPosteriorParams:
    def test_single_observation_uses_default_variance(self):
        mean, var = posterior_params(1, 1.0, 0.0)
        precision = 1 / PRIOR_VARIANCE + 1 / DEFAULT_OBSERVATION_VARIANCE
        assert var == pytest.approx(1 / precision)
        assert mean == pytest.approx(12 / 14)

    def test_sample_variance_path(self):
        mean, var = posterior_params(4, 0.6, 0.04)
        obs = 0.04 / 4
        precision = 4 + 4 / obs
        assert var == pytest.approx(1 / precision)
        assert mean == pytest.approx((2 + 4 * 0.6 / obs) / precision)

    def test_posterior_between_prior_and_data(self):
        mean, _ = posterior_params(3, 0.9, 0.01)
        assert PRIOR_MEAN < mean < 0.9

    def test_tiny_variance_keeps_precision_finite(self):
        mean, var = posterior_params(2, 5e-161, 5e-321)
        assert var > 0
        assert math.isfinite(mean)
        assert var == pytest.approx(1 / (4 + 2 / MIN_OBSERVATION_VARIANCE))


class TestRecordScore:
    def test_initial_prior(self, stats):
        assert stats.posterior_mean == PRIOR_MEAN
        assert stats.posterior_variance == PRIOR_VARIANCE
        assert stats.mean_score == PRIOR_MEAN
        assert stats.evaluations == 0

    def test_first_score(self, stats):
        record_score(stats, 1.0)
        assert stats.evaluations == 1
        assert stats.scores == [1.0]
        assert stats.mean_score == 1.0
        assert stats.variance == 0.0
        assert stats.posterior_mean == pytest.approx(12 / 14)
        assert stats.posterior_variance == pytest.approx(1 / 14)

    def test_identical_scores_use_floor(self, stats):
        record_score(stats, 0.8)
        record_score(stats, 0.8)
        assert stats.variance == 0.0
        assert stats.posterior_mean == pytest.approx(0.75)
        assert stats.posterior_variance == pytest.approx(1 / 24)

    def test_recomputed_from_history(self, stats):
        scores = [0.3, 0.9, 0.5, 0.65, 0.1]
        for s in scores:
            record_score(stats, s)
        assert stats.evaluations == len(scores) == len(stats.scores)
        assert stats.mean_score == pytest.approx(statistics.fmean(scores))
        assert stats.variance == pytest.approx(statistics.variance(scores))

    def test_posterior_variance_shrinks(self, stats):
        variances = []
        for s in [0.6, 0.7, 0.65, 0.62, 0.68]:
            record_score(stats, s)
            variances.append(stats.posterior_variance)
        assert all(v > 0 for v in variances)
        assert variances[-1] < variances[0]

    def test_boundary_scores(self, stats):
        record_score(stats, 0.0)
        record_score(stats, 1.0)
        assert stats.mean_score == 0.5
        assert stats.variance == pytest.approx(0.5)

    def test_near_identical_scores(self, stats):
        record_score(stats, 0.0)
        record_score(stats, 1e-160)
        assert stats.variance > 0
        assert stats.posterior_variance > 0
        assert math.isfinite(stats.posterior_mean)
        assert 0.0 < stats.posterior_mean < PRIOR_MEAN
