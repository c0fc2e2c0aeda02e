"""mab-runner: Thompson Sampling coordinator for picking the best agent.

The pure core lives in :mod:`mab_runner.bandit` and
:mod:`mab_runner.tournament`; :mod:`mab_runner.session` wraps it with
load/save of the persisted tournament record.
"""

__version__ = "1.0.0"
