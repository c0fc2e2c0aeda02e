"""Shared test configuration.

Points the state file at a per-test temporary path so tests never touch
the real tournament record, and clears cached settings between tests.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path, monkeypatch):
    """Fresh settings and store for every test."""
    import mab_runner.storage as storage_mod
    from mab_runner.config import get_settings

    monkeypatch.setenv("MAB_STATE_FILE", str(tmp_path / "state.json"))
    get_settings.cache_clear()
    storage_mod.reset_store()
    yield
    get_settings.cache_clear()
    storage_mod._store = None


class FixedRandom:
    """Random source replaying a fixed cycle of uniforms."""

    def __init__(self, values=(1.0,)):
        self._values = list(values)
        self._i = 0
        self.draws = 0

    def next(self) -> float:
        value = self._values[self._i % len(self._values)]
        self._i += 1
        self.draws += 1
        return value

    def get_state(self):
        return None


@pytest.fixture
def fixed_random():
    """Source returning 1.0 forever: every Box-Muller z is exactly 0."""
    return FixedRandom()
