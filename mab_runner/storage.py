"""JSON file persistence for the tournament record.

Durability is best-effort: a missing or unreadable record loads as "no
tournament", and failed writes are logged and otherwise ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from mab_runner.config import get_settings
from mab_runner.state import TournamentState

logger = logging.getLogger(__name__)


class StateStore:
    """Single-record store at a well-known path.

    There is no locking: two overlapping writers race and the last write
    wins.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else get_settings().state_file

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> TournamentState | None:
        """Read the record, or None when absent or corrupt."""
        if not self.exists():
            return None
        try:
            text = self._path.read_text(encoding="utf-8")
            return TournamentState.model_validate_json(text)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return None

    def save(self, state: TournamentState) -> bool:
        """Write the record. Returns False (after logging) on failure."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(state.to_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save state to %s: %s", self._path, exc)
            return False
        return True

    def delete(self) -> None:
        """Remove the record if present."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to delete state file %s: %s", self._path, exc)


# Module-level singleton
_store: StateStore | None = None


def get_store(path: str | Path | None = None) -> StateStore:
    """Get or create the global store instance."""
    global _store
    if _store is None:
        _store = StateStore(path)
    return _store


def reset_store(path: str | Path | None = None) -> StateStore:
    """Reset the global store instance (for testing)."""
    global _store
    _store = StateStore(path)
    return _store
