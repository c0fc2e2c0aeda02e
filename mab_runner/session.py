"""Command layer: load the record, run one operation, save.

Each method is one CLI command. Validation errors propagate before
anything is written; storage errors never reach the caller.
"""

from __future__ import annotations

import logging

from mab_runner.errors import NotInitializedError
from mab_runner.schemas import (
    InitResponse,
    ResetResponse,
    StatusResponse,
    UpdateResponse,
    WinnerResponse,
)
from mab_runner.storage import StateStore, get_store
from mab_runner.tournament import Tournament

logger = logging.getLogger(__name__)


class TournamentSession:
    """Runs tournament commands against a :class:`StateStore`."""

    def __init__(self, store: StateStore | None = None) -> None:
        self._store = store or get_store()

    @property
    def store(self) -> StateStore:
        return self._store

    def _load(self) -> Tournament:
        state = self._store.load()
        if state is None or not state.initialized:
            raise NotInitializedError()
        return Tournament.from_state(state)

    def _save(self, tournament: Tournament) -> None:
        self._store.save(tournament.snapshot())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def init(self, agent_count: int, seed: int | None = None) -> InitResponse:
        """Start a new tournament, replacing any existing one."""
        tournament = Tournament.create(agent_count, seed)
        self._save(tournament)
        return InitResponse(agents=agent_count, seed=seed)

    def select(self) -> str:
        tournament = self._load()
        agent_id = tournament.select_next()
        # The random source moved; persist it so the next call continues the stream
        self._save(tournament)
        return agent_id

    def update(self, agent_id: str, score: float) -> UpdateResponse:
        tournament = self._load()
        tournament.update(agent_id, score)
        self._save(tournament)
        return UpdateResponse(
            agent_id=agent_id,
            score=score,
            total_evaluations=tournament.state.total_evaluations,
        )

    def status(self) -> StatusResponse:
        return self._load().status()

    def winner(self) -> WinnerResponse:
        tournament = self._load()
        result = tournament.winner()
        self._save(tournament)
        return result

    def reset(self) -> ResetResponse:
        """Discard the tournament and delete the record."""
        self._store.delete()
        logger.info("Tournament reset (%s)", self._store.path)
        return ResetResponse()
