"""Result models for tournament commands.

Each command prints one of these as single-line JSON on stdout.
"""

from __future__ import annotations

from pydantic import BaseModel


class InitResponse(BaseModel):
    success: bool = True
    agents: int
    seed: int | None = None


class UpdateResponse(BaseModel):
    success: bool = True
    agent_id: str
    score: float
    total_evaluations: int


class AgentStatusEntry(BaseModel):
    agent_id: str
    evaluations: int
    mean_score: float
    std_dev: float


class StatusResponse(BaseModel):
    total_evaluations: int
    agent_stats: list[AgentStatusEntry]
    convergence_progress: float
    estimated_evaluations_remaining: int


class WinnerStats(BaseModel):
    evaluations: int
    mean_score: float
    std_dev: float
    confidence_interval: tuple[float, float]


class WinnerResponse(BaseModel):
    complete: bool
    winner_id: str
    confidence: float
    total_evaluations: int
    winner_stats: WinnerStats


class ResetResponse(BaseModel):
    success: bool = True
    message: str = "Tournament reset successfully"


def to_json(response: BaseModel) -> str:
    """Compact JSON with unset optional fields left out."""
    return response.model_dump_json(exclude_none=True)
