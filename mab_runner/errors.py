"""Error taxonomy for tournament operations.

Each error carries the process exit code the CLI reports for it.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    INVALID_ARGUMENTS = 1
    NOT_INITIALIZED = 2
    INVALID_AGENT_ID = 3
    INVALID_SCORE = 4


class TournamentError(Exception):
    """Base class for errors that end a command without mutating state."""

    exit_code: ExitCode = ExitCode.INVALID_ARGUMENTS
    hint: str = ""


class InvalidCommandArgumentsError(TournamentError):
    exit_code = ExitCode.INVALID_ARGUMENTS
    hint = 'Run "mab-runner --help" for more information'


class NotInitializedError(TournamentError):
    exit_code = ExitCode.NOT_INITIALIZED
    hint = 'Run "mab-runner init --agents <number>" first'

    def __init__(self, message: str = "Tournament not initialized") -> None:
        super().__init__(message)


class InvalidAgentIdError(TournamentError):
    exit_code = ExitCode.INVALID_AGENT_ID

    def __init__(self, agent_id: str, valid_ids: list[str]) -> None:
        super().__init__(f"Invalid agent ID '{agent_id}'")
        self.agent_id = agent_id
        self.valid_ids = valid_ids
        self.hint = f"Valid agents: {', '.join(valid_ids)}"


class InvalidScoreRangeError(TournamentError):
    exit_code = ExitCode.INVALID_SCORE
    hint = "Score must be between 0 and 1 (inclusive)"

    def __init__(self, score: float) -> None:
        super().__init__(f"Invalid score {score}")
        self.score = score
