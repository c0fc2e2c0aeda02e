"""mab-runner command-line interface.

One command per invocation; the result goes to stdout as JSON, errors go to
stderr and set the exit code.

Usage:
    mab-runner init --agents 3 --seed 42
    agent=$(mab-runner select | tr -d '"')
    mab-runner update "$agent" 0.87
    mab-runner winner
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Callable

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from mab_runner import __version__
from mab_runner.config import get_settings
from mab_runner.errors import ExitCode, InvalidCommandArgumentsError, TournamentError
from mab_runner.schemas import to_json
from mab_runner.session import TournamentSession

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

# Ctrl-C exit status
_INTERRUPTED = 2

EPILOG = """\
typical workflow:
  1. mab-runner reset                    # clear any existing state
  2. mab-runner init --agents 5          # initialize with 5 agents
  3. agent=$(mab-runner select)          # get next agent to test
  4. score=$(evaluate_agent $agent)      # run your evaluation
  5. mab-runner update $agent $score     # record the result
  6. repeat steps 3-5 until convergence
  7. mab-runner winner                   # get the best agent

convergence:
  complete when total evaluations >= 50 * agents, or when the best agent
  has >= 15 evaluations, posterior std dev < 0.05 and a lead over the
  runner-up of more than 2 combined standard deviations.

seeds:
  with --seed, selections are reproducible for the same score sequence.
  The generator state is saved after every command, so replaying needs
  reset, init with the same seed, and the same scores in the same order.

state file:
  set by MAB_STATE_FILE (default: mab-runner-state.json in the temp dir).

exit codes:
  0 success, 1 invalid command or arguments, 2 tournament not initialized,
  3 invalid agent ID, 4 invalid score range
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose usage errors exit 1 through the normal error path."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidCommandArgumentsError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="mab-runner",
        description=(
            "Multi-Armed Bandit Runner - Thompson Sampling over Gaussian "
            "posteriors for picking the best agent"
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    init = commands.add_parser(
        "init",
        help="Initialize a new tournament",
        description="Initialize a new tournament with the given number of agents.",
    )
    init.add_argument(
        "--agents", "-a",
        help="Number of agents to test (required, must be > 0)",
    )
    init.add_argument(
        "--seed", "-s",
        help="Integer seed for reproducible agent selection",
    )

    commands.add_parser(
        "select",
        help="Select the next agent to evaluate",
        description="Sample every posterior and print the agent with the highest draw.",
    )

    update = commands.add_parser(
        "update",
        help="Record an evaluation score",
        description="Update an agent's posterior with a score between 0 and 1.",
    )
    update.add_argument("agent_id", help="Agent identifier, e.g. agent_0")
    update.add_argument("score", help="Performance score between 0 and 1")

    commands.add_parser("status", help="Show tournament statistics")
    commands.add_parser("winner", help="Show the current best agent")
    commands.add_parser("reset", help="Discard the tournament and its state file")
    return parser


def _parse_int(value: str | None, flag: str, required: bool = False) -> int | None:
    if value is None:
        if required:
            raise InvalidCommandArgumentsError(f"{flag} required")
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidCommandArgumentsError(f"{flag} must be an integer") from None


def _parse_score(value: str) -> float:
    try:
        score = float(value)
    except ValueError:
        raise InvalidCommandArgumentsError("score must be a number") from None
    if math.isnan(score):
        raise InvalidCommandArgumentsError("score must be a number")
    return score


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _cmd_init(session: TournamentSession, args: argparse.Namespace) -> str:
    agents = _parse_int(args.agents, "--agents", required=True)
    if agents <= 0:
        raise InvalidCommandArgumentsError("--agents must be a positive integer")
    seed = _parse_int(args.seed, "--seed")
    return to_json(session.init(agents, seed))


def _cmd_select(session: TournamentSession, args: argparse.Namespace) -> str:
    return json.dumps(session.select())


def _cmd_update(session: TournamentSession, args: argparse.Namespace) -> str:
    score = _parse_score(args.score)
    return to_json(session.update(args.agent_id, score))


def _cmd_status(session: TournamentSession, args: argparse.Namespace) -> str:
    return to_json(session.status())


def _cmd_winner(session: TournamentSession, args: argparse.Namespace) -> str:
    return to_json(session.winner())


def _cmd_reset(session: TournamentSession, args: argparse.Namespace) -> str:
    return to_json(session.reset())


_COMMANDS: dict[str, Callable[[TournamentSession, argparse.Namespace], str]] = {
    "init": _cmd_init,
    "select": _cmd_select,
    "update": _cmd_update,
    "status": _cmd_status,
    "winner": _cmd_winner,
    "reset": _cmd_reset,
}


def _report_error(exc: TournamentError) -> None:
    err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
    if exc.hint:
        err_console.print(f"[dim]{escape(exc.hint)}[/]")


def main(argv: list[str] | None = None, session: TournamentSession | None = None) -> int:
    """Run one command and return the process exit code."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        err_console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        return int(ExitCode.INVALID_ARGUMENTS)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        handler = _COMMANDS[args.command]
        output = handler(session or TournamentSession(), args)
    except TournamentError as exc:
        _report_error(exc)
        return int(exc.exit_code)
    except KeyboardInterrupt:
        return _INTERRUPTED

    print(output)
    return int(ExitCode.SUCCESS)


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
