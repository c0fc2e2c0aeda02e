#!/usr/bin/env python3
"""mab-runner Simulation Demo.

Runs a full Thompson sampling tournament in memory against simulated
agents with known quality, with rich terminal output:
select agent -> evaluate (noisy score) -> update posterior -> check winner.

Usage:
    python demo.py                  # 4 agents, seed 42
    python demo.py --fast           # Skip delays
    python demo.py --seed 7         # Different selection stream
    python demo.py --max-iterations 300
"""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from dataclasses import dataclass, field

# Ensure project root is on sys.path
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.rule import Rule
from rich import box

from mab_runner.schemas import StatusResponse, WinnerResponse
from mab_runner.tournament import Tournament

# ---------------------------------------------------------------------------
# Demo data structures
# ---------------------------------------------------------------------------

@dataclass
class SimulatedAgent:
    """An agent whose evaluation scores are drawn around a fixed quality."""
    agent_id: str
    label: str
    base_score: float
    noise: float = 0.15

    def evaluate(self, rng: random.Random) -> float:
        """Noisy score, uniform within +/- noise of the base, clipped to [0, 1]."""
        score = self.base_score + (rng.random() - 0.5) * 2 * self.noise
        return max(0.0, min(1.0, score))


# Poor, excellent, average, good
DEMO_PROFILES = [
    ("Poor performer", 0.2),
    ("Excellent performer", 0.85),
    ("Average performer", 0.5),
    ("Good performer", 0.7),
]


def build_agents(count: int, noise: float = 0.15) -> list[SimulatedAgent]:
    """Simulated agents cycling through the demo quality profiles."""
    agents = []
    for i in range(count):
        label, base = DEMO_PROFILES[i % len(DEMO_PROFILES)]
        agents.append(SimulatedAgent(f"agent_{i}", label, base, noise))
    return agents


@dataclass
class DemoConfig:
    """Configuration for a simulation run."""
    fast: bool = False
    agents: int = 4
    seed: int = 42
    max_iterations: int = 100
    noise: float = 0.15


@dataclass
class DemoRound:
    """One select/evaluate/update round."""
    iteration: int
    agent_id: str
    score: float


@dataclass
class DemoResult:
    """Full result of a simulation run."""
    winner: WinnerResponse
    status: StatusResponse
    iterations: int
    converged: bool
    best_agent_id: str
    selection_counts: dict[str, int] = field(default_factory=dict)
    rounds: list[DemoRound] = field(default_factory=list)
    total_elapsed_s: float = 0.0

    @property
    def found_best(self) -> bool:
        return self.winner.winner_id == self.best_agent_id


# ---------------------------------------------------------------------------
# Simulation workflow (testable core logic)
# ---------------------------------------------------------------------------

def run_simulation(config: DemoConfig) -> DemoResult:
    """Run select -> evaluate -> update until converged or out of iterations.

    Tournament randomness comes from the seeded generator; evaluation noise
    uses a separate ``random.Random`` with the same seed, so the whole run is
    reproducible.
    """
    t0 = time.monotonic()
    agents = build_agents(config.agents, config.noise)
    by_id = {a.agent_id: a for a in agents}
    tournament = Tournament.create(config.agents, seed=config.seed)
    noise_rng = random.Random(config.seed)

    counts = {a.agent_id: 0 for a in agents}
    rounds: list[DemoRound] = []
    winner = tournament.winner()

    for iteration in range(1, config.max_iterations + 1):
        agent_id = tournament.select_next()
        score = by_id[agent_id].evaluate(noise_rng)
        tournament.update(agent_id, score)
        counts[agent_id] += 1
        rounds.append(DemoRound(iteration, agent_id, score))

        winner = tournament.winner()
        if winner.complete:
            break

    best = max(agents, key=lambda a: a.base_score)
    return DemoResult(
        winner=winner,
        status=tournament.status(),
        iterations=len(rounds),
        converged=winner.complete,
        best_agent_id=best.agent_id,
        selection_counts=counts,
        rounds=rounds,
        total_elapsed_s=round(time.monotonic() - t0, 3),
    )


def selection_share(result: DemoResult) -> dict[str, float]:
    """Fraction of all rounds spent on each agent."""
    total = max(1, result.iterations)
    return {aid: n / total for aid, n in result.selection_counts.items()}


# ---------------------------------------------------------------------------
# Rich display layer (visual presentation)
# ---------------------------------------------------------------------------

console = Console()


def _delay(seconds: float, fast: bool) -> None:
    """Sleep unless in fast mode."""
    if not fast:
        time.sleep(seconds)


def display_setup(config: DemoConfig, agents: list[SimulatedAgent]) -> None:
    """Display the simulated agent profiles."""
    table = Table(
        title="Simulated Agents",
        box=box.ROUNDED,
        border_style="cyan",
        padding=(0, 1),
    )
    table.add_column("Agent", style="bold white")
    table.add_column("Profile", style="cyan")
    table.add_column("True Quality", justify="right", style="green")
    table.add_column("Noise", justify="right", style="dim")
    for agent in agents:
        table.add_row(
            agent.agent_id,
            agent.label,
            f"{agent.base_score:.2f}",
            f"+/-{agent.noise:.2f}",
        )
    console.print(Panel(
        f"[bold white]Thompson Sampling tournament[/]\n\n"
        f"[dim]Seed:[/] [yellow]{config.seed}[/]   "
        f"[dim]Max iterations:[/] [yellow]{config.max_iterations}[/]",
        title="[bold cyan]mab-runner[/]",
        border_style="cyan",
        padding=(1, 2),
    ))
    console.print(table)
    console.print()


def display_rounds(rounds: list[DemoRound], fast: bool, every: int = 10) -> None:
    """Display every ``every``-th round as the tournament progresses."""
    console.print(Rule("[bold]Evaluation rounds[/]", style="cyan"))
    for rnd in rounds:
        if rnd.iteration % every == 0 or rnd.iteration == 1:
            console.print(
                f"  [dim]#{rnd.iteration:>3}[/] selected [bold cyan]{rnd.agent_id}[/] "
                f"score [green]{rnd.score:.3f}[/]"
            )
            _delay(0.1, fast)
    console.print()


def display_status(result: DemoResult) -> None:
    """Display per-agent statistics and selection share."""
    share = selection_share(result)
    table = Table(
        title="Tournament Status",
        box=box.ROUNDED,
        border_style="green",
        show_lines=True,
    )
    table.add_column("Agent", style="bold white")
    table.add_column("Evaluations", justify="right")
    table.add_column("Mean Score", justify="right", style="green")
    table.add_column("Std Dev", justify="right", style="dim")
    table.add_column("Share", justify="right", style="yellow")
    for entry in result.status.agent_stats:
        table.add_row(
            entry.agent_id,
            str(entry.evaluations),
            f"{entry.mean_score:.3f}",
            f"{entry.std_dev:.3f}",
            f"{share.get(entry.agent_id, 0.0):.0%}",
        )
    console.print(table)
    console.print(
        f"  [dim]Convergence progress:[/] {result.status.convergence_progress:.0%}   "
        f"[dim]Budget remaining:[/] {result.status.estimated_evaluations_remaining}"
    )
    console.print()


def display_winner(result: DemoResult) -> None:
    """Display the winner panel."""
    w = result.winner
    lo, hi = w.winner_stats.confidence_interval
    verdict = "[bold green]converged[/]" if w.complete else "[bold yellow]not converged[/]"
    check = "[green]matches[/]" if result.found_best else "[red]differs from[/]"
    console.print(Panel(
        f"[bold white]Winner:[/] [bold cyan]{w.winner_id}[/] ({verdict} "
        f"after {result.iterations} evaluations)\n\n"
        f"[dim]Confidence:[/] {w.confidence:.2f}\n"
        f"[dim]Mean score:[/] {w.winner_stats.mean_score:.3f} "
        f"(std {w.winner_stats.std_dev:.3f})\n"
        f"[dim]95% interval:[/] [{lo:.3f}, {hi:.3f}]\n\n"
        f"[dim]Result {check} the true best agent ({result.best_agent_id}).[/]",
        title="[bold cyan]Result[/]",
        border_style="cyan",
        padding=(1, 2),
    ))


def run_demo_with_display(config: DemoConfig) -> DemoResult:
    """Run the simulation with rich terminal output."""
    display_setup(config, build_agents(config.agents, config.noise))
    _delay(0.5, config.fast)
    result = run_simulation(config)
    display_rounds(result.rounds, config.fast)
    display_status(result)
    _delay(0.5, config.fast)
    display_winner(result)
    return result


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="mab-runner Demo - simulated Thompson Sampling tournament",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Skip timing delays for quick demo",
    )
    parser.add_argument(
        "--agents",
        type=int,
        default=4,
        help="Number of simulated agents (default: 4)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for selections and simulated scores (default: 42)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=100,
        help="Evaluation cap (default: 100)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = DemoConfig(
        fast=args.fast,
        agents=args.agents,
        seed=args.seed,
        max_iterations=args.max_iterations,
    )
    run_demo_with_display(config)


if __name__ == "__main__":
    main()
