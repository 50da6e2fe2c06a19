"""Bot-versus-bot match simulator.

Plays full matches between two bot tiers and prints a summary table.

Usage:
    decree-sim --matches 200 --p1 medium --p2 hard --seed 7
"""

import argparse
import logging
import random
from dataclasses import dataclass, field

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from decree.bots import BaseBot, BotDifficulty, create_bot
from decree.constants import WIN_THRESHOLD
from decree.models.enums import GamePhase
from decree.models.game import Game
from decree.models.player import Player

logger = logging.getLogger(__name__)

console = Console()

# A match that has not ended after this many rounds is treated as stuck
MAX_ROUNDS = 100


@dataclass
class MatchOutcome:
    """Result of one simulated match."""

    winner: int
    scores: list[int]
    rounds: int


@dataclass
class SimulationSummary:
    """Aggregate over simulated matches."""

    difficulties: tuple[BotDifficulty, BotDifficulty]
    outcomes: list[MatchOutcome] = field(default_factory=list)

    @property
    def matches(self) -> int:
        """Number of matches played."""
        return len(self.outcomes)

    def wins(self, player_id: int) -> int:
        """Matches won by a seat."""
        return sum(1 for o in self.outcomes if o.winner == player_id)

    def average_score(self, player_id: int) -> float:
        """Mean final score of a seat."""
        if not self.outcomes:
            return 0.0
        return sum(o.scores[player_id] for o in self.outcomes) / len(self.outcomes)

    def average_rounds(self) -> float:
        """Mean number of rounds per match."""
        if not self.outcomes:
            return 0.0
        return sum(o.rounds for o in self.outcomes) / len(self.outcomes)


class BotMatchSimulator:
    """Runs complete matches between two bots."""

    def __init__(
        self,
        p1: BotDifficulty | str = BotDifficulty.MEDIUM,
        p2: BotDifficulty | str = BotDifficulty.MEDIUM,
        seed: int | None = None,
        win_threshold: int = WIN_THRESHOLD,
        monarch_rule: bool = False,
    ) -> None:
        """Initialize the simulator.

        Args:
            p1: Difficulty of player 0
            p2: Difficulty of player 1
            seed: Master seed; each match derives its own seeds from it
            win_threshold: Score that ends a match
            monarch_rule: Enforce the rank-11 follow restriction

        """
        self.difficulties = (BotDifficulty(p1), BotDifficulty(p2))
        self.rng = random.Random(seed)  # noqa: S311
        self.win_threshold = win_threshold
        self.monarch_rule = monarch_rule

    def play_match(self, match_number: int = 0) -> MatchOutcome:
        """Play one match to completion.

        Raises:
            RuntimeError: If the match does not finish within MAX_ROUNDS rounds

        """
        game = Game(
            id=f"sim-{match_number}",
            players=[
                Player(id=i, name=f"{d.value.title()} bot", is_bot=True)
                for i, d in enumerate(self.difficulties)
            ],
            win_threshold=self.win_threshold,
            monarch_rule=self.monarch_rule,
            rng=random.Random(self.rng.getrandbits(64)),  # noqa: S311
        )
        bots: list[BaseBot] = [
            create_bot(i, d, random.Random(self.rng.getrandbits(64)))  # noqa: S311
            for i, d in enumerate(self.difficulties)
        ]

        game.start_round()
        actions = 0
        while game.phase != GamePhase.ENDED:
            if game.round_number > MAX_ROUNDS:
                msg = f"Match {game.id} did not finish within {MAX_ROUNDS} rounds"
                raise RuntimeError(msg)
            if game.is_trick_ready():
                game.complete_trick()
            elif game.phase == GamePhase.ROUND_OVER:
                game.apply_round_end()
            else:
                actor = game.pending_ability.player_id if game.pending_ability else game.active_player
                bots[actor].act(game)
                actions += 1

        logger.debug(
            "Match %s: winner %s after %d rounds (%d bot actions)",
            game.id,
            game.winner,
            game.round_number,
            actions,
        )
        return MatchOutcome(
            winner=game.winner,
            scores=[p.score for p in game.players],
            rounds=game.round_number,
        )

    def run(self, matches: int, show_progress: bool = False) -> SimulationSummary:
        """Play a batch of matches."""
        summary = SimulationSummary(difficulties=self.difficulties)
        if not show_progress:
            for i in range(matches):
                summary.outcomes.append(self.play_match(i))
            return summary

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Simulating matches", total=matches)
            for i in range(matches):
                summary.outcomes.append(self.play_match(i))
                progress.advance(task)
        return summary


def render_summary(summary: SimulationSummary) -> Table:
    """Build the results table."""
    table = Table(title=f"Simulation Results ({summary.matches} matches)")
    table.add_column("Seat", style="cyan")
    table.add_column("Bot", style="magenta")
    table.add_column("Wins", justify="right", style="green")
    table.add_column("Win %", justify="right")
    table.add_column("Avg score", justify="right")

    for player_id, difficulty in enumerate(summary.difficulties):
        wins = summary.wins(player_id)
        share = wins / summary.matches * 100 if summary.matches else 0.0
        table.add_row(
            f"P{player_id + 1}",
            difficulty.value,
            str(wins),
            f"{share:.1f}%",
            f"{summary.average_score(player_id):.1f}",
        )
    table.caption = f"Average rounds per match: {summary.average_rounds():.2f}"
    return table


def main(argv: list[str] | None = None) -> None:
    """Run the simulator from the command line."""
    choices = [d.value for d in BotDifficulty]
    parser = argparse.ArgumentParser(description="Simulate Decree Duel bot matches")
    parser.add_argument("--matches", type=int, default=100, help="Number of matches to play")
    parser.add_argument("--p1", choices=choices, default="medium", help="Player 1 bot difficulty")
    parser.add_argument("--p2", choices=choices, default="medium", help="Player 2 bot difficulty")
    parser.add_argument("--seed", type=int, default=None, help="Master random seed")
    parser.add_argument(
        "--win-threshold", type=int, default=WIN_THRESHOLD, help="Score that ends a match"
    )
    parser.add_argument("--monarch-rule", action="store_true", help="Enforce the rank-11 rule")
    args = parser.parse_args(argv)

    if args.matches < 1:
        parser.error("--matches must be at least 1")

    console.print(f"[bold]Decree Duel: {args.p1} vs {args.p2}[/bold]")
    simulator = BotMatchSimulator(
        p1=args.p1,
        p2=args.p2,
        seed=args.seed,
        win_threshold=args.win_threshold,
        monarch_rule=args.monarch_rule,
    )
    summary = simulator.run(args.matches, show_progress=True)
    console.print()
    console.print(render_summary(summary))


if __name__ == "__main__":
    main()
