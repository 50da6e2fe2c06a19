"""Round scoring.

The table is deliberately non-monotonic: a round pays well for winning very
few tricks (0-3) or a narrow high band (7-9), little in between, and nothing
for taking 10 or more.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from decree.constants import TREASURE_RANK, TRICKS_PER_ROUND
from decree.models.card import Card
from decree.models.enums import ErrorCode
from decree.models.errors import PreconditionError

ROUND_SCORE_TABLE: dict[int, int] = {
    0: 6,
    1: 6,
    2: 6,
    3: 6,
    4: 1,
    5: 2,
    6: 3,
    7: 6,
    8: 6,
    9: 6,
    10: 0,
    11: 0,
    12: 0,
    13: 0,
}


def round_score(tricks_won: int) -> int:
    """Points for a round given the tricks a player won.

    Raises:
        PreconditionError: If tricks_won is outside 0-13

    """
    if (
        isinstance(tricks_won, bool)
        or not isinstance(tricks_won, int)
        or tricks_won not in ROUND_SCORE_TABLE
    ):
        msg = f"Tricks won must be between 0 and {TRICKS_PER_ROUND}, got {tricks_won!r}"
        raise PreconditionError(ErrorCode.INVALID_TRICK_COUNT, msg)
    return ROUND_SCORE_TABLE[tricks_won]


def treasure_bonus(cards: Iterable[Card]) -> int:
    """Bonus for the trick winner: one point per 7 in the trick."""
    return sum(1 for card in cards if card.rank == TREASURE_RANK)


@dataclass
class RoundResult:
    """Outcome of a completed round.

    Attributes:
        round_number: Round that was scored
        tricks_won: Tricks per player
        bonuses: Treasure points per player
        round_scores: Table score plus bonus per player
        totals: Cumulative score per player after the round
        winner: Match winner, if the round ended the match

    """

    round_number: int
    tricks_won: dict[int, int] = field(default_factory=dict)
    bonuses: dict[int, int] = field(default_factory=dict)
    round_scores: dict[int, int] = field(default_factory=dict)
    totals: dict[int, int] = field(default_factory=dict)
    winner: int | None = None
