"""Card-choice strategies for the three bot tiers.

Each strategy is a pure function of the hand, the game and the trick counts:

    strategy(hand, game, my_tricks, their_tricks, rng) -> Card

The random source is passed in so matches stay reproducible.
"""

import logging
import random
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from decree.bots.base_bot import BotDifficulty
from decree.bots.evaluator import (
    TargetBand,
    determine_target_band,
    evaluate,
    leads_as_trump,
    will_win_trick,
)
from decree.constants import STRONG_LEAD_RANK
from decree.models.card import Card
from decree.models.enums import ErrorCode
from decree.models.errors import AIInvariantError, PreconditionError
from decree.models.trick import get_legal_cards

if TYPE_CHECKING:
    from decree.models.game import Game

logger = logging.getLogger(__name__)

Strategy = Callable[[Sequence[Card], "Game", int, int, random.Random], Card]


def _by_rank(card: Card) -> tuple[int, tuple[int, int]]:
    return card.rank, card.sort_key()


def legal_choices(hand: Sequence[Card], game: "Game") -> list[Card]:
    """Legal cards for the hand in the current trick.

    Raises:
        PreconditionError: If the hand is empty
        AIInvariantError: If a non-empty hand has no legal card

    """
    if not hand:
        raise PreconditionError(ErrorCode.EMPTY_HAND, "Cannot choose a card from an empty hand")
    legal = get_legal_cards(hand, game.trick, monarch_rule=game.monarch_rule)
    if not legal:
        logger.error("No legal card for hand %s in trick %s", [str(c) for c in hand], game.trick)
        raise AIInvariantError(ErrorCode.NO_LEGAL_CARDS)
    return legal


def easy_strategy(
    hand: Sequence[Card], game: "Game", my_tricks: int, their_tricks: int, rng: random.Random
) -> Card:
    """Uniformly random legal card."""
    return rng.choice(legal_choices(hand, game))


def medium_strategy(
    hand: Sequence[Card], game: "Game", my_tricks: int, their_tricks: int, rng: random.Random
) -> Card:
    """Highest-evaluated legal card for the band this player is in."""
    legal = legal_choices(hand, game)
    band = determine_target_band(my_tricks, game.tricks_remaining, their_tricks)
    return max(legal, key=lambda c: evaluate(c, hand, game, my_tricks, band))


def hard_strategy(
    hand: Sequence[Card], game: "Game", my_tricks: int, their_tricks: int, rng: random.Random
) -> Card:
    """Opponent-aware play.

    Leading, the bot either slips away with a low off-trump card or presses
    with a strong trump. Following, it splits its legal cards into winners and
    losers and picks the cheapest card that gets the outcome it wants.
    """
    legal = legal_choices(hand, game)
    band = determine_target_band(
        my_tricks, game.tricks_remaining, their_tricks, consider_opponent=True
    )
    dominant = game.dominant_aspect

    if game.trick.is_empty():
        if band == TargetBand.LOW:
            off_trump = [c for c in legal if not leads_as_trump(c, dominant)]
            return min(off_trump or legal, key=_by_rank)
        strong_trump = [
            c for c in legal if leads_as_trump(c, dominant) and c.rank >= STRONG_LEAD_RANK
        ]
        return max(strong_trump or legal, key=_by_rank)

    winners = [c for c in legal if will_win_trick(c, game)]
    losers = [c for c in legal if c not in winners]
    if band == TargetBand.LOW:
        return max(losers, key=_by_rank) if losers else min(winners, key=_by_rank)
    return min(winners, key=_by_rank) if winners else min(losers, key=_by_rank)


STRATEGIES: dict[BotDifficulty, Strategy] = {
    BotDifficulty.EASY: easy_strategy,
    BotDifficulty.MEDIUM: medium_strategy,
    BotDifficulty.HARD: hard_strategy,
}
