"""Random bot that makes random legal moves."""

import random
from typing import TYPE_CHECKING

from decree.bots.base_bot import BaseBot, BotDifficulty
from decree.models.card import Card

if TYPE_CHECKING:
    from decree.models.game import Game


class RandomBot(BaseBot):
    """Bot that makes uniformly random decisions.

    This serves as a baseline for evaluating other bot strategies
    and provides a simple opponent for testing.
    """

    def __init__(
        self,
        player_id: int,
        _difficulty: BotDifficulty = BotDifficulty.EASY,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize random bot."""
        # Random bot always plays the Easy tier but accepts a difficulty for API compatibility
        super().__init__(player_id, BotDifficulty.EASY, rng)

    def choose_card_for_exchange(self, hand: list[Card], _decree: Card, _game: "Game") -> int:
        """Pick a random hand index to exchange."""
        return self.rng.randrange(len(hand))

    def choose_card_to_discard(self, hand: list[Card], _game: "Game") -> int:
        """Pick a random hand index to discard."""
        return self.rng.randrange(len(hand))
