"""Rule-based bot driven by the card evaluator."""

import random
from typing import TYPE_CHECKING

from decree.bots.base_bot import BaseBot, BotDifficulty
from decree.bots.evaluator import determine_target_band, evaluate
from decree.models.card import Card

if TYPE_CHECKING:
    from decree.models.game import Game


class RuleBasedBot(BaseBot):
    """Bot that steers toward a scoring band using heuristics.

    Playing Strategy:
    - Medium: plays the legal card the evaluator rates highest
    - Hard: also watches the opponent and tries to push them past 9 tricks

    Ability choices (both tiers):
    - Fox and Woodcutter give away the card the evaluator rates lowest
    """

    def __init__(
        self,
        player_id: int,
        difficulty: BotDifficulty = BotDifficulty.MEDIUM,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize rule-based bot."""
        super().__init__(player_id, difficulty, rng)

    def choose_card_for_exchange(self, hand: list[Card], _decree: Card, game: "Game") -> int:
        """Give up the weakest card in hand for the decree card."""
        return self._worst_index(hand, game)

    def choose_card_to_discard(self, hand: list[Card], game: "Game") -> int:
        """Discard the weakest card in hand."""
        return self._worst_index(hand, game)

    def _worst_index(self, hand: list[Card], game: "Game") -> int:
        me = game.get_player(self.player_id)
        them = game.get_player(game.opponent_of(self.player_id))
        band = determine_target_band(
            me.tricks_won,
            game.tricks_remaining,
            them.tricks_won,
            consider_opponent=self.difficulty == BotDifficulty.HARD,
        )
        scores = [evaluate(card, hand, game, me.tricks_won, band) for card in hand]
        return min(range(len(hand)), key=scores.__getitem__)
