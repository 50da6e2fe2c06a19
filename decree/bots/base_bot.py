"""Base class for all bot strategies."""

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

from decree.models.ability import AbilityType
from decree.models.card import Card

if TYPE_CHECKING:
    from decree.models.game import Game

logger = logging.getLogger(__name__)


class BotDifficulty(str, Enum):
    """Bot difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class BaseBot(ABC):
    """Abstract base class for bot AI strategies.

    Card choice is delegated to the strategy registered for the bot's
    difficulty; subclasses decide the Fox and Woodcutter side choices.
    """

    def __init__(
        self,
        player_id: int,
        difficulty: BotDifficulty = BotDifficulty.MEDIUM,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the bot.

        Args:
            player_id: ID of the player this bot controls
            difficulty: Bot difficulty level
            rng: Random source; a fresh one is created if omitted

        """
        self.player_id = player_id
        self.difficulty = difficulty
        self.rng = rng or random.Random()  # noqa: S311

    def pick_card(self, game: "Game") -> Card:
        """Pick a card to play in the current trick.

        Args:
            game: Current game state

        Returns:
            A legal card from the bot's hand

        """
        from decree.bots.strategies import STRATEGIES  # noqa: PLC0415

        me = game.get_player(self.player_id)
        them = game.get_player(game.opponent_of(self.player_id))
        card = STRATEGIES[self.difficulty](me.hand, game, me.tricks_won, them.tricks_won, self.rng)
        logger.debug("%s picked %s", self, card)
        return card

    @abstractmethod
    def choose_card_for_exchange(self, hand: list[Card], decree: Card, game: "Game") -> int:
        """Choose the hand index to swap with the decree card (Fox).

        Args:
            hand: Bot's current hand
            decree: Current decree card
            game: Current game state

        Returns:
            Index into hand

        """

    @abstractmethod
    def choose_card_to_discard(self, hand: list[Card], game: "Game") -> int:
        """Choose the hand index to discard after drawing (Woodcutter).

        Args:
            hand: Bot's current hand, including the drawn card
            game: Current game state

        Returns:
            Index into hand

        """

    def act(self, game: "Game") -> Card:
        """Take the bot's next action: resolve its pending ability or play a card.

        Returns:
            The card exchanged, discarded or played

        """
        pending = game.pending_ability
        if pending is not None and pending.player_id == self.player_id:
            hand = game.get_player(self.player_id).hand
            if pending.ability_type == AbilityType.FOX:
                index = self.choose_card_for_exchange(hand, game.decree, game)
                return game.choose_exchange_card(self.player_id, index)
            index = self.choose_card_to_discard(hand, game)
            return game.choose_discard_card(self.player_id, index)

        card = self.pick_card(game)
        game.play_card(card, self.player_id)
        return card

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__} ({self.difficulty.value})"
