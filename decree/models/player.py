"""Player model."""

from dataclasses import dataclass, field

from decree.models.card import Card


@dataclass
class Player:
    """Represents a player in the match.

    Attributes:
        id: Player index (0 or 1)
        name: Player's display name
        is_bot: Whether this is an AI player
        hand: Current cards in hand
        tricks_won: Number of tricks won this round
        bonus: Treasure points collected this round
        round_score: Points scored in the last completed round
        score: Cumulative match score

    """

    id: int
    name: str
    is_bot: bool = False
    hand: list[Card] = field(default_factory=list)
    tricks_won: int = 0
    bonus: int = 0
    round_score: int = 0
    score: int = 0

    def reset_round(self) -> None:
        """Reset player state for a new round."""
        self.hand = []
        self.tricks_won = 0
        self.bonus = 0

    def has_card(self, card: Card) -> bool:
        """Check if player has a card in their hand."""
        return card in self.hand

    def remove_card(self, card: Card) -> None:
        """Remove a card from player's hand."""
        if card in self.hand:
            self.hand.remove(card)

    def add_card(self, card: Card) -> None:
        """Add a card to player's hand."""
        self.hand.append(card)

    def __str__(self) -> str:
        """Return string representation."""
        bot_str = " (Bot)" if self.is_bot else ""
        return f"{self.name}{bot_str} - Score: {self.score}"
