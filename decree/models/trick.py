"""Trick model for a single trick within a round."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from decree.constants import MONARCH_RANK, NUM_PLAYERS, SWAN_RANK
from decree.models.card import Card, resolve_trick
from decree.models.enums import Aspect, ErrorCode
from decree.models.errors import PreconditionError


@dataclass(frozen=True)
class PlayedCard:
    """Represents a card played by a player in a trick."""

    player_id: int
    card: Card


@dataclass
class Trick:
    """Represents a single trick within a round.

    Each of the two players plays one card. The first card fixes the lead aspect.

    Attributes:
        number: Trick number within the round (1-indexed)
        played: Cards played so far, in order
        winner_player_id: ID of player who won this trick

    """

    number: int
    played: list[PlayedCard] = field(default_factory=list)
    winner_player_id: int | None = None

    @property
    def lead_card(self) -> Card | None:
        """First card played into the trick."""
        return self.played[0].card if self.played else None

    @property
    def lead_aspect(self) -> Aspect | None:
        """Aspect every follower must match if able."""
        lead = self.lead_card
        return lead.aspect if lead else None

    def cards(self) -> list[Card]:
        """Get all cards played in this trick."""
        return [pc.card for pc in self.played]

    def is_empty(self) -> bool:
        """Check if no card has been played yet."""
        return not self.played

    def has_player_played(self, player_id: int) -> bool:
        """Check if a player has already played a card in this trick."""
        return any(pc.player_id == player_id for pc in self.played)

    def add_card(self, player_id: int, card: Card) -> bool:
        """Add a played card to this trick.

        Returns:
            True if card was added, False if player already played or the trick is full.

        """
        if self.is_complete() or self.has_player_played(player_id):
            return False
        self.played.append(PlayedCard(player_id, card))
        return True

    def is_complete(self) -> bool:
        """Check if both players have played a card."""
        return len(self.played) == NUM_PLAYERS

    def determine_winner(self, dominant_aspect: Aspect) -> PlayedCard:
        """Determine the winner of this trick.

        Raises:
            PreconditionError: If fewer than two cards were played

        """
        if not self.is_complete():
            msg = f"Trick {self.number} has {len(self.played)} card(s), needs {NUM_PLAYERS}"
            raise PreconditionError(ErrorCode.TRICK_INCOMPLETE, msg)

        first, second = self.played
        winning_card = resolve_trick(first.card, second.card, first.card.aspect, dominant_aspect)
        winner = first if winning_card == first.card else second
        self.winner_player_id = winner.player_id
        return winner

    def next_leader(self) -> int | None:
        """Player who leads the next trick.

        The winner leads, unless the loser played a 1 (Swan).
        """
        if self.winner_player_id is None:
            return None
        loser = next(pc for pc in self.played if pc.player_id != self.winner_player_id)
        if loser.card.rank == SWAN_RANK:
            return loser.player_id
        return self.winner_player_id

    def __str__(self) -> str:
        """Return string representation of the trick."""
        if self.winner_player_id is not None:
            return f"Trick {self.number}: Winner {self.winner_player_id}"
        return f"Trick {self.number}: {len(self.played)} cards played"


def _trick_cards(trick: "Trick | Sequence[Card]") -> list[Card]:
    """Normalize a Trick or a plain card sequence to its cards."""
    if isinstance(trick, Trick):
        return trick.cards()
    return list(trick)


def _monarch_answers(hand: Sequence[Card], aspect: Aspect) -> list[Card]:
    """Cards allowed in answer to a led 11: the 1 or the highest of that aspect."""
    same_aspect = [c for c in hand if c.aspect == aspect]
    highest = max(same_aspect, key=lambda c: c.rank)
    return [c for c in same_aspect if c.rank == SWAN_RANK or c == highest]


def get_legal_cards(
    hand: Sequence[Card], trick: "Trick | Sequence[Card]", monarch_rule: bool = False
) -> list[Card]:
    """Get legal cards that can be played from the hand.

    Rules:
    - If leading (no cards in trick), any card can be played
    - If following, must follow the lead aspect if possible
    - Monarch rule (optional): following a led 11, only the 1 or the highest
      card of the lead aspect may be played
    """
    cards_in_trick = _trick_cards(trick)
    if not cards_in_trick:
        return list(hand)

    lead = cards_in_trick[0]
    following = [c for c in hand if c.aspect == lead.aspect]
    if not following:
        return list(hand)

    if monarch_rule and lead.rank == MONARCH_RANK:
        allowed = _monarch_answers(hand, lead.aspect)
        return [c for c in hand if c in allowed]
    return following


def is_legal_play(
    card: Card,
    hand: Sequence[Card],
    trick: "Trick | Sequence[Card]",
    monarch_rule: bool = False,
) -> bool:
    """Check if a card from the hand may be played into the trick."""
    if card not in hand:
        return False
    return card in get_legal_cards(hand, trick, monarch_rule=monarch_rule)
