"""Deck generation, shuffling and dealing."""

import random
from dataclasses import dataclass

from decree.constants import DECK_SIZE, DECREE_POSITION, MAX_RANK, MIN_RANK
from decree.models.card import Card
from decree.models.enums import Aspect, ErrorCode
from decree.models.errors import PreconditionError


@dataclass(frozen=True)
class Deal:
    """Result of dealing a 33-card deck.

    Attributes:
        hand1: First player's 13 cards
        hand2: Second player's 13 cards
        decree: Face-up card fixing the dominant aspect
        draw_pile: Remaining 6 cards, top of the pile first

    """

    hand1: list[Card]
    hand2: list[Card]
    decree: Card
    draw_pile: list[Card]


def generate_deck(seed: int | None = None) -> list[Card]:
    """Build the 33-card deck.

    The deck holds ranks 1-11 in each of the three aspects.

    Args:
        seed: If given, the deck is returned shuffled with ``random.Random(seed)``

    Returns:
        Ordered deck, or a reproducibly shuffled one when seeded

    """
    deck = [Card(aspect, rank) for aspect in Aspect for rank in range(MIN_RANK, MAX_RANK + 1)]
    if seed is not None:
        return shuffle(deck, random.Random(seed))
    return deck


def shuffle(deck: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled copy of the deck."""
    shuffled = list(deck)
    (rng or random.Random()).shuffle(shuffled)
    return shuffled


def deal(deck: list[Card]) -> Deal:
    """Deal two hands, the decree card and the draw pile.

    Cards alternate between the two hands for the first 26 positions,
    the 27th becomes the decree and the rest form the draw pile.

    Raises:
        PreconditionError: If the deck is not exactly 33 distinct cards

    """
    if len(deck) != DECK_SIZE:
        msg = f"Deck must contain {DECK_SIZE} cards, got {len(deck)}"
        raise PreconditionError(ErrorCode.DECK_SIZE, msg)
    if len(set(deck)) != DECK_SIZE:
        raise PreconditionError(ErrorCode.DUPLICATE_CARD, "Deck contains duplicate cards")

    dealt = deck[:DECREE_POSITION]
    return Deal(
        hand1=dealt[0::2],
        hand2=dealt[1::2],
        decree=deck[DECREE_POSITION],
        draw_pile=list(deck[DECREE_POSITION + 1 :]),
    )


def sort_hand(hand: list[Card]) -> list[Card]:
    """Sort a hand by aspect, then rank (display convenience)."""
    return sorted(hand, key=Card.sort_key)
