"""Card model and trick resolution."""

from dataclasses import dataclass
from typing import Any

from decree.constants import MAX_RANK, MIN_RANK, WITCH_RANK
from decree.models.ability import AbilityType, get_ability, get_description
from decree.models.enums import Aspect, ErrorCode
from decree.models.errors import PreconditionError

ASPECT_ORDER: dict[Aspect, int] = {aspect: index for index, aspect in enumerate(Aspect)}


@dataclass(frozen=True)
class Card:
    """Represents a card in Decree Duel.

    Cards are immutable values; two cards are equal when aspect and rank match.

    Attributes:
        aspect: The card's aspect (suit)
        rank: Card rank, 1-11

    """

    aspect: Aspect
    rank: int

    def __post_init__(self) -> None:
        """Validate the card and coerce a raw aspect value."""
        try:
            aspect = Aspect(self.aspect)
        except (ValueError, TypeError):
            msg = f"Unknown aspect: {self.aspect!r}"
            raise PreconditionError(ErrorCode.INVALID_CARD, msg) from None
        object.__setattr__(self, "aspect", aspect)

        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            msg = f"Rank must be an integer, got {self.rank!r}"
            raise PreconditionError(ErrorCode.INVALID_CARD, msg)
        if not MIN_RANK <= self.rank <= MAX_RANK:
            msg = f"Rank must be between {MIN_RANK} and {MAX_RANK}, got {self.rank}"
            raise PreconditionError(ErrorCode.INVALID_CARD, msg)

    @property
    def ability(self) -> AbilityType | None:
        """Ability triggered by this card's rank, if any."""
        return get_ability(self.rank)

    @property
    def has_ability(self) -> bool:
        """Check if the card carries an ability (odd ranks)."""
        return self.ability is not None

    @classmethod
    def parse(cls, code: str) -> "Card":
        """Build a card from its short code, e.g. ``"B5"``.

        Raises:
            PreconditionError: If the code is malformed

        """
        code = code.strip().upper()
        if len(code) < 2 or not code[1:].isdigit():  # noqa: PLR2004
            raise PreconditionError(ErrorCode.INVALID_CARD, f"Bad card code: {code!r}")
        return cls(code[0], int(code[1:]))

    def sort_key(self) -> tuple[int, int]:
        """Key ordering cards by aspect, then rank."""
        return ASPECT_ORDER[self.aspect], self.rank

    def to_dict(self) -> dict[str, Any]:
        """Displayable fields for the presentation layer."""
        ability = self.ability
        return {
            "aspect": self.aspect.value,
            "rank": self.rank,
            "ability": ability.value if ability else None,
            "description": get_description(ability) if ability else None,
        }

    def __str__(self) -> str:
        """Return string representation of card."""
        return f"{self.aspect.value}{self.rank}"


def effective_aspect(card: Card, other: Card, dominant_aspect: Aspect) -> Aspect:
    """Aspect a card counts as within a two-card trick.

    A 9 is wild only when it is the sole 9 in the trick.
    """
    if card.rank == WITCH_RANK and other.rank != WITCH_RANK:
        return dominant_aspect
    return card.aspect


def resolve_trick(
    first: Card, second: Card, lead_aspect: Aspect, dominant_aspect: Aspect
) -> Card:
    """Determine the winning card of a two-card trick.

    Args:
        first: Card played first (the lead)
        second: Card played second
        lead_aspect: Aspect the trick was led with
        dominant_aspect: Trump aspect for the round

    Returns:
        The winning card

    Rules:
        1. A lone 9 counts as the dominant aspect
        2. Exactly one trump card wins
        3. Otherwise exactly one card following the lead wins (original aspect)
        4. Otherwise the higher rank wins; on an equal rank the first card keeps it

    """
    first_trump = effective_aspect(first, second, dominant_aspect) == dominant_aspect
    second_trump = effective_aspect(second, first, dominant_aspect) == dominant_aspect
    if first_trump != second_trump:
        return first if first_trump else second

    first_follows = first.aspect == lead_aspect
    second_follows = second.aspect == lead_aspect
    if first_follows != second_follows:
        return first if first_follows else second

    return second if second.rank > first.rank else first
