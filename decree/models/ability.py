"""Rank abilities for Decree Duel.

Six odd ranks carry an ability:
1. Swan - Lose the trick with it and you lead the next one
3. Fox - Exchange a card from your hand with the decree card
5. Woodcutter - Draw the top card of the draw pile, then discard one
7. Treasure - The trick winner scores +1 for each 7 in the trick
9. Witch - A lone 9 in a trick counts as the dominant aspect
11. Monarch - When led, the follower must answer with their 1 or highest card
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from decree.constants import (
    FOX_RANK,
    MONARCH_RANK,
    SWAN_RANK,
    TREASURE_RANK,
    WITCH_RANK,
    WOODCUTTER_RANK,
)

if TYPE_CHECKING:
    from decree.models.card import Card


class AbilityType(str, Enum):
    """Ability carried by a rank."""

    SWAN = "swan"
    FOX = "fox"
    WOODCUTTER = "woodcutter"
    TREASURE = "treasure"
    WITCH = "witch"
    MONARCH = "monarch"


# Map ranks to their ability
RANK_ABILITY: dict[int, AbilityType] = {
    SWAN_RANK: AbilityType.SWAN,
    FOX_RANK: AbilityType.FOX,
    WOODCUTTER_RANK: AbilityType.WOODCUTTER,
    TREASURE_RANK: AbilityType.TREASURE,
    WITCH_RANK: AbilityType.WITCH,
    MONARCH_RANK: AbilityType.MONARCH,
}

ABILITY_DESCRIPTIONS: dict[AbilityType, str] = {
    AbilityType.SWAN: "If you play this and lose the trick, you lead the next trick.",
    AbilityType.FOX: "When you play this, you may exchange a card in your hand with the decree card.",
    AbilityType.WOODCUTTER: "When you play this, draw 1 card, then discard any 1 card to the bottom of the draw pile.",
    AbilityType.TREASURE: "The winner of the trick receives 1 point for each 7 in the trick.",
    AbilityType.WITCH: "When this is the only 9 in the trick, treat it as the dominant aspect.",
    AbilityType.MONARCH: "When you lead this, your opponent must play the 1 or the highest card of this aspect, if able.",
}

# Abilities that pause the trick for a player decision
CHOICE_ABILITIES = frozenset({AbilityType.FOX, AbilityType.WOODCUTTER})


def get_ability(rank: int) -> AbilityType | None:
    """Get the ability for a rank, or None for plain ranks."""
    return RANK_ABILITY.get(rank)


def get_description(ability: AbilityType) -> str:
    """Get the rules text for an ability."""
    return ABILITY_DESCRIPTIONS[ability]


@dataclass
class PendingAbility:
    """An on-play ability waiting for its owner's choice.

    Attributes:
        player_id: Player who played the ability card
        ability_type: FOX or WOODCUTTER
        trick_number: Trick in which it was played
        drawn_card: For Woodcutter, the card drawn before the discard
    """

    player_id: int
    ability_type: AbilityType
    trick_number: int
    drawn_card: "Card | None" = None
    resolved: bool = False
