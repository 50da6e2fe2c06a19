"""Card desirability heuristic shared by the Medium and Hard bots.

A card's score combines four signals:
- Rank, scaled toward high cards when chasing tricks and low cards when dodging them
- Trump membership
- The value of the card's ability at this point of the round
- Whether the card follows the lead of the trick in progress
"""

from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING

from decree.constants import (
    ABILITY_WEIGHT,
    FOLLOW_BONUS,
    GREEDY_MIN,
    HIGH_BAND_MAX,
    HIGH_BAND_MIN,
    LOW_BAND_MAX,
    MAX_RANK,
    RANK_WEIGHT,
    STRONG_LEAD_RANK,
    TRICKS_PER_ROUND,
    TRUMP_BONUS,
    UNAVOIDABLE_TRICK_SHARE,
    WITCH_RANK,
)
from decree.models.ability import AbilityType
from decree.models.card import Card, resolve_trick
from decree.models.enums import Aspect

if TYPE_CHECKING:
    from decree.models.game import Game


class TargetBand(str, Enum):
    """Trick count a player is steering toward this round."""

    LOW = "low"  # 0-3 tricks
    HIGH = "high"  # 7-9 tricks


def _round_progress(game: "Game") -> float:
    """Share of the round already played, 0.0 at the first trick."""
    return 1.0 - game.tricks_remaining / TRICKS_PER_ROUND


def _mid_round(progress: float) -> float:
    """Bell peaking at 1.0 halfway through the round, 0.0 at either end."""
    return 1.0 - abs(progress - 0.5) * 2


def _swan_value(card: Card, game: "Game", _tricks_won: int, _hand: Sequence[Card]) -> float:
    # Taking the lead back matters most while many tricks remain
    return 0.3 + 0.4 * game.tricks_remaining / TRICKS_PER_ROUND


def _fox_value(card: Card, game: "Game", _tricks_won: int, hand: Sequence[Card]) -> float:
    value = 0.3 + 0.4 * _mid_round(_round_progress(game))
    others = [c for c in hand if c != card]
    if game.decree and others and game.decree.rank > min(c.rank for c in others):
        value += 0.1
    return value


def _woodcutter_value(card: Card, game: "Game", _tricks_won: int, _hand: Sequence[Card]) -> float:
    if not game.draw_pile:
        return 0.2
    return 0.3 + 0.3 * _mid_round(_round_progress(game))


def _treasure_value(card: Card, game: "Game", tricks_won: int, _hand: Sequence[Card]) -> float:
    if LOW_BAND_MAX < tricks_won < GREEDY_MIN - 1:
        return 0.8
    return 0.3


def _witch_value(card: Card, game: "Game", _tricks_won: int, _hand: Sequence[Card]) -> float:
    return 0.9


def _monarch_value(card: Card, game: "Game", _tricks_won: int, _hand: Sequence[Card]) -> float:
    return 0.3 + 0.5 * _round_progress(game)


AbilityValuation = Callable[[Card, "Game", int, Sequence[Card]], float]

ABILITY_VALUES: dict[AbilityType, AbilityValuation] = {
    AbilityType.SWAN: _swan_value,
    AbilityType.FOX: _fox_value,
    AbilityType.WOODCUTTER: _woodcutter_value,
    AbilityType.TREASURE: _treasure_value,
    AbilityType.WITCH: _witch_value,
    AbilityType.MONARCH: _monarch_value,
}


def ability_value(
    card: Card, game: "Game", current_tricks_won: int, hand: Sequence[Card] | None = None
) -> float:
    """Situational value of a card's ability in [0, 1]; 0.0 for plain ranks."""
    ability = card.ability
    if ability is None:
        return 0.0
    value = ABILITY_VALUES[ability](card, game, current_tricks_won, hand or ())
    return max(0.0, min(1.0, value))


def evaluate(
    card: Card,
    hand: Sequence[Card],
    game: "Game",
    current_tricks_won: int,
    target_band: TargetBand,
) -> float:
    """Score how desirable it is to play a card right now.

    Args:
        card: Candidate card
        hand: The hand the card comes from
        game: Current game state (read only)
        current_tricks_won: Tricks the evaluating player has won this round
        target_band: Band the player is steering toward

    Returns:
        Score clamped to [0, 1]; higher is better

    """
    rank_share = card.rank / MAX_RANK
    if target_band == TargetBand.LOW:
        rank_share = 1.0 - rank_share
    score = RANK_WEIGHT * rank_share

    if card.aspect == game.dominant_aspect:
        score += TRUMP_BONUS

    score += ABILITY_WEIGHT * ability_value(card, game, current_tricks_won, hand)

    if not game.trick.is_empty() and card.aspect == game.trick.lead_aspect:
        score += FOLLOW_BONUS

    return max(0.0, min(1.0, score))


def leads_as_trump(card: Card, dominant_aspect: Aspect | None) -> bool:
    """Check if a led card counts as trump, treating a led 9 as a lone wild 9."""
    if dominant_aspect is None:
        return False
    return card.rank == WITCH_RANK or card.aspect == dominant_aspect


def will_win_trick(card: Card, game: "Game") -> bool:
    """Predict whether playing a card wins the current trick.

    Following, the outcome is exact. Leading, a high trump (a lone 9 counts)
    is assumed to hold.
    """
    dominant = game.dominant_aspect
    lead = game.trick.lead_card
    if lead is None:
        return leads_as_trump(card, dominant) and card.rank >= STRONG_LEAD_RANK
    return resolve_trick(lead, card, lead.aspect, dominant) == card


def determine_target_band(
    current: int, remaining: int, opponent: int, consider_opponent: bool = False
) -> TargetBand:
    """Choose the band a player should aim for given the trick counts.

    Args:
        current: Tricks this player has won so far
        remaining: Tricks left in the round, including the current one
        opponent: Tricks the opponent has won so far
        consider_opponent: Push the opponent past the high band when possible

    Returns:
        LOW or HIGH

    """
    if consider_opponent:
        opponent_on_cliff = HIGH_BAND_MIN <= opponent <= HIGH_BAND_MAX
        can_push_opponent = opponent + remaining > HIGH_BAND_MAX
        if opponent_on_cliff and can_push_opponent and current + remaining < HIGH_BAND_MIN:
            return TargetBand.LOW

    if current >= GREEDY_MIN:
        return TargetBand.LOW
    if current >= HIGH_BAND_MIN:
        # Stop taking tricks once staying inside the band is out of reach
        return TargetBand.HIGH if current + remaining <= HIGH_BAND_MAX else TargetBand.LOW
    if current > LOW_BAND_MAX:
        return TargetBand.HIGH
    if current + int(remaining * UNAVOIDABLE_TRICK_SHARE) > LOW_BAND_MAX:
        return TargetBand.HIGH
    return TargetBand.LOW


__all__ = [
    "ABILITY_VALUES",
    "TargetBand",
    "ability_value",
    "determine_target_band",
    "evaluate",
    "leads_as_trump",
    "will_win_trick",
]
