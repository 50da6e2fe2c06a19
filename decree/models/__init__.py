"""Game domain models."""

from decree.models.ability import AbilityType, PendingAbility
from decree.models.card import Card, resolve_trick
from decree.models.deck import Deal, deal, generate_deck, shuffle
from decree.models.enums import Aspect, ErrorCode, GamePhase
from decree.models.errors import AIInvariantError, GameError, IllegalMoveError, PreconditionError
from decree.models.game import Game, TrickResult
from decree.models.player import Player
from decree.models.scoring import RoundResult, round_score
from decree.models.trick import PlayedCard, Trick, get_legal_cards, is_legal_play

__all__ = [
    "AIInvariantError",
    "AbilityType",
    "Aspect",
    "Card",
    "Deal",
    "ErrorCode",
    "Game",
    "GameError",
    "GamePhase",
    "IllegalMoveError",
    "PendingAbility",
    "PlayedCard",
    "Player",
    "PreconditionError",
    "RoundResult",
    "Trick",
    "TrickResult",
    "deal",
    "generate_deck",
    "get_legal_cards",
    "is_legal_play",
    "resolve_trick",
    "round_score",
    "shuffle",
]
