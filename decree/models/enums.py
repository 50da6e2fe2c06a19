"""Enums for the game."""

from enum import Enum, StrEnum


class Aspect(str, Enum):
    """The three aspects (suits) of the deck, in display order."""

    A = "A"
    B = "B"
    C = "C"


class GamePhase(str, Enum):
    """Game phases during the lifecycle of a match."""

    PENDING = "PENDING"
    PLAYING = "PLAYING"
    ABILITY = "ABILITY"  # Waiting on a Fox or Woodcutter choice
    ROUND_OVER = "ROUND_OVER"
    ENDED = "ENDED"


class ErrorCode(StrEnum):
    """Error codes for i18n translation on the frontend."""

    # Setup errors
    DECK_SIZE = "error.deckSize"
    DUPLICATE_CARD = "error.duplicateCard"
    INVALID_CARD = "error.invalidCard"
    TOO_MANY_MATCHES = "error.tooManyMatches"
    MATCH_NOT_FOUND = "error.matchNotFound"
    SNAPSHOT_MISMATCH = "error.snapshotMismatch"

    # Game state errors
    NOT_IN_PLAY_PHASE = "error.notInPlayPhase"
    TRICK_INCOMPLETE = "error.trickIncomplete"
    ROUND_NOT_COMPLETE = "error.roundNotComplete"
    MATCH_ENDED = "error.matchEnded"
    INVALID_TRICK_COUNT = "error.invalidTrickCount"

    # Player errors
    PLAYER_NOT_FOUND = "error.playerNotFound"
    PLAYER_COUNT = "error.playerCount"
    NOT_YOUR_TURN = "error.notYourTurn"
    ALREADY_PLAYED = "error.alreadyPlayed"
    EMPTY_HAND = "error.emptyHand"

    # Card errors
    CARD_NOT_IN_HAND = "error.cardNotInHand"
    MUST_FOLLOW_LEAD = "error.mustFollowLead"

    # Ability errors
    ABILITY_PENDING = "error.abilityPending"
    NO_PENDING_ABILITY = "error.noPendingAbility"
    INVALID_CHOICE = "error.invalidChoice"

    # AI errors
    NO_LEGAL_CARDS = "error.noLegalCards"
