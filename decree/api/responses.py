"""Request and response models."""

from typing import Any

from pydantic import BaseModel, Field

from decree.bots.base_bot import BotDifficulty
from decree.models.card import Card
from decree.models.enums import ErrorCode

__all__ = [
    "CardInfo",
    "CardListResponse",
    "ChoiceRequest",
    "CreateMatchRequest",
    "ErrorCode",
    "ErrorResponse",
    "EventListResponse",
    "LegalCardsResponse",
    "MatchResponse",
    "PlayCardRequest",
]


class CardInfo(BaseModel):
    """Card with its ability text, for display."""

    aspect: str
    rank: int
    ability: str | None = None
    description: str | None = None

    @classmethod
    def from_card(cls, card: Card) -> "CardInfo":
        """Build from a Card."""
        return cls(**card.to_dict())


class CreateMatchRequest(BaseModel):
    """Request to start a match against a bot."""

    difficulty: BotDifficulty | None = None
    seed: int | None = None
    player_name: str = Field(default="Player", min_length=1, max_length=32)


class PlayCardRequest(BaseModel):
    """Card the human plays.

    Validation of aspect and rank is left to the rules engine so a bad card
    reports ``error.invalidCard`` like every other rejected move.
    """

    aspect: str
    rank: int


class ChoiceRequest(BaseModel):
    """Hand index chosen for a Fox exchange or Woodcutter discard."""

    index: int


class MatchResponse(BaseModel):
    """Match state as seen by the human player.

    ``awaiting`` is ``play``, ``fox``, ``woodcutter`` or ``none`` once the
    match is over.
    """

    match_id: str
    awaiting: str
    game: dict[str, Any]
    legal_cards: list[CardInfo]


class LegalCardsResponse(BaseModel):
    """Cards the human may play now."""

    cards: list[CardInfo]


class EventListResponse(BaseModel):
    """Recorded events of a match."""

    match_id: str
    events: list[dict[str, Any]]


class CardListResponse(BaseModel):
    """Response for card list endpoint."""

    cards: list[CardInfo]


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
