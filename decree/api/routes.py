"""API routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from decree.api.responses import (
    CardInfo,
    CardListResponse,
    ChoiceRequest,
    CreateMatchRequest,
    ErrorResponse,
    EventListResponse,
    LegalCardsResponse,
    MatchResponse,
    PlayCardRequest,
)
from decree.models.card import Card
from decree.models.deck import generate_deck
from decree.models.enums import ErrorCode, GamePhase
from decree.models.errors import GameError, IllegalMoveError, PreconditionError
from decree.services.game_serializer import serialize_game
from decree.services.match_service import Match, MatchService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_match_service(request: Request) -> MatchService:
    """Match service stored on the application state."""
    return request.app.state.match_service


ServiceDep = Annotated[MatchService, Depends(get_match_service)]


def error_status(exc: GameError) -> int:
    """HTTP status for a rules-engine error."""
    if exc.code == ErrorCode.MATCH_NOT_FOUND:
        return 404
    if isinstance(exc, IllegalMoveError):
        return 409
    if isinstance(exc, PreconditionError):
        return 400
    return 500


async def game_error_handler(_request: Request, exc: GameError) -> JSONResponse:
    """Render a GameError as ``{"error": code, "detail": message}``."""
    status = error_status(exc)
    if status >= 500:  # noqa: PLR2004
        logger.error("Unexpected game error: %s (%s)", exc.code.value, exc.message)
    body = ErrorResponse(error=exc.code.value, detail=exc.message)
    return JSONResponse(status_code=status, content=body.model_dump())


def _awaiting(match: Match) -> str:
    game = match.game
    if game.phase == GamePhase.ENDED:
        return "none"
    pending = game.pending_ability
    if pending is not None and pending.player_id == match.human_id:
        return pending.ability_type.value
    return "play" if match.awaiting_human() else "none"


def _match_response(service: MatchService, match: Match) -> MatchResponse:
    bot_id = match.game.opponent_of(match.human_id)
    return MatchResponse(
        match_id=match.id,
        awaiting=_awaiting(match),
        game=serialize_game(match.game, hidden_player=bot_id),
        legal_cards=[CardInfo.from_card(c) for c in service.legal_cards(match.id)],
    )


@router.post("/matches", status_code=201)
async def create_match(request: CreateMatchRequest, service: ServiceDep) -> MatchResponse:
    """Start a match against a bot and run it to the human's first decision."""
    match = service.create_match(
        difficulty=request.difficulty, seed=request.seed, player_name=request.player_name
    )
    return _match_response(service, match)


@router.get("/matches/{match_id}")
async def get_match(match_id: str, service: ServiceDep) -> MatchResponse:
    """Get the human's view of a match."""
    return _match_response(service, service.get_match(match_id))


@router.delete("/matches/{match_id}", status_code=204)
async def delete_match(match_id: str, service: ServiceDep) -> Response:
    """Forget a match."""
    service.delete_match(match_id)
    return Response(status_code=204)


@router.get("/matches/{match_id}/legal-cards")
async def get_legal_cards(match_id: str, service: ServiceDep) -> LegalCardsResponse:
    """Cards the human may play now."""
    cards = service.legal_cards(match_id)
    return LegalCardsResponse(cards=[CardInfo.from_card(c) for c in cards])


@router.post("/matches/{match_id}/play")
async def play_card(match_id: str, request: PlayCardRequest, service: ServiceDep) -> MatchResponse:
    """Play a card from the human's hand."""
    card = Card(request.aspect, request.rank)
    match = service.play_card(match_id, card)
    return _match_response(service, match)


@router.post("/matches/{match_id}/exchange")
async def exchange_card(match_id: str, request: ChoiceRequest, service: ServiceDep) -> MatchResponse:
    """Resolve a Fox: swap the hand card at ``index`` with the decree card."""
    match = service.choose_exchange_card(match_id, request.index)
    return _match_response(service, match)


@router.post("/matches/{match_id}/discard")
async def discard_card(match_id: str, request: ChoiceRequest, service: ServiceDep) -> MatchResponse:
    """Resolve a Woodcutter: discard the hand card at ``index``."""
    match = service.choose_discard_card(match_id, request.index)
    return _match_response(service, match)


@router.get("/matches/{match_id}/events")
async def get_events(match_id: str, service: ServiceDep) -> EventListResponse:
    """Events recorded for a match, oldest first."""
    events = service.events(match_id)
    return EventListResponse(match_id=match_id, events=[e.to_dict() for e in events])


@router.get("/cards")
async def list_cards() -> CardListResponse:
    """List all cards in the deck with their ability text."""
    return CardListResponse(cards=[CardInfo.from_card(c) for c in generate_deck()])
