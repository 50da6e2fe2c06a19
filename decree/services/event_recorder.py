"""Event recorder service for capturing match events during play.

Used for replay and the per-match event feed.
"""

from typing import TYPE_CHECKING, Any

from decree.models.game_event import GameEvent, GameEventType
from decree.services.game_serializer import serialize_card

if TYPE_CHECKING:
    from decree.models.ability import PendingAbility
    from decree.models.card import Card
    from decree.models.game import Game, TrickResult
    from decree.models.scoring import RoundResult


class EventRecorder:
    """Records match events in memory."""

    def __init__(self) -> None:
        """Initialize the event recorder."""
        # Key: game_id, Value: list of events
        self._events: dict[str, list[GameEvent]] = {}

    def start_game(self, game: "Game") -> None:
        """Initialize event recording for a new match."""
        self._events[game.id] = []
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.MATCH_STARTED,
            data={
                "players": [{"id": p.id, "name": p.name, "is_bot": p.is_bot} for p in game.players],
                "win_threshold": game.win_threshold,
            },
        )

    def record_event(  # noqa: PLR0913
        self,
        game_id: str,
        event_type: GameEventType,
        round_number: int = 0,
        trick_number: int | None = None,
        player_id: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> GameEvent:
        """Record a single event."""
        event = GameEvent(
            game_id=game_id,
            event_type=event_type,
            round_number=round_number,
            trick_number=trick_number,
            player_id=player_id,
            data=data or {},
        )
        self._events.setdefault(game_id, []).append(event)
        return event

    def record_round_start(self, game: "Game") -> None:
        """Record a fresh deal."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.ROUND_STARTED,
            round_number=game.round_number,
            data={
                "leader": game.active_player,
                "decree": serialize_card(game.decree) if game.decree else None,
            },
        )

    def record_card_played(
        self, game: "Game", player_id: int, card: "Card", trick_number: int
    ) -> None:
        """Record a card being played."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.CARD_PLAYED,
            round_number=game.round_number,
            trick_number=trick_number,
            player_id=player_id,
            data={"card": serialize_card(card)},
        )

    def record_ability_resolved(
        self, game: "Game", pending: "PendingAbility", card: "Card"
    ) -> None:
        """Record a Fox exchange or Woodcutter discard."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.ABILITY_RESOLVED,
            round_number=game.round_number,
            trick_number=pending.trick_number,
            player_id=pending.player_id,
            data={"ability": pending.ability_type.value, "card": serialize_card(card)},
        )

    def record_trick_won(self, game: "Game", result: "TrickResult") -> None:
        """Record trick winner."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.TRICK_WON,
            round_number=game.round_number,
            trick_number=result.trick_number,
            player_id=result.winner_player_id,
            data={
                "winning_card": serialize_card(result.winning_card),
                "bonus_points": result.bonus,
                "next_leader": result.next_leader,
            },
        )

    def record_round_end(self, game: "Game", result: "RoundResult") -> None:
        """Record round completion with scores."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.ROUND_ENDED,
            round_number=result.round_number,
            data={
                "tricks_won": result.tricks_won,
                "bonuses": result.bonuses,
                "round_scores": result.round_scores,
                "totals": result.totals,
            },
        )

    def end_game(self, game: "Game") -> None:
        """Record the match result."""
        self.record_event(
            game_id=game.id,
            event_type=GameEventType.MATCH_ENDED,
            round_number=game.round_number,
            player_id=game.winner,
            data={"final_scores": [p.score for p in game.players], "winner": game.winner},
        )

    def get_events(self, game_id: str) -> list[GameEvent]:
        """Get the events recorded for a match, oldest first."""
        return list(self._events.get(game_id, []))

    def discard(self, game_id: str) -> None:
        """Drop a match's events."""
        self._events.pop(game_id, None)
