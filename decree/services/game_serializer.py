"""Game serialization for clients and resynchronization.

Handles conversion between Game objects and plain JSON-ready dictionaries.
Cards serialize as ``{"aspect": "A", "rank": 5}``.
"""

import logging
from typing import Any

from decree.models.ability import AbilityType, PendingAbility
from decree.models.card import Card
from decree.models.enums import ErrorCode, GamePhase
from decree.models.errors import PreconditionError
from decree.models.game import Game
from decree.models.player import Player
from decree.models.trick import PlayedCard, Trick

logger = logging.getLogger(__name__)


def serialize_card(card: Card) -> dict[str, Any]:
    """Serialize a Card to a dictionary."""
    return {"aspect": card.aspect.value, "rank": card.rank}


def deserialize_card(data: dict[str, Any]) -> Card:
    """Deserialize a Card from a dictionary."""
    return Card(data["aspect"], data["rank"])


def _optional_card(data: dict[str, Any] | None) -> Card | None:
    return deserialize_card(data) if data else None


def serialize_player(player: Player, hide_hand: bool = False) -> dict[str, Any]:
    """Serialize a Player to a dictionary.

    Args:
        player: Player to serialize
        hide_hand: Replace the hand with an empty list (hand_size is kept)

    """
    return {
        "id": player.id,
        "name": player.name,
        "is_bot": player.is_bot,
        "hand": [] if hide_hand else [serialize_card(c) for c in player.hand],
        "hand_size": len(player.hand),
        "tricks_won": player.tricks_won,
        "bonus": player.bonus,
        "round_score": player.round_score,
        "score": player.score,
    }


def deserialize_player(data: dict[str, Any]) -> Player:
    """Deserialize a Player from a dictionary."""
    return Player(
        id=data["id"],
        name=data["name"],
        is_bot=data.get("is_bot", False),
        hand=[deserialize_card(c) for c in data.get("hand", [])],
        tricks_won=data.get("tricks_won", 0),
        bonus=data.get("bonus", 0),
        round_score=data.get("round_score", 0),
        score=data.get("score", 0),
    )


def serialize_trick(trick: Trick) -> dict[str, Any]:
    """Serialize a Trick to a dictionary."""
    return {
        "number": trick.number,
        "played": [
            {"player_id": pc.player_id, "card": serialize_card(pc.card)} for pc in trick.played
        ],
        "winner_player_id": trick.winner_player_id,
    }


def deserialize_trick(data: dict[str, Any]) -> Trick:
    """Deserialize a Trick from a dictionary."""
    return Trick(
        number=data["number"],
        played=[
            PlayedCard(player_id=pc["player_id"], card=deserialize_card(pc["card"]))
            for pc in data.get("played", [])
        ],
        winner_player_id=data.get("winner_player_id"),
    )


def serialize_pending_ability(ability: PendingAbility) -> dict[str, Any]:
    """Serialize a PendingAbility to a dictionary."""
    return {
        "player_id": ability.player_id,
        "ability_type": ability.ability_type.value,
        "trick_number": ability.trick_number,
        "drawn_card": serialize_card(ability.drawn_card) if ability.drawn_card else None,
        "resolved": ability.resolved,
    }


def deserialize_pending_ability(data: dict[str, Any]) -> PendingAbility:
    """Deserialize a PendingAbility from a dictionary."""
    return PendingAbility(
        player_id=data["player_id"],
        ability_type=AbilityType(data["ability_type"]),
        trick_number=data["trick_number"],
        drawn_card=_optional_card(data.get("drawn_card")),
        resolved=data.get("resolved", False),
    )


def serialize_game(game: Game, hidden_player: int | None = None) -> dict[str, Any]:
    """Serialize a complete Game.

    Args:
        game: Game instance to serialize
        hidden_player: Player whose hand (and the draw pile) is withheld,
            for views sent to the other player

    Returns:
        Dictionary suitable for JSON transport

    """
    hide_pile = hidden_player is not None
    return {
        "id": game.id,
        "phase": game.phase.value,
        "win_threshold": game.win_threshold,
        "monarch_rule": game.monarch_rule,
        "round_number": game.round_number,
        "trick_number": game.trick_number,
        "dealer": game.dealer,
        "active_player": game.active_player,
        "decree": serialize_card(game.decree) if game.decree else None,
        "dominant_aspect": game.dominant_aspect.value if game.dominant_aspect else None,
        "draw_pile": [] if hide_pile else [serialize_card(c) for c in game.draw_pile],
        "draw_pile_size": len(game.draw_pile),
        "players": [serialize_player(p, hide_hand=p.id == hidden_player) for p in game.players],
        "trick": serialize_trick(game.trick),
        "tricks": [serialize_trick(t) for t in game.tricks],
        "pending_ability": (
            serialize_pending_ability(game.pending_ability) if game.pending_ability else None
        ),
        "winner": game.winner,
    }


def deserialize_game(data: dict[str, Any]) -> Game:
    """Deserialize a Game from a full (unhidden) serialization.

    Args:
        data: Output of ``serialize_game``

    Returns:
        Game instance with full state restored

    """
    pending = data.get("pending_ability")
    return Game(
        id=data["id"],
        players=[deserialize_player(p) for p in data["players"]],
        win_threshold=data["win_threshold"],
        monarch_rule=data.get("monarch_rule", False),
        phase=GamePhase(data["phase"]),
        round_number=data["round_number"],
        trick_number=data["trick_number"],
        trick=deserialize_trick(data["trick"]),
        tricks=[deserialize_trick(t) for t in data.get("tricks", [])],
        decree=_optional_card(data.get("decree")),
        draw_pile=[deserialize_card(c) for c in data.get("draw_pile", [])],
        active_player=data["active_player"],
        dealer=data.get("dealer", 1),
        pending_ability=deserialize_pending_ability(pending) if pending else None,
        winner=data.get("winner"),
    )


def snapshot_game(game: Game) -> dict[str, Any]:
    """Compact resync state: counters, scores, dominant aspect and the player to act."""
    return {
        "trick_number": game.trick_number,
        "round_number": game.round_number,
        "round_scores": [p.round_score for p in game.players],
        "scores": [p.score for p in game.players],
        "dominant_aspect": game.dominant_aspect.value if game.dominant_aspect else None,
        "active_player": game.active_player,
    }


def apply_snapshot(game: Game, data: dict[str, Any]) -> None:
    """Bring a game's counters and scores in line with a peer's snapshot.

    The dominant aspect follows the decree card, so it is checked rather
    than copied.

    Raises:
        PreconditionError: If the snapshot disagrees on the dominant aspect
            or is shaped for a different number of players

    """
    local_aspect = game.dominant_aspect.value if game.dominant_aspect else None
    if data.get("dominant_aspect") != local_aspect:
        msg = f"Snapshot dominant aspect {data.get('dominant_aspect')!r} != {local_aspect!r}"
        raise PreconditionError(ErrorCode.SNAPSHOT_MISMATCH, msg)
    if len(data["scores"]) != len(game.players) or len(data["round_scores"]) != len(game.players):
        raise PreconditionError(ErrorCode.SNAPSHOT_MISMATCH, "Snapshot player count mismatch")

    game.trick_number = data["trick_number"]
    game.trick.number = game.trick_number
    game.round_number = data["round_number"]
    game.active_player = data["active_player"]
    for player, round_score, score in zip(
        game.players, data["round_scores"], data["scores"], strict=True
    ):
        player.round_score = round_score
        player.score = score
    logger.debug("Applied snapshot to game %s: %s", game.id, data)
