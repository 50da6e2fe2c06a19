"""Game event model for the per-match event log.

Captures every significant step of a match so a client can replay it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class GameEventType(str, Enum):
    """Types of game events that can be recorded."""

    # Match lifecycle
    MATCH_STARTED = "MATCH_STARTED"
    MATCH_ENDED = "MATCH_ENDED"

    # Round events
    ROUND_STARTED = "ROUND_STARTED"
    ROUND_ENDED = "ROUND_ENDED"

    # Card play
    CARD_PLAYED = "CARD_PLAYED"
    ABILITY_RESOLVED = "ABILITY_RESOLVED"
    TRICK_WON = "TRICK_WON"


@dataclass
class GameEvent:
    """Represents a single recorded event."""

    game_id: str
    event_type: GameEventType
    timestamp: datetime = field(default_factory=_utc_now)
    round_number: int = 0
    trick_number: int | None = None
    player_id: int | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for transmission."""
        return {
            "game_id": self.game_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "round_number": self.round_number,
            "trick_number": self.trick_number,
            "player_id": self.player_id,
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        """Create from dictionary."""
        return cls(
            game_id=data["game_id"],
            event_type=GameEventType(data["event_type"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            round_number=data.get("round_number", 0),
            trick_number=data.get("trick_number"),
            player_id=data.get("player_id"),
            data=data.get("data", {}),
        )
