"""Session service running human-versus-bot matches.

The human is always player 0 and the bot player 1. After every human
action the service resolves full tricks, scores finished rounds and lets the
bot act until the human is asked for something again or the match ends.
"""

import logging
import random
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from decree.bots import BaseBot, BotDifficulty, create_bot
from decree.config import settings
from decree.models.card import Card
from decree.models.enums import ErrorCode, GamePhase
from decree.models.errors import GameError, PreconditionError
from decree.models.game import Game
from decree.models.game_event import GameEvent
from decree.models.player import Player
from decree.services.event_recorder import EventRecorder

logger = logging.getLogger(__name__)

HUMAN_PLAYER_ID = 0
BOT_PLAYER_ID = 1


@dataclass
class Match:
    """A game together with the bot playing in it."""

    game: Game
    bot: BaseBot
    human_id: int = HUMAN_PLAYER_ID

    @property
    def id(self) -> str:
        """Match identifier (same as the game's)."""
        return self.game.id

    def awaiting_human(self) -> bool:
        """Check if the next action belongs to the human."""
        game = self.game
        if game.phase == GamePhase.ABILITY and game.pending_ability:
            return game.pending_ability.player_id == self.human_id
        return game.phase == GamePhase.PLAYING and game.active_player == self.human_id


class MatchService:
    """Holds the matches of one process in memory."""

    def __init__(
        self,
        max_matches: int | None = None,
        win_threshold: int | None = None,
        monarch_rule: bool | None = None,
        recorder: EventRecorder | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            max_matches: Cap on matches held at once (settings default)
            win_threshold: Score that ends a match (settings default)
            monarch_rule: Enforce the rank-11 follow restriction (settings default)
            recorder: Event recorder; a private one is created if omitted

        """
        self.max_matches = max_matches if max_matches is not None else settings.max_matches
        self.win_threshold = win_threshold if win_threshold is not None else settings.win_threshold
        self.monarch_rule = monarch_rule if monarch_rule is not None else settings.monarch_rule
        self.recorder = recorder or EventRecorder()
        self._matches: dict[str, Match] = {}

    def create_match(
        self,
        difficulty: BotDifficulty | str | None = None,
        seed: int | None = None,
        player_name: str = "Player",
    ) -> Match:
        """Start a new match against a bot.

        Args:
            difficulty: Bot tier (settings default)
            seed: Seed for dealing and bot decisions, for reproducible matches
            player_name: Display name of the human player

        Raises:
            PreconditionError: If max_matches matches are still in progress

        """
        if self.active_match_count() >= self.max_matches:
            msg = f"Limit of {self.max_matches} active matches reached"
            raise PreconditionError(ErrorCode.TOO_MANY_MATCHES, msg)

        difficulty = BotDifficulty(difficulty or settings.default_bot_difficulty)
        rng = random.Random(seed)  # noqa: S311
        players = [
            Player(id=HUMAN_PLAYER_ID, name=player_name),
            Player(id=BOT_PLAYER_ID, name=f"Bot ({difficulty.value})", is_bot=True),
        ]
        game = Game(
            id=str(uuid.uuid4()),
            players=players,
            win_threshold=self.win_threshold,
            monarch_rule=self.monarch_rule,
            rng=rng,
        )
        bot = create_bot(BOT_PLAYER_ID, difficulty, random.Random(rng.getrandbits(64)))  # noqa: S311
        match = Match(game=game, bot=bot)
        self._matches[game.id] = match

        self.recorder.start_game(game)
        game.start_round()
        self.recorder.record_round_start(game)
        logger.info("Created match %s against %s", game.id, bot)

        self._advance(match)
        return match

    def get_match(self, match_id: str) -> Match:
        """Get a match by ID.

        Raises:
            PreconditionError: If no such match exists (MATCH_NOT_FOUND)

        """
        match = self._matches.get(match_id)
        if match is None:
            raise PreconditionError(ErrorCode.MATCH_NOT_FOUND, f"Match {match_id} not found")
        return match

    def delete_match(self, match_id: str) -> None:
        """Forget a match and its events."""
        self.get_match(match_id)
        del self._matches[match_id]
        self.recorder.discard(match_id)
        logger.info("Deleted match %s", match_id)

    def list_matches(self) -> list[Match]:
        """All matches currently held."""
        return list(self._matches.values())

    def active_match_count(self) -> int:
        """Matches that have not ended; only these count toward max_matches."""
        return sum(1 for m in self._matches.values() if m.game.phase != GamePhase.ENDED)

    def legal_cards(self, match_id: str) -> list[Card]:
        """Cards the human may play now; empty when it is not their turn to play."""
        match = self.get_match(match_id)
        game = match.game
        if game.phase != GamePhase.PLAYING or game.active_player != match.human_id:
            return []
        return game.get_legal_cards(match.human_id)

    def events(self, match_id: str) -> list[GameEvent]:
        """Events recorded for a match, oldest first."""
        self.get_match(match_id)
        return self.recorder.get_events(match_id)

    def play_card(self, match_id: str, card: Card) -> Match:
        """Play a card for the human, then run the match forward."""
        match = self.get_match(match_id)
        game = match.game
        trick_number = game.trick_number
        try:
            game.play_card(card, match.human_id)
        except GameError as e:
            logger.warning("Rejected play of %s in match %s: %s", card, match_id, e.code.value)
            raise

        self.recorder.record_card_played(game, match.human_id, card, trick_number)
        self._advance(match)
        return match

    def choose_exchange_card(self, match_id: str, index: int) -> Match:
        """Resolve the human's pending Fox exchange."""
        match = self.get_match(match_id)
        return self._resolve_choice(match, index, match.game.choose_exchange_card)

    def choose_discard_card(self, match_id: str, index: int) -> Match:
        """Resolve the human's pending Woodcutter discard."""
        match = self.get_match(match_id)
        return self._resolve_choice(match, index, match.game.choose_discard_card)

    def _resolve_choice(
        self, match: Match, index: int, choose: Callable[[int, int], Card]
    ) -> Match:
        game = match.game
        pending = game.pending_ability
        try:
            card = choose(match.human_id, index)
        except GameError as e:
            logger.warning("Rejected choice %r in match %s: %s", index, match.id, e.code.value)
            raise

        self.recorder.record_ability_resolved(game, pending, card)
        self._advance(match)
        return match

    def _advance(self, match: Match) -> None:
        """Run automatic steps and bot turns until the human must act."""
        game = match.game
        while game.phase != GamePhase.ENDED:
            if game.is_trick_ready():
                result = game.complete_trick()
                self.recorder.record_trick_won(game, result)
                continue

            if game.phase == GamePhase.ROUND_OVER:
                round_result = game.apply_round_end()
                self.recorder.record_round_end(game, round_result)
                if game.phase == GamePhase.ENDED:
                    self.recorder.end_game(game)
                    logger.info("Match %s won by player %d", game.id, game.winner)
                else:
                    self.recorder.record_round_start(game)
                continue

            if match.awaiting_human():
                return

            self._bot_turn(match)

    def _bot_turn(self, match: Match) -> None:
        game = match.game
        pending = game.pending_ability
        trick_number = game.trick_number
        card = match.bot.act(game)
        if pending is not None:
            self.recorder.record_ability_resolved(game, pending, card)
        else:
            self.recorder.record_card_played(game, match.bot.player_id, card, trick_number)
