"""Tests for the human-versus-bot match service."""

import pytest

from decree.bots import BotDifficulty, RuleBasedBot
from decree.models.ability import AbilityType
from decree.models.deck import generate_deck
from decree.models.enums import ErrorCode, GamePhase
from decree.models.errors import IllegalMoveError, PreconditionError
from decree.models.game_event import GameEventType
from decree.services.match_service import BOT_PLAYER_ID, HUMAN_PLAYER_ID, MatchService

MAX_ACTIONS = 2000


def _take_turn(service, match):
    """Make the human's next move: resolve an ability or play the first legal card."""
    game = match.game
    pending = game.pending_ability
    if pending is not None and pending.ability_type == AbilityType.FOX:
        return service.choose_exchange_card(match.id, 0)
    if pending is not None:
        return service.choose_discard_card(match.id, 0)
    return service.play_card(match.id, service.legal_cards(match.id)[0])


@pytest.fixture
def service():
    """A service with a small cap and default rules."""
    return MatchService(max_matches=3, win_threshold=21, monarch_rule=False)


class TestCreateMatch:
    """Test starting matches."""

    def test_human_leads_first_round(self, service):
        """Player 0 leads round 1, so the new match waits on the human."""
        match = service.create_match(BotDifficulty.EASY, seed=1)
        game = match.game

        assert match.awaiting_human()
        assert game.phase == GamePhase.PLAYING
        assert game.round_number == 1
        assert game.active_player == HUMAN_PLAYER_ID
        assert all(len(p.hand) == 13 for p in game.players)
        assert game.players[BOT_PLAYER_ID].is_bot

    def test_difficulty_selects_bot(self, service):
        """The requested tier decides the bot."""
        match = service.create_match("hard", seed=1)
        assert isinstance(match.bot, RuleBasedBot)
        assert match.bot.difficulty == BotDifficulty.HARD
        assert match.game.players[BOT_PLAYER_ID].name == "Bot (hard)"

    def test_seed_reproduces_deal(self, service):
        """Equal seeds deal equal hands."""
        first = service.create_match(BotDifficulty.EASY, seed=7)
        second = service.create_match(BotDifficulty.EASY, seed=7)
        assert first.id != second.id
        assert first.game.players[0].hand == second.game.players[0].hand
        assert first.game.decree == second.game.decree

    def test_match_cap(self, service):
        """Creating past max_matches is refused."""
        for _ in range(3):
            service.create_match(seed=1)
        with pytest.raises(PreconditionError) as exc_info:
            service.create_match(seed=1)
        assert exc_info.value.code == ErrorCode.TOO_MANY_MATCHES

    def test_ended_matches_free_the_cap(self):
        """Finished matches no longer count toward max_matches."""
        service = MatchService(max_matches=1, win_threshold=5)
        first = service.create_match(BotDifficulty.EASY, seed=8)
        for _ in range(MAX_ACTIONS):
            if first.game.phase == GamePhase.ENDED:
                break
            _take_turn(service, first)
        assert first.game.phase == GamePhase.ENDED
        assert service.active_match_count() == 0

        second = service.create_match(BotDifficulty.EASY, seed=9)

        assert second.game.phase == GamePhase.PLAYING
        assert service.active_match_count() == 1
        assert len(service.list_matches()) == 2
        with pytest.raises(PreconditionError) as exc_info:
            service.create_match(seed=1)
        assert exc_info.value.code == ErrorCode.TOO_MANY_MATCHES

    def test_start_events(self, service):
        """A new match records its start and the first deal."""
        match = service.create_match(seed=1)
        types = [e.event_type for e in service.events(match.id)]
        assert types == [GameEventType.MATCH_STARTED, GameEventType.ROUND_STARTED]


class TestLookup:
    """Test finding, listing and deleting matches."""

    def test_unknown_match(self, service):
        """Unknown ids raise MATCH_NOT_FOUND."""
        with pytest.raises(PreconditionError) as exc_info:
            service.get_match("nope")
        assert exc_info.value.code == ErrorCode.MATCH_NOT_FOUND

    def test_list_and_delete(self, service):
        """Deleted matches are gone along with their events."""
        match = service.create_match(seed=1)
        assert service.list_matches() == [match]

        service.delete_match(match.id)

        assert service.list_matches() == []
        assert service.recorder.get_events(match.id) == []
        with pytest.raises(PreconditionError):
            service.delete_match(match.id)


class TestPlay:
    """Test human moves and the bot's replies."""

    def test_play_runs_bot_reply(self, service):
        """After the human leads, the bot answers and the trick is resolved."""
        match = service.create_match(BotDifficulty.MEDIUM, seed=3)
        card = service.legal_cards(match.id)[0]

        _take_turn(service, match)
        # Resolve any ability the human's lead triggered
        while match.game.trick_number == 1 and match.awaiting_human():
            _take_turn(service, match)

        types = [e.event_type for e in service.events(match.id)]
        assert GameEventType.CARD_PLAYED in types
        assert GameEventType.TRICK_WON in types
        assert match.game.trick_number == 2
        assert match.game.tricks[0].played[0].card == card
        assert match.awaiting_human()

    def test_card_not_in_hand_rejected(self, service):
        """A card the human does not hold is refused and nothing changes."""
        match = service.create_match(seed=2)
        hand = match.game.players[HUMAN_PLAYER_ID].hand
        missing = next(c for c in generate_deck() if c not in hand)
        events_before = len(service.events(match.id))

        with pytest.raises(PreconditionError) as exc_info:
            service.play_card(match.id, missing)

        assert exc_info.value.code == ErrorCode.CARD_NOT_IN_HAND
        assert len(service.events(match.id)) == events_before
        assert match.game.trick.is_empty()

    def test_choice_without_pending_ability(self, service):
        """Exchange and discard are refused when nothing is pending."""
        match = service.create_match(seed=2)
        with pytest.raises(IllegalMoveError) as exc_info:
            service.choose_exchange_card(match.id, 0)
        assert exc_info.value.code == ErrorCode.NO_PENDING_ABILITY
        with pytest.raises(IllegalMoveError):
            service.choose_discard_card(match.id, 0)

    def test_legal_cards_empty_off_turn(self, service):
        """No legal cards are offered when the human is not to play."""
        match = service.create_match(seed=2)
        match.game.active_player = BOT_PLAYER_ID
        assert service.legal_cards(match.id) == []

    @pytest.mark.parametrize("difficulty", list(BotDifficulty))
    def test_full_match(self, service, difficulty):
        """Playing first legal cards reaches the end of the match."""
        match = service.create_match(difficulty, seed=11)
        for _ in range(MAX_ACTIONS):
            if match.game.phase == GamePhase.ENDED:
                break
            _take_turn(service, match)

        game = match.game
        assert game.phase == GamePhase.ENDED
        assert game.winner in (HUMAN_PLAYER_ID, BOT_PLAYER_ID)
        assert game.players[game.winner].score >= 21
        assert not match.awaiting_human()

        events = service.events(match.id)
        assert events[-1].event_type == GameEventType.MATCH_ENDED
        assert events[-1].player_id == game.winner
        round_ends = [e for e in events if e.event_type == GameEventType.ROUND_ENDED]
        assert len(round_ends) == game.round_number
        for event in round_ends:
            assert sum(event.data["tricks_won"].values()) == 13
