"""Tests for game flow, turn order and round progression.

These tests verify:
- Correct turn order during tricks
- Rejected moves leave the state untouched
- Trick winners, bonuses and the Swan redirect
- Round scoring and match end
"""

import random

import pytest

from decree.constants import HAND_SIZE
from decree.models.card import Card
from decree.models.deck import generate_deck
from decree.models.enums import Aspect, ErrorCode, GamePhase
from decree.models.errors import IllegalMoveError, PreconditionError
from decree.models.game import Game
from decree.models.player import Player

# =============================================================================
# SETUP TESTS
# =============================================================================


class TestSetup:
    """Test match creation and dealing."""

    def test_new_game_is_pending(self):
        """A fresh game waits for its first deal."""
        game = Game(id="g")
        assert game.phase == GamePhase.PENDING
        assert game.dominant_aspect is None
        assert game.tricks_remaining == 13

    def test_players_must_be_seated_0_and_1(self):
        """Seats other than 0 and 1 are rejected."""
        with pytest.raises(PreconditionError) as exc_info:
            Game(id="g", players=[Player(id=0, name="solo")])
        assert exc_info.value.code == ErrorCode.PLAYER_COUNT

    def test_start_round_with_deck(self):
        """Dealing a given deck follows the deal layout; player 0 leads round 1."""
        deck = generate_deck()
        game = Game(id="g")
        game.start_round(deck)

        assert game.round_number == 1
        assert game.phase == GamePhase.PLAYING
        assert game.players[0].hand == deck[0:26:2]
        assert game.players[1].hand == deck[1:26:2]
        assert game.decree == deck[26]
        assert game.dominant_aspect == deck[26].aspect
        assert game.draw_pile == deck[27:]
        assert game.trick_number == 1
        assert game.active_player == 0

    def test_start_round_shuffles_with_injected_rng(self):
        """Equal seeds give equal deals."""
        first = Game(id="a", rng=random.Random(9))
        second = Game(id="b", rng=random.Random(9))
        first.start_round()
        second.start_round()
        assert first.players[0].hand == second.players[0].hand
        assert first.decree == second.decree

    def test_bad_deck_leaves_state_unchanged(self):
        """A deck that cannot be dealt aborts before any mutation."""
        game = Game(id="g")
        with pytest.raises(PreconditionError) as exc_info:
            game.start_round(generate_deck()[:30])
        assert exc_info.value.code == ErrorCode.DECK_SIZE
        assert game.round_number == 0
        assert game.phase == GamePhase.PENDING

    def test_get_player_unknown(self):
        """Unknown player ids are rejected."""
        game = Game(id="g")
        with pytest.raises(PreconditionError) as exc_info:
            game.get_player(2)
        assert exc_info.value.code == ErrorCode.PLAYER_NOT_FOUND

    def test_opponent_of(self):
        """Each player's opponent is the other seat."""
        game = Game(id="g")
        assert game.opponent_of(0) == 1
        assert game.opponent_of(1) == 0


# =============================================================================
# TURN ORDER TESTS
# =============================================================================


class TestTurnOrder:
    """Test turn order mechanics."""

    def test_turn_passes_after_lead(self, make_game):
        """After the lead the opponent is active."""
        game = make_game("B4 A2", "B10 C3")
        game.play_card(Card("B", 4), 0)
        assert game.active_player == 1
        assert game.players[0].hand == [Card("A", 2)]
        assert game.trick.lead_aspect == Aspect.B

    def test_wrong_player_rejected(self, make_game):
        """The non-active player's card is rejected without changes."""
        game = make_game("B4 A2", "B10 C3")
        with pytest.raises(IllegalMoveError) as exc_info:
            game.play_card(Card("B", 10), 1)
        assert exc_info.value.code == ErrorCode.NOT_YOUR_TURN
        assert game.trick.is_empty()
        assert len(game.players[1].hand) == 2

    def test_must_follow_lead(self, make_game):
        """Off-aspect play while holding the lead aspect is rejected."""
        game = make_game("B4 A2", "B10 C3")
        game.play_card(Card("B", 4), 0)
        with pytest.raises(IllegalMoveError) as exc_info:
            game.play_card(Card("C", 3), 1)
        assert exc_info.value.code == ErrorCode.MUST_FOLLOW_LEAD
        assert game.players[1].hand == [Card("B", 10), Card("C", 3)]
        assert len(game.trick.played) == 1

    def test_card_not_in_hand(self, make_game):
        """Playing a card the player does not hold is a precondition failure."""
        game = make_game("B4 A2", "B10 C3")
        with pytest.raises(PreconditionError) as exc_info:
            game.play_card(Card("C", 9), 0)
        assert exc_info.value.code == ErrorCode.CARD_NOT_IN_HAND

    def test_no_third_card(self, make_game):
        """Once both have played, further plays are rejected."""
        game = make_game("B4 A2", "B10 C3")
        game.play_card(Card("B", 4), 0)
        game.play_card(Card("B", 10), 1)
        assert game.is_trick_ready()
        with pytest.raises(IllegalMoveError) as exc_info:
            game.play_card(Card("C", 3), 1)
        assert exc_info.value.code == ErrorCode.ALREADY_PLAYED

    def test_play_outside_play_phase(self):
        """Nothing can be played before the deal."""
        game = Game(id="g")
        with pytest.raises(IllegalMoveError) as exc_info:
            game.play_card(Card("A", 1), 0)
        assert exc_info.value.code == ErrorCode.NOT_IN_PLAY_PHASE


# =============================================================================
# TRICK RESOLUTION TESTS
# =============================================================================


class TestCompleteTrick:
    """Test resolving tricks inside a game."""

    def test_winner_credited_and_leads(self, make_game):
        """The winner gains a trick and leads the next one."""
        game = make_game("B4 A2", "B10 C3")
        game.play_card(Card("B", 4), 0)
        game.play_card(Card("B", 10), 1)
        result = game.complete_trick()

        assert result.winner_player_id == 1
        assert result.winning_card == Card("B", 10)
        assert result.next_leader == 1
        assert game.players[1].tricks_won == 1
        assert game.trick_number == 2
        assert game.trick.is_empty()
        assert game.active_player == 1
        assert len(game.tricks) == 1

    def test_incomplete_trick_rejected(self, make_game):
        """Resolving a half-played trick fails."""
        game = make_game("B4 A2", "B10 C3")
        game.play_card(Card("B", 4), 0)
        with pytest.raises(PreconditionError) as exc_info:
            game.complete_trick()
        assert exc_info.value.code == ErrorCode.TRICK_INCOMPLETE

    def test_trump_wins(self, make_game):
        """A trump beats the lead aspect."""
        game = make_game("B5 C2", "A4 C6", decree="A6")
        game.play_card(Card("B", 5), 0)
        game.play_card(Card("A", 4), 1)
        result = game.complete_trick()
        assert result.winner_player_id == 1

    def test_treasure_bonus_to_winner(self, make_game):
        """Each 7 in the trick gives the winner a point."""
        game = make_game("B7 C2", "A7 C4", decree="A2")
        game.play_card(Card("B", 7), 0)
        game.play_card(Card("A", 7), 1)
        result = game.complete_trick()
        assert result.winner_player_id == 1
        assert result.bonus == 2
        assert game.players[1].bonus == 2
        assert game.players[0].bonus == 0

    def test_swan_redirects_lead(self, make_game):
        """Losing with a 1 takes the next lead."""
        game = make_game("B1 C2", "B10 C4")
        game.play_card(Card("B", 1), 0)
        game.play_card(Card("B", 10), 1)
        result = game.complete_trick()
        assert result.winner_player_id == 1
        assert result.next_leader == 0
        assert game.active_player == 0

    def test_last_trick_ends_round(self, make_game):
        """Resolving trick 13 completes the round."""
        game = make_game("B4", "B10")
        game.trick_number = 13
        game.trick.number = 13
        assert game.tricks_remaining == 1
        game.play_card(Card("B", 4), 0)
        game.play_card(Card("B", 10), 1)
        game.complete_trick()

        assert game.is_round_complete()
        assert game.trick_number == 14
        assert game.tricks_remaining == 0
        assert game.phase == GamePhase.ROUND_OVER
        with pytest.raises(IllegalMoveError):
            game.play_card(Card("B", 4), 0)


# =============================================================================
# ROUND END TESTS
# =============================================================================


def _finish_round(game: Game, tricks: tuple[int, int], scores: tuple[int, int] = (0, 0)) -> None:
    """Put a game at the end of a round with given trick counts and totals."""
    for player, won, score in zip(game.players, tricks, scores, strict=True):
        player.hand = []
        player.tricks_won = won
        player.score = score
    game.trick_number = 14
    game.phase = GamePhase.ROUND_OVER


class TestRoundEnd:
    """Test scoring a round and moving on."""

    def test_round_not_complete(self, started_game):
        """Scoring mid-round is rejected."""
        with pytest.raises(PreconditionError) as exc_info:
            started_game.apply_round_end()
        assert exc_info.value.code == ErrorCode.ROUND_NOT_COMPLETE

    def test_scores_and_next_round(self, started_game):
        """Round scores add table points and bonus, then the next round is dealt."""
        game = started_game
        _finish_round(game, (3, 10))
        game.players[0].bonus = 1

        result = game.apply_round_end()

        assert result.round_number == 1
        assert result.round_scores == {0: 7, 1: 0}
        assert result.totals == {0: 7, 1: 0}
        assert result.winner is None
        assert game.players[0].score == 7
        assert game.players[0].round_score == 7

        # Next round dealt, counters reset, the other player leads
        assert game.round_number == 2
        assert game.phase == GamePhase.PLAYING
        assert game.trick_number == 1
        assert all(len(p.hand) == HAND_SIZE for p in game.players)
        assert all(p.tricks_won == 0 and p.bonus == 0 for p in game.players)
        assert game.active_player == 1

    def test_threshold_ends_match(self, started_game):
        """Reaching 21 ends the match."""
        game = started_game
        _finish_round(game, (2, 11), scores=(18, 4))

        result = game.apply_round_end()

        assert result.winner == 0
        assert game.winner == 0
        assert game.phase == GamePhase.ENDED
        assert game.players[0].score == 24
        assert game.is_match_over()
        with pytest.raises(IllegalMoveError) as exc_info:
            game.start_round()
        assert exc_info.value.code == ErrorCode.MATCH_ENDED

    def test_player_0_wins_when_both_cross(self, started_game):
        """If both reach the threshold in the same round, player 0 wins even with the lower total."""
        game = started_game
        _finish_round(game, (3, 9), scores=(15, 18))
        result = game.apply_round_end()
        assert result.totals == {0: 21, 1: 24}
        assert game.winner == 0

    def test_only_player_1_crosses(self, started_game):
        """Player 1 wins when only they reach the threshold."""
        game = started_game
        _finish_round(game, (3, 9), scores=(10, 18))
        game.apply_round_end()
        assert game.winner == 1

    def test_exact_tie_goes_to_player_0(self, started_game):
        """An exact tie over the threshold goes to player 0."""
        game = started_game
        _finish_round(game, (3, 9), scores=(15, 15))
        game.apply_round_end()
        assert game.players[0].score == game.players[1].score == 21
        assert game.winner == 0

    def test_check_match_winner_below_threshold(self):
        """Nobody wins below the threshold."""
        game = Game(id="g")
        game.players[0].score = 20
        assert game.check_match_winner() is None

    def test_custom_threshold(self, started_game):
        """The threshold is configurable per game."""
        game = started_game
        game.win_threshold = 5
        _finish_round(game, (3, 10))
        game.apply_round_end()
        assert game.winner == 0
