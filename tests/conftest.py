"""Shared fixtures for the test suite."""

import random

import pytest

from decree.models.card import Card
from decree.models.enums import GamePhase
from decree.models.game import Game
from decree.models.trick import Trick


def _cards(codes: str) -> list[Card]:
    return [Card.parse(code) for code in codes.split()]


@pytest.fixture
def make_game():
    """Factory for a game mid-round with chosen hands.

    Hands, decree and draw pile are given as card codes, e.g. ``"A5 B3"``.
    """

    def _make(
        hand0: str,
        hand1: str,
        decree: str = "A8",
        draw_pile: str = "",
        leader: int = 0,
        monarch_rule: bool = False,
    ) -> Game:
        game = Game(id="test-game", monarch_rule=monarch_rule, rng=random.Random(0))
        game.round_number = 1
        game.dealer = 1 - leader
        game.players[0].hand = _cards(hand0)
        game.players[1].hand = _cards(hand1)
        game.decree = Card.parse(decree)
        game.draw_pile = _cards(draw_pile)
        game.trick_number = 1
        game.trick = Trick(number=1)
        game.active_player = leader
        game.phase = GamePhase.PLAYING
        return game

    return _make


@pytest.fixture
def started_game():
    """A game with a seeded first round dealt."""
    game = Game(id="seeded-game", rng=random.Random(42))
    game.start_round()
    return game
