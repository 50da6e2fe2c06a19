"""Game model for managing match state."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from decree.constants import NUM_PLAYERS, TRICKS_PER_ROUND, WIN_THRESHOLD
from decree.models.ability import AbilityType, PendingAbility
from decree.models.card import Card
from decree.models.deck import deal, generate_deck, shuffle
from decree.models.enums import Aspect, ErrorCode, GamePhase
from decree.models.errors import IllegalMoveError, PreconditionError
from decree.models.player import Player
from decree.models.scoring import RoundResult, round_score, treasure_bonus
from decree.models.trick import Trick, get_legal_cards, is_legal_play

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrickResult:
    """Outcome of a resolved trick."""

    trick_number: int
    winner_player_id: int
    winning_card: Card
    bonus: int
    next_leader: int


def _default_players() -> list[Player]:
    return [Player(id=0, name="Player 1"), Player(id=1, name="Player 2")]


@dataclass
class Game:
    """Represents a complete two-player match.

    A match is a sequence of 13-trick rounds that ends once a player's
    cumulative score reaches ``win_threshold``.

    Attributes:
        id: Unique match identifier
        players: The two players, indexed by their id
        win_threshold: Cumulative score that ends the match
        monarch_rule: Whether the rank-11 follow restriction is enforced
        rng: Random source used for dealing new rounds
        phase: Current phase
        round_number: Current round (1-indexed)
        trick_number: Current trick (1-13, >13 once the round is complete)
        trick: Trick in progress
        tricks: Tricks resolved this round
        decree: Face-up decree card; its aspect is dominant
        draw_pile: Undealt cards, top first
        active_player: Player whose action is expected
        dealer: Dealer of the current round; the other player leads first
        pending_ability: Fox or Woodcutter choice awaiting resolution
        winner: Match winner once the match has ended

    """

    id: str
    players: list[Player] = field(default_factory=_default_players)
    win_threshold: int = WIN_THRESHOLD
    monarch_rule: bool = False
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    phase: GamePhase = GamePhase.PENDING
    round_number: int = 0
    trick_number: int = 0
    trick: Trick = field(default_factory=lambda: Trick(number=0))
    tricks: list[Trick] = field(default_factory=list)
    decree: Card | None = None
    draw_pile: list[Card] = field(default_factory=list)
    active_player: int = 0
    dealer: int = 1
    pending_ability: PendingAbility | None = None
    winner: int | None = None

    def __post_init__(self) -> None:
        """Check the seating: exactly two players with ids 0 and 1."""
        if [p.id for p in self.players] != list(range(NUM_PLAYERS)):
            msg = f"A match needs players with ids 0..{NUM_PLAYERS - 1} in order"
            raise PreconditionError(ErrorCode.PLAYER_COUNT, msg)

    # Queries

    @property
    def dominant_aspect(self) -> Aspect | None:
        """Trump aspect, taken from the current decree card."""
        return self.decree.aspect if self.decree else None

    @property
    def tricks_remaining(self) -> int:
        """Tricks not yet resolved this round, including the one in progress."""
        if self.trick_number == 0:
            return TRICKS_PER_ROUND
        return max(0, TRICKS_PER_ROUND - self.trick_number + 1)

    def get_player(self, player_id: int) -> Player:
        """Get a player by ID."""
        if player_id not in range(NUM_PLAYERS):
            raise PreconditionError(ErrorCode.PLAYER_NOT_FOUND, f"No player {player_id!r}")
        return self.players[player_id]

    def opponent_of(self, player_id: int) -> int:
        """ID of the other player."""
        self.get_player(player_id)
        return 1 - player_id

    def get_legal_cards(self, player_id: int) -> list[Card]:
        """Cards the player may legally play into the current trick."""
        player = self.get_player(player_id)
        return get_legal_cards(player.hand, self.trick, monarch_rule=self.monarch_rule)

    def is_trick_ready(self) -> bool:
        """Check if the current trick is full and can be resolved."""
        return self.phase == GamePhase.PLAYING and self.trick.is_complete()

    def is_round_complete(self) -> bool:
        """Check if all 13 tricks of the round have been resolved."""
        return self.trick_number > TRICKS_PER_ROUND

    def is_match_over(self) -> bool:
        """Check if the match has a winner."""
        return self.phase == GamePhase.ENDED

    def check_match_winner(self) -> int | None:
        """Get the player who reached the win threshold, if any.

        Players are checked in seat order, so if both reach it in the same
        round player 0 wins whatever the totals.
        """
        return next((p.id for p in self.players if p.score >= self.win_threshold), None)

    # Round lifecycle

    def start_round(self, deck: list[Card] | None = None) -> None:
        """Deal a new round.

        Args:
            deck: Deck to deal from; a freshly shuffled one is used if omitted

        Raises:
            IllegalMoveError: If the match has already ended
            PreconditionError: If the deck cannot be dealt (state is unchanged)

        """
        if self.phase == GamePhase.ENDED:
            raise IllegalMoveError(ErrorCode.MATCH_ENDED, "The match is over")

        cards = deck if deck is not None else shuffle(generate_deck(), self.rng)
        dealt = deal(cards)

        self.round_number += 1
        self.dealer = self.round_number % NUM_PLAYERS
        for player, hand in zip(self.players, (dealt.hand1, dealt.hand2), strict=True):
            player.reset_round()
            player.hand = list(hand)
        self.decree = dealt.decree
        self.draw_pile = list(dealt.draw_pile)
        self.tricks = []
        self.trick_number = 1
        self.trick = Trick(number=1)
        self.pending_ability = None
        self.active_player = self.opponent_of(self.dealer)
        self.phase = GamePhase.PLAYING

        logger.info(
            "Round %d dealt in game %s: decree %s, player %d leads",
            self.round_number,
            self.id,
            self.decree,
            self.active_player,
        )

    def apply_round_end(self) -> RoundResult:
        """Score the completed round and move on.

        Adds each player's table score plus treasure bonus to their total,
        then either ends the match or deals the next round.

        Raises:
            PreconditionError: If the round still has tricks to play

        """
        if not self.is_round_complete():
            msg = f"Round {self.round_number} is on trick {self.trick_number}"
            raise PreconditionError(ErrorCode.ROUND_NOT_COMPLETE, msg)

        result = RoundResult(round_number=self.round_number)
        for player in self.players:
            player.round_score = round_score(player.tricks_won) + player.bonus
            player.score += player.round_score
            result.tricks_won[player.id] = player.tricks_won
            result.bonuses[player.id] = player.bonus
            result.round_scores[player.id] = player.round_score
            result.totals[player.id] = player.score

        self.winner = self.check_match_winner()
        result.winner = self.winner

        logger.info(
            "Round %d complete in game %s: tricks %s, scores %s, totals %s",
            self.round_number,
            self.id,
            result.tricks_won,
            result.round_scores,
            result.totals,
        )

        if self.winner is None:
            self.start_round()
        else:
            for player in self.players:
                player.reset_round()
            self.trick_number = 0
            self.trick = Trick(number=0)
            self.phase = GamePhase.ENDED
            logger.info("Game %s ended. Winner: player %d", self.id, self.winner)

        return result

    # Trick flow

    def play_card(self, card: Card, player_id: int) -> None:
        """Play a card from a player's hand into the current trick.

        Nothing is mutated unless every check passes.

        Raises:
            IllegalMoveError: Wrong phase, not the player's turn, or the card
                does not follow the lead aspect
            PreconditionError: The card is not in the player's hand

        """
        self._require_playing()
        if player_id != self.active_player:
            raise IllegalMoveError(ErrorCode.NOT_YOUR_TURN, f"Player {self.active_player} to act")
        if self.trick.has_player_played(player_id) or self.trick.is_complete():
            raise IllegalMoveError(ErrorCode.ALREADY_PLAYED)

        player = self.get_player(player_id)
        if not player.has_card(card):
            raise PreconditionError(ErrorCode.CARD_NOT_IN_HAND, f"{card} is not in hand")
        if not is_legal_play(card, player.hand, self.trick, monarch_rule=self.monarch_rule):
            msg = f"Must follow lead aspect {self.trick.lead_aspect.value}"
            raise IllegalMoveError(ErrorCode.MUST_FOLLOW_LEAD, msg)

        player.remove_card(card)
        self.trick.add_card(player_id, card)
        logger.debug("Player %d played %s in game %s", player_id, card, self.id)

        pending = self._trigger_on_play(player, card)
        if pending:
            self.pending_ability = pending
            self.phase = GamePhase.ABILITY
            logger.debug("Ability %s pending for player %d", pending.ability_type.value, player_id)
            return

        self._finish_play(player_id)

    def complete_trick(self) -> TrickResult:
        """Resolve the full trick, credit the winner and set up the next trick.

        Raises:
            IllegalMoveError: An ability choice is still outstanding
            PreconditionError: Fewer than two cards have been played

        """
        if self.pending_ability is not None:
            raise IllegalMoveError(ErrorCode.ABILITY_PENDING)
        if not self.trick.is_complete():
            msg = f"Trick {self.trick.number} has {len(self.trick.played)} card(s)"
            raise PreconditionError(ErrorCode.TRICK_INCOMPLETE, msg)

        winning = self.trick.determine_winner(self.dominant_aspect)
        winner = self.get_player(winning.player_id)
        bonus = treasure_bonus(self.trick.cards())
        winner.tricks_won += 1
        winner.bonus += bonus
        next_leader = self.trick.next_leader()

        result = TrickResult(
            trick_number=self.trick.number,
            winner_player_id=winner.id,
            winning_card=winning.card,
            bonus=bonus,
            next_leader=next_leader,
        )
        logger.info(
            "Trick %d in game %s: winner=%d card=%s bonus=%d next_leader=%d",
            result.trick_number,
            self.id,
            result.winner_player_id,
            result.winning_card,
            result.bonus,
            result.next_leader,
        )

        self.tricks.append(self.trick)
        self.clear_trick()
        self.active_player = next_leader
        if self.is_round_complete():
            self.phase = GamePhase.ROUND_OVER
        return result

    def clear_trick(self) -> None:
        """Empty the trick and advance the trick counter."""
        self.trick_number += 1
        self.trick = Trick(number=self.trick_number)

    # Ability choices

    def choose_exchange_card(self, player_id: int, index: int) -> Card:
        """Resolve the Fox: swap the hand card at ``index`` with the decree card.

        Returns:
            The card taken from the hand, now the decree card

        """
        pending = self._require_pending(player_id, AbilityType.FOX)
        player = self.get_player(player_id)
        self._check_choice(player, index)

        given = player.hand[index]
        player.hand[index] = self.decree
        self.decree = given
        logger.debug("Player %d exchanged %s for the decree in game %s", player_id, given, self.id)

        self._resolve_pending(pending)
        return given

    def choose_discard_card(self, player_id: int, index: int) -> Card:
        """Resolve the Woodcutter: discard the hand card at ``index`` to the bottom of the draw pile.

        Returns:
            The discarded card

        """
        pending = self._require_pending(player_id, AbilityType.WOODCUTTER)
        player = self.get_player(player_id)
        self._check_choice(player, index)

        discarded = player.hand.pop(index)
        self.draw_pile.append(discarded)
        logger.debug("Player %d discarded %s in game %s", player_id, discarded, self.id)

        self._resolve_pending(pending)
        return discarded

    # Internals

    def _require_playing(self) -> None:
        if self.phase == GamePhase.ABILITY:
            raise IllegalMoveError(ErrorCode.ABILITY_PENDING)
        if self.phase != GamePhase.PLAYING:
            raise IllegalMoveError(ErrorCode.NOT_IN_PLAY_PHASE, f"Phase is {self.phase.value}")

    def _finish_play(self, player_id: int) -> None:
        if not self.trick.is_complete():
            self.active_player = self.opponent_of(player_id)

    def _trigger_on_play(self, player: Player, card: Card) -> PendingAbility | None:
        handlers: dict[AbilityType, Callable[[Player], PendingAbility | None]] = {
            AbilityType.FOX: self._start_fox,
            AbilityType.WOODCUTTER: self._start_woodcutter,
        }
        handler = handlers.get(card.ability)
        return handler(player) if handler else None

    def _start_fox(self, player: Player) -> PendingAbility | None:
        if not player.hand or self.decree is None:
            return None
        return PendingAbility(player.id, AbilityType.FOX, self.trick_number)

    def _start_woodcutter(self, player: Player) -> PendingAbility | None:
        if not self.draw_pile:
            return None
        drawn = self.draw_pile.pop(0)
        player.add_card(drawn)
        return PendingAbility(player.id, AbilityType.WOODCUTTER, self.trick_number, drawn_card=drawn)

    def _require_pending(self, player_id: int, ability_type: AbilityType) -> PendingAbility:
        pending = self.pending_ability
        if pending is None or pending.player_id != player_id or pending.ability_type != ability_type:
            msg = f"No pending {ability_type.value} choice for player {player_id}"
            raise IllegalMoveError(ErrorCode.NO_PENDING_ABILITY, msg)
        return pending

    def _check_choice(self, player: Player, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(player.hand):
            msg = f"Choice must index the hand (0-{len(player.hand) - 1}), got {index!r}"
            raise IllegalMoveError(ErrorCode.INVALID_CHOICE, msg)

    def _resolve_pending(self, pending: PendingAbility) -> None:
        pending.resolved = True
        self.pending_ability = None
        self.phase = GamePhase.PLAYING
        self._finish_play(pending.player_id)

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"Game {self.id}: Round {self.round_number}, Trick {self.trick_number}, "
            f"State: {self.phase.value}"
        )
