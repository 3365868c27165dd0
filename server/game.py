"""
Game logic for Golf with letter elimination.

This module implements the authoritative state for one table: the player
roster, dealing, turn flow, round scoring and elimination. It performs no
I/O; the room/handler layer calls one operation per client message and
broadcasts the resulting views.

Golf Rules Summary:
    - Each round every active player is dealt 4 face-down cards
    - Before play starts a player may peek at their last 2 dealt cards
    - On your turn: take the top of the discard or draw pile, then swap it
      into your hand or discard it, then finish your turn
    - Instead of playing on, a player may call golf; every other player
      gets one more turn and the round ends when play returns to the caller
    - Highest hand(s) of the round earn a letter of the game word
      (e.g. G-O-L-F); spelling the whole word eliminates you
    - Last player standing wins

State machines:
    game:  not_started -> started -> finished
    round: not_started -> cards_dealt -> started -> finished -> cards_dealt ...
    turn:  not_started -> card_taken -> card_discarded -> not_started
"""

import copy
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from constants import (
    DEFAULT_GAME_WORD,
    FACEDOWN,
    HAND_SIZE,
    MAX_GAME_WORD_LENGTH,
    MAX_NAME_LENGTH,
    MIN_PLAYERS,
    PEEK_CARD_COUNT,
)
from deck import Card, calculate_score, deck_count_for, get_shuffled_deck
from errors import DrawPileEmptyError, PlayerNotFoundError

logger = logging.getLogger(__name__)

# A card as a given viewer sees it: the card itself or the FACEDOWN placeholder
PlayerCard = Union[Card, str]


class GameState(str, Enum):
    """Lifecycle of a whole game (first deal to last player standing)."""

    NOT_STARTED = "not_started"
    STARTED = "started"
    FINISHED = "finished"


class RoundState(str, Enum):
    """
    Lifecycle of one round.

    CARDS_DEALT is the peek phase: hands are dealt and players mark
    themselves round-ready. STARTED is normal turn-taking.
    """

    NOT_STARTED = "not_started"
    CARDS_DEALT = "cards_dealt"
    STARTED = "started"
    FINISHED = "finished"


class TurnState(str, Enum):
    """Progress of the current player's turn."""

    NOT_STARTED = "not_started"
    CARD_TAKEN = "card_taken"
    CARD_DISCARDED = "card_discarded"


def cards_to_dict(cards: Optional[list[PlayerCard]]) -> Optional[list]:
    """Serialize a hand, keeping FACEDOWN placeholders as-is."""
    if cards is None:
        return None
    return [card.to_dict() if isinstance(card, Card) else card for card in cards]


@dataclass
class Player:
    """
    A player at the table.

    Attributes:
        id: Stable identifier for the player (the session's user id).
        name: Display name, defaults to the id.
        letter_count: Letters of the game word earned so far.
        is_game_ready: Ready to start the game.
        is_round_ready: Done peeking, ready to start the round.
        is_connected: Whether the player currently has a live connection.
        round_score: Hand score, set when the round is scored.
        cards: The player's 4-card hand, None before dealing.
    """

    id: str
    name: str
    letter_count: int = 0
    is_game_ready: bool = False
    is_round_ready: bool = False
    is_connected: bool = True
    round_score: Optional[int] = None
    cards: Optional[list[Card]] = None

    def to_dict(self, cards: Optional[list[PlayerCard]] = None) -> dict:
        """
        Convert player to dictionary for JSON serialization.

        Args:
            cards: The hand as the receiving player may see it. The
                player's real cards are never included implicitly.

        Returns:
            Dict with player info and the given cards.
        """
        return {
            "id": self.id,
            "name": self.name,
            "letter_count": self.letter_count,
            "round_score": self.round_score,
            "is_game_ready": self.is_game_ready,
            "is_round_ready": self.is_round_ready,
            "is_connected": self.is_connected,
            "cards": cards_to_dict(cards),
        }


@dataclass(frozen=True)
class RoundResult:
    """
    Snapshot of a scored round.

    Players are deep copies, so dealing the next round cannot alter a
    result that has already been sent to clients.

    Attributes:
        players: Copies of every player keyed by id, hands included.
        round_loser_ids: Players who earned a letter, or None when the
            round was a full tie at elimination and must be replayed.
        game_winner_id: Last player standing, if the game just ended.
    """

    players: dict[str, Player]
    round_loser_ids: Optional[tuple[str, ...]]
    game_winner_id: Optional[str]

    @property
    def is_replay(self) -> bool:
        """True when the round ended in a tie that has to be replayed."""
        return self.round_loser_ids is None

    def to_dict(self) -> dict:
        return {
            "players": {
                player_id: player.to_dict(cards=player.cards)
                for player_id, player in self.players.items()
            },
            "round_loser_ids": (
                list(self.round_loser_ids) if self.round_loser_ids is not None else None
            ),
            "game_winner_id": self.game_winner_id,
        }


@dataclass
class GolfGame:
    """
    Main game state and logic controller for one Golf table.

    Manages the full game lifecycle including:
        - Player roster (join, leave, readiness, connection)
        - Dealer rotation and dealing
        - Turn flow (take, swap/discard, finish, call golf)
        - Round scoring, letters and elimination
        - Per-player views with hidden cards

    Attributes:
        players: Player records keyed by id. Never iterated for ordering.
        game_player_ids: Seating order, shuffled once at game start.
        round_player_ids: Players still in the game, in turn order.
        game_state / round_state / turn_state: The three state machines.
        game_dealer_idx: Index into game_player_ids, -1 before round one.
        round_player_turn_idx: Index into round_player_ids of the player to act.
        game_word: Word whose length is the elimination threshold.
        draw_pile / discard_pile: Stacks, the top is the end of the list.
        taken_card: Card held by the player to act (set iff CARD_TAKEN).
        golf_caller_id: Player who called golf this round.
        game_winner_id: Last player standing.
        round_loser_ids: Players who earned a letter last round.
        rng: Optional random source for seating and shuffles.
    """

    players: dict[str, Player] = field(default_factory=dict)
    game_player_ids: list[str] = field(default_factory=list)
    round_player_ids: list[str] = field(default_factory=list)
    game_state: GameState = GameState.NOT_STARTED
    round_state: RoundState = RoundState.NOT_STARTED
    turn_state: TurnState = TurnState.NOT_STARTED
    game_dealer_idx: int = -1
    round_player_turn_idx: int = 0
    game_word: str = DEFAULT_GAME_WORD
    draw_pile: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    taken_card: Optional[Card] = None
    golf_caller_id: Optional[str] = None
    game_winner_id: Optional[str] = None
    round_loser_ids: Optional[list[str]] = None
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)

    @property
    def _random(self):
        return self.rng or random

    # -------------------------------------------------------------------------
    # State Queries
    # -------------------------------------------------------------------------

    def get_player(self, player_id: str) -> Player:
        """
        Find a player by their ID.

        Raises:
            PlayerNotFoundError: If nobody with that id is at the table.
        """
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def has_player(self, player_id: str) -> bool:
        return player_id in self.players

    def get_player_turn_id(self) -> Optional[str]:
        """
        Get the id of the player whose turn it currently is.

        Only defined while a dealt round is in progress; between rounds the
        turn pointer is stale until the next deal.
        """
        if self.round_state not in (RoundState.CARDS_DEALT, RoundState.STARTED):
            return None
        if not 0 <= self.round_player_turn_idx < len(self.round_player_ids):
            return None
        return self.round_player_ids[self.round_player_turn_idx]

    def is_game_started(self) -> bool:
        return self.game_state in (GameState.STARTED, GameState.FINISHED)

    def is_game_finished(self) -> bool:
        return self.game_state == GameState.FINISHED

    def is_round_finished(self) -> bool:
        """A round ends when the turn comes back around to the golf caller."""
        return (
            self.golf_caller_id is not None
            and self.get_player_turn_id() == self.golf_caller_id
        )

    def is_player_eliminated(self, player_id: str) -> bool:
        return self.get_player(player_id).letter_count >= len(self.game_word)

    def get_discard_pile_top_card(self) -> Optional[Card]:
        if self.discard_pile:
            return self.discard_pile[-1]
        return None

    def get_draw_pile_card_count(self) -> int:
        return len(self.draw_pile)

    # -------------------------------------------------------------------------
    # Roster Management
    # -------------------------------------------------------------------------

    def add_player(self, player_id: str, name: Optional[str] = None) -> bool:
        """
        Seat a new player at the table.

        Args:
            player_id: Unique identifier for the player.
            name: Display name, defaults to the id.

        Returns:
            True if added, False if the id is already seated or the game
            has already started.
        """
        if player_id in self.players or self.is_game_started():
            return False

        self.players[player_id] = Player(id=player_id, name=name or player_id)
        self.game_player_ids.append(player_id)
        return True

    def remove_player(self, player_id: str) -> Player:
        """
        Remove a player from the table, mid-game if necessary.

        Keeps the dealer and turn pointers on the same *players* they
        referred to before the removal. If the departing player was
        holding a card, it goes onto the discard pile. If only one round
        player is left afterwards, they win the game.

        Args:
            player_id: The unique ID of the player to remove.

        Returns:
            The removed Player.

        Raises:
            PlayerNotFoundError: If the player is not at the table.
        """
        player = self.get_player(player_id)

        # Removing a seat at or before the dealer shifts the dealer down one
        if self.game_player_ids.index(player_id) <= self.game_dealer_idx:
            self.game_dealer_idx -= 1

        del self.players[player_id]
        self.game_player_ids.remove(player_id)

        if self.game_state != GameState.STARTED:
            return player

        if player_id in self.round_player_ids:
            round_idx = self.round_player_ids.index(player_id)

            if player_id == self.get_player_turn_id():
                # Next player slides into this index, unless we were last
                if round_idx == len(self.round_player_ids) - 1:
                    self.round_player_turn_idx = 0
                if self.taken_card is not None:
                    self.discard_pile.append(self.taken_card)
                    self.taken_card = None
                self.turn_state = TurnState.NOT_STARTED
            elif round_idx < self.round_player_turn_idx:
                self.round_player_turn_idx -= 1

            self.round_player_ids.remove(player_id)

            if self.golf_caller_id == player_id:
                logger.info(f"Golf call by {player_id} voided: player left")
                self.golf_caller_id = None

        if len(self.round_player_ids) == 1:
            self._finish_game(self.round_player_ids[0])

        return player

    def connect_player(self, player_id: str) -> None:
        """Mark a player connected; rejoining a running game counts as ready."""
        player = self.get_player(player_id)
        player.is_connected = True
        player.is_game_ready = self.is_game_started()

    def disconnect_player(self, player_id: str) -> None:
        player = self.get_player(player_id)
        player.is_connected = False
        player.is_game_ready = False
        player.is_round_ready = False

    def is_any_player_connected(self) -> bool:
        return any(self.players[pid].is_connected for pid in self.game_player_ids)

    def toggle_player_game_ready(self, player_id: str) -> bool:
        """Flip a player's game-ready flag and return the new value."""
        player = self.get_player(player_id)
        player.is_game_ready = not player.is_game_ready
        return player.is_game_ready

    def toggle_player_round_ready(self, player_id: str) -> bool:
        """Flip a player's round-ready flag and return the new value."""
        player = self.get_player(player_id)
        player.is_round_ready = not player.is_round_ready
        return player.is_round_ready

    def is_each_player_game_ready(self) -> bool:
        return all(self.players[pid].is_game_ready for pid in self.game_player_ids)

    def is_each_player_round_ready(self) -> bool:
        return all(self.players[pid].is_round_ready for pid in self.round_player_ids)

    def is_game_startable(self) -> bool:
        return (
            self.game_state == GameState.NOT_STARTED
            and len(self.game_player_ids) >= MIN_PLAYERS
            and self.is_each_player_game_ready()
        )

    def is_round_startable(self) -> bool:
        return (
            self.round_state == RoundState.CARDS_DEALT
            and self.is_each_player_round_ready()
        )

    def change_name(self, player_id: str, name: str) -> bool:
        """
        Rename a player.

        Returns:
            True if renamed, False if the name is blank or too long.
        """
        player = self.get_player(player_id)
        name = (name or "").strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            return False
        player.name = name
        return True

    def change_game_word(self, game_word: str) -> bool:
        """
        Change the word that players spell out on their way to elimination.

        Only allowed while no game is running, so the threshold never
        moves under players who already hold letters.

        Returns:
            True if changed, False otherwise.
        """
        game_word = (game_word or "").strip()
        if self.game_state == GameState.STARTED:
            return False
        if not game_word or len(game_word) > MAX_GAME_WORD_LENGTH:
            return False
        self.game_word = game_word
        return True

    # -------------------------------------------------------------------------
    # Game Lifecycle
    # -------------------------------------------------------------------------

    def reset_game(self) -> None:
        """Return to the lobby: same roster and names, all progress cleared."""
        for player_id in self.game_player_ids:
            player = self.players[player_id]
            player.letter_count = 0
            player.cards = None
            player.round_score = None
            player.is_game_ready = False
            player.is_round_ready = False

        self.round_player_ids = []

        self.game_state = GameState.NOT_STARTED
        self.round_state = RoundState.NOT_STARTED
        self.turn_state = TurnState.NOT_STARTED

        self.game_dealer_idx = -1
        self.round_player_turn_idx = 0

        self.draw_pile = []
        self.discard_pile = []
        self.taken_card = None

        self.golf_caller_id = None
        self.game_winner_id = None
        self.round_loser_ids = None

    def initialize_game(self) -> bool:
        """
        Start the game: randomize seating once and deal the first round.

        Returns:
            True if the game started, False if it is not startable.
        """
        if not self.is_game_startable():
            return False

        self.game_state = GameState.STARTED

        self._random.shuffle(self.game_player_ids)
        self.round_player_ids = list(self.game_player_ids)

        logger.info(
            f"Game started with {len(self.game_player_ids)} players, "
            f"word={self.game_word}"
        )

        self._deal_round()
        return True

    def initialize_round(self) -> bool:
        """
        Deal the next round.

        Returns:
            True if dealt, False if no game is running or a round is
            still in progress.
        """
        if self.game_state != GameState.STARTED:
            return False
        if self.round_state not in (RoundState.NOT_STARTED, RoundState.FINISHED):
            return False

        self._deal_round()
        return True

    def _deal_round(self) -> None:
        """
        Rotate the dealer, shuffle enough decks and deal every round player.

        The dealer leads off the round.
        """
        self._advance_dealer()

        dealer_id = self.game_player_ids[self.game_dealer_idx]
        self.round_player_turn_idx = self.round_player_ids.index(dealer_id)

        for player_id in self.game_player_ids:
            player = self.players[player_id]
            player.cards = None
            player.round_score = None
            player.is_round_ready = False

        num_decks = deck_count_for(len(self.round_player_ids))
        self.draw_pile = get_shuffled_deck(num_decks, rng=self.rng)
        self.discard_pile = [self.draw_pile.pop()]
        self.taken_card = None

        for player_id in self.round_player_ids:
            self.players[player_id].cards = [
                self.draw_pile.pop() for _ in range(HAND_SIZE)
            ]

        self.golf_caller_id = None
        self.game_winner_id = None
        self.round_loser_ids = None

        self.round_state = RoundState.CARDS_DEALT
        self.turn_state = TurnState.NOT_STARTED

        logger.debug(
            f"Dealt {len(self.round_player_ids)} hands from {num_decks} deck(s), "
            f"dealer={dealer_id}"
        )

    def _advance_dealer(self) -> None:
        """Move the dealer to the next seat whose player is not eliminated."""
        seat_count = len(self.game_player_ids)
        for _ in range(seat_count):
            self.game_dealer_idx = (self.game_dealer_idx + 1) % seat_count
            if not self.is_player_eliminated(self.game_player_ids[self.game_dealer_idx]):
                return
        raise RuntimeError("No dealer available: every player is eliminated")

    def start_round(self) -> bool:
        """
        Begin turn-taking once every round player is round-ready.

        Returns:
            True if the round started, False otherwise.
        """
        if not self.is_round_startable():
            return False
        self.round_state = RoundState.STARTED
        return True

    def _finish_game(self, winner_id: str) -> None:
        self.game_state = GameState.FINISHED
        self.game_winner_id = winner_id
        logger.info(f"Game finished, winner={winner_id}")

    # -------------------------------------------------------------------------
    # Turn Actions
    # -------------------------------------------------------------------------

    def _is_players_turn(self, player_id: str) -> bool:
        return (
            self.game_state == GameState.STARTED
            and self.round_state == RoundState.STARTED
            and player_id == self.get_player_turn_id()
            and not self.is_round_finished()
        )

    def take_from_discard_pile(self, player_id: str) -> Optional[Card]:
        """
        Take the top card of the discard pile.

        Args:
            player_id: ID of the player taking.

        Returns:
            The taken Card, or None if the action is not allowed.
        """
        if not self._is_players_turn(player_id):
            return None
        if self.turn_state != TurnState.NOT_STARTED or not self.discard_pile:
            return None

        self.taken_card = self.discard_pile.pop()
        self.turn_state = TurnState.CARD_TAKEN
        return self.taken_card

    def take_from_draw_pile(self, player_id: str) -> Optional[Card]:
        """
        Take the top card of the draw pile.

        If the draw pile is empty, the discard pile (minus its top card) is
        shuffled back in first.

        Args:
            player_id: ID of the player taking.

        Returns:
            The taken Card, or None if the action is not allowed.

        Raises:
            DrawPileEmptyError: If there is nothing left to draw even after
                reshuffling. State is left unchanged.
        """
        if not self._is_players_turn(player_id):
            return None
        if self.turn_state != TurnState.NOT_STARTED:
            return None

        if not self.draw_pile:
            self._reshuffle_discard_pile()

        self.taken_card = self.draw_pile.pop()
        self.turn_state = TurnState.CARD_TAKEN
        return self.taken_card

    def _reshuffle_discard_pile(self) -> None:
        """
        Reshuffle the discard pile back into the draw pile.

        Keeps the top discard card in place.
        """
        if len(self.discard_pile) <= 1:
            raise DrawPileEmptyError()

        top_card = self.discard_pile[-1]
        cards_to_reshuffle = self.discard_pile[:-1]
        self._random.shuffle(cards_to_reshuffle)

        self.draw_pile = cards_to_reshuffle
        self.discard_pile = [top_card]
        logger.debug(f"Reshuffled {len(cards_to_reshuffle)} discards into the draw pile")

    def swap_card(self, player_id: str, swap_card_idx: int) -> Optional[Card]:
        """
        Swap the taken card into the player's hand.

        The replaced card goes onto the discard pile.

        Args:
            player_id: ID of the player swapping.
            swap_card_idx: Hand slot 0-3 to replace.

        Returns:
            The discarded Card, or None if the action is not allowed.
        """
        if not self._is_players_turn(player_id):
            return None
        if self.turn_state != TurnState.CARD_TAKEN or self.taken_card is None:
            return None

        cards = self.players[player_id].cards
        if not cards or not (0 <= swap_card_idx < len(cards)):
            return None

        discarded_card = cards[swap_card_idx]
        cards[swap_card_idx] = self.taken_card
        self.discard_pile.append(discarded_card)
        self.taken_card = None
        self.turn_state = TurnState.CARD_DISCARDED
        return discarded_card

    def discard_card(self, player_id: str) -> Optional[Card]:
        """
        Discard the taken card without swapping.

        Returns:
            The discarded Card, or None if the action is not allowed.
        """
        if not self._is_players_turn(player_id):
            return None
        if self.turn_state != TurnState.CARD_TAKEN or self.taken_card is None:
            return None

        discarded_card = self.taken_card
        self.discard_pile.append(discarded_card)
        self.taken_card = None
        self.turn_state = TurnState.CARD_DISCARDED
        return discarded_card

    def finish_turn(self, player_id: str) -> bool:
        """
        End the turn after a swap or discard and pass play on.

        Returns:
            True if the turn ended, False if nothing was discarded yet.
        """
        if not self._is_players_turn(player_id):
            return False
        if self.turn_state != TurnState.CARD_DISCARDED:
            return False

        self._advance_turn()
        return True

    def call_golf(self, player_id: str) -> bool:
        """
        Call golf: every other player gets one more turn.

        Allowed at the start of a turn or after discarding, never while
        holding a card, and only once per round.

        Returns:
            True if the call was recorded, False otherwise.
        """
        if not self._is_players_turn(player_id):
            return False
        if self.golf_caller_id is not None:
            return False
        if self.turn_state == TurnState.CARD_TAKEN:
            return False

        self.golf_caller_id = player_id
        logger.debug(f"Golf called by {player_id}")
        self._advance_turn()
        return True

    def _advance_turn(self) -> None:
        self.round_player_turn_idx = (
            (self.round_player_turn_idx + 1) % len(self.round_player_ids)
        )
        self.turn_state = TurnState.NOT_STARTED

    # -------------------------------------------------------------------------
    # Scoring & Elimination
    # -------------------------------------------------------------------------

    def calculate_round_result(self) -> Optional[RoundResult]:
        """
        Score the round, hand out letters and eliminate players.

        The highest hand loses; every player tied at the highest score
        earns a letter. Players who have spelled the whole game word are
        dropped from future rounds. If that would eliminate everyone left,
        the letters are taken back and the same players replay the round.

        Returns:
            A RoundResult snapshot, or None if the round is not over yet.
        """
        if self.game_state != GameState.STARTED or self.round_state != RoundState.STARTED:
            return None
        if not self.is_round_finished():
            return None

        self.round_state = RoundState.FINISHED

        highest_score: Optional[int] = None
        loser_ids: list[str] = []

        for player_id in self.round_player_ids:
            player = self.players[player_id]
            player.round_score = calculate_score(player.cards or [])

            if highest_score is None or player.round_score > highest_score:
                highest_score = player.round_score
                loser_ids = [player_id]
            elif player.round_score == highest_score:
                loser_ids.append(player_id)

        for player_id in loser_ids:
            self.players[player_id].letter_count += 1

        self.round_loser_ids = loser_ids
        self._eliminate_players()

        if len(self.round_player_ids) == 1:
            self._finish_game(self.round_player_ids[0])
        elif not self.round_player_ids:
            # Everyone left went out at once: undo and replay the round
            self.round_player_ids = list(loser_ids)
            for player_id in loser_ids:
                self.players[player_id].letter_count -= 1
            self.round_loser_ids = None
            logger.info(f"Round tied at elimination, replaying with {loser_ids}")
        else:
            logger.info(f"Round scored, high={highest_score}, losers={loser_ids}")

        return RoundResult(
            players={pid: copy.deepcopy(p) for pid, p in self.players.items()},
            round_loser_ids=(
                tuple(self.round_loser_ids) if self.round_loser_ids is not None else None
            ),
            game_winner_id=self.game_winner_id,
        )

    def _eliminate_players(self) -> None:
        eliminated = [pid for pid in self.round_player_ids if self.is_player_eliminated(pid)]
        if eliminated:
            logger.debug(f"Eliminating {eliminated}")
        self.round_player_ids = [
            pid for pid in self.round_player_ids if pid not in eliminated
        ]

    # -------------------------------------------------------------------------
    # Player Views
    # -------------------------------------------------------------------------

    def _peek_hand(self, cards: list[Card]) -> list[PlayerCard]:
        hidden = len(cards) - PEEK_CARD_COUNT
        return [FACEDOWN] * hidden + list(cards[hidden:])

    def get_player_view(self, player_id: str) -> dict:
        """
        The requesting player's own record, as they may see it.

        While the round is being played the whole hand is face down. In
        the peek phase (cards dealt, round not started) the last two
        dealt cards are shown. Otherwise the hand is shown in full.
        """
        player = self.get_player(player_id)
        cards: Optional[list[PlayerCard]] = player.cards

        if cards is not None:
            if self.round_state == RoundState.STARTED:
                cards = [FACEDOWN] * len(cards)
            elif self.round_state == RoundState.CARDS_DEALT:
                cards = self._peek_hand(cards)

        return player.to_dict(cards=cards)

    def get_other_player_views(self, player_id: str) -> list[dict]:
        """
        Every other player, in seating order starting after the requester.

        Their hands are face down until the round is over.
        """
        self.get_player(player_id)

        seat = self.game_player_ids.index(player_id)
        ordered_ids = self.game_player_ids[seat + 1:] + self.game_player_ids[:seat]
        hide = self.round_state in (RoundState.CARDS_DEALT, RoundState.STARTED)

        views = []
        for other_id in ordered_ids:
            other = self.players[other_id]
            cards: Optional[list[PlayerCard]] = other.cards
            if cards is not None and hide:
                cards = [FACEDOWN] * len(cards)
            views.append(other.to_dict(cards=cards))
        return views

    def get_dealt_cards_for_player(self, player_id: str) -> Optional[list[PlayerCard]]:
        """The peek view of a freshly dealt hand, or None if not dealt in."""
        if player_id not in self.round_player_ids:
            return None
        return self._peek_hand(self.players[player_id].cards)

    def get_state_for_player(self, player_id: str) -> dict:
        """
        Get the full game state for a specific player.

        Returns a dictionary suitable for JSON serialization and sending
        to the client. The draw pile is only exposed as a count, and the
        taken card only to the player holding it.

        Args:
            player_id: The player who will receive this state.

        Returns:
            Dict containing the player's own view, the other players, the
            three states, piles and round/game outcome fields.
        """
        player_turn_id = self.get_player_turn_id()
        taken_card = self.taken_card if player_id == player_turn_id else None

        return {
            "player": self.get_player_view(player_id),
            "players": self.get_other_player_views(player_id),
            "game_state": self.game_state.value,
            "round_state": self.round_state.value,
            "turn_state": self.turn_state.value,
            "game_word": self.game_word,
            "player_turn_id": player_turn_id,
            "discard_pile": [card.to_dict() for card in self.discard_pile],
            "draw_pile_card_count": len(self.draw_pile),
            "taken_card": taken_card.to_dict() if taken_card else None,
            "golf_caller_id": self.golf_caller_id,
            "game_winner_id": self.game_winner_id,
            "round_loser_ids": self.round_loser_ids,
        }
