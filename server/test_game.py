"""
Test suite for the Golf letter-elimination engine.

Verifies:
- Roster management and readiness gates
- Dealing (deck sizing, card conservation, dealer rotation)
- Turn flow and illegal-move rejection
- Draw pile reshuffle
- Scoring, letters, elimination and tie replays
- Mid-game removal keeping dealer/turn pointers on the right players
- Per-player views hiding cards

Run with: pytest test_game.py -v
"""

import random
from collections import Counter

import pytest

from deck import Card, Rank, Suit, create_deck, deck_count_for
from errors import DrawPileEmptyError, PlayerNotFoundError
from game import (
    GameState,
    GolfGame,
    RoundState,
    TurnState,
)


# =============================================================================
# Helpers
# =============================================================================

def card(rank: str, suit: Suit = Suit.HEARTS) -> Card:
    return Card(suit, Rank(rank))


def make_game(num_players: int = 3, seed: int = 0) -> GolfGame:
    """Create a game with all players ready and the first round dealt."""
    game = GolfGame(rng=random.Random(seed))
    for i in range(num_players):
        game.add_player(f"p{i}", f"Player {i}")
        game.toggle_player_game_ready(f"p{i}")
    assert game.initialize_game()
    return game


def start_round(game: GolfGame) -> None:
    for player_id in game.round_player_ids:
        if not game.players[player_id].is_round_ready:
            game.toggle_player_round_ready(player_id)
    assert game.start_round()


def set_hand(game: GolfGame, player_id: str, ranks: list[str]) -> None:
    game.players[player_id].cards = [card(r) for r in ranks]


def play_discard_turn(game: GolfGame) -> str:
    """Current player draws and discards. Hands stay unchanged."""
    player_id = game.get_player_turn_id()
    assert game.take_from_draw_pile(player_id) is not None
    assert game.discard_card(player_id) is not None
    assert game.finish_turn(player_id)
    return player_id


def finish_round(game: GolfGame):
    """Start the round, have the first player call golf and play it out."""
    start_round(game)
    caller = game.get_player_turn_id()
    assert game.call_golf(caller)
    while not game.is_round_finished():
        play_discard_turn(game)
    return game.calculate_round_result()


def all_cards(game: GolfGame) -> list[Card]:
    cards = list(game.draw_pile) + list(game.discard_pile)
    for player in game.players.values():
        cards.extend(player.cards or [])
    if game.taken_card:
        cards.append(game.taken_card)
    return cards


# =============================================================================
# Roster Tests
# =============================================================================

class TestRoster:

    def test_add_player_defaults(self):
        game = GolfGame()
        assert game.add_player("alice")
        player = game.get_player("alice")
        assert player.name == "alice"
        assert player.letter_count == 0
        assert not player.is_game_ready
        assert not player.is_round_ready
        assert player.is_connected
        assert game.game_player_ids == ["alice"]

    def test_duplicate_player_rejected(self):
        game = GolfGame()
        assert game.add_player("alice")
        assert not game.add_player("alice")
        assert game.game_player_ids == ["alice"]

    def test_cannot_join_started_game(self):
        game = make_game(2)
        assert not game.add_player("late")
        assert not game.has_player("late")

    def test_unknown_player_raises(self):
        game = GolfGame()
        with pytest.raises(PlayerNotFoundError):
            game.get_player("ghost")
        with pytest.raises(PlayerNotFoundError):
            game.toggle_player_game_ready("ghost")

    def test_toggle_returns_new_value(self):
        game = GolfGame()
        game.add_player("a")
        assert game.toggle_player_game_ready("a") is True
        assert game.toggle_player_game_ready("a") is False
        assert game.toggle_player_round_ready("a") is True

    def test_game_startable_needs_two_ready_players(self):
        game = GolfGame()
        game.add_player("a")
        game.toggle_player_game_ready("a")
        assert not game.is_game_startable()

        game.add_player("b")
        assert not game.is_game_startable()

        game.toggle_player_game_ready("b")
        assert game.is_game_startable()

    def test_initialize_game_refused_when_not_startable(self):
        game = GolfGame()
        game.add_player("a")
        game.add_player("b")
        game.toggle_player_game_ready("a")

        assert not game.initialize_game()
        assert game.game_state == GameState.NOT_STARTED
        assert game.round_state == RoundState.NOT_STARTED
        assert game.draw_pile == []

    def test_disconnect_clears_ready_flags(self):
        game = GolfGame()
        game.add_player("a")
        game.toggle_player_game_ready("a")
        game.toggle_player_round_ready("a")

        game.disconnect_player("a")

        player = game.get_player("a")
        assert not player.is_connected
        assert not player.is_game_ready
        assert not player.is_round_ready
        assert not game.is_any_player_connected()

    def test_reconnect_to_running_game_counts_as_ready(self):
        game = make_game(2)
        game.disconnect_player("p0")
        game.connect_player("p0")
        assert game.get_player("p0").is_connected
        assert game.get_player("p0").is_game_ready

    def test_reconnect_in_lobby_is_not_ready(self):
        game = GolfGame()
        game.add_player("a")
        game.disconnect_player("a")
        game.connect_player("a")
        assert game.is_any_player_connected()
        assert not game.get_player("a").is_game_ready

    def test_change_name(self):
        game = GolfGame()
        game.add_player("a")
        assert game.change_name("a", "  Alice ")
        assert game.get_player("a").name == "Alice"

    def test_change_name_rejects_blank_and_long(self):
        game = GolfGame()
        game.add_player("a", "Alice")
        assert not game.change_name("a", "   ")
        assert not game.change_name("a", "x" * 100)
        assert game.get_player("a").name == "Alice"

    def test_change_game_word_in_lobby(self):
        game = GolfGame()
        assert game.game_word == "GOLF"
        assert game.change_game_word("HORSE")
        assert game.game_word == "HORSE"

    def test_change_game_word_refused_mid_game(self):
        game = make_game(2)
        assert not game.change_game_word("HORSE")
        assert game.game_word == "GOLF"

    def test_change_game_word_rejects_empty(self):
        game = GolfGame()
        assert not game.change_game_word("")
        assert game.game_word == "GOLF"


# =============================================================================
# Dealing Tests
# =============================================================================

class TestDealing:

    def test_initialize_game_deals_first_round(self):
        game = make_game(3)

        assert game.game_state == GameState.STARTED
        assert game.round_state == RoundState.CARDS_DEALT
        assert game.turn_state == TurnState.NOT_STARTED
        assert game.round_player_ids == game.game_player_ids
        assert sorted(game.game_player_ids) == ["p0", "p1", "p2"]
        for player_id in game.round_player_ids:
            assert len(game.players[player_id].cards) == 4
        assert len(game.discard_pile) == 1

    def test_first_dealer_leads_off(self):
        game = make_game(3)
        assert game.game_dealer_idx == 0
        assert game.get_player_turn_id() == game.game_player_ids[0]

    @pytest.mark.parametrize("num_players", range(2, 21))
    def test_deal_conserves_cards(self, num_players):
        game = make_game(num_players, seed=num_players)

        expected = Counter(create_deck() * deck_count_for(num_players))
        assert Counter(all_cards(game)) == expected
        assert len(game.draw_pile) == 52 * deck_count_for(num_players) - 4 * num_players - 1

    def test_dealer_rotates_each_round(self):
        game = make_game(3)
        finish_round(game)
        assert game.initialize_round()
        assert game.game_dealer_idx == 1
        dealer_id = game.game_player_ids[1]
        assert game.get_player_turn_id() == dealer_id

    def test_dealer_skips_eliminated_players(self):
        game = make_game(3)
        skipped = game.game_player_ids[1]
        game.players[skipped].letter_count = len(game.game_word)
        game.round_player_ids.remove(skipped)
        game.round_state = RoundState.FINISHED

        assert game.initialize_round()

        assert game.game_dealer_idx == 2
        assert game.players[skipped].cards is None
        assert game.get_dealt_cards_for_player(skipped) is None
        # Turn index maps the dealer into the shorter round list
        assert game.round_player_turn_idx == 1
        assert game.get_player_turn_id() == game.game_player_ids[2]

    def test_new_round_clears_round_state(self):
        game = make_game(2)
        finish_round(game)
        assert game.round_loser_ids is not None

        game.initialize_round()

        assert game.golf_caller_id is None
        assert game.round_loser_ids is None
        for player in game.players.values():
            assert player.round_score is None
            assert not player.is_round_ready

    def test_initialize_round_refused_mid_round(self):
        game = make_game(2)
        assert not game.initialize_round()
        start_round(game)
        assert not game.initialize_round()

    def test_start_round_needs_everyone_ready(self):
        game = make_game(2)
        first, second = game.round_player_ids
        game.toggle_player_round_ready(first)
        assert not game.start_round()
        assert game.round_state == RoundState.CARDS_DEALT

        game.toggle_player_round_ready(second)
        assert game.start_round()
        assert game.round_state == RoundState.STARTED

    def test_reset_game_returns_to_lobby(self):
        game = make_game(3)
        finish_round(game)

        game.reset_game()

        assert game.game_state == GameState.NOT_STARTED
        assert game.round_state == RoundState.NOT_STARTED
        assert game.round_player_ids == []
        assert game.game_dealer_idx == -1
        assert game.draw_pile == [] and game.discard_pile == []
        assert game.game_winner_id is None
        for player in game.players.values():
            assert player.letter_count == 0
            assert player.cards is None
            assert not player.is_game_ready
        assert len(game.game_player_ids) == 3


# =============================================================================
# Turn Flow Tests
# =============================================================================

class TestTurnFlow:

    def setup_method(self):
        self.game = make_game(3)
        start_round(self.game)
        self.current = self.game.get_player_turn_id()
        self.other = next(p for p in self.game.round_player_ids if p != self.current)

    def test_no_actions_before_round_starts(self):
        game = make_game(2)
        current = game.get_player_turn_id()
        assert game.take_from_discard_pile(current) is None
        assert game.take_from_draw_pile(current) is None
        assert not game.call_golf(current)

    def test_wrong_player_rejected(self):
        top = self.game.get_discard_pile_top_card()
        assert self.game.take_from_discard_pile(self.other) is None
        assert self.game.take_from_draw_pile(self.other) is None
        assert not self.game.call_golf(self.other)
        assert self.game.get_discard_pile_top_card() == top
        assert self.game.turn_state == TurnState.NOT_STARTED

    def test_take_from_discard_pile(self):
        top = self.game.get_discard_pile_top_card()
        taken = self.game.take_from_discard_pile(self.current)
        assert taken == top
        assert self.game.taken_card == top
        assert self.game.discard_pile == []
        assert self.game.turn_state == TurnState.CARD_TAKEN

    def test_take_from_draw_pile(self):
        count = self.game.get_draw_pile_card_count()
        expected = self.game.draw_pile[-1]
        taken = self.game.take_from_draw_pile(self.current)
        assert taken == expected
        assert self.game.get_draw_pile_card_count() == count - 1
        assert self.game.turn_state == TurnState.CARD_TAKEN

    def test_cannot_take_twice(self):
        self.game.take_from_draw_pile(self.current)
        assert self.game.take_from_draw_pile(self.current) is None
        assert self.game.take_from_discard_pile(self.current) is None

    def test_swap_card(self):
        taken = self.game.take_from_draw_pile(self.current)
        old = self.game.players[self.current].cards[2]

        discarded = self.game.swap_card(self.current, 2)

        assert discarded == old
        assert self.game.players[self.current].cards[2] == taken
        assert self.game.get_discard_pile_top_card() == old
        assert self.game.taken_card is None
        assert self.game.turn_state == TurnState.CARD_DISCARDED

    @pytest.mark.parametrize("idx", [-1, 4, 10])
    def test_swap_out_of_range_rejected(self, idx):
        taken = self.game.take_from_draw_pile(self.current)
        hand = list(self.game.players[self.current].cards)

        assert self.game.swap_card(self.current, idx) is None
        assert self.game.players[self.current].cards == hand
        assert self.game.taken_card == taken
        assert self.game.turn_state == TurnState.CARD_TAKEN

    def test_swap_without_taking_rejected(self):
        assert self.game.swap_card(self.current, 0) is None

    def test_discard_card(self):
        taken = self.game.take_from_draw_pile(self.current)
        assert self.game.discard_card(self.current) == taken
        assert self.game.get_discard_pile_top_card() == taken
        assert self.game.taken_card is None
        assert self.game.turn_state == TurnState.CARD_DISCARDED

    def test_finish_turn_needs_discard(self):
        assert not self.game.finish_turn(self.current)
        self.game.take_from_draw_pile(self.current)
        assert not self.game.finish_turn(self.current)
        self.game.discard_card(self.current)
        assert self.game.finish_turn(self.current)
        assert self.game.turn_state == TurnState.NOT_STARTED

    def test_turn_order_wraps(self):
        order = [play_discard_turn(self.game) for _ in range(4)]
        ids = self.game.round_player_ids
        start = ids.index(order[0])
        assert order == [ids[(start + i) % 3] for i in range(4)]

    def test_call_golf_at_turn_start(self):
        assert self.game.call_golf(self.current)
        assert self.game.golf_caller_id == self.current
        assert self.game.get_player_turn_id() != self.current
        assert self.game.turn_state == TurnState.NOT_STARTED

    def test_call_golf_after_discard(self):
        self.game.take_from_draw_pile(self.current)
        self.game.discard_card(self.current)
        assert self.game.call_golf(self.current)

    def test_call_golf_while_holding_card_rejected(self):
        self.game.take_from_draw_pile(self.current)
        assert not self.game.call_golf(self.current)
        assert self.game.golf_caller_id is None

    def test_golf_called_only_once(self):
        self.game.call_golf(self.current)
        next_player = self.game.get_player_turn_id()
        assert not self.game.call_golf(next_player)
        assert self.game.golf_caller_id == self.current

    def test_round_finishes_when_turn_returns_to_caller(self):
        self.game.call_golf(self.current)
        play_discard_turn(self.game)
        assert not self.game.is_round_finished()
        play_discard_turn(self.game)
        assert self.game.is_round_finished()

    def test_no_result_before_round_finished(self):
        assert self.game.calculate_round_result() is None
        self.game.call_golf(self.current)
        assert self.game.calculate_round_result() is None
        assert self.game.round_state == RoundState.STARTED


class TestReshuffle:

    def setup_method(self):
        self.game = make_game(2)
        start_round(self.game)
        self.current = self.game.get_player_turn_id()

    def test_empty_draw_pile_reshuffles_discards(self):
        c1, c2, c3 = card("2"), card("3"), card("4")
        self.game.draw_pile = []
        self.game.discard_pile = [c1, c2, c3]

        taken = self.game.take_from_draw_pile(self.current)

        assert taken in (c1, c2)
        assert self.game.discard_pile == [c3]
        assert len(self.game.draw_pile) == 1
        assert self.game.turn_state == TurnState.CARD_TAKEN

    def test_nothing_to_reshuffle_raises(self):
        top = card("K")
        self.game.draw_pile = []
        self.game.discard_pile = [top]

        with pytest.raises(DrawPileEmptyError):
            self.game.take_from_draw_pile(self.current)

        assert self.game.discard_pile == [top]
        assert self.game.taken_card is None
        assert self.game.turn_state == TurnState.NOT_STARTED


# =============================================================================
# Scoring & Elimination Tests
# =============================================================================

class TestScoring:

    def test_highest_hand_earns_letter(self):
        game = make_game(3)
        a, b, c = game.round_player_ids
        set_hand(game, a, ["K", "Q", "10", "9"])
        set_hand(game, b, ["A", "2", "3", "4"])
        set_hand(game, c, ["J", "J", "J", "A"])

        result = finish_round(game)

        assert result.round_loser_ids == (a,)
        assert result.game_winner_id is None
        assert game.players[a].letter_count == 1
        assert game.players[b].letter_count == 0
        assert game.players[a].round_score == 39
        assert game.players[b].round_score == 10
        assert game.players[c].round_score == 1
        assert game.round_state == RoundState.FINISHED

    def test_tied_highest_hands_all_earn_letter(self):
        game = make_game(3)
        a, b, c = game.round_player_ids
        set_hand(game, a, ["K", "Q", "10", "9"])
        set_hand(game, b, ["Q", "K", "9", "10"])
        set_hand(game, c, ["A", "A", "A", "A"])

        result = finish_round(game)

        assert set(result.round_loser_ids) == {a, b}
        assert game.players[a].letter_count == 1
        assert game.players[b].letter_count == 1
        assert game.players[c].letter_count == 0

    def test_all_zero_hands_all_lose(self):
        game = make_game(2)
        for player_id in game.round_player_ids:
            set_hand(game, player_id, ["J", "J", "J", "J"])

        result = finish_round(game)

        assert set(result.round_loser_ids) == set(game.game_player_ids)

    def test_result_is_a_snapshot(self):
        game = make_game(2)
        a, b = game.round_player_ids
        set_hand(game, a, ["K", "K", "K", "K"])
        set_hand(game, b, ["A", "A", "A", "A"])

        result = finish_round(game)
        game.initialize_round()

        assert result.players[a].cards == [card("K")] * 4
        assert result.players[a].round_score == 40
        assert result.players[a].letter_count == 1
        assert game.players[a].round_score is None

    def test_result_to_dict_reveals_hands(self):
        game = make_game(2)
        a, b = game.round_player_ids
        set_hand(game, a, ["K", "K", "K", "K"])
        set_hand(game, b, ["A", "A", "A", "A"])

        data = finish_round(game).to_dict()

        assert data["round_loser_ids"] == [a]
        assert data["game_winner_id"] is None
        assert data["players"][b]["cards"][0] == {"suit": "♥", "rank": "A"}
        assert data["players"][a]["round_score"] == 40

    def test_player_spelling_word_is_eliminated(self):
        game = make_game(3)
        a, b, c = game.round_player_ids
        game.players[a].letter_count = 3
        set_hand(game, a, ["K", "K", "K", "K"])
        set_hand(game, b, ["A", "A", "A", "A"])
        set_hand(game, c, ["2", "2", "2", "2"])

        finish_round(game)

        assert game.is_player_eliminated(a)
        assert a not in game.round_player_ids
        assert a in game.game_player_ids
        assert game.game_state == GameState.STARTED

        game.initialize_round()
        assert game.players[a].cards is None
        assert sorted(game.round_player_ids) == sorted([b, c])

    def test_last_player_standing_wins(self):
        game = make_game(2)
        a, b = game.round_player_ids
        game.players[a].letter_count = 3
        set_hand(game, a, ["K", "K", "K", "K"])
        set_hand(game, b, ["A", "A", "A", "A"])

        result = finish_round(game)

        assert game.game_state == GameState.FINISHED
        assert game.game_winner_id == b
        assert result.game_winner_id == b
        assert game.round_player_ids == [b]
        assert not game.initialize_round()

    def test_everyone_eliminated_at_once_replays_round(self):
        game = make_game(2)
        a, b = game.round_player_ids
        for player_id in (a, b):
            game.players[player_id].letter_count = 3
            set_hand(game, player_id, ["Q", "Q", "Q", "Q"])

        result = finish_round(game)

        assert result.is_replay
        assert result.round_loser_ids is None
        assert game.round_loser_ids is None
        assert game.round_player_ids == [a, b]
        assert game.players[a].letter_count == 3
        assert game.players[b].letter_count == 3
        assert game.game_state == GameState.STARTED

        assert game.initialize_round()
        assert len(game.players[a].cards) == 4

    def test_tied_losers_out_together_leaves_survivor_winning(self):
        game = make_game(3)
        a, b, c = game.round_player_ids
        for player_id in (a, b, c):
            game.players[player_id].letter_count = 3
        set_hand(game, a, ["K", "K", "K", "K"])
        set_hand(game, b, ["K", "K", "K", "K"])
        set_hand(game, c, ["A", "A", "A", "A"])

        result = finish_round(game)

        assert game.game_winner_id == c
        assert not result.is_replay


# =============================================================================
# Player Removal Tests
# =============================================================================

class TestRemovePlayer:

    def test_remove_in_lobby(self):
        game = GolfGame()
        game.add_player("a")
        game.add_player("b")

        removed = game.remove_player("a")

        assert removed.id == "a"
        assert game.game_player_ids == ["b"]
        assert not game.has_player("a")

    def test_remove_unknown_raises(self):
        game = GolfGame()
        with pytest.raises(PlayerNotFoundError):
            game.remove_player("ghost")

    def test_remove_before_current_keeps_turn(self):
        game = make_game(4)
        start_round(game)
        play_discard_turn(game)
        play_discard_turn(game)
        current = game.get_player_turn_id()
        assert game.round_player_turn_idx == 2

        game.remove_player(game.round_player_ids[0])

        assert game.get_player_turn_id() == current
        assert game.round_player_turn_idx == 1

    def test_remove_after_current_keeps_turn(self):
        game = make_game(4)
        start_round(game)
        current = game.get_player_turn_id()

        game.remove_player(game.round_player_ids[2])

        assert game.get_player_turn_id() == current

    def test_remove_current_player_passes_turn_and_returns_card(self):
        game = make_game(4)
        start_round(game)
        play_discard_turn(game)
        ids = list(game.round_player_ids)
        current = game.get_player_turn_id()
        assert current == ids[1]
        taken = game.take_from_draw_pile(current)

        game.remove_player(current)

        assert game.get_player_turn_id() == ids[2]
        assert game.get_discard_pile_top_card() == taken
        assert game.taken_card is None
        assert game.turn_state == TurnState.NOT_STARTED

    def test_remove_current_last_player_wraps_turn(self):
        game = make_game(3)
        start_round(game)
        play_discard_turn(game)
        play_discard_turn(game)
        ids = list(game.round_player_ids)
        assert game.get_player_turn_id() == ids[2]

        game.remove_player(ids[2])

        assert game.get_player_turn_id() == ids[0]

    def test_removing_dealer_hands_deal_to_next_seat(self):
        game = make_game(3)
        seats = list(game.game_player_ids)
        assert game.game_dealer_idx == 0
        finish_round(game)

        game.remove_player(seats[0])

        assert game.game_dealer_idx == -1
        game.initialize_round()
        assert game.game_player_ids[game.game_dealer_idx] == seats[1]
        assert game.get_player_turn_id() == seats[1]

    def test_removing_seat_before_dealer_shifts_dealer_down(self):
        game = make_game(4)
        seats = list(game.game_player_ids)
        finish_round(game)
        game.initialize_round()
        assert game.game_dealer_idx == 1

        finish_round(game)
        game.remove_player(seats[0])

        assert game.game_dealer_idx == 0
        assert game.game_player_ids[game.game_dealer_idx] == seats[1]
        game.initialize_round()
        assert game.game_player_ids[game.game_dealer_idx] == seats[2]
        assert game.get_player_turn_id() == seats[2]

    def test_removing_seat_after_dealer_keeps_dealer(self):
        game = make_game(3)
        seats = list(game.game_player_ids)
        finish_round(game)
        game.initialize_round()
        assert game.game_dealer_idx == 1

        finish_round(game)
        game.remove_player(seats[2])

        assert game.game_dealer_idx == 1
        game.initialize_round()
        assert game.game_player_ids[game.game_dealer_idx] == seats[0]

    def test_removal_leaving_one_player_ends_game(self):
        game = make_game(2)
        start_round(game)
        a, b = game.round_player_ids

        game.remove_player(a)

        assert game.game_state == GameState.FINISHED
        assert game.game_winner_id == b
        assert game.take_from_draw_pile(b) is None

    def test_golf_caller_leaving_voids_call(self):
        game = make_game(3)
        start_round(game)
        caller = game.get_player_turn_id()
        game.call_golf(caller)
        next_player = game.get_player_turn_id()

        game.remove_player(caller)

        assert game.golf_caller_id is None
        assert game.get_player_turn_id() == next_player
        assert not game.is_round_finished()

    def test_removing_last_player_before_caller_finishes_round(self):
        game = make_game(3)
        start_round(game)
        caller, middle, last = game.round_player_ids
        assert game.call_golf(caller)
        play_discard_turn(game)
        assert game.get_player_turn_id() == last

        game.remove_player(last)

        assert game.get_player_turn_id() == caller
        assert game.is_round_finished()
        assert game.take_from_draw_pile(caller) is None
        assert not game.call_golf(caller)
        result = game.calculate_round_result()
        assert result is not None
        assert set(result.players) == {caller, middle}


# =============================================================================
# Player View Tests
# =============================================================================

class TestPlayerViews:

    def test_peek_shows_last_two_cards(self):
        game = make_game(3)
        player_id = game.round_player_ids[0]
        cards = game.players[player_id].cards

        view = game.get_player_view(player_id)["cards"]

        assert view[:2] == ["facedown", "facedown"]
        assert view[2:] == [c.to_dict() for c in cards[2:]]
        assert game.get_dealt_cards_for_player(player_id) == ["facedown", "facedown", cards[2], cards[3]]

    def test_hand_hidden_while_playing(self):
        game = make_game(2)
        start_round(game)
        player_id = game.round_player_ids[0]
        assert game.get_player_view(player_id)["cards"] == ["facedown"] * 4

    def test_other_players_hidden_until_round_over(self):
        game = make_game(3)
        viewer = game.game_player_ids[0]
        for view in game.get_other_player_views(viewer):
            assert view["cards"] == ["facedown"] * 4

        finish_round(game)

        for view in game.get_other_player_views(viewer):
            real = game.players[view["id"]].cards
            assert view["cards"] == [c.to_dict() for c in real]
        own = game.players[viewer].cards
        assert game.get_player_view(viewer)["cards"] == [c.to_dict() for c in own]

    def test_other_players_ordered_after_viewer(self):
        game = GolfGame()
        for player_id in ["a", "b", "c", "d"]:
            game.add_player(player_id)
        ordered = [v["id"] for v in game.get_other_player_views("c")]
        assert ordered == ["d", "a", "b"]

    def test_lobby_views_have_no_cards(self):
        game = GolfGame()
        game.add_player("a")
        game.add_player("b")
        assert game.get_player_view("a")["cards"] is None
        assert game.get_other_player_views("a")[0]["cards"] is None

    def test_state_for_player(self):
        game = make_game(2)
        start_round(game)
        current = game.get_player_turn_id()
        other = next(p for p in game.round_player_ids if p != current)
        taken = game.take_from_draw_pile(current)

        state = game.get_state_for_player(current)
        assert state["game_state"] == "started"
        assert state["round_state"] == "started"
        assert state["turn_state"] == "card_taken"
        assert state["game_word"] == "GOLF"
        assert state["player_turn_id"] == current
        assert state["taken_card"] == taken.to_dict()
        assert state["draw_pile_card_count"] == len(game.draw_pile)
        assert "draw_pile" not in state
        assert state["player"]["id"] == current
        assert [p["id"] for p in state["players"]] == [other]

        assert game.get_state_for_player(other)["taken_card"] is None

    def test_dealt_cards_none_for_player_not_in_round(self):
        game = GolfGame()
        game.add_player("a")
        assert game.get_dealt_cards_for_player("a") is None
