"""
Golf Simulation Runner

Plays bot-vs-bot games of Golf with letter elimination directly against
the game engine. No server/websocket needed.

Bots only use what a real player could know: the two cards they peeked
at, cards they swapped in, and the top of the discard pile.

Usage:
    python simulate.py [num_games] [num_players]
    python simulate.py detail [num_players]

Examples:
    python simulate.py 10        # Run 10 games with 4 players each
    python simulate.py 50 2      # Run 50 games with 2 players each
    python simulate.py detail 3  # Narrate one 3-player game
"""

import random
import sys
from typing import Optional

from constants import HAND_SIZE, PEEK_CARD_COUNT
from deck import Card
from errors import DrawPileEmptyError
from game import GolfGame, RoundResult, RoundState

MAX_TURNS_PER_ROUND = 40  # Bots call golf once a round runs this long
MAX_ROUNDS_PER_GAME = 500  # Safety limit against endless tie-replays

GOLF_CALL_THRESHOLD = 8  # Call golf when the whole known hand is at most this
TAKE_DISCARD_MAX_VALUE = 3  # Take the discard when it is worth at most this
BLIND_SWAP_MAX_VALUE = 5  # Swap into an unknown slot when the card is at most this


class SimulationStats:
    """Track simulation statistics."""

    def __init__(self):
        self.games_played = 0
        self.total_rounds = 0
        self.total_turns = 0
        self.replayed_rounds = 0
        self.golf_calls = 0
        self.player_wins: dict[str, int] = {}
        self.letters_earned: dict[str, int] = {}

    def record_turn(self) -> None:
        self.total_turns += 1

    def record_round(self, result: RoundResult) -> None:
        self.total_rounds += 1
        self.golf_calls += 1
        if result.is_replay:
            self.replayed_rounds += 1
            return
        for player_id in result.round_loser_ids:
            name = result.players[player_id].name
            self.letters_earned[name] = self.letters_earned.get(name, 0) + 1

    def record_game(self, game: GolfGame) -> None:
        self.games_played += 1
        if game.game_winner_id:
            name = game.players[game.game_winner_id].name
            self.player_wins[name] = self.player_wins.get(name, 0) + 1

    def report(self) -> str:
        games = max(1, self.games_played)
        lines = [
            "=" * 50,
            "SIMULATION RESULTS",
            "=" * 50,
            f"Games played: {self.games_played}",
            f"Total rounds: {self.total_rounds}",
            f"Replayed (tied) rounds: {self.replayed_rounds}",
            f"Total turns: {self.total_turns}",
            f"Avg rounds/game: {self.total_rounds / games:.1f}",
            f"Avg turns/round: {self.total_turns / max(1, self.total_rounds):.1f}",
            "",
            "WIN RATES:",
        ]

        total_wins = sum(self.player_wins.values())
        for name, wins in sorted(self.player_wins.items(), key=lambda x: -x[1]):
            pct = wins / max(1, total_wins) * 100
            lines.append(f"  {name}: {wins} wins ({pct:.1f}%)")

        lines.append("")
        lines.append("LETTERS EARNED (lower is better):")
        for name, letters in sorted(self.letters_earned.items(), key=lambda x: x[1]):
            lines.append(f"  {name}: {letters}")

        return "\n".join(lines)


class BotMemory:
    """What one bot knows about its own hand, slot by slot."""

    def __init__(self, dealt: list):
        self.known: dict[int, Card] = {}
        for idx, card in enumerate(dealt):
            if isinstance(card, Card):
                self.known[idx] = card

    def known_total(self) -> Optional[int]:
        """Sum of the hand if every slot is known, else None."""
        if len(self.known) < HAND_SIZE:
            return None
        return sum(card.value() for card in self.known.values())

    def choose_slot(self, card: Card, rng: random.Random) -> Optional[int]:
        """Pick a slot to swap the card into, or None to discard it."""
        if self.known:
            worst_idx = max(self.known, key=lambda i: self.known[i].value())
            if card.value() < self.known[worst_idx].value():
                return worst_idx

        unknown = [i for i in range(HAND_SIZE) if i not in self.known]
        if unknown and card.value() <= BLIND_SWAP_MAX_VALUE:
            return rng.choice(unknown)
        return None


def play_turn(
    game: GolfGame,
    player_id: str,
    memory: BotMemory,
    rng: random.Random,
    must_call_golf: bool = False,
) -> str:
    """Play one bot turn. Returns a short description of the action."""
    if game.golf_caller_id is None:
        total = memory.known_total()
        if must_call_golf or (total is not None and total <= GOLF_CALL_THRESHOLD):
            game.call_golf(player_id)
            return "call golf"

    top = game.get_discard_pile_top_card()
    if top is not None and top.value() <= TAKE_DISCARD_MAX_VALUE:
        card = game.take_from_discard_pile(player_id)
        source = "discard"
    else:
        try:
            card = game.take_from_draw_pile(player_id)
            source = "draw"
        except DrawPileEmptyError:
            card = game.take_from_discard_pile(player_id)
            source = "discard"

    slot = memory.choose_slot(card, rng)
    if slot is None:
        game.discard_card(player_id)
        action = f"took {card} from {source}, discarded it"
    else:
        game.swap_card(player_id, slot)
        memory.known[slot] = card
        action = f"took {card} from {source}, swapped into slot {slot}"

    game.finish_turn(player_id)
    return action


def play_round(
    game: GolfGame,
    rng: random.Random,
    stats: SimulationStats,
    verbose: bool = False,
) -> RoundResult:
    """Play a dealt round to the end and score it."""
    memories = {
        pid: BotMemory(game.get_dealt_cards_for_player(pid))
        for pid in game.round_player_ids
    }

    for player_id in game.round_player_ids:
        game.toggle_player_round_ready(player_id)
    game.start_round()

    turns = 0
    while not game.is_round_finished():
        player_id = game.get_player_turn_id()
        action = play_turn(
            game, player_id, memories[player_id], rng,
            must_call_golf=turns >= MAX_TURNS_PER_ROUND,
        )
        stats.record_turn()
        turns += 1
        if verbose:
            print(f"  {game.players[player_id].name}: {action}")

    result = game.calculate_round_result()
    stats.record_round(result)
    return result


def run_game(
    num_players: int = 4,
    rng: Optional[random.Random] = None,
    stats: Optional[SimulationStats] = None,
    verbose: bool = False,
) -> GolfGame:
    """Run a complete game. Returns the finished GolfGame."""
    rng = rng or random.Random()
    stats = stats or SimulationStats()

    game = GolfGame(rng=rng)
    for i in range(num_players):
        game.add_player(f"bot_{i}", f"Bot {i + 1}")
        game.toggle_player_game_ready(f"bot_{i}")

    game.initialize_game()

    rounds = 0
    while not game.is_game_finished() and rounds < MAX_ROUNDS_PER_GAME:
        if game.round_state == RoundState.FINISHED:
            game.initialize_round()

        if verbose:
            dealer = game.game_player_ids[game.game_dealer_idx]
            print(f"\nRound {rounds + 1} (dealer {game.players[dealer].name})")

        result = play_round(game, rng, stats, verbose=verbose)
        rounds += 1

        if verbose:
            _print_round(game, result)

    stats.record_game(game)
    return game


def _print_round(game: GolfGame, result: RoundResult) -> None:
    for player_id in game.game_player_ids:
        player = result.players[player_id]
        if player.round_score is None:
            continue
        hand = " ".join(str(card) for card in player.cards)
        letters = game.game_word[:player.letter_count] or "-"
        print(f"    {player.name}: {hand} = {player.round_score}  [{letters}]")

    if result.is_replay:
        print("  Everyone left would be eliminated: replaying the round")
    else:
        losers = ", ".join(result.players[pid].name for pid in result.round_loser_ids)
        print(f"  Letter to: {losers}")


def run_simulation(num_games: int = 10, num_players: int = 4, verbose: bool = True):
    """Run multiple games and report statistics."""
    print(f"\nRunning {num_games} games with {num_players} players each...")
    print("=" * 50)

    stats = SimulationStats()
    for i in range(num_games):
        game = run_game(num_players, stats=stats)
        if verbose:
            winner = game.players[game.game_winner_id].name if game.game_winner_id else "none"
            print(f"Game {i + 1}/{num_games}: winner {winner}")

    print("\n")
    print(stats.report())


def run_detailed_game(num_players: int = 4):
    """Run a single game with round-by-round output."""
    print(f"\nRunning detailed game with {num_players} players...")
    print("=" * 50)

    stats = SimulationStats()
    game = run_game(num_players, stats=stats, verbose=True)

    print("\n" + "=" * 50)
    if game.game_winner_id:
        print(f"Winner: {game.players[game.game_winner_id].name}!")
    print(f"Rounds played: {stats.total_rounds}")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "detail":
        num_players = int(sys.argv[2]) if len(sys.argv) > 2 else 4
        run_detailed_game(num_players)
    else:
        num_games = int(sys.argv[1]) if len(sys.argv) > 1 else 10
        num_players = int(sys.argv[2]) if len(sys.argv) > 2 else 4
        run_simulation(num_games, num_players)
