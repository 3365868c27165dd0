"""
Cards and deck helpers for Golf.

Pure functions consumed by the game engine: building standard 52-card
decks, shuffling one or more of them together, and scoring a hand from
the fixed rank table in constants.py.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from constants import PLAYERS_PER_DECK, RANK_SCORES


class Suit(str, Enum):
    """Card suits for a standard deck."""

    SPADES = "♠"
    CLUBS = "♣"
    HEARTS = "♥"
    DIAMONDS = "♦"


class Rank(str, Enum):
    """Card ranks with their display values."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


# Map Rank enum to point values (derived from constants.py as single source of truth)
RANK_VALUES: dict[Rank, int] = {rank: RANK_SCORES[rank.value] for rank in Rank}


@dataclass(frozen=True)
class Card:
    """
    A playing card. Cards are values: they are never mutated once created,
    so piles and hands can share them freely.

    Attributes:
        suit: The card's suit.
        rank: The card's rank.
    """

    suit: Suit
    rank: Rank

    def to_dict(self) -> dict:
        """Convert card to dictionary for JSON serialization."""
        return {"suit": self.suit.value, "rank": self.rank.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        """Build a card from its JSON form."""
        return cls(Suit(data["suit"]), Rank(data["rank"]))

    def value(self) -> int:
        """Get point value of this card."""
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


def create_deck() -> list[Card]:
    """Build one unshuffled 52-card deck, suit by suit."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def get_shuffled_deck(
    number_of_decks: int = 1,
    rng: Optional[random.Random] = None,
) -> list[Card]:
    """
    Combine several standard decks and shuffle them together.

    Args:
        number_of_decks: How many 52-card decks to combine.
        rng: Optional random source for deterministic shuffles.
             Defaults to the module-level random generator.

    Returns:
        Shuffled list of cards. The end of the list is the top of the pile.
    """
    if number_of_decks < 1:
        raise ValueError(f"number_of_decks must be at least 1, got {number_of_decks}")

    cards: list[Card] = []
    for _ in range(number_of_decks):
        cards.extend(create_deck())

    (rng or random).shuffle(cards)
    return cards


def calculate_score(cards: Iterable[Card]) -> int:
    """
    Sum the point values of a hand.

    Example: [A♠, 10♣, J♥, Q♦] scores 1 + 10 + 0 + 10 = 21.
    """
    return sum(RANK_SCORES[card.rank.value] for card in cards)


def deck_count_for(player_count: int) -> int:
    """Number of decks needed to deal a round: one per (up to) four players."""
    return (player_count - 1) // PLAYERS_PER_DECK + 1
