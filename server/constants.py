"""
Rule constants for Golf with letter elimination.

This module is the single source of truth for card point values and the
fixed sizes of the game (hand size, peek cards, players per deck).
Table limits that operators may tune come from config.py.

Scoring:
    - Ace: 1 point
    - 2-10: Face value
    - Jack: 0 points
    - Queen, King: 10 points

The highest hand of a round loses and earns a letter of the game word.
Spelling the whole word eliminates the player.
"""

from config import config


# =============================================================================
# Card Values - Single Source of Truth
# =============================================================================

RANK_SCORES: dict[str, int] = {
    'A': 1,
    '2': 2,
    '3': 3,
    '4': 4,
    '5': 5,
    '6': 6,
    '7': 7,
    '8': 8,
    '9': 9,
    '10': 10,
    'J': 0,
    'Q': 10,
    'K': 10,
}


# =============================================================================
# Game Constants
# =============================================================================

HAND_SIZE = 4            # Cards dealt to each round player
PEEK_CARD_COUNT = 2      # Last dealt cards a player may look at before play
PLAYERS_PER_DECK = 4     # One 52-card deck per (up to) this many players
MIN_PLAYERS = 2

# Placeholder sent in place of a card the viewer may not see
FACEDOWN = "facedown"

DEFAULT_GAME_WORD = config.game_defaults.game_word
MAX_PLAYERS = config.MAX_PLAYERS_PER_GAME
GAME_CODE_LENGTH = config.GAME_CODE_LENGTH
MAX_NAME_LENGTH = config.MAX_NAME_LENGTH
MAX_GAME_WORD_LENGTH = config.MAX_GAME_WORD_LENGTH
