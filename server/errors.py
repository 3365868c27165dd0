"""
Error types raised by the game engine and the room layer.

Illegal moves are not errors: engine methods reject them by returning
False/None without touching state. GameError covers lookups that fail
(unknown player, unknown game) and an exhausted draw pile, which the
transport reports back to the client by its ErrorType code.
"""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Error codes sent to clients in `error` messages."""

    GAME_NOT_FOUND = "game_not_found"
    PLAYER_NOT_FOUND = "player_not_found"
    NOT_PLAYER_TURN = "not_player_turn"
    INVALID_ACTION = "invalid_action"
    DRAW_PILE_EMPTY = "draw_pile_empty"


class GameError(Exception):
    """Base exception for game-related errors."""

    error_type: ErrorType = ErrorType.INVALID_ACTION

    def __init__(self, message: str, error_type: Optional[ErrorType] = None):
        if error_type is not None:
            self.error_type = error_type
        self.message = message
        super().__init__(f"[{self.error_type.value}] {message}")

    def to_dict(self) -> dict:
        """Error message payload for the client."""
        return {
            "type": "error",
            "error": self.error_type.value,
            "message": self.message,
        }


class GameNotFoundError(GameError):
    error_type = ErrorType.GAME_NOT_FOUND

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


class PlayerNotFoundError(GameError):
    error_type = ErrorType.PLAYER_NOT_FOUND

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")


class DrawPileEmptyError(GameError):
    """No card left to draw, even after reshuffling the discard pile."""

    error_type = ErrorType.DRAW_PILE_EMPTY

    def __init__(self):
        super().__init__("Draw pile is empty")
