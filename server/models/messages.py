"""
Client-to-server message payloads.

Each inbound message type that carries arguments has a model here;
handlers validate the raw JSON dict with `model_validate` before touching
the game. Unknown extra fields are ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field

from constants import HAND_SIZE


# =============================================================================
# Request Models
# =============================================================================


class GameMessage(BaseModel):
    """Any message addressed to an existing game."""
    game_id: str = Field(min_length=1)


class JoinGameMessage(GameMessage):
    name: Optional[str] = None


class KickPlayerMessage(GameMessage):
    player_id: str = Field(min_length=1)


class ChangeNameMessage(GameMessage):
    name: str


class ChangeGameWordMessage(GameMessage):
    game_word: str


class SwapCardMessage(GameMessage):
    swap_card_idx: int = Field(ge=0, lt=HAND_SIZE)
