"""Wire models for the Golf letters server."""

from .events import ServerEvent, ServerEventType
from .messages import (
    ChangeGameWordMessage,
    ChangeNameMessage,
    GameMessage,
    JoinGameMessage,
    KickPlayerMessage,
    SwapCardMessage,
)

__all__ = [
    "ServerEvent",
    "ServerEventType",
    "GameMessage",
    "JoinGameMessage",
    "KickPlayerMessage",
    "ChangeNameMessage",
    "ChangeGameWordMessage",
    "SwapCardMessage",
]
