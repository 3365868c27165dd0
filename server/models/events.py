"""
Server-to-client event definitions for the Golf letters game.

Every message the server sends is a ServerEvent: a type from
ServerEventType plus a flat payload. The factory functions below are the
only place message shapes are defined, so handlers never build raw dicts.

Wire format:
    {"type": "<event_type>", ...payload fields}
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from deck import Card


class ServerEventType(str, Enum):
    """All message types the server sends."""

    # Session / errors
    SESSION_CREATED = "session_created"
    ERROR = "error"

    # Lobby
    GAME_CREATED = "game_created"
    GAME_JOINED = "game_joined"
    GAME_WORD_CHANGED = "game_word_changed"
    GAME_READY_TOGGLED = "game_ready_toggled"
    ROUND_READY_TOGGLED = "round_ready_toggled"

    # Lifecycle
    GAME_STARTED = "game_started"
    GAME_RESET = "game_reset"
    CARDS_DEALT = "cards_dealt"
    ROUND_STARTED = "round_started"
    ROUND_FINISHED = "round_finished"

    # Turn flow
    DISCARD_PILE_TAKEN = "discard_pile_taken"
    DRAW_PILE_TAKEN = "draw_pile_taken"
    DRAW_PILE_CARD = "draw_pile_card"
    CARD_DISCARDED = "card_discarded"
    CARD_SWAPPED = "card_swapped"
    TURN_FINISHED = "turn_finished"
    GOLF_CALLED = "golf_called"

    # Players
    PLAYER_JOINED_GAME = "player_joined_game"
    PLAYER_REJOINED_GAME = "player_rejoined_game"
    PLAYER_DISCONNECTED = "player_disconnected"
    PLAYER_LEFT_GAME = "player_left_game"
    PLAYER_NAME_CHANGED = "player_name_changed"
    PLAYER_GAME_READY_CHANGED = "player_game_ready_changed"
    PLAYER_ROUND_READY_CHANGED = "player_round_ready_changed"


@dataclass
class ServerEvent:
    """
    A message to one or more clients.

    Attributes:
        event_type: The type of message (from ServerEventType enum).
        data: Message-specific payload, merged into the top level on the wire.
    """

    event_type: ServerEventType
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to the JSON-ready wire format."""
        return {"type": self.event_type.value, **self.data}


def _card(card: Optional[Card]) -> Optional[dict]:
    return card.to_dict() if card else None


# =============================================================================
# Event Factory Functions
# =============================================================================


def session_created(session_id: str, user_id: str) -> ServerEvent:
    """
    Sent once per connection so the client can resume the session later.

    Args:
        session_id: Id to pass back as ?session_id= on reconnect.
        user_id: The player id this session plays as.
    """
    return ServerEvent(
        ServerEventType.SESSION_CREATED,
        {"session_id": session_id, "user_id": user_id},
    )


def game_created(game_id: str) -> ServerEvent:
    return ServerEvent(ServerEventType.GAME_CREATED, {"game_id": game_id})


def game_joined(game_id: str, state: dict, host_id: Optional[str]) -> ServerEvent:
    """
    Reply to join_game with the joining player's full view of the game.

    Args:
        game_id: Room code of the game.
        state: GolfGame.get_state_for_player() output for the joiner.
        host_id: Player who may kick others.
    """
    return ServerEvent(
        ServerEventType.GAME_JOINED,
        {"game_id": game_id, "state": state, "host_id": host_id},
    )


def game_started(game_id: str, player: dict, players: list[dict]) -> ServerEvent:
    """
    Sent to each player individually when the game starts.

    Args:
        game_id: Room code of the game.
        player: The recipient's own view.
        players: The other players in seating order after the recipient.
    """
    return ServerEvent(
        ServerEventType.GAME_STARTED,
        {"game_id": game_id, "player": player, "players": players},
    )


def cards_dealt(
    game_id: str,
    cards: Optional[list],
    round_player_ids: list[str],
) -> ServerEvent:
    """
    Sent to each player individually after a deal.

    Args:
        game_id: Room code of the game.
        cards: The recipient's peek view (last two cards visible), or None
            if they are not playing this round.
        round_player_ids: Players dealt into the round, in turn order.
    """
    return ServerEvent(
        ServerEventType.CARDS_DEALT,
        {"game_id": game_id, "cards": cards, "round_player_ids": round_player_ids},
    )


def round_started(
    discard_pile_top: Optional[Card],
    player_turn_id: Optional[str],
    draw_pile_card_count: int,
) -> ServerEvent:
    return ServerEvent(
        ServerEventType.ROUND_STARTED,
        {
            "discard_pile_top": _card(discard_pile_top),
            "player_turn_id": player_turn_id,
            "draw_pile_card_count": draw_pile_card_count,
        },
    )


def round_finished(result: dict) -> ServerEvent:
    """
    Broadcast the scored round.

    Args:
        result: RoundResult.to_dict() output (all hands revealed).
    """
    return ServerEvent(ServerEventType.ROUND_FINISHED, result)


def game_reset() -> ServerEvent:
    return ServerEvent(ServerEventType.GAME_RESET)


def discard_pile_taken(player_id: str) -> ServerEvent:
    return ServerEvent(ServerEventType.DISCARD_PILE_TAKEN, {"player_id": player_id})


def draw_pile_taken(player_id: str, draw_pile_card_count: int) -> ServerEvent:
    """Tell the other players someone drew. The card itself stays private."""
    return ServerEvent(
        ServerEventType.DRAW_PILE_TAKEN,
        {"player_id": player_id, "draw_pile_card_count": draw_pile_card_count},
    )


def draw_pile_card(card: Card) -> ServerEvent:
    """Private reply to the drawing player with the card they drew."""
    return ServerEvent(ServerEventType.DRAW_PILE_CARD, {"card": card.to_dict()})


def card_discarded(player_id: str, discarded_card: Card) -> ServerEvent:
    return ServerEvent(
        ServerEventType.CARD_DISCARDED,
        {"player_id": player_id, "discarded_card": discarded_card.to_dict()},
    )


def card_swapped(player_id: str, discarded_card: Card, swap_card_idx: int) -> ServerEvent:
    return ServerEvent(
        ServerEventType.CARD_SWAPPED,
        {
            "player_id": player_id,
            "discarded_card": discarded_card.to_dict(),
            "swap_card_idx": swap_card_idx,
        },
    )


def turn_finished(player_turn_id: Optional[str]) -> ServerEvent:
    return ServerEvent(ServerEventType.TURN_FINISHED, {"player_turn_id": player_turn_id})


def golf_called(golf_caller_id: str) -> ServerEvent:
    return ServerEvent(ServerEventType.GOLF_CALLED, {"golf_caller_id": golf_caller_id})


def game_word_changed(game_word: str) -> ServerEvent:
    return ServerEvent(ServerEventType.GAME_WORD_CHANGED, {"game_word": game_word})


def game_ready_toggled(is_game_ready: bool) -> ServerEvent:
    return ServerEvent(ServerEventType.GAME_READY_TOGGLED, {"is_game_ready": is_game_ready})


def round_ready_toggled(is_round_ready: bool) -> ServerEvent:
    return ServerEvent(ServerEventType.ROUND_READY_TOGGLED, {"is_round_ready": is_round_ready})


def player_joined_game(player: dict) -> ServerEvent:
    return ServerEvent(ServerEventType.PLAYER_JOINED_GAME, {"player": player})


def player_rejoined_game(player_id: str) -> ServerEvent:
    return ServerEvent(ServerEventType.PLAYER_REJOINED_GAME, {"player_id": player_id})


def player_disconnected(player_id: str) -> ServerEvent:
    return ServerEvent(ServerEventType.PLAYER_DISCONNECTED, {"player_id": player_id})


def player_left_game(
    player_id: str,
    player_turn_id: Optional[str],
    turn_state: str,
    game_winner_id: Optional[str] = None,
) -> ServerEvent:
    """
    Broadcast a removal along with the (possibly moved) turn pointer.

    Args:
        player_id: The removed player.
        player_turn_id: Whose turn it is after the removal.
        turn_state: Turn state after the removal.
        game_winner_id: Set if the removal left a single player standing.
    """
    return ServerEvent(
        ServerEventType.PLAYER_LEFT_GAME,
        {
            "player_id": player_id,
            "player_turn_id": player_turn_id,
            "turn_state": turn_state,
            "game_winner_id": game_winner_id,
        },
    )


def player_name_changed(player_id: str, name: str) -> ServerEvent:
    return ServerEvent(
        ServerEventType.PLAYER_NAME_CHANGED,
        {"player_id": player_id, "name": name},
    )


def player_game_ready_changed(player_id: str, is_game_ready: bool) -> ServerEvent:
    return ServerEvent(
        ServerEventType.PLAYER_GAME_READY_CHANGED,
        {"player_id": player_id, "is_game_ready": is_game_ready},
    )


def player_round_ready_changed(player_id: str, is_round_ready: bool) -> ServerEvent:
    return ServerEvent(
        ServerEventType.PLAYER_ROUND_READY_CHANGED,
        {"player_id": player_id, "is_round_ready": is_round_ready},
    )
