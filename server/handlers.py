"""WebSocket message handlers for the Golf letters game.

Each handler corresponds to a single message type from the client.
Handlers are dispatched via the HANDLERS dict by `dispatch`, which turns
any GameError raised along the way into an `error` message for the sender.
Every game mutation happens under the room's game_lock.
"""

from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from fastapi import WebSocket
from pydantic import BaseModel, ValidationError

from constants import MAX_NAME_LENGTH, MAX_PLAYERS
from errors import ErrorType, GameError, PlayerNotFoundError
from game import GolfGame, cards_to_dict
from logging_config import game_id_var, get_logger
from models import events
from models.messages import (
    ChangeGameWordMessage,
    ChangeNameMessage,
    GameMessage,
    JoinGameMessage,
    KickPlayerMessage,
    SwapCardMessage,
)
from room import Room, RoomManager
from sessions import Session

logger = get_logger(__name__)

MessageT = TypeVar("MessageT", bound=BaseModel)


@dataclass
class ConnectionContext:
    """State tracked per WebSocket connection."""

    websocket: WebSocket
    session: Session
    current_room: Optional[Room] = None

    @property
    def player_id(self) -> str:
        return self.session.user_id

    async def send(self, event: events.ServerEvent) -> None:
        await self.websocket.send_json(event.to_dict())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse(model: Type[MessageT], data: dict) -> MessageT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise GameError(f"Invalid {data.get('type', 'message')} message") from e


def _get_seated_room(msg: GameMessage, ctx: ConnectionContext, room_manager: RoomManager) -> Room:
    """Look up the addressed room and make sure the sender plays in it."""
    room = room_manager.require_room(msg.game_id)
    if not room.game.has_player(ctx.player_id):
        raise PlayerNotFoundError(ctx.player_id)
    return room


def _require_turn(game: GolfGame, player_id: str) -> None:
    if game.get_player_turn_id() != player_id:
        raise GameError("It is not your turn", ErrorType.NOT_PLAYER_TURN)


def _enter_room(ctx: ConnectionContext, room: Room) -> None:
    ctx.current_room = room
    game_id_var.set(room.code)


async def _broadcast(room: Room, event: events.ServerEvent, exclude: Optional[str] = None) -> None:
    await room.broadcast(event.to_dict(), exclude=exclude)


async def _send_cards_dealt(room: Room) -> None:
    """Send every seated player their own peek view of the new deal."""
    game = room.game
    round_player_ids = list(game.round_player_ids)
    for player_id in room.player_ids():
        cards = cards_to_dict(game.get_dealt_cards_for_player(player_id))
        await room.send_to(
            player_id,
            events.cards_dealt(room.code, cards, round_player_ids).to_dict(),
        )


async def _score_finished_round(room: Room) -> bool:
    """Score and broadcast the round if play is back on the golf caller."""
    game = room.game
    if not game.is_round_finished():
        return False
    result = game.calculate_round_result()
    if result is None:
        return False
    logger.with_context(game_id=room.code).info(
        f"Round finished: losers={result.round_loser_ids}, "
        f"winner={result.game_winner_id}"
    )
    await _broadcast(room, events.round_finished(result.to_dict()))
    return True


async def _after_turn(room: Room) -> None:
    """Score the round if play came back to the golf caller, else pass the turn."""
    if not await _score_finished_round(room):
        await _broadcast(room, events.turn_finished(room.game.get_player_turn_id()))


# ---------------------------------------------------------------------------
# Lobby handlers
# ---------------------------------------------------------------------------

async def handle_create_game(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    room = room_manager.create_room()
    await ctx.send(events.game_created(room.code))


async def handle_join_game(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(JoinGameMessage, data)
    room = room_manager.require_room(msg.game_id)
    game = room.game

    if ctx.current_room is not None and ctx.current_room is not room:
        await handle_disconnect(ctx, room_manager=room_manager)

    async with room.game_lock:
        if game.has_player(ctx.player_id):
            room.attach(ctx.player_id, ctx.websocket)
            await _broadcast(room, events.player_rejoined_game(ctx.player_id), exclude=ctx.player_id)
            logger.with_context(game_id=room.code).info(f"Player {ctx.player_id} rejoined")
        else:
            if len(game.players) >= MAX_PLAYERS:
                raise GameError("Game is full")

            name = (msg.name or "").strip()[:MAX_NAME_LENGTH] or None
            if not room.add_player(ctx.player_id, ctx.websocket, name):
                raise GameError("Game already in progress")

            player = game.get_player(ctx.player_id)
            await _broadcast(room, events.player_joined_game(player.to_dict()), exclude=ctx.player_id)
            logger.with_context(game_id=room.code).info(f"Player {ctx.player_id} joined")

        _enter_room(ctx, room)
        await ctx.send(events.game_joined(
            room.code,
            game.get_state_for_player(ctx.player_id),
            room.host_id,
        ))


async def handle_kick_player(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(KickPlayerMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    if not room.is_host(ctx.player_id):
        raise GameError("Only the host can kick players")
    if msg.player_id == ctx.player_id:
        raise GameError("You cannot kick yourself")

    async with room.game_lock:
        kicked_socket = room.sockets.get(msg.player_id)
        room.remove_player(msg.player_id)

        game = room.game
        event = events.player_left_game(
            msg.player_id,
            game.get_player_turn_id(),
            game.turn_state.value,
            game.game_winner_id,
        )
        await _broadcast(room, event)

        # The kicked player is no longer in room.sockets
        if kicked_socket is not None:
            try:
                await kicked_socket.send_json(event.to_dict())
            except Exception as e:
                logger.debug(f"Could not notify kicked player {msg.player_id}: {e}")

        # Kicking the last player before the golf caller ends the round
        await _score_finished_round(room)

    logger.with_context(game_id=room.code).info(f"Player {msg.player_id} kicked by {ctx.player_id}")


async def handle_change_name(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(ChangeNameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        if not room.game.change_name(ctx.player_id, msg.name):
            raise GameError("Invalid name")
        name = room.game.get_player(ctx.player_id).name
        await _broadcast(room, events.player_name_changed(ctx.player_id, name))


async def handle_change_game_word(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(ChangeGameWordMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        if not room.game.change_game_word(msg.game_word):
            raise GameError("Game word cannot be changed now")
        await _broadcast(room, events.game_word_changed(room.game.game_word))


async def handle_toggle_game_ready(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        is_ready = room.game.toggle_player_game_ready(ctx.player_id)
        await ctx.send(events.game_ready_toggled(is_ready))
        await _broadcast(
            room,
            events.player_game_ready_changed(ctx.player_id, is_ready),
            exclude=ctx.player_id,
        )


async def handle_toggle_round_ready(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)
    game = room.game

    async with room.game_lock:
        is_ready = game.toggle_player_round_ready(ctx.player_id)
        await ctx.send(events.round_ready_toggled(is_ready))
        await _broadcast(
            room,
            events.player_round_ready_changed(ctx.player_id, is_ready),
            exclude=ctx.player_id,
        )

        # Last one to finish peeking starts the round
        if game.start_round():
            await _broadcast(room, events.round_started(
                game.get_discard_pile_top_card(),
                game.get_player_turn_id(),
                game.get_draw_pile_card_count(),
            ))


# ---------------------------------------------------------------------------
# Game lifecycle handlers
# ---------------------------------------------------------------------------

async def handle_start_game(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)
    game = room.game

    async with room.game_lock:
        if not game.initialize_game():
            raise GameError("Game cannot start until at least two players are ready")

        for player_id in room.player_ids():
            await room.send_to(player_id, events.game_started(
                room.code,
                game.get_player_view(player_id),
                game.get_other_player_views(player_id),
            ).to_dict())
        await _send_cards_dealt(room)

    logger.with_context(game_id=room.code).info(f"Game started by {ctx.player_id}")


async def handle_deal_new_round(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        if not room.game.initialize_round():
            raise GameError("A new round cannot be dealt now")
        await _send_cards_dealt(room)


async def handle_reset_game(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        room.game.reset_game()
        await _broadcast(room, events.game_reset())

    logger.with_context(game_id=room.code).info(f"Game reset by {ctx.player_id}")


# ---------------------------------------------------------------------------
# Turn action handlers
# ---------------------------------------------------------------------------

async def handle_take_discard_pile(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        _require_turn(room.game, ctx.player_id)
        if room.game.take_from_discard_pile(ctx.player_id) is None:
            raise GameError("Cannot take from the discard pile now")
        await _broadcast(room, events.discard_pile_taken(ctx.player_id))


async def handle_take_draw_pile(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)
    game = room.game

    async with room.game_lock:
        _require_turn(game, ctx.player_id)
        card = game.take_from_draw_pile(ctx.player_id)
        if card is None:
            raise GameError("Cannot take from the draw pile now")

        await ctx.send(events.draw_pile_card(card))
        await _broadcast(
            room,
            events.draw_pile_taken(ctx.player_id, game.get_draw_pile_card_count()),
            exclude=ctx.player_id,
        )


async def handle_swap_card(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(SwapCardMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        _require_turn(room.game, ctx.player_id)
        discarded = room.game.swap_card(ctx.player_id, msg.swap_card_idx)
        if discarded is None:
            raise GameError("Cannot swap a card now")
        await _broadcast(room, events.card_swapped(ctx.player_id, discarded, msg.swap_card_idx))


async def handle_discard_card(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        _require_turn(room.game, ctx.player_id)
        discarded = room.game.discard_card(ctx.player_id)
        if discarded is None:
            raise GameError("Cannot discard now")
        await _broadcast(room, events.card_discarded(ctx.player_id, discarded))


async def handle_finish_turn(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        _require_turn(room.game, ctx.player_id)
        if not room.game.finish_turn(ctx.player_id):
            raise GameError("Swap or discard a card before finishing your turn")
        await _after_turn(room)


async def handle_call_golf(data: dict, ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    msg = _parse(GameMessage, data)
    room = _get_seated_room(msg, ctx, room_manager)

    async with room.game_lock:
        _require_turn(room.game, ctx.player_id)
        if not room.game.call_golf(ctx.player_id):
            raise GameError("Cannot call golf now")
        await _broadcast(room, events.golf_called(ctx.player_id))
        await _after_turn(room)


# ---------------------------------------------------------------------------
# Connection lifecycle
# ---------------------------------------------------------------------------

async def handle_disconnect(ctx: ConnectionContext, *, room_manager: RoomManager, **kw) -> None:
    """
    Mark the connection's player disconnected and drop the room once
    nobody in it is connected any more.
    """
    room = ctx.current_room
    if room is None:
        return
    ctx.current_room = None

    async with room.game_lock:
        if room.detach(ctx.player_id, ctx.websocket):
            await _broadcast(room, events.player_disconnected(ctx.player_id))

        if not room.is_any_player_connected():
            room_manager.remove_room(room.code)


# ---------------------------------------------------------------------------
# Handler dispatch table
# ---------------------------------------------------------------------------

HANDLERS = {
    "create_game": handle_create_game,
    "join_game": handle_join_game,
    "start_game": handle_start_game,
    "reset_game": handle_reset_game,
    "deal_new_round": handle_deal_new_round,
    "kick_player": handle_kick_player,
    "change_name": handle_change_name,
    "change_game_word": handle_change_game_word,
    "toggle_game_ready": handle_toggle_game_ready,
    "toggle_round_ready": handle_toggle_round_ready,
    "take_discard_pile": handle_take_discard_pile,
    "take_draw_pile": handle_take_draw_pile,
    "swap_card": handle_swap_card,
    "discard_card": handle_discard_card,
    "finish_turn": handle_finish_turn,
    "call_golf": handle_call_golf,
}


async def dispatch(data: dict, ctx: ConnectionContext, **deps) -> None:
    """
    Route one inbound message to its handler.

    Unknown message types are ignored. A GameError from the handler is
    reported to the sender as an `error` message.
    """
    message_type = data.get("type") if isinstance(data, dict) else None
    handler = HANDLERS.get(message_type)
    if handler is None:
        logger.debug(f"Ignoring message of unknown type {message_type!r}")
        return

    try:
        await handler(data, ctx, **deps)
    except GameError as e:
        logger.info(f"{message_type} rejected for {ctx.player_id}: {e.message}")
        await ctx.websocket.send_json(e.to_dict())
    except Exception:
        logger.exception(f"Error handling {message_type} for {ctx.player_id}")
