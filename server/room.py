"""
Room management for multiplayer Golf games.

This module binds a GolfGame to the WebSocket connections of its players.

A Room contains:
    - A unique 4-letter code that doubles as the game id
    - A GolfGame instance with the actual game state
    - The open WebSocket of each connected player
    - The host (the only player allowed to kick others)
    - A lock that serializes every mutation of the game
"""

import asyncio
import logging
import random
import string
from dataclasses import dataclass, field
from typing import Optional

from fastapi import WebSocket

from constants import GAME_CODE_LENGTH
from errors import GameNotFoundError
from game import GolfGame, Player

logger = logging.getLogger(__name__)


@dataclass
class Room:
    """
    A game room that hosts one Golf game.

    Attributes:
        code: Room code for joining (e.g., "ABCD"), also used as game id.
        game: The GolfGame instance containing actual game state.
        sockets: Open WebSocket per connected player id.
        host_id: Player who controls the room (first to join).
        game_lock: asyncio.Lock for serializing game mutations to prevent race conditions.
    """

    code: str
    game: GolfGame = field(default_factory=GolfGame)
    sockets: dict[str, WebSocket] = field(default_factory=dict)
    host_id: Optional[str] = None
    game_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def add_player(
        self,
        player_id: str,
        websocket: WebSocket,
        name: Optional[str] = None,
    ) -> bool:
        """
        Seat a new player and attach their connection.

        The first player to join becomes the host.

        Returns:
            True if seated, False if the game refused the player.
        """
        if not self.game.add_player(player_id, name):
            return False

        self.attach(player_id, websocket)
        if self.host_id is None:
            self.host_id = player_id
        return True

    def remove_player(self, player_id: str) -> Player:
        """
        Remove a player from the game and drop their connection.

        Hands host status to the next seated player if the host leaves.

        Raises:
            PlayerNotFoundError: If the player is not in the game.
        """
        player = self.game.remove_player(player_id)
        self.sockets.pop(player_id, None)

        if self.host_id == player_id:
            self._reassign_host()
        return player

    def attach(self, player_id: str, websocket: WebSocket) -> None:
        """Bind a (new) connection to a player and mark them connected."""
        self.sockets[player_id] = websocket
        self.game.connect_player(player_id)

    def detach(self, player_id: str, websocket: Optional[WebSocket] = None) -> bool:
        """
        Drop a player's connection and mark them disconnected.

        Args:
            player_id: The disconnecting player.
            websocket: If given, only detach when this is still the
                player's current connection (a newer tab may have taken over).

        Returns:
            True if the player was detached.
        """
        current = self.sockets.get(player_id)
        if current is None or (websocket is not None and current is not websocket):
            return False

        del self.sockets[player_id]
        if self.game.has_player(player_id):
            self.game.disconnect_player(player_id)
        if self.host_id == player_id:
            self._reassign_host()
        return True

    def _reassign_host(self) -> None:
        """Pass host to the next seated player, preferring connected ones."""
        seated = self.player_ids()
        connected = [pid for pid in seated if pid in self.sockets]
        candidates = connected or seated
        self.host_id = candidates[0] if candidates else None
        if self.host_id:
            logger.debug(f"Room {self.code}: host is now {self.host_id}")

    def is_host(self, player_id: str) -> bool:
        return self.host_id == player_id

    def player_ids(self) -> list[str]:
        """Seated players in seating order."""
        return list(self.game.game_player_ids)

    def is_empty(self) -> bool:
        return not self.game.players

    def is_any_player_connected(self) -> bool:
        return bool(self.sockets) and self.game.is_any_player_connected()

    async def broadcast(self, message: dict, exclude: Optional[str] = None) -> None:
        """
        Send a message to every connected player in the room.

        Args:
            message: JSON-serializable message dict.
            exclude: Optional player ID to skip.
        """
        for player_id, websocket in list(self.sockets.items()):
            if player_id == exclude:
                continue
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.debug(f"Room {self.code}: send to {player_id} failed: {e}")

    async def send_to(self, player_id: str, message: dict) -> None:
        """
        Send a message to a specific player.

        Args:
            player_id: ID of the recipient player.
            message: JSON-serializable message dict.
        """
        websocket = self.sockets.get(player_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.debug(f"Room {self.code}: send to {player_id} failed: {e}")


class RoomManager:
    """
    Manages all active game rooms.

    Provides room creation with unique codes, lookup, and cleanup.
    A single RoomManager instance is used by the server.
    """

    def __init__(self) -> None:
        self.rooms: dict[str, Room] = {}

    def _generate_code(self, max_attempts: int = 100) -> str:
        """Generate a unique room code."""
        for _ in range(max_attempts):
            code = "".join(random.choices(string.ascii_uppercase, k=GAME_CODE_LENGTH))
            if code not in self.rooms:
                return code
        raise RuntimeError("Could not generate unique room code")

    def create_room(self) -> Room:
        """
        Create a new room with a unique code.

        Returns:
            The newly created Room.
        """
        code = self._generate_code()
        room = Room(code=code)
        self.rooms[code] = room
        logger.info(f"Room {code} created")
        return room

    def get_room(self, code: str) -> Optional[Room]:
        """
        Get a room by its code (case-insensitive).

        Args:
            code: The room code.

        Returns:
            The Room if found, None otherwise.
        """
        return self.rooms.get((code or "").upper())

    def require_room(self, code: str) -> Room:
        """
        Get a room by its code, raising if it does not exist.

        Raises:
            GameNotFoundError: If no room has that code.
        """
        room = self.get_room(code)
        if room is None:
            raise GameNotFoundError(code)
        return room

    def remove_room(self, code: str) -> None:
        if self.rooms.pop(code, None) is not None:
            logger.info(f"Room {code} removed")

    def find_player_room(self, player_id: str) -> Optional[Room]:
        """
        Find which room a player is seated in.

        Args:
            player_id: The player ID to search for.

        Returns:
            The Room containing the player, or None.
        """
        for room in self.rooms.values():
            if room.game.has_player(player_id):
                return room
        return None
