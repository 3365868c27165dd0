"""
Health check endpoints for production deployment.

Provides:
- /health - Basic liveness check (is the app running?)
- /metrics - Game and connection counts for monitoring
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from game import GameState

router = APIRouter(tags=["health"])

# Service references (set during app initialization)
_room_manager = None
_session_manager = None


def set_health_dependencies(room_manager=None, session_manager=None):
    """Set dependencies for health checks."""
    global _room_manager, _session_manager
    _room_manager = room_manager
    _session_manager = session_manager


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class MetricsResponse(BaseModel):
    """Operational counters."""
    timestamp: str
    active_games: int = 0
    total_players: int = 0
    connected_players: int = 0
    games_in_progress: int = 0
    sessions: Optional[int] = None


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic liveness check - is the app running?

    This endpoint should always return 200 if the process is alive.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/metrics", response_model=MetricsResponse)
async def metrics():
    """Expose game and connection counts for dashboards and alerting."""
    data = MetricsResponse(timestamp=datetime.now(timezone.utc).isoformat())

    if _room_manager is not None:
        rooms = list(_room_manager.rooms.values())
        data.active_games = len(rooms)
        data.total_players = sum(len(r.game.players) for r in rooms)
        data.connected_players = sum(len(r.sockets) for r in rooms)
        data.games_in_progress = sum(
            1 for r in rooms if r.game.game_state == GameState.STARTED
        )

    if _session_manager is not None:
        data.sessions = len(_session_manager.sessions)

    return data
