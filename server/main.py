"""FastAPI WebSocket server for the Golf letters card game."""

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from config import config
from errors import GameError
from handlers import ConnectionContext, dispatch, handle_disconnect
from logging_config import session_id_var, setup_logging, user_id_var
from models import events
from room import RoomManager
from routers.health import router as health_router, set_health_dependencies
from sessions import SessionManager

# Configure logging based on environment
setup_logging(
    level=config.LOG_LEVEL,
    environment=config.ENVIRONMENT,
)
logger = logging.getLogger(__name__)

room_manager = RoomManager()
session_manager = SessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    set_health_dependencies(
        room_manager=room_manager,
        session_manager=session_manager,
    )
    logger.info(f"Golf server started (environment={config.ENVIRONMENT})")

    yield

    logger.info("Shutdown initiated...")
    await _close_all_websockets()
    logger.info("Shutdown complete")


async def _close_all_websockets():
    """Close all active WebSocket connections gracefully."""
    for room in list(room_manager.rooms.values()):
        for websocket in list(room.sockets.values()):
            try:
                await websocket.close(code=1001, reason="Server shutting down")
            except Exception as e:
                logger.debug(f"Error closing websocket: {e}")
    logger.info("All WebSocket connections closed")


app = FastAPI(
    title="Golf Letters",
    debug=config.DEBUG,
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(health_router)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()

    # Reconnecting clients pass back the session id they were given
    session, created = session_manager.resume_or_create(
        websocket.query_params.get("session_id")
    )
    session_id_var.set(session.id)
    user_id_var.set(session.user_id)

    if created:
        logger.debug(f"WebSocket connected with new session {session.id}")
    else:
        logger.debug(f"WebSocket resumed session {session.id}")

    ctx = ConnectionContext(websocket=websocket, session=session)
    await ctx.send(events.session_created(session.id, session.user_id))

    await serve_connection(ctx, room_manager=room_manager)


async def serve_connection(ctx: ConnectionContext, **handler_deps) -> None:
    """
    Receive and dispatch client messages until the socket closes.

    A frame that is not valid JSON is answered with an error and skipped.
    However the loop ends, the player is marked disconnected.
    """
    try:
        while True:
            raw = await ctx.websocket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning(f"Malformed frame from {ctx.player_id}")
                await ctx.websocket.send_json(GameError("Malformed message").to_dict())
                continue
            await dispatch(data, ctx, **handler_deps)
    except WebSocketDisconnect:
        logger.debug(f"WebSocket closed for {ctx.player_id}")
    finally:
        await handle_disconnect(ctx, **handler_deps)


def run():
    """Run the server using uvicorn."""
    import uvicorn

    logger.info(f"Starting Golf server on {config.HOST}:{config.PORT}")
    logger.info(f"Debug mode: {config.DEBUG}")

    uvicorn.run(
        "main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
