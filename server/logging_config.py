"""
Structured logging configuration for the Golf letters server.

Provides:
- JSONFormatter for production (one JSON object per line)
- Colored, human-readable formatter for development
- Connection-scoped context (session_id, user_id, game_id) via ContextVars,
  set by the WebSocket loop so every log line from a handler carries it
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Context variables for connection-scoped data
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)
game_id_var: ContextVar[Optional[str]] = ContextVar("game_id", default=None)

# Record attributes copied into JSON output when passed via `extra=`
EXTRA_FIELDS = ("session_id", "user_id", "game_id", "player_id", "event")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for production log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Context variables are applied first, so an explicit `extra=` value
        on the call wins over the connection context.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, var in (
            ("session_id", session_id_var),
            ("user_id", user_id_var),
            ("game_id", game_id_var),
        ):
            value = var.get()
            if value:
                log_data[key] = value

        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value:
                log_data[key] = value

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter with level colors and a short context tag."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = self.RESET if color else ""

        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]

        context_parts = []
        session_id = session_id_var.get() or getattr(record, "session_id", None)
        if session_id:
            context_parts.append(f"sess={session_id[:8]}")

        user_id = user_id_var.get() or getattr(record, "user_id", None)
        if user_id:
            context_parts.append(f"user={user_id[:8]}")

        game_id = game_id_var.get() or getattr(record, "game_id", None)
        if game_id:
            context_parts.append(f"game={game_id}")

        context = f" [{', '.join(context_parts)}]" if context_parts else ""

        output = (
            f"{timestamp} {color}{record.levelname:8}{reset} "
            f"{record.name}{context} - {record.getMessage()}"
        )

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        environment: Environment name (production uses JSON, else human-readable).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if environment == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    # Reduce noise from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level}, environment={environment}"
    )


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that automatically includes context.

    Usage:
        logger = get_logger(__name__)
        logger.with_context(game_id="ABCD", player_id="u1").info("Player joined")
    """

    def __init__(self, logger: logging.Logger, extra: Optional[dict] = None):
        super().__init__(logger, extra or {})

    def with_context(self, **kwargs) -> "ContextLogger":
        """Return a new logger with the given key-value pairs added to its context."""
        return ContextLogger(self.logger, {**self.extra, **kwargs})

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        ContextLogger instance.
    """
    return ContextLogger(logging.getLogger(name))
