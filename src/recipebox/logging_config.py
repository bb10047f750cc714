"""Logging setup with request, recipe and collection context."""

import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "recipebox-api"

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
recipe_id_ctx: ContextVar[str | None] = ContextVar("recipe_id", default=None)
collection_ctx: ContextVar[str | None] = ContextVar("collection", default=None)

# context name -> (variable, short label used by the text formatter)
_CONTEXT_VARS: dict[str, tuple[ContextVar[str | None], str]] = {
    "request_id": (request_id_ctx, "req"),
    "recipe_id": (recipe_id_ctx, "recipe"),
    "collection": (collection_ctx, "coll"),
}

# Third-party loggers that are too chatty at the application level
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "httpx": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def current_context() -> dict[str, str]:
    """Return the context values that are currently set."""
    return {name: value for name, (var, _) in _CONTEXT_VARS.items() if (value := var.get())}


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_context(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry["location"] = f"{record.module}:{record.funcName}:{record.lineno}"
        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Single-line text output for local development."""

    def format(self, record: logging.LogRecord) -> str:
        labels = [
            f"{label}={value[:8] if name == 'request_id' else value}"
            for name, (var, label) in _CONTEXT_VARS.items()
            if (value := var.get())
        ]
        context = f" [{' '.join(labels)}]" if labels else ""
        timestamp = datetime.fromtimestamp(record.created, timezone.utc)

        line = (
            f"{timestamp:%Y-%m-%d %H:%M:%S} | {record.levelname:<8} | "
            f"{record.name}{context} | {record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that attaches the current context to every record."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**current_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    log_level: str = "INFO",
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure the root logger for the API process.

    Args:
        log_level: Minimum level for recipebox loggers. ``LOG_LEVEL`` in the
            environment takes precedence.
        json_format: Emit JSON lines. If None, JSON is used when
            ``LOG_FORMAT=json`` is set.
        log_file: Optional file to write logs to as well as stdout.
    """
    if json_format is None:
        json_format = os.getenv("LOG_FORMAT", "").lower() == "json"

    level_name = os.getenv("LOG_LEVEL", log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    formatter = StructuredJsonFormatter() if json_format else ContextualFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("recipebox").setLevel(level)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))

    get_logger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={'json' if json_format else 'text'}"
    )


def set_context(
    request_id: str | None = None,
    recipe_id: str | None = None,
    collection: str | None = None,
) -> None:
    """Set context values for the rest of the current task."""
    values = {"request_id": request_id, "recipe_id": recipe_id, "collection": collection}
    for name, value in values.items():
        if value is not None:
            _CONTEXT_VARS[name][0].set(value)


def clear_context() -> None:
    """Unset every context value."""
    for var, _ in _CONTEXT_VARS.values():
        var.set(None)


class LoggingContext:
    """
    Scope context values to a block.

    Example:
        with LoggingContext(recipe_id=recipe.id, collection="shopping_list"):
            logger.info("Added entries")

    Values that were already set are restored on exit.
    """

    def __init__(
        self,
        request_id: str | None = None,
        recipe_id: str | None = None,
        collection: str | None = None,
    ):
        self.values = {
            "request_id": request_id,
            "recipe_id": recipe_id,
            "collection": collection,
        }
        self._tokens: list[tuple[ContextVar[str | None], Token]] = []

    def __enter__(self) -> "LoggingContext":
        for name, value in self.values.items():
            if value is not None:
                var = _CONTEXT_VARS[name][0]
                self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, *args: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)
