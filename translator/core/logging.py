"""
Structured logging configuration for the translator bot.

Provides JSON-formatted logging with context tracking for Discord interactions.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from translator.core.config import settings

# =============================================================================
# Context Variables for Request/Interaction Tracking
# =============================================================================

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
interaction_id_var: ContextVar[str | None] = ContextVar("interaction_id", default=None)
command_var: ContextVar[str | None] = ContextVar("command", default=None)


# =============================================================================
# JSON Formatter
# =============================================================================


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs log records as JSON objects with timestamp, level, message,
    and additional context fields.
    """

    # Attributes present on every LogRecord; anything else came in through ``extra``
    _RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        interaction_id = interaction_id_var.get()
        if interaction_id:
            log_data["interaction_id"] = interaction_id

        command = command_var.get()
        if command:
            log_data["command"] = command

        for key, value in record.__dict__.items():
            if key not in self._RESERVED and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        log_data["module"] = record.module
        log_data["function"] = record.funcName
        log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


# =============================================================================
# Text Formatter (for human-readable output)
# =============================================================================


class TextFormatter(logging.Formatter):
    """
    Custom text formatter for human-readable logging.

    Provides colored output and structured information.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a colored text string."""
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")

        context_parts = []
        interaction_id = interaction_id_var.get()
        if interaction_id:
            context_parts.append(f"interaction={interaction_id[:8]}")

        command = command_var.get()
        if command:
            context_parts.append(f"command={command}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        message = (
            f"{color}{timestamp} {record.levelname:8s}{self.RESET} "
            f"{record.name}{context_str}: {record.getMessage()}"
        )

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


# =============================================================================
# Logger Configuration
# =============================================================================


def configure_logging() -> None:
    """
    Configure application logging based on settings.

    Sets up formatters, handlers, and log levels according to configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))

    root_logger.handlers.clear()

    if settings.log_format == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    if settings.log_output in ("stdout", "both"):
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(getattr(logging, settings.log_level))
        stdout_handler.setFormatter(formatter)
        root_logger.addHandler(stdout_handler)

    if settings.log_output in ("file", "both"):
        log_file_path = Path(settings.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(settings.log_file)
        file_handler.setLevel(getattr(logging, settings.log_level))
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set specific logger levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("celery").setLevel(logging.INFO)


# =============================================================================
# Logger Helper Functions
# =============================================================================


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: The logger name (typically __name__)

    Returns:
        logging.Logger: A configured logger instance
    """
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: The logger instance
        level: The log level (e.g., logging.INFO)
        message: The log message
        **extra: Additional context fields to include
    """
    logger.log(level, message, extra=extra)


def preview(text: str | None) -> str:
    """Shorten user text before it reaches a log line."""
    if not text:
        return ""
    limit = settings.log_message_preview_chars
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def short_fingerprint(fingerprint: str) -> str:
    return fingerprint[:12]


def set_request_id(request_id: str) -> None:
    """
    Set the request ID for the current context.

    Args:
        request_id: The request ID to set
    """
    request_id_var.set(request_id)


def clear_context() -> None:
    """Clear all context variables."""
    request_id_var.set(None)
    interaction_id_var.set(None)
    command_var.set(None)


# =============================================================================
# Context Manager for Interaction Logging
# =============================================================================


class InteractionLogContext:
    """
    Context manager for interaction logging.

    Sets interaction_id and command in the logging context and restores the
    previous values on exit.

    Example:
        with InteractionLogContext(interaction_id="1234", command="translate"):
            logger.info("Processing translation")
    """

    def __init__(self, interaction_id: str | None = None, command: str | None = None):
        self.interaction_id = interaction_id
        self.command = command
        self._tokens = []

    def __enter__(self) -> "InteractionLogContext":
        if self.interaction_id:
            self._tokens.append((interaction_id_var, interaction_id_var.set(self.interaction_id)))
        if self.command:
            self._tokens.append((command_var, command_var.set(self.command)))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()


# =============================================================================
# Initialize Logging on Module Import
# =============================================================================

configure_logging()
