"""LoggerProtocol definition for structured logging.

Every component receives a LoggerProtocol through its constructor and logs
a short snake_case event name plus key-value context. Implementations must
keep logs structured and must never log upload keys or AWS credentials.

Log Levels:
    - DEBUG: Diagnostic detail (empty-topic broadcasts, skipped keys)
    - INFO: Normal operation (subscribe, upload stored)
    - WARNING: Degraded but handled (thumbnail write failed, subscriber pruned)
    - ERROR: An operation failed (metadata record failed, storage write failed)
    - CRITICAL: The process cannot serve requests

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("subscriber_added", topic=topic, subscriber_id=sub.id)

    scoped = logger.bind(topic=topic)
    scoped.warning("subscriber_pruned", subscriber_id=sub.id)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind().

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
