"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the codebase while
remaining backend-agnostic. Every component that reports progress (the
compiler, the gateway client, the orchestrator) accepts any object with
these call signatures, including the no-op NullLogger.

Log Levels (standard 5-level hierarchy):
    - DEBUG: Detailed diagnostic info (per-layer traversal)
    - INFO: Normal operational events (walk started, endpoint registered)
    - WARNING: Degraded results (ambiguous paths, undecodable patterns)
    - ERROR: Operation failed (gateway call rejected)
    - CRITICAL: Unrecoverable failures

Security:
    - NEVER log client secrets or bearer tokens

Usage:
    from routesync.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    logger.info("endpoint_registered", method="GET", path="/users")

    run_logger = logger.bind(api_id="orders")
    run_logger.info("route_sync_started")  # api_id auto-included
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name or short message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Event name or short message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Event name or short message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for unrecoverable failures.

        Args:
            message: Event name or short message.
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind() - return logger with bound context.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...


class NullLogger:
    """Logger that accepts every LoggerProtocol call and discards it.

    Default for components constructed without a logger, so they never
    check for ``None`` before logging.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        pass

    def info(self, message: str, /, **context: Any) -> None:
        pass

    def warning(self, message: str, /, **context: Any) -> None:
        pass

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        pass

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        pass

    def bind(self, **context: Any) -> NullLogger:
        return self

    def with_context(self, **context: Any) -> NullLogger:
        return self
