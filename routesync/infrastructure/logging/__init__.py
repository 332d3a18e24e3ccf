"""Logging adapters implementing LoggerProtocol.

- ConsoleAdapter: structlog output to stdout (console or JSON renderer)
"""

from routesync.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
