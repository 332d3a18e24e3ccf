"""Shared pytest fixtures.

Provides:
- A MagicMock logger satisfying LoggerProtocol (assert on emitted events)
- A fresh CompilationContext per test
- Settings cache isolation
"""

from unittest.mock import MagicMock

import pytest

from routesync.application.compiler import CompilationContext
from routesync.core.config import get_settings


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double; ``bind``/``with_context`` return the same mock."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def context(mock_logger: MagicMock) -> CompilationContext:
    """Compilation context wired to the mock logger."""
    return CompilationContext(logger=mock_logger)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def logged_events(logger: MagicMock, level: str) -> list[str]:
    """Event names logged at a level, in call order."""
    return [call.args[0] for call in getattr(logger, level).call_args_list]


def noop_handler() -> None:
    """Stand-in route handler."""
