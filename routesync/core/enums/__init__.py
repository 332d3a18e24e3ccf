"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from routesync.core.enums import ErrorCode, Environment
"""

from routesync.core.enums.environment import Environment
from routesync.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
