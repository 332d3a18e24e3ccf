"""Domain errors package.

Usage:
    from routesync.domain.errors import AmbiguousPathError, GatewayError
"""

from routesync.domain.errors.compilation_error import (
    AmbiguityWarning,
    AmbiguousPathError,
    MalformedPatternWarning,
)
from routesync.domain.errors.gateway_error import (
    GatewayAuthenticationError,
    GatewayError,
    GatewayInvalidResponseError,
    GatewayRateLimitError,
    GatewayUnavailableError,
)

__all__ = [
    # Compilation
    "AmbiguityWarning",
    "AmbiguousPathError",
    "MalformedPatternWarning",
    # Gateway API errors
    "GatewayError",
    "GatewayAuthenticationError",
    "GatewayUnavailableError",
    "GatewayRateLimitError",
    "GatewayInvalidResponseError",
]
