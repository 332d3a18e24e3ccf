"""Centralized constants for internal implementation details.

This module contains constants that are implementation details, NOT
environment-specific configuration. For environment-specific settings,
use `routesync/core/config.py` instead.

Categories:
- Naming: Operation identifier and display name generation
- Templates: Parameter naming and erasure
- Gateway: Azure Resource Manager protocol values
- Limits: Truncation and safety limits

Example:
    >>> from routesync.core.constants import OPERATION_SLUG_MAX_LENGTH
    >>> slug = slug[:OPERATION_SLUG_MAX_LENGTH]
"""

# =============================================================================
# Naming
# =============================================================================

OPERATION_ID_PREFIX_DEFAULT: str = "routesync"
"""Fixed prefix of generated operation identifiers."""

OPERATION_SLUG_MAX_LENGTH: int = 30
"""Maximum length of the path slug embedded in an operation identifier."""

DISPLAY_NAME_MAX_LENGTH: int = 30
"""Maximum length of the path portion of a display name."""


# =============================================================================
# Templates
# =============================================================================

MIN_PARAMETER_NAME_LENGTH: int = 2
"""Parameter names shorter than this get a disambiguating suffix."""

PARAMETER_SUFFIX_MARKER: str = "P"
"""Separator between a parameter name and its disambiguating counter."""

ERASED_PARAMETER_TOKEN: str = "{param}"
"""Replacement for every placeholder when comparing templates structurally."""

TEMPLATE_PARAMETER_TYPE: str = "string"
"""Declared type of every template parameter."""


# =============================================================================
# Gateway
# =============================================================================

ARM_API_VERSION: str = "2022-08-01"
"""Azure Resource Manager api-version for Microsoft.ApiManagement calls."""

ARM_SCOPE: str = "https://management.azure.com/.default"
"""OAuth2 scope requested for management plane tokens."""

GATEWAY_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for management plane calls in seconds."""

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum response body length kept in error details (avoids log bloat)."""
