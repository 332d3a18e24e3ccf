"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Compilation errors (ROUTE_*, PATTERN_*)
- Gateway errors (GATEWAY_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes.

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"

    # Compilation errors
    ROUTE_PATH_AMBIGUOUS = "route_path_ambiguous"
    PATTERN_DECODE_DEGRADED = "pattern_decode_degraded"

    # Gateway errors
    GATEWAY_AUTHENTICATION_FAILED = "gateway_authentication_failed"
    GATEWAY_UNAVAILABLE = "gateway_unavailable"
    GATEWAY_RATE_LIMITED = "gateway_rate_limited"
    GATEWAY_INVALID_RESPONSE = "gateway_invalid_response"
    GATEWAY_RESOURCE_NOT_FOUND = "gateway_resource_not_found"
