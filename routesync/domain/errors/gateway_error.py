"""Gateway error types for the sync boundary.

These errors are part of the GatewayClientProtocol and AuthenticatorProtocol
contracts - they define the failure cases that implementations can return.

Architecture:
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)

Usage:
    from routesync.domain.errors import GatewayError, GatewayAuthenticationError
    from routesync.core.result import Result, Success, Failure

    async def authenticate(self) -> Result[AccessToken, GatewayError]:
        if response.status_code == 401:
            return Failure(error=GatewayAuthenticationError(...))
        return Success(value=token)
"""

from dataclasses import dataclass

from routesync.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class GatewayError(DomainError):
    """Base management plane error.

    Attributes:
        code: ErrorCode.
        message: Human-readable message.
        operation: Client operation that failed (e.g., "upsert_operation").
        details: Additional context (status code, response excerpt).
    """

    operation: str


@dataclass(frozen=True, slots=True, kw_only=True)
class GatewayAuthenticationError(GatewayError):
    """Credentials rejected or token expired (401/403, token endpoint errors).

    Attributes:
        is_token_expired: Whether a fresh token could fix the failure.
    """

    is_token_expired: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class GatewayUnavailableError(GatewayError):
    """Management plane unreachable (timeout, connection error, 5xx).

    Attributes:
        is_transient: Whether retrying later may succeed.
    """

    is_transient: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class GatewayRateLimitError(GatewayError):
    """Management plane throttled the request (429).

    Attributes:
        retry_after: Seconds to wait, from the Retry-After header.
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GatewayInvalidResponseError(GatewayError):
    """Unexpected status or malformed body.

    Attributes:
        status_code: HTTP status when a response was received.
        response_body: Truncated response body.
    """

    status_code: int | None = None
    response_body: str | None = None
