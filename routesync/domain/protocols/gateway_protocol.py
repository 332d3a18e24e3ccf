"""Gateway ports: authentication and operation synchronization.

The compiler's only contract with the gateway side is a complete,
deduplicated list of OperationEntry values. Authentication, revisions,
retries and network failures belong to implementations of these protocols.

Methods return Result types following railway-oriented programming pattern.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from routesync.core.result import Result
    from routesync.domain.errors import GatewayError
    from routesync.domain.value_objects import OperationEntry


@dataclass(frozen=True, kw_only=True)
class AccessToken:
    """Bearer token for the management plane.

    Attributes:
        access_token: Bearer token value.
        expires_in: Seconds until the token expires.
        token_type: Token type, typically "Bearer".
    """

    access_token: str
    expires_in: int
    token_type: str = "Bearer"


@dataclass(frozen=True, kw_only=True)
class SyncReport:
    """Outcome of one synchronization run.

    Attributes:
        api_id: Gateway API identifier.
        revision: Revision the operations were written to.
        operations_synced: Number of operations written.
        policies_synced: Number of operation policy documents written.
        revision_created: Whether a new revision was created.
        release_id: Release created to make the revision current, if any.
    """

    api_id: str
    revision: str
    operations_synced: int
    policies_synced: int
    revision_created: bool = False
    release_id: str | None = None


class AuthenticatorProtocol(Protocol):
    """Obtain a management plane access token."""

    async def authenticate(self) -> "Result[AccessToken, GatewayError]":
        """Return an access token or the reason it could not be obtained."""
        ...


class GatewayClientProtocol(Protocol):
    """Write an operation table into the gateway."""

    async def sync(
        self,
        operations: Sequence["OperationEntry"],
        access_token: AccessToken,
        *,
        create_new_revision: bool = False,
        make_current: bool = False,
    ) -> "Result[SyncReport, GatewayError]":
        """Synchronize operations (and their policies) to the gateway API.

        Args:
            operations: Flattened operation table.
            access_token: Token from an AuthenticatorProtocol.
            create_new_revision: Write into a new API revision.
            make_current: Release the written revision as current.

        Returns:
            Success(SyncReport) or Failure(GatewayError).
        """
        ...
