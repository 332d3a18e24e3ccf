"""Microsoft Entra ID client-credentials authenticator.

Obtains management plane tokens for a service principal:

    POST {login_base_url}/{tenant_id}/oauth2/v2.0/token
    grant_type=client_credentials&client_id=...&client_secret=...&scope=...

Implements AuthenticatorProtocol (structural typing).
"""

import httpx

from routesync.core.constants import (
    ARM_SCOPE,
    GATEWAY_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from routesync.core.enums import ErrorCode
from routesync.core.result import Failure, Result, Success
from routesync.domain.errors import (
    GatewayAuthenticationError,
    GatewayError,
    GatewayInvalidResponseError,
)
from routesync.domain.protocols import AccessToken
from routesync.infrastructure.gateway.base_api_client import BaseManagementAPIClient

_OPERATION = "authenticate"


class AzureCredentialsAuthenticator(BaseManagementAPIClient):
    """Client-credentials token provider.

    Args:
        tenant_id: Directory (tenant) identifier.
        client_id: Application (client) identifier.
        client_secret: Client secret. Never logged.
        login_base_url: Identity platform base URL.
        scope: Requested scope (management plane by default).
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        login_base_url: str = "https://login.microsoftonline.com",
        scope: str = ARM_SCOPE,
        timeout: float = GATEWAY_TIMEOUT_DEFAULT,
    ) -> None:
        super().__init__(
            base_url=login_base_url, service_name="azure_login", timeout=timeout
        )
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = scope

    async def authenticate(self) -> Result[AccessToken, GatewayError]:
        """Request an access token.

        Returns:
            Success(AccessToken): Token and its lifetime.
            Failure(GatewayAuthenticationError): Credentials rejected.
            Failure(GatewayUnavailableError): Identity platform unreachable.
            Failure(GatewayInvalidResponseError): Malformed token response.
        """
        self._logger.info(
            "gateway_authentication_started",
            tenant_id=self._tenant_id,
            client_id=self._client_id,
        )

        result = await self._execute_request(
            method="POST",
            path=f"/{self._tenant_id}/oauth2/v2.0/token",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            form_data={
                "grant_type": "client_credentials",
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "scope": self._scope,
            },
            operation=_OPERATION,
        )
        if isinstance(result, Failure):
            return result

        response = result.value
        if response.status_code in (400, 401):
            return self._rejected(response)

        parsed = self._parse_json_object(response, _OPERATION)
        if isinstance(parsed, Failure):
            return parsed

        data = parsed.value
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            self._logger.error("gateway_authentication_missing_token")
            return Failure(
                error=GatewayInvalidResponseError(
                    code=ErrorCode.GATEWAY_INVALID_RESPONSE,
                    message="Token response did not contain an access token",
                    operation=_OPERATION,
                    status_code=response.status_code,
                )
            )

        self._logger.info("gateway_authentication_succeeded", client_id=self._client_id)
        return Success(
            value=AccessToken(
                access_token=access_token,
                expires_in=int(data.get("expires_in", 0)),
                token_type=data.get("token_type", "Bearer"),
            )
        )

    def _rejected(self, response: httpx.Response) -> Failure[GatewayError]:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = body.get("error", "")
        description = body.get("error_description", "")

        self._logger.warning(
            "gateway_authentication_failed",
            status_code=response.status_code,
            error=error,
        )
        return Failure(
            error=GatewayAuthenticationError(
                code=ErrorCode.GATEWAY_AUTHENTICATION_FAILED,
                message=f"Client credentials rejected: {error or response.status_code}",
                operation=_OPERATION,
                details={"error_description": description[:RESPONSE_BODY_MAX_LENGTH]},
                is_token_expired=False,
            )
        )
