"""Base HTTP client for Azure management plane communication.

This module provides a base class for management API clients that handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation
- JSON parsing with error handling
- Structured logging with service context

Subclasses build the resource URLs and request bodies.

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for expected failures)
"""

from typing import Any

import httpx
import structlog

from routesync.core.constants import (
    BEARER_PREFIX,
    GATEWAY_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from routesync.core.enums import ErrorCode
from routesync.core.result import Failure, Result, Success
from routesync.domain.errors import (
    GatewayAuthenticationError,
    GatewayError,
    GatewayInvalidResponseError,
    GatewayRateLimitError,
    GatewayUnavailableError,
)

_SUCCESS_STATUSES = frozenset({200, 201, 202, 204})


class BaseManagementAPIClient:
    """Base class for management plane clients with shared HTTP handling.

    Attributes:
        _base_url: API base URL (without trailing slash).
        _service_name: Identifier used as prefix of log events.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger with service context.

    Example:
        >>> class ApisClient(BaseManagementAPIClient):
        ...     async def get_api(self, access_token: str, path: str):
        ...         return await self._execute_and_parse_object(
        ...             method="GET",
        ...             path=path,
        ...             headers=self._auth_headers(access_token),
        ...             operation="get_api",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        service_name: str,
        timeout: float = GATEWAY_TIMEOUT_DEFAULT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_name = service_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{service_name}_api")

    @staticmethod
    def _auth_headers(access_token: str) -> dict[str, str]:
        return {"Authorization": f"{BEARER_PREFIX}{access_token}"}

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        form_data: dict[str, str] | None = None,
        operation: str,
    ) -> Result[httpx.Response, GatewayError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, PUT, etc.).
            path: URL path relative to base_url.
            headers: HTTP headers including authentication.
            params: Optional query parameters.
            json_data: Optional JSON body.
            form_data: Optional form-encoded body (token endpoints).
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(GatewayUnavailableError): On timeout or connection error.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    json=json_data,
                    data=form_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._service_name}_api_timeout",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=GatewayUnavailableError(
                    code=ErrorCode.GATEWAY_UNAVAILABLE,
                    message=f"{self._service_name} request timed out",
                    operation=operation,
                    is_transient=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._service_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=GatewayUnavailableError(
                    code=ErrorCode.GATEWAY_UNAVAILABLE,
                    message=f"Failed to connect to {self._service_name}: {e}",
                    operation=operation,
                    is_transient=True,
                )
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[GatewayError] | None:
        """Map an HTTP error status to a GatewayError.

        Returns:
            Failure(GatewayError) if error detected, None if response is OK.
        """
        status = response.status_code

        if status in _SUCCESS_STATUSES:
            return None

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = (
                int(retry_after) if retry_after and retry_after.isdigit() else None
            )
            self._logger.warning(
                f"{self._service_name}_api_rate_limited",
                operation=operation,
                retry_after=retry_seconds,
            )
            return Failure(
                error=GatewayRateLimitError(
                    code=ErrorCode.GATEWAY_RATE_LIMITED,
                    message=f"{self._service_name} rate limit exceeded",
                    operation=operation,
                    retry_after=retry_seconds,
                )
            )

        if status in (401, 403):
            self._logger.warning(
                f"{self._service_name}_api_auth_failed",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=GatewayAuthenticationError(
                    code=ErrorCode.GATEWAY_AUTHENTICATION_FAILED,
                    message=(
                        "Access token is invalid or expired"
                        if status == 401
                        else f"Access denied to {self._service_name} resource"
                    ),
                    operation=operation,
                    is_token_expired=status == 401,
                )
            )

        if status == 404:
            self._logger.warning(
                f"{self._service_name}_api_not_found",
                operation=operation,
            )
            return Failure(
                error=GatewayInvalidResponseError(
                    code=ErrorCode.GATEWAY_RESOURCE_NOT_FOUND,
                    message=f"{self._service_name} resource not found",
                    operation=operation,
                    status_code=status,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        if status >= 500:
            self._logger.warning(
                f"{self._service_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=GatewayUnavailableError(
                    code=ErrorCode.GATEWAY_UNAVAILABLE,
                    message=f"{self._service_name} server error: {status}",
                    operation=operation,
                    is_transient=True,
                )
            )

        self._logger.warning(
            f"{self._service_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return Failure(
            error=GatewayInvalidResponseError(
                code=ErrorCode.GATEWAY_INVALID_RESPONSE,
                message=f"Unexpected response from {self._service_name}: {status}",
                operation=operation,
                status_code=status,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], GatewayError]:
        """Parse response as JSON object with error handling.

        Empty bodies (204, or 200/201 without content) parse to ``{}``.
        """
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        if not response.content:
            return Success(value={})

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                f"{self._service_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=GatewayInvalidResponseError(
                    code=ErrorCode.GATEWAY_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._service_name}",
                    operation=operation,
                    status_code=response.status_code,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._service_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=GatewayInvalidResponseError(
                    code=ErrorCode.GATEWAY_INVALID_RESPONSE,
                    message=f"Expected object response from {self._service_name}",
                    operation=operation,
                    status_code=response.status_code,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        self._logger.debug(
            f"{self._service_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        form_data: dict[str, str] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], GatewayError]:
        """Execute request and parse response as JSON object.

        Combines _execute_request and _parse_json_object for convenience.
        """
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            form_data=form_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)
