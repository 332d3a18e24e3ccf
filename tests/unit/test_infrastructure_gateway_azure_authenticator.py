"""Unit tests for AzureCredentialsAuthenticator.

Tests cover:
- Successful client-credentials exchange
- Rejected credentials (400/401)
- Malformed responses
- Connection errors

Architecture:
- Uses pytest-httpx for HTTP mocking
- Tests Result pattern (Success/Failure)
"""

from urllib.parse import parse_qs

import httpx
import pytest
from pytest_httpx import HTTPXMock

from routesync.core.enums import ErrorCode
from routesync.core.result import Failure, Success
from routesync.domain.errors import (
    GatewayAuthenticationError,
    GatewayInvalidResponseError,
    GatewayUnavailableError,
)
from routesync.domain.protocols import AccessToken
from routesync.infrastructure.gateway import AzureCredentialsAuthenticator

TOKEN_URL = "https://login.test/tenant-1/oauth2/v2.0/token"


@pytest.fixture
def authenticator() -> AzureCredentialsAuthenticator:
    return AzureCredentialsAuthenticator(
        tenant_id="tenant-1",
        client_id="client-1",
        client_secret="secret-1",
        login_base_url="https://login.test/",
        timeout=5.0,
    )


@pytest.mark.unit
class TestAuthenticateSuccess:
    """Test authenticate() success scenarios."""

    @pytest.mark.asyncio
    async def test_returns_access_token(
        self, authenticator: AzureCredentialsAuthenticator, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            json={"access_token": "at_1", "expires_in": 3599, "token_type": "Bearer"},
        )

        result = await authenticator.authenticate()

        assert isinstance(result, Success)
        assert result.value == AccessToken(access_token="at_1", expires_in=3599)

    @pytest.mark.asyncio
    async def test_sends_client_credentials_form(
        self, authenticator: AzureCredentialsAuthenticator, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, json={"access_token": "at_1"}
        )

        await authenticator.authenticate()

        request = httpx_mock.get_request()
        form = parse_qs(request.content.decode())
        assert form == {
            "grant_type": ["client_credentials"],
            "client_id": ["client-1"],
            "client_secret": ["secret-1"],
            "scope": ["https://management.azure.com/.default"],
        }
        assert "Authorization" not in request.headers


@pytest.mark.unit
class TestAuthenticateErrors:
    """Test authenticate() failure scenarios."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401])
    async def test_rejected_credentials(
        self,
        authenticator: AzureCredentialsAuthenticator,
        httpx_mock: HTTPXMock,
        status_code: int,
    ):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            status_code=status_code,
            json={
                "error": "invalid_client",
                "error_description": "AADSTS7000215: Invalid client secret",
            },
        )

        result = await authenticator.authenticate()

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayAuthenticationError)
        assert result.error.code == ErrorCode.GATEWAY_AUTHENTICATION_FAILED
        assert "invalid_client" in result.error.message
        assert result.error.details == {
            "error_description": "AADSTS7000215: Invalid client secret"
        }

    @pytest.mark.asyncio
    async def test_missing_access_token(
        self, authenticator: AzureCredentialsAuthenticator, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, json={"expires_in": 10})

        result = await authenticator.authenticate()

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayInvalidResponseError)

    @pytest.mark.asyncio
    async def test_invalid_json(
        self, authenticator: AzureCredentialsAuthenticator, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, text="<html>oops</html>")

        result = await authenticator.authenticate()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GATEWAY_INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_connection_error(
        self, authenticator: AzureCredentialsAuthenticator, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_exception(httpx.ConnectError("DNS failure"), url=TOKEN_URL)

        result = await authenticator.authenticate()

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayUnavailableError)
        assert result.error.is_transient is True
