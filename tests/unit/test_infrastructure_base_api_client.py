"""Tests for routesync/infrastructure/gateway/base_api_client.py.

Verifies the BaseManagementAPIClient handles HTTP requests, errors, and
JSON parsing correctly for all management plane clients.
"""

import json
from unittest.mock import MagicMock

import httpx
import pytest
from pytest_httpx import HTTPXMock

from routesync.core.constants import GATEWAY_TIMEOUT_DEFAULT
from routesync.core.enums import ErrorCode
from routesync.core.result import Failure, Success
from routesync.domain.errors import (
    GatewayAuthenticationError,
    GatewayInvalidResponseError,
    GatewayRateLimitError,
    GatewayUnavailableError,
)
from routesync.infrastructure.gateway.base_api_client import BaseManagementAPIClient


class ConcreteAPIClient(BaseManagementAPIClient):
    """Concrete implementation for testing."""

    def __init__(self, *, base_url: str, timeout: float = GATEWAY_TIMEOUT_DEFAULT):
        super().__init__(
            base_url=base_url,
            service_name="test_service",
            timeout=timeout,
        )


def _response(status_code: int, **attrs) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.headers = attrs.pop("headers", {})
    response.text = attrs.pop("text", "")
    for name, value in attrs.items():
        setattr(response, name, value)
    return response


@pytest.mark.unit
class TestBaseManagementAPIClientInit:
    """Tests for BaseManagementAPIClient initialization."""

    def test_strips_trailing_slash_from_base_url(self) -> None:
        client = ConcreteAPIClient(base_url="https://management.test/")
        assert client._base_url == "https://management.test"

    def test_stores_service_name(self) -> None:
        client = ConcreteAPIClient(base_url="https://management.test")
        assert client._service_name == "test_service"

    def test_uses_default_timeout(self) -> None:
        client = ConcreteAPIClient(base_url="https://management.test")
        assert client._timeout == GATEWAY_TIMEOUT_DEFAULT

    def test_auth_headers(self) -> None:
        assert BaseManagementAPIClient._auth_headers("abc") == {
            "Authorization": "Bearer abc"
        }


@pytest.mark.unit
class TestCheckErrorResponse:
    """Tests for _check_error_response method."""

    @pytest.fixture
    def client(self) -> ConcreteAPIClient:
        return ConcreteAPIClient(base_url="https://management.test")

    @pytest.mark.parametrize("status_code", [200, 201, 202, 204])
    def test_returns_none_for_success_statuses(
        self, client: ConcreteAPIClient, status_code: int
    ) -> None:
        assert client._check_error_response(_response(status_code), "op") is None

    def test_returns_rate_limit_error_for_429(self, client: ConcreteAPIClient) -> None:
        response = _response(429, headers={"Retry-After": "60"})

        result = client._check_error_response(response, "op")

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayRateLimitError)
        assert result.error.code == ErrorCode.GATEWAY_RATE_LIMITED
        assert result.error.retry_after == 60

    def test_rate_limit_without_retry_after(self, client: ConcreteAPIClient) -> None:
        result = client._check_error_response(_response(429), "op")

        assert isinstance(result, Failure)
        assert result.error.retry_after is None

    def test_returns_auth_error_for_401(self, client: ConcreteAPIClient) -> None:
        result = client._check_error_response(_response(401), "op")

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayAuthenticationError)
        assert result.error.is_token_expired is True

    def test_returns_auth_error_for_403(self, client: ConcreteAPIClient) -> None:
        result = client._check_error_response(_response(403), "op")

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayAuthenticationError)
        assert result.error.is_token_expired is False

    def test_returns_not_found_for_404(self, client: ConcreteAPIClient) -> None:
        result = client._check_error_response(_response(404, text="Not Found"), "op")

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayInvalidResponseError)
        assert result.error.code == ErrorCode.GATEWAY_RESOURCE_NOT_FOUND
        assert result.error.response_body == "Not Found"

    @pytest.mark.parametrize("status_code", [500, 502, 503])
    def test_returns_unavailable_for_5xx(
        self, client: ConcreteAPIClient, status_code: int
    ) -> None:
        result = client._check_error_response(_response(status_code), "op")

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayUnavailableError)
        assert result.error.is_transient is True

    def test_returns_invalid_response_for_other_4xx(
        self, client: ConcreteAPIClient
    ) -> None:
        response = _response(409, text="x" * 1000)

        result = client._check_error_response(response, "op")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GATEWAY_INVALID_RESPONSE
        assert result.error.status_code == 409
        assert len(result.error.response_body) == 500


@pytest.mark.unit
class TestParseJsonObject:
    """Tests for _parse_json_object method."""

    @pytest.fixture
    def client(self) -> ConcreteAPIClient:
        return ConcreteAPIClient(base_url="https://management.test")

    def test_parses_object(self, client: ConcreteAPIClient) -> None:
        response = _response(200, content=b'{"a": 1}')
        response.json.return_value = {"a": 1}

        result = client._parse_json_object(response, "op")

        assert result == Success(value={"a": 1})

    def test_empty_body_parses_to_empty_object(self, client: ConcreteAPIClient) -> None:
        result = client._parse_json_object(_response(204, content=b""), "op")

        assert result == Success(value={})

    def test_invalid_json(self, client: ConcreteAPIClient) -> None:
        response = _response(200, content=b"not json", text="not json")
        response.json.side_effect = ValueError("Expecting value")

        result = client._parse_json_object(response, "op")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GATEWAY_INVALID_RESPONSE

    def test_non_object_json(self, client: ConcreteAPIClient) -> None:
        response = _response(200, content=b"[1]", text="[1]")
        response.json.return_value = [1]

        result = client._parse_json_object(response, "op")

        assert isinstance(result, Failure)
        assert "Expected object" in result.error.message


@pytest.mark.unit
class TestExecuteRequest:
    """Tests for _execute_request with transport errors."""

    @pytest.fixture
    def client(self) -> ConcreteAPIClient:
        return ConcreteAPIClient(base_url="https://management.test")

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        result = await client._execute_request(
            method="GET", path="/x", headers={}, operation="op"
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, GatewayUnavailableError)
        assert "timed out" in result.error.message

    @pytest.mark.asyncio
    async def test_sends_query_params_and_json(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            method="PUT", url="https://management.test/x?v=1", json={"ok": True}
        )

        result = await client._execute_and_parse_object(
            method="PUT",
            path="/x",
            headers={},
            params={"v": "1"},
            json_data={"a": "b"},
            operation="op",
        )

        assert result == Success(value={"ok": True})
        assert json.loads(httpx_mock.get_request().content) == {"a": "b"}
