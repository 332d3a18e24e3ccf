"""Dependency factories (composition root).

Application-scoped singletons:
- Logging (console: human-readable or JSON)
- Gateway authentication (Entra ID client credentials)
- Gateway client (API Management over Resource Manager)
- Route sync service

Adapter selection is centralized here; everything else depends on
protocols only.

Usage:
    from routesync.core.container import get_route_sync_service

    service = get_route_sync_service()
    result = await service.sync(build_route_tree(app))
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from routesync.core.config import get_settings

if TYPE_CHECKING:
    from routesync.application.services import RouteSyncService
    from routesync.domain.protocols import (
        AuthenticatorProtocol,
        GatewayClientProtocol,
        LoggerProtocol,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from routesync.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment.value != "development"
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_authenticator() -> "AuthenticatorProtocol":
    """Return the management plane authenticator.

    Raises:
        ValueError: If service principal credentials are not configured.
    """
    from routesync.infrastructure.gateway.azure_authenticator import (
        AzureCredentialsAuthenticator,
    )

    settings = get_settings()
    if not settings.has_credentials:
        raise ValueError(
            "AZURE_TENANT_ID, AZURE_CLIENT_ID and AZURE_CLIENT_SECRET are required"
        )
    return AzureCredentialsAuthenticator(
        tenant_id=settings.azure_tenant_id,
        client_id=settings.azure_client_id,
        client_secret=settings.azure_client_secret,
        login_base_url=settings.login_base_url,
        timeout=settings.gateway_timeout,
    )


@lru_cache()
def get_gateway_client() -> "GatewayClientProtocol":
    """Return the API Management client for the configured API.

    Raises:
        ValueError: If the gateway target is not fully configured.
    """
    from routesync.infrastructure.gateway.api_management_client import (
        ApiManagementClient,
    )

    settings = get_settings()
    if not settings.has_gateway_target:
        raise ValueError(
            "AZURE_SUBSCRIPTION_ID, RESOURCE_GROUP_NAME, SERVICE_NAME and API_ID "
            "are required"
        )
    return ApiManagementClient(
        subscription_id=settings.azure_subscription_id,
        resource_group_name=settings.resource_group_name,
        apim_service_name=settings.service_name,
        api_id=settings.api_id,
        api_version=settings.api_version,
        base_url=settings.management_base_url,
        timeout=settings.gateway_timeout,
    )


@lru_cache()
def get_route_sync_service() -> "RouteSyncService":
    """Return the sync service wired from settings."""
    from routesync.application.compiler import RouteTreeCompiler
    from routesync.application.services import RouteSyncService

    settings = get_settings()
    logger = get_logger()
    return RouteSyncService(
        compiler=RouteTreeCompiler(
            logger=logger,
            base_path=settings.base_path,
            operation_id_prefix=settings.operation_id_prefix,
        ),
        authenticator=get_authenticator(),
        client=get_gateway_client(),
        logger=logger,
        strict=settings.break_on_same_path,
        create_new_revision=settings.generate_new_revision,
        make_current=settings.make_new_revision_current,
    )
