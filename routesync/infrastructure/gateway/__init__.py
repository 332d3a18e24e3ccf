"""Gateway adapters (Azure API Management over Resource Manager REST)."""

from routesync.infrastructure.gateway.api_management_client import ApiManagementClient
from routesync.infrastructure.gateway.azure_authenticator import (
    AzureCredentialsAuthenticator,
)
from routesync.infrastructure.gateway.policy_document import build_policy_document

__all__ = [
    "ApiManagementClient",
    "AzureCredentialsAuthenticator",
    "build_policy_document",
]
