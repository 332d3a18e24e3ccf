"""Azure API Management client (Azure Resource Manager REST).

Writes a compiled operation table into an API Management API:

    1. read the API to learn its current revision
    2. optionally create revision N+1 from it
    3. upsert every operation (contract, tags, policy document)
    4. optionally release the new revision as current

All resources live under
``/subscriptions/{sub}/resourceGroups/{rg}``
``/providers/Microsoft.ApiManagement/service/{svc}``
and every request carries ``api-version=ARM_API_VERSION``.

Implements GatewayClientProtocol (structural typing).
"""

import re
from collections.abc import Sequence
from typing import Any

from routesync.core.constants import ARM_API_VERSION, GATEWAY_TIMEOUT_DEFAULT
from routesync.core.enums import ErrorCode
from routesync.core.result import Failure, Result, Success
from routesync.domain.errors import GatewayError, GatewayInvalidResponseError
from routesync.domain.protocols import AccessToken, SyncReport
from routesync.domain.value_objects import OperationEntry
from routesync.infrastructure.gateway.base_api_client import BaseManagementAPIClient
from routesync.infrastructure.gateway.policy_document import build_policy_document

_TAG_ID_INVALID = re.compile(r"[^a-z0-9-]+")


def tag_identifier(tag: str) -> str:
    """Resource name of a tag ("Public API" -> "public-api")."""
    return _TAG_ID_INVALID.sub("-", tag.strip().lower()).strip("-")


def operation_contract(entry: OperationEntry) -> dict[str, Any]:
    """ARM request body for an operation."""
    properties: dict[str, Any] = {
        "displayName": entry.display_name,
        "method": entry.method,
        "urlTemplate": entry.url_template,
        "templateParameters": [
            {
                "name": parameter.name,
                "required": parameter.required,
                "type": parameter.type,
            }
            for parameter in entry.template_parameters
        ],
    }
    if entry.description:
        properties["description"] = entry.description
    return {"properties": properties}


class ApiManagementClient(BaseManagementAPIClient):
    """Operation writer for one API of one API Management service.

    Args:
        subscription_id: Azure subscription of the service.
        resource_group_name: Resource group of the service.
        apim_service_name: API Management service name.
        api_id: API identifier inside the service.
        api_version: Version label recorded on created revisions.
        base_url: Resource Manager endpoint.
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        subscription_id: str,
        resource_group_name: str,
        apim_service_name: str,
        api_id: str,
        api_version: str | None = None,
        base_url: str = "https://management.azure.com",
        timeout: float = GATEWAY_TIMEOUT_DEFAULT,
    ) -> None:
        super().__init__(
            base_url=base_url, service_name="api_management", timeout=timeout
        )
        self._api_id = api_id
        self._api_version = api_version
        self._service_path = (
            f"/subscriptions/{subscription_id}"
            f"/resourceGroups/{resource_group_name}"
            f"/providers/Microsoft.ApiManagement/service/{apim_service_name}"
        )

    @property
    def api_path(self) -> str:
        """ARM resource path of the API (current revision)."""
        return f"{self._service_path}/apis/{self._api_id}"

    def revision_path(self, revision: str | None = None) -> str:
        """ARM resource path of a specific API revision."""
        if revision is None:
            return self.api_path
        return f"{self.api_path};rev={revision}"

    async def get_api(self, access_token: str) -> Result[dict[str, Any], GatewayError]:
        """Read the API resource (its ``properties.apiRevision`` is the current one)."""
        return await self._arm_request("GET", self.api_path, access_token, "get_api")

    async def create_revision(
        self,
        access_token: str,
        revision: str,
        *,
        source: dict[str, Any] | None = None,
    ) -> Result[dict[str, Any], GatewayError]:
        """Create a revision as a copy of the current API.

        Args:
            access_token: Management plane bearer token.
            revision: New revision number.
            source: Current API resource (path and serviceUrl are carried over).
        """
        source_properties = (source or {}).get("properties", {})
        properties: dict[str, Any] = {
            "sourceApiId": self.api_path,
            "apiRevisionDescription": f"Revision {revision} generated from route tree",
        }
        for key in ("path", "serviceUrl"):
            if source_properties.get(key):
                properties[key] = source_properties[key]
        if self._api_version:
            properties["apiVersion"] = self._api_version

        return await self._arm_request(
            "PUT",
            self.revision_path(revision),
            access_token,
            "create_revision",
            {"properties": properties},
        )

    async def upsert_operation(
        self,
        access_token: str,
        entry: OperationEntry,
        revision: str | None = None,
    ) -> Result[dict[str, Any], GatewayError]:
        """Create or replace an operation contract."""
        return await self._arm_request(
            "PUT",
            f"{self.revision_path(revision)}/operations/{entry.operation_id}",
            access_token,
            "upsert_operation",
            operation_contract(entry),
        )

    async def upsert_operation_policy(
        self,
        access_token: str,
        entry: OperationEntry,
        revision: str | None = None,
    ) -> Result[dict[str, Any], GatewayError]:
        """Create or replace the policy document of an operation."""
        return await self._arm_request(
            "PUT",
            f"{self.revision_path(revision)}/operations/{entry.operation_id}"
            "/policies/policy",
            access_token,
            "upsert_operation_policy",
            {
                "properties": {
                    "format": "rawxml",
                    "value": build_policy_document(entry.policies),
                }
            },
        )

    async def upsert_tag(
        self,
        access_token: str,
        tag: str,
    ) -> Result[dict[str, Any], GatewayError]:
        """Create or update a service level tag."""
        return await self._arm_request(
            "PUT",
            f"{self._service_path}/tags/{tag_identifier(tag)}",
            access_token,
            "upsert_tag",
            {"properties": {"displayName": tag}},
        )

    async def assign_operation_tag(
        self,
        access_token: str,
        entry: OperationEntry,
        tag: str,
        revision: str | None = None,
    ) -> Result[dict[str, Any], GatewayError]:
        """Attach an existing tag to an operation."""
        return await self._arm_request(
            "PUT",
            f"{self.revision_path(revision)}/operations/{entry.operation_id}"
            f"/tags/{tag_identifier(tag)}",
            access_token,
            "assign_operation_tag",
        )

    async def create_release(
        self,
        access_token: str,
        revision: str,
    ) -> Result[dict[str, Any], GatewayError]:
        """Release a revision, making it the current one."""
        return await self._arm_request(
            "PUT",
            f"{self.api_path}/releases/{self.release_id(revision)}",
            access_token,
            "create_release",
            {
                "properties": {
                    "apiId": self.revision_path(revision),
                    "notes": f"Revision {revision} released from route tree",
                }
            },
        )

    @staticmethod
    def release_id(revision: str) -> str:
        return f"rev-{revision}"

    async def sync(
        self,
        operations: Sequence[OperationEntry],
        access_token: AccessToken,
        *,
        create_new_revision: bool = False,
        make_current: bool = False,
    ) -> Result[SyncReport, GatewayError]:
        """Write an operation table into the API.

        Stops at the first failing request; operations written before it
        stay in place.

        Args:
            operations: Flattened operation table.
            access_token: Token from the authenticator.
            create_new_revision: Write into revision N+1 instead of the current one.
            make_current: Release the new revision (ignored without a new revision).

        Returns:
            Success(SyncReport) or the first Failure(GatewayError).
        """
        token = access_token.access_token
        self._logger.info(
            "gateway_sync_started",
            api_id=self._api_id,
            operations=len(operations),
            create_new_revision=create_new_revision,
        )

        api_result = await self.get_api(token)
        if isinstance(api_result, Failure):
            return api_result
        api = api_result.value

        current = api.get("properties", {}).get("apiRevision")
        if current is None or not str(current).isdigit():
            return Failure(
                error=GatewayInvalidResponseError(
                    code=ErrorCode.GATEWAY_INVALID_RESPONSE,
                    message="API resource has no numeric apiRevision",
                    operation="get_api",
                    details={"apiRevision": current},
                )
            )

        revision = str(current)
        target: str | None = None
        if create_new_revision:
            revision = str(int(current) + 1)
            created = await self.create_revision(token, revision, source=api)
            if isinstance(created, Failure):
                return created
            target = revision
            self._logger.info(
                "gateway_revision_created", api_id=self._api_id, revision=revision
            )

        policies_synced = 0
        known_tags: set[str] = set()
        for entry in operations:
            written = await self.upsert_operation(token, entry, target)
            if isinstance(written, Failure):
                return written

            for tag in dict.fromkeys(entry.tags):
                if tag not in known_tags:
                    tag_result = await self.upsert_tag(token, tag)
                    if isinstance(tag_result, Failure):
                        return tag_result
                    known_tags.add(tag)
                assigned = await self.assign_operation_tag(token, entry, tag, target)
                if isinstance(assigned, Failure):
                    return assigned

            if entry.has_policies:
                policy = await self.upsert_operation_policy(token, entry, target)
                if isinstance(policy, Failure):
                    return policy
                policies_synced += 1

            self._logger.debug(
                "gateway_operation_synced",
                operation_id=entry.operation_id,
                method=entry.method,
                url_template=entry.url_template,
            )

        release_id: str | None = None
        if make_current and target is not None:
            released = await self.create_release(token, revision)
            if isinstance(released, Failure):
                return released
            release_id = self.release_id(revision)
            self._logger.info(
                "gateway_revision_released", api_id=self._api_id, revision=revision
            )
        elif make_current:
            self._logger.info(
                "gateway_release_skipped", api_id=self._api_id, revision=revision
            )

        report = SyncReport(
            api_id=self._api_id,
            revision=revision,
            operations_synced=len(operations),
            policies_synced=policies_synced,
            revision_created=target is not None,
            release_id=release_id,
        )
        self._logger.info(
            "gateway_sync_completed",
            api_id=self._api_id,
            revision=revision,
            operations_synced=report.operations_synced,
            policies_synced=report.policies_synced,
        )
        return Success(value=report)

    async def _arm_request(
        self,
        method: str,
        path: str,
        access_token: str,
        operation: str,
        body: dict[str, Any] | None = None,
    ) -> Result[dict[str, Any], GatewayError]:
        return await self._execute_and_parse_object(
            method=method,
            path=path,
            headers=self._auth_headers(access_token),
            params={"api-version": ARM_API_VERSION},
            json_data=body,
            operation=operation,
        )
