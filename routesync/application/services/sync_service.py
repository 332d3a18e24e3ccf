"""Route tree to gateway synchronization service.

Orchestrates one sync run:

    authenticate -> compile (strict per configuration) -> flatten -> client sync

Architecture:
    - Application service (depends on protocols only)
    - Gateway failures are returned as Result values
    - AmbiguousPathError from strict compilation propagates unchanged, before
      anything is written to the gateway

Usage:
    service = get_route_sync_service()
    result = await service.sync(build_route_tree(app))
    match result:
        case Success(value=report):
            print(report.revision, report.operations_synced)
        case Failure(error=error):
            print(error.message)
"""

from routesync.application.compiler import RouteTreeCompiler
from routesync.core.result import Failure, Result, Success
from routesync.domain.errors import AmbiguousPathError, GatewayError
from routesync.domain.protocols import (
    AuthenticatorProtocol,
    GatewayClientProtocol,
    LoggerProtocol,
    SyncReport,
)
from routesync.domain.route_tree import Router


class RouteSyncService:
    """Compile a route tree and write it into the gateway.

    Dependencies (injected via constructor):
        - RouteTreeCompiler: Produces the operation table
        - AuthenticatorProtocol: Provides the management plane token
        - GatewayClientProtocol: Writes operations and policies
        - LoggerProtocol: Structured logging

    Args:
        compiler: Configured compiler (base path, identifier prefix).
        authenticator: Token provider.
        client: Gateway writer.
        logger: Logger for ``route_sync_*`` events.
        strict: Fail on ambiguous templates instead of warning.
        create_new_revision: Write into a new API revision.
        make_current: Release the new revision as current.
    """

    def __init__(
        self,
        *,
        compiler: RouteTreeCompiler,
        authenticator: AuthenticatorProtocol,
        client: GatewayClientProtocol,
        logger: LoggerProtocol,
        strict: bool = False,
        create_new_revision: bool = False,
        make_current: bool = False,
    ) -> None:
        self._compiler = compiler
        self._authenticator = authenticator
        self._client = client
        self._logger = logger
        self._strict = strict
        self._create_new_revision = create_new_revision
        self._make_current = make_current

    async def sync(self, root: Router) -> Result[SyncReport, GatewayError]:
        """Synchronize a route tree.

        Args:
            root: Route tree (from the Router builder or build_route_tree).

        Returns:
            Success(SyncReport) or Failure(GatewayError).

        Raises:
            AmbiguousPathError: If strict and two templates collide.
        """
        self._logger.info("route_sync_started", strict=self._strict)

        token_result = await self._authenticator.authenticate()
        if isinstance(token_result, Failure):
            self._logger.warning(
                "route_sync_failed",
                stage="authenticate",
                error_code=token_result.error.code.value,
            )
            return token_result

        try:
            compiled = self._compiler.compile(root, strict=self._strict)
        except AmbiguousPathError as e:
            self._logger.error("route_sync_aborted", error=e, stage="compile")
            raise

        operations = compiled.operations
        self._logger.info(
            "route_sync_compiled",
            operations=len(operations),
            warnings=len(compiled.warnings),
        )

        result = await self._client.sync(
            operations,
            token_result.value,
            create_new_revision=self._create_new_revision,
            make_current=self._make_current,
        )

        match result:
            case Success(value=report):
                self._logger.info(
                    "route_sync_completed",
                    api_id=report.api_id,
                    revision=report.revision,
                    operations_synced=report.operations_synced,
                )
            case Failure(error=error):
                self._logger.warning(
                    "route_sync_failed",
                    stage="gateway",
                    operation=error.operation,
                    error_code=error.code.value,
                )
        return result
