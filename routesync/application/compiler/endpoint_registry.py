"""Path + method keyed operation table.

The registry is the only writer of OperationEntry values during a run.
Registering an existing (path, method) pair merges instead of duplicating:

    tags, policies      appended (existing first, then incoming; no dedup)
    naming fields       computed < existing entry < incoming metadata overrides
    template, params    kept from the existing entry

Repeated registrations therefore accumulate policy fragments, while
identifiers stay those of the first registration unless metadata overrides
them.
"""

from collections.abc import Iterator

from routesync.application.compiler.context import CompilationContext
from routesync.application.compiler.naming import OperationIdentifierGenerator
from routesync.application.compiler.parameter_extractor import ParameterExtractor
from routesync.domain.enums import PolicyStage
from routesync.domain.value_objects import OperationEntry, RouteMetadata


class EndpointRegistry:
    """Operation table for one compilation run.

    Args:
        context: Run context shared with the extractor and naming generator.

    Example:
        >>> registry = EndpointRegistry(CompilationContext())
        >>> entry = registry.add("/user/:id", "get")
        >>> entry.url_template, entry.method
        ('/user/{id}', 'GET')
    """

    def __init__(self, context: CompilationContext) -> None:
        self._context = context
        self._extractor = ParameterExtractor(context)
        self._naming = OperationIdentifierGenerator(context)
        self._endpoints: dict[str, dict[str, OperationEntry]] = {}

    def add(
        self,
        path: str,
        method: str,
        metadata: RouteMetadata | None = None,
    ) -> OperationEntry:
        """Register an operation, merging with an existing one.

        Args:
            path: Full path of the route (``:name`` parameters allowed).
            method: HTTP method (any case).
            metadata: Merged metadata applying to the route.

        Returns:
            The stored (possibly merged) OperationEntry.
        """
        method = method.upper()
        metadata = metadata or RouteMetadata()
        by_method = self._endpoints.setdefault(path, {})
        existing = by_method.get(method)

        template = self._extractor.extract(path)
        url_template = template.url_template
        template_parameters = template.template_parameters
        operation_id = self._naming.identifier(path, method)
        display_name = self._naming.display_name(path, method)
        description: str | None = None

        tags: tuple[str, ...] = metadata.tags
        policies = {stage: metadata.policies_for(stage) for stage in PolicyStage}

        if existing is not None:
            url_template = existing.url_template
            template_parameters = existing.template_parameters
            operation_id = existing.operation_id
            display_name = existing.display_name
            description = existing.description
            tags = existing.tags + tags
            policies = {
                stage: existing.policies_for(stage) + policies[stage]
                for stage in PolicyStage
            }

        entry = OperationEntry(
            operation_id=metadata.operation_id or operation_id,
            display_name=metadata.display_name or display_name,
            method=method,
            url_template=url_template,
            template_parameters=template_parameters,
            tags=tags,
            policies=policies,
            description=metadata.description or description,
        )
        by_method[method] = entry

        self._context.logger.info("endpoint_registered", method=method, path=path)
        return entry

    def get(self, path: str, method: str) -> OperationEntry | None:
        """Return the entry registered for (path, method), if any."""
        return self._endpoints.get(path, {}).get(method.upper())

    def entries(self) -> list[OperationEntry]:
        """Flatten the table in registration order."""
        return [
            entry
            for by_method in self._endpoints.values()
            for entry in by_method.values()
        ]

    def items(self) -> Iterator[tuple[str, str, OperationEntry]]:
        """Yield (path, method, entry) triples in registration order."""
        for path, by_method in self._endpoints.items():
            for method, entry in by_method.items():
                yield path, method, entry

    def as_dict(self) -> dict[str, dict[str, OperationEntry]]:
        """Return a copy of the path -> method -> entry mapping."""
        return {path: dict(by_method) for path, by_method in self._endpoints.items()}

    def __len__(self) -> int:
        return sum(len(by_method) for by_method in self._endpoints.values())

    def __iter__(self) -> Iterator[OperationEntry]:
        return iter(self.entries())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        path, method = key
        return self.get(path, method) is not None
