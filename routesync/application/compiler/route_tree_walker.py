"""Depth-first traversal of a route tree into an EndpointRegistry.

Layer classification (first match wins):

    1. MetadataLayer            collect metadata for later siblings, no descent
    2. RouteLayer, terminal     register one operation per distinct method
    3. RouteLayer, non-terminal recurse into the route's stack
    4. MountLayer, or a MethodLayer whose handler is a Router
                                recurse into the sub-tree
    5. anything else            skip

Paths accumulate while descending: every layer contributes its decoded
segment, and fragments are joined with exactly one slash.
"""

from routesync.application.compiler.context import CompilationContext
from routesync.application.compiler.endpoint_registry import EndpointRegistry
from routesync.application.compiler.naming import merge_paths, trim_slash
from routesync.application.compiler.pattern_decoder import ExpressPatternDecoder
from routesync.domain.protocols import PatternDecoderProtocol
from routesync.domain.route_tree import (
    Layer,
    MetadataLayer,
    MethodLayer,
    MountLayer,
    Route,
    RouteLayer,
    Router,
)
from routesync.domain.value_objects import PathPattern, RouteMetadata


class RouteTreeWalker:
    """Walk a route tree and register every discovered operation.

    Args:
        context: Run context (logger, counters).
        decoder: Pattern dialect used for layers without a literal path.
    """

    def __init__(
        self,
        context: CompilationContext,
        decoder: PatternDecoderProtocol | None = None,
    ) -> None:
        self._context = context
        self._decoder = decoder or ExpressPatternDecoder(context.logger)

    def walk(self, root: Router, base_path: str = "") -> EndpointRegistry:
        """Traverse the tree and return the populated registry.

        Args:
            root: Application or router at the top of the tree.
            base_path: Prefix applied to every discovered path.

        Returns:
            EndpointRegistry holding one entry per (path, method).
        """
        registry = EndpointRegistry(self._context)
        self._context.logger.info("route_walk_started", base_path=base_path)
        self._walk_stack(registry, root.stack, base_path, [])
        self._context.logger.info("route_walk_completed", operations=len(registry))
        return registry

    def _walk_stack(
        self,
        registry: EndpointRegistry,
        stack: tuple[Layer, ...],
        base_path: str,
        pending: list[RouteMetadata],
    ) -> None:
        for layer in stack:
            match layer:
                case MetadataLayer(metadata=metadata):
                    # New list: metadata reaches later siblings, never earlier ones
                    pending = [*pending, metadata]

                case RouteLayer(route=route) if self._is_terminal(route):
                    self._register_route(registry, route, base_path, pending)

                case RouteLayer(pattern=pattern, route=route) if route.stack:
                    path = merge_paths(base_path, self._layer_path(pattern))
                    self._walk_stack(registry, route.stack, path, pending)

                case MountLayer(pattern=pattern, router=router):
                    path = merge_paths(base_path, self._layer_path(pattern))
                    self._walk_stack(registry, router.stack, path, pending)

                case MethodLayer(pattern=pattern, handler=Router() as router):
                    path = merge_paths(base_path, self._layer_path(pattern))
                    self._walk_stack(registry, router.stack, path, pending)

                case _:
                    self._context.logger.debug(
                        "route_layer_skipped", layer=type(layer).__name__
                    )

    def _is_terminal(self, route: Route) -> bool:
        """Check that every layer of the route is a plain method handler."""
        if not route.stack:
            return False
        for layer in route.stack:
            if not isinstance(layer, MethodLayer) or not layer.method:
                return False
            if isinstance(layer.handler, Router) and layer.handler.stack:
                return False
        return True

    def _register_route(
        self,
        registry: EndpointRegistry,
        route: Route,
        base_path: str,
        pending: list[RouteMetadata],
    ) -> None:
        collected = list(pending)
        for layer in route.stack:
            if isinstance(layer, MethodLayer) and layer.metadata is not None:
                collected.append(layer.metadata)
        metadata = RouteMetadata.merge(collected)

        path = "/" + merge_paths(base_path, route.path)
        for method in route.methods:
            registry.add(path, method, metadata)

    def _layer_path(self, pattern: PathPattern) -> str:
        if pattern.literal is not None:
            return trim_slash(pattern.literal)
        if pattern.fast_slash:
            return ""
        return trim_slash(self._decoder.decode(pattern, pattern.keys))
