"""Route tree model: the closed set of layer kinds the compiler understands.

A route tree is a Router whose stack holds layers. Each layer is exactly one
of the variants below, and traversal is a ``match`` over them:

    MetadataLayer    gateway metadata marker (applies to later siblings)
    RouteLayer       a route definition with its own stack of method layers
    MountLayer       an opaque sub-tree mounted under a path
    MethodLayer      a method handler inside a route's stack
    MiddlewareLayer  anything else (no path contribution)

Trees are built by providers in ``routesync.infrastructure.routing`` and are
read-only for the compiler.

Usage:
    root = Router(
        stack=(
            MountLayer(pattern=api_pattern, router=Router(stack=(...))),
        )
    )
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from routesync.domain.value_objects import PathPattern, RouteMetadata


@dataclass(frozen=True, slots=True)
class Router:
    """An ordered stack of layers (an application or a sub-router).

    Attributes:
        stack: Layers in registration order.
    """

    stack: tuple["Layer", ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MetadataLayer:
    """Gateway metadata marker.

    Attributes:
        metadata: Metadata applied to routes registered after this layer.
        name: Marker name as reported by the routing layer.
    """

    metadata: RouteMetadata
    name: str = "gateway_endpoint"


@dataclass(frozen=True, slots=True, kw_only=True)
class MethodLayer:
    """A method handler inside a route's stack.

    Attributes:
        method: HTTP method handled (None for "all methods" handlers).
        handler: Handler callable, or a Router when a sub-tree is mounted
            as a route handler.
        pattern: The layer's pattern (normally a pass-through slash).
        metadata: Metadata carried by this handler when it is a marker.
    """

    method: str | None
    handler: Callable[..., Any] | Router
    pattern: PathPattern
    metadata: RouteMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Route:
    """A route definition.

    Attributes:
        path: The path the route was declared with (e.g., "/user/:id").
        stack: Handler layers of the route.
    """

    path: str
    stack: tuple["Layer", ...] = field(default_factory=tuple)

    @property
    def methods(self) -> tuple[str, ...]:
        """Distinct upper-cased methods of the route, first-seen order."""
        seen: dict[str, None] = {}
        for layer in self.stack:
            if isinstance(layer, MethodLayer) and layer.method:
                seen.setdefault(layer.method.upper(), None)
        return tuple(seen)


@dataclass(frozen=True, slots=True, kw_only=True)
class RouteLayer:
    """Router stack entry dispatching to a route.

    Attributes:
        pattern: The route's compiled path pattern.
        route: The route definition.
    """

    pattern: PathPattern
    route: Route


@dataclass(frozen=True, slots=True, kw_only=True)
class MountLayer:
    """Router stack entry dispatching to a nested router.

    Attributes:
        pattern: The mount point's compiled pattern.
        router: The mounted sub-tree.
    """

    pattern: PathPattern
    router: Router


@dataclass(frozen=True, slots=True, kw_only=True)
class MiddlewareLayer:
    """Plain middleware; contributes nothing to the operation table.

    Attributes:
        name: Middleware name (for diagnostics).
        pattern: The middleware's pattern, if any.
    """

    name: str
    pattern: PathPattern | None = None


type Layer = MetadataLayer | RouteLayer | MountLayer | MethodLayer | MiddlewareLayer
