"""Route tree provider for Starlette and FastAPI applications.

Reads ``app.routes`` and produces the same layer variants the express-style
builder produces:

    APIRoute / Route    RouteLayer with one MethodLayer per method (HTTPEndpoint
                        classes contribute the methods they define)
    Mount               MountLayer over the mounted app's routes
    anything else       MiddlewareLayer (websockets, hosts, docs routes)

Paths are recovered from each route's ``path_regex`` with
StarlettePatternDecoder and stored as the pattern literal, so the resulting
tree compiles with the default compiler configuration.

Gateway metadata comes from ``Depends(gateway_endpoint(...))`` markers.
FastAPI copies router level dependencies onto every included route, so each
route carries its complete metadata.
"""

import inspect
import re
from collections.abc import Iterable
from typing import Any

from starlette.routing import BaseRoute, Mount, Route

from routesync.application.compiler.pattern_decoder import StarlettePatternDecoder
from routesync.domain import route_tree as tree
from routesync.domain.enums import HTTPMethod
from routesync.domain.protocols import LoggerProtocol
from routesync.domain.value_objects import CaptureToken, PathPattern
from routesync.infrastructure.routing.markers import find_route_metadata

# Starlette mounts match the rest of the URL with this parameter
_MOUNT_REMAINDER = "path"
_HANDLER_PATTERN = PathPattern(regex=re.compile(r"^/?$"), literal="")


def build_route_tree(
    app: Any,
    *,
    logger: LoggerProtocol | None = None,
) -> tree.Router:
    """Convert a Starlette/FastAPI application into a route tree.

    Args:
        app: Application, router or anything exposing ``routes``.
        logger: Receives decoder warnings.

    Returns:
        Route tree ready for RouteTreeCompiler.
    """
    decoder = StarlettePatternDecoder(logger)
    return tree.Router(stack=tuple(_convert_routes(app.routes, decoder)))


def _convert_routes(
    routes: Iterable[BaseRoute],
    decoder: StarlettePatternDecoder,
) -> list[tree.Layer]:
    layers: list[tree.Layer] = []
    for route in routes:
        match route:
            case Route() if route.include_in_schema:
                layers.append(_route_layer(route, decoder))
            case Mount():
                layers.append(_mount_layer(route, decoder))
            case _:
                name = getattr(route, "name", None) or type(route).__name__
                layers.append(tree.MiddlewareLayer(name=name))
    return layers


def _route_layer(route: Route, decoder: StarlettePatternDecoder) -> tree.RouteLayer:
    pattern = _decoded_pattern(route.path_regex, list(route.param_convertors), decoder)
    methods = _route_methods(route)

    stack: list[tree.MethodLayer] = []
    if methods:
        for marker in _route_markers(route):
            stack.append(
                tree.MethodLayer(
                    method=methods[0],
                    handler=marker,
                    pattern=_HANDLER_PATTERN,
                    metadata=find_route_metadata(marker),
                )
            )
    for method in methods or [None]:
        stack.append(
            tree.MethodLayer(
                method=method, handler=route.endpoint, pattern=_HANDLER_PATTERN
            )
        )

    return tree.RouteLayer(
        pattern=pattern,
        route=tree.Route(path=pattern.literal or "", stack=tuple(stack)),
    )


def _mount_layer(mount: Mount, decoder: StarlettePatternDecoder) -> tree.MountLayer:
    names = [name for name in mount.param_convertors if name != _MOUNT_REMAINDER]
    pattern = _decoded_pattern(mount.path_regex, names, decoder)
    return tree.MountLayer(
        pattern=pattern,
        router=tree.Router(stack=tuple(_convert_routes(mount.routes, decoder))),
    )


def _decoded_pattern(
    regex: re.Pattern[str],
    names: list[str],
    decoder: StarlettePatternDecoder,
) -> PathPattern:
    keys = tuple(
        CaptureToken(name=name, offset=regex.pattern.find(f"(?P<{name}>"))
        for name in names
    )
    raw = PathPattern(regex=regex, keys=keys)
    return PathPattern(regex=regex, keys=keys, literal=decoder.decode(raw, keys))


def _route_methods(route: Route) -> list[str]:
    """Methods in HTTPMethod order; the implicit HEAD of GET routes is dropped.

    Starlette leaves ``methods`` unset for HTTPEndpoint classes, which
    dispatch to the handler named after the lower-cased method.
    """
    if route.methods is None and inspect.isclass(route.endpoint):
        declared = {
            method.value
            for method in HTTPMethod
            if callable(getattr(route.endpoint, method.value.lower(), None))
        }
    else:
        declared = {method.upper() for method in route.methods or ()}
    if HTTPMethod.GET.value in declared:
        declared.discard(HTTPMethod.HEAD.value)
    return [method.value for method in HTTPMethod if method.value in declared]


def _route_markers(route: Route) -> list[Any]:
    """Marker callables among the route's dependencies, in resolution order."""
    dependant = getattr(route, "dependant", None)
    if dependant is None:
        return []
    return [
        dependency.call
        for dependency in dependant.dependencies
        if find_route_metadata(dependency.call) is not None
    ]
