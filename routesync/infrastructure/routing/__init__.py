"""Route tree providers.

- Router: programmatic express-style builder
- build_route_tree: Starlette/FastAPI application reader
- gateway_endpoint: metadata marker usable with both
"""

from routesync.infrastructure.routing.markers import (
    GATEWAY_ENDPOINT_MARKER,
    find_route_metadata,
    gateway_endpoint,
)
from routesync.infrastructure.routing.path_to_regexp import compile_path
from routesync.infrastructure.routing.router import RouteBuilder, Router
from routesync.infrastructure.routing.starlette_adapter import build_route_tree

__all__ = [
    "GATEWAY_ENDPOINT_MARKER",
    "RouteBuilder",
    "Router",
    "build_route_tree",
    "compile_path",
    "find_route_metadata",
    "gateway_endpoint",
]
