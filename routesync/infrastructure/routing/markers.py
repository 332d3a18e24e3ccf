"""Gateway metadata markers.

A marker is a no-op callable carrying RouteMetadata. It can be placed
wherever the routing layer accepts a handler:

    # express-style builder
    router.use(gateway_endpoint(tags=["users"]))
    router.get("/users/:id", gateway_endpoint(description="Fetch a user"), handler)

    # FastAPI
    router = APIRouter(dependencies=[Depends(gateway_endpoint(tags=["users"]))])

Markers never run any logic of their own; route tree providers recognize them
by name and turn their metadata into tree layers.
"""

from collections.abc import Callable, Iterable, Mapping

from routesync.domain.enums import PolicyStage
from routesync.domain.value_objects import RouteMetadata

GATEWAY_ENDPOINT_MARKER = "gateway_endpoint"
_METADATA_ATTRIBUTE = "__gateway_metadata__"


def gateway_endpoint(
    *,
    tags: Iterable[str] = (),
    policies: Mapping[PolicyStage | str, Iterable[str]] | None = None,
    operation_id: str | None = None,
    display_name: str | None = None,
    description: str | None = None,
) -> Callable[[], None]:
    """Create a metadata marker.

    Args:
        tags: Gateway tags for the covered operations.
        policies: Policy XML fragments keyed by stage ("inbound", "backend",
            "outbound", "on-error").
        operation_id: Identifier override (single route markers only).
        display_name: Display name override.
        description: Operation description.

    Returns:
        Marker callable named GATEWAY_ENDPOINT_MARKER.
    """
    metadata = RouteMetadata(
        tags=tuple(tags),
        policies=policies or {},
        operation_id=operation_id,
        display_name=display_name,
        description=description,
    )

    # No parameters: FastAPI resolves it without reading the request
    def marker() -> None:
        return None

    marker.__name__ = GATEWAY_ENDPOINT_MARKER
    marker.__qualname__ = GATEWAY_ENDPOINT_MARKER
    setattr(marker, _METADATA_ATTRIBUTE, metadata)
    return marker


def find_route_metadata(handler: object) -> RouteMetadata | None:
    """Return the metadata carried by a marker, None for any other handler."""
    if getattr(handler, "__name__", None) != GATEWAY_ENDPOINT_MARKER:
        return None
    metadata = getattr(handler, _METADATA_ATTRIBUTE, None)
    return metadata if isinstance(metadata, RouteMetadata) else None
