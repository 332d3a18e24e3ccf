"""Domain value objects.

Usage:
    from routesync.domain.value_objects import (
        CaptureToken,
        OperationEntry,
        PathPattern,
        RouteMetadata,
        TemplateParameter,
    )
"""

from routesync.domain.value_objects.operation_entry import (
    OperationEntry,
    TemplateParameter,
)
from routesync.domain.value_objects.path_pattern import CaptureToken, PathPattern
from routesync.domain.value_objects.route_metadata import RouteMetadata

__all__ = [
    "CaptureToken",
    "OperationEntry",
    "PathPattern",
    "RouteMetadata",
    "TemplateParameter",
]
