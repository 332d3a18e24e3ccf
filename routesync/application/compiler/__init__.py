"""Route tree to operation table compiler.

Components (leaves first):
    pattern_decoder: compiled pattern -> ``:name`` path (per dialect)
    parameter_extractor: ``:name`` path -> ``{name}`` template + parameters
    naming: operation identifiers and display names
    endpoint_registry: (path, method) table with merge semantics
    route_tree_walker: depth-first discovery feeding the registry
    ambiguity_detector: structural collision check over the finished table
    compiler: one compilation run wiring all of the above

Usage:
    from routesync.application.compiler import RouteTreeCompiler

    result = RouteTreeCompiler(base_path="/api").compile(root, strict=True)
"""

from routesync.application.compiler.ambiguity_detector import AmbiguityDetector
from routesync.application.compiler.compiler import CompilationResult, RouteTreeCompiler
from routesync.application.compiler.context import CompilationContext
from routesync.application.compiler.endpoint_registry import EndpointRegistry
from routesync.application.compiler.naming import OperationIdentifierGenerator
from routesync.application.compiler.parameter_extractor import (
    ExtractedTemplate,
    ParameterExtractor,
)
from routesync.application.compiler.pattern_decoder import (
    ExpressPatternDecoder,
    StarlettePatternDecoder,
)
from routesync.application.compiler.route_tree_walker import RouteTreeWalker

__all__ = [
    "AmbiguityDetector",
    "CompilationContext",
    "CompilationResult",
    "EndpointRegistry",
    "ExpressPatternDecoder",
    "ExtractedTemplate",
    "OperationIdentifierGenerator",
    "ParameterExtractor",
    "RouteTreeCompiler",
    "RouteTreeWalker",
    "StarlettePatternDecoder",
]
