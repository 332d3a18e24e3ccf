"""Route tree compiler: one run from tree to checked operation table.

Usage:
    compiler = RouteTreeCompiler(logger=get_logger(), base_path="/api")
    result = compiler.compile(root, strict=True)
    for operation in result.operations:
        print(operation.method, operation.url_template)
"""

from dataclasses import dataclass

from routesync.application.compiler.ambiguity_detector import AmbiguityDetector
from routesync.application.compiler.context import CompilationContext
from routesync.application.compiler.endpoint_registry import EndpointRegistry
from routesync.application.compiler.route_tree_walker import RouteTreeWalker
from routesync.core.constants import OPERATION_ID_PREFIX_DEFAULT
from routesync.domain.errors import AmbiguityWarning
from routesync.domain.protocols import LoggerProtocol, PatternDecoderProtocol
from routesync.domain.route_tree import Router
from routesync.domain.value_objects import OperationEntry


@dataclass(frozen=True, slots=True, kw_only=True)
class CompilationResult:
    """Output of one compilation run.

    Attributes:
        registry: Path -> method -> entry table.
        warnings: Ambiguities found in lenient mode.
    """

    registry: EndpointRegistry
    warnings: tuple[AmbiguityWarning, ...] = ()

    @property
    def operations(self) -> list[OperationEntry]:
        """Flattened operation list handed to the gateway client."""
        return self.registry.entries()


class RouteTreeCompiler:
    """Compile route trees into operation tables.

    Every call to ``compile`` uses a fresh CompilationContext, so identifiers
    and parameter suffixes restart for each run and runs never share state.

    Args:
        logger: Logger for walk, registration and ambiguity events.
        base_path: Prefix applied to every discovered path.
        operation_id_prefix: Fixed prefix of generated identifiers.
        decoder: Pattern dialect for layers without a literal path
            (defaults to ExpressPatternDecoder).
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol | None = None,
        base_path: str = "",
        operation_id_prefix: str = OPERATION_ID_PREFIX_DEFAULT,
        decoder: PatternDecoderProtocol | None = None,
    ) -> None:
        self._logger = logger
        self._base_path = base_path
        self._operation_id_prefix = operation_id_prefix
        self._decoder = decoder

    def compile(self, root: Router, *, strict: bool = False) -> CompilationResult:
        """Walk the tree, then check the table for ambiguous templates.

        Args:
            root: Route tree to compile.
            strict: Raise AmbiguousPathError instead of returning warnings.

        Returns:
            CompilationResult with the registry and lenient-mode warnings.

        Raises:
            AmbiguousPathError: If strict and two templates collide.
        """
        context = CompilationContext(operation_id_prefix=self._operation_id_prefix)
        if self._logger is not None:
            context.logger = self._logger

        registry = RouteTreeWalker(context, self._decoder).walk(root, self._base_path)
        warnings = AmbiguityDetector(context).detect(registry, strict)
        return CompilationResult(registry=registry, warnings=tuple(warnings))
