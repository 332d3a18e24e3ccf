"""Per-run compilation state.

Operation identifiers and parameter disambiguation suffixes draw from one
monotonically increasing sequence. The sequence belongs to a single
compilation run, so independent runs (including concurrent ones) never share
or collide on counter values.
"""

from dataclasses import dataclass, field

from routesync.core.constants import OPERATION_ID_PREFIX_DEFAULT
from routesync.domain.protocols import LoggerProtocol, NullLogger


@dataclass(slots=True, kw_only=True)
class CompilationContext:
    """State owned by exactly one compilation run.

    Attributes:
        logger: Logger receiving walk, registration and ambiguity events.
        operation_id_prefix: Fixed prefix of generated identifiers.
    """

    logger: LoggerProtocol = field(default_factory=NullLogger)
    operation_id_prefix: str = OPERATION_ID_PREFIX_DEFAULT
    _sequence: int = field(default=0, init=False, repr=False)

    def next_sequence(self) -> int:
        """Return the next counter value (starting at 1, never reused)."""
        self._sequence += 1
        return self._sequence

    @property
    def last_sequence(self) -> int:
        """Most recently issued counter value (0 before the first one)."""
        return self._sequence
