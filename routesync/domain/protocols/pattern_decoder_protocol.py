"""PatternDecoderProtocol - reverse a compiled path matcher into text.

Each routing dialect compiles paths differently (path-to-regexp groups,
Starlette named groups, ...). The walker only depends on this port, so a
dialect can be swapped without touching traversal or the registry.
"""

from collections.abc import Sequence
from typing import Protocol

from routesync.domain.value_objects import CaptureToken, PathPattern


class PatternDecoderProtocol(Protocol):
    """Decode a compiled pattern into a ``:name`` style path."""

    def decode(self, pattern: PathPattern, tokens: Sequence[CaptureToken]) -> str:
        """Return the path text with ``<sep>:<name>`` for each capture.

        Args:
            pattern: Compiled path pattern of a routing layer.
            tokens: Capture tokens of the pattern.

        Returns:
            Raw path text (not yet gateway template syntax). The empty
            string for patterns matching any remaining path.
        """
        ...
