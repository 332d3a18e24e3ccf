"""Compiled path patterns as exposed by routing layers.

A routing layer rarely keeps the path it was declared with; what it keeps
is the compiled matcher plus the ordered capture names. PathPattern carries
exactly that, so a decoder can reverse-engineer the textual template.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class CaptureToken:
    """A named capture inside a compiled path pattern.

    Attributes:
        name: Parameter name (e.g., "id").
        optional: Whether the parameter was declared optional (``:id?``).
        offset: Position of the capture in the pattern source text.
    """

    name: str
    optional: bool = False
    offset: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class PathPattern:
    """Compiled path matcher of a routing layer.

    Attributes:
        regex: Compiled pattern matching the layer's path.
        keys: Capture tokens in declaration order.
        literal: Textual path when the routing layer retained it.
        fast_slash: Pattern matches any remaining path (mount at "/").
        fast_star: Pattern matches everything ("*").
    """

    regex: re.Pattern[str]
    keys: tuple[CaptureToken, ...] = field(default_factory=tuple)
    literal: str | None = None
    fast_slash: bool = False
    fast_star: bool = False
