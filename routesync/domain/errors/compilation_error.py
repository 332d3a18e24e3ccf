"""Errors and warnings produced while compiling a route tree.

Only AmbiguousPathError is fatal: it is raised in strict mode and aborts the
whole compilation run (no partial table is returned). Every other condition
is recorded and compensated in place.

Taxonomy:
    AmbiguousPathError (Exception): two templates collide once parameter
        names are erased, and strict mode is on.
    AmbiguityWarning: the same collision in lenient mode.
    MalformedPatternWarning: a compiled pattern could not be decoded into a
        clean template; the best-effort text is used.
"""

from dataclasses import dataclass

from routesync.core.enums import ErrorCode
from routesync.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AmbiguityWarning:
    """A template the gateway cannot distinguish from an earlier one.

    Attributes:
        erased_template: Template with every placeholder replaced by {param}.
        method: HTTP method shared by the colliding entries.
        url_template: Template of the colliding (later) entry.
        conflicts_with: Template of the first entry of the group.
    """

    erased_template: str
    method: str
    url_template: str
    conflicts_with: str

    def __str__(self) -> str:
        return (
            f"There is more than one path with the syntax of "
            f"{self.erased_template} and the method of {self.method}"
        )


class AmbiguousPathError(Exception):
    """Raised in strict mode when two templates collide after erasure."""

    code = ErrorCode.ROUTE_PATH_AMBIGUOUS

    def __init__(self, warning: AmbiguityWarning) -> None:
        super().__init__(
            "Found more than one path with the same syntax: " + str(warning)
        )
        self.warning = warning


@dataclass(frozen=True, slots=True, kw_only=True)
class MalformedPatternWarning(DomainError):
    """A pattern decoded with leftovers or a token count mismatch.

    Attributes:
        code: ErrorCode.PATTERN_DECODE_DEGRADED.
        message: What went wrong.
        pattern: Source text of the compiled pattern.
        decoded: Best-effort decoded path.
    """

    pattern: str
    decoded: str
