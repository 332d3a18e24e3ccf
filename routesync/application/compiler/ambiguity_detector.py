"""Detection of templates the gateway cannot tell apart.

``/user/{name}`` and ``/user/{id}`` are different routes locally, but the
gateway matches on structure only. Erasing every placeholder name exposes
such pairs: both become ``/user/{param}``.

Colliding entries stay in the table untouched; the detector only reports.
"""

import re
from collections.abc import Iterable

from routesync.application.compiler.context import CompilationContext
from routesync.core.constants import ERASED_PARAMETER_TOKEN
from routesync.domain.errors import AmbiguityWarning, AmbiguousPathError
from routesync.domain.value_objects import OperationEntry

_PLACEHOLDER = re.compile(r"\{.*?\}")


def erase_parameters(url_template: str) -> str:
    """Replace every ``{...}`` placeholder with ``{param}``."""
    return _PLACEHOLDER.sub(ERASED_PARAMETER_TOKEN, url_template)


class AmbiguityDetector:
    """Post-pass over a finished operation table.

    Args:
        context: Run context (logger).
    """

    def __init__(self, context: CompilationContext) -> None:
        self._context = context

    def detect(
        self,
        entries: Iterable[OperationEntry],
        strict: bool = False,
    ) -> list[AmbiguityWarning]:
        """Report every entry colliding with an earlier one.

        Args:
            entries: Operation table (e.g., an EndpointRegistry).
            strict: Raise on the first collision instead of collecting.

        Returns:
            One warning per colliding entry beyond the first of its group.

        Raises:
            AmbiguousPathError: If strict and a collision exists.
        """
        self._context.logger.info("path_overlap_check_started", strict=strict)

        first_seen: dict[tuple[str, str], OperationEntry] = {}
        warnings: list[AmbiguityWarning] = []

        for entry in entries:
            key = (erase_parameters(entry.url_template), entry.method)
            first = first_seen.setdefault(key, entry)
            if first is entry:
                continue

            warning = AmbiguityWarning(
                erased_template=key[0],
                method=entry.method,
                url_template=entry.url_template,
                conflicts_with=first.url_template,
            )
            self._context.logger.warning(
                "ambiguous_path_detected",
                erased_template=warning.erased_template,
                method=warning.method,
                url_template=warning.url_template,
                conflicts_with=warning.conflicts_with,
            )
            if strict:
                raise AmbiguousPathError(warning)
            warnings.append(warning)

        return warnings
