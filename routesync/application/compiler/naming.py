"""Operation identifier and display name generation.

Identifiers look like ``routesync-users-id-GET-3``: a fixed prefix, a slug of
the path, the method and a run-wide counter. The counter keeps identifiers
unique even when two paths slugify to the same text.

Display names look like ``Get Users Id``.
"""

import re

from routesync.application.compiler.context import CompilationContext
from routesync.core.constants import DISPLAY_NAME_MAX_LENGTH, OPERATION_SLUG_MAX_LENGTH

_NOT_SLUG = re.compile(r"[^A-Za-z0-9-]")
_WORD_SEPARATORS = re.compile(r"[/-]")
_NOT_WORD = re.compile(r"[^A-Za-z0-9 ]")


def trim_slash(value: str) -> str:
    """Strip surrounding whitespace and one leading/trailing slash."""
    value = value.strip()
    value = value.removeprefix("/")
    return value.removesuffix("/")


def merge_paths(*paths: str) -> str:
    """Join path fragments with exactly one slash between non-empty ones.

    Example:
        >>> merge_paths("/api/", "", "/widgets")
        'api/widgets'
    """
    return "/".join(part for part in (trim_slash(path) for path in paths) if part)


def capitalize(word: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    return word[:1].upper() + word[1:].lower()


class OperationIdentifierGenerator:
    """Generate identifiers and display names for one compilation run.

    Args:
        context: Run context providing the prefix and the counter.
    """

    def __init__(self, context: CompilationContext) -> None:
        self._context = context

    def identifier(self, path: str, method: str) -> str:
        """Generate a unique operation identifier.

        Args:
            path: Registered path (e.g., "/users/:id").
            method: HTTP method.

        Returns:
            ``<prefix>-<slug>-<METHOD>-<counter>``.
        """
        slug = trim_slash(path).strip().lower().replace("/", "-")
        slug = _NOT_SLUG.sub("", slug)[:OPERATION_SLUG_MAX_LENGTH].strip("-")
        counter = self._context.next_sequence()
        return f"{self._context.operation_id_prefix}-{slug}-{method.upper()}-{counter}"

    def display_name(self, path: str, method: str) -> str:
        """Generate a human readable operation name.

        Args:
            path: Registered path.
            method: HTTP method.

        Returns:
            Capitalized method followed by the capitalized path words.
        """
        words = _NOT_WORD.sub("", _WORD_SEPARATORS.sub(" ", trim_slash(path)))
        title = " ".join(capitalize(word) for word in words.split(" "))
        return f"{capitalize(method)} {title[:DISPLAY_NAME_MAX_LENGTH]}"
