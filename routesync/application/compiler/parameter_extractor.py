"""Path to gateway URL template conversion.

Turns a ``:name`` style path (as declared on a route, or as produced by a
pattern decoder) into the gateway's ``{name}`` template syntax and collects
the template parameters.

Examples::

    "/user/:id"                 -> "/user/{id}"              [id]
    "/files/:name.:ext"         -> "/files/{name}.{ext}"     [name, ext]
    "/range/:from-:to"          -> "/range/{from}-{to}"      [from, to]
    "/user/:name([A-z-]*)"      -> "/user/{name}"            [name]
    "/a/:id/b/:id"              -> "/a/{id}/b/{idP<n>}"      [id, idP<n>]
"""

import re
from dataclasses import dataclass

from routesync.application.compiler.context import CompilationContext
from routesync.core.constants import MIN_PARAMETER_NAME_LENGTH, PARAMETER_SUFFIX_MARKER
from routesync.domain.value_objects import TemplateParameter

_METACHARACTERS = re.compile(r"[:?+*()|]")
# ":name(<regex>)" - custom capture following a named parameter, one nesting level
_INLINE_CAPTURE = re.compile(r"(:\w+)\((?:[^()]|\([^()]*\))*\)")


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractedTemplate:
    """Result of converting one path.

    Attributes:
        url_template: Path with ``{name}`` placeholders.
        template_parameters: Placeholders in encounter order.
    """

    url_template: str
    template_parameters: tuple[TemplateParameter, ...]


class ParameterExtractor:
    """Convert paths into URL templates for one compilation run.

    Args:
        context: Run context providing the disambiguation counter.
    """

    def __init__(self, context: CompilationContext) -> None:
        self._context = context

    def extract(self, path: str) -> ExtractedTemplate:
        """Convert a path into a URL template.

        Args:
            path: Path using ``:name`` parameters, possibly with inline regex.

        Returns:
            ExtractedTemplate with the template and its parameters.
        """
        parameters: list[TemplateParameter] = []
        path = _INLINE_CAPTURE.sub(r"\1", path)

        segments = []
        for segment in path.split("/"):
            parts = []
            for part in segment.split("-"):
                pieces = [self._convert(piece, parameters) for piece in part.split(".")]
                parts.append(".".join(pieces))
            segments.append("-".join(parts))

        return ExtractedTemplate(
            url_template="/".join(segments),
            template_parameters=tuple(parameters),
        )

    def _convert(self, piece: str, parameters: list[TemplateParameter]) -> str:
        if not _METACHARACTERS.search(piece):
            return piece

        name = _METACHARACTERS.sub("", piece)
        taken = any(parameter.name == name for parameter in parameters)
        if len(name) < MIN_PARAMETER_NAME_LENGTH or taken:
            name = f"{name}{PARAMETER_SUFFIX_MARKER}{self._context.next_sequence()}"

        parameters.append(TemplateParameter(name=name))
        return "{" + name + "}"
