"""Express style path compilation (path-to-regexp 0.1.x dialect).

Produces the same regex source and capture tokens an express router layer
holds, so trees built with the programmatic Router look exactly like trees
read from a running express application:

    compile_path("/user/:id")            ^\\/user\\/(?:([^\\/]+?))\\/?$
    compile_path("/api", end=False)      ^\\/api\\/?(?=\\/|$)
    compile_path("/:from-:to")           two tokens, offsets into the source

Supported syntax: ``:name``, ``:name?``, ``:name*``, ``:name(regex)``,
``.:format``, ``*`` and unnamed groups ``(...)``.
"""

import re
from dataclasses import replace

from routesync.domain.value_objects import CaptureToken, PathPattern

_PARAMETER = re.compile(r"(\\\/)?(\\\.)?:(\w+)(\(.*?\))?(\*)?(\?)?")
_UNNAMED_GROUP = re.compile(r"\((?!\?)")
# Length of "(.*)" minus the "*" it replaces
_STAR_GROWTH = 3


def compile_path(
    path: str,
    *,
    end: bool = True,
    strict: bool = False,
    sensitive: bool = False,
) -> PathPattern:
    """Compile a declared path into a layer pattern.

    Args:
        path: Declared path (e.g., "/user/:id").
        end: Anchor at end of input (routes) or match a prefix (mounts).
        strict: Disallow the optional trailing slash.
        sensitive: Match case sensitively.

    Returns:
        PathPattern with the compiled regex and capture tokens.
    """
    keys: list[CaptureToken] = []
    extra_offset = 0

    if strict:
        trailing = ""
    else:
        trailing = "?" if path.endswith("/") else "/?"
    source = "^" + path + trailing
    source = source.replace("/(", "/(?:")
    source = re.sub(r"([/.])", r"\\\1", source)

    def parameter(match: re.Match[str]) -> str:
        nonlocal extra_offset
        slash, fmt, name, capture, star, optional = match.groups(default="")
        capture = capture or rf"([^\/{fmt}]+?)"

        keys.append(
            CaptureToken(
                name=name,
                optional=bool(optional),
                offset=match.start() + extra_offset,
            )
        )

        result = (
            ("" if optional else slash)
            + "(?:"
            + fmt
            + (slash if optional else "")
            + capture
            + (rf"((?:[\/{fmt}].+?)?)" if star else "")
            + ")"
            + optional
        )
        extra_offset += len(result) - len(match.group(0))
        return result

    def wildcard(match: re.Match[str]) -> str:
        for index in range(len(keys) - 1, -1, -1):
            if keys[index].offset <= match.start():
                break
            keys[index] = replace(keys[index], offset=keys[index].offset - _STAR_GROWTH)
        return "(.*)"

    source = _PARAMETER.sub(parameter, source)
    source = re.sub(r"\*", wildcard, source)
    _insert_unnamed_groups(source, keys)

    if end:
        source += "$"
    elif not source.endswith("/"):
        source += r"(?=\/|$)"

    return PathPattern(
        regex=re.compile(source, 0 if sensitive else re.IGNORECASE),
        keys=tuple(keys),
        fast_slash=path == "/" and not end,
        fast_star=path == "*",
    )


def _insert_unnamed_groups(source: str, keys: list[CaptureToken]) -> None:
    """Add numbered tokens for capture groups not produced by a ``:name``."""
    position = 0
    counter = 0
    for match in _UNNAMED_GROUP.finditer(source):
        start = match.start()
        escapes = 0
        while start - escapes > 0 and source[start - escapes - 1] == "\\":
            escapes += 1
        if escapes % 2 == 1:
            continue

        if position == len(keys) or keys[position].offset > match.start():
            keys.insert(position, CaptureToken(name=str(counter), offset=match.start()))
            counter += 1
        position += 1
