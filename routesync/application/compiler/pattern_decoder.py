"""Pattern decoders: compiled path matchers back to ``:name`` paths.

Routing layers keep compiled regexes, not the paths they were declared
with. Decoders reverse that compilation for one dialect each:

    ExpressPatternDecoder    path-to-regexp output, e.g.
                             ``^\\/user\\/(?:([^\\/]+?))\\/?(?=\\/|$)`` -> ``/user/:id``
    StarlettePatternDecoder  Starlette/FastAPI ``path_regex``, e.g.
                             ``^/user/(?P<id>[^/]+)$`` -> ``/user/:id``

The output still uses the ``:name`` convention; conversion to gateway
template syntax happens in ParameterExtractor.

Reversal is regex-on-regex and inherently best effort. When the result is
not clean (token count mismatch, leftover regex syntax) the decoder logs a
``pattern_decode_degraded`` warning and returns what it has.
"""

import re
from collections.abc import Sequence

from routesync.core.enums import ErrorCode
from routesync.domain.errors import MalformedPatternWarning
from routesync.domain.protocols import LoggerProtocol, NullLogger
from routesync.domain.value_objects import CaptureToken, PathPattern

# (?:\/(...))?, (?:\.(...)) or (?:(...)) - wrapper around one capture group
_EXPRESS_PARAM_GROUP = re.compile(r"\(\?:(\\/|\\\.|)\(.*?\)\)\??")
# Leading "(?i)" and "^"; trailing "\/?$", "\/?", "\/?(?=\/|$)", "(?=\/|$)", "$"
_EXPRESS_ANCHORS = re.compile(
    r"^\(\?i\)|^\^|\\/\?\$$|\\/\?$|\\/\?\(\?=\\/\|\$\)$|\(\?=\\/\|\$\)$|\$$"
)
_ESCAPED_CHAR = re.compile(r"\\([/.\-])")
# Characters that cannot survive in a decoded path
_LEFTOVER_SYNTAX = re.compile(r"[()\[\]^$]|\\[dwsDWS]|\+\?")

# (?P<name>...) allowing one level of nested groups in the body
_STARLETTE_NAMED_GROUP = re.compile(r"(/?)\(\?P<(\w+)>(?:[^()]|\([^()]*\))*\)")


class ExpressPatternDecoder:
    """Decoder for the path-to-regexp dialect (express style routers).

    Args:
        logger: Receives ``pattern_decode_degraded`` warnings.
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._logger = logger or NullLogger()

    def decode(self, pattern: PathPattern, tokens: Sequence[CaptureToken]) -> str:
        """Decode a path-to-regexp pattern.

        Args:
            pattern: Compiled pattern of the layer.
            tokens: Capture tokens (any order; sorted by offset here).

        Returns:
            The ``:name`` style path, or "" for fast-slash mount points.
        """
        if pattern.fast_slash:
            return ""

        ordered = sorted(tokens, key=lambda token: token.offset)
        source = pattern.regex.pattern
        counter = 0
        mismatch = False

        def replace(match: re.Match[str]) -> str:
            nonlocal counter, mismatch
            separator = match.group(1)
            if counter < len(ordered):
                name = ordered[counter].name
            else:
                mismatch = True
                name = f"param{counter}"
            counter += 1
            return f"{separator}:{name}"

        path = _EXPRESS_PARAM_GROUP.sub(replace, source)
        # Anchors can stack (e.g. "\/?(?=\/|$)" leaves nothing else), strip until stable
        previous = None
        while previous != path:
            previous = path
            path = _EXPRESS_ANCHORS.sub("", path)
        path = _ESCAPED_CHAR.sub(r"\1", path)

        if counter != len(ordered):
            mismatch = True
        if mismatch or _LEFTOVER_SYNTAX.search(path):
            self._report(source, path, groups=counter, tokens=len(ordered))
        return path

    def _report(self, source: str, decoded: str, *, groups: int, tokens: int) -> None:
        warning = MalformedPatternWarning(
            code=ErrorCode.PATTERN_DECODE_DEGRADED,
            message="Pattern could not be decoded into a clean path",
            pattern=source,
            decoded=decoded,
        )
        self._logger.warning(
            "pattern_decode_degraded",
            pattern=warning.pattern,
            decoded=warning.decoded,
            groups=groups,
            tokens=tokens,
        )


class StarlettePatternDecoder:
    """Decoder for Starlette/FastAPI ``path_regex`` patterns.

    Named groups listed in the tokens become ``:name``. Other named groups
    (the ``/{path:path}`` remainder Starlette appends to mounts) are dropped
    together with their leading separator.

    Args:
        logger: Receives ``pattern_decode_degraded`` warnings.
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._logger = logger or NullLogger()

    def decode(self, pattern: PathPattern, tokens: Sequence[CaptureToken]) -> str:
        """Decode a Starlette pattern.

        Args:
            pattern: Compiled pattern of the route or mount.
            tokens: Capture tokens that are real path parameters.

        Returns:
            The ``:name`` style path, or "" for patterns matching everything.
        """
        if pattern.fast_slash:
            return ""
        if pattern.literal is not None:
            return pattern.literal

        names = {token.name for token in tokens}
        source = pattern.regex.pattern

        def replace(match: re.Match[str]) -> str:
            separator, name = match.group(1), match.group(2)
            if name not in names:
                return ""
            return f"{separator}:{name}"

        path = _STARLETTE_NAMED_GROUP.sub(replace, source)
        path = path.removeprefix("^").removesuffix("$")
        path = re.sub(r"\\(.)", r"\1", path)

        decoded_names = re.findall(r":(\w+)", path)
        if sorted(decoded_names) != sorted(names) or _LEFTOVER_SYNTAX.search(path):
            warning = MalformedPatternWarning(
                code=ErrorCode.PATTERN_DECODE_DEGRADED,
                message="Pattern could not be decoded into a clean path",
                pattern=source,
                decoded=path,
            )
            self._logger.warning(
                "pattern_decode_degraded",
                pattern=warning.pattern,
                decoded=warning.decoded,
                groups=len(decoded_names),
                tokens=len(names),
            )
        return path
