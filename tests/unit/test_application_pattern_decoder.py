"""Unit tests for pattern decoders (compiled matcher -> ``:name`` path).

Tests cover:
- path-to-regexp dialect: routes, mounts, optional and format parameters
- Starlette dialect: named groups and the mount remainder
- Degraded decoding (token mismatch, leftover syntax) logs a warning
- Decode + extract yields one placeholder per token
"""

import re
from unittest.mock import MagicMock

import pytest
from starlette.routing import compile_path as starlette_compile_path

from routesync.application.compiler import (
    CompilationContext,
    ExpressPatternDecoder,
    ParameterExtractor,
    StarlettePatternDecoder,
)
from routesync.domain.value_objects import CaptureToken, PathPattern
from routesync.infrastructure.routing import compile_path
from tests.conftest import logged_events


def decode_express(
    path: str, *, end: bool = True, strict: bool = False, logger=None
) -> str:
    pattern = compile_path(path, end=end, strict=strict)
    return ExpressPatternDecoder(logger).decode(pattern, pattern.keys)


def starlette_pattern(path: str, *, drop: tuple[str, ...] = ()) -> PathPattern:
    regex, _, convertors = starlette_compile_path(path)
    keys = tuple(CaptureToken(name=name) for name in convertors if name not in drop)
    return PathPattern(regex=regex, keys=keys)


@pytest.mark.unit
class TestExpressPatternDecoder:
    """Test decoding of path-to-regexp patterns."""

    def test_decodes_scenario_pattern(self):
        pattern = PathPattern(
            regex=re.compile(r"^\/user\/(?:([^\/]+?))\/?$", re.IGNORECASE),
            keys=(CaptureToken(name="id", offset=0),),
        )

        assert ExpressPatternDecoder().decode(pattern, pattern.keys) == "/user/:id"

    @pytest.mark.parametrize(
        ("path", "end", "expected"),
        [
            ("/user/:id", True, "/user/:id"),
            ("/api", False, "/api"),
            ("/api/", False, "/api"),
            ("/orgs/:org/repos/:repo", False, "/orgs/:org/repos/:repo"),
            ("/user/:id?", True, "/user/:id"),
            ("/files/:name.:ext", True, "/files/:name.:ext"),
            ("/range/:from-:to", True, "/range/:from-:to"),
        ],
    )
    def test_round_trips_declared_path(self, path: str, end: bool, expected: str):
        logger = MagicMock()

        assert decode_express(path, end=end, logger=logger) == expected
        logger.warning.assert_not_called()

    @pytest.mark.parametrize(
        ("path", "end", "expected"),
        [
            ("/api", False, "/api"),
            ("/orgs/:org", False, "/orgs/:org"),
            ("/user/:id", True, "/user/:id"),
        ],
    )
    def test_round_trips_strict_path(self, path: str, end: bool, expected: str):
        logger = MagicMock()

        assert decode_express(path, end=end, strict=True, logger=logger) == expected
        logger.warning.assert_not_called()

    def test_strict_mount_pattern_has_bare_lookahead(self):
        pattern = compile_path("/api", end=False, strict=True)

        assert pattern.regex.pattern == r"^\/api(?=\/|$)"
        assert ExpressPatternDecoder().decode(pattern, pattern.keys) == "/api"

    def test_fast_slash_decodes_to_empty(self):
        assert decode_express("/", end=False) == ""

    def test_root_route_decodes_to_empty(self):
        assert decode_express("/") == ""

    def test_tokens_are_ordered_by_offset(self):
        pattern = compile_path("/a/:first/b/:second")
        reversed_keys = tuple(reversed(pattern.keys))

        decoded = ExpressPatternDecoder().decode(pattern, reversed_keys)

        assert decoded == "/a/:first/b/:second"

    def test_missing_token_degrades_with_warning(self):
        logger = MagicMock()
        pattern = compile_path("/a/:x/:y")

        decoded = ExpressPatternDecoder(logger).decode(pattern, pattern.keys[:1])

        assert decoded == "/a/:x/:param1"
        assert logged_events(logger, "warning") == ["pattern_decode_degraded"]

    def test_leftover_syntax_degrades_with_warning(self):
        logger = MagicMock()
        pattern = compile_path("*")

        decoded = ExpressPatternDecoder(logger).decode(pattern, pattern.keys)

        assert "(" in decoded
        assert logged_events(logger, "warning") == ["pattern_decode_degraded"]


@pytest.mark.unit
class TestStarlettePatternDecoder:
    """Test decoding of Starlette path_regex patterns."""

    def test_decodes_route(self):
        pattern = starlette_pattern("/users/{user_id:int}")

        decoded = StarlettePatternDecoder().decode(pattern, pattern.keys)
        assert decoded == "/users/:user_id"

    def test_decodes_float_convertor_with_nested_group(self):
        pattern = starlette_pattern("/prices/{amount:float}")

        decoded = StarlettePatternDecoder().decode(pattern, pattern.keys)
        assert decoded == "/prices/:amount"

    def test_unescapes_literal_characters(self):
        pattern = starlette_pattern("/user-profiles/{name}.json")

        decoded = StarlettePatternDecoder().decode(pattern, pattern.keys)

        assert decoded == "/user-profiles/:name.json"

    def test_drops_mount_remainder(self):
        pattern = starlette_pattern("/api/{path:path}", drop=("path",))

        assert StarlettePatternDecoder().decode(pattern, pattern.keys) == "/api"

    def test_root_mount_decodes_to_empty(self):
        pattern = starlette_pattern("/{path:path}", drop=("path",))

        assert StarlettePatternDecoder().decode(pattern, pattern.keys) == ""

    def test_literal_is_returned_as_is(self):
        pattern = PathPattern(regex=re.compile("^/x$"), literal="/declared/:id")

        assert StarlettePatternDecoder().decode(pattern, ()) == "/declared/:id"

    def test_unknown_token_logs_warning(self):
        logger = MagicMock()
        pattern = starlette_pattern("/users/{user_id}")

        StarlettePatternDecoder(logger).decode(
            pattern, (CaptureToken(name="user_id"), CaptureToken(name="missing"))
        )

        assert logged_events(logger, "warning") == ["pattern_decode_degraded"]


@pytest.mark.unit
class TestDecodeThenExtract:
    """Placeholder count equals token count and names stay unique."""

    @pytest.mark.parametrize(
        "path",
        ["/user/:id", "/a/:id/b/:id", "/x/:a/:b", "/files/:name.:ext", "/static"],
    )
    def test_placeholders_match_tokens(self, path: str):
        pattern = compile_path(path)
        decoded = ExpressPatternDecoder().decode(pattern, pattern.keys)

        template = ParameterExtractor(CompilationContext()).extract(decoded)

        names = [p.name for p in template.template_parameters]
        assert template.url_template.count("{") == len(pattern.keys)
        assert len(names) == len(set(names))
