"""Unit tests for express style path compilation."""

import pytest

from routesync.domain.value_objects import CaptureToken
from routesync.infrastructure.routing import compile_path


@pytest.mark.unit
class TestCompilePath:
    """Test regex source, tokens and matching behaviour."""

    def test_route_pattern_source(self):
        pattern = compile_path("/user/:id")

        assert pattern.regex.pattern == r"^\/user\/(?:([^\/]+?))\/?$"
        assert pattern.keys == (CaptureToken(name="id", optional=False, offset=7),)

    def test_route_pattern_matches(self):
        pattern = compile_path("/user/:id")

        assert pattern.regex.match("/user/42").group(1) == "42"
        assert pattern.regex.match("/user/42/") is not None
        assert pattern.regex.match("/user/42/posts") is None

    def test_mount_pattern_matches_prefix(self):
        pattern = compile_path("/api", end=False)

        assert pattern.regex.pattern == r"^\/api\/?(?=\/|$)"
        assert pattern.regex.match("/api/widgets") is not None
        assert pattern.regex.match("/apiary") is None

    def test_optional_parameter(self):
        pattern = compile_path("/user/:id?")

        assert pattern.keys[0].optional is True
        assert pattern.regex.match("/user") is not None
        assert pattern.regex.match("/user/7") is not None

    def test_format_parameter(self):
        pattern = compile_path("/files/:name.:ext")

        match = pattern.regex.match("/files/report.pdf")
        assert [key.name for key in pattern.keys] == ["name", "ext"]
        assert match.groups() == ("report", "pdf")

    def test_custom_capture(self):
        pattern = compile_path(r"/user/:id(\d+)")

        assert pattern.regex.match("/user/12") is not None
        assert pattern.regex.match("/user/abc") is None

    def test_case_insensitive_by_default(self):
        assert compile_path("/Users").regex.match("/users") is not None
        assert compile_path("/Users", sensitive=True).regex.match("/users") is None

    def test_strict_disallows_trailing_slash(self):
        assert compile_path("/users", strict=True).regex.match("/users/") is None

    def test_unnamed_group_gets_numeric_token(self):
        pattern = compile_path("/files/(.*)")

        assert [key.name for key in pattern.keys] == ["0"]

    def test_fast_slash_only_for_root_mounts(self):
        assert compile_path("/", end=False).fast_slash is True
        assert compile_path("/").fast_slash is False
        assert compile_path("/api", end=False).fast_slash is False

    def test_fast_star(self):
        pattern = compile_path("*")

        assert pattern.fast_star is True
        assert pattern.regex.match("/anything/at/all") is not None
