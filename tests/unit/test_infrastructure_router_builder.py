"""Unit tests for the express-style Router builder and metadata markers."""

import pytest

from routesync.domain.enums import PolicyStage
from routesync.domain.route_tree import (
    MetadataLayer,
    MethodLayer,
    MiddlewareLayer,
    MountLayer,
    RouteLayer,
)
from routesync.domain.route_tree import Router as RouteTree
from routesync.domain.value_objects import RouteMetadata
from routesync.infrastructure.routing import (
    GATEWAY_ENDPOINT_MARKER,
    Router,
    find_route_metadata,
    gateway_endpoint,
)
from tests.conftest import noop_handler


def cors(request, response, next_handler):
    """Middleware stand-in."""


@pytest.mark.unit
class TestMarkers:
    """Test gateway_endpoint markers and their lookup."""

    def test_marker_is_named(self):
        marker = gateway_endpoint(tags=["users"])

        assert marker.__name__ == GATEWAY_ENDPOINT_MARKER

    def test_marker_carries_metadata(self):
        marker = gateway_endpoint(
            tags=["users"],
            policies={"inbound": ["<a />"], PolicyStage.ON_ERROR: ["<b />"]},
            operation_id="get-user",
            description="Fetch",
        )

        metadata = find_route_metadata(marker)

        assert metadata == RouteMetadata(
            tags=("users",),
            policies={PolicyStage.INBOUND: ("<a />",), PolicyStage.ON_ERROR: ("<b />",)},
            operation_id="get-user",
            description="Fetch",
        )

    def test_marker_call_is_noop(self):
        assert gateway_endpoint()() is None

    def test_plain_handlers_have_no_metadata(self):
        assert find_route_metadata(noop_handler) is None
        assert find_route_metadata(gateway_endpoint) is None
        assert find_route_metadata(object()) is None

    def test_unknown_policy_stage_is_rejected(self):
        with pytest.raises(ValueError):
            gateway_endpoint(policies={"preflight": ["<x />"]})


@pytest.mark.unit
class TestRouterBuilder:
    """Test the tree shape produced by the builder."""

    def test_method_shortcut_creates_route_layer(self):
        app = Router()
        app.get("/users/:id", noop_handler)

        (layer,) = app.build().stack

        assert isinstance(layer, RouteLayer)
        assert layer.route.path == "/users/:id"
        assert layer.route.methods == ("GET",)
        assert layer.pattern.literal is None
        assert [key.name for key in layer.pattern.keys] == ["id"]

    def test_route_chaining(self):
        app = Router()
        app.route("/users").get(noop_handler).post(noop_handler).delete(noop_handler)

        (layer,) = app.build().stack

        assert layer.route.methods == ("GET", "POST", "DELETE")

    def test_route_level_marker_becomes_method_layer_metadata(self):
        marker = gateway_endpoint(tags=["users"])
        app = Router()
        app.get("/users", marker, noop_handler)

        (layer,) = app.build().stack
        first, second = layer.route.stack

        assert isinstance(first, MethodLayer)
        assert first.metadata == find_route_metadata(marker)
        assert second.metadata is None

    def test_use_with_marker_creates_metadata_layer(self):
        app = Router()
        app.use(gateway_endpoint(tags=["all"]))

        (layer,) = app.build().stack

        assert isinstance(layer, MetadataLayer)
        assert layer.metadata.tags == ("all",)

    def test_use_with_router_creates_mount(self):
        users = Router()
        app = Router()
        app.use("/users", users)
        users.get("/:id", noop_handler)

        (layer,) = app.build().stack

        assert isinstance(layer, MountLayer)
        assert layer.pattern.fast_slash is False
        assert len(layer.router.stack) == 1

    def test_use_without_path_mounts_at_root(self):
        app = Router()
        app.use(Router())

        (layer,) = app.build().stack

        assert layer.pattern.fast_slash is True

    def test_use_with_middleware(self):
        app = Router()
        app.use(cors)

        (layer,) = app.build().stack

        assert layer == MiddlewareLayer(name="cors", pattern=layer.pattern)

    def test_router_as_route_handler(self):
        app = Router()
        app.all("/v1", Router().get("/items", noop_handler))

        (layer,) = app.build().stack
        (handler_layer,) = layer.route.stack

        assert handler_layer.method is None
        assert isinstance(handler_layer.handler, RouteTree)

    def test_use_requires_handler(self):
        with pytest.raises(TypeError):
            Router().use("/path")

    def test_method_requires_handler(self):
        with pytest.raises(TypeError):
            Router().route("/x").get()

    def test_case_sensitive_router(self):
        app = Router(case_sensitive=True)
        app.get("/Users", noop_handler)

        (layer,) = app.build().stack

        assert layer.pattern.regex.match("/users") is None
