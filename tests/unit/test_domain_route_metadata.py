"""Unit tests for RouteMetadata, OperationEntry and route tree helpers."""

import re

import pytest

from routesync.domain.enums import PolicyStage
from routesync.domain.route_tree import MetadataLayer, MethodLayer, Route
from routesync.domain.value_objects import OperationEntry, PathPattern, RouteMetadata

PATTERN = PathPattern(regex=re.compile("^/?$"))


@pytest.mark.unit
class TestRouteMetadata:
    """Test normalization and merging."""

    def test_normalizes_lists_and_stage_names(self):
        metadata = RouteMetadata(tags=["a"], policies={"on-error": ["<x />"]})

        assert metadata.tags == ("a",)
        assert metadata.policies == {PolicyStage.ON_ERROR: ("<x />",)}

    def test_policies_for_missing_stage(self):
        assert RouteMetadata().policies_for(PolicyStage.BACKEND) == ()

    def test_merge_concatenates_in_order(self):
        merged = RouteMetadata.merge(
            [
                RouteMetadata(tags=["a"], policies={"inbound": ["A"]}),
                RouteMetadata(tags=["a", "b"], policies={"inbound": ["B"], "outbound": ["C"]}),
            ]
        )

        assert merged.tags == ("a", "a", "b")
        assert merged.policies_for(PolicyStage.INBOUND) == ("A", "B")
        assert merged.policies_for(PolicyStage.OUTBOUND) == ("C",)

    def test_merge_last_naming_override_wins(self):
        merged = RouteMetadata.merge(
            [
                RouteMetadata(operation_id="first", description="kept"),
                RouteMetadata(operation_id="second"),
                RouteMetadata(),
            ]
        )

        assert merged.operation_id == "second"
        assert merged.description == "kept"

    def test_merge_of_nothing_is_empty(self):
        assert RouteMetadata.merge([]) == RouteMetadata()


@pytest.mark.unit
class TestOperationEntry:
    """Test entry helpers."""

    def test_has_policies(self):
        entry = OperationEntry(
            operation_id="x", display_name="X", method="GET", url_template="/x"
        )

        assert entry.has_policies is False
        assert entry.policies_for(PolicyStage.INBOUND) == ()

    def test_has_policies_ignores_empty_stages(self):
        entry = OperationEntry(
            operation_id="x",
            display_name="X",
            method="GET",
            url_template="/x",
            policies={PolicyStage.INBOUND: (), PolicyStage.OUTBOUND: ("<a />",)},
        )

        assert entry.has_policies is True


@pytest.mark.unit
class TestRoute:
    """Test Route.methods."""

    def test_methods_distinct_upper_cased_in_first_seen_order(self):
        route = Route(
            path="/x",
            stack=(
                MethodLayer(method="post", handler=print, pattern=PATTERN),
                MethodLayer(method="GET", handler=print, pattern=PATTERN),
                MethodLayer(method="Post", handler=print, pattern=PATTERN),
                MethodLayer(method=None, handler=print, pattern=PATTERN),
            ),
        )

        assert route.methods == ("POST", "GET")

    def test_metadata_layer_default_name(self):
        assert MetadataLayer(metadata=RouteMetadata()).name == "gateway_endpoint"
