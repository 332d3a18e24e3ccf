"""Gateway metadata attached to routes.

RouteMetadata is what a service owner declares next to a handler: tags,
policy fragments per lifecycle stage, and optional naming overrides.
Several metadata objects can apply to one route (router-level and
route-level markers); they are combined, never overwritten.

Usage:
    metadata = RouteMetadata(
        tags=["users"],
        policies={
            PolicyStage.INBOUND: ['<rate-limit calls="10" renewal-period="60" />'],
        },
    )
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from routesync.domain.enums import PolicyStage


@dataclass(frozen=True, slots=True, kw_only=True)
class RouteMetadata:
    """Tags, policy fragments and naming overrides for one or more routes.

    Policy keys may be given as PolicyStage members or their string values
    ("inbound", "backend", "outbound", "on-error"); lists are normalized to
    tuples.

    Attributes:
        tags: Free-form tags, in declaration order.
        policies: Policy fragments keyed by stage, in declaration order.
        operation_id: Overrides the generated operation identifier.
        display_name: Overrides the generated display name.
        description: Operation description shown in the gateway.
    """

    tags: tuple[str, ...] = ()
    policies: Mapping[PolicyStage, tuple[str, ...]] = field(default_factory=dict)
    operation_id: str | None = None
    display_name: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        normalized: dict[PolicyStage, tuple[str, ...]] = {}
        for stage, fragments in self.policies.items():
            normalized[PolicyStage(stage)] = tuple(fragments)
        object.__setattr__(self, "policies", normalized)

    def policies_for(self, stage: PolicyStage) -> tuple[str, ...]:
        """Return the fragments declared for a stage (empty if none)."""
        return self.policies.get(stage, ())

    @classmethod
    def merge(cls, items: Iterable["RouteMetadata"]) -> "RouteMetadata":
        """Combine metadata objects in traversal order.

        Tags and each stage's fragments are concatenated without
        deduplication. For naming overrides the last value that is set wins.
        """
        tags: list[str] = []
        policies: dict[PolicyStage, list[str]] = {}
        operation_id: str | None = None
        display_name: str | None = None
        description: str | None = None

        for item in items:
            tags.extend(item.tags)
            for stage, fragments in item.policies.items():
                policies.setdefault(stage, []).extend(fragments)
            operation_id = item.operation_id or operation_id
            display_name = item.display_name or display_name
            description = item.description or description

        return cls(
            tags=tuple(tags),
            policies={stage: tuple(f) for stage, f in policies.items()},
            operation_id=operation_id,
            display_name=display_name,
            description=description,
        )
