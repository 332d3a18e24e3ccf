"""Operation table entries produced by the route tree compiler."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from routesync.core.constants import TEMPLATE_PARAMETER_TYPE
from routesync.domain.enums import PolicyStage


@dataclass(frozen=True, slots=True, kw_only=True)
class TemplateParameter:
    """A named placeholder of a URL template.

    Attributes:
        name: Placeholder name, unique within its operation.
        required: Always True for path parameters.
        type: Declared type (always "string").
    """

    name: str
    required: bool = True
    type: str = TEMPLATE_PARAMETER_TYPE


@dataclass(frozen=True, slots=True, kw_only=True)
class OperationEntry:
    """One gateway operation (path template + method).

    Attributes:
        operation_id: Identifier unique within one compilation run.
        display_name: Human readable operation name.
        method: Upper-cased HTTP method.
        url_template: Path with ``{name}`` placeholders.
        template_parameters: Placeholders in encounter order.
        tags: Merged tags (duplicates preserved).
        policies: Merged fragments for every policy stage.
        description: Optional operation description.
    """

    operation_id: str
    display_name: str
    method: str
    url_template: str
    template_parameters: tuple[TemplateParameter, ...] = ()
    tags: tuple[str, ...] = ()
    policies: Mapping[PolicyStage, tuple[str, ...]] = field(default_factory=dict)
    description: str | None = None

    def policies_for(self, stage: PolicyStage) -> tuple[str, ...]:
        """Return the merged fragments for a stage (empty if none)."""
        return self.policies.get(stage, ())

    @property
    def has_policies(self) -> bool:
        """Check if any stage carries at least one fragment."""
        return any(self.policies.values())
