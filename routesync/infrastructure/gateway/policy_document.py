"""Operation policy document rendering.

Every stage inherits the API level policies (``<base />``) and then applies
the operation's own fragments in declaration order:

    <policies>
        <inbound>
            <base />
            <rate-limit calls="10" renewal-period="60" />
        </inbound>
        <backend>
            <base />
        </backend>
        ...
    </policies>
"""

from collections.abc import Mapping

from routesync.domain.enums import PolicyStage

_INDENT = "    "


def build_policy_document(policies: Mapping[PolicyStage, tuple[str, ...]]) -> str:
    """Render merged policy fragments as a gateway policy document.

    Args:
        policies: Fragments keyed by stage; missing stages render ``<base />`` only.

    Returns:
        Policy XML with all four stages.
    """
    lines = ["<policies>"]
    for stage in PolicyStage:
        lines.append(f"{_INDENT}<{stage.value}>")
        lines.append(f"{_INDENT * 2}<base />")
        for fragment in policies.get(stage, ()):
            lines.append(f"{_INDENT * 2}{fragment.strip()}")
        lines.append(f"{_INDENT}</{stage.value}>")
    lines.append("</policies>")
    return "\n".join(lines)
