"""Gateway policy lifecycle stages."""

from enum import Enum


class PolicyStage(str, Enum):
    """Lifecycle points at which the gateway applies declared policy fragments.

    The declaration order is also the order of sections in a rendered
    policy document.

    Attributes:
        INBOUND: Applied to the incoming request
        BACKEND: Applied before forwarding to the backend
        OUTBOUND: Applied to the outgoing response
        ON_ERROR: Applied when any other stage fails
    """

    INBOUND = "inbound"
    BACKEND = "backend"
    OUTBOUND = "outbound"
    ON_ERROR = "on-error"
