"""Domain enums.

Usage:
    from routesync.domain.enums import HTTPMethod, PolicyStage
"""

from routesync.domain.enums.http_method import HTTPMethod
from routesync.domain.enums.policy_stage import PolicyStage

__all__ = ["HTTPMethod", "PolicyStage"]
