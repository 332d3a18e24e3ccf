"""Core errors package.

Usage:
    from routesync.core.errors import DomainError
"""

from routesync.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
