"""HTTP methods recognized on route tree method layers."""

from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP methods for gateway operations.

    Attributes:
        GET: Safe, idempotent read operations
        POST: Non-idempotent create operations
        PUT: Idempotent complete replacement
        PATCH: Non-idempotent partial update
        DELETE: Idempotent delete operations
        HEAD: GET without a body
        OPTIONS: Capability discovery (CORS preflight)
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
