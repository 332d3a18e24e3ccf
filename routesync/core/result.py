"""Result types for railway-oriented programming.

Gateway operations can fail for reasons that are part of normal operation
(expired credentials, throttling, outages). Those failures are returned as
values instead of raised, which keeps the sync flow explicit and testable.

Usage:
    result = await client.get_api(access_token)
    match result:
        case Success(value=api):
            print(api["properties"]["apiRevision"])
        case Failure(error=error):
            print(f"Error: {error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
