"""Result types for railway-oriented programming.

Fallible operations return a Result instead of raising, which keeps the
failure channel of each pipeline step visible in its signature.

Usage:
    def parse_width(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Failure(error="width must be numeric")
        return Success(value=int(raw))

    match parse_width("1024"):
        case Success(value=width):
            print(f"Width: {width}")
        case Failure(error=error):
            print(f"Error: {error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

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
Result: TypeAlias = Success[T] | Failure[E]
