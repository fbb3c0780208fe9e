"""
Result type for consistent error handling across services.

This module provides a simple Result[T] type that allows services to return
success/failure states without raising exceptions, enabling cleaner error handling
in the command dispatcher.

Usage:
    # Returning success
    return Result.ok(beatmapset)
    return Result.ok([])     # e.g. a search with zero matches

    # Returning failure
    return Result.fail("Beatmap not found", code=ErrorKind.NOT_FOUND)

    # Checking results
    if result.success:
        print(result.value)
    else:
        print(f"Error ({result.error_code}): {result.error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from services.error_codes import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    A simple result type for service method return values.

    Attributes:
        success: Whether the operation succeeded
        value: The return value if successful (None if failed)
        error: Human-readable error message if failed (None if successful)
        error_code: Error kind for programmatic error handling
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: ErrorKind | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        """Create a successful result with an optional value."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: ErrorKind | None = None) -> "Result[T]":
        """Create a failed result with an error message and optional error kind."""
        return cls(success=False, error=error, error_code=code)

