"""
Standard error kinds for the service layer.

These error kinds allow the command dispatcher to map each failure to
user-facing text without parsing error message text.

Usage:
    from services.error_codes import ErrorKind
    from services.result import Result

    if response.status_code == 404:
        return Result.fail("Beatmap not found", code=ErrorKind.NOT_FOUND)
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds a beatmap request can end in."""

    # Remote lookup-by-id returned 404
    NOT_FOUND = "not_found"
    # Any other transport/server failure on lookup
    FETCH_FAILED = "fetch_failed"
    # Any transport/server failure on search
    SEARCH_FAILED = "search_failed"
    # Local throttling
    RATE_LIMITED = "rate_limited"
    # Command argument is neither digits nor a quoted query
    INVALID_FORMAT = "invalid_format"
    # Quoted search with nothing inside the quotes
    EMPTY_QUERY = "empty_query"

    def __str__(self) -> str:
        return self.value
