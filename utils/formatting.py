"""
Shared formatting helpers for beatmap embeds.
"""

UNKNOWN = "Unknown"
STAR = "⭐"


def format_duration(total_seconds: int | float | None) -> str:
    """Return m:ss for a length in seconds (e.g. 125 -> '2:05')."""
    seconds = int(total_seconds or 0)
    minutes, seconds = divmod(max(seconds, 0), 60)
    return f"{minutes}:{seconds:02d}"


def format_number(value: int | float | None) -> str:
    """Comma-group a count, treating a missing value as 0."""
    if value is None:
        return "0"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}"
    return f"{int(value):,}"


def format_rating(value: int | float | None) -> str:
    """Two decimal places with a star suffix (e.g. '9.12 ⭐')."""
    return f"{float(value or 0):.2f} {STAR}"


def format_stat(value: int | float | None) -> str:
    """Render a difficulty stat such as CS/AR/HP, or Unknown when absent."""
    if value is None:
        return UNKNOWN
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def or_unknown(value: str | None) -> str:
    return value if value else UNKNOWN
