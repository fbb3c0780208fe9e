"""Discord embed safety utilities.

Beatmap titles, tags and API-supplied strings are unbounded, so everything
placed in an embed is clipped to Discord's limits first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import discord

EMBED_LIMITS = {
    "title": 256,
    "description": 4096,
    "field_name": 256,
    "field_value": 1024,
    "footer": 2048,
    "max_fields": 25,
    "total": 6000,
}

ELLIPSIS = "..."


def truncate_field(text: str, max_len: int = EMBED_LIMITS["field_value"]) -> str:
    """Clip text to max_len, marking the cut with an ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - len(ELLIPSIS)] + ELLIPSIS


def validate_embed(embed: discord.Embed) -> list[str]:
    """Return list of limit violations, empty if the embed can be sent.

    Used by tests to check that the beatmap embed stays within limits for
    long or hostile API values.
    """
    errors = []

    checks = [
        ("Title", embed.title, EMBED_LIMITS["title"]),
        ("Description", embed.description, EMBED_LIMITS["description"]),
        ("Footer", embed.footer.text if embed.footer else None, EMBED_LIMITS["footer"]),
    ]
    for label, text, limit in checks:
        if text and len(text) > limit:
            errors.append(f"{label} exceeds {limit} chars ({len(text)})")

    total = len(embed.title or "") + len(embed.description or "")
    for i, field in enumerate(embed.fields):
        if len(field.name) > EMBED_LIMITS["field_name"]:
            errors.append(f"Field {i} name exceeds {EMBED_LIMITS['field_name']} chars")
        if len(field.value) > EMBED_LIMITS["field_value"]:
            errors.append(
                f"Field {i} '{field.name}' value exceeds {EMBED_LIMITS['field_value']} chars"
            )
        total += len(field.name) + len(field.value)

    if len(embed.fields) > EMBED_LIMITS["max_fields"]:
        errors.append(f"Too many fields: {len(embed.fields)} > {EMBED_LIMITS['max_fields']}")

    if embed.footer and embed.footer.text:
        total += len(embed.footer.text)
    if total > EMBED_LIMITS["total"]:
        errors.append(f"Embed exceeds {EMBED_LIMITS['total']} total chars ({total})")

    return errors
