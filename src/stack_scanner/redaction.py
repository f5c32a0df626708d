"""Redaction of matched secret values for display."""

VISIBLE_CHARS = 4
MIN_PARTIAL_LENGTH = 2 * VISIBLE_CHARS
PLACEHOLDER = "..."
SHORT_MASK = "*" * MIN_PARTIAL_LENGTH


def redact(value: str) -> str:
    """Redact a value, showing at most the first 4 and last 4 chars.

    Values shorter than 8 characters get a fixed mask that reveals nothing,
    and the output length never depends on the raw length.
    """
    if len(value) < MIN_PARTIAL_LENGTH:
        return SHORT_MASK
    return f"{value[:VISIBLE_CHARS]}{PLACEHOLDER}{value[-VISIBLE_CHARS:]}"
