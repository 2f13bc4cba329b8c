"""
Channel name derivation for incident channels.

Incident channels are named ``{prefix}-{id}-{title}`` where the title is
reduced to characters the chat platform accepts in channel names:
lowercase ASCII letters, digits, hyphens, underscores and letters or
numbers from other scripts. The algorithm must stay stable because
existing channel names were produced by it.
"""

import re
import unicodedata

from incidentflow.models.identifiers import ChannelName

DEFAULT_CHANNEL_PREFIX = "inc"

# Byte budget for the title part of a channel name.
MAX_TITLE_BYTES = 72

# The chat platform rejects channel names longer than this.
MAX_CHANNEL_NAME_BYTES = 80

_HYPHEN_RUN = re.compile(r"-+")


def _sanitize_char(char: str) -> str:
    if char.isspace() or char == ".":
        return "-"
    if "A" <= char <= "Z":
        return char.lower()
    if "a" <= char <= "z" or "0" <= char <= "9" or char in "-_":
        return char
    # Letters and numbers from any script are kept as-is (L* and N* categories).
    if unicodedata.category(char)[0] in ("L", "N"):
        return char
    return "-"


def sanitize_channel_name(text: str) -> str:
    """
    Convert free text into a channel name fragment.

    Whitespace and periods become hyphens, ASCII uppercase is lowered,
    non-Latin letters and numbers are preserved, and every other symbol
    (punctuation, emoji, currency signs) becomes a hyphen. Hyphen runs
    are collapsed and leading/trailing hyphens removed.

    The function is idempotent and never truncates; length limits are
    applied by format_channel_name.

    Args:
        text: Arbitrary text, usually an incident title.

    Returns:
        The sanitized fragment, possibly empty.

    Example:
        >>> sanitize_channel_name("Database Outage!!")
        'database-outage'
    """
    if not text:
        return ""

    sanitized = "".join(_sanitize_char(char) for char in text)
    sanitized = _HYPHEN_RUN.sub("-", sanitized)
    return sanitized.strip("-")


def truncate_utf8(text: str, max_bytes: int) -> str:
    """
    Cut text to at most ``max_bytes`` of UTF-8.

    The cut happens at a raw byte offset. A multi-byte character that
    straddles the offset loses its leading bytes too, so it disappears
    from the result entirely.
    """
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def format_channel_name(prefix: str, incident_id: int, title: str) -> ChannelName:
    """
    Build the channel name for an incident.

    Args:
        prefix: Channel prefix from configuration. Empty falls back to
            DEFAULT_CHANNEL_PREFIX so names never start with a hyphen.
        incident_id: Incident serial number.
        title: Incident title; may be empty.

    Returns:
        ``{prefix}-{id}`` when the sanitized title is empty, otherwise
        ``{prefix}-{id}-{title}``, cut to MAX_CHANNEL_NAME_BYTES.
    """
    if not prefix:
        prefix = DEFAULT_CHANNEL_PREFIX
    base_name = f"{prefix}-{int(incident_id)}"

    sanitized = sanitize_channel_name(title)
    sanitized = truncate_utf8(sanitized, MAX_TITLE_BYTES).rstrip("-")
    if not sanitized:
        return ChannelName(base_name)

    full_name = f"{base_name}-{sanitized}"
    if len(full_name.encode("utf-8")) > MAX_CHANNEL_NAME_BYTES:
        full_name = truncate_utf8(full_name, MAX_CHANNEL_NAME_BYTES).rstrip("-")

    return ChannelName(full_name)
