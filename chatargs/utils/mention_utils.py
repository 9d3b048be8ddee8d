"""
Utilities for recognising Discord-style IDs and mentions.

IDs are snowflakes written as 15 to 21 ASCII digits. A bare ID must be the
whole string; a mention may appear anywhere in it.
"""
import re
from typing import List, Optional

from ..types import MentionKind

ID_PATTERN = re.compile(r"^([0-9]{15,21})$")
USER_MENTION_PATTERN = re.compile(r"<@!?([0-9]{15,21})>")
CHANNEL_MENTION_PATTERN = re.compile(r"<#([0-9]{15,21})>")
ROLE_MENTION_PATTERN = re.compile(r"<@&([0-9]{15,21})>")

MENTION_PATTERNS = {
    MentionKind.USER: USER_MENTION_PATTERN,
    MentionKind.CHANNEL: CHANNEL_MENTION_PATTERN,
    MentionKind.ROLE: ROLE_MENTION_PATTERN,
}

_MENTION_FORMATS = {
    MentionKind.USER: "<@{}>",
    MentionKind.CHANNEL: "<#{}>",
    MentionKind.ROLE: "<@&{}>",
}

ZERO_WIDTH_SPACE = "\u200b"
BROADCAST_MENTIONS = ("@everyone", "@here")


def match_id(text: Optional[str], kind: MentionKind) -> Optional[str]:
    """
    Extract an ID from a bare snowflake or a mention of the given kind.

    Args:
        text: A single token or a joined run of tokens
        kind: Which mention syntax is acceptable besides a bare ID

    Returns:
        The ID as a string, or None if neither form matches

    Examples:
        match_id("123456789012345678", MentionKind.ROLE) -> "123456789012345678"
        match_id("<@!123456789012345678>", MentionKind.USER) -> "123456789012345678"
        match_id("12345", MentionKind.USER) -> None
    """
    if not text:
        return None
    # fullmatch: a bare $ also accepts a trailing newline
    match = ID_PATTERN.fullmatch(text) or MENTION_PATTERNS[kind].search(text)
    return match.group(1) if match else None


def extract_ids(text: Optional[str], kind: MentionKind) -> List[str]:
    """Return every ID mentioned with the given syntax, in order of appearance."""
    if not text:
        return []
    return MENTION_PATTERNS[kind].findall(text)


def format_mention(entity_id, kind: MentionKind) -> str:
    """
    Format an ID as mention markup.

    Examples:
        format_mention(123456789012345678, MentionKind.CHANNEL) -> "<#123456789012345678>"
    """
    return _MENTION_FORMATS[kind].format(entity_id)


def has_discriminator(text: str) -> bool:
    """True if text ends in a '#NNNN' style tag, e.g. 'Jane#0001'."""
    return len(text) > 5 and text[-5] == "#"


def neutralize_broadcasts(text: str) -> str:
    """
    Defuse @everyone and @here by inserting a zero-width space after '@'.

    Only the first occurrence of each literal is rewritten.

    Examples:
        neutralize_broadcasts("@everyone ping") -> "@\\u200beveryone ping"
    """
    for literal in BROADCAST_MENTIONS:
        text = text.replace(literal, f"@{ZERO_WIDTH_SPACE}{literal[1:]}", 1)
    return text


def escape_markup(name: str) -> str:
    """
    Break any mention markup inside a display name so it can never match.

    A zero-width space follows every '<', so the name reads the same but no
    mention pattern can start inside it.

    Examples:
        escape_markup("<@123456789012345678>") -> "<\\u200b@123456789012345678>"
    """
    return name.replace("<", f"<{ZERO_WIDTH_SPACE}")
