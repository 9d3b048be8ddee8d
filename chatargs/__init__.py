"""
chatargs

Positional argument parsing for chat bot commands:
- Resolve users, channels and roles from IDs, mentions or names
- Clean mention markup into readable text
- Consume tokens in place from a buffer shared with the dispatcher
"""

# Package metadata
__title__ = "chatargs"
__description__ = "Positional argument resolution for Discord bot commands"
__license__ = "MIT"
__version__ = "0.1.0"

from .cursor import ArgumentCursor
from .directory import (
    Directory,
    DiscordLookup,
    GuildScope,
    Lookup,
    MemoryDirectory,
    MemoryLookup,
)
from .tokens import TokenBuffer

__all__ = [
    "ArgumentCursor",
    "Directory",
    "DiscordLookup",
    "GuildScope",
    "Lookup",
    "MemoryDirectory",
    "MemoryLookup",
    "TokenBuffer",
]
