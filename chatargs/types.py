from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .directory import MemoryDirectory
from .tokens import TokenBuffer


class MentionKind(Enum):
    """Enumeration of the mention syntaxes a chat message can carry."""

    USER = auto()  # <@ID> or <@!ID>
    CHANNEL = auto()  # <#ID>
    ROLE = auto()  # <@&ID>


@dataclass
class User:
    """A platform user. Attribute names mirror discord.User."""

    id: int
    name: str
    discriminator: str = "0"


@dataclass
class Member(User):
    """A user as seen inside a guild, optionally carrying a nickname."""

    nick: Optional[str] = None


@dataclass
class Channel:
    id: int
    name: str


@dataclass
class Role:
    id: int
    name: str


@dataclass
class Guild:
    """A guild and the directories it scopes.

    A Guild doubles as its own GuildScope for MemoryLookup.
    """

    id: int
    name: str
    channels: MemoryDirectory = field(default_factory=MemoryDirectory)
    roles: MemoryDirectory = field(default_factory=MemoryDirectory)
    members: MemoryDirectory = field(default_factory=MemoryDirectory)


@dataclass
class TextChannel(Channel):
    """A channel a message can be sent in; guild is None for DMs."""

    guild: Optional[Guild] = None


@dataclass
class Message:
    """The invoking message, mirroring discord.Message."""

    channel: TextChannel
    content: str = ""
    id: Optional[int] = None


@dataclass
class ParsedInvocation:
    """Represents a parsed command name with its argument tokens."""

    name: str
    tokens: TokenBuffer


# Explicit export list for clarity
__all__ = [
    "MentionKind",
    "User",
    "Member",
    "Channel",
    "Role",
    "Guild",
    "TextChannel",
    "Message",
    "ParsedInvocation",
]
