"""
Directory lookups used by the ArgumentCursor.

A Directory answers two questions about a collection of entities: which one
has this ID, and which is the first to satisfy a predicate. A Lookup bundles
the global directories (users, channels) and hands out a GuildScope with the
guild-local ones (channels, roles, members).

Two backends are provided: an in-memory one for tests and non-Discord hosts,
and a thin adapter over a discord.py client's cache.
"""
import logging
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    Optional,
    Protocol,
    TypeVar,
)

import discord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Directory(Protocol[T]):
    """Lookup-by-ID and first-match search over one kind of entity."""

    def by_id(self, entity_id: str) -> Optional[T]:
        ...

    def find_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        ...


class GuildScope(Protocol):
    """The directories scoped to a single guild."""

    channels: Directory
    roles: Directory
    members: Directory


class Lookup(Protocol):
    """Global directories plus access to a guild's scope."""

    users: Directory
    channels: Directory

    def scope(self, guild: Any) -> Optional[GuildScope]:
        ...


class MemoryDirectory(Generic[T]):
    """Insertion-ordered in-memory directory keyed by str(entity.id)."""

    def __init__(self, entities: Optional[Iterable[T]] = None):
        self._entities: Dict[str, T] = {}
        for entity in entities or ():
            self.add(entity)

    def add(self, entity: T) -> T:
        self._entities[str(entity.id)] = entity
        return entity

    def by_id(self, entity_id: str) -> Optional[T]:
        return self._entities.get(str(entity_id))

    def find_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return discord.utils.find(predicate, self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entities.values())


class MemoryLookup:
    """In-memory Lookup. Guilds passed to scope() act as their own GuildScope."""

    def __init__(
        self,
        users: Optional[MemoryDirectory] = None,
        channels: Optional[MemoryDirectory] = None,
    ):
        self.users = users if users is not None else MemoryDirectory()
        self.channels = channels if channels is not None else MemoryDirectory()

    def scope(self, guild: Any) -> Optional[GuildScope]:
        return guild


def _snowflake(entity_id: Any) -> Optional[int]:
    """Convert a string ID to the integer form discord.py caches by."""
    try:
        return int(entity_id)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed snowflake: {entity_id!r}",
                     extra={'subsys': 'directory', 'event': 'snowflake.invalid'})
        return None


class DiscordDirectory(Generic[T]):
    """
    Adapts a discord.py getter and cached collection to the Directory protocol.

    Args:
        getter: Callable taking an integer ID, e.g. client.get_user
        collection: Zero-argument callable returning the cached entities,
            re-evaluated on every search so the current cache is used
    """

    def __init__(self, getter: Callable[[int], Optional[T]], collection: Callable[[], Iterable[T]]):
        self._getter = getter
        self._collection = collection

    def by_id(self, entity_id: str) -> Optional[T]:
        snowflake = _snowflake(entity_id)
        if snowflake is None:
            return None
        return self._getter(snowflake)

    def find_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return discord.utils.find(predicate, self._collection())


class DiscordGuildScope:
    """GuildScope over a discord.Guild's cached channels, roles and members."""

    def __init__(self, guild: discord.Guild):
        self.guild = guild
        self.channels = DiscordDirectory(guild.get_channel, lambda: guild.channels)
        self.roles = DiscordDirectory(guild.get_role, lambda: guild.roles)
        self.members = DiscordDirectory(guild.get_member, lambda: guild.members)


class DiscordLookup:
    """Lookup backed by a discord.Client's cache. Performs no API calls."""

    def __init__(self, client: discord.Client):
        self.client = client
        self.users = DiscordDirectory(client.get_user, lambda: client.users)
        self.channels = DiscordDirectory(client.get_channel, client.get_all_channels)

    def scope(self, guild: Optional[discord.Guild]) -> Optional[GuildScope]:
        if guild is None:
            return None
        return DiscordGuildScope(guild)
