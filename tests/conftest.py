"""
Shared fixtures: a small in-memory world with one guild, a DM channel, and
helpers to build cursors over either context.
"""
import pytest

from chatargs.cursor import ArgumentCursor
from chatargs.directory import MemoryDirectory, MemoryLookup
from chatargs.types import Channel, Guild, Member, Message, Role, TextChannel, User

JANE_ID = 123456789012345678
BOB_ID = 223456789012345678
GHOST_ID = 999999999999999999
GENERAL_ID = 323456789012345678
RANDOM_ID = 423456789012345678
OTHER_GUILD_CHANNEL_ID = 523456789012345678
MOD_ROLE_ID = 623456789012345678
GUILD_ID = 723456789012345678


@pytest.fixture
def jane() -> User:
    return User(id=JANE_ID, name="Jane", discriminator="0001")


@pytest.fixture
def bob() -> User:
    return User(id=BOB_ID, name="Bob", discriminator="4242")


@pytest.fixture
def general() -> TextChannel:
    return TextChannel(id=GENERAL_ID, name="general")


@pytest.fixture
def guild(jane, bob, general) -> Guild:
    """A guild where Jane has a nickname and Bob does not."""
    g = Guild(id=GUILD_ID, name="Test Guild")
    general.guild = g
    g.channels.add(general)
    g.channels.add(TextChannel(id=RANDOM_ID, name="random", guild=g))
    g.roles.add(Role(id=MOD_ROLE_ID, name="Moderators"))
    g.members.add(Member(id=jane.id, name=jane.name, discriminator=jane.discriminator, nick="JJ"))
    g.members.add(Member(id=bob.id, name=bob.name, discriminator=bob.discriminator))
    return g


@pytest.fixture
def lookup(jane, bob, guild) -> MemoryLookup:
    channels = MemoryDirectory(guild.channels)
    channels.add(Channel(id=OTHER_GUILD_CHANNEL_ID, name="elsewhere"))
    return MemoryLookup(users=MemoryDirectory([jane, bob]), channels=channels)


@pytest.fixture
def guild_message(general) -> Message:
    return Message(channel=general)


@pytest.fixture
def dm_message() -> Message:
    return Message(channel=TextChannel(id=823456789012345678, name="dm", guild=None))


@pytest.fixture
def make_cursor(lookup, guild_message):
    """Factory building a cursor; defaults to the guild context."""

    def _make(tokens, message=None):
        return ArgumentCursor(message or guild_message, tokens, lookup)

    return _make
