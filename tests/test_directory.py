"""
Tests for the in-memory and discord.py-backed directories.
"""
from unittest.mock import MagicMock

import pytest

from chatargs.cursor import ArgumentCursor
from chatargs.directory import (
    DiscordDirectory,
    DiscordGuildScope,
    DiscordLookup,
    MemoryDirectory,
    MemoryLookup,
)
from chatargs.types import Role

SNOWFLAKE = 123456789012345678


def _named(name, entity_id=SNOWFLAKE):
    """MagicMock(name=...) names the mock itself, so set the attribute afterwards."""
    entity = MagicMock()
    entity.name = name
    entity.id = entity_id
    return entity


class TestMemoryDirectory:
    def test_by_id_accepts_str_and_int(self):
        role = Role(id=SNOWFLAKE, name="Mods")
        directory = MemoryDirectory([role])

        assert directory.by_id(str(SNOWFLAKE)) is role
        assert directory.by_id(SNOWFLAKE) is role
        assert directory.by_id("1") is None

    def test_find_first_keeps_insertion_order(self):
        first = Role(id=1, name="dup")
        second = Role(id=2, name="dup")
        directory = MemoryDirectory([first, second])

        assert directory.find_first(lambda r: r.name == "dup") is first
        assert directory.find_first(lambda r: r.name == "none") is None

    def test_add_replaces_same_id(self):
        directory = MemoryDirectory()
        directory.add(Role(id=1, name="old"))
        directory.add(Role(id=1, name="new"))

        assert len(directory) == 1
        assert [r.name for r in directory] == ["new"]

    def test_memory_lookup_defaults(self):
        lookup = MemoryLookup()

        assert len(lookup.users) == 0
        assert lookup.scope(None) is None


class TestDiscordDirectory:
    def test_by_id_converts_to_int(self):
        getter = MagicMock(return_value="found")
        directory = DiscordDirectory(getter, lambda: [])

        assert directory.by_id(str(SNOWFLAKE)) == "found"
        getter.assert_called_once_with(SNOWFLAKE)

    @pytest.mark.parametrize("bad", ["abc", None, ""])
    def test_malformed_id_is_a_miss(self, bad):
        getter = MagicMock()
        directory = DiscordDirectory(getter, lambda: [])

        assert directory.by_id(bad) is None
        getter.assert_not_called()

    def test_find_first_reads_collection_each_time(self):
        cache = [_named("a")]
        directory = DiscordDirectory(MagicMock(), lambda: cache)

        assert directory.find_first(lambda e: e.name == "b") is None
        cache.append(_named("b"))
        assert directory.find_first(lambda e: e.name == "b") is cache[1]


class TestDiscordLookup:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.users = [_named("Jane")]
        client.get_user.return_value = client.users[0]
        client.get_channel.return_value = None
        client.get_all_channels.return_value = iter([])
        return client

    def test_users(self, client):
        lookup = DiscordLookup(client)

        assert lookup.users.by_id(str(SNOWFLAKE)) is client.users[0]
        assert lookup.users.find_first(lambda u: u.name == "Jane") is client.users[0]

    def test_scope(self, client):
        lookup = DiscordLookup(client)
        guild = MagicMock()

        scope = lookup.scope(guild)

        assert isinstance(scope, DiscordGuildScope)
        assert scope.guild is guild
        assert lookup.scope(None) is None

    def test_guild_scope_directories(self):
        guild = MagicMock()
        role = _named("Mods")
        guild.roles = [role]
        guild.get_role.return_value = role
        scope = DiscordGuildScope(guild)

        assert scope.roles.by_id(str(SNOWFLAKE)) is role
        guild.get_role.assert_called_once_with(SNOWFLAKE)
        assert scope.roles.find_first(lambda r: r.name == "Mods") is role

    def test_cursor_over_discord_objects(self, client):
        """End to end: a cursor resolving through discord.py-shaped mocks."""
        role = _named("Mods", 223456789012345678)
        member = _named("Jane")
        member.nick = "JJ"
        guild = MagicMock()
        guild.roles = [role]
        guild.get_role.return_value = role
        guild.get_member.return_value = member
        message = MagicMock()
        message.channel.guild = guild

        tokens = ["Mods", f"<@{SNOWFLAKE}>", "hi"]
        cursor = ArgumentCursor(message, tokens, DiscordLookup(client))

        assert cursor.resolve_role() is role
        assert cursor.clean_text(consume_rest=True) == "@JJ hi"
        guild.get_member.assert_called_once_with(SNOWFLAKE)
        assert tokens == []

    def test_dm_message_without_guild(self, client):
        message = MagicMock()
        message.channel.guild = None
        cursor = ArgumentCursor(message, ["Mods"], DiscordLookup(client))

        assert cursor.resolve_role() is None
