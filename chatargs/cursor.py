"""
Positional argument resolution for chat commands.

An ArgumentCursor walks the argument tokens of one command invocation,
consuming them from the front as users, channels, roles or plain text are
requested. Nothing here raises on bad input: a missing token, an unknown
name or a DM context all resolve to None.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from .directory import GuildScope, Lookup
from .tokens import TokenBuffer
from .types import MentionKind
from .utils.mention_utils import (
    CHANNEL_MENTION_PATTERN,
    ROLE_MENTION_PATTERN,
    USER_MENTION_PATTERN,
    escape_markup,
    has_discriminator,
    match_id,
    neutralize_broadcasts,
)

logger = logging.getLogger(__name__)


class ArgumentCursor:
    """
    Consumes and resolves the arguments of a single command invocation.

    Args:
        message: The invoking message. Its channel's guild, if any, scopes
            channel-name, role and member lookups.
        tokens: The argument tokens. A list is wrapped without copying, so the
            caller sees every token the cursor consumes.
        lookup: Directory service used to resolve IDs and names.
    """

    def __init__(self, message: Any, tokens: Union[TokenBuffer, List[str]], lookup: Lookup):
        self.message = message
        self.tokens = tokens if isinstance(tokens, TokenBuffer) else TokenBuffer(tokens)
        self.lookup = lookup

    @property
    def guild(self) -> Optional[Any]:
        """The guild the invoking message was sent in, or None for DMs."""
        channel = getattr(self.message, "channel", None)
        return getattr(channel, "guild", None)

    def _scope(self) -> Optional[GuildScope]:
        guild = self.guild
        if guild is None:
            return None
        return self.lookup.scope(guild)

    def _consume(self, consume_rest: bool) -> Optional[str]:
        # Tokens are consumed even when the caller ends up resolving nothing
        text = self.tokens.take_rest() if consume_rest else self.tokens.shift()
        return text or None

    def _log_extra(self, event: str) -> Dict[str, Any]:
        """Structured context for the invoking message, as the JSONL sink expects."""
        guild = self.guild
        author = getattr(self.message, "author", None)
        return {
            "subsys": "args",
            "event": event,
            "guild_id": guild.id if guild is not None else "DM",
            "user_id": getattr(author, "id", None),
            "msg_id": getattr(self.message, "id", None),
        }

    def resolve_user(self, consume_rest: bool = False) -> Optional[Any]:
        """
        Resolve a user from the next token, or from all remaining tokens.

        Accepts a raw ID, a user mention, 'name#discriminator' or a bare name,
        in that order of precedence. Name matches are exact.
        """
        # TODO: quoted arguments would let multi-word names work without consume_rest
        text = self._consume(consume_rest)
        if text is None:
            return None

        user_id = match_id(text, MentionKind.USER)
        if user_id:
            user = self.lookup.users.by_id(user_id)
        elif has_discriminator(text):
            user = self.lookup.users.find_first(
                lambda u: f"{u.name}#{u.discriminator}" == text
            )
        else:
            user = self.lookup.users.find_first(lambda u: u.name == text)

        if user is None:
            logger.debug(f"No user matched '{text[:50]}'",
                         extra=self._log_extra('resolve.user.miss'))
        return user

    def resolve_channel(self, consume_rest: bool = False) -> Optional[Any]:
        """
        Resolve a channel from the next token, or from all remaining tokens.

        IDs and mentions are looked up globally. Names are only searched in the
        invoking guild; in a DM a name never resolves.
        """
        text = self._consume(consume_rest)
        if text is None:
            return None

        channel_id = match_id(text, MentionKind.CHANNEL)
        if channel_id:
            channel = self.lookup.channels.by_id(channel_id)
        else:
            scope = self._scope()
            if scope is None:
                logger.debug(f"Channel name '{text[:50]}' ignored outside a guild",
                             extra=self._log_extra('resolve.channel.dm'))
                return None
            channel = scope.channels.find_first(lambda c: c.name == text)

        if channel is None:
            logger.debug(f"No channel matched '{text[:50]}'",
                         extra=self._log_extra('resolve.channel.miss'))
        return channel

    def resolve_role(self, consume_rest: bool = False) -> Optional[Any]:
        """Resolve a role of the invoking guild by ID, mention or exact name."""
        text = self._consume(consume_rest)
        scope = self._scope()
        if scope is None or text is None:
            return None

        role_id = match_id(text, MentionKind.ROLE)
        if role_id:
            role = scope.roles.by_id(role_id)
        else:
            role = scope.roles.find_first(lambda r: r.name == text)

        if role is None:
            logger.debug(f"No role matched '{text[:50]}'",
                         extra=self._log_extra('resolve.role.miss'))
        return role

    def next_token(self, consume_rest: bool = False) -> Optional[str]:
        """Return the next token, or all remaining tokens, without resolving."""
        return self._consume(consume_rest)

    def clean_text(self, consume_rest: bool = False) -> Optional[str]:
        """
        Return the next token(s) with mentions rewritten to readable names.

        User, channel and role mentions become '@name', '#name' and '@name';
        mentions that no longer resolve become '@deleted-user',
        '#deleted-channel' and '@deleted-role'. @everyone and @here are
        defused with a zero-width space.
        """
        text = self._consume(consume_rest)
        if text is None:
            return None

        scope = self._scope()

        def user_name(match) -> str:
            users = scope.members if scope is not None else self.lookup.users
            user = users.by_id(match.group(1))
            if user is None:
                return "@deleted-user"
            return f"@{escape_markup(getattr(user, 'nick', None) or user.name)}"

        def channel_name(match) -> str:
            # Outside a guild, fall back to the global channel directory
            channels = scope.channels if scope is not None else self.lookup.channels
            channel = channels.by_id(match.group(1))
            if channel is None:
                return "#deleted-channel"
            return f"#{escape_markup(channel.name)}"

        def role_name(match) -> str:
            role = scope.roles.by_id(match.group(1)) if scope is not None else None
            return f"@{escape_markup(role.name)}" if role is not None else "@deleted-role"

        replacements = (
            (USER_MENTION_PATTERN, user_name),
            (CHANNEL_MENTION_PATTERN, channel_name),
            (ROLE_MENTION_PATTERN, role_name),
        )
        # Every pass removes at least one unescaped '<' and inserts none, so
        # rescanning terminates
        while any(pattern.search(text) for pattern, _ in replacements):
            for pattern, replace in replacements:
                text = pattern.sub(replace, text)

        return neutralize_broadcasts(text)

    @property
    def is_exhausted(self) -> bool:
        """True when the front token is missing or empty."""
        return not self.tokens.peek(0)

    @property
    def remaining_length(self) -> int:
        """Length in characters of the remaining tokens joined by spaces."""
        return len(self.tokens.joined())

    def token_at(self, index: int = 0) -> str:
        """Return the token at index without consuming it, or '' if out of range."""
        return self.tokens.peek(index) or ""

    def gather_all(self) -> str:
        """Return all remaining tokens joined by spaces, without consuming them."""
        return self.tokens.joined()

    def drop(self, index: int) -> None:
        """Remove the token at index. Out-of-range indices are ignored."""
        self.tokens.remove_at(index)

    def __repr__(self) -> str:
        return f"<ArgumentCursor tokens={list(self.tokens)!r}>"
