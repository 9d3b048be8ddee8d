"""
Splits raw message content into a command name and its argument tokens, and
builds an ArgumentCursor for an incoming discord.Message.
"""
import logging
import re
from typing import Optional

import discord

from .config import load_config, validate_command_prefix
from .cursor import ArgumentCursor
from .directory import DiscordLookup
from .tokens import TokenBuffer
from .types import ParsedInvocation

logger = logging.getLogger(__name__)


def parse_invocation(
    content: Optional[str],
    prefix: str = "!",
    bot_user_id: Optional[int] = None,
) -> Optional[ParsedInvocation]:
    """
    Parses message content to determine if it's an explicit command.

    Args:
        content: Raw message content.
        prefix: Command prefix the name must start with.
        bot_user_id: If given, a leading mention of the bot is stripped first.

    Returns:
        A ParsedInvocation with the lowercased command name (without prefix)
        and the remaining tokens, otherwise None.
    """
    validate_command_prefix(prefix)
    content = (content or "").strip()

    if bot_user_id is not None:
        # Remove bot mention from the beginning of the message to isolate the command
        content = re.sub(fr'^<@!?{bot_user_id}>\s*', '', content)

    if not content.startswith(prefix):
        return None

    parts = content[len(prefix):].split(maxsplit=1)
    if not parts:
        logger.debug("Ignoring bare prefix", extra={'subsys': 'parser', 'event': 'command.empty'})
        return None

    name = parts[0].lower()
    tokens = TokenBuffer.from_text(parts[1] if len(parts) > 1 else "")

    logger.debug(f"Parsed command: {name} with {len(tokens)} argument(s)",
                 extra={'subsys': 'parser', 'event': 'command.found'})
    return ParsedInvocation(name=name, tokens=tokens)


def cursor_for_message(
    message: discord.Message,
    client: discord.Client,
    prefix: Optional[str] = None,
) -> Optional[ArgumentCursor]:
    """
    Build an ArgumentCursor over the arguments of a command message.

    The prefix defaults to the configured COMMAND_PREFIX. Returns None if the
    message is not a command.
    """
    if prefix is None:
        prefix = load_config()["COMMAND_PREFIX"]

    bot_user_id = client.user.id if client.user is not None else None
    invocation = parse_invocation(message.content, prefix=prefix, bot_user_id=bot_user_id)
    if invocation is None:
        return None

    return ArgumentCursor(message, invocation.tokens, DiscordLookup(client))
