"""
Owned, mutable token buffer shared between a command dispatcher and the
ArgumentCursor that consumes it.
"""
from typing import Iterator, List, Optional


class TokenBuffer:
    """An ordered list of whitespace-delimited tokens, consumed in place.

    The wrapped list is never copied: whoever created the buffer (or the list
    behind it) observes every shift, take_rest and remove_at performed by a
    cursor.
    """

    def __init__(self, tokens: Optional[List[str]] = None):
        self._tokens = tokens if tokens is not None else []

    @classmethod
    def from_text(cls, text: Optional[str]) -> "TokenBuffer":
        """Split raw argument text on runs of whitespace. Quotes are not special."""
        return cls((text or "").split())

    def shift(self) -> Optional[str]:
        """Remove and return the front token, or None if the buffer is empty."""
        if not self._tokens:
            return None
        return self._tokens.pop(0)

    def take_rest(self) -> str:
        """Remove every remaining token and return them joined by single spaces."""
        rest = " ".join(self._tokens)
        del self._tokens[:]
        return rest

    def peek(self, index: int = 0) -> Optional[str]:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def remove_at(self, index: int) -> bool:
        """Remove the token at index. Out-of-range indices are ignored."""
        if 0 <= index < len(self._tokens):
            del self._tokens[index]
            return True
        return False

    def joined(self) -> str:
        return " ".join(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def __eq__(self, other) -> bool:
        if isinstance(other, TokenBuffer):
            return self._tokens == other._tokens
        if isinstance(other, list):
            return self._tokens == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"TokenBuffer({self._tokens!r})"
