"""
Unit tests for TokenBuffer.
"""
from chatargs.tokens import TokenBuffer


class TestTokenBuffer:
    def test_wraps_without_copying(self):
        tokens = ["a", "b"]
        buffer = TokenBuffer(tokens)

        buffer.shift()

        assert tokens == ["b"]

    def test_from_text_splits_on_whitespace_runs(self):
        buffer = TokenBuffer.from_text("  kick   <@123456789012345678>\tspam\n")
        assert list(buffer) == ["kick", "<@123456789012345678>", "spam"]

    def test_from_text_keeps_quotes(self):
        """Quoted arguments are not grouped."""
        buffer = TokenBuffer.from_text('say "hello world"')
        assert list(buffer) == ["say", '"hello', 'world"']

    def test_from_text_none(self):
        assert len(TokenBuffer.from_text(None)) == 0

    def test_shift_empty(self):
        assert TokenBuffer().shift() is None

    def test_take_rest(self):
        buffer = TokenBuffer(["a", "b", "c"])

        assert buffer.take_rest() == "a b c"
        assert not buffer
        assert buffer.take_rest() == ""

    def test_peek(self):
        buffer = TokenBuffer(["a", "b"])

        assert buffer.peek() == "a"
        assert buffer.peek(1) == "b"
        assert buffer.peek(2) is None
        assert buffer.peek(-1) is None
        assert len(buffer) == 2

    def test_remove_at(self):
        buffer = TokenBuffer(["a", "b", "c"])

        assert buffer.remove_at(1) is True
        assert buffer == ["a", "c"]
        assert buffer.remove_at(2) is False
        assert buffer.remove_at(-1) is False
        assert buffer == ["a", "c"]

    def test_joined(self):
        assert TokenBuffer(["a", "b"]).joined() == "a b"
        assert TokenBuffer().joined() == ""

    def test_equality(self):
        assert TokenBuffer(["a"]) == TokenBuffer(["a"])
        assert TokenBuffer(["a"]) != ["b"]
        assert repr(TokenBuffer(["a"])) == "TokenBuffer(['a'])"
