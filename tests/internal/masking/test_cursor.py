"""Tests for ScanCursor."""

import pytest

from fieldmask._internal.masking.cursor import MASK_TOKEN, ScanCursor
from fieldmask.exceptions import CursorOutOfBoundsError, CursorStateError


class TestInspection:
    """Tests for has_next and current-character checks."""

    def test_has_next_on_empty_source(self):
        """Empty source has no characters."""
        cursor = ScanCursor("", "password")
        assert cursor.has_next() is False

    def test_current_equals(self):
        """Should compare the character at the position."""
        cursor = ScanCursor("ab", "x")
        assert cursor.current_equals("a") is True
        assert cursor.current_equals("b") is False

    def test_current_is_one_of(self):
        """Should check membership of the current character."""
        cursor = ScanCursor("&x", "x")
        assert cursor.current_is_one_of({"&", "#"}) is True
        assert cursor.current_is_one_of("#<") is False

    def test_current_is_whitespace(self):
        """Spaces, tabs and newlines are whitespace."""
        for char in (" ", "\t", "\n", "\r"):
            assert ScanCursor(char, "x").current_is_whitespace() is True
        assert ScanCursor("a", "x").current_is_whitespace() is False

    def test_inspect_at_end_raises(self):
        """Inspecting past the end should raise CursorOutOfBoundsError."""
        cursor = ScanCursor("a", "x")
        cursor.advance()
        with pytest.raises(CursorOutOfBoundsError) as exc_info:
            cursor.current_equals("a")
        assert exc_info.value.position == 1

    def test_out_of_bounds_is_index_error(self):
        """CursorOutOfBoundsError should also be an IndexError."""
        with pytest.raises(IndexError):
            ScanCursor("", "x").current_is_whitespace()


class TestMovement:
    """Tests for advance, mark and reset."""

    def test_advance(self):
        """Should move one character forward."""
        cursor = ScanCursor("abc", "x")
        cursor.advance()
        assert cursor.position == 1
        assert cursor.current_equals("b")

    def test_advance_past_end_raises(self):
        """Advancing at the end should raise."""
        cursor = ScanCursor("a", "x")
        cursor.advance()
        with pytest.raises(CursorOutOfBoundsError):
            cursor.advance()
        assert cursor.position == 1

    def test_mark_and_reset(self):
        """Reset should return to the marked position."""
        cursor = ScanCursor("abcdef", "x")
        cursor.advance()
        cursor.mark()
        cursor.advance()
        cursor.advance()
        cursor.reset_to_mark()
        assert cursor.position == 1

    def test_second_mark_overwrites_first(self):
        """There is a single mark slot."""
        cursor = ScanCursor("abcdef", "x")
        cursor.mark()
        cursor.advance()
        cursor.advance()
        cursor.mark()
        cursor.advance()
        cursor.reset_to_mark()
        assert cursor.position == 2


class TestFindNextLiteral:
    """Tests for find_next_literal."""

    def test_finds_and_moves_past_match(self):
        """Should return the match start and move to the match end."""
        cursor = ScanCursor("a password b", "password")
        assert cursor.find_next_literal() == 2
        assert cursor.position == 10

    def test_no_match_leaves_position(self):
        """Should return None and not move when nothing matches."""
        cursor = ScanCursor("abc", "password")
        cursor.advance()
        assert cursor.find_next_literal() is None
        assert cursor.position == 1

    def test_successive_matches(self):
        """Each call should find the next occurrence."""
        cursor = ScanCursor("pw pw pw", "pw")
        assert cursor.find_next_literal() == 0
        assert cursor.find_next_literal() == 3
        assert cursor.find_next_literal() == 6
        assert cursor.find_next_literal() is None

    def test_case_sensitive_by_default(self):
        """Should not match a different case by default."""
        cursor = ScanCursor("Password", "password")
        assert cursor.find_next_literal() is None

    def test_ignore_case(self):
        """Should match any case when ignore_case is set."""
        cursor = ScanCursor('{"PassWord":1}', "password", ignore_case=True)
        assert cursor.find_next_literal() == 2
        assert cursor.position == 10

    def test_ignore_case_escapes_literal(self):
        """Regex metacharacters in the literal should match literally."""
        cursor = ScanCursor("a.b axb", "a.b", ignore_case=True)
        assert cursor.find_next_literal() == 0
        assert cursor.find_next_literal() is None


class TestOutput:
    """Tests for redact_from and finalize."""

    def test_finalize_without_redaction_returns_source(self):
        """Finalize should copy the whole source when nothing was redacted."""
        cursor = ScanCursor("hello world", "x")
        cursor.find_next_literal()
        assert cursor.finalize() == "hello world"

    def test_redact_from(self):
        """Should replace the span between span_start and position."""
        cursor = ScanCursor("key=secret&next", "key")
        cursor.find_next_literal()
        span_start = cursor.position + 1
        for _ in range(len("=secret")):
            cursor.advance()
        cursor.redact_from(span_start)
        assert cursor.output == f"key={MASK_TOKEN}"
        assert cursor.last_emitted_index == cursor.position
        assert cursor.finalize() == f"key={MASK_TOKEN}&next"

    def test_redact_empty_span(self):
        """An empty span is still replaced by the mask token."""
        cursor = ScanCursor("key=&next", "key")
        cursor.find_next_literal()
        cursor.advance()
        cursor.redact_from(cursor.position)
        assert cursor.finalize() == f"key={MASK_TOKEN}&next"

    def test_redact_before_emitted_text_raises(self):
        """A span starting before already emitted text is rejected."""
        cursor = ScanCursor("a=1&b=2", "a")
        for _ in range(3):
            cursor.advance()
        cursor.redact_from(2)
        with pytest.raises(CursorStateError):
            cursor.redact_from(1)

    def test_finalize_twice_raises(self):
        """Finalize must only be called once per pass."""
        cursor = ScanCursor("abc", "x")
        cursor.finalize()
        with pytest.raises(CursorStateError):
            cursor.finalize()
