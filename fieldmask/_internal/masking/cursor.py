"""Scan cursor used by a single masking pass.

A cursor walks one input string looking for one field-name literal. It keeps
the current read position, a single saved (marked) position for backtracking
and the output built so far. Recognizers move the cursor and ask it to emit a
redaction; everything that is not redacted is copied verbatim.
"""

import re
from collections.abc import Iterable

from fieldmask.exceptions import CursorOutOfBoundsError, CursorStateError

MASK_TOKEN = "***"


class ScanCursor:
    """Mutable cursor over an immutable source string.

    Invariant: ``last_emitted_index <= position <= len(source)``. The output
    always equals ``source[:last_emitted_index]`` with the redacted spans
    replaced by ``MASK_TOKEN``.

    There is exactly one mark slot. Calling ``mark()`` twice overwrites the
    first mark, so recognizers must not nest mark/reset.
    """

    def __init__(self, source: str, literal: str, *, ignore_case: bool = False) -> None:
        """Initialize the cursor.

        Args:
            source: The text to scan.
            literal: The field name to search for.
            ignore_case: Match the field name case-insensitively.
        """
        self._source = source
        self._literal = literal
        self._pattern: re.Pattern[str] | None = (
            re.compile(re.escape(literal), re.IGNORECASE) if ignore_case else None
        )
        self._position = 0
        self._marked_position = 0
        self._last_emitted_index = 0
        self._parts: list[str] = []
        self._finalized = False

    @property
    def source(self) -> str:
        return self._source

    @property
    def literal(self) -> str:
        return self._literal

    @property
    def position(self) -> int:
        return self._position

    @property
    def marked_position(self) -> int:
        return self._marked_position

    @property
    def last_emitted_index(self) -> int:
        return self._last_emitted_index

    @property
    def output(self) -> str:
        """The text emitted so far (without the unprocessed tail)."""
        return "".join(self._parts)

    # =========================================================================
    # Inspection
    # =========================================================================

    def has_next(self) -> bool:
        """Return True while the position is inside the source."""
        return self._position < len(self._source)

    def current(self) -> str:
        """Return the character at the current position.

        Raises:
            CursorOutOfBoundsError: If the cursor is at the end of the input.
        """
        if not self.has_next():
            raise CursorOutOfBoundsError(
                f"No character at position {self._position} (length {len(self._source)})",
                position=self._position,
            )
        return self._source[self._position]

    def current_equals(self, char: str) -> bool:
        return self.current() == char

    def current_is_one_of(self, chars: Iterable[str]) -> bool:
        return self.current() in chars

    def current_is_whitespace(self) -> bool:
        return self.current().isspace()

    # =========================================================================
    # Movement
    # =========================================================================

    def advance(self) -> None:
        """Move to the next character.

        Raises:
            CursorOutOfBoundsError: If the cursor is already at the end.
        """
        if not self.has_next():
            raise CursorOutOfBoundsError(
                f"Cannot advance past end of input (length {len(self._source)})",
                position=self._position,
            )
        self._position += 1

    def mark(self) -> None:
        """Save the current position for ``reset_to_mark()``."""
        self._marked_position = self._position

    def reset_to_mark(self) -> None:
        """Restore the position saved by the last ``mark()``."""
        self._position = self._marked_position

    def find_next_literal(self) -> int | None:
        """Find the next occurrence of the literal at or after the position.

        On success the position moves to the index just after the match.

        Returns:
            The start index of the match, or None if there is no further
            occurrence (the position is then left unchanged).
        """
        if self._pattern is not None:
            match = self._pattern.search(self._source, self._position)
            if match is None:
                return None
            start, end = match.start(), match.end()
        else:
            start = self._source.find(self._literal, self._position)
            if start == -1:
                return None
            end = start + len(self._literal)
        self._position = end
        return start

    # =========================================================================
    # Output
    # =========================================================================

    def redact_from(self, span_start: int) -> None:
        """Emit everything up to ``span_start`` followed by the mask token.

        The text between ``span_start`` and the current position is dropped,
        and emission resumes from the current position.

        Args:
            span_start: Index of the first character of the sensitive value.
        """
        if not self._last_emitted_index <= span_start <= self._position:
            raise CursorStateError(
                f"Redaction span {span_start}..{self._position} overlaps emitted "
                f"text ending at {self._last_emitted_index}"
            )
        self._parts.append(self._source[self._last_emitted_index : span_start])
        self._parts.append(MASK_TOKEN)
        self._last_emitted_index = self._position

    def finalize(self) -> str:
        """Emit the remaining source and return the masked text.

        Raises:
            CursorStateError: If the cursor was already finalized.
        """
        if self._finalized:
            raise CursorStateError("Cursor already finalized")
        self._finalized = True
        self._parts.append(self._source[self._last_emitted_index :])
        return "".join(self._parts)
