"""Recognizers that locate and redact a field value after a field-name match.

Each recognizer understands one text encoding. It is called with the cursor
positioned on a character following a field-name occurrence and either
redacts the value (returning True) or leaves the cursor where it found it
(returning False).
"""

from typing import Protocol, runtime_checkable

from fieldmask._internal.masking.cursor import ScanCursor

QUOTE = '"'
COLON = ":"
EQUALS = "="
ESCAPE = "\\"

# Characters that end a bare (unquoted) value in a JSON-like structure
BARE_VALUE_TERMINATORS = frozenset({",", "}", "]"})

# Characters that cannot start a bare value; nested structures are not masked
BARE_VALUE_REJECTED_STARTS = frozenset({"{", "[", ",", "}", "]"})

# Characters that end a query parameter or cookie value (whitespace is checked separately)
QUERY_VALUE_TERMINATORS = frozenset({"&", "#", ";", QUOTE, "<"})


@runtime_checkable
class FieldRecognizer(Protocol):
    """Strategy that redacts a field value in one specific encoding."""

    def try_redact(self, cursor: ScanCursor) -> bool:
        """Try to redact the value following the current position.

        Args:
            cursor: The scan cursor, positioned after a field-name match.

        Returns:
            True if a value was redacted. False if this encoding does not
            apply here, in which case the cursor position is unchanged.
        """
        ...


class EmbeddedStructureRecognizer:
    """Masks values in JSON-like ``"key": value`` pairs.

    The current character must be the closing quote of the key. Optional
    whitespace may surround the colon. Quoted values are masked between their
    quotes; bare values (numbers, literals) are masked up to the next comma,
    closing brace/bracket, whitespace or end of input.
    """

    def try_redact(self, cursor: ScanCursor) -> bool:
        if not cursor.has_next() or not cursor.current_equals(QUOTE):
            return False

        cursor.mark()
        cursor.advance()
        if _read_until_start_of_value(cursor):
            if cursor.current_equals(QUOTE):
                value_start = cursor.position + 1
                if _read_until_end_of_quoted_value(cursor):
                    cursor.redact_from(value_start)
                    return True
            elif not cursor.current_is_one_of(BARE_VALUE_REJECTED_STARTS):
                value_start = cursor.position
                _read_until_end_of_bare_value(cursor)
                cursor.redact_from(value_start)
                return True

        cursor.reset_to_mark()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class QueryStringRecognizer:
    """Masks values in URI query strings and form-encoded bodies.

    The current character must be ``=``. The value runs up to the next ``&``,
    ``#``, quote, ``<``, whitespace or end of input and may be empty.
    """

    def try_redact(self, cursor: ScanCursor) -> bool:
        if not cursor.has_next() or not cursor.current_equals(EQUALS):
            return False

        value_start = cursor.position + 1
        cursor.advance()
        while cursor.has_next():
            if cursor.current_is_one_of(QUERY_VALUE_TERMINATORS) or cursor.current_is_whitespace():
                break
            cursor.advance()

        cursor.redact_from(value_start)
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


DEFAULT_RECOGNIZERS: tuple[FieldRecognizer, ...] = (
    EmbeddedStructureRecognizer(),
    QueryStringRecognizer(),
)


def _skip_whitespace(cursor: ScanCursor) -> None:
    while cursor.has_next() and cursor.current_is_whitespace():
        cursor.advance()


def _read_until_start_of_value(cursor: ScanCursor) -> bool:
    """Consume ``\\s* : \\s*`` and report whether a value character follows."""
    _skip_whitespace(cursor)
    if not cursor.has_next() or not cursor.current_equals(COLON):
        return False
    cursor.advance()
    _skip_whitespace(cursor)
    return cursor.has_next()


def _read_until_end_of_quoted_value(cursor: ScanCursor) -> bool:
    """Move from the opening quote to the matching unescaped closing quote."""
    escape = False
    while cursor.has_next():
        cursor.advance()
        if not cursor.has_next():
            return False
        if not escape and cursor.current_equals(QUOTE):
            return True
        escape = not escape and cursor.current_equals(ESCAPE)
    return False


def _read_until_end_of_bare_value(cursor: ScanCursor) -> None:
    while cursor.has_next():
        if cursor.current_is_one_of(BARE_VALUE_TERMINATORS) or cursor.current_is_whitespace():
            return
        cursor.advance()
