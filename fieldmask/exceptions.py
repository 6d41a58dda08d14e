"""Public exceptions for fieldmask."""


class FieldmaskError(Exception):
    """Base exception for all fieldmask errors."""


class CursorOutOfBoundsError(FieldmaskError, IndexError):
    """Cursor inspected or advanced past the end of its input."""

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class CursorStateError(FieldmaskError):
    """Cursor used in a way its lifecycle does not allow."""


class FieldmaskConfigError(FieldmaskError):
    """Configuration error (malformed env vars, invalid config)."""
