"""Field masker: masks the values of sensitive fields in arbitrary text."""

import sys
from collections.abc import Iterable, Sequence

from fieldmask._internal.masking.cursor import ScanCursor
from fieldmask._internal.masking.models import MaskingConfig, normalize_field_names
from fieldmask._internal.masking.recognizers import DEFAULT_RECOGNIZERS, FieldRecognizer

# Characters that end the key containing a field-name occurrence. When no
# recognizer applies at one of these, the occurrence is not a key/value pair.
KEY_BOUNDARIES = frozenset(
    {'"', ":", ",", ";", "{", "}", "[", "]", "&", "?", "#", "<", ">", "/"}
)


class FieldMasker:
    """Masks the values of configured fields with ``***``.

    The masker is best-effort: `mask_fields_in` never raises. Unrecognized
    layouts are left untouched rather than risking a corrupted string.

    Instances hold no mutable state after construction and may be shared
    between threads.
    """

    def __init__(
        self,
        fields_to_mask: Iterable[str] | None = None,
        *,
        recognizers: Sequence[FieldRecognizer] | None = None,
        ignore_case: bool = False,
        debug: bool = False,
    ) -> None:
        """Initialize the masker.

        Args:
            fields_to_mask: Field names whose values should be masked.
                Defaults to ("password",) when None or empty.
            recognizers: Recognizers to try, in order, at each candidate
                position. Defaults to JSON-like then query-string recognition.
            ignore_case: Match field names case-insensitively.
            debug: Enable debug logging to stderr.
        """
        self._fields = normalize_field_names(fields_to_mask or ())
        self._recognizers: tuple[FieldRecognizer, ...] = (
            tuple(recognizers) if recognizers is not None else DEFAULT_RECOGNIZERS
        )
        self._ignore_case = ignore_case
        self._debug = debug

    @classmethod
    def from_config(cls, config: MaskingConfig) -> "FieldMasker":
        """Create a masker from a MaskingConfig."""
        return cls(
            config.fields_to_mask,
            ignore_case=config.ignore_case,
            debug=config.debug,
        )

    @classmethod
    def from_env(cls) -> "FieldMasker":
        """Create a masker configured from FIELDMASK_* environment variables."""
        return cls.from_config(MaskingConfig.from_env())

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    @property
    def recognizers(self) -> tuple[FieldRecognizer, ...]:
        return self._recognizers

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[fieldmask] {message}", file=sys.stderr)

    def mask_fields_in(self, text: str) -> str:
        """Mask the values of all configured fields in ``text``.

        Fields are processed one after the other; the output of one field
        pass is the input of the next.

        Args:
            text: The text to mask (body, header block, URL, log line).

        Returns:
            The masked text. Non-string input and input that fails to scan
            are returned unchanged.
        """
        if not isinstance(text, str) or not text:
            return text

        masked = text
        try:
            for field in self._fields:
                masked = self._mask_field(masked, field)
        except Exception as e:
            self._log_debug(f"Masking failed, returning input unchanged: {e!r}")
            return text
        return masked

    def _mask_field(self, text: str, field: str) -> str:
        """Run a single cursor pass for one field name."""
        cursor = ScanCursor(text, field, ignore_case=self._ignore_case)
        cursor.mark()
        if cursor.find_next_literal() is None:
            return text
        cursor.reset_to_mark()

        masked_count = 0
        while cursor.find_next_literal() is not None:
            if self._mask_occurrence(cursor):
                masked_count += 1

        if masked_count:
            self._log_debug(f"Masked {masked_count} value(s) for field {field!r}")
        return cursor.finalize()

    def _mask_occurrence(self, cursor: ScanCursor) -> bool:
        """Scan forward from a field-name occurrence until a value is masked.

        Stops without masking at whitespace, at a key boundary no recognizer
        accepts, or at the end of input.
        """
        while cursor.has_next():
            for recognizer in self._recognizers:
                if recognizer.try_redact(cursor):
                    return True
            if cursor.current_is_whitespace() or cursor.current_is_one_of(KEY_BOUNDARIES):
                return False
            cursor.advance()
        return False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(fields={list(self._fields)!r}, "
            f"recognizers={list(self._recognizers)!r}, ignore_case={self._ignore_case})"
        )


def mask_fields_in(
    text: str,
    field_names: Iterable[str] | None = None,
    *,
    recognizers: Sequence[FieldRecognizer] | None = None,
    ignore_case: bool = False,
) -> str:
    """Mask the values of ``field_names`` in ``text``.

    Convenience wrapper that builds a one-off FieldMasker.

    Args:
        text: The text to mask.
        field_names: Field names to mask. Defaults to ("password",).
        recognizers: Optional recognizer order override.
        ignore_case: Match field names case-insensitively.

    Returns:
        The masked text.
    """
    masker = FieldMasker(field_names, recognizers=recognizers, ignore_case=ignore_case)
    return masker.mask_fields_in(text)
