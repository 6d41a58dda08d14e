"""Masking engine: scan cursor, field recognizers and the field masker."""

from fieldmask._internal.masking.body import compress_and_mask_body, compress_body
from fieldmask._internal.masking.cursor import MASK_TOKEN, ScanCursor
from fieldmask._internal.masking.masker import FieldMasker, mask_fields_in
from fieldmask._internal.masking.models import MaskingConfig
from fieldmask._internal.masking.recognizers import (
    DEFAULT_RECOGNIZERS,
    EmbeddedStructureRecognizer,
    FieldRecognizer,
    QueryStringRecognizer,
)

__all__ = [
    "MASK_TOKEN",
    "ScanCursor",
    "FieldRecognizer",
    "EmbeddedStructureRecognizer",
    "QueryStringRecognizer",
    "DEFAULT_RECOGNIZERS",
    "FieldMasker",
    "mask_fields_in",
    "MaskingConfig",
    "compress_body",
    "compress_and_mask_body",
]
