"""Body helpers for logging: truncation and mask-then-truncate."""

import hashlib
from typing import TYPE_CHECKING

from fieldmask._internal.masking.models import UNLIMITED_LENGTH

if TYPE_CHECKING:
    from fieldmask._internal.masking.masker import FieldMasker

HASH_LENGTH = 8


def compress_body(body: str | None, max_length: int) -> str | None:
    """Truncate a body for logging.

    Args:
        body: The body content.
        max_length: Maximum number of characters to keep, -1 for unlimited.

    Returns:
        The body unchanged when it fits, otherwise the first ``max_length``
        characters followed by a summary with the original length and a short
        hash of the full content.
    """
    if body is None or max_length == UNLIMITED_LENGTH or len(body) <= max_length:
        return body

    digest = hashlib.sha256(body.encode("utf-8", errors="replace")).hexdigest()[:HASH_LENGTH]
    return f"{body[:max_length]}... [TRUNCATED: {len(body)} chars, hash={digest}]"


def compress_and_mask_body(
    body: str | None,
    max_length: int,
    masker: "FieldMasker | None",
) -> str | None:
    """Mask sensitive fields in a body, then truncate it.

    Masking runs on the full body so a value cut in half by truncation is
    never logged in clear text.

    Args:
        body: The body content.
        max_length: Maximum number of characters to keep, -1 for unlimited.
        masker: Masker to apply before truncation. None skips masking.

    Returns:
        The masked and truncated body, or None if ``body`` is None.
    """
    if body is None:
        return None
    masked = masker.mask_fields_in(body) if masker is not None else body
    return compress_body(masked, max_length)
