"""Pydantic models for masking configuration."""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from fieldmask.exceptions import FieldmaskConfigError

# =============================================================================
# Constants
# =============================================================================

DEFAULT_FIELD = "password"
DEFAULT_ENV_FIELDS = ("password", "keyPassphrase", "client_secret", "secret")
UNLIMITED_LENGTH = -1

DEFAULT_ALLOWED_CONTENT_TYPES = (
    "application/json",
    "application/graphql+json",
    "application/hal+json",
    "application/problem+json",
    "application/x-www-form-urlencoded",
    "application/xml",
    "multipart/form-data",
    "text/plain",
    "text/xml",
)

# Media types whose bodies are never logged, even when allowed above
DEFAULT_BODY_EXCLUDED_CONTENT_TYPES = ("multipart/form-data",)

# =============================================================================
# Masking Config
# =============================================================================


class MaskingConfig(BaseModel):
    """Configuration for a FieldMasker and the HTTP logging hooks.

    Fields:
        fields_to_mask: Field names whose values are masked. Defaults to
            ("password",) when nothing usable is given.
        ignore_case: Match field names case-insensitively.
        max_body_length: Bodies longer than this are truncated after
            masking. -1 disables truncation.
        allowed_content_types: Media types whose bodies are logged.
        body_excluded_content_types: Media types whose bodies are never
            logged (uploads). Takes precedence over allowed_content_types.
        debug: Enable debug output on stderr.
    """

    fields_to_mask: tuple[str, ...] = (DEFAULT_FIELD,)
    ignore_case: bool = False
    max_body_length: int = Field(default=UNLIMITED_LENGTH, ge=UNLIMITED_LENGTH)
    allowed_content_types: tuple[str, ...] = DEFAULT_ALLOWED_CONTENT_TYPES
    body_excluded_content_types: tuple[str, ...] = DEFAULT_BODY_EXCLUDED_CONTENT_TYPES
    debug: bool = False

    model_config = {"frozen": True}

    @field_validator("fields_to_mask", mode="before")
    @classmethod
    def normalize_fields(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return (DEFAULT_FIELD,)
        if isinstance(v, str):
            v = v.split(",")
        return normalize_field_names(v)

    @field_validator("allowed_content_types", "body_excluded_content_types", mode="before")
    @classmethod
    def normalize_content_types(cls, v: Any) -> tuple[str, ...]:
        if isinstance(v, str):
            v = v.split(",")
        return tuple(item.strip().lower() for item in v if item and item.strip())

    @classmethod
    def from_env(cls) -> "MaskingConfig":
        """Create a config from environment variables.

        Optional environment variables:
            FIELDMASK_FIELDS: Comma-separated field names to mask.
            FIELDMASK_IGNORE_CASE: Set to "1" for case-insensitive matching.
            FIELDMASK_MAX_BODY_LENGTH: Body truncation length (-1 = unlimited).
            FIELDMASK_BODY_EXCLUDED_CONTENT_TYPES: Comma-separated media types
                whose bodies are never logged.
            FIELDMASK_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A MaskingConfig with defaults for anything not set.

        Raises:
            FieldmaskConfigError: If a variable has an invalid value.
        """
        fields = os.environ.get("FIELDMASK_FIELDS", ",".join(DEFAULT_ENV_FIELDS))
        ignore_case = os.environ.get("FIELDMASK_IGNORE_CASE", "") == "1"
        debug = os.environ.get("FIELDMASK_DEBUG", "") == "1"
        excluded = os.environ.get(
            "FIELDMASK_BODY_EXCLUDED_CONTENT_TYPES", ",".join(DEFAULT_BODY_EXCLUDED_CONTENT_TYPES)
        )

        raw_length = os.environ.get("FIELDMASK_MAX_BODY_LENGTH", str(UNLIMITED_LENGTH))
        try:
            max_body_length = int(raw_length)
        except ValueError as e:
            raise FieldmaskConfigError(
                f"FIELDMASK_MAX_BODY_LENGTH must be an integer, got {raw_length!r}"
            ) from e

        try:
            return cls(
                fields_to_mask=fields,
                ignore_case=ignore_case,
                max_body_length=max_body_length,
                body_excluded_content_types=excluded,
                debug=debug,
            )
        except ValidationError as e:
            raise FieldmaskConfigError(str(e)) from e


def normalize_field_names(names: Any) -> tuple[str, ...]:
    """Strip names, drop empty ones and duplicates, keep first-seen order.

    Falls back to ("password",) when no usable name remains.
    """
    cleaned = (str(name).strip() for name in names if name is not None)
    unique = tuple(dict.fromkeys(name for name in cleaned if name))
    return unique or (DEFAULT_FIELD,)
