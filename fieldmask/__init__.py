"""fieldmask: mask sensitive field values in logged text.

Masks the values of configured fields (``password`` by default) in JSON-like
bodies and URI query strings with ``***``, without parsing the payload.

Public API:
    FieldMasker - Configured masker, safe to share between threads
    mask_fields_in - One-off masking helper
    MaskingConfig - Pydantic configuration, loadable from FIELDMASK_* env vars
    create_http_client - httpx client that logs masked traffic
"""

from fieldmask._internal.http import (
    create_http_client,
    create_logging_event_hooks,
    format_request,
    format_response,
)
from fieldmask._internal.masking import (
    DEFAULT_RECOGNIZERS,
    MASK_TOKEN,
    EmbeddedStructureRecognizer,
    FieldMasker,
    FieldRecognizer,
    MaskingConfig,
    QueryStringRecognizer,
    compress_and_mask_body,
    mask_fields_in,
)
from fieldmask._version import __version__

__all__ = [
    "__version__",
    "MASK_TOKEN",
    "FieldMasker",
    "mask_fields_in",
    "MaskingConfig",
    "FieldRecognizer",
    "EmbeddedStructureRecognizer",
    "QueryStringRecognizer",
    "DEFAULT_RECOGNIZERS",
    "compress_and_mask_body",
    "create_http_client",
    "create_logging_event_hooks",
    "format_request",
    "format_response",
]
