"""Masked request/response logging for httpx clients."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from fieldmask._internal.masking.body import compress_and_mask_body
from fieldmask._internal.masking.cursor import MASK_TOKEN
from fieldmask._internal.masking.masker import FieldMasker
from fieldmask._internal.masking.models import (
    DEFAULT_ALLOWED_CONTENT_TYPES,
    DEFAULT_BODY_EXCLUDED_CONTENT_TYPES,
    UNLIMITED_LENGTH,
    MaskingConfig,
)
from fieldmask._version import __version__

DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger("fieldmask.http")


def is_loggable_content_type(
    content_type: str | None,
    allowed: Iterable[str] = DEFAULT_ALLOWED_CONTENT_TYPES,
    excluded: Iterable[str] = DEFAULT_BODY_EXCLUDED_CONTENT_TYPES,
) -> bool:
    """Check whether a body with this content type may be logged.

    The media type must be in ``allowed`` and not in ``excluded``. Parameters
    such as ``charset`` or ``boundary`` are ignored and the comparison is
    case-insensitive.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type in {item.lower() for item in excluded}:
        return False
    return media_type in {item.lower() for item in allowed}


def format_headers(headers: httpx.Headers, masker: FieldMasker) -> str:
    """Render headers as ``name: v1, v2`` lines, sorted by name, masked.

    Headers named like a masked field (e.g. ``authorization``) have their
    whole value replaced.
    """
    sensitive = {field.lower() for field in masker.fields}
    lines = []
    for name in sorted(set(headers.keys())):
        if name.lower() in sensitive:
            value = MASK_TOKEN
        else:
            value = ", ".join(headers.get_list(name))
        lines.append(f"{name}: {value}")
    return masker.mask_fields_in("\n".join(lines))


def format_request(
    request: httpx.Request,
    masker: FieldMasker,
    *,
    max_body_length: int = UNLIMITED_LENGTH,
    allowed_content_types: Iterable[str] = DEFAULT_ALLOWED_CONTENT_TYPES,
    body_excluded_content_types: Iterable[str] = DEFAULT_BODY_EXCLUDED_CONTENT_TYPES,
) -> str:
    """Render an outgoing request as a masked, multi-line log string.

    Args:
        request: The httpx request.
        masker: Masker for the URL, headers and body.
        max_body_length: Body truncation length, -1 for unlimited.
        allowed_content_types: Media types whose bodies are included.
        body_excluded_content_types: Media types whose bodies are never included.

    Returns:
        The request line, the headers and, for allowed content types, the body.
        Streaming bodies that have not been read are left out.
    """
    body = None
    if is_loggable_content_type(
        request.headers.get("content-type"), allowed_content_types, body_excluded_content_types
    ):
        try:
            body = request.content.decode("utf-8", errors="replace")
        except httpx.RequestNotRead:
            # Streaming upload, not in memory yet
            body = None
    return _format_message(
        f"{request.method} {masker.mask_fields_in(str(request.url))}",
        request.headers,
        body,
        masker,
        max_body_length,
    )


def format_response(
    response: httpx.Response,
    masker: FieldMasker,
    *,
    max_body_length: int = UNLIMITED_LENGTH,
    allowed_content_types: Iterable[str] = DEFAULT_ALLOWED_CONTENT_TYPES,
    body_excluded_content_types: Iterable[str] = DEFAULT_BODY_EXCLUDED_CONTENT_TYPES,
) -> str:
    """Render a response as a masked, multi-line log string.

    The response body must have been read (``response.read()``) when its
    content type is loggable.
    """
    body = None
    if is_loggable_content_type(
        response.headers.get("content-type"), allowed_content_types, body_excluded_content_types
    ):
        body = response.text
    status_line = f"HTTP {response.status_code} {response.reason_phrase}"
    url = _response_url(response)
    if url:
        status_line = f"{status_line} {masker.mask_fields_in(url)}"
    return _format_message(status_line, response.headers, body, masker, max_body_length)


def create_logging_event_hooks(
    masker: FieldMasker | None = None,
    *,
    config: MaskingConfig | None = None,
    log: logging.Logger | None = None,
) -> dict[str, list[Callable[..., Any]]]:
    """Create httpx event hooks that log masked requests and responses.

    Args:
        masker: Masker to use. Built from ``config`` when omitted.
        config: Masking configuration. Defaults to MaskingConfig().
        log: Logger to write to. Defaults to the ``fieldmask.http`` logger.

    Returns:
        A mapping suitable for ``httpx.Client(event_hooks=...)``.
    """
    config = config or MaskingConfig()
    masker = masker or FieldMasker.from_config(config)
    log = log or logger
    body_options = {
        "max_body_length": config.max_body_length,
        "allowed_content_types": config.allowed_content_types,
        "body_excluded_content_types": config.body_excluded_content_types,
    }

    def log_request(request: httpx.Request) -> None:
        try:
            log.info("Outgoing request:\n%s", format_request(request, masker, **body_options))
        except Exception as e:
            log.warning("Could not log outgoing request: %r", e)

    def log_response(response: httpx.Response) -> None:
        try:
            if is_loggable_content_type(
                response.headers.get("content-type"),
                config.allowed_content_types,
                config.body_excluded_content_types,
            ):
                response.read()
            log.info("Incoming response:\n%s", format_response(response, masker, **body_options))
        except Exception as e:
            log.warning("Could not log incoming response: %r", e)

    return {"request": [log_request], "response": [log_response]}


def create_http_client(
    *,
    masker: FieldMasker | None = None,
    config: MaskingConfig | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.Client:
    """Create an HTTP client that logs masked traffic.

    Args:
        masker: Masker to use for logging.
        config: Masking configuration for the logging hooks.
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"fieldmask/{__version__}"},
        event_hooks=create_logging_event_hooks(masker, config=config),
    )


def _response_url(response: httpx.Response) -> str:
    try:
        return str(response.request.url)
    except RuntimeError:
        # Response built without a request
        return ""


def _format_message(
    first_line: str,
    headers: httpx.Headers,
    body: str | None,
    masker: FieldMasker,
    max_body_length: int,
) -> str:
    lines = [first_line]
    header_block = format_headers(headers, masker)
    if header_block:
        lines.append(header_block)
    masked_body = compress_and_mask_body(body, max_body_length, masker)
    if masked_body:
        lines.extend(["", masked_body])
    return "\n".join(lines)
