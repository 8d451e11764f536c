"""Multipart image upload to the media service."""
from __future__ import annotations

from app_logging import get_logger
from config import _Settings, get_settings
from exceptions import DataFetchError, MutationError
from fetching.cancellation import CancellationToken
from fetching.decoding import error_message, safe_parse_json
from fetching.extraction import first_value
from fetching.transport import RequestOptions, Transport, fetch_with_timeout
from metrics.fetch_metrics import record_mutation

IMAGE_URL_KEYS = ("fileUrl", "url", "imageUrl")

_log = get_logger("assetdesk.resources.upload")


def upload_image(
    filename: str,
    content: bytes,
    content_type: str = "application/octet-stream",
    settings: _Settings | None = None,
    transport: Transport | None = None,
    token: CancellationToken | None = None,
) -> str:
    """Upload an image and return the hosted URL the media service reports.

    Raises:
        MutationError: the upload failed or the response carried no URL.
    """
    settings = settings or get_settings()
    url = f"{settings.origin('media')}/image"
    options = RequestOptions(
        method="POST",
        headers={"Accept": "application/json"},
        files={"file": (filename, content, content_type)},
    )
    try:
        response = fetch_with_timeout(url, options, settings.timeout, token, transport)
    except DataFetchError as e:
        record_mutation("image", "upload", "error")
        raise MutationError("image", e.message) from e
    payload = safe_parse_json(response)
    if not response.ok:
        record_mutation("image", "upload", "error")
        raise MutationError("image", error_message(payload, "Image upload failed"))
    location = first_value(payload, IMAGE_URL_KEYS)
    if not location:
        record_mutation("image", "upload", "error")
        raise MutationError("image", "upload response did not include an image URL")
    record_mutation("image", "upload", "ok")
    _log.info("uploaded", extra={"file": filename, "bytes": len(content)})
    return str(location)


__all__ = ["IMAGE_URL_KEYS", "upload_image"]
