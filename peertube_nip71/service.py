"""End-to-end conversion: normalise the URL, fetch the record, build the event."""

from __future__ import annotations

import logging

import httpx

from .errors import EmptyUrlError
from .nostr import UnsignedEvent, convert_to_nip71
from .peertube import fetch_video, to_api_url

logger = logging.getLogger(__name__)


async def convert(
    input_url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> UnsignedEvent:
    """Convert a PeerTube video link into an unsigned NIP-71 event.

    Either a complete event is returned or a single ``ConverterError`` is raised.
    """
    input_url = (input_url or "").strip()
    if not input_url:
        raise EmptyUrlError()
    api_url = to_api_url(input_url)
    if api_url != input_url:
        logger.debug("Normalised %s -> %s", input_url, api_url)
    video = await fetch_video(api_url, client=client, timeout=timeout)
    event = convert_to_nip71(video, api_url)
    logger.info(
        "Converted %s into kind %d event with %d tags (%d media variants)",
        video.uuid,
        event.kind,
        len(event.tags),
        len(event.tag_values("imeta")),
    )
    return event
