"""Async HTTP access to the PeerTube video endpoint."""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from ..errors import FetchStatusError, FetchTransportError, MalformedResponseError, MalformedUrlError
from .models import PeerTubeVideo

logger = logging.getLogger(__name__)


def build_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create a client with no default headers beyond httpx's own and no timeout unless asked."""
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)


def parse_video(payload: bytes | str, url: str) -> PeerTubeVideo:
    """Decode a response body into a :class:`PeerTubeVideo`."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(url, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError(url, f"expected a JSON object, got {type(data).__name__}")
    try:
        return PeerTubeVideo.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(url, f"{exc.error_count()} invalid field(s)") from exc


async def fetch_video(
    api_url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> PeerTubeVideo:
    """GET ``api_url`` and return the parsed video record.

    An injected ``client`` is used as-is and left open for the caller.
    """
    owns_client = client is None
    http = client if client is not None else build_client(timeout)
    try:
        logger.debug("Fetching PeerTube video %s", api_url)
        try:
            response = await http.get(api_url)
        except httpx.TransportError as exc:
            logger.warning("Transport failure fetching %s: %s", api_url, exc)
            raise FetchTransportError(api_url, str(exc) or type(exc).__name__) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            raise MalformedUrlError(api_url, str(exc)) from exc

        if not response.is_success:
            logger.warning("PeerTube answered %s %s for %s", response.status_code, response.reason_phrase, api_url)
            raise FetchStatusError(response.status_code, response.reason_phrase, api_url)

        video = parse_video(response.content, api_url)
        logger.info("Fetched video %s (%s)", video.uuid, video.name)
        return video
    finally:
        if owns_client:
            await http.aclose()
