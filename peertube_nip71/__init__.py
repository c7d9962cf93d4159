"""Convert PeerTube video metadata into unsigned Nostr NIP-71 video events."""

from __future__ import annotations

from .errors import (
    ConverterError,
    EmptyUrlError,
    FetchStatusError,
    FetchTransportError,
    MalformedResponseError,
    MalformedUrlError,
)
from .nostr import HORIZONTAL_VIDEO_KIND, UnsignedEvent, convert_to_nip71
from .peertube import PeerTubeVideo, fetch_video, get_base_url, to_api_url
from .service import convert

__all__ = [
    "HORIZONTAL_VIDEO_KIND",
    "ConverterError",
    "EmptyUrlError",
    "FetchStatusError",
    "FetchTransportError",
    "MalformedResponseError",
    "MalformedUrlError",
    "PeerTubeVideo",
    "UnsignedEvent",
    "convert",
    "convert_to_nip71",
    "fetch_video",
    "get_base_url",
    "to_api_url",
]
