"""PeerTube API access: URL normalisation, record models and the video fetcher."""

from __future__ import annotations

from .client import fetch_video, parse_video
from .models import LabeledValue, PeerTubeVideo, StreamingPlaylist, VideoFile
from .urls import get_base_url, resolve_url, to_api_url

__all__ = [
    "LabeledValue",
    "PeerTubeVideo",
    "StreamingPlaylist",
    "VideoFile",
    "fetch_video",
    "get_base_url",
    "parse_video",
    "resolve_url",
    "to_api_url",
]
