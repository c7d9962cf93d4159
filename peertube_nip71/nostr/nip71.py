"""Mapping of PeerTube video metadata onto NIP-71 video events."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from ..peertube.models import UNKNOWN_LABEL, PeerTubeVideo, VideoFile
from ..peertube.urls import get_base_url, resolve_url
from .event import Tag, UnsignedEvent

HORIZONTAL_VIDEO_KIND = 34235
LANGUAGE_NAMESPACE = "ISO-639-1"
MIME_TYPES: dict[str, str] = {
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogv": "video/ogg",
    "mov": "video/quicktime",
    "m3u8": "application/x-mpegURL",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def unix_seconds(moment: datetime) -> int:
    """Whole seconds since the epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return math.floor(moment.timestamp())


def width_from_height(height: int) -> int:
    # PeerTube only reports the height; assume 16:9.
    return _round_half_up(height * 16 / 9)


def mime_type_for(url: str) -> str | None:
    extension = url.rsplit(".", 1)[-1].split("?", 1)[0].lower()
    return MIME_TYPES.get(extension)


def build_imeta_tag(file: VideoFile, base_url: str, duration: int | float | None = None) -> Tag:
    """Describe one rendition as an ``imeta`` tag."""
    url = resolve_url(file.file_url, base_url)
    parts = ["imeta", f"url {url}"]

    mime_type = mime_type_for(url)
    if mime_type:
        parts.append(f"m {mime_type}")

    if file.size:
        parts.append(f"size {file.size}")

    height = file.resolution.id if file.resolution else None
    if height and isinstance(height, int) and not isinstance(height, bool):
        parts.append(f"dim {width_from_height(height)}x{height}")

    if file.size and duration and duration > 0:
        parts.append(f"bitrate {_round_half_up(file.size * 8 / duration)}")

    if file.magnet_uri:
        parts.append(f"fallback {file.magnet_uri}")

    return parts


def created_at_for(video: PeerTubeVideo) -> int:
    """Prefer the original publication date, then publication, then upload."""
    moment = video.originally_published_at or video.published_at or video.created_at
    return unix_seconds(moment)


def convert_to_nip71(video: PeerTubeVideo, api_url: str) -> UnsignedEvent:
    """Build the unsigned kind 34235 event describing ``video``.

    Relative thumbnail, preview and file paths are resolved against the origin of
    ``api_url``, which is also recorded as the ``r`` reference.
    """
    base_url = get_base_url(api_url)
    tags: list[Tag] = [
        ["d", video.uuid],
        ["title", video.name],
    ]

    if video.description:
        tags.append(["summary", video.description])

    if video.published_at:
        tags.append(["published_at", str(unix_seconds(video.published_at))])

    if video.thumbnail_path:
        tags.append(["thumb", resolve_url(video.thumbnail_path, base_url)])

    if video.preview_path:
        tags.append(["image", resolve_url(video.preview_path, base_url)])

    if video.duration:
        tags.append(["duration", _format_number(video.duration)])

    for file in video.iter_files():
        tags.append(build_imeta_tag(file, base_url, video.duration))

    for label in video.tags:
        tags.append(["t", label.lower()])

    tags.append(["alt", f"Video: {video.name}"])
    tags.append(["r", api_url])

    if video.channel and video.channel.display_name:
        tags.append(["c", video.channel.display_name])

    if video.licence and video.licence.is_known:
        tags.append(["license", video.licence.label])

    # NIP-36
    if video.nsfw:
        tags.append(["content-warning", "nsfw"])

    # NIP-32 labels
    language = video.language
    if language and language.id and language.label != UNKNOWN_LABEL:
        tags.append(["L", LANGUAGE_NAMESPACE])
        tags.append(["l", str(language.id), LANGUAGE_NAMESPACE])

    return UnsignedEvent(
        kind=HORIZONTAL_VIDEO_KIND,
        created_at=created_at_for(video),
        tags=tags,
        content=video.description or "",
    )
