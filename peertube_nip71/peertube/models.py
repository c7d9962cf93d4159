"""Pydantic models for the subset of the PeerTube video API the converter reads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_LABEL = "Unknown"


class PeerTubeModel(BaseModel):
    """Base model mapping camelCase API keys onto snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


def _blank_as_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LabeledValue(PeerTubeModel):
    """An ``{id, label}`` pair; the label ``"Unknown"`` stands for absent."""

    id: int | str | None = None
    label: str | None = None

    @property
    def is_known(self) -> bool:
        return bool(self.label) and self.label != UNKNOWN_LABEL


class Avatar(PeerTubeModel):
    path: str | None = None


class Account(PeerTubeModel):
    name: str | None = None
    display_name: str | None = None
    host: str | None = None
    url: str | None = None
    avatar: Avatar | None = None


class Channel(PeerTubeModel):
    name: str | None = None
    display_name: str | None = None
    host: str | None = None
    url: str | None = None
    support: str | None = None
    avatar: Avatar | None = None


class VideoFile(PeerTubeModel):
    """One rendition of a video (a single resolution/encoding)."""

    file_url: str
    resolution: LabeledValue | None = None
    size: int | None = None
    fps: float | None = None
    magnet_uri: str | None = None
    torrent_url: str | None = None
    torrent_download_url: str | None = None
    file_download_url: str | None = None
    metadata_url: str | None = None


class StreamingPlaylist(PeerTubeModel):
    """An HLS playlist grouping several renditions of the same video."""

    id: int | None = None
    type: int | None = None
    playlist_url: str | None = None
    segments_sha256_url: str | None = None
    files: list[VideoFile] = Field(default_factory=list)

    @field_validator("files", mode="before")
    @classmethod
    def _files_default_empty(cls, value: Any) -> Any:
        return _none_as_empty(value)


class PeerTubeVideo(PeerTubeModel):
    """Video description as returned by ``GET /api/v1/videos/{id}``."""

    id: int | None = None
    uuid: str
    short_uuid: str | None = Field(default=None, alias="shortUUID")
    name: str
    description: str | None = None
    category: LabeledValue | None = None
    licence: LabeledValue | None = None
    language: LabeledValue | None = None
    privacy: LabeledValue | None = None
    state: LabeledValue | None = None
    nsfw: bool = False
    is_local: bool | None = None
    is_live: bool | None = None
    duration: int | float | None = None
    views: int | None = None
    likes: int | None = None
    dislikes: int | None = None
    thumbnail_path: str | None = None
    preview_path: str | None = None
    embed_path: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    published_at: datetime | None = None
    originally_published_at: datetime | None = None
    account: Account | None = None
    channel: Channel | None = None
    support: str | None = None
    tags: list[str] = Field(default_factory=list)
    files: list[VideoFile] = Field(default_factory=list)
    streaming_playlists: list[StreamingPlaylist] = Field(default_factory=list)

    @field_validator("tags", "files", "streaming_playlists", mode="before")
    @classmethod
    def _lists_default_empty(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @field_validator(
        "created_at",
        "updated_at",
        "published_at",
        "originally_published_at",
        "thumbnail_path",
        "preview_path",
        mode="before",
    )
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        return _blank_as_none(value)

    def iter_files(self) -> Iterator[VideoFile]:
        """Yield every rendition: playlist files first, then direct files."""
        for playlist in self.streaming_playlists:
            yield from playlist.files
        yield from self.files
