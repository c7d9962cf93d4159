"""Shared fixtures: PeerTube API payloads and mocked HTTP clients."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable

import httpx
import pytest

API_URL = "https://peertube.example/api/v1/videos/9c9de5e8-0a1e-484a-b099-e80766180a6d"


@pytest.fixture
def video_payload() -> dict[str, Any]:
    """A trimmed but realistic ``GET /api/v1/videos/{id}`` response."""
    return {
        "id": 42,
        "uuid": "9c9de5e8-0a1e-484a-b099-e80766180a6d",
        "shortUUID": "kkGMgK9ZtnKfYAgnEtQxbv",
        "name": "Building a Raft",
        "description": "How we built a raft from driftwood.",
        "category": {"id": 15, "label": "Science & Technology"},
        "licence": {"id": 1, "label": "Attribution"},
        "language": {"id": "en", "label": "English"},
        "privacy": {"id": 1, "label": "Public"},
        "nsfw": False,
        "isLocal": True,
        "duration": 120,
        "views": 314,
        "likes": 12,
        "dislikes": 0,
        "thumbnailPath": "/lazy-static/thumbnails/raft.jpg",
        "previewPath": "/lazy-static/previews/raft.jpg",
        "embedPath": "/videos/embed/9c9de5e8-0a1e-484a-b099-e80766180a6d",
        "createdAt": "2024-03-01T10:00:00.000Z",
        "updatedAt": "2024-03-05T10:00:00.000Z",
        "publishedAt": "2024-03-02T12:30:45.500Z",
        "originallyPublishedAt": None,
        "isLive": False,
        "account": {"name": "alice", "displayName": "Alice", "host": "peertube.example"},
        "channel": {"name": "alice_channel", "displayName": "Alice Outdoors", "host": "peertube.example"},
        "tags": ["Outdoors", "DIY"],
        "trackerUrls": ["wss://peertube.example/tracker/socket"],
        "files": [],
        "streamingPlaylists": [
            {
                "id": 7,
                "type": 1,
                "playlistUrl": "https://peertube.example/static/streaming-playlists/hls/master.m3u8",
                "segmentsSha256Url": "https://peertube.example/static/streaming-playlists/hls/segments-sha256.json",
                "redundancies": [],
                "files": [
                    {
                        "resolution": {"id": 1080, "label": "1080p"},
                        "magnetUri": "magnet:?xt=urn:btih:1080",
                        "size": 30_000_000,
                        "fps": 30,
                        "fileUrl": "https://peertube.example/static/streaming-playlists/hls/raft-1080-fragmented.mp4",
                    },
                    {
                        "resolution": {"id": 480, "label": "480p"},
                        "magnetUri": "",
                        "size": 6_000_000,
                        "fps": 30,
                        "fileUrl": "/static/streaming-playlists/hls/raft-480-fragmented.mp4",
                    },
                ],
            }
        ],
    }


@pytest.fixture
def mock_client() -> Callable[..., httpx.AsyncClient]:
    """Build an ``httpx.AsyncClient`` answering every request with ``handler``."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)

    return _factory


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


CONFIG_ENV_KEYS = (
    "APP_ENVIRONMENT",
    "APP_ENV",
    "APP_LOG_LEVEL",
    "APP_LOG_PATH",
    "LOG_PATH",
    "APP_HTTP_TIMEOUT_SECONDS",
    "APP_JSON_INDENT",
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Run with no converter settings in the environment, restoring them afterwards.

    ``load_dotenv`` writes straight into ``os.environ``, so values loaded during a
    test are removed on teardown as well.
    """
    saved = {key: os.environ.pop(key, None) for key in CONFIG_ENV_KEYS}
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    for key, value in saved.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def restore_root_logger():
    """Undo ``configure_logging`` so handlers bound to captured streams do not leak."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
