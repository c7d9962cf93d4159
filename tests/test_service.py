"""End-to-end conversion tests with a mocked PeerTube instance."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from conftest import json_response
from peertube_nip71 import convert
from peertube_nip71.errors import EmptyUrlError, FetchStatusError, MalformedUrlError


@pytest.mark.asyncio
async def test_short_link_end_to_end(mock_client) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return json_response(
            {"uuid": "abc123", "name": "Test", "duration": 10, "tags": ["Foo"], "createdAt": "2024-01-01T00:00:00Z"}
        )

    async with mock_client(handler) as client:
        event = await convert("https://example.com/w/abc123", client=client)

    assert requested == ["https://example.com/api/v1/videos/abc123"]
    assert event.kind == 34235
    assert event.created_at == 1704067200
    assert event.tags == [
        ["d", "abc123"],
        ["title", "Test"],
        ["duration", "10"],
        ["t", "foo"],
        ["alt", "Video: Test"],
        ["r", "https://example.com/api/v1/videos/abc123"],
    ]


@pytest.mark.asyncio
async def test_long_link_resolves_relative_paths(mock_client, video_payload: dict[str, Any]) -> None:
    async with mock_client(lambda request: json_response(video_payload)) as client:
        event = await convert(f"https://peertube.example/videos/watch/{video_payload['uuid']}", client=client)

    assert event.tag_values("thumb") == [["thumb", "https://peertube.example/lazy-static/thumbnails/raft.jpg"]]
    assert event.tag_values("r") == [["r", f"https://peertube.example/api/v1/videos/{video_payload['uuid']}"]]
    assert len(event.tag_values("imeta")) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "   "])
async def test_blank_url_rejected(url: str) -> None:
    with pytest.raises(EmptyUrlError, match="Please enter a PeerTube video URL"):
        await convert(url)


@pytest.mark.asyncio
async def test_malformed_url_rejected_before_fetch(mock_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not be reached
        raise AssertionError("no request expected")

    async with mock_client(handler) as client:
        with pytest.raises(MalformedUrlError):
            await convert("peertube.example/w/abc", client=client)


@pytest.mark.asyncio
async def test_unrecognised_link_is_fetched_as_is(mock_client) -> None:
    async with mock_client(lambda request: httpx.Response(404)) as client:
        with pytest.raises(FetchStatusError) as excinfo:
            await convert("https://example.com/about", client=client)
    assert excinfo.value.url == "https://example.com/about"


@pytest.mark.asyncio
async def test_surrounding_whitespace_is_stripped(mock_client) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return json_response({"uuid": "abc", "name": "Test", "createdAt": "2024-01-01T00:00:00Z"})

    async with mock_client(handler) as client:
        event = await convert(" https://example.com/api/v1/videos/abc\n", client=client)

    assert requested == ["https://example.com/api/v1/videos/abc"]
    assert event.tag_values("r") == [["r", "https://example.com/api/v1/videos/abc"]]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/api/v1/videos/a\tb",
        "https://exa mple.com/w/abc",
        "https://example.com/w/ab\x00c",
    ],
)
async def test_embedded_whitespace_rejected_before_fetch(mock_client, url: str) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200)

    async with mock_client(handler) as client:
        with pytest.raises(MalformedUrlError):
            await convert(url, client=client)
    assert requested == []


@pytest.mark.asyncio
async def test_conversion_summary_logged(
    mock_client, video_payload: dict[str, Any], caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="peertube_nip71")
    async with mock_client(lambda request: json_response(video_payload)) as client:
        await convert(f"https://peertube.example/w/{video_payload['uuid']}", client=client)

    assert f"Converted {video_payload['uuid']} into kind 34235 event" in caplog.text
    assert "(2 media variants)" in caplog.text
