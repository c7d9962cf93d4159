"""Normalisation of human-facing PeerTube links into API endpoint URLs."""

from __future__ import annotations

import re
from urllib.parse import ParseResult, urlparse

from ..errors import MalformedUrlError

API_VIDEO_PREFIX = "/api/v1/videos/"
SHORT_WATCH_RE = re.compile(r"^/w/([^/]+)")
LONG_WATCH_RE = re.compile(r"^/videos/watch/([^/]+)")
DEFAULT_PORTS = {"http": 80, "https": 443}
UNSAFE_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def _parse(url: str) -> ParseResult:
    try:
        candidate = url.strip()
        if UNSAFE_CHARS_RE.search(candidate):
            raise ValueError("contains whitespace or control characters")
        parsed = urlparse(candidate)
        parsed.port  # raises ValueError for out-of-range or non-numeric ports
    except (ValueError, AttributeError) as exc:
        raise MalformedUrlError(str(url), str(exc)) from exc
    if not parsed.scheme or not parsed.hostname:
        raise MalformedUrlError(url, "missing scheme or host")
    return parsed


def _origin(parsed: ParseResult) -> str:
    scheme = parsed.scheme.lower()
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def get_base_url(url: str) -> str:
    """Return ``scheme://host[:port]`` for ``url``."""
    return _origin(_parse(url))


def to_api_url(input_url: str) -> str:
    """Convert any supported PeerTube video URL to its API URL.

    Supports:
    - ``/w/{id}`` (short watch URL)
    - ``/videos/watch/{id}`` (long watch URL)
    - ``/api/v1/videos/{id}`` (already an API URL, returned unchanged)

    Any other absolute URL is returned unchanged so the fetch reports the failure.
    """
    parsed = _parse(input_url)
    path = parsed.path

    if path.startswith(API_VIDEO_PREFIX):
        return input_url

    match = SHORT_WATCH_RE.match(path) or LONG_WATCH_RE.match(path)
    if match:
        return f"{_origin(parsed)}{API_VIDEO_PREFIX}{match.group(1)}"

    return input_url


def resolve_url(path_or_url: str, base_url: str) -> str:
    """Prefix origin-relative paths with ``base_url``; absolute URLs pass through."""
    if path_or_url.startswith("http"):
        return path_or_url
    return f"{base_url}{path_or_url}"
