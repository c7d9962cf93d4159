"""Exception hierarchy shared by the normalizer, fetcher and converter."""

from __future__ import annotations


class ConverterError(RuntimeError):
    """Base class for every failure surfaced by a conversion."""


class MalformedUrlError(ConverterError, ValueError):
    """Raised when the input is not a parseable absolute URL."""

    def __init__(self, url: str, reason: str = "not a valid absolute URL") -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class EmptyUrlError(MalformedUrlError):
    """Raised when no URL was supplied at all."""

    def __init__(self) -> None:
        super().__init__("", "Please enter a PeerTube video URL")

    def __str__(self) -> str:
        return self.reason


class FetchStatusError(ConverterError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, url: str) -> None:
        super().__init__(f"Failed to fetch video: {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason
        self.url = url


class FetchTransportError(ConverterError):
    """Network-level failure; the underlying httpx error is kept as ``__cause__``."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Failed to fetch video from {url}: {detail}")
        self.url = url


class MalformedResponseError(ConverterError):
    """The response body is not JSON or does not describe a video."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Unexpected response from {url}: {detail}")
        self.url = url


__all__ = [
    "ConverterError",
    "EmptyUrlError",
    "FetchStatusError",
    "FetchTransportError",
    "MalformedResponseError",
    "MalformedUrlError",
]
