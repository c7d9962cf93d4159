"""Nostr event construction (NIP-71 video events)."""

from __future__ import annotations

from .event import Tag, UnsignedEvent
from .nip71 import HORIZONTAL_VIDEO_KIND, build_imeta_tag, convert_to_nip71

__all__ = ["HORIZONTAL_VIDEO_KIND", "Tag", "UnsignedEvent", "build_imeta_tag", "convert_to_nip71"]
