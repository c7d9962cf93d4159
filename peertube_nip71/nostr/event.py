"""Unsigned Nostr event envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

Tag = list[str]


class UnsignedEvent(BaseModel):
    """Event fields prior to signing; ``pubkey``, ``id`` and ``sig`` are never set.

    Field order is the serialisation order: ``kind, created_at, tags, content``.
    """

    model_config = ConfigDict(extra="forbid")

    kind: int
    created_at: int
    tags: list[Tag] = Field(default_factory=list)
    content: str = ""

    def tag_values(self, name: str) -> list[Tag]:
        """Return every tag whose name is ``name``, in order."""
        return [tag for tag in self.tags if tag and tag[0] == name]

    def to_json(self, indent: int | None = 2) -> str:
        """Serialise with stable key order; ``indent`` of ``None`` or 0 gives compact output."""
        return self.model_dump_json(indent=indent or None)
