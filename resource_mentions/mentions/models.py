"""Data models for resource mention handling."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import Field

from resource_mentions.exceptions import InvalidMentionError
from resource_mentions.exceptions import ResolutionError

MentionProtocol = Literal["resource", "res"]


@dataclass(frozen=True)
class ResourceMention:
    """A resource reference found in text.

    Offsets are string indices into the text that was parsed, so
    ``text[start:end] == raw``. The query is stored as a read-only copy,
    which keeps mentions hashable.
    """

    protocol: MentionProtocol
    server: str
    path: str
    query: Mapping[str, str] | None
    fragment: str | None
    raw: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if not self.server:
            raise InvalidMentionError("Mention server must not be empty")
        if self.start < 0 or self.start >= self.end:
            raise InvalidMentionError(
                f"Mention offsets out of order: start={self.start}, end={self.end}"
            )
        if self.end - self.start != len(self.raw):
            raise InvalidMentionError(
                f"Mention span {self.start}:{self.end} does not match raw length {len(self.raw)}"
            )
        if self.query is not None:
            object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def __hash__(self) -> int:
        query = tuple(sorted(self.query.items())) if self.query is not None else None
        return hash(
            (self.protocol, self.server, self.path, query, self.fragment, self.start, self.end)
        )

    @property
    def key(self) -> str:
        """Key used in resolve_all values: ``server:path``."""
        return f"{self.server}:{self.path}"

    def format(self) -> str:
        """Canonical textual form of this mention."""
        from .parser import format_mention

        return format_mention(self.protocol, self.server, self.path, self.query, self.fragment)


class ResolvedResource(BaseModel):
    """Content a resolver produced for a mention."""

    content: str = Field(description="Resolved text substituted for the mention")
    mime_type: str | None = Field(default=None, description="MIME type of the content")
    uri: str = Field(description="Canonical URI of the resolved resource")
    metadata: dict[str, Any] | None = Field(default=None, description="Resolver-specific extras")


@dataclass
class MentionFailure:
    """A mention that resolve_all left verbatim, with the reason."""

    mention: ResourceMention
    error: ResolutionError


@dataclass
class ResolveAllResult:
    """Outcome of resolving every mention in a text."""

    text: str
    values: dict[str, ResolvedResource] = field(default_factory=dict)
    errors: list[MentionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every mention resolved."""
        return not self.errors


@dataclass
class ResourceInfo:
    """Description of a mention's target without resolving it."""

    server: str
    path: str
    full_path: str
    has_resolver: bool


@dataclass
class CacheStats:
    """Snapshot of a resolver's cache."""

    size: int
    keys: list[str]
    ttl: float
    enabled: bool
