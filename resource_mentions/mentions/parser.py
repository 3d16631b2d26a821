"""Resource mention extraction and formatting."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import parse_qsl
from urllib.parse import urlencode

from .deduplicator import deduplicate_mentions
from .models import MentionProtocol
from .models import ResourceMention

SERVER_PATTERN = r"[A-Za-z0-9_-]+"

# Evaluated independently and in this order; one location may satisfy several
# variants, deduplicate_mentions picks one.
MENTION_PATTERNS: dict[str, re.Pattern[str]] = {
    "with_query": re.compile(rf"@resource://({SERVER_PATTERN})(/[^\s?#]*)?(\?[^\s#]*)?"),
    "with_fragment": re.compile(rf"@resource://({SERVER_PATTERN})(/[^\s#]*)?(#\S*)?"),
    "standard": re.compile(rf"@resource://({SERVER_PATTERN})(/\S*)?"),
    "short": re.compile(rf"@res://({SERVER_PATTERN})(/[^\s?#]*)?(\?[^\s#]*)?(#\S*)?"),
}

_PREFIXES: dict[MentionProtocol, str] = {"resource": "@resource://", "res": "@res://"}


def has_mentions(text: str) -> bool:
    """Check whether text contains anything that looks like a resource mention."""
    return "@resource://" in text or "@res://" in text


def find_mentions(text: str) -> list[ResourceMention]:
    """Run every pattern variant over text.

    Overlapping matches from different variants are all returned; use
    parse_mentions for a clean, non-overlapping list.

    Args:
        text: Text to scan.

    Returns:
        Mentions in variant order, then position order within a variant.
    """
    mentions: list[ResourceMention] = []
    for pattern in MENTION_PATTERNS.values():
        for match in pattern.finditer(text):
            mentions.append(_build_mention(match))
    return mentions


def parse_mentions(text: str) -> list[ResourceMention]:
    """Extract resource mentions from text.

    Finds patterns like:
    - @resource://server/path
    - @resource://server/path?key=value&other=1
    - @resource://server/path#fragment
    - @res://server/path

    Args:
        text: Text to extract mentions from.

    Returns:
        Non-overlapping mentions ordered by start offset.
    """
    return deduplicate_mentions(find_mentions(text))


def _build_mention(match: re.Match[str]) -> ResourceMention:
    """Split a matched span into its components."""
    raw = match.group(0)
    protocol: MentionProtocol = "res" if raw.startswith("@res://") else "resource"
    server = match.group(1)

    # Everything after the server, e.g. "/docs/a.md?x=1#intro"
    rest = raw[len(_PREFIXES[protocol]) + len(server) :]
    rest, _, fragment = rest.partition("#")
    path, _, query_string = rest.partition("?")

    return ResourceMention(
        protocol=protocol,
        server=server,
        path=path or "/",
        query=_parse_query(query_string),
        fragment=fragment or None,
        raw=raw,
        start=match.start(),
        end=match.end(),
    )


def _parse_query(query_string: str) -> dict[str, str] | None:
    """Form-decode a query string; empty means no query at all."""
    if not query_string:
        return None
    query = dict(parse_qsl(query_string, keep_blank_values=True))
    return query or None


def format_mention(
    protocol: MentionProtocol,
    server: str,
    path: str,
    query: Mapping[str, str] | None = None,
    fragment: str | None = None,
) -> str:
    """Produce the canonical textual form of a mention.

    Args:
        protocol: "resource" or "res".
        server: Server name.
        path: Resource path; a leading "/" is added if missing.
        query: Optional query parameters.
        fragment: Optional fragment, without "#".

    Returns:
        Mention string such as ``@resource://docs/guide.md?lang=en#setup``.
    """
    if not path.startswith("/"):
        path = f"/{path}"

    uri = f"@{protocol}://{server}{path}"
    if query:
        uri += f"?{urlencode(query)}"
    if fragment:
        uri += f"#{fragment}"
    return uri


def create_mention(
    server: str,
    path: str,
    *,
    protocol: MentionProtocol = "resource",
    query: Mapping[str, str] | None = None,
    fragment: str | None = None,
) -> str:
    """Build a mention string from its parts."""
    return format_mention(protocol, server, path, query, fragment)
