"""Overlap removal for resource mentions found by several pattern variants."""

from __future__ import annotations

from collections.abc import Iterable

from .models import ResourceMention


def deduplicate_mentions(mentions: Iterable[ResourceMention]) -> list[ResourceMention]:
    """Collapse overlapping matches into one non-overlapping list.

    Mentions are ordered by start offset, and a mention is kept only if it
    starts at or after the end of the last kept one. When several matches
    start at the same offset the longest wins, so a query- or fragment-bearing
    match is not dropped in favour of a plainer prefix of itself. Matches with
    identical spans keep their input order (the order pattern variants ran in).

    Reverse-order substitution relies on this output never overlapping.

    Args:
        mentions: Matches from any number of pattern variants over one text.

    Returns:
        Mentions sorted by start offset with zero pairwise overlaps.
    """
    ordered = sorted(mentions, key=lambda m: (m.start, -(m.end - m.start)))

    kept: list[ResourceMention] = []
    for mention in ordered:
        if not kept or mention.start >= kept[-1].end:
            kept.append(mention)
    return kept
