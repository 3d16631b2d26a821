"""Tests for mention parsing and formatting."""

import pytest

from resource_mentions.exceptions import InvalidMentionError
from resource_mentions.mentions.models import ResourceMention
from resource_mentions.mentions.parser import create_mention
from resource_mentions.mentions.parser import find_mentions
from resource_mentions.mentions.parser import format_mention
from resource_mentions.mentions.parser import has_mentions
from resource_mentions.mentions.parser import parse_mentions


class TestParseMentions:
    """Tests for parse_mentions function."""

    def test_no_mentions(self) -> None:
        """Text without mentions returns empty list."""
        assert parse_mentions("Hello world") == []

    def test_simple_mention(self) -> None:
        """A plain mention is extracted with exact offsets."""
        text = "start @resource://fs/a.txt end"
        mentions = parse_mentions(text)

        assert len(mentions) == 1
        mention = mentions[0]
        assert mention.protocol == "resource"
        assert mention.server == "fs"
        assert mention.path == "/a.txt"
        assert mention.query is None
        assert mention.fragment is None
        assert mention.raw == "@resource://fs/a.txt"
        assert mention.start == 6
        assert mention.end == 26
        assert text[mention.start : mention.end] == mention.raw

    def test_path_defaults_to_root(self) -> None:
        """Omitted path becomes '/'."""
        mentions = parse_mentions("Use @resource://notes please")
        assert len(mentions) == 1
        assert mentions[0].server == "notes"
        assert mentions[0].path == "/"

    def test_short_alias(self) -> None:
        """@res:// is recognised as the short protocol."""
        mentions = parse_mentions("See @res://mem/today")
        assert len(mentions) == 1
        assert mentions[0].protocol == "res"
        assert mentions[0].server == "mem"
        assert mentions[0].path == "/today"

    def test_query_parsed_into_mapping(self) -> None:
        """Query string becomes a string-to-string mapping."""
        mentions = parse_mentions("Load @resource://db/users?id=42&sort=name now")
        assert len(mentions) == 1
        assert mentions[0].path == "/users"
        assert mentions[0].query == {"id": "42", "sort": "name"}
        assert mentions[0].raw == "@resource://db/users?id=42&sort=name"

    def test_query_without_path(self) -> None:
        """Query directly after the server keeps the default path."""
        mentions = parse_mentions("@resource://db?x=1")
        assert len(mentions) == 1
        assert mentions[0].path == "/"
        assert mentions[0].query == {"x": "1"}

    def test_empty_query_is_absent(self) -> None:
        """A bare '?' yields no mapping rather than an empty one."""
        mentions = parse_mentions("@resource://fs/a?")
        assert len(mentions) == 1
        assert mentions[0].query is None

    def test_fragment_without_delimiter(self) -> None:
        """Fragment is stored without the leading '#'."""
        mentions = parse_mentions("Read @resource://docs/guide.md#setup")
        assert len(mentions) == 1
        assert mentions[0].path == "/guide.md"
        assert mentions[0].fragment == "setup"

    def test_query_and_fragment(self) -> None:
        """The most complete match wins when variants overlap."""
        mentions = parse_mentions("Read @resource://docs/guide.md?lang=en#setup today")
        assert len(mentions) == 1
        mention = mentions[0]
        assert mention.raw == "@resource://docs/guide.md?lang=en#setup"
        assert mention.query == {"lang": "en"}
        assert mention.fragment == "setup"

    def test_invalid_server_not_matched(self) -> None:
        """Candidates without a valid server name are simply skipped."""
        assert parse_mentions("@resource:///etc/passwd and @resource://!!/x") == []

    def test_multiple_mentions_ordered(self) -> None:
        """Adjacent mentions are all returned in position order."""
        text = "@resource://a/x @res://b/y and @resource://c/z?k=v"
        mentions = parse_mentions(text)

        assert [m.server for m in mentions] == ["a", "b", "c"]
        for mention in mentions:
            assert text[mention.start : mention.end] == mention.raw

    def test_returns_fresh_records(self) -> None:
        """Each call builds new mention records."""
        first = parse_mentions("@resource://a/x")
        second = parse_mentions("@resource://a/x")
        assert first == second
        assert first[0] is not second[0]


class TestFindMentions:
    """Tests for the raw, per-variant matcher."""

    def test_variants_overlap(self) -> None:
        """A plain mention satisfies every @resource:// variant."""
        raw_matches = find_mentions("@resource://fs/a.txt")
        assert len(raw_matches) == 3
        assert {(m.start, m.end) for m in raw_matches} == {(0, 20)}

    def test_short_alias_single_variant(self) -> None:
        """@res:// mentions come from the short variant only."""
        assert len(find_mentions("@res://fs/a.txt")) == 1


class TestFormatMention:
    """Tests for format_mention and create_mention."""

    def test_plain(self) -> None:
        assert format_mention("resource", "docs", "/guide.md") == "@resource://docs/guide.md"

    def test_adds_leading_slash(self) -> None:
        assert format_mention("resource", "docs", "guide.md") == "@resource://docs/guide.md"

    def test_query_and_fragment(self) -> None:
        formatted = format_mention("res", "mem", "/x", {"q": "hello world"}, "top")
        assert formatted == "@res://mem/x?q=hello+world#top"

    def test_create_mention_defaults(self) -> None:
        assert create_mention("fs", "/a.txt") == "@resource://fs/a.txt"
        assert create_mention("fs", "/a.txt", protocol="res") == "@res://fs/a.txt"

    @pytest.mark.parametrize(
        "formatted",
        [
            "@resource://fs/a.txt",
            "@resource://notes/",
            "@res://mem/today",
            "@resource://db/users?id=42&sort=name",
            "@resource://docs/guide.md#setup",
            "@resource://docs/guide.md?lang=en#setup",
            "@res://mem/x?q=hello+world#top",
        ],
    )
    def test_round_trip(self, formatted: str) -> None:
        """format(parse(format(m))) == format(m)."""
        mentions = parse_mentions(f"before {formatted} after")
        assert len(mentions) == 1
        assert mentions[0].format() == formatted

    def test_round_trip_many(self) -> None:
        """N well-formed mentions parse to N records that each round trip."""
        parts = [
            create_mention("fs", "/a.txt"),
            create_mention("db", "/users", query={"id": "7", "tag": "a&b"}),
            create_mention("docs", "/guide.md", fragment="intro"),
            create_mention("mem", "/x", protocol="res", query={"q": "1"}, fragment="f"),
        ]
        text = " then ".join(parts)
        mentions = parse_mentions(text)

        assert len(mentions) == len(parts)
        assert [m.format() for m in mentions] == parts


class TestHasMentions:
    def test_detects_both_protocols(self) -> None:
        assert has_mentions("see @resource://a/b")
        assert has_mentions("see @res://a/b")
        assert not has_mentions("email me @ home")


class TestResourceMention:
    """Tests for ResourceMention invariants."""

    def test_rejects_empty_span(self) -> None:
        with pytest.raises(InvalidMentionError):
            ResourceMention("resource", "fs", "/", None, None, "", 5, 5)

    def test_rejects_length_mismatch(self) -> None:
        with pytest.raises(InvalidMentionError):
            ResourceMention("resource", "fs", "/", None, None, "@resource://fs", 0, 3)

    def test_rejects_empty_server(self) -> None:
        with pytest.raises(InvalidMentionError):
            ResourceMention("resource", "", "/", None, None, "@resource://", 0, 12)

    def test_key(self) -> None:
        mention = parse_mentions("@resource://fs/a.txt?x=1")[0]
        assert mention.key == "fs:/a.txt"

    def test_query_is_read_only(self) -> None:
        mention = parse_mentions("@resource://fs/a.txt?x=1")[0]
        with pytest.raises(TypeError):
            mention.query["x"] = "2"  # type: ignore[index]
        assert mention.format() == "@resource://fs/a.txt?x=1"

    def test_query_copied_from_caller(self) -> None:
        query = {"x": "1"}
        mention = ResourceMention(
            "resource", "fs", "/a", query, None, "@resource://fs/a?x=1", 0, 20
        )
        query["x"] = "2"
        assert mention.query == {"x": "1"}

    def test_hashable(self) -> None:
        first = parse_mentions("@resource://fs/a.txt?x=1&y=2")[0]
        second = parse_mentions("@resource://fs/a.txt?x=1&y=2")[0]
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
