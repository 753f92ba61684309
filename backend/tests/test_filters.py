"""
NoteKeeper Backend - List Filter Parsing Tests
===============================================

What:  Tests for NoteFilters.from_query and the lenient parsers behind it.
Why:   Query strings arrive untyped; bad values must fall back, never error.
"""

import pytest

from notekeeper.services.filters import (
    NoteFilters,
    parse_count,
    parse_flag,
    parse_non_negative_int,
    parse_tags,
)


class TestParseNonNegativeInt:
    def test_plain_digits(self):
        assert parse_non_negative_int("0042") == 42

    @pytest.mark.parametrize("raw", ["", "1_0", " 1", "1 ", "+1", "-1", "\uff11", "1e3"])
    def test_anything_else_is_rejected(self, raw):
        assert parse_non_negative_int(raw) is None


class TestParseCount:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 10),
            ("5", 5),
            (" 7 ", 10),
            ("1_0", 10),
            ("+3", 10),
            ("\uff13", 10),
            ("0", 0),
            (3, 3),
            ("abc", 10),
            ("2.5", 10),
            ("-1", 10),
            (-4, 10),
            (True, 10),
        ],
    )
    def test_lenient_parsing(self, raw, expected):
        assert parse_count(raw, 10) == expected


class TestParseFlag:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", True])
    def test_truthy(self, raw):
        assert parse_flag(raw) is True

    @pytest.mark.parametrize("raw", ["false", "False", "0", False])
    def test_falsy(self, raw):
        assert parse_flag(raw) is False

    @pytest.mark.parametrize("raw", [None, "", "yes", "maybe"])
    def test_unrecognized_means_unfiltered(self, raw):
        assert parse_flag(raw) is None


class TestParseTags:
    def test_repeated_and_comma_separated(self):
        assert parse_tags(["work", "home,errand", " urgent "]) == [
            "work",
            "home,errand",
            "home",
            "errand",
            "urgent",
        ]

    def test_single_string_kept_whole_and_split(self):
        assert parse_tags("a,b") == ["a,b", "a", "b"]

    def test_comma_tag_matches_stored_comma_tag(self, make_note):
        note = make_note(tags=["a,b"])

        assert NoteFilters.from_query(tags="a,b").matches(note)
        assert not NoteFilters.from_query(tags="a").matches(note)

    def test_blanks_and_duplicates_dropped(self):
        assert parse_tags(["a", " a ", "", "  "]) == ["a"]
        assert parse_tags(["a,,a"]) == ["a,,a", "a"]

    def test_none(self):
        assert parse_tags(None) == []


class TestFromQuery:
    def test_defaults(self):
        filters = NoteFilters.from_query()

        assert filters == NoteFilters()
        assert (filters.limit, filters.offset) == (10, 0)

    def test_empty_search_is_no_search(self):
        assert NoteFilters.from_query(q="").q is None

    def test_custom_default_limit(self):
        assert NoteFilters.from_query(limit="junk", default_limit=25).limit == 25

    def test_full_query(self):
        filters = NoteFilters.from_query(
            q="milk",
            tags=["errand"],
            is_archived="true",
            is_done="false",
            limit="5",
            offset="2",
        )

        assert filters == NoteFilters(
            q="milk", tags=["errand"], is_archived=True, is_done=False, limit=5, offset=2
        )
