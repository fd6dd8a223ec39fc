"""Tests for result page rendering helpers."""

from hypothesis import given, settings
from hypothesis import strategies as st

from hub_search.models.search import (
    ListingMetadata,
    MatchMetadata,
    MentorMetadata,
    ResultType,
    SearchResult,
    SearchStats,
)
from hub_search.presentation import (
    EMPTY_STATE_SUGGESTIONS,
    build_tabs,
    highlight,
    is_verified,
    result_route,
    summary_line,
    type_label,
)


def _result(result_type, metadata, result_id="r1"):
    return SearchResult(
        id=result_id,
        type=result_type,
        title="Title",
        description="",
        relevance=0.0,
        metadata=metadata,
    )


class TestHighlight:
    """Tests for highlight()."""

    def test_marks_case_insensitive_matches(self):
        segments = highlight("Mentor for new mentors", "MENTOR")

        assert [(s.text, s.matched) for s in segments] == [
            ("Mentor", True),
            (" for new ", False),
            ("mentor", True),
            ("s", False),
        ]

    def test_empty_query_returns_whole_text(self):
        segments = highlight("Career Mentor", "")

        assert [(s.text, s.matched) for s in segments] == [("Career Mentor", False)]

    def test_regex_metacharacters_are_literal(self):
        segments = highlight("C++ (advanced) mentor", "c++ (")

        assert [(s.text, s.matched) for s in segments] == [
            ("C++ (", True),
            ("advanced) mentor", False),
        ]

    def test_no_match(self):
        segments = highlight("Desk lamp", "housing")

        assert [(s.text, s.matched) for s in segments] == [("Desk lamp", False)]

    @settings(max_examples=200, deadline=None)
    @given(text=st.text(max_size=60), query=st.text(max_size=10))
    def test_segments_rebuild_original_text(self, text, query):
        segments = highlight(text, query)

        assert "".join(s.text for s in segments) == text


class TestRoutes:
    """Click-through routes per result type."""

    def test_mentor_routes_by_user_id(self):
        result = _result(ResultType.MENTOR, MentorMetadata(user_id="u-1"))
        assert result_route(result) == "/mentor/u-1"

    def test_match_routes_to_profile(self):
        result = _result(ResultType.MATCH, MatchMetadata(user_id="u-2"))
        assert result_route(result) == "/match/profile/u-2"

    def test_listing_routes_by_id(self):
        result = _result(ResultType.LISTING, ListingMetadata(), result_id="l-9")
        assert result_route(result) == "/listing/l-9"


class TestBadgesAndTabs:
    """Labels, badges, tabs and summary line."""

    def test_type_label(self):
        assert type_label(ResultType.MENTOR) == "Mentor"
        assert type_label(ResultType.LISTING) == "Listing"

    def test_verified_only_for_verified_mentors(self):
        assert is_verified(_result(ResultType.MENTOR, MentorMetadata(user_id="u", is_verified=True)))
        assert not is_verified(_result(ResultType.MENTOR, MentorMetadata(user_id="u")))
        assert not is_verified(_result(ResultType.MATCH, MatchMetadata(user_id="u")))

    def test_build_tabs(self):
        stats = SearchStats(total=5, mentors=2, matches=1, listings=2)

        tabs = build_tabs(stats, "match")

        assert [(t.value, t.label, t.count, t.active) for t in tabs] == [
            ("all", "All", 5, False),
            ("mentor", "Mentors", 2, False),
            ("match", "People", 1, True),
            ("listing", "Market", 2, False),
        ]

    def test_summary_line_formats_thousands(self):
        stats = SearchStats(total=1234, listings=1234)

        assert summary_line(stats, "lamp") == 'About 1,234 results for "lamp"'

    def test_three_empty_state_suggestions(self):
        assert [s.label for s in EMPTY_STATE_SUGGESTIONS] == [
            "Software Engineer",
            "Mentors",
            "Housing",
        ]
