"""Tests for SearchService page assembly."""

import pytest

from hub_search.services.search_service import SearchService


@pytest.fixture
def service(aggregator):
    """Search service over the seeded store."""
    return SearchService(aggregator)


class TestSearchPage:
    """Results page payload."""

    @pytest.mark.asyncio
    async def test_results_page(self, service):
        page = await service.search_page("mentor")

        assert page.state == "results"
        assert page.summary == 'About 3 results for "mentor"'
        assert page.stats.total == 3
        assert [card.id for card in page.results] == ["m1", "l1", "m2"]
        assert page.suggestions == []
        assert page.failed_sources == []

    @pytest.mark.asyncio
    async def test_tabs_carry_counts(self, service):
        page = await service.search_page("mentor", "mentor")

        tabs = {tab.value: (tab.label, tab.count, tab.active) for tab in page.tabs}
        assert tabs == {
            "all": ("All", 3, False),
            "mentor": ("Mentors", 2, True),
            "match": ("People", 0, False),
            "listing": ("Market", 1, False),
        }
        assert [card.id for card in page.results] == ["m1", "m2"]

    @pytest.mark.asyncio
    async def test_cards_have_routes_and_highlights(self, service):
        page = await service.search_page("mentor")
        cards = {card.id: card for card in page.results}

        mentor = cards["m1"]
        assert mentor.route == "/mentor/u-m1"
        assert mentor.type_label == "Mentor"
        assert mentor.is_verified is True
        assert mentor.price == 50.0
        assert mentor.city == "Addis Ababa"
        assert [(s.text, s.matched) for s in mentor.title_segments] == [
            ("Career ", False),
            ("Mentor", True),
        ]

        listing = cards["l1"]
        assert listing.route == "/listing/l1"
        assert listing.is_verified is False
        assert listing.metadata["category"] == "services"

    @pytest.mark.asyncio
    async def test_match_card_route(self, service):
        page = await service.search_page("hiking")

        assert page.results[0].route == "/match/profile/u-p1"

    @pytest.mark.asyncio
    async def test_card_carries_result_dict(self, aggregator):
        outcome = await aggregator.search("housing")
        result = outcome.results[0]

        card = SearchService.build_card(result, "housing")

        assert card.model_dump(include=set(result.to_dict())) == result.to_dict()
        assert card.price == 1200.0
        assert card.tags == ["housing"]

    @pytest.mark.asyncio
    async def test_padded_query_reaches_page(self, service):
        page = await service.search_page(" bekele")

        assert page.query == " bekele"
        assert [card.id for card in page.results] == ["m2"]
        assert [(s.text, s.matched) for s in page.results[0].title_segments] == [
            ("Selam", False),
            (" Bekele", True),
        ]

    @pytest.mark.asyncio
    async def test_empty_page_has_three_suggestions(self, service):
        page = await service.search_page("xyz-nonexistent-term")

        assert page.state == "empty"
        assert page.results == []
        assert [s.label for s in page.suggestions] == ["Software Engineer", "Mentors", "Housing"]
        assert [s.query for s in page.suggestions] == ["software engineer", "mentor", "housing"]

    @pytest.mark.asyncio
    async def test_blank_query_page(self, store, service):
        page = await service.search_page("  ")

        assert page.state == "empty_query"
        assert page.summary is None
        assert page.suggestions == []
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_degraded_page_lists_failed_sources(self, store, service):
        store.fail_collection("mentors")

        page = await service.search_page("mentor")

        assert page.state == "degraded"
        assert page.failed_sources == ["mentor"]
        assert [card.id for card in page.results] == ["l1"]
        assert page.stats.mentors == 0
