"""Unit tests for the fallback candidate pool."""

from domain.entities.session import SessionFilters
from infrastructure.places.fallback import FALLBACK_POOL, filter_pool, restricts_types


class TestFallbackPool:
    def test_pool_has_fifteen_unique_places(self):
        ids = [c.id for c in FALLBACK_POOL]

        assert len(ids) == 15
        assert len(set(ids)) == 15
        assert ids[0] == "place_1"
        assert ids[-1] == "place_15"

    def test_entries_have_distinct_phone_numbers(self):
        phones = {c.id: c.phone_number for c in FALLBACK_POOL}

        assert phones["place_1"] == "+1-555-0123"
        assert phones["place_15"] == "+1-555-0486"
        assert len(set(phones.values())) == len(FALLBACK_POOL)


class TestFilterPool:
    def test_default_filters_return_whole_pool_in_order(self):
        assert filter_pool(SessionFilters()) == list(FALLBACK_POOL)

    def test_keyword_matches_name_case_insensitively(self):
        result = filter_pool(SessionFilters(keyword="PIZZA"))

        assert [c.name for c in result] == ["Pizza Palace"]

    def test_keyword_matches_tags(self):
        result = filter_pool(SessionFilters(keyword="japanese"))

        assert [c.name for c in result] == ["Sushi Master", "Ramen Shop"]

    def test_price_level_is_exact(self):
        result = filter_pool(SessionFilters(price_level=4))

        assert [c.name for c in result] == ["Steak House"]

    def test_restricting_tags_keep_intersecting_places(self):
        result = filter_pool(SessionFilters(types=("thai", "vietnamese")))

        assert [c.name for c in result] == ["Pho Express", "Thai Spice"]

    def test_restaurant_tag_does_not_restrict(self):
        result = filter_pool(SessionFilters(types=("restaurant", "thai")))

        assert len(result) == 15

    def test_unmatched_keyword_returns_empty(self):
        assert filter_pool(SessionFilters(keyword="xyzzy")) == []

    def test_filters_combine(self):
        result = filter_pool(SessionFilters(keyword="american", price_level=3))

        assert [c.name for c in result] == ["BBQ Pit"]


def test_restricts_types():
    assert restricts_types(("thai",)) is True
    assert restricts_types(("restaurant",)) is False
    assert restricts_types(()) is False
