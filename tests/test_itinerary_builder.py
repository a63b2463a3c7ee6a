import asyncio

import pytest

from conftest import FakeLLM, FakeRepository, make_place
from modules.input.filter_intake import parse_filter_params
from modules.memory.itinerary_cache import ItineraryCache
from modules.optimization.budget_optimizer import optimize
from modules.optimization.place_selector import select_all
from modules.planning.itinerary_builder import ItineraryBuilder
from modules.planning.time_slot_planner import build_slots
from modules.tool_usage.text_tool import TextGenerator, fallback_subtitle, fallback_title
from schemas.itinerary import Audience, Category
from schemas.result import CollaboratorUnavailable


# Helpers
def golden_params():
    return parse_filter_params({
        "city": "Barcelona",
        "audience": "couple",
        "interests": ["romantic"],
        "date": "2025-09-19",
        "budget": 150,
    })


def make_builder(repository, llm=None, **kwargs):
    kwargs.setdefault("strict", False)
    return ItineraryBuilder(repository=repository, text_generator=TextGenerator(llm), **kwargs)


def build(builder, params):
    return asyncio.run(builder.build_itinerary(params))


def test_golden_romantic_couple_day(golden_pool):
    doc = build(make_builder(FakeRepository(golden_pool)), golden_params())

    assert [i.time for i in doc.items] == ["08:00", "11:00", "13:00", "16:00", "20:00", "21:30"]
    assert [i.place_id for i in doc.items] == [
        "cafe_1", "park_1", "restaurant_1", None, None, "bar_1",
    ]
    assert doc.items[3].title == "Free Time"
    assert doc.items[4].is_placeholder

    assert doc.budget.total_cost == 120
    assert doc.budget.within_budget
    assert doc.budget.lower_bound == pytest.approx(105)
    assert doc.budget.upper_bound == pytest.approx(195)


def test_every_place_used_at_most_once(golden_pool):
    extra = golden_pool + [make_place("cafe_2", Category.CAFE, cost=5, rating=3.0)]
    doc = build(make_builder(FakeRepository(extra)), golden_params())
    ids = [i.place_id for i in doc.items if i.place_id]
    assert len(ids) == len(set(ids))
    times = [i.time for i in doc.items]
    assert times == sorted(times)


def test_texts_fall_back_to_templates_without_llm(golden_pool):
    params = golden_params()
    doc = build(make_builder(FakeRepository(golden_pool)), params)
    assert doc.title == fallback_title(params) == "Romantic escapes in Barcelona"
    assert doc.subtitle == fallback_subtitle(params)
    assert doc.weather.forecast.startswith("Warm and sunny")
    assert "Cafe 1" in doc.items[0].description
    assert doc.items[0].tips


def test_llm_text_is_used(golden_pool):
    llm = FakeLLM(reply="A day to remember")
    doc = build(make_builder(FakeRepository(golden_pool), llm), golden_params())
    assert doc.title == "A day to remember"
    assert doc.weather.forecast == "A day to remember"
    assert doc.items[0].description == "A day to remember"
    # placeholders never hit the LLM
    assert doc.items[3].description != "A day to remember"
    # title, subtitle, weather + description and tips for 4 places
    assert len(llm.prompts) == 3 + 2 * 4


def test_every_collaborator_down_still_builds(golden_pool):
    params = golden_params()
    repo = FakeRepository(golden_pool, fail=True)
    doc = build(make_builder(repo, FakeLLM(fail=True)), params)

    assert all(i.is_placeholder for i in doc.items)
    assert doc.budget.total_cost == 0
    assert not doc.budget.within_budget
    assert doc.title == fallback_title(params)
    assert doc.weather.clothing
    assert doc.meta["degraded"] is True


def test_strict_mode_raises(golden_pool):
    builder = make_builder(FakeRepository(golden_pool, fail=True), strict=True)
    with pytest.raises(CollaboratorUnavailable) as info:
        build(builder, golden_params())
    assert info.value.error.source == "places"


def test_strict_mode_without_llm_uses_templates(golden_pool):
    params = golden_params()
    doc = build(make_builder(FakeRepository(golden_pool), strict=True), params)
    assert doc.budget.total_cost == 120
    assert doc.title == fallback_title(params)
    assert doc.meta["degraded"] is False


def test_strict_mode_with_healthy_collaborators(golden_pool):
    builder = make_builder(FakeRepository(golden_pool), FakeLLM(), strict=True)
    doc = build(builder, golden_params())
    assert doc.budget.total_cost == 120


def test_kids_never_get_a_bar(golden_pool):
    params = parse_filter_params({
        "city": "Barcelona", "audience": "kids", "interests": ["nightlife"],
        "date": "2025-09-19", "budget": 200,
    })
    assert params.audience is Audience.KIDS
    doc = build(make_builder(FakeRepository(golden_pool)), params)
    assert "bar_1" not in [i.place_id for i in doc.items]
    assert all(i.category != "bar" for i in doc.items)


def test_search_covers_slot_kinds_and_base_categories(golden_pool):
    repo = FakeRepository(golden_pool)
    build(make_builder(repo), golden_params())
    kinds = [kind for _, _, kind in repo.calls]
    assert kinds == ["cafe", "park", "restaurant", "scenic_view", "rooftop_bar"]
    assert all(city == "Barcelona" for city, _, _ in repo.calls)


def test_meta_reports_source(golden_pool):
    doc = build(make_builder(FakeRepository(golden_pool)), golden_params())
    assert doc.meta["data_source"] == "fake"
    assert doc.meta["cache_hit"] is False
    assert doc.meta["party_size"] == 2


def test_cache_hit_skips_the_pipeline(golden_pool):
    repo = FakeRepository(golden_pool)
    builder = make_builder(repo, cache=ItineraryCache())
    first = build(builder, golden_params())
    calls = len(repo.calls)

    second = build(builder, golden_params())
    assert len(repo.calls) == calls
    assert second.meta["cache_hit"] is True
    assert second.items == first.items
    assert first.meta["cache_hit"] is False


def test_tight_budget_drops_optional_stops(golden_pool):
    params = parse_filter_params({
        "city": "Barcelona", "audience": "couple", "interests": ["romantic"],
        "date": "2025-09-19", "budget": 60,
    })
    doc = build(make_builder(FakeRepository(golden_pool)), params)
    # restaurant 60 uses most of the 78 ceiling; cafe (20) and bar (40) no longer fit
    ids = [i.place_id for i in doc.items]
    assert "bar_1" not in ids
    assert "cafe_1" not in ids
    assert ids.count("restaurant_1") == 1
    assert doc.budget.total_cost == 60


def test_preview(golden_pool):
    params = golden_params()
    repo = FakeRepository(golden_pool)
    preview = asyncio.run(make_builder(repo).build_preview(params))
    assert preview == {"title": fallback_title(params), "subtitle": fallback_subtitle(params)}
    assert repo.calls == []


def test_all_candidates_reach_the_optimizer():
    params = parse_filter_params({
        "city": "Barcelona", "audience": "him", "interests": [],
        "date": "2025-09-19", "budget": 200,
    })
    pool = [make_place("restaurant_1", Category.RESTAURANT)] + [
        make_place(f"cafe_{n}", Category.CAFE) for n in range(3)
    ]
    repo = FakeRepository(pool)
    doc = build(make_builder(repo), params)

    searched = []
    for _, category, _ in repo.calls:
        searched += [p for p in pool if p.category is category and p not in searched]
    slots = build_slots(params.audience, params.interests)
    expected = [i.place.id if i.place else None
                for i in select_all(slots, optimize(searched, params.budget, params.party_size))]

    assert [i.place_id for i in doc.items] == expected
    assert expected == ["cafe_0", "cafe_1", "cafe_2", "restaurant_1", None, None, None, None]


def test_degraded_build_is_not_cached(golden_pool):
    repo = FakeRepository(golden_pool, fail=True)
    builder = make_builder(repo, cache=ItineraryCache())
    first = build(builder, golden_params())
    assert first.meta["degraded"] is True
    assert all(i.is_placeholder for i in first.items)

    repo.fail = False
    second = build(builder, golden_params())
    assert second.meta["cache_hit"] is False
    assert second.meta["degraded"] is False
    assert second.budget.total_cost == 120

    third = build(builder, golden_params())
    assert third.meta["cache_hit"] is True
