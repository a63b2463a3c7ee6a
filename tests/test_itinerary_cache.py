from dataclasses import replace

from modules.memory.itinerary_cache import ItineraryCache
from schemas.itinerary import ItineraryDocument


def test_put_then_get(couple_params):
    cache = ItineraryCache()
    doc = ItineraryDocument(title="Day in Barcelona")
    assert cache.get(couple_params) is None
    cache.put(couple_params, doc)
    assert cache.get(couple_params) is doc
    assert (cache.hits, cache.misses) == (1, 1)
    assert len(cache) == 1


def test_key_ignores_interest_order_and_city_case(couple_params):
    cache = ItineraryCache()
    params = replace(couple_params, interests=("romantic", "art"))
    cache.put(params, ItineraryDocument(title="x"))
    same = replace(couple_params, city=" barcelona ", interests=("art", "romantic"))
    assert cache.get(same) is not None


def test_different_budget_misses(couple_params):
    cache = ItineraryCache()
    cache.put(couple_params, ItineraryDocument())
    assert cache.get(replace(couple_params, budget=90)) is None


def test_least_recently_used_entry_evicted(couple_params):
    cache = ItineraryCache(max_entries=2)
    a = replace(couple_params, budget=50)
    b = replace(couple_params, budget=60)
    c = replace(couple_params, budget=70)
    cache.put(a, ItineraryDocument(title="a"))
    cache.put(b, ItineraryDocument(title="b"))
    cache.get(a)
    cache.put(c, ItineraryDocument(title="c"))
    assert len(cache) == 2
    assert cache.get(b) is None
    assert cache.get(a).title == "a"


def test_clear(couple_params):
    cache = ItineraryCache()
    cache.put(couple_params, ItineraryDocument())
    cache.clear()
    assert len(cache) == 0
