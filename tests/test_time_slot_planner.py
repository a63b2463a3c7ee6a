from modules.planning.time_slot_planner import build_slots, resolve_interest, search_kinds
from schemas.itinerary import Audience, Category


def times(slots):
    return [s.time for s in slots]


def test_romantic_couple_day():
    slots = build_slots(Audience.COUPLE, ["romantic"])
    assert times(slots) == ["08:00", "11:00", "13:00", "16:00", "20:00", "21:30"]
    assert [s.category for s in slots] == [
        Category.CAFE, Category.PARK, Category.RESTAURANT,
        Category.ATTRACTION, Category.RESTAURANT, Category.BAR,
    ]
    assert slots[0].label == "Romantic Breakfast"
    assert slots[1].label == "Romantic Walk"
    assert slots[4].label == "Romantic Dinner"


def test_meal_labels_per_audience():
    assert build_slots(Audience.KIDS, [])[0].label == "Family Breakfast"
    assert build_slots(Audience.HIM, [])[0].label == "Energizing Breakfast"
    assert build_slots(Audience.GENERIC, [])[0].label == "Morning Start"


def test_empty_interests_use_adult_defaults():
    slots = build_slots(Audience.GENERIC, [])
    assert times(slots) == ["08:00", "09:30", "11:00", "13:00", "14:30", "16:00", "18:00", "20:00"]


def test_unknown_interest_uses_defaults():
    assert times(build_slots(Audience.HER, ["underwater_basket_weaving"])) == \
        times(build_slots(Audience.HER, []))


def test_kids_never_get_nightlife_slots():
    slots = build_slots(Audience.KIDS, ["nightlife", "music"])
    assert all(s.category is not Category.BAR for s in slots)
    assert "jazz_club" not in [s.kind for s in slots]


def test_kids_with_only_nightlife_fall_back_to_kids_defaults():
    slots = build_slots(Audience.KIDS, ["nightlife"])
    assert times(slots) == ["08:00", "09:30", "11:00", "13:00", "14:30", "16:00", "20:00"]
    assert slots[1].kind == "playground"


def test_time_collisions_first_interest_wins():
    slots = build_slots(Audience.HIM, ["culture", "art"])
    by_time = {s.time: s for s in slots}
    assert len(by_time) == len(slots)
    assert by_time["09:30"].kind == "museum"
    assert by_time["11:00"].kind == "gallery"


def test_slots_sorted_and_unique():
    slots = build_slots(Audience.COUPLE, ["food", "nightlife", "history", "photography"])
    assert times(slots) == sorted(times(slots))
    assert len(set(times(slots))) == len(slots)


def test_aliases_resolved():
    assert resolve_interest("Cultural") == "culture"
    assert times(build_slots(Audience.HIM, ["cultural"])) == times(build_slots(Audience.HIM, ["culture"]))


def test_deterministic():
    assert build_slots(Audience.COUPLE, ["art", "food"]) == build_slots(Audience.COUPLE, ["art", "food"])


def test_search_kinds_distinct_pairs():
    pairs = search_kinds(build_slots(Audience.COUPLE, ["romantic"]))
    assert pairs == [
        (Category.CAFE, "cafe"),
        (Category.PARK, "park"),
        (Category.RESTAURANT, "restaurant"),
        (Category.ATTRACTION, "scenic_view"),
        (Category.BAR, "rooftop_bar"),
    ]
