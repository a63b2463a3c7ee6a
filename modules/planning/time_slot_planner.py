"""
modules/planning/time_slot_planner.py
--------------------------------------
Builds the ordered list of TimeSlots for one day.

Pipeline:
  1. Mandatory meal slots (08:00 cafe, 13:00 restaurant, 20:00 restaurant),
     labelled per audience.
  2. Interest slots from _INTEREST_SLOTS, walked in the caller's interest order.
  3. No interest slot produced → audience default set.
  4. Kids → nightlife slots dropped.
  5. Stable sort by time, then drop repeated times (first occurrence wins,
     so meals always survive a collision).

Deterministic and side-effect-free: same inputs → same slot list.
"""

from __future__ import annotations
from typing import Iterable, NamedTuple

from modules.input.category_classifier import classify_kind, normalize_tag
from schemas.itinerary import Audience, Category, TimeSlot


class _SlotDef(NamedTuple):
    time: str
    kind: str
    label: str


# ── Meals ─────────────────────────────────────────────────────────────────────

_MEAL_SLOTS: list[_SlotDef] = [
    _SlotDef("08:00", "cafe",       "Morning Start"),
    _SlotDef("13:00", "restaurant", "Lunch Break"),
    _SlotDef("20:00", "restaurant", "Dinner"),
]

_MEAL_LABELS: dict[Audience, dict[str, str]] = {
    Audience.KIDS: {
        "Morning Start": "Family Breakfast",
        "Lunch Break":   "Lunch Time",
        "Dinner":        "Family Dinner",
    },
    Audience.COUPLE: {
        "Morning Start": "Romantic Breakfast",
        "Lunch Break":   "Intimate Lunch",
        "Dinner":        "Romantic Dinner",
    },
    Audience.HER: {
        "Morning Start": "Morning Coffee",
        "Lunch Break":   "Elegant Lunch",
        "Dinner":        "Fine Dining",
    },
    Audience.HIM: {
        "Morning Start": "Energizing Breakfast",
        "Lunch Break":   "Hearty Lunch",
        "Dinner":        "Great Dinner",
    },
}


# ── Interests ─────────────────────────────────────────────────────────────────

_INTEREST_SLOTS: dict[str, list[_SlotDef]] = {
    "adventure": [
        _SlotDef("09:30", "outdoor_activity", "Adventure Morning"),
        _SlotDef("14:30", "sports",           "Active Afternoon"),
        _SlotDef("16:30", "adventure_park",   "Extreme Fun"),
    ],
    "culture": [
        _SlotDef("09:30", "museum",          "Cultural Morning"),
        _SlotDef("11:00", "gallery",         "Art Experience"),
        _SlotDef("16:00", "cultural_center", "Cultural Venue"),
    ],
    "food": [
        _SlotDef("09:30", "food_market",   "Local Market"),
        _SlotDef("11:00", "cafe",          "Coffee Culture"),
        _SlotDef("16:00", "local_cuisine", "Local Specialties"),
    ],
    "nature": [
        _SlotDef("09:30", "park",           "Nature Morning"),
        _SlotDef("14:30", "garden",         "Garden Walk"),
        _SlotDef("17:00", "nature_reserve", "Nature Experience"),
    ],
    "art": [
        _SlotDef("09:30", "gallery",    "Art Morning"),
        _SlotDef("11:00", "art_center", "Creative Space"),
        _SlotDef("16:00", "museum",     "Art Museum"),
    ],
    "music": [
        _SlotDef("09:30", "music_store",  "Music Shopping"),
        _SlotDef("16:00", "concert_hall", "Music Venue"),
        _SlotDef("21:30", "jazz_club",    "Evening Music"),
    ],
    "romantic": [
        _SlotDef("11:00", "park",        "Romantic Walk"),
        _SlotDef("16:00", "scenic_view", "Beautiful Views"),
        _SlotDef("21:30", "rooftop_bar", "Romantic Drinks"),
    ],
    "history": [
        _SlotDef("09:30", "historical_site", "Historical Morning"),
        _SlotDef("11:00", "museum",          "History Museum"),
        _SlotDef("16:00", "monument",        "Historical Monument"),
    ],
    "shopping": [
        _SlotDef("09:30", "local_market",    "Morning Market"),
        _SlotDef("14:30", "shopping_center", "Shopping Time"),
        _SlotDef("16:30", "boutique",        "Unique Finds"),
    ],
    "nightlife": [
        _SlotDef("16:00", "bar",          "Pre-dinner Drinks"),
        _SlotDef("21:30", "club",         "Night Entertainment"),
        _SlotDef("23:00", "cocktail_bar", "Late Night"),
    ],
    "relaxation": [
        _SlotDef("09:30", "spa",             "Morning Spa"),
        _SlotDef("14:30", "wellness_center", "Wellness Time"),
        _SlotDef("17:00", "yoga_studio",     "Relaxation"),
    ],
    "wellness": [
        _SlotDef("09:30", "wellness_center", "Wellness Morning"),
        _SlotDef("14:30", "spa",             "Spa Treatment"),
        _SlotDef("17:00", "fitness_center",  "Fitness Session"),
    ],
    "architecture": [
        _SlotDef("09:30", "cathedral",           "Architectural Morning"),
        _SlotDef("11:00", "historical_building", "Historic Architecture"),
        _SlotDef("16:00", "landmark",            "Iconic Buildings"),
    ],
    "photography": [
        _SlotDef("09:30", "scenic_view", "Photo Morning"),
        _SlotDef("14:30", "landmark",    "Iconic Shots"),
        _SlotDef("17:00", "street_art",  "Urban Photography"),
    ],
    "local": [
        _SlotDef("09:30", "local_market",           "Local Experience"),
        _SlotDef("11:00", "traditional_restaurant", "Local Cuisine"),
        _SlotDef("16:00", "cultural_center",        "Local Culture"),
    ],
    "sports": [
        _SlotDef("09:30", "sports_center",  "Sports Morning"),
        _SlotDef("14:30", "stadium",        "Sports Venue"),
        _SlotDef("17:00", "fitness_center", "Active Time"),
    ],
    "outdoor": [
        _SlotDef("09:30", "park",             "Outdoor Morning"),
        _SlotDef("14:30", "hiking",           "Nature Hike"),
        _SlotDef("17:00", "outdoor_activity", "Outdoor Fun"),
    ],
    "indoor": [
        _SlotDef("09:30", "museum",          "Indoor Morning"),
        _SlotDef("14:30", "gallery",         "Art Gallery"),
        _SlotDef("17:00", "shopping_center", "Indoor Shopping"),
    ],
    # kids
    "swimming": [
        _SlotDef("09:30", "pool",           "Swimming Time"),
        _SlotDef("14:30", "water_park",     "Water Fun"),
        _SlotDef("16:30", "aquatic_center", "More Swimming"),
    ],
    "zoo": [
        _SlotDef("09:30", "zoo",         "Zoo Visit"),
        _SlotDef("14:30", "aquarium",    "Aquarium Tour"),
        _SlotDef("16:30", "animal_park", "Animal Fun"),
    ],
    "playground": [
        _SlotDef("09:30", "playground",           "Playground Fun"),
        _SlotDef("14:30", "park",                 "Park Play"),
        _SlotDef("16:30", "family_entertainment", "Family Fun"),
    ],
    "amusement": [
        _SlotDef("09:30", "amusement_park", "Amusement Park"),
        _SlotDef("14:30", "theme_park",     "Theme Park Fun"),
        _SlotDef("16:30", "entertainment",  "Entertainment"),
    ],
    "science": [
        _SlotDef("09:30", "science_center",     "Science Fun"),
        _SlotDef("14:30", "planetarium",        "Space Adventure"),
        _SlotDef("16:30", "interactive_museum", "Hands-on Learning"),
    ],
    "educational": [
        _SlotDef("09:30", "museum",         "Learning Time"),
        _SlotDef("14:30", "science_center", "Educational Fun"),
        _SlotDef("16:30", "library",        "Discovery Time"),
    ],
}

INTEREST_ALIASES: dict[str, str] = {
    "cultural":      "culture",
    "arts":          "art",
    "foodie":        "food",
    "gastronomy":    "food",
    "romance":       "romantic",
    "historical":    "history",
    "night":         "nightlife",
    "relax":         "relaxation",
    "spa":           "wellness",
    "photo":         "photography",
    "sport":         "sports",
    "animals":       "zoo",
    "education":     "educational",
    "amusement_park": "amusement",
}


# ── Audience defaults ─────────────────────────────────────────────────────────

_DEFAULT_SLOTS: dict[Audience, list[_SlotDef]] = {
    Audience.KIDS: [
        _SlotDef("09:30", "playground", "Morning Play"),
        _SlotDef("11:00", "museum",     "Kids Museum"),
        _SlotDef("14:30", "park",       "Outdoor Fun"),
        _SlotDef("16:00", "amusement",  "Entertainment"),
    ],
    Audience.COUPLE: [
        _SlotDef("09:30", "park",        "Romantic Walk"),
        _SlotDef("11:00", "cafe",        "Cozy Coffee"),
        _SlotDef("14:30", "museum",      "Cultural Experience"),
        _SlotDef("16:00", "scenic_view", "Beautiful Views"),
        _SlotDef("21:30", "bar",         "Romantic Drinks"),
    ],
}

_ADULT_DEFAULT_SLOTS: list[_SlotDef] = [
    _SlotDef("09:30", "attraction", "Morning Activity"),
    _SlotDef("11:00", "museum",     "Cultural Experience"),
    _SlotDef("14:30", "park",       "Afternoon Exploration"),
    _SlotDef("16:00", "attraction", "Sightseeing"),
    _SlotDef("18:00", "park",       "Evening Walk"),
]

_NIGHTLIFE_KINDS = frozenset({
    "bar", "club", "night_club", "nightclub", "cocktail_bar", "rooftop_bar",
    "jazz_club", "wine_bar", "pub", "casino",
})


# ── Public API ────────────────────────────────────────────────────────────────

def resolve_interest(interest: str) -> str:
    tag = normalize_tag(interest)
    return INTEREST_ALIASES.get(tag, tag)


def meal_label(base_label: str, audience: Audience) -> str:
    return _MEAL_LABELS.get(audience, {}).get(base_label, base_label)


def build_slots(audience: Audience, interests: Iterable[str]) -> list[TimeSlot]:
    """
    Produce the day's slot list.

    Args:
        audience:  Who the day is for; drives meal labels, defaults and kids filtering.
        interests: Caller-ordered interest tags (aliases resolved here).

    Returns:
        TimeSlots sorted by time, unique by time.
    """
    meals = [
        _to_slot(_SlotDef(s.time, s.kind, meal_label(s.label, audience)))
        for s in _MEAL_SLOTS
    ]

    activities: list[TimeSlot] = []
    for interest in interests:
        for entry in _INTEREST_SLOTS.get(resolve_interest(interest), []):
            activities.append(_to_slot(entry))

    if audience is Audience.KIDS:
        activities = [s for s in activities if not _is_nightlife(s)]

    if not activities:
        defaults = _DEFAULT_SLOTS.get(audience, _ADULT_DEFAULT_SLOTS)
        activities = [_to_slot(entry) for entry in defaults]
        if audience is Audience.KIDS:
            activities = [s for s in activities if not _is_nightlife(s)]

    # sorted() is stable: on equal times meals (listed first) come first
    ordered = sorted(meals + activities, key=lambda s: s.time)

    slots: list[TimeSlot] = []
    seen_times: set[str] = set()
    for slot in ordered:
        if slot.time in seen_times:
            continue
        seen_times.add(slot.time)
        slots.append(slot)
    return slots


def search_kinds(slots: Iterable[TimeSlot]) -> list[tuple[Category, str]]:
    """Distinct (category, kind) pairs, first-seen order; drives place search."""
    pairs: list[tuple[Category, str]] = []
    for slot in slots:
        pair = (slot.category, slot.kind or slot.category.value)
        if pair not in pairs:
            pairs.append(pair)
    return pairs


def _to_slot(entry: _SlotDef) -> TimeSlot:
    return TimeSlot(time=entry.time, category=classify_kind(entry.kind), label=entry.label, kind=entry.kind)


def _is_nightlife(slot: TimeSlot) -> bool:
    return slot.category is Category.BAR or slot.kind in _NIGHTLIFE_KINDS
