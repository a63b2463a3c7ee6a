"""
modules/input/category_classifier.py
-------------------------------------
Maps source-specific type tags (Google Places `types`, seed-data categories,
slot activity kinds) to exactly one internal Category.

Algorithm:
  1. Normalize tags: lower-case, spaces and dashes → underscores.
  2. Walk _CATEGORY_KEYWORDS in priority order; the first category whose
     keyword set intersects the tags wins.
  3. No match → fallback_hint if it names a valid Category, else OTHER.

Unmatched input is not an error: classify() never raises.
"""

from __future__ import annotations
from typing import Iterable, Optional

from schemas.itinerary import Category


# Priority-ordered: a place tagged ["restaurant", "bar"] is a restaurant.
_CATEGORY_KEYWORDS: list[tuple[Category, frozenset[str]]] = [
    (Category.RESTAURANT, frozenset({
        "restaurant", "meal_takeaway", "meal_delivery",
        "traditional_restaurant", "local_cuisine", "bistro", "trattoria",
        "tapas", "food_court", "street_food",
    })),
    (Category.CAFE, frozenset({
        "cafe", "coffee", "coffee_shop", "bakery", "tea_house", "patisserie",
        "breakfast", "brunch",
    })),
    (Category.MUSEUM, frozenset({
        "museum", "art_gallery", "gallery", "art_center", "cultural_center",
        "science_center", "interactive_museum", "planetarium", "library",
        "exhibition",
    })),
    (Category.PARK, frozenset({
        "park", "garden", "nature_reserve", "playground", "beach",
        "hiking", "outdoor_activity", "botanical_garden", "campground",
    })),
    (Category.BAR, frozenset({
        "bar", "night_club", "nightclub", "club", "pub", "rooftop_bar",
        "cocktail_bar", "jazz_club", "wine_bar", "casino", "liquor_store",
    })),
    (Category.SHOPPING, frozenset({
        "shopping", "shopping_mall", "shopping_center", "store",
        "clothing_store", "boutique", "market", "local_market", "food_market",
        "department_store", "book_store", "music_store",
    })),
    (Category.ATTRACTION, frozenset({
        "tourist_attraction", "attraction", "point_of_interest", "landmark",
        "scenic_view", "viewpoint", "historical_site", "historical_building",
        "monument", "cathedral", "church", "place_of_worship",
        "amusement_park", "theme_park", "amusement", "zoo", "aquarium",
        "animal_park", "water_park", "stadium", "concert_hall", "theater",
        "spa", "wellness_center", "sports_center", "sports", "fitness_center",
        "yoga_studio", "gym", "pool", "aquatic_center", "street_art",
        "family_entertainment", "entertainment", "adventure_park",
    })),
]


def normalize_tag(tag: str) -> str:
    return tag.strip().lower().replace("-", "_").replace(" ", "_")


def classify(raw_tags: Iterable[str] | None, fallback_hint: Optional[str] = None) -> Category:
    """
    Return exactly one Category for a set of free-text tags.

    Args:
        raw_tags:      Source type strings (may be empty or None).
        fallback_hint: Category the source already claims (e.g. "restaurant").

    Returns:
        First matching category in priority order, else the valid hint, else OTHER.
    """
    tags = {normalize_tag(t) for t in (raw_tags or ()) if isinstance(t, str) and t.strip()}
    for category, keywords in _CATEGORY_KEYWORDS:
        if tags & keywords:
            return category

    hint = Category.parse(fallback_hint)
    return hint if hint is not None else Category.OTHER


def classify_kind(kind: str) -> Category:
    """Single-tag convenience used by the slot planner ("scenic_view" → ATTRACTION)."""
    return classify([kind], fallback_hint=kind)
