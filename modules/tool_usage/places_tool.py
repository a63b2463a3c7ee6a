"""
modules/tool_usage/places_tool.py
-----------------------------------
Candidate place sources behind one CandidateRepository interface.

  GooglePlacesRepository: Google Places Text Search over HTTP
  SeedPlacesRepository:   bundled city datasets (seed_places.py)
  FallbackRepository:     primary, then secondary on failure or no results

Every raw record, whichever source it came from, is normalized by
PlaceAdapter into the canonical Place before planning code sees it.
Repositories return Result values; they never raise for network or
quota problems.
"""

from __future__ import annotations
import logging
import re
from typing import Any, Iterable, Mapping, Optional, Protocol

import requests

from modules.input.category_classifier import classify, normalize_tag
from modules.tool_usage.seed_places import city_key, places_for_city
from schemas.itinerary import Category, Place
from schemas.result import Result
import config

logger = logging.getLogger(__name__)


# ── Normalization ─────────────────────────────────────────────────────────────

class PlaceAdapter:
    """Single mapping point from source-specific dicts to Place."""

    @staticmethod
    def from_google(item: Mapping[str, Any]) -> Optional[Place]:
        """
        Google Text Search result → Place.
        Records without an id or a name are dropped (None).
        """
        place_id = item.get("place_id") or item.get("id")
        name = item.get("name")
        if not place_id or not name:
            return None

        types = [t for t in item.get("types") or [] if isinstance(t, str)]
        location = (item.get("geometry") or {}).get("location") or {}
        opening_hours = item.get("opening_hours") or {}

        return Place(
            id           = str(place_id),
            name         = str(name),
            address      = item.get("formatted_address") or item.get("vicinity") or "",
            rating       = _clamp_float(item.get("rating"), 0.0, 5.0),
            review_count = max(0, _as_int(item.get("user_ratings_total"), 0)),
            price_level  = _price_level(item.get("price_level")),
            category     = classify(types, fallback_hint=item.get("category")),
            raw_tags     = frozenset(normalize_tag(t) for t in types),
            lat          = _as_float(location.get("lat")),
            lng          = _as_float(location.get("lng")),
            open_now     = opening_hours.get("open_now"),
            photo_refs   = _photo_refs(item.get("photos")),
        )

    @staticmethod
    def from_seed(item: Mapping[str, Any], city: str) -> Optional[Place]:
        """Seed record → Place; id is derived from city and name."""
        name = item.get("name")
        if not name:
            return None

        tags = item.get("types") or [item.get("category", "")]
        tags = [t for t in tags if isinstance(t, str) and t]
        return Place(
            id             = str(item.get("id") or f"seed:{city_key(city)}:{_slug(name)}"),
            name           = str(name),
            address        = item.get("address", ""),
            rating         = _clamp_float(item.get("rating"), 0.0, 5.0),
            review_count   = max(0, _as_int(item.get("review_count"), 0)),
            price_level    = _price_level(item.get("price_level")),
            category       = classify(tags, fallback_hint=item.get("category")),
            raw_tags       = frozenset(normalize_tag(t) for t in tags),
            lat            = _as_float(item.get("lat")),
            lng            = _as_float(item.get("lng")),
            open_now       = item.get("open_now"),
            estimated_cost = _as_float(item.get("estimated_cost")),
        )


# ── Repository interface ──────────────────────────────────────────────────────

class CandidateRepository(Protocol):

    def search(
        self,
        city: str,
        category: Category,
        interest_tags: Iterable[str] = (),
        kind: Optional[str] = None,
    ) -> Result[list[Place]]:
        ...


# Query keywords per activity kind (Text Search is free text)
_QUERY_KEYWORDS: dict[str, str] = {
    "scenic_view":      "scenic view panorama lookout",
    "rooftop_bar":      "rooftop bar view cocktails",
    "cocktail_bar":     "cocktail bar drinks",
    "jazz_club":        "jazz club live music",
    "club":             "nightclub dancing",
    "gallery":          "art gallery exhibition",
    "cultural_center":  "cultural center arts venue",
    "food_market":      "food market local cuisine",
    "local_cuisine":    "local restaurant traditional food",
    "garden":           "garden botanical park",
    "nature_reserve":   "nature reserve park",
    "historical_site":  "historical site monument",
    "local_market":     "local market traditional",
    "playground":       "playground children family park",
    "pool":             "swimming pool aquatic center",
    "science_center":   "science center interactive museum",
    "wellness_center":  "wellness center spa",
}

# Google `type` filter per activity kind; unknown kinds use the category default
_PLACE_TYPE: dict[str, str] = {
    "gallery":        "art_gallery",
    "art_center":     "art_gallery",
    "scenic_view":    "tourist_attraction",
    "rooftop_bar":    "bar",
    "cocktail_bar":   "bar",
    "club":           "night_club",
    "jazz_club":      "night_club",
    "local_cuisine":  "restaurant",
    "garden":         "park",
    "playground":     "park",
    "zoo":            "zoo",
    "aquarium":       "aquarium",
    "amusement_park": "amusement_park",
    "stadium":        "stadium",
    "library":        "library",
    "spa":            "spa",
}

_CATEGORY_TYPE: dict[Category, str] = {
    Category.RESTAURANT: "restaurant",
    Category.CAFE:       "cafe",
    Category.MUSEUM:     "museum",
    Category.PARK:       "park",
    Category.BAR:        "bar",
    Category.SHOPPING:   "shopping_mall",
    Category.ATTRACTION: "tourist_attraction",
}


class GooglePlacesRepository:
    """Google Places Text Search (legacy JSON endpoint)."""

    source_name = "google_places"

    def __init__(
        self,
        api_key: str = config.GOOGLE_PLACES_API_KEY,
        api_url: str = config.GOOGLE_PLACES_TEXT_SEARCH_URL,
        max_results: int = config.PLACES_RESULTS_PER_QUERY,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.max_results = max_results
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(
        self,
        city: str,
        category: Category,
        interest_tags: Iterable[str] = (),
        kind: Optional[str] = None,
    ) -> Result[list[Place]]:
        if not self.api_key:
            return Result.failure("places", "GOOGLE_PLACES_API_KEY is not configured")

        params = {
            "query":    self.build_query(city, category, interest_tags, kind),
            "type":     _PLACE_TYPE.get(kind or "", _CATEGORY_TYPE.get(category, "tourist_attraction")),
            "language": "en",
            "key":      self.api_key,
        }
        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            return Result.failure("places", f"text search failed: {exc}")

        status = data.get("status", "OK")
        if status not in ("OK", "ZERO_RESULTS"):
            return Result.failure("places", f"{status}: {data.get('error_message', '')}".strip())

        places = []
        for item in (data.get("results") or [])[: self.max_results]:
            place = PlaceAdapter.from_google(item)
            if place is not None:
                places.append(place)
        logger.debug("Google Places %r → %d places", params["query"], len(places))
        return Result.success(places)

    @staticmethod
    def build_query(
        city: str,
        category: Category,
        interest_tags: Iterable[str] = (),
        kind: Optional[str] = None,
    ) -> str:
        """e.g. "scenic view in Barcelona scenic view panorama lookout"."""
        subject = (kind or category.value).replace("_", " ")
        query = f"{subject} in {city}"
        keywords = _QUERY_KEYWORDS.get(kind or "") or " ".join(interest_tags)
        return f"{query} {keywords}".strip()


class SeedPlacesRepository:
    """Bundled city data filtered by category. Unknown city → empty success."""

    source_name = "seed"

    def search(
        self,
        city: str,
        category: Category,
        interest_tags: Iterable[str] = (),
        kind: Optional[str] = None,
    ) -> Result[list[Place]]:
        places = []
        for item in places_for_city(city):
            place = PlaceAdapter.from_seed(item, city)
            if place is not None and place.category is category:
                places.append(place)
        return Result.success(places)


class FallbackRepository:
    """Primary result when it succeeds with places; otherwise the secondary's."""

    def __init__(self, primary: CandidateRepository, secondary: CandidateRepository):
        self.primary = primary
        self.secondary = secondary
        self.source_name = (
            f"{getattr(primary, 'source_name', 'primary')}"
            f"+{getattr(secondary, 'source_name', 'secondary')}"
        )

    def search(
        self,
        city: str,
        category: Category,
        interest_tags: Iterable[str] = (),
        kind: Optional[str] = None,
    ) -> Result[list[Place]]:
        result = self.primary.search(city, category, interest_tags, kind)
        if result.ok and result.value:
            return result
        if not result.ok:
            logger.warning("Primary place search failed (%s), using fallback source", result.error)
        return self.secondary.search(city, category, interest_tags, kind)


def default_repository() -> CandidateRepository:
    """Live search when a key is set; seed data as the fallback or sole source."""
    if not config.GOOGLE_PLACES_API_KEY:
        return SeedPlacesRepository()
    live = GooglePlacesRepository()
    if config.PLACES_FALLBACK_TO_SEED:
        return FallbackRepository(live, SeedPlacesRepository())
    return live


# ── Helpers ───────────────────────────────────────────────────────────────────

def _photo_refs(photos: Any) -> tuple[str, ...]:
    refs = []
    for photo in photos or []:
        ref = photo.get("photo_reference") if isinstance(photo, Mapping) else None
        if ref:
            refs.append(str(ref))
    return tuple(refs[: config.PHOTOS_PER_PLACE])


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _clamp_float(value: Any, low: float, high: float) -> float:
    number = _as_float(value)
    if number is None:
        return low
    return max(low, min(high, number))


def _price_level(value: Any) -> int:
    level = _as_int(value, 2)
    return level if 0 <= level <= 4 else 2
