"""
schemas/itinerary.py
--------------------
Dataclass definitions for the request, the candidate places and the output
day plan.

Lifecycle: every object here is request-scoped. A build creates them, the
response serializes them, nothing is persisted.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    CAFE = "cafe"
    RESTAURANT = "restaurant"
    MUSEUM = "museum"
    PARK = "park"
    ATTRACTION = "attraction"
    BAR = "bar"
    SHOPPING = "shopping"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching member or None (never raises)."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Audience(str, Enum):
    HIM = "him"
    HER = "her"
    COUPLE = "couple"
    KIDS = "kids"
    GENERIC = "generic"   # unrecognized input lands here


@dataclass(frozen=True)
class FilterParams:
    """
    User request. Immutable for the duration of one build.
    interests keeps the caller's order (slot planning walks it in order).
    """
    city: str
    audience: Audience
    interests: tuple[str, ...]
    date: date
    budget: int
    party_size: int = 1

    def signature(self) -> tuple:
        """Cache key: same signature ⇒ same itinerary."""
        return (
            self.city.strip().lower(),
            self.audience.value,
            tuple(sorted(self.interests)),
            self.date.isoformat(),
            self.budget,
        )


@dataclass(frozen=True)
class Place:
    """
    Canonical candidate location. Every collaborator response is normalized
    into this shape by PlaceAdapter before any planning logic sees it.
    """
    id: str
    name: str
    address: str = ""
    rating: float = 0.0                 # 0.0–5.0
    review_count: int = 0
    price_level: int = 2                # 0=free … 4=very expensive
    category: Category = Category.OTHER
    raw_tags: frozenset[str] = frozenset()
    lat: Optional[float] = None
    lng: Optional[float] = None
    open_now: Optional[bool] = None
    estimated_cost: Optional[float] = None
    # ^ explicit per-person cost; overrides the price_level lookup when set
    photo_refs: tuple[str, ...] = ()    # Google photo_reference values, best first

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True)
class TimeSlot:
    """A planned point in the day. time is "HH:MM" (zero-padded, sortable)."""
    time: str
    category: Category
    label: str
    kind: str = ""      # fine-grained activity tag, e.g. "scenic_view"


@dataclass(frozen=True)
class SelectedItem:
    """
    PlaceSelector output for one slot.
    place is None for the "Free Time" placeholder.
    """
    place: Optional[Place]
    category: Category
    estimated_cost: float = 0.0     # whole party
    approx_cost: str = ""
    duration: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.place is None


@dataclass(frozen=True)
class BudgetState:
    """Derived, never stored."""
    total_cost: float
    target: float
    lower_bound: float
    upper_bound: float
    within_budget: bool
    remaining: float = 0.0
    ratio: float = 1.0
    deviation_pct: int = 0
    tolerance: float = 0.30


@dataclass
class WeatherBlock:
    forecast: str = ""
    clothing: str = ""
    tips: str = ""


@dataclass
class ItemText:
    description: str = ""
    tips: str = ""


@dataclass
class GeneratedText:
    """Everything the text collaborator contributes to one document."""
    title: str = ""
    subtitle: str = ""
    weather: WeatherBlock = field(default_factory=WeatherBlock)
    items: list[ItemText] = field(default_factory=list)   # parallel to slots


@dataclass
class ItineraryItem:
    """A single timed activity in the finished day plan."""
    time: str = ""
    label: str = ""
    title: str = ""
    place_id: Optional[str] = None
    category: str = ""
    address: str = ""
    rating: Optional[float] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    description: str = ""
    tips: str = ""
    estimated_cost: float = 0.0
    approx_cost: str = ""
    duration: str = ""
    is_placeholder: bool = False
    photos: list[dict[str, str]] = field(default_factory=list)   # {url, thumbnail, source}
    distance_from_previous: Optional[float] = None             # config.DISTANCE_UNIT
    travel_minutes_from_previous: Optional[float] = None


@dataclass
class ItineraryDocument:
    """
    Top-level output of one build.
    Final artefact returned to the caller, emailed after checkout.
    """
    meta: dict[str, Any] = field(default_factory=dict)
    title: str = ""
    subtitle: str = ""
    weather: WeatherBlock = field(default_factory=WeatherBlock)
    budget: Optional[BudgetState] = None
    items: list[ItineraryItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
