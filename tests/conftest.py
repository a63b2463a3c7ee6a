import pytest
from datetime import date

from schemas.itinerary import Audience, Category, FilterParams, Place
from schemas.result import Result


# Helpers
def make_place(
    id: str,
    category: Category,
    cost: float | None = None,
    rating: float = 4.0,
    reviews: int = 0,
    price_level: int = 2,
    open_now: bool | None = None,
    lat: float | None = None,
    lng: float | None = None,
) -> Place:
    return Place(
        id=id,
        name=id.replace("_", " ").title(),
        category=category,
        rating=rating,
        review_count=reviews,
        price_level=price_level,
        estimated_cost=cost,
        open_now=open_now,
        lat=lat,
        lng=lng,
    )


class FakeRepository:
    """Returns the configured places of the requested category."""

    source_name = "fake"

    def __init__(self, places=(), fail: bool = False):
        self.places = list(places)
        self.fail = fail
        self.calls: list[tuple] = []

    def search(self, city, category, interest_tags=(), kind=None):
        self.calls.append((city, category, kind))
        if self.fail:
            return Result.failure("places", "service unavailable")
        return Result.success([p for p in self.places if p.category is category])


class FakeLLM:
    def __init__(self, reply: str = "Generated text", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("quota exceeded")
        return self.reply


@pytest.fixture
def place():
    return make_place


@pytest.fixture
def repository_cls():
    return FakeRepository


@pytest.fixture
def llm_cls():
    return FakeLLM


@pytest.fixture
def golden_pool():
    # one of each: cafe 10, restaurant 30 (4.5★), park 0, bar 20
    return [
        make_place("cafe_1", Category.CAFE, cost=10, rating=4.2),
        make_place("restaurant_1", Category.RESTAURANT, cost=30, rating=4.5),
        make_place("park_1", Category.PARK, cost=0, rating=4.4),
        make_place("bar_1", Category.BAR, cost=20, rating=4.3),
    ]


@pytest.fixture
def couple_params():
    return FilterParams(
        city="Barcelona",
        audience=Audience.COUPLE,
        interests=("romantic",),
        date=date(2025, 9, 19),
        budget=150,
        party_size=2,
    )
