import json
from dataclasses import replace

import pytest

from conftest import make_place
from modules.planning.budget_evaluator import evaluate
from modules.planning.itinerary_assembler import ItineraryAssembler, assemble
from modules.optimization.place_selector import FREE_TIME_DESCRIPTION
from modules.tool_usage.distance_tool import DistanceTool, haversine_km
from schemas.itinerary import (
    Category, GeneratedText, ItemText, SelectedItem, TimeSlot, WeatherBlock,
)


def build_inputs():
    slots = [
        TimeSlot("08:00", Category.CAFE, "Romantic Breakfast", "cafe"),
        TimeSlot("11:00", Category.PARK, "Romantic Walk", "park"),
        TimeSlot("16:00", Category.ATTRACTION, "Beautiful Views", "scenic_view"),
        TimeSlot("20:00", Category.RESTAURANT, "Romantic Dinner", "restaurant"),
    ]
    cafe = make_place("cafe_1", Category.CAFE, cost=10, lat=41.3851, lng=2.1734)
    park = make_place("park_1", Category.PARK, cost=0, lat=41.3888, lng=2.1868)
    restaurant = make_place("restaurant_1", Category.RESTAURANT, cost=30)
    selected = [
        SelectedItem(cafe, Category.CAFE, 20, "10€", "1 hour"),
        SelectedItem(park, Category.PARK, 0, "0€", "1 hour"),
        SelectedItem(None, Category.ATTRACTION),
        SelectedItem(restaurant, Category.RESTAURANT, 60, "30€", "1.5 hours"),
    ]
    text = GeneratedText(
        title="Romantic escapes in Barcelona",
        subtitle="A day for two",
        weather=WeatherBlock(forecast="Sunny", clothing="Light layers", tips="Bring water"),
        items=[ItemText("Coffee", "Sit outside"), ItemText("Green", "Walk slowly"),
               ItemText(), ItemText("Paella", "Book ahead")],
    )
    return slots, selected, text


def test_mismatched_lengths_rejected(couple_params):
    slots, selected, text = build_inputs()
    with pytest.raises(ValueError):
        assemble(couple_params, slots, selected[:-1], evaluate(selected, 150), text)


def test_items_follow_slots(couple_params):
    slots, selected, text = build_inputs()
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), text)

    assert [i.time for i in doc.items] == ["08:00", "11:00", "16:00", "20:00"]
    assert doc.title == "Romantic escapes in Barcelona"
    assert doc.weather.forecast == "Sunny"
    assert doc.budget.total_cost == 80

    first = doc.items[0]
    assert first.title == "Cafe 1"
    assert first.place_id == "cafe_1"
    assert first.category == "cafe"
    assert first.description == "Coffee"
    assert first.approx_cost == "10€"


def test_placeholder_item(couple_params):
    slots, selected, text = build_inputs()
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), text)
    free = doc.items[2]
    assert free.title == "Free Time"
    assert free.is_placeholder
    assert free.place_id is None
    assert free.estimated_cost == 0
    assert free.description == FREE_TIME_DESCRIPTION
    assert free.label == "Beautiful Views"


def test_travel_minutes_only_between_located_places(couple_params):
    slots, selected, text = build_inputs()
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), text)
    assert doc.items[0].travel_minutes_from_previous is None
    assert doc.items[1].travel_minutes_from_previous > 0
    assert doc.items[2].travel_minutes_from_previous is None
    # restaurant has no coordinates
    assert doc.items[3].travel_minutes_from_previous is None


def test_meta_block(couple_params):
    slots, selected, text = build_inputs()
    doc = ItineraryAssembler().assemble(
        couple_params, slots, selected, evaluate(selected, 150), text,
        data_source="fake", cache_hit=False,
    )
    assert doc.meta["city"] == "Barcelona"
    assert doc.meta["date"] == "2025-09-19"
    assert doc.meta["audience"] == "couple"
    assert doc.meta["interests"] == ["romantic"]
    assert doc.meta["budget_level"] == "high"
    assert doc.meta["party_size"] == 2
    assert doc.meta["data_source"] == "fake"
    assert doc.meta["cache_hit"] is False
    assert "generated_at" in doc.meta


def test_missing_item_text_tolerated(couple_params):
    slots, selected, _ = build_inputs()
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), GeneratedText())
    assert doc.items[0].description == ""
    assert doc.items[2].description == FREE_TIME_DESCRIPTION


def test_document_is_json_serializable(couple_params):
    slots, selected, text = build_inputs()
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), text)
    data = json.loads(json.dumps(doc.to_dict()))
    assert data["budget"]["within_budget"] is False
    assert len(data["items"]) == 4


def test_travel_minutes_use_kilometres_whatever_the_distance_unit(couple_params):
    slots, selected, text = build_inputs()
    doc = ItineraryAssembler(distance_tool=DistanceTool(unit="miles")).assemble(
        couple_params, slots, selected, evaluate(selected, 150), text,
    )
    km = haversine_km(41.3851, 2.1734, 41.3888, 2.1868)
    park = doc.items[1]
    assert park.travel_minutes_from_previous == pytest.approx(round(km / 15 * 60, 1))
    assert park.distance_from_previous == pytest.approx(km * 0.621371, abs=0.01)
    assert doc.meta["distance_unit"] == "miles"
    assert doc.items[0].distance_from_previous is None


def test_item_photos(couple_params):
    slots, selected, text = build_inputs()
    cafe = replace(selected[0].place, photo_refs=("ref_a", "ref_b"))
    selected[0] = replace(selected[0], place=cafe)
    doc = assemble(couple_params, slots, selected, evaluate(selected, 150), text)

    google = doc.items[0].photos
    assert [p["source"] for p in google] == ["google_places", "google_places"]
    assert google[0]["url"] == "/api/photos/google-places/ref_a?maxwidth=800"
    assert google[0]["thumbnail"] == "/api/photos/google-places/ref_a?maxwidth=200"

    # no references: stock photos of the category
    stock = doc.items[1].photos
    assert stock and all(p["source"] == "unsplash" for p in stock)
    assert doc.items[2].photos == []
