import pytest

from conftest import make_place
from modules.planning.budget_evaluator import (
    BudgetEvaluator, approx_cost, duration, estimated_cost, evaluate, per_person_cost,
)
from schemas.itinerary import Category, SelectedItem


def item(cost, placeholder=False):
    place = None if placeholder else make_place(f"p_{cost}", Category.ATTRACTION, cost=cost)
    return SelectedItem(place=place, category=Category.ATTRACTION, estimated_cost=cost)


def test_placeholders_count_zero():
    # a placeholder carrying a stray cost still adds nothing
    state = evaluate([item(40), item(99, placeholder=True), item(35)], 100)
    assert state.total_cost == 75
    assert state.remaining == 25


@pytest.mark.parametrize("total,within", [
    (71, True),
    (100, True),
    (129, True),
    (69, False),
    (131, False),
])
def test_tolerance_band(total, within):
    assert evaluate([item(total)], 100).within_budget is within


def test_band_bounds_and_deviation():
    state = evaluate([item(120)], 150)
    assert state.lower_bound == pytest.approx(105)
    assert state.upper_bound == pytest.approx(195)
    assert state.deviation_pct == -20
    assert state.ratio == 0.8
    assert state.tolerance == 0.30


def test_zero_target():
    state = evaluate([], 0)
    assert state.total_cost == 0
    assert state.ratio == 1.0
    assert state.deviation_pct == 0
    assert state.within_budget


def test_custom_tolerance():
    assert not BudgetEvaluator(tolerance=0.1).evaluate([item(85)], 100).within_budget


def test_price_level_cost_lookup():
    assert per_person_cost(make_place("free", Category.PARK, price_level=0)) == 0
    assert per_person_cost(make_place("dear", Category.RESTAURANT, price_level=4)) == 100
    assert per_person_cost(make_place("odd", Category.RESTAURANT, price_level=7)) == 25


def test_explicit_cost_and_party():
    p = make_place("restaurant_1", Category.RESTAURANT, cost=30, price_level=4)
    assert per_person_cost(p) == 30
    assert estimated_cost(p, 2) == 60
    assert estimated_cost(p, 0) == 30


def test_approx_cost_display():
    assert approx_cost(make_place("r", Category.RESTAURANT, price_level=2)) == "20-35€"
    assert approx_cost(make_place("c", Category.CAFE, cost=10)) == "10€"
    assert approx_cost(make_place("c", Category.CAFE, cost=12.5)) == "12.5€"


def test_durations():
    assert duration(Category.MUSEUM) == "2 hours"
    assert duration(Category.RESTAURANT) == "1.5 hours"
    assert duration(Category.OTHER) == "1 hour"
