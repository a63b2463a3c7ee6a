"""
modules/planning/budget_evaluator.py
--------------------------------------
Cost estimation and the final budget check for a day plan.

Cost model:
  - Place.estimated_cost (explicit, per person) wins when set.
  - Otherwise price_level → config.PRICE_LEVEL_COSTS (0 = free, unknown → 25).
  - Party cost = per-person cost × FilterParams.party_size.

Tolerance band (single value shared with BudgetOptimizer):
  lower = target × (1 − tol), upper = target × (1 + tol)
  within_budget ⇔ lower ≤ total ≤ upper
"""

from __future__ import annotations
from typing import Iterable

from schemas.itinerary import BudgetState, Category, Place, SelectedItem
import config


# Display ranges per category and price level (per person)
_APPROX_COST: dict[Category, dict[int, str]] = {
    Category.CAFE:       {0: "0", 1: "5-8",   2: "10-15", 3: "18-25", 4: "30-40"},
    Category.RESTAURANT: {0: "0", 1: "12-18", 2: "20-35", 3: "40-65", 4: "70-120"},
    Category.ATTRACTION: {0: "0", 1: "5-10",  2: "12-20", 3: "25-40", 4: "50-80"},
    Category.MUSEUM:     {0: "0", 1: "8-12",  2: "15-25", 3: "30-45", 4: "50-70"},
    Category.PARK:       {0: "0", 1: "0",     2: "5-10",  3: "15-25", 4: "30-50"},
    Category.BAR:        {0: "0", 1: "8-12",  2: "15-25", 3: "30-50", 4: "60-100"},
}

_DURATION: dict[Category, str] = {
    Category.RESTAURANT: "1.5 hours",
    Category.CAFE:       "1 hour",
    Category.MUSEUM:     "2 hours",
    Category.ATTRACTION: "1.5 hours",
    Category.PARK:       "1 hour",
    Category.BAR:        "1.5 hours",
    Category.SHOPPING:   "1.5 hours",
}


def per_person_cost(place: Place) -> float:
    if place.estimated_cost is not None:
        return max(0.0, float(place.estimated_cost))
    return config.PRICE_LEVEL_COSTS.get(place.price_level, config.DEFAULT_PLACE_COST)


def estimated_cost(place: Place, party_size: int = 1) -> float:
    """Cost of visiting `place` for the whole party."""
    return per_person_cost(place) * max(1, party_size)


def approx_cost(place: Place, currency: str = config.CURRENCY_SYMBOL) -> str:
    """Human display string, e.g. "20-35€"."""
    if place.estimated_cost is not None:
        return f"{per_person_cost(place):g}{currency}"
    table = _APPROX_COST.get(place.category, _APPROX_COST[Category.ATTRACTION])
    return table.get(place.price_level, table[2]) + currency


def duration(category: Category) -> str:
    return _DURATION.get(category, "1 hour")


class BudgetEvaluator:
    """Sums a finished selection and reports it against the tolerance band."""

    def __init__(self, tolerance: float = config.BUDGET_TOLERANCE):
        self.tolerance = tolerance

    def evaluate(self, items: Iterable[SelectedItem], target_budget: float) -> BudgetState:
        """
        Args:
            items:         PlaceSelector output; placeholders count 0.
            target_budget: FilterParams.budget.

        Returns:
            BudgetState; within_budget is a pure function of total and target.
        """
        total = round(sum(0.0 if i.is_placeholder else i.estimated_cost for i in items), 2)
        target = float(target_budget)
        lower = target * (1 - self.tolerance)
        upper = target * (1 + self.tolerance)

        if target > 0:
            ratio = total / target
            deviation_pct = round((total - target) / target * 100)
        else:
            ratio = 1.0
            deviation_pct = 0

        return BudgetState(
            total_cost    = total,
            target        = target,
            lower_bound   = lower,
            upper_bound   = upper,
            within_budget = lower <= total <= upper,
            remaining     = round(target - total, 2),
            ratio         = round(ratio, 4),
            deviation_pct = deviation_pct,
            tolerance     = self.tolerance,
        )


def evaluate(items: Iterable[SelectedItem], target_budget: float) -> BudgetState:
    return BudgetEvaluator().evaluate(items, target_budget)
