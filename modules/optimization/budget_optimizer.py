"""
modules/optimization/budget_optimizer.py
------------------------------------------
Trims and reorders the candidate pool before slot assignment so the plan's
total cost trends toward the tolerance band.

Algorithm (greedy):
  1. priority per category: restaurant=5, cafe=4, attraction/museum=2,
     park/bar=1, anything else=2.
  2. sort by (priority desc, party cost asc); stable, so equal keys keep
     the caller's order.
  3. accept essential places (priority ≥ 3) while running + cost ≤ target × (1 + tol);
     accept the rest only while running + cost ≤ target.

Rejected places are left out of the returned list; the input list is
never mutated. An empty result is valid: PlaceSelector fills "Free Time".
"""

from __future__ import annotations
import logging
from typing import Sequence

from modules.planning.budget_evaluator import estimated_cost
from schemas.itinerary import Category, Place
import config

logger = logging.getLogger(__name__)

PRIORITY: dict[Category, int] = {
    Category.RESTAURANT: 5,
    Category.CAFE:       4,
    Category.ATTRACTION: 2,
    Category.MUSEUM:     2,
    Category.PARK:       1,
    Category.BAR:        1,
}
_DEFAULT_PRIORITY = 2
ESSENTIAL_PRIORITY = 3


def priority(category: Category) -> int:
    return PRIORITY.get(category, _DEFAULT_PRIORITY)


class BudgetOptimizer:

    def __init__(self, tolerance: float = config.BUDGET_TOLERANCE):
        self.tolerance = tolerance

    def optimize(
        self,
        places: Sequence[Place],
        target_budget: float,
        party_size: int = 1,
    ) -> list[Place]:
        """
        Args:
            places:        Classified candidate pool.
            target_budget: FilterParams.budget.
            party_size:    Multiplies every per-person cost.

        Returns:
            New list: the accepted places in (priority desc, cost asc) order.
        """
        if not places:
            return []

        ceiling = target_budget * (1 + self.tolerance)
        ranked = sorted(
            places,
            key=lambda p: (-priority(p.category), estimated_cost(p, party_size)),
        )

        accepted: list[Place] = []
        running = 0.0
        for place in ranked:
            cost = estimated_cost(place, party_size)
            limit = ceiling if priority(place.category) >= ESSENTIAL_PRIORITY else target_budget
            if running + cost <= limit:
                accepted.append(place)
                running += cost
            else:
                logger.debug("Budget: dropped %s (%s, cost %.2f, running %.2f)",
                             place.name, place.category.value, cost, running)

        logger.info("Budget optimizer kept %d/%d places (running cost %.2f, target %.2f)",
                    len(accepted), len(places), running, target_budget)
        return accepted


def optimize(places: Sequence[Place], target_budget: float, party_size: int = 1) -> list[Place]:
    return BudgetOptimizer().optimize(places, target_budget, party_size)
