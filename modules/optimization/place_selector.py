"""
modules/optimization/place_selector.py
----------------------------------------
Fills each TimeSlot with the best unused place from the optimized pool.

Per slot:
  1. candidates = pool ∩ {category == slot.category} − used
  2. empty → walk FALLBACK_CHAINS[slot.category] in order, first non-empty wins
  3. still empty → "Free Time" placeholder, used set unchanged
  4. else max score, ties → first seen; the chosen id is added to used

Score = rating × 10 + review_count / 100 + (5 if open_now).

A place id is never selected twice within one build, across fallback
categories too. Never raises.
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

from modules.planning.budget_evaluator import approx_cost, duration, estimated_cost
from schemas.itinerary import Category, Place, SelectedItem, TimeSlot

logger = logging.getLogger(__name__)

FREE_TIME_TITLE = "Free Time"
FREE_TIME_DESCRIPTION = "Time to explore on your own, rest, or revisit a favourite spot."

FALLBACK_CHAINS: dict[Category, tuple[Category, ...]] = {
    Category.CAFE:       (Category.RESTAURANT, Category.ATTRACTION),
    Category.RESTAURANT: (Category.CAFE, Category.ATTRACTION),
    Category.MUSEUM:     (Category.ATTRACTION, Category.PARK, Category.CAFE),
    Category.ATTRACTION: (Category.MUSEUM, Category.PARK, Category.CAFE),
    Category.PARK:       (Category.ATTRACTION, Category.MUSEUM),
    Category.BAR:        (Category.RESTAURANT, Category.CAFE),
    Category.SHOPPING:   (Category.ATTRACTION, Category.CAFE),
    Category.OTHER:      (Category.ATTRACTION, Category.PARK),
}


def score(place: Place) -> float:
    return (
        (place.rating or 0.0) * 10
        + (place.review_count or 0) / 100
        + (5 if place.open_now else 0)
    )


def best_of(candidates: Iterable[Place]) -> Optional[Place]:
    """Highest score; strict > keeps the first-seen place on ties."""
    best: Optional[Place] = None
    best_score = float("-inf")
    for place in candidates:
        s = score(place)
        if s > best_score:
            best, best_score = place, s
    return best


def placeholder(slot: TimeSlot) -> SelectedItem:
    return SelectedItem(place=None, category=slot.category, estimated_cost=0.0,
                        approx_cost="", duration="")


class PlaceSelector:

    def __init__(self, party_size: int = 1):
        self.party_size = party_size

    def select_for_slot(
        self,
        slot: TimeSlot,
        pool: Sequence[Place],
        used: frozenset[str] | set[str],
    ) -> tuple[SelectedItem, frozenset[str]]:
        """
        Returns:
            (SelectedItem, new used set). The input set is not mutated.
        """
        for category in (slot.category, *FALLBACK_CHAINS.get(slot.category, ())):
            candidates = [p for p in pool if p.category is category and p.id not in used]
            if not candidates:
                continue
            chosen = best_of(candidates)
            if category is not slot.category:
                logger.debug("Slot %s %s: fell back to %s", slot.time, slot.category.value, category.value)
            logger.debug("Slot %s: selected %s (%s)", slot.time, chosen.name, chosen.id)
            item = SelectedItem(
                place          = chosen,
                category       = category,
                estimated_cost = estimated_cost(chosen, self.party_size),
                approx_cost    = approx_cost(chosen),
                duration       = duration(category),
            )
            return item, frozenset(used) | {chosen.id}

        logger.debug("Slot %s %s: no candidate, using placeholder", slot.time, slot.category.value)
        return placeholder(slot), frozenset(used)

    def select_all(self, slots: Sequence[TimeSlot], pool: Sequence[Place]) -> list[SelectedItem]:
        """One SelectedItem per slot, same order, fresh used set per call."""
        used: frozenset[str] = frozenset()
        items: list[SelectedItem] = []
        for slot in slots:
            item, used = self.select_for_slot(slot, pool, used)
            items.append(item)
        return items


def select_for_slot(slot: TimeSlot, pool: Sequence[Place], used, party_size: int = 1):
    return PlaceSelector(party_size).select_for_slot(slot, pool, used)


def select_all(slots: Sequence[TimeSlot], pool: Sequence[Place], party_size: int = 1) -> list[SelectedItem]:
    return PlaceSelector(party_size).select_all(slots, pool)
