"""
modules/planning/itinerary_builder.py
---------------------------------------
Public entry point: build_itinerary(FilterParams) -> ItineraryDocument.

Stages:
  1. cache lookup (only when a cache was injected)
  2. TimeSlotPlanner → slots
  3. title / subtitle / weather requested concurrently
  4. place search per (category, kind) of the slots, sequential; a failed
     search contributes no places; results deduplicated by id; kids → no bars
  5. BudgetOptimizer → pool, PlaceSelector → items, BudgetEvaluator → budget
  6. description + tips per real item, all requested concurrently
  7. ItineraryAssembler, cache store (healthy builds only)

Collaborator failures degrade to templates / empty pools and are logged at
WARNING; the document is then marked meta["degraded"] and never cached, so
the next request retries the collaborators. With strict=True the first
failure raises CollaboratorUnavailable instead. Validation happens before this module (filter_intake).
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import replace
from typing import Optional, Sequence, TypeVar

from modules.memory.itinerary_cache import ItineraryCache
from modules.optimization.budget_optimizer import BudgetOptimizer
from modules.optimization.place_selector import FREE_TIME_DESCRIPTION, PlaceSelector
from modules.planning.budget_evaluator import BudgetEvaluator
from modules.planning.itinerary_assembler import ItineraryAssembler
from modules.planning.time_slot_planner import build_slots, search_kinds
from modules.tool_usage.places_tool import CandidateRepository, default_repository
from modules.tool_usage.text_tool import (
    TextGenerator, fallback_location_description, fallback_location_tips,
    fallback_subtitle, fallback_title, fallback_weather,
)
from schemas.itinerary import (
    Audience, Category, FilterParams, GeneratedText, ItemText, ItineraryDocument,
    Place, SelectedItem, TimeSlot,
)
from schemas.result import CollaboratorError, CollaboratorUnavailable, Result
import config

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItineraryBuilder:
    """
    Wires the planning pipeline to its collaborators.

    Args:
        repository:     CandidateRepository; default picks Google or seed data from config.
        text_generator: TextGenerator; default has no LLM client (templates only).
        cache:          Optional ItineraryCache shared across requests.
        strict:         Raise CollaboratorUnavailable on collaborator failure.
        tolerance:      Budget band used by both optimizer and evaluator.
    """

    def __init__(
        self,
        repository: Optional[CandidateRepository] = None,
        text_generator: Optional[TextGenerator] = None,
        cache: Optional[ItineraryCache] = None,
        strict: bool = config.STRICT_COLLABORATORS,
        tolerance: float = config.BUDGET_TOLERANCE,
        assembler: Optional[ItineraryAssembler] = None,
    ):
        self.repository = repository if repository is not None else default_repository()
        self.text_generator = text_generator or TextGenerator()
        self.cache = cache
        self.strict = strict
        self.optimizer = BudgetOptimizer(tolerance)
        self.evaluator = BudgetEvaluator(tolerance)
        self.assembler = assembler or ItineraryAssembler()

    # ── Public API ────────────────────────────────────────────────────────────

    async def build_itinerary(self, params: FilterParams) -> ItineraryDocument:
        if self.cache is not None:
            cached = self.cache.get(params)
            if cached is not None:
                logger.info("Cache hit for %s / %s", params.city, params.date)
                return replace(cached, meta={**cached.meta, "cache_hit": True})

        slots = build_slots(params.audience, params.interests)
        logger.info("Planned %d slots for %s (%s, %s)",
                    len(slots), params.city, params.audience.value, ", ".join(params.interests))

        failures: list[CollaboratorError] = []
        header_task = asyncio.ensure_future(self._header_text(params, failures))
        try:
            candidates = await self._search_candidates(params, slots, failures)
        except BaseException:
            header_task.cancel()
            await asyncio.gather(header_task, return_exceptions=True)
            raise

        pool = self.optimizer.optimize(candidates, params.budget, params.party_size)
        items = PlaceSelector(params.party_size).select_all(slots, pool)
        budget = self.evaluator.evaluate(items, params.budget)
        logger.info("Selected %d/%d places, total %.2f (target %s, within budget: %s)",
                    sum(1 for i in items if not i.is_placeholder), len(items),
                    budget.total_cost, params.budget, budget.within_budget)

        title, subtitle, weather = await header_task
        item_texts = await self._item_texts(params, items, failures)
        text = GeneratedText(title=title, subtitle=subtitle, weather=weather, items=item_texts)

        document = self.assembler.assemble(
            params, slots, items, budget, text,
            data_source=getattr(self.repository, "source_name", type(self.repository).__name__),
            cache_hit=False,
            degraded=bool(failures),
        )
        if self.cache is not None:
            if failures:
                logger.info("Not caching degraded itinerary for %s / %s (%d failures)",
                            params.city, params.date, len(failures))
            else:
                self.cache.put(params, document)
        return document

    async def build_preview(self, params: FilterParams) -> dict[str, str]:
        """Title and subtitle only; no place search."""
        title, subtitle = await asyncio.gather(
            self.text_generator.generate_title(params),
            self.text_generator.generate_subtitle(params),
        )
        failures: list[CollaboratorError] = []
        return {
            "title":    self._or_fallback(title, lambda: fallback_title(params), failures),
            "subtitle": self._or_fallback(subtitle, lambda: fallback_subtitle(params), failures),
        }

    # ── Stages ────────────────────────────────────────────────────────────────

    async def _header_text(self, params: FilterParams, failures: list[CollaboratorError]):
        title, subtitle, weather = await asyncio.gather(
            self.text_generator.generate_title(params),
            self.text_generator.generate_subtitle(params),
            self.text_generator.generate_weather(params),
        )
        return (
            self._or_fallback(title, lambda: fallback_title(params), failures),
            self._or_fallback(subtitle, lambda: fallback_subtitle(params), failures),
            self._or_fallback(weather, lambda: fallback_weather(params), failures),
        )

    async def _search_candidates(
        self,
        params: FilterParams,
        slots: Sequence[TimeSlot],
        failures: list[CollaboratorError],
    ) -> list[Place]:
        queries = search_kinds(slots)
        # base categories too, so fallback chains have something to walk
        for category in (Category.CAFE, Category.RESTAURANT, Category.ATTRACTION):
            if not any(c is category for c, _ in queries):
                queries.append((category, category.value))

        seen: set[str] = set()
        candidates: list[Place] = []
        for category, kind in queries:
            result = await asyncio.to_thread(
                self.repository.search, params.city, category, params.interests, kind
            )
            places = self._or_fallback(result, list, failures)
            for place in places:
                if place.id in seen:
                    continue
                seen.add(place.id)
                candidates.append(place)

        if params.audience is Audience.KIDS:
            candidates = [p for p in candidates if p.category is not Category.BAR]

        logger.info("Collected %d unique candidates from %d searches", len(candidates), len(queries))
        return candidates

    async def _item_texts(
        self,
        params: FilterParams,
        items: Sequence[SelectedItem],
        failures: list[CollaboratorError],
    ) -> list[ItemText]:
        real = [i for i in items if not i.is_placeholder]
        calls = []
        for item in real:
            calls.append(self.text_generator.generate_location_description(item.place, item.category, params))
            calls.append(self.text_generator.generate_location_tips(item.place, item.category, params))
        results = await asyncio.gather(*calls)

        texts: list[ItemText] = []
        position = 0
        for item in items:
            if item.is_placeholder:
                texts.append(ItemText(description=FREE_TIME_DESCRIPTION, tips=""))
                continue
            description, tips = results[position], results[position + 1]
            position += 2
            texts.append(ItemText(
                description=self._or_fallback(
                    description,
                    lambda: fallback_location_description(item.place.name, item.category),
                    failures,
                ),
                tips=self._or_fallback(tips, lambda: fallback_location_tips(item.category), failures),
            ))
        return texts

    def _or_fallback(self, result: Result[T], fallback, failures: list[CollaboratorError]) -> T:
        if result.ok:
            return result.value
        if self.strict:
            raise CollaboratorUnavailable(result.error)
        logger.warning("Collaborator failure, degrading: %s", result.error)
        failures.append(result.error)
        return fallback()
