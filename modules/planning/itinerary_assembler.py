"""
modules/planning/itinerary_assembler.py
-----------------------------------------
Structural merge of the pipeline outputs into one ItineraryDocument.

slots[i] ↔ selected_items[i] ↔ generated_text.items[i] (1:1 by construction).
Adds the metadata block, item photos and a straight-line hop between
consecutive real places: distance in config.DISTANCE_UNIT, travel minutes
always from kilometres. No selection or budget logic lives here.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from modules.input.filter_intake import budget_level
from modules.optimization.place_selector import FREE_TIME_DESCRIPTION, FREE_TIME_TITLE
from modules.tool_usage.distance_tool import DistanceTool, haversine_km
from modules.tool_usage.photo_tool import PhotoTool
from modules.tool_usage.time_tool import TimeTool
from schemas.itinerary import (
    BudgetState, FilterParams, GeneratedText, ItemText, ItineraryDocument,
    ItineraryItem, Place, SelectedItem, TimeSlot,
)
import config


class ItineraryAssembler:

    def __init__(
        self,
        distance_tool: DistanceTool | None = None,
        time_tool: TimeTool | None = None,
        photo_tool: PhotoTool | None = None,
    ):
        self.distance_tool = distance_tool or DistanceTool()
        self.time_tool = time_tool or TimeTool()
        self.photo_tool = photo_tool or PhotoTool()

    def assemble(
        self,
        filter_params: FilterParams,
        slots: Sequence[TimeSlot],
        selected_items: Sequence[SelectedItem],
        budget_state: BudgetState,
        generated_text: GeneratedText,
        **meta_extra: Any,
    ) -> ItineraryDocument:
        """
        Raises:
            ValueError if slots and selected_items differ in length.
        """
        if len(slots) != len(selected_items):
            raise ValueError(
                f"slot/item mismatch: {len(slots)} slots, {len(selected_items)} items"
            )

        items: list[ItineraryItem] = []
        previous: Optional[Place] = None
        for index, (slot, selected) in enumerate(zip(slots, selected_items)):
            text = _text_at(generated_text, index)
            items.append(self._item(slot, selected, text, previous))
            if selected.place is not None:
                previous = selected.place

        return ItineraryDocument(
            meta     = self._meta(filter_params, **meta_extra),
            title    = generated_text.title,
            subtitle = generated_text.subtitle,
            weather  = generated_text.weather,
            budget   = budget_state,
            items    = items,
        )

    # ── Internal ──────────────────────────────────────────────────────────────

    def _item(
        self,
        slot: TimeSlot,
        selected: SelectedItem,
        text: ItemText,
        previous: Optional[Place],
    ) -> ItineraryItem:
        place = selected.place
        if place is None:
            return ItineraryItem(
                time           = slot.time,
                label          = slot.label,
                title          = FREE_TIME_TITLE,
                category       = selected.category.value,
                description    = text.description or FREE_TIME_DESCRIPTION,
                tips           = text.tips,
                estimated_cost = 0.0,
                is_placeholder = True,
            )

        return ItineraryItem(
            time           = slot.time,
            label          = slot.label,
            title          = place.name,
            place_id       = place.id,
            category       = selected.category.value,
            address        = place.address,
            rating         = place.rating,
            lat            = place.lat,
            lng            = place.lng,
            description    = text.description,
            tips           = text.tips,
            estimated_cost = selected.estimated_cost,
            approx_cost    = selected.approx_cost,
            duration       = selected.duration,
            photos         = self.photo_tool.item_photos(place, selected.category),
            distance_from_previous       = self._distance(previous, place),
            travel_minutes_from_previous = self._travel_minutes(previous, place),
        )

    def _distance(self, previous: Optional[Place], place: Place) -> Optional[float]:
        distance = self.distance_tool.between(previous, place)
        return None if distance is None else round(distance, 2)

    def _travel_minutes(self, previous: Optional[Place], place: Place) -> Optional[float]:
        # the speed model is km/h whatever unit distances are reported in
        if previous is None or not (previous.has_coordinates and place.has_coordinates):
            return None
        km = haversine_km(previous.lat, previous.lng, place.lat, place.lng)
        return round(self.time_tool.estimate_travel_time(km), 1)

    def _meta(self, filter_params: FilterParams, **extra: Any) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "city":         filter_params.city,
            "date":         filter_params.date.isoformat(),
            "audience":     filter_params.audience.value,
            "interests":    list(filter_params.interests),
            "budget":       filter_params.budget,
            "budget_level": budget_level(filter_params.budget),
            "party_size":   filter_params.party_size,
            "currency":     config.CURRENCY_UNIT,
            "distance_unit": self.distance_tool.unit,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        meta.update(extra)
        return meta


def _text_at(generated_text: GeneratedText, index: int) -> ItemText:
    if index < len(generated_text.items):
        return generated_text.items[index]
    return ItemText()


def assemble(filter_params, slots, selected_items, budget_state, generated_text, **meta_extra):
    return ItineraryAssembler().assemble(
        filter_params, slots, selected_items, budget_state, generated_text, **meta_extra
    )
