"""
modules/tool_usage/time_tool.py
---------------------------------
Speed-based travel estimate between two itinerary stops.
Local computation, no external API.
"""

from __future__ import annotations

import config


_DEFAULT_SPEED_KM_PER_H = 15.0  # mixed walking / public transport in a city centre


class TimeTool:

    def __init__(self, unit: str = config.TIME_UNIT, speed_kmh: float = _DEFAULT_SPEED_KM_PER_H):
        self.unit = unit
        self.speed_kmh = speed_kmh

    def estimate_travel_time(self, distance_km: float) -> float:
        """
        Args:
            distance_km: Straight-line distance in kilometres (haversine_km).

        Returns:
            Travel time in self.unit (default: minutes).
        """
        minutes = distance_km / self.speed_kmh * 60
        if self.unit == "seconds":
            return minutes * 60
        return minutes
