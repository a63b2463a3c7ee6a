"""
modules/tool_usage/distance_tool.py
-------------------------------------
Straight-line (haversine) distance between two places.
Local computation, no external API. Used only to annotate the travel hop
between consecutive itinerary items; no route optimization is done.
"""

from __future__ import annotations
import math
from typing import Optional

from schemas.itinerary import Place
import config


_EARTH_RADIUS_KM = 6371.0
_KM_TO_MILES = 0.621371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points.

    Args:
        lat1, lon1: Point A (decimal degrees).
        lat2, lon2: Point B (decimal degrees).

    Returns:
        Distance in kilometres.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    return 2 * _EARTH_RADIUS_KM * math.asin(math.sqrt(a))


class DistanceTool:

    def __init__(self, unit: str = config.DISTANCE_UNIT):
        self.unit = unit

    def calculate(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Distance in self.unit ("km" or "miles")."""
        km = haversine_km(lat1, lon1, lat2, lon2)
        if self.unit == "miles":
            return km * _KM_TO_MILES
        return km

    def between(self, a: Optional[Place], b: Optional[Place]) -> Optional[float]:
        """None unless both places exist and carry coordinates."""
        if a is None or b is None or not (a.has_coordinates and b.has_coordinates):
            return None
        return self.calculate(a.lat, a.lng, b.lat, b.lng)
