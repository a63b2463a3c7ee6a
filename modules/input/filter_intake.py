"""
modules/input/filter_intake.py
-------------------------------
Validates a raw request payload into FilterParams before any build starts.

Rules:
  city       : required, non-empty string
  interests  : required (not null); list of tags or a comma-separated string
  date       : required, YYYY-MM-DD
  audience   : him | her | couple | kids (+ aliases); anything else → GENERIC
  budget     : coerced to a non-negative int; missing/invalid → DEFAULT_BUDGET

Input errors are the only failure a caller ever sees from a build: every
missing or invalid field is reported at once via InvalidFilterParams.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Mapping

from schemas.itinerary import Audience, FilterParams
import config

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("city", "interests", "date")

_AUDIENCE_ALIASES: dict[str, Audience] = {
    "him": Audience.HIM,
    "man": Audience.HIM,
    "her": Audience.HER,
    "woman": Audience.HER,
    "couple": Audience.COUPLE,
    "couples": Audience.COUPLE,
    "kids": Audience.KIDS,
    "kid": Audience.KIDS,
    "children": Audience.KIDS,
    "child": Audience.KIDS,
    "family": Audience.KIDS,
}


class InvalidFilterParams(ValueError):
    """Request rejected before the build; lists every offending field."""

    def __init__(self, missing: list[str] | None = None, invalid: list[str] | None = None):
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
        parts = []
        if self.missing:
            parts.append(f"missing required field(s): {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid field(s): {', '.join(self.invalid)}")
        super().__init__("; ".join(parts) or "invalid filter parameters")


def parse_filter_params(payload: Mapping[str, Any]) -> FilterParams:
    """
    Build FilterParams from a raw request body.

    Raises:
        InvalidFilterParams if a required field is missing or the date is unparseable.
    """
    missing = [name for name in _REQUIRED_FIELDS if _is_blank(payload.get(name))]
    invalid: list[str] = []

    trip_date = None
    if "date" not in missing:
        trip_date = parse_date(payload.get("date"))
        if trip_date is None:
            invalid.append("date")

    interests: tuple[str, ...] = ()
    if "interests" not in missing:
        interests = parse_interests(payload.get("interests"))

    if missing or invalid:
        raise InvalidFilterParams(missing=missing, invalid=invalid)

    audience = parse_audience(payload.get("audience"))
    return FilterParams(
        city=str(payload["city"]).strip(),
        audience=audience,
        interests=interests,
        date=trip_date,
        budget=parse_budget(payload.get("budget")),
        party_size=config.PARTY_SIZE.get(audience.value, 1),
    )


def parse_audience(raw: Any) -> Audience:
    if isinstance(raw, str):
        audience = _AUDIENCE_ALIASES.get(raw.strip().lower())
        if audience is not None:
            return audience
    logger.info("Unrecognized audience %r, using generic defaults", raw)
    return Audience.GENERIC


def parse_interests(raw: Any) -> tuple[str, ...]:
    """Normalize to lower-case tags, caller order kept, duplicates dropped."""
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = [i for i in raw if isinstance(i, str)]
    else:
        return ()
    cleaned = (i.strip().lower() for i in items)
    return tuple(dict.fromkeys(i for i in cleaned if i))


def parse_date(raw: Any) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        # accept full ISO timestamps too ("2025-09-19T00:00:00.000Z")
        return datetime.strptime(raw.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_budget(raw: Any, default: int = config.DEFAULT_BUDGET) -> int:
    """Coerce "150", 150.7, "150€" → 150. Missing, invalid, non-finite or negative → default."""
    if isinstance(raw, bool) or raw is None:
        return default
    if isinstance(raw, float) and not math.isfinite(raw):
        logger.info("Non-finite budget %r, using default %s", raw, default)
        return default
    if isinstance(raw, (int, float)):
        value = int(raw)
    elif isinstance(raw, str):
        match = re.match(r"\s*(-?\d+)", raw)
        if not match:
            logger.info("Invalid budget %r, using default %s", raw, default)
            return default
        value = int(match.group(1))
    else:
        return default
    if value < 0:
        logger.info("Negative budget %r, using default %s", raw, default)
        return default
    return value


def budget_level(budget: int) -> str:
    """low < 50 ≤ medium < 150 ≤ high"""
    if budget < 50:
        return "low"
    if budget < 150:
        return "medium"
    return "high"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False
