"""
modules/memory/itinerary_cache.py
-----------------------------------
In-process memoization of finished itineraries, keyed by
FilterParams.signature().

Passed explicitly to ItineraryBuilder; there is no module-level instance.
Oldest entry is evicted once max_entries is reached. Entries are stored
as-is; callers must treat returned documents as read-only.
"""

from __future__ import annotations
import threading
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Optional

from schemas.itinerary import FilterParams, ItineraryDocument
import config


class ItineraryCache:

    def __init__(self, max_entries: int = config.CACHE_MAX_ENTRIES) -> None:
        self.max_entries = max(1, max_entries)
        self._store: OrderedDict[tuple, dict[str, Any]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, params: FilterParams) -> Optional[ItineraryDocument]:
        """Cached document for an identical request, or None."""
        key = params.signature()
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self.misses += 1
                return None
            self._store.move_to_end(key)
            self.hits += 1
            return entry["document"]

    def put(self, params: FilterParams, document: ItineraryDocument) -> None:
        key = params.signature()
        with self._lock:
            self._store[key] = {
                "document": document,
                "stored_at": datetime.now(timezone.utc).isoformat(),
            }
            self._store.move_to_end(key)
            while len(self._store) > self.max_entries:
                self._store.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
