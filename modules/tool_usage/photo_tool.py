"""
modules/tool_usage/photo_tool.py
----------------------------------
Photos for itinerary items.

  - Places with Google photo references get proxy URLs served by this
    service (the API key never reaches the client).
  - Everything else gets the stock photos of its category.

fetch() is the proxy's upstream call to the Google Place Photo endpoint.
"""

from __future__ import annotations
import logging
from typing import NamedTuple, Optional
from urllib.parse import quote

import requests

from schemas.itinerary import Category, Place
from schemas.result import Result
import config

logger = logging.getLogger(__name__)

_FULL_SIZE = "w=800&h=600"
_THUMB_SIZE = "w=200&h=150"
_FULL_WIDTH = 800
_THUMB_WIDTH = 200

_UNSPLASH = "https://images.unsplash.com/{id}?" + _FULL_SIZE + "&fit=crop&q=80"

_CATEGORY_PHOTOS: dict[Category, tuple[str, ...]] = {
    Category.RESTAURANT: ("photo-1517248135467-4c7edcad34c4", "photo-1555396273-367ea4eb4db5"),
    Category.CAFE:       ("photo-1501339847302-ac426a4a7cbb", "photo-1554118811-1e0d58224f24"),
    Category.ATTRACTION: ("photo-1539650116574-75c0c6d73c6e", "photo-1578662996442-48f60103fc96"),
    Category.MUSEUM:     ("photo-1555529669-2269763671c0", "photo-1578662996442-48f60103fc96"),
    Category.PARK:       ("photo-1506905925346-21bda4d32df4", "photo-1488646953014-85cb44e25828"),
    Category.BAR:        ("photo-1514933651103-005eec06c04b", "photo-1470337458703-46ad1756a187"),
    Category.SHOPPING:   ("photo-1441986300917-64674bd600d8", "photo-1555529771-835f59fc5efe"),
}


class PhotoContent(NamedTuple):
    content: bytes
    content_type: str


class PhotoTool:

    def __init__(
        self,
        api_key: str = config.GOOGLE_PLACES_API_KEY,
        api_url: str = config.GOOGLE_PLACES_PHOTO_URL,
        proxy_path: str = config.PHOTO_PROXY_PATH,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.proxy_path = proxy_path.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def item_photos(self, place: Place, category: Category) -> list[dict[str, str]]:
        """Up to PHOTOS_PER_PLACE proxied Google photos, else the category's stock photos."""
        if place.photo_refs:
            return [
                {
                    "url":       self._proxy_url(ref, _FULL_WIDTH),
                    "thumbnail": self._proxy_url(ref, _THUMB_WIDTH),
                    "source":    "google_places",
                }
                for ref in place.photo_refs[: config.PHOTOS_PER_PLACE]
            ]
        return category_photos(category)

    def fetch(self, photo_reference: str, max_width: int = _FULL_WIDTH) -> Result[PhotoContent]:
        """Download one Google photo for the proxy route."""
        if not self.api_key:
            return Result.failure("photos", "GOOGLE_PLACES_API_KEY is not configured")
        params = {"maxwidth": max_width, "photoreference": photo_reference, "key": self.api_key}
        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Photo download failed for %s: %s", photo_reference[:16], exc)
            return Result.failure("photos", str(exc))
        content_type = response.headers.get("content-type") or "image/jpeg"
        return Result.success(PhotoContent(response.content, content_type))

    def _proxy_url(self, ref: str, width: int) -> str:
        return f"{self.proxy_path}/{quote(ref, safe='')}?maxwidth={width}"


def category_photos(category: Category) -> list[dict[str, str]]:
    ids = _CATEGORY_PHOTOS.get(category, _CATEGORY_PHOTOS[Category.ATTRACTION])
    photos = []
    for photo_id in ids:
        url = _UNSPLASH.format(id=photo_id)
        photos.append({
            "url":       url,
            "thumbnail": url.replace(_FULL_SIZE, _THUMB_SIZE),
            "source":    "unsplash",
        })
    return photos
