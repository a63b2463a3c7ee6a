"""
modules/tool_usage/email_tool.py
----------------------------------
Delivers a finished itinerary by email through the Resend HTTP API.

Without RESEND_API_KEY the tool runs in mock mode: nothing is sent and the
message id is "mock_email_<ms timestamp>", so local runs and tests never
need credentials.
"""

from __future__ import annotations
import html
import logging
import time
from typing import Any, Mapping, Optional, Union

import requests

from schemas.itinerary import ItineraryDocument
from schemas.result import Result
import config

logger = logging.getLogger(__name__)

Itinerary = Union[ItineraryDocument, Mapping[str, Any]]


class EmailTool:

    def __init__(
        self,
        api_key: str = config.RESEND_API_KEY,
        api_url: str = config.RESEND_API_URL,
        sender: str = config.EMAIL_FROM,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.sender = sender
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def mock_mode(self) -> bool:
        return not self.api_key

    def send_itinerary(self, to: str, itinerary: Itinerary, city: str) -> Result[str]:
        """
        Args:
            to:        Recipient address.
            itinerary: ItineraryDocument or its to_dict() form (as posted by the client).
            city:      Used in the subject line.

        Returns:
            Result with the provider message id.
        """
        if self.mock_mode:
            message_id = f"mock_email_{int(time.time() * 1000)}"
            logger.info("Mock email to %s (%s)", to, message_id)
            return Result.success(message_id)

        body = {
            "from": self.sender,
            "to": [to],
            "subject": f"Your {city} itinerary is ready!",
            "html": render_html(itinerary),
        }
        try:
            response = self.session.post(
                self.api_url,
                json=body,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            message_id = response.json().get("id")
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Email delivery to %s failed: %s", to, exc)
            return Result.failure("email", str(exc))

        if not message_id:
            return Result.failure("email", "provider response has no message id")
        return Result.success(message_id)


def render_html(itinerary: Itinerary) -> str:
    """Minimal inline-styled HTML; every dynamic value is escaped."""
    data = itinerary.to_dict() if isinstance(itinerary, ItineraryDocument) else dict(itinerary)

    rows = []
    for item in data.get("items") or []:
        cost = f" · {_esc(item.get('approx_cost'))}" if item.get("approx_cost") else ""
        rows.append(
            "<tr>"
            f"<td style=\"padding:8px;font-weight:bold;vertical-align:top\">{_esc(item.get('time'))}</td>"
            f"<td style=\"padding:8px\"><strong>{_esc(item.get('title'))}</strong>"
            f"<br><em>{_esc(item.get('label'))}{cost}</em>"
            f"<p>{_esc(item.get('description'))}</p>"
            f"<p style=\"color:#666\">{_esc(item.get('tips'))}</p></td>"
            "</tr>"
        )

    weather = data.get("weather") or {}
    return (
        "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"UTF-8\">"
        f"<title>{_esc(data.get('title'))}</title></head>"
        "<body style=\"font-family:Segoe UI,Tahoma,sans-serif;color:#333\">"
        f"<h1>{_esc(data.get('title'))}</h1>"
        f"<p>{_esc(data.get('subtitle'))}</p>"
        f"<p><strong>Weather:</strong> {_esc(weather.get('forecast'))} {_esc(weather.get('clothing'))}</p>"
        f"<table>{''.join(rows)}</table>"
        "</body></html>"
    )


def _esc(value: Any) -> str:
    return html.escape(str(value or ""))
