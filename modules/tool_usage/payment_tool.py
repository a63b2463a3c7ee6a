"""
modules/tool_usage/payment_tool.py
------------------------------------
Stripe Checkout over the REST API (form-encoded, Bearer secret key), plus
verification of the `Stripe-Signature` header on webhook calls.

Signature scheme: header "t=<unix ts>,v1=<hex>[,v1=<hex>...]"; expected
v1 = HMAC-SHA256(webhook_secret, f"{t}.{raw_body}"). Timestamps older than
the tolerance are rejected.
"""

from __future__ import annotations
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import requests

from schemas.itinerary import FilterParams
from schemas.result import Result
import config

logger = logging.getLogger(__name__)


class WebhookSignatureError(ValueError):
    pass


class StripeCheckoutTool:

    def __init__(
        self,
        secret_key: str = config.STRIPE_SECRET_KEY,
        price_id: str = config.STRIPE_PRICE_ID,
        webhook_secret: str = config.STRIPE_WEBHOOK_SECRET,
        api_url: str = config.STRIPE_API_URL,
        site_url: str = config.PUBLIC_SITE_URL,
        tolerance_seconds: int = config.STRIPE_WEBHOOK_TOLERANCE_SECONDS,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.secret_key = secret_key
        self.price_id = price_id
        self.webhook_secret = webhook_secret
        self.api_url = api_url.rstrip("/")
        self.site_url = site_url.rstrip("/")
        self.tolerance_seconds = tolerance_seconds
        self.timeout = timeout
        self.session = session or requests.Session()

    # ── Checkout ──────────────────────────────────────────────────────────────

    def create_session(self, params: FilterParams) -> Result[str]:
        """
        Create a one-off Checkout Session for one itinerary.

        Returns:
            Result with the hosted checkout URL.
        """
        if not self.secret_key or not self.price_id:
            return Result.failure("stripe", "STRIPE_SECRET_KEY / STRIPE_PRICE_ID are not configured")

        query = (
            f"city={quote(params.city)}&audience={params.audience.value}"
            f"&interests={quote(','.join(params.interests))}"
            f"&date={params.date.isoformat()}&budget={params.budget}"
        )
        form = {
            "mode": "payment",
            "line_items[0][price]": self.price_id,
            "line_items[0][quantity]": "1",
            "success_url": f"{self.site_url}/success?session_id={{CHECKOUT_SESSION_ID}}&{query}",
            "cancel_url": f"{self.site_url}/preview?{query}",
            "metadata[city]": params.city,
            "metadata[audience]": params.audience.value,
            "metadata[interests]": ",".join(params.interests),
            "metadata[date]": params.date.isoformat(),
            "metadata[budget]": str(params.budget),
        }
        try:
            response = self.session.post(
                f"{self.api_url}/checkout/sessions",
                data=form,
                headers={"Authorization": f"Bearer {self.secret_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            url = response.json().get("url")
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Stripe checkout session failed: %s", exc)
            return Result.failure("stripe", str(exc))

        if not url:
            return Result.failure("stripe", "checkout session response has no url")
        return Result.success(url)

    # ── Webhook ───────────────────────────────────────────────────────────────

    def verify_webhook(self, payload: bytes, signature_header: Optional[str], now: Optional[float] = None) -> dict[str, Any]:
        """
        Verify and decode a webhook body.

        Raises:
            WebhookSignatureError on a missing/invalid/expired signature or a non-JSON body.
        """
        if not self.webhook_secret:
            raise WebhookSignatureError("STRIPE_WEBHOOK_SECRET is not configured")
        if not signature_header:
            raise WebhookSignatureError("missing Stripe-Signature header")

        timestamp, signatures = _parse_signature_header(signature_header)
        if timestamp is None or not signatures:
            raise WebhookSignatureError("malformed Stripe-Signature header")

        now = time.time() if now is None else now
        if abs(now - timestamp) > self.tolerance_seconds:
            raise WebhookSignatureError("timestamp outside the tolerance window")

        signed = f"{timestamp}.".encode() + payload
        expected = hmac.new(self.webhook_secret.encode(), signed, hashlib.sha256).hexdigest()
        if not any(hmac.compare_digest(expected, s) for s in signatures):
            raise WebhookSignatureError("signature mismatch")

        try:
            return json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError(f"invalid JSON body: {exc}") from exc


def sign_payload(payload: bytes, secret: str, timestamp: int) -> str:
    """Build a Stripe-Signature header value (used by tests and local tooling)."""
    digest = hmac.new(secret.encode(), f"{timestamp}.".encode() + payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def _parse_signature_header(header: str) -> tuple[Optional[int], list[str]]:
    timestamp: Optional[int] = None
    signatures: list[str] = []
    for part in header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None, []
        elif key == "v1" and value:
            signatures.append(value)
    return timestamp, signatures
