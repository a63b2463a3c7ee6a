"""
server.py
---------
FastAPI application for the itinerary service.

Run dev server:
    uvicorn server:app --reload --port 8000

Endpoints:
    GET  /
    POST /api/generate-itinerary
    POST /api/generate-preview
    POST /api/create-checkout-session
    POST /api/pay/webhook
    POST /api/send-email
    GET  /api/photos/google-places/{photo_reference}
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Optional, Union

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from modules.input.filter_intake import InvalidFilterParams, parse_filter_params
from modules.memory.itinerary_cache import ItineraryCache
from modules.planning.itinerary_builder import ItineraryBuilder
from modules.tool_usage.email_tool import EmailTool
from modules.tool_usage.llm_client import make_llm_client
from modules.tool_usage.payment_tool import StripeCheckoutTool, WebhookSignatureError
from modules.tool_usage.photo_tool import PhotoTool
from modules.tool_usage.text_tool import TextGenerator
from schemas.result import CollaboratorUnavailable
import config

logger = logging.getLogger(__name__)


# ── Request models ────────────────────────────────────────────────────────────
# Every field is optional here; filter_intake reports what is missing.

class FilterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    city: Optional[str] = None
    audience: Optional[str] = None
    interests: Optional[Union[list[str], str]] = None
    date: Optional[str] = None
    budget: Optional[Union[int, float, str]] = None


class CheckoutRequest(BaseModel):
    formData: FilterRequest


class EmailRequest(BaseModel):
    email: Optional[str] = None
    itinerary: Optional[dict[str, Any]] = None
    formData: Optional[FilterRequest] = None


# ── App factory ───────────────────────────────────────────────────────────────

def create_app(
    builder: Optional[ItineraryBuilder] = None,
    payment: Optional[StripeCheckoutTool] = None,
    email: Optional[EmailTool] = None,
    photos: Optional[PhotoTool] = None,
) -> FastAPI:
    """Collaborators are injectable so tests can run without network or keys."""
    if builder is None:
        builder = ItineraryBuilder(
            text_generator=TextGenerator(make_llm_client()),
            cache=ItineraryCache() if config.CACHE_ENABLED else None,
        )
    payment = payment or StripeCheckoutTool()
    email = email or EmailTool()
    photos = photos or PhotoTool()

    app = FastAPI(title="Day Itinerary API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in config.CORS_ORIGIN.split(",")],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidFilterParams)
    async def invalid_params_handler(request: Request, exc: InvalidFilterParams):
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "missing": exc.missing, "invalid": exc.invalid},
        )

    @app.exception_handler(CollaboratorUnavailable)
    async def collaborator_handler(request: Request, exc: CollaboratorUnavailable):
        logger.error("Build aborted: %s", exc)
        return JSONResponse(status_code=503, content={"error": str(exc), "source": exc.error.source})

    @app.get("/")
    async def root():
        return {"message": "Itinerary service is running"}

    @app.post("/api/generate-itinerary")
    async def generate_itinerary(request: FilterRequest):
        params = parse_filter_params(request.model_dump())
        document = await builder.build_itinerary(params)
        return document.to_dict()

    @app.post("/api/generate-preview")
    async def generate_preview(request: FilterRequest):
        params = parse_filter_params(request.model_dump())
        return await builder.build_preview(params)

    @app.post("/api/create-checkout-session")
    async def create_checkout_session(request: CheckoutRequest):
        params = parse_filter_params(request.formData.model_dump())
        result = await asyncio.to_thread(payment.create_session, params)
        if not result.ok:
            raise HTTPException(status_code=503, detail=str(result.error))
        return {"url": result.value}

    @app.post("/api/pay/webhook")
    async def stripe_webhook(request: Request):
        payload = await request.body()
        try:
            event = payment.verify_webhook(payload, request.headers.get("stripe-signature"))
        except WebhookSignatureError as exc:
            logger.warning("Rejected webhook: %s", exc)
            raise HTTPException(status_code=400, detail=f"Webhook Error: {exc}")

        if event.get("type") == "checkout.session.completed":
            session = (event.get("data") or {}).get("object") or {}
            logger.info("Payment completed for session %s (%s)",
                        session.get("id"), (session.get("metadata") or {}).get("city"))
        return {"received": True}

    @app.post("/api/send-email")
    async def send_email(request: EmailRequest):
        if not request.email or not request.itinerary or request.formData is None:
            raise HTTPException(status_code=400, detail="Missing required fields")
        city = request.formData.city or "your"
        result = await asyncio.to_thread(email.send_itinerary, request.email, request.itinerary, city)
        if not result.ok:
            raise HTTPException(status_code=502, detail="Failed to send email")
        return {"success": True, "messageId": result.value}

    @app.get(config.PHOTO_PROXY_PATH.rstrip("/") + "/{photo_reference}")
    async def photo_proxy(photo_reference: str, maxwidth: int = 800):
        result = await asyncio.to_thread(photos.fetch, photo_reference, maxwidth)
        if not result.ok:
            raise HTTPException(status_code=502, detail="Failed to load photo")
        return Response(
            content=result.value.content,
            media_type=result.value.content_type,
            headers={"Cache-Control": "public, max-age=86400"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    config.configure_logging()
    uvicorn.run("server:app", host="0.0.0.0", port=8000)
