"""
config.py
---------
Central configuration for the day-plan itinerary service.
All secrets loaded from environment variables, never hard-coded.
"""

import logging
import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── LLM ──────────────────────────────────────────────────────────────────────
LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gemini-1.5-flash")
LLM_TIMEOUT_SECONDS: int = int(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Set USE_STUB_LLM=true to skip all LLM API calls; every text field then
# comes from the templated fallbacks in text_tool.py.
USE_STUB_LLM: bool = _env_bool("USE_STUB_LLM", "true")
LLM_API_KEY: str = os.getenv("LLM_API_KEY", os.getenv("GEMINI_API_KEY", ""))


# ── External APIs ─────────────────────────────────────────────────────────────
GOOGLE_PLACES_API_KEY: str = os.getenv(
    "GOOGLE_PLACES_API_KEY", os.getenv("GOOGLE_MAPS_KEY", "")
)
GOOGLE_PLACES_TEXT_SEARCH_URL: str = os.getenv(
    "GOOGLE_PLACES_TEXT_SEARCH_URL",
    "https://maps.googleapis.com/maps/api/place/textsearch/json",
)
PLACES_RESULTS_PER_QUERY: int = int(os.getenv("PLACES_RESULTS_PER_QUERY", "5"))
GOOGLE_PLACES_PHOTO_URL: str = os.getenv(
    "GOOGLE_PLACES_PHOTO_URL", "https://maps.googleapis.com/maps/api/place/photo"
)
PHOTOS_PER_PLACE: int = int(os.getenv("PHOTOS_PER_PLACE", "3"))
# Public path of the photo proxy route; photo_reference is appended.
PHOTO_PROXY_PATH: str = os.getenv("PHOTO_PROXY_PATH", "/api/photos/google-places")
# Use the bundled city datasets when the live search fails or finds nothing.
PLACES_FALLBACK_TO_SEED: bool = _env_bool("PLACES_FALLBACK_TO_SEED", "true")

STRIPE_API_URL: str = os.getenv("STRIPE_API_URL", "https://api.stripe.com/v1")
STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")
STRIPE_PRICE_ID: str = os.getenv("STRIPE_PRICE_ID", "")
STRIPE_WEBHOOK_SECRET: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")
STRIPE_WEBHOOK_TOLERANCE_SECONDS: int = int(os.getenv("STRIPE_WEBHOOK_TOLERANCE_SECONDS", "300"))

RESEND_API_URL: str = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
EMAIL_FROM: str = os.getenv("EMAIL_FROM", "FlipTrip <onboarding@resend.dev>")

HTTP_TIMEOUT_SECONDS: int = int(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# ── HTTP surface ──────────────────────────────────────────────────────────────
CORS_ORIGIN: str = os.getenv("CORS_ORIGIN", "*")
PUBLIC_SITE_URL: str = os.getenv("PUBLIC_SITE_URL", os.getenv("CORS_ORIGIN", "http://localhost:5173"))

# ── Budget ────────────────────────────────────────────────────────────────────
CURRENCY_UNIT: str = os.getenv("CURRENCY_UNIT", "EUR")
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "€")
DEFAULT_BUDGET: int = int(os.getenv("DEFAULT_BUDGET", "100"))

# Single tolerance band shared by the optimizer and the evaluator:
# plan is acceptable inside [target*(1-tol), target*(1+tol)].
BUDGET_TOLERANCE: float = float(os.getenv("BUDGET_TOLERANCE", "0.30"))

# Google price_level → estimated cost per person
PRICE_LEVEL_COSTS: dict[int, float] = {
    0: 0.0,     # free
    1: 10.0,    # inexpensive
    2: 25.0,    # moderate
    3: 50.0,    # expensive
    4: 100.0,   # very expensive
}
DEFAULT_PLACE_COST: float = PRICE_LEVEL_COSTS[2]

# People paying for each stop, per audience
PARTY_SIZE: dict[str, int] = {
    "him": 1,
    "her": 1,
    "couple": 2,
    "kids": 3,
    "generic": 1,
}

# ── Units ─────────────────────────────────────────────────────────────────────
TIME_UNIT: str = os.getenv("TIME_UNIT", "minutes")
DISTANCE_UNIT: str = os.getenv("DISTANCE_UNIT", "km")

# ── Failure policy ────────────────────────────────────────────────────────────
# false → collaborator failures degrade to templated text / empty pools.
# true  → collaborator failures abort the build with CollaboratorUnavailable.
STRICT_COLLABORATORS: bool = _env_bool("STRICT_COLLABORATORS", "false")

# ── Memory Backend ────────────────────────────────────────────────────────────
CACHE_ENABLED: bool = _env_bool("CACHE_ENABLED", "true")
CACHE_MAX_ENTRIES: int = int(os.getenv("CACHE_MAX_ENTRIES", "128"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler once; safe to call from every entry point."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
