"""
modules/tool_usage/text_tool.py
---------------------------------
Generated copy for an itinerary: title, subtitle, weather block, and a
description plus tips per location.

Each generate_* coroutine returns a Result. Without an LLM client the
fallback_* template is the answer (a success: templates-only is a supported
setup). With a client, an SDK error or an empty answer is a failure value;
the builder then uses the matching template, built from the same inputs,
so no field is ever left blank.

LLM calls are blocking SDK calls; they run in a worker thread so several
can be awaited together with asyncio.gather.
"""

from __future__ import annotations
import asyncio
import json
import logging
import re
from typing import Any, Callable, Optional

from modules.tool_usage.llm_client import LLMClient
from schemas.itinerary import Audience, Category, FilterParams, Place, WeatherBlock
from schemas.result import Result

logger = logging.getLogger(__name__)


# ── Prompts ───────────────────────────────────────────────────────────────────

TITLE_PROMPT = """Write a short, inspiring English title for a one-day itinerary.
It must contain the city name and reflect the chosen interests. One sentence at most.
Use sentence case (only the first word and proper nouns capitalized). No surrounding quotes.

City: {city}
Interests: {interests}
Audience: {audience}

Examples:
- Romantic Venice
- Adventures in Barcelona
- Cultural Paris

Title:"""

SUBTITLE_PROMPT = """Write an inspiring English subtitle for a one-day itinerary.
Mention the date, who the day is for (him, her, a couple, children) and the chosen interests.
3-5 sentences in the style of a film trailer. No surrounding quotes.

City: {city}
Date: {date}
Interests: {interests}
Audience: {audience}

Subtitle:"""

WEATHER_PROMPT = """Describe the typical weather in {city} on {date} in 2 short English sentences,
then give one concrete clothing suggestion and one friendly comfort tip.
The day's interests are: {interests}.

Respond with JSON only:
{{"forecast": "...", "clothing": "...", "tips": "..."}}"""

LOCATION_DESCRIPTION_PROMPT = """Write 2-3 English sentences about this stop on a day itinerary.
Describe its atmosphere through the lens of the traveller's interests. Inspiring, not a list of facts.
No surrounding quotes.

Location: {name}
Address: {address}
Category: {category}
Interests: {interests}
Audience: {audience}

Description:"""

LOCATION_TIPS_PROMPT = """Write 1-2 short, friendly English tips for visiting this place.
No surrounding quotes.

Location: {name}
Category: {category}
Interests: {interests}
Audience: {audience}

Tips:"""


# ── Fallback templates ────────────────────────────────────────────────────────

_TITLE_INTERESTS: dict[str, str] = {
    "swimming":     "Aquatic adventures",
    "zoo":          "Wildlife discoveries",
    "playground":   "Family fun",
    "adventure":    "Adventures",
    "culture":      "Cultural treasures",
    "food":         "Culinary journey",
    "romantic":     "Romantic escapes",
    "art":          "Artistic discoveries",
    "music":        "Musical journey",
    "nature":       "Nature exploration",
    "history":      "Historical wonders",
    "shopping":     "Shopping adventures",
    "nightlife":    "Night discoveries",
    "relaxation":   "Peaceful retreat",
    "wellness":     "Wellness journey",
    "architecture": "Architectural marvels",
    "photography":  "Photo adventures",
    "local":        "Local discoveries",
    "sports":       "Active adventures",
    "outdoor":      "Outdoor exploration",
    "indoor":       "Indoor discoveries",
}

_TITLE_PREFIX: dict[Audience, str] = {
    Audience.KIDS:   "Family",
    Audience.COUPLE: "Romantic",
    Audience.HIM:    "Epic",
    Audience.HER:    "Beautiful",
}

_AUDIENCE_PHRASE: dict[Audience, str] = {
    Audience.HIM:    "for him",
    Audience.HER:    "for her",
    Audience.COUPLE: "for couples",
    Audience.KIDS:   "for children",
}

_SUBTITLE_BODIES: dict[str, str] = {
    "romantic": "fall in love with {city} all over again. Stroll through enchanting streets, "
                "share intimate moments, and let the city's magic weave around you.",
    "culture":  "immerse yourself in the cultural heart of {city}. Discover artistic treasures "
                "and let creativity inspire your soul.",
    "adventure": "unleash your adventurous spirit in {city}. Explore hidden paths and embrace "
                 "the thrill of discovery.",
    "food":     "embark on a culinary journey through {city}. Taste authentic flavours and let "
                "local cuisine tell the story of this place.",
    "art":      "explore the artistic soul of {city}. Wander creative spaces and let art awaken "
                "your imagination.",
    "music":    "let the rhythm of {city} guide your steps. Feel the beat of local culture from "
                "morning to night.",
    "nature":   "reconnect with nature in the heart of {city}. Breathe fresh air and discover "
                "green oases between the streets.",
    "history":  "journey through the historical layers of {city}. Walk in the footsteps of "
                "legends and let the past come alive.",
    "shopping": "discover the shopping treasures of {city}. Hunt for unique finds in local "
                "markets and boutiques.",
    "wellness": "nurture body and soul in {city}. Slow down, recharge, and let the city restore "
                "your energy.",
    "architecture": "marvel at the architectural wonders of {city}. Admire iconic buildings and "
                    "the stories carved into their stones.",
    "zoo":      "embark on a wildlife adventure in {city}. Meet amazing creatures and create "
                "magical memories with every step.",
    "swimming": "dive into aquatic adventures in {city}. Splash, play, and let the water set the "
                "rhythm of the day.",
}
_DEFAULT_SUBTITLE_BODY = (
    "discover the magic of {city}. Experience authentic moments and let the city's "
    "unique charm captivate your heart."
)

_DESCRIPTIONS: dict[Category, str] = {
    Category.CAFE:       "{name} is a cozy corner full of local charm. The perfect spot to pause, "
                         "savour authentic flavours and watch the city come alive.",
    Category.RESTAURANT: "Authentic flavours and a welcoming atmosphere define {name}. Every dish "
                         "tells a story of local traditions and passionate cooking.",
    Category.MUSEUM:     "History and culture come alive within the walls of {name}. Each exhibit "
                         "opens a window to fascinating stories.",
    Category.PARK:       "{name} is a green escape from city life. Fresh air, beautiful views and "
                         "peaceful moments await.",
    Category.ATTRACTION: "{name} captures the true spirit of the city. A place where memories are "
                         "made and stories begin to unfold.",
    Category.BAR:        "Evening atmosphere and crafted drinks make {name} the perfect social "
                         "setting. A place where conversations flow and the night comes alive.",
    Category.SHOPPING:   "{name} is full of local finds and small surprises. Browse slowly and "
                         "take a piece of the city home.",
}
_DEFAULT_DESCRIPTION = (
    "{name} offers a unique experience that captures the essence of local culture. "
    "A fine addition to your day in the city."
)

_TIPS: dict[Category, str] = {
    Category.CAFE:       "Try the local specialty - it will tell you more about the city than any guidebook.",
    Category.RESTAURANT: "Ask for the chef's recommendation, and book ahead for the evening.",
    Category.MUSEUM:     "Take your time and check for free-entry hours before you go.",
    Category.PARK:       "Bring a camera and comfortable shoes - the views are worth a slow walk.",
    Category.ATTRACTION: "Visit during golden hour for the most magical light and fewer crowds.",
    Category.BAR:        "Come at sunset, when the city lights begin to twinkle.",
    Category.SHOPPING:   "Bring a tote bag and a little cash for the smaller stalls.",
}
_DEFAULT_TIPS = "Take a moment to truly experience this place - it rewards those who pause to notice."

_CITY_WEATHER: dict[str, WeatherBlock] = {
    "paris": WeatherBlock(
        forecast="Mild and partly cloudy, around 18°C. An occasional light breeze from the Seine.",
        clothing="Light layers and comfortable shoes for the cobblestones.",
        tips="Great weather for café terraces and riverside strolls!",
    ),
    "barcelona": WeatherBlock(
        forecast="Warm and sunny, reaching 26°C. A Mediterranean breeze keeps it comfortable.",
        clothing="Light summer clothes and sun protection.",
        tips="Bring sunscreen and stay hydrated!",
    ),
    "rome": WeatherBlock(
        forecast="Warm and sunny, around 24°C. Clear skies, perfect for sightseeing.",
        clothing="Comfortable walking shoes, light clothing and a sun hat.",
        tips="Ideal weather for ancient ruins and outdoor dining!",
    ),
    "london": WeatherBlock(
        forecast="Mild with occasional clouds, around 16°C. Typical pleasant London weather.",
        clothing="A light jacket and an umbrella, just in case.",
        tips="Perfect weather for pub visits and park walks!",
    ),
}


def main_interest(interests) -> Optional[str]:
    for interest in interests:
        if interest in _TITLE_INTERESTS:
            return interest
    return None


def format_date(params: FilterParams) -> str:
    d = params.date
    return f"{d:%B} {d.day}, {d.year}"


def fallback_title(params: FilterParams) -> str:
    interest = main_interest(params.interests)
    text = _TITLE_INTERESTS.get(interest, "Amazing discoveries")
    prefix = _TITLE_PREFIX.get(params.audience)
    if prefix and not text.lower().startswith(prefix.lower()):
        return f"{prefix} {text.lower()} in {params.city}"
    return f"{text} in {params.city}"


def fallback_subtitle(params: FilterParams) -> str:
    interest = params.interests[0] if params.interests else None
    body = _SUBTITLE_BODIES.get(interest, _DEFAULT_SUBTITLE_BODY).format(city=params.city)
    audience = _AUDIENCE_PHRASE.get(params.audience, "for you")
    return f"{format_date(params)} {audience} - {body} An unforgettable day awaits."


def fallback_weather(params: FilterParams) -> WeatherBlock:
    known = _CITY_WEATHER.get(params.city.strip().lower())
    if known is not None:
        return WeatherBlock(known.forecast, known.clothing, known.tips)
    return WeatherBlock(
        forecast=f"Pleasant weather with comfortable temperatures. Perfect conditions for exploring {params.city}.",
        clothing="Comfortable walking shoes and light layers.",
        tips="Great weather for outdoor activities and city exploration!",
    )


def fallback_location_description(name: str, category: Category) -> str:
    return _DESCRIPTIONS.get(category, _DEFAULT_DESCRIPTION).format(name=name)


def fallback_location_tips(category: Category) -> str:
    return _TIPS.get(category, _DEFAULT_TIPS)


# ── Generator ─────────────────────────────────────────────────────────────────

def clean_text(text: str) -> str:
    """Strip whitespace and one layer of surrounding quotes."""
    text = (text or "").strip()
    text = re.sub(r'^["\'“]|["\'”]$', "", text)
    return text.strip()


def parse_json_block(raw: str) -> dict:
    raw = re.sub(r"```(?:json)?", "", raw or "").strip().rstrip("`").strip()
    try:
        value = json.loads(raw)
        return value if isinstance(value, dict) else {}
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", raw, re.DOTALL)
        if match:
            try:
                return json.loads(match.group())
            except json.JSONDecodeError:
                pass
    return {}


class TextGenerator:
    """
    Async facade over an LLM client.

    Args:
        llm_client: Anything with complete(prompt) -> str, or None to answer
                    every call from the templates.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm_client = llm_client

    async def generate_title(self, params: FilterParams) -> Result[str]:
        return await self._complete(
            "title", TITLE_PROMPT.format(**_context(params)), lambda: fallback_title(params))

    async def generate_subtitle(self, params: FilterParams) -> Result[str]:
        return await self._complete(
            "subtitle", SUBTITLE_PROMPT.format(**_context(params)), lambda: fallback_subtitle(params))

    async def generate_weather(self, params: FilterParams) -> Result[WeatherBlock]:
        fallback = fallback_weather(params)
        if self.llm_client is None:
            return Result.success(fallback)
        result = await self._complete(
            "weather", WEATHER_PROMPT.format(**_context(params)), lambda: fallback.forecast)
        if not result.ok:
            return result
        data = parse_json_block(result.value)
        if not data:
            # model ignored the JSON format; keep the prose as the forecast
            return Result.success(WeatherBlock(result.value, fallback.clothing, fallback.tips))
        # missing or blank keys come from the city template
        return Result.success(WeatherBlock(
            forecast=clean_text(str(data.get("forecast") or "")) or fallback.forecast,
            clothing=clean_text(str(data.get("clothing") or "")) or fallback.clothing,
            tips=clean_text(str(data.get("tips") or "")) or fallback.tips,
        ))

    async def generate_location_description(
        self, place: Place, category: Category, params: FilterParams
    ) -> Result[str]:
        prompt = LOCATION_DESCRIPTION_PROMPT.format(
            name=place.name, address=place.address or "unknown",
            category=category.value, **_context(params, with_city=False),
        )
        return await self._complete(
            "description", prompt, lambda: fallback_location_description(place.name, category))

    async def generate_location_tips(
        self, place: Place, category: Category, params: FilterParams
    ) -> Result[str]:
        prompt = LOCATION_TIPS_PROMPT.format(
            name=place.name, category=category.value, **_context(params, with_city=False),
        )
        return await self._complete("tips", prompt, lambda: fallback_location_tips(category))

    async def _complete(self, what: str, prompt: str, template: Callable[[], str]) -> Result[str]:
        if self.llm_client is None:
            return Result.success(template())
        try:
            raw = await asyncio.to_thread(self.llm_client.complete, prompt)
        except Exception as exc:  # SDK errors vary by provider and transport
            logger.warning("Text generation for %s failed: %s", what, exc)
            return Result.failure("text", f"{what}: {exc}")
        text = clean_text(raw)
        if not text:
            return Result.failure("text", f"{what}: empty response")
        return Result.success(text)


def _context(params: FilterParams, with_city: bool = True) -> dict[str, Any]:
    context = {
        "interests": ", ".join(params.interests) or "exploration",
        "audience":  params.audience.value,
    }
    if with_city:
        context["city"] = params.city
        context["date"] = format_date(params)
    return context
