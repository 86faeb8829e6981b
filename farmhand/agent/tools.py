"""Farm tools the chat agent can call.

Four pure lookups backed by mock data: weather forecast, topic suggestions,
seed information and mandi prices. Lookups that find nothing return data
(an ``{"error": ...}`` record or an empty list), never raise.
"""

import copy
import random
from datetime import date, timedelta
from typing import Union

import structlog
from pydantic import TypeAdapter

from farmhand.api.schemas import (
    MarketQuery,
    MarketRecord,
    SeedInfo,
    SeedInfoError,
    SeedQuery,
    SuggestionQuery,
    WeatherDay,
    WeatherQuery,
)
from farmhand.core.registry import ToolDefinition, ToolRegistry
from farmhand.data.catalog import (
    CROP_BASE_PRICES,
    DEFAULT_BASE_PRICE,
    NO_SUGGESTIONS,
    SEED_DATABASE,
    STATE_DISTRICTS,
    SUGGESTIONS,
    WEATHER_CONDITIONS,
)

logger = structlog.get_logger(__name__)

MAX_OTHER_MARKETS = 3


def get_weather(city: str, days: int = 1, rng: random.Random | None = None) -> list[dict]:
    """Mock forecast for ``days`` consecutive days starting today.

    Args:
        city: Location name. Only used for logging by the mock.
        days: Number of forecast days, at least 1.
        rng: Random source, for reproducible output in tests.

    Returns:
        One record per day, dates strictly increasing from today.
    """
    rng = rng or random
    logger.info("tool.get_weather", city=city, days=days)

    today = date.today()
    forecast = []
    for offset in range(days):
        forecast.append({
            "date": (today + timedelta(days=offset)).isoformat(),
            "temperature": 25 + rng.randint(-4, 7),
            "condition": rng.choice(WEATHER_CONDITIONS),
            "humidity": 40 + rng.randint(0, 49),
            "windSpeed": 5 + rng.randint(0, 19),
        })
    return forecast


def get_suggestions(topic: str) -> list[str]:
    """Farming suggestions for a fixed set of topics."""
    logger.info("tool.get_suggestions", topic=topic)
    return list(SUGGESTIONS.get(topic, [NO_SUGGESTIONS]))


def get_seed_info(crop_name: str) -> dict:
    """Seed details for a crop, or for one variety when the query names it.

    A variety whose name appears in the query wins over the crop name, and
    only that variety is returned inside its crop's record.

    Args:
        crop_name: Free text such as "rice", "IR-64 rice" or "Pioneer 3396".

    Returns:
        Seed-info record, or ``{"error": ...}`` when nothing matches.
    """
    query = crop_name.lower()

    for crop in SEED_DATABASE.values():
        for variety in crop["varieties"]:
            if variety["name"].lower() in query:
                logger.info("tool.get_seed_info", query=crop_name, match="variety", variety=variety["name"])
                return {**copy.deepcopy(crop), "varieties": [copy.deepcopy(variety)]}

    for key, crop in SEED_DATABASE.items():
        if key in query:
            logger.info("tool.get_seed_info", query=crop_name, match="crop", crop=key)
            return copy.deepcopy(crop)

    logger.info("tool.get_seed_info", query=crop_name, match="none")
    return {"error": f"Information not available for '{crop_name}'."}


def get_market_prices(
    crop_name: str,
    district: str,
    state: str,
    rng: random.Random | None = None,
) -> list[dict]:
    """Simulated mandi prices for the user's district and nearby districts.

    Args:
        crop_name: Crop to price; unknown crops use the default base price.
        district: The user's district. Its market is always listed.
        state: The user's state, used to pick up to three other districts.
        rng: Random source, for reproducible output in tests.

    Returns:
        Market records sorted by price, highest first. Empty when district
        or state is missing.
    """
    if not district or not district.strip() or not state or not state.strip():
        return []

    rng = rng or random
    district = district.strip()
    state = state.strip()

    markets = [f"{district} Central Mandi"]
    others = [d for d in _districts_for(state) if d.lower() != district.lower()]
    for picked in rng.sample(others, k=min(MAX_OTHER_MARKETS, len(others))):
        markets.append(f"{picked} Market")

    base = CROP_BASE_PRICES.get(crop_name.strip().lower(), DEFAULT_BASE_PRICE)
    used_prices: set[int] = set()
    records = []
    for name in markets:
        price = _draw_price(base, used_prices, rng)
        used_prices.add(price)
        records.append({
            "name": name,
            "price": price,
            "demand": _bucket(rng.random(), ("High", "Medium", "Low")),
            "trend": _bucket(rng.random(), ("Up", "Stable", "Down")),
        })

    records.sort(key=lambda r: r["price"], reverse=True)
    logger.info("tool.get_market_prices", crop=crop_name, district=district, state=state, markets=len(records))
    return records


def _districts_for(state: str) -> list[str]:
    for name, districts in STATE_DISTRICTS.items():
        if name.lower() == state.lower():
            return districts
    return []


def _draw_price(base: int, used: set[int], rng) -> int:
    """Base price +/- 10%, distinct from prices already drawn in this call."""
    spread = int(base * 0.2)
    while True:
        price = round(base - base * 0.1 + rng.randint(0, spread))
        if price not in used:
            return price


def _bucket(roll: float, labels: tuple[str, str, str]) -> str:
    if roll > 0.66:
        return labels[0]
    if roll > 0.33:
        return labels[1]
    return labels[2]


FARM_TOOLS = [
    ToolDefinition(
        name="get_weather",
        description="Get the current weather and a multi-day forecast for a specific location.",
        input_model=WeatherQuery,
        output_schema=TypeAdapter(list[WeatherDay]),
        implementation=get_weather,
    ),
    ToolDefinition(
        name="get_suggestions",
        description="Get farming suggestions for a specific topic.",
        input_model=SuggestionQuery,
        output_schema=TypeAdapter(list[str]),
        implementation=get_suggestions,
    ),
    ToolDefinition(
        name="get_seed_info",
        description=(
            "Get detailed information about seeds for a specific crop, including varieties, "
            "sowing season, price, pests, and diseases. Can also query a specific variety within a crop."
        ),
        input_model=SeedQuery,
        output_schema=TypeAdapter(Union[SeedInfo, SeedInfoError]),
        implementation=get_seed_info,
    ),
    ToolDefinition(
        name="get_market_prices",
        description="Get simulated real-time market prices for a given crop in nearby markets.",
        input_model=MarketQuery,
        output_schema=TypeAdapter(list[MarketRecord]),
        implementation=get_market_prices,
    ),
]


def build_registry() -> ToolRegistry:
    """Registry holding every farm tool."""
    return ToolRegistry(FARM_TOOLS)
