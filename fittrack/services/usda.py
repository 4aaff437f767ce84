import time
import logging
from typing import Any, Dict, Optional

import httpx

from fittrack.config import settings
from fittrack.utils.errors import NutritionServiceUnavailable

USDA_BASE_URL = "https://api.nal.usda.gov/fdc/v1"
_CACHE_TTL_SECONDS = 60 * 60

_search_cache: Dict[str, Dict[str, Any]] = {}
_food_cache: Dict[int, Dict[str, Any]] = {}
logger = logging.getLogger(__name__)


def _cache_get(cache: Dict[Any, Dict[str, Any]], key: Any) -> Optional[Any]:
    entry = cache.get(key)
    if not entry:
        return None
    if entry["expires_at"] < time.time():
        cache.pop(key, None)
        return None
    return entry["value"]


def _cache_set(cache: Dict[Any, Dict[str, Any]], key: Any, value: Any) -> None:
    cache[key] = {"value": value, "expires_at": time.time() + _CACHE_TTL_SECONDS}


def _normalize_query(value: str) -> str:
    return " ".join(value.strip().split())


def _api_key() -> str:
    if not settings.USDA_API_KEY:
        raise NutritionServiceUnavailable()
    return settings.USDA_API_KEY


async def search_foods(query: str) -> Dict[str, Any]:
    api_key = _api_key()
    normalized = _normalize_query(query)
    cached = _cache_get(_search_cache, normalized.lower())
    if cached is not None:
        return cached

    params = {"generalSearchInput": normalized, "api_key": api_key}
    async with httpx.AsyncClient(timeout=20) as client:
        response = await client.get(f"{USDA_BASE_URL}/search", params=params)
        response.raise_for_status()
        payload = response.json()

    _cache_set(_search_cache, normalized.lower(), payload)
    return payload


async def fetch_food(fdc_id: int) -> Dict[str, Any]:
    api_key = _api_key()
    cached = _cache_get(_food_cache, fdc_id)
    if cached is not None:
        return cached

    async with httpx.AsyncClient(timeout=20) as client:
        response = await client.get(f"{USDA_BASE_URL}/{fdc_id}", params={"api_key": api_key})
        response.raise_for_status()
        food = response.json()

    _cache_set(_food_cache, fdc_id, food)
    return food


def clear_cache() -> None:
    _search_cache.clear()
    _food_cache.clear()
