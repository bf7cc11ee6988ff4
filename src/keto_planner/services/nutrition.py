"""Food carb lookups backed by USDA FDC."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from keto_planner.adapters.fdc_client import CARB_NUTRIENT_IDS, FdcClient
from keto_planner.domain.carbs import CarbProfile
from keto_planner.domain.nutrition import FoodCarbs, FoodSummary
from keto_planner.services.cache import Cache

_GRAM_UNITS = {"g", "grm"}

_CLIENT_ERROR_MIN = 400
_SERVER_ERROR_MIN = 500

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Service for FDC food carb lookups with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodCarbs]:
        """Search FDC foods, returning each hit's carbs per 100 g."""
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_food_from_payload(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.info("FDC search: query=%s results=%s", query, len(foods))
        return foods

    async def get_food_carbs(self, fdc_id: int) -> FoodCarbs:
        """Return a food's carb components per 100 g."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodCarbs):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        food = _food_from_payload(payload)
        self.cache.set(cache_key, food, ttl_seconds=self.food_ttl_seconds)
        _logger.info(
            "FDC food: fdc_id=%s net_carbs_per_100g=%.2f",
            fdc_id,
            food.per_100g.net_carbs_g,
        )
        return food

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call FDC, retrying anything but a client error."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code if status_code is not None else "n/a",
                    exc,
                )
                if attempt > self.retry_attempts or _is_client_error(status_code):
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> int | None:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def _is_client_error(status_code: int | None) -> bool:
    if status_code is None:
        return False
    return _CLIENT_ERROR_MIN <= status_code < _SERVER_ERROR_MIN


def _food_from_payload(food: dict[str, object]) -> FoodCarbs:
    return FoodCarbs(
        summary=FoodSummary(
            fdc_id=food["fdcId"],
            description=food.get("description", ""),
            brand_owner=food.get("brandOwner"),
            brand_name=food.get("brandName"),
            data_type=food.get("dataType"),
        ),
        per_100g=_extract_carbs(food.get("foodNutrients", [])),
        serving_size_g=_serving_size_grams(food),
    )


def _serving_size_grams(food: dict[str, object]) -> float | None:
    """Return the serving size only when FDC reports it in grams."""
    size = food.get("servingSize")
    unit = str(food.get("servingSizeUnit") or "g").lower()
    if size is None or unit not in _GRAM_UNITS:
        return None
    return float(size)


def _extract_carbs(food_nutrients: list[dict[str, object]]) -> CarbProfile:
    """Extract carbohydrate, fiber and sugar alcohols from FDC nutrients.

    Search hits carry ``nutrientId`` and ``value``; food details nest the id
    under ``nutrient.id`` and report ``amount``. Missing nutrients count as
    zero.
    """
    values: dict[str, float] = dict.fromkeys(CARB_NUTRIENT_IDS, 0.0)
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("amount", nutrient.get("value"))
        if amount is None:
            continue
        for key, wanted_id in CARB_NUTRIENT_IDS.items():
            if nutrient_id == wanted_id:
                values[key] = float(amount)

    return CarbProfile(
        total_g=values["total"],
        fiber_g=values["fiber"],
        polyols_g=values["polyols"],
    )
