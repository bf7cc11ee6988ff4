"""FoodData Central lookup endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from fastapi import APIRouter, HTTPException, Query, Request, status

from keto_planner.api.models import MAX_GRAMS, FoodCarbsResponse, FoodSearchResponse

if TYPE_CHECKING:
    from keto_planner.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])

_logger = logging.getLogger(__name__)


@router.get("/search")
async def search_foods(
    request: Request,
    query: str = Query(min_length=1),
    limit: int = Query(default=5, ge=1, le=50),
) -> FoodSearchResponse:
    """Search FDC foods by name with carbs per 100 g."""
    container: AppContainer = request.app.state.container
    try:
        foods = await container.nutrition_service.search(query, limit=limit)
    except httpx.HTTPError as exc:
        raise upstream_error(exc) from exc
    return FoodSearchResponse(
        foods=[FoodCarbsResponse.from_food(food, 100.0) for food in foods]
    )


@router.get("/{fdc_id}/carbs")
async def food_carbs(
    fdc_id: int,
    request: Request,
    grams: float = Query(default=100.0, ge=0, le=MAX_GRAMS, allow_inf_nan=False),
) -> FoodCarbsResponse:
    """Return net carbs for a portion of an FDC food."""
    container: AppContainer = request.app.state.container
    try:
        food = await container.nutrition_service.get_food_carbs(fdc_id)
    except httpx.HTTPError as exc:
        raise upstream_error(exc) from exc
    return FoodCarbsResponse.from_food(food, grams)


def upstream_error(exc: httpx.HTTPError) -> HTTPException:
    """Map an FDC failure to an API error."""
    if (
        isinstance(exc, httpx.HTTPStatusError)
        and exc.response.status_code == status.HTTP_404_NOT_FOUND
    ):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
        )
    _logger.error("FDC request failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY, detail="Food lookup unavailable"
    )
