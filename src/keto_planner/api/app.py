"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, Query, Request

from keto_planner.api.chat import router as chat_router
from keto_planner.api.foods import router as foods_router
from keto_planner.api.foods import upstream_error
from keto_planner.api.models import (
    MAX_GRAMS,
    MealItemRequest,
    MealRequest,
    MealResponse,
    NetCarbsRequest,
    NetCarbsResponse,
)
from keto_planner.app_logging import configure_logging
from keto_planner.containers import AppContainer
from keto_planner.domain.meals import MealItemCarbs


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting keto planner (environment=%s, meal limit=%.1f g)",
            container.settings.environment,
            container.settings.meal_net_carbs_limit_g,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(chat_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/carbs/net")
    async def net_carbs_query(
        request: Request,
        total: float = _grams_query(),
        fiber: float = _grams_query(),
        polyols: float = _grams_query(),
    ) -> NetCarbsResponse:
        """Compute net carbs from query parameters."""
        state_container: AppContainer = request.app.state.container
        result = state_container.carbs_service.calculate(total, fiber, polyols)
        return NetCarbsResponse.from_result(result)

    @app.post("/carbs/net")
    async def net_carbs_body(
        body: NetCarbsRequest, request: Request
    ) -> NetCarbsResponse:
        """Compute net carbs from a JSON body."""
        state_container: AppContainer = request.app.state.container
        result = state_container.carbs_service.calculate(
            body.total_g, body.fiber_g, body.polyols_g
        )
        return NetCarbsResponse.from_result(result)

    @app.post("/carbs/meal")
    async def meal_carbs(body: MealRequest, request: Request) -> MealResponse:
        """Sum a meal's net carbs and check it against the meal limit."""
        state_container: AppContainer = request.app.state.container
        items = [
            await _resolve_meal_item(state_container, item) for item in body.items
        ]
        summary = state_container.carbs_service.summarize_meal(items)
        if not summary.within_limit:
            logger.info(
                "Meal over limit: net=%.1f g limit=%.1f g",
                summary.net_carbs_g,
                summary.limit_g,
            )
        return MealResponse.from_summary(summary)

    return app


async def _resolve_meal_item(
    container: AppContainer, item: MealItemRequest
) -> MealItemCarbs:
    """Resolve a meal item to carb components, looking up FDC foods."""
    if item.fdc_id is None:
        return MealItemCarbs(name=item.name, carbs=item.to_profile())
    try:
        food = await container.nutrition_service.get_food_carbs(item.fdc_id)
    except httpx.HTTPError as exc:
        raise upstream_error(exc) from exc
    return MealItemCarbs(name=item.name, carbs=food.for_grams(item.grams or 0.0))


def _grams_query() -> Any:
    return Query(default=0.0, ge=-MAX_GRAMS, le=MAX_GRAMS, allow_inf_nan=False)
