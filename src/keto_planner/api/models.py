"""Pydantic request and response models for the carbs API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from keto_planner.domain.carbs import CarbProfile
from keto_planner.domain.chat import ChatMessage, ChatThread
from keto_planner.domain.meals import MealCarbsSummary, NetCarbsResult
from keto_planner.domain.nutrition import FoodCarbs, FoodSummary

# Bounds keep every sum and difference of request grams finite.
MAX_GRAMS = 1_000_000.0
MAX_MEAL_ITEMS = 100

Grams = Annotated[float, Field(ge=-MAX_GRAMS, le=MAX_GRAMS, allow_inf_nan=False)]
PortionGrams = Annotated[float, Field(ge=0, le=MAX_GRAMS, allow_inf_nan=False)]


class NetCarbsRequest(BaseModel):
    """Carb components in grams."""

    total_g: Grams = 0.0
    fiber_g: Grams = 0.0
    polyols_g: Grams = 0.0

    def to_profile(self) -> CarbProfile:
        return CarbProfile(
            total_g=self.total_g, fiber_g=self.fiber_g, polyols_g=self.polyols_g
        )


class NetCarbsResponse(BaseModel):
    """Net carbs for one set of components."""

    name: str | None = None
    total_g: float
    fiber_g: float
    polyols_g: float
    net_carbs_g: float
    within_meal_limit: bool

    @classmethod
    def from_result(cls, result: NetCarbsResult) -> "NetCarbsResponse":
        return cls(
            name=result.name,
            total_g=result.carbs.total_g,
            fiber_g=result.carbs.fiber_g,
            polyols_g=result.carbs.polyols_g,
            net_carbs_g=result.net_carbs_g,
            within_meal_limit=result.within_limit,
        )


class MealItemRequest(NetCarbsRequest):
    """Meal item given either as raw components or as an FDC food portion."""

    name: str
    fdc_id: int | None = None
    grams: PortionGrams | None = None

    @model_validator(mode="after")
    def _food_portion_or_components(self) -> "MealItemRequest":
        if self.fdc_id is None:
            if self.grams is not None:
                raise ValueError("grams is only valid together with fdc_id")
            return self
        if self.grams is None:
            raise ValueError("grams is required when fdc_id is set")
        components = self.model_fields_set & {"total_g", "fiber_g", "polyols_g"}
        if components:
            raise ValueError(
                f"{', '.join(sorted(components))} cannot be combined with fdc_id"
            )
        return self


class MealRequest(BaseModel):
    """Meal made of one or more items."""

    items: list[MealItemRequest] = Field(min_length=1, max_length=MAX_MEAL_ITEMS)


class MealResponse(BaseModel):
    """Meal net carbs against the per-meal limit."""

    items: list[NetCarbsResponse]
    total_g: float
    fiber_g: float
    polyols_g: float
    net_carbs_g: float
    limit_g: float
    remaining_g: float
    within_limit: bool

    @classmethod
    def from_summary(cls, summary: MealCarbsSummary) -> "MealResponse":
        return cls(
            items=[NetCarbsResponse.from_result(item) for item in summary.items],
            total_g=summary.totals.total_g,
            fiber_g=summary.totals.fiber_g,
            polyols_g=summary.totals.polyols_g,
            net_carbs_g=summary.net_carbs_g,
            limit_g=summary.limit_g,
            remaining_g=summary.remaining_g,
            within_limit=summary.within_limit,
        )


class FoodSummaryResponse(BaseModel):
    """FDC search hit."""

    fdc_id: int
    description: str
    brand_owner: str | None = None
    brand_name: str | None = None
    data_type: str | None = None

    @classmethod
    def from_summary(cls, summary: FoodSummary) -> "FoodSummaryResponse":
        return cls(
            fdc_id=summary.fdc_id,
            description=summary.description,
            brand_owner=summary.brand_owner,
            brand_name=summary.brand_name,
            data_type=summary.data_type,
        )


class FoodCarbsResponse(BaseModel):
    """FDC food carbs for a portion."""

    food: FoodSummaryResponse
    grams: float
    serving_size_g: float | None = None
    total_g: float
    fiber_g: float
    polyols_g: float
    net_carbs_g: float

    @classmethod
    def from_food(cls, food: FoodCarbs, grams: float) -> "FoodCarbsResponse":
        portion = food.for_grams(grams)
        return cls(
            food=FoodSummaryResponse.from_summary(food.summary),
            grams=grams,
            serving_size_g=food.serving_size_g,
            total_g=portion.total_g,
            fiber_g=portion.fiber_g,
            polyols_g=portion.polyols_g,
            net_carbs_g=portion.net_carbs_g,
        )


class FoodSearchResponse(BaseModel):
    """FDC search hits with carbs per 100 g."""

    foods: list[FoodCarbsResponse]


class DirectiveRequest(BaseModel):
    """Chat text that may hold a ``netcarbs`` directive."""

    text: str = Field(min_length=1)


class DirectiveResponse(NetCarbsResponse):
    """Net carbs parsed from a directive with the chat reply."""

    reply: str


class ThreadRequest(BaseModel):
    """Title for a new or renamed chat thread."""

    title: str = Field(min_length=1, max_length=200)


class NewThreadRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)


class ThreadResponse(BaseModel):
    """Chat thread."""

    id: UUID
    title: str
    created_at: datetime

    @classmethod
    def from_thread(cls, thread: ChatThread) -> "ThreadResponse":
        return cls(id=thread.id, title=thread.title, created_at=thread.created_at)


class MessageRequest(BaseModel):
    """User message for a chat thread."""

    text: str = Field(min_length=1, max_length=4000)


class MessageResponse(BaseModel):
    """Chat message."""

    id: UUID
    thread_id: UUID
    text: str
    user_message: bool
    created_at: datetime

    @classmethod
    def from_message(cls, message: ChatMessage) -> "MessageResponse":
        return cls(
            id=message.id,
            thread_id=message.thread_id,
            text=message.text,
            user_message=message.user_message,
            created_at=message.created_at,
        )


class ExchangeResponse(BaseModel):
    """A user message with the assistant's reply."""

    message: MessageResponse
    reply: MessageResponse
