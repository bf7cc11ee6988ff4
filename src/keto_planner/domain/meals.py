"""Domain models for meal carb budgets."""

from dataclasses import dataclass

from keto_planner.domain.carbs import CarbProfile


@dataclass(frozen=True)
class MealItemCarbs:
    """A named meal item with its carb components."""

    name: str
    carbs: CarbProfile


@dataclass(frozen=True)
class NetCarbsResult:
    """Net carbs for a single set of inputs."""

    carbs: CarbProfile
    net_carbs_g: float
    within_limit: bool
    name: str | None = None


@dataclass(frozen=True)
class MealCarbsSummary:
    """Net carb totals for a meal against the per-meal limit."""

    items: list[NetCarbsResult]
    totals: CarbProfile
    net_carbs_g: float
    limit_g: float
    remaining_g: float
    within_limit: bool
