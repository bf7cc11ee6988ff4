"""Net carb calculations against the per-meal keto limit."""

import logging
from dataclasses import dataclass

from keto_planner.domain.carbs import CarbProfile, net_carbs, sum_profiles
from keto_planner.domain.meals import MealCarbsSummary, MealItemCarbs, NetCarbsResult

DEFAULT_MEAL_LIMIT_G = 20.0

_logger = logging.getLogger(__name__)


@dataclass
class CarbsService:
    """Service for net carb results and meal budgets."""

    meal_limit_g: float = DEFAULT_MEAL_LIMIT_G

    def calculate(self, total: float, fiber: float, polyols: float) -> NetCarbsResult:
        """Compute net carbs for raw gram values."""
        carbs = CarbProfile(total_g=total, fiber_g=fiber, polyols_g=polyols)
        return self._result(carbs)

    def summarize_meal(self, items: list[MealItemCarbs]) -> MealCarbsSummary:
        """Return per-item and total net carbs for a meal."""
        results = [self._result(item.carbs, name=item.name) for item in items]
        totals = sum_profiles(item.carbs for item in items)
        net = totals.net_carbs_g
        summary = MealCarbsSummary(
            items=results,
            totals=totals,
            net_carbs_g=net,
            limit_g=self.meal_limit_g,
            remaining_g=max(0.0, self.meal_limit_g - net),
            within_limit=net <= self.meal_limit_g,
        )
        _logger.debug(
            "Meal net carbs: items=%s net=%.2f limit=%.2f",
            len(items),
            net,
            self.meal_limit_g,
        )
        return summary

    def _result(self, carbs: CarbProfile, name: str | None = None) -> NetCarbsResult:
        net = net_carbs(carbs.total_g, carbs.fiber_g, carbs.polyols_g)
        return NetCarbsResult(
            carbs=carbs,
            net_carbs_g=net,
            within_limit=net <= self.meal_limit_g,
            name=name,
        )
