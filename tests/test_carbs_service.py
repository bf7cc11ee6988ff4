"""Tests for the carbs service."""

from keto_planner.domain.carbs import CarbProfile
from keto_planner.domain.meals import MealItemCarbs
from keto_planner.services.carbs import CarbsService


def test_calculate_reports_limit() -> None:
    service = CarbsService(meal_limit_g=20.0)

    result = service.calculate(30.0, 5.0, 10.0)

    assert result.net_carbs_g == 20.0
    assert result.within_limit is True
    assert result.carbs == CarbProfile(total_g=30.0, fiber_g=5.0, polyols_g=10.0)

    over = service.calculate(30.0, 5.0, 8.0)
    assert over.net_carbs_g == 21.0
    assert over.within_limit is False


def test_summarize_meal_totals_and_remaining() -> None:
    service = CarbsService(meal_limit_g=20.0)
    items = [
        MealItemCarbs(name="avocado", carbs=CarbProfile(total_g=9.0, fiber_g=7.0)),
        MealItemCarbs(
            name="chocolate",
            carbs=CarbProfile(total_g=12.0, fiber_g=3.0, polyols_g=6.0),
        ),
    ]

    summary = service.summarize_meal(items)

    assert [item.name for item in summary.items] == ["avocado", "chocolate"]
    assert [item.net_carbs_g for item in summary.items] == [2.0, 6.0]
    assert summary.totals == CarbProfile(total_g=21.0, fiber_g=10.0, polyols_g=6.0)
    assert summary.net_carbs_g == 8.0
    assert summary.remaining_g == 12.0
    assert summary.within_limit is True


def test_summarize_meal_over_limit() -> None:
    service = CarbsService(meal_limit_g=10.0)
    items = [
        MealItemCarbs(name="rice", carbs=CarbProfile(total_g=28.0, fiber_g=0.4)),
    ]

    summary = service.summarize_meal(items)

    assert summary.within_limit is False
    assert summary.remaining_g == 0.0
    assert summary.limit_g == 10.0


def test_summarize_empty_meal() -> None:
    summary = CarbsService().summarize_meal([])

    assert summary.items == []
    assert summary.net_carbs_g == 0.0
    assert summary.remaining_g == 20.0
    assert summary.within_limit is True
