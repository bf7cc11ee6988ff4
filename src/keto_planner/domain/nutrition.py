"""Food domain models."""

from dataclasses import dataclass

from keto_planner.domain.carbs import CarbProfile


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from FDC."""

    fdc_id: int
    description: str
    brand_owner: str | None
    brand_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodCarbs:
    """Food details with carbohydrate components per 100 g."""

    summary: FoodSummary
    per_100g: CarbProfile
    serving_size_g: float | None

    def for_grams(self, grams: float) -> CarbProfile:
        """Scale the per-100 g profile to a portion."""
        return self.per_100g.scaled(grams / 100)
