"""Net carbohydrate domain models."""

from collections.abc import Iterable
from dataclasses import dataclass

POLYOL_FACTOR = 0.5


def net_carbs(total: float, fiber: float, polyols: float) -> float:
    """Return net carbs in grams, floored at zero.

    Inputs are not validated. A NaN anywhere in the formula yields 0.0
    because the clamp only replaces zero with a strictly greater value.
    """
    net = total - fiber - (POLYOL_FACTOR * polyols)
    return max(0.0, net)


@dataclass(frozen=True)
class CarbProfile:
    """Carbohydrate components in grams."""

    total_g: float = 0.0
    fiber_g: float = 0.0
    polyols_g: float = 0.0

    @property
    def net_carbs_g(self) -> float:
        """Net carbs for this profile."""
        return net_carbs(self.total_g, self.fiber_g, self.polyols_g)

    def scaled(self, factor: float) -> "CarbProfile":
        """Return the profile multiplied by a portion factor."""
        return CarbProfile(
            total_g=self.total_g * factor,
            fiber_g=self.fiber_g * factor,
            polyols_g=self.polyols_g * factor,
        )


def sum_profiles(profiles: Iterable[CarbProfile]) -> CarbProfile:
    """Add carb profiles component-wise."""
    total = CarbProfile()
    for profile in profiles:
        total = CarbProfile(
            total_g=total.total_g + profile.total_g,
            fiber_g=total.fiber_g + profile.fiber_g,
            polyols_g=total.polyols_g + profile.polyols_g,
        )
    return total
