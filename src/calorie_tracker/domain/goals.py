"""Health goal domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from calorie_tracker.domain.nutrition import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    macro_calories,
)


class GoalType(StrEnum):
    """Kind of nutrition goal."""

    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "GoalType | str") -> "GoalType":
        """Return the goal type for a raw value, raising for anything else."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid goal type: {value}") from None


# Recommended share of calories per macronutrient, in percent (low, high).
MACRO_RECOMMENDATIONS: dict[GoalType, dict[str, tuple[float, float]]] = {
    GoalType.LOSE: {"protein": (25, 35), "carbs": (35, 45), "fat": (25, 35)},
    GoalType.GAIN: {"protein": (20, 30), "carbs": (40, 50), "fat": (25, 35)},
    GoalType.MAINTAIN: {"protein": (20, 30), "carbs": (40, 50), "fat": (25, 35)},
}


@dataclass(frozen=True)
class HealthGoal:
    """Daily nutrition targets; one goal is active at a time."""

    target_calories: float
    target_protein_g: float
    target_carbs_g: float
    target_fat_g: float
    created_at: datetime
    id: UUID | None = None
    updated_at: datetime | None = None
    goal_type: GoalType | None = None
    notes: str | None = None
    is_active: bool = True

    @property
    def total_macro_calories(self) -> float:
        return macro_calories(
            self.target_protein_g, self.target_carbs_g, self.target_fat_g
        )

    @property
    def protein_percentage(self) -> float:
        return self._share(self.target_protein_g * KCAL_PER_G_PROTEIN)

    @property
    def carbs_percentage(self) -> float:
        return self._share(self.target_carbs_g * KCAL_PER_G_CARBS)

    @property
    def fat_percentage(self) -> float:
        return self._share(self.target_fat_g * KCAL_PER_G_FAT)

    @property
    def macro_distribution_description(self) -> str:
        return (
            f"Protein: {self.protein_percentage:.0f}%, "
            f"Carbs: {self.carbs_percentage:.0f}%, "
            f"Fat: {self.fat_percentage:.0f}%"
        )

    def calorie_difference(self, actual_calories: float) -> float:
        """Return how far actual intake is from the target, in percent."""
        if self.target_calories == 0:
            return 0.0
        return (actual_calories - self.target_calories) / self.target_calories * 100

    def is_within_recommended_ranges(self) -> bool:
        """Check the macro split against the ranges recommended for the goal."""
        ranges = MACRO_RECOMMENDATIONS.get(
            self.goal_type or GoalType.MAINTAIN,
            MACRO_RECOMMENDATIONS[GoalType.MAINTAIN],
        )
        shares = {
            "protein": self.protein_percentage,
            "carbs": self.carbs_percentage,
            "fat": self.fat_percentage,
        }
        return all(low <= shares[name] <= high for name, (low, high) in ranges.items())

    def _share(self, calories: float) -> float:
        total = self.total_macro_calories
        if total == 0:
            return 0.0
        return calories / total * 100
