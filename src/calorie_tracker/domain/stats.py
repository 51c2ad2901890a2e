"""Domain models for intake statistics."""

from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.food import MealType


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    day: date
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float

    @classmethod
    def empty(cls, day: date) -> "DailyTotals":
        return cls(day=day, calories=0.0, protein_g=0.0, fat_g=0.0, carbs_g=0.0)


@dataclass(frozen=True)
class AverageIntake:
    """Mean daily intake over a set of days."""

    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float


@dataclass(frozen=True)
class MealStats:
    """Totals for one meal of the day."""

    meal_type: MealType
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    item_count: int
    calorie_share: float


@dataclass(frozen=True)
class NutritionStats:
    """Macro split and per-meal breakdown for a day."""

    totals: DailyTotals
    item_count: int
    protein_percentage: float
    carbs_percentage: float
    fat_percentage: float
    meals: list[MealStats]
