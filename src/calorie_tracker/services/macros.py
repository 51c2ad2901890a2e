"""Macronutrient distribution and nutrition consistency checks."""

from collections.abc import Sequence
from datetime import UTC, datetime

from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.nutrition import (
    FOOD_CALORIE_TOLERANCE,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    MacroGrams,
    macro_calories,
)
from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.services.energy import calculate_target_calories

DEFAULT_MACRO_RATIO: tuple[float, float, float] = (25.0, 45.0, 30.0)
WEIGHT_LOSS_MACRO_RATIO: tuple[float, float, float] = (30.0, 40.0, 30.0)
RATIO_SUM_TOLERANCE = 0.01


def calculate_macronutrients(
    target_calories: float,
    macro_ratio: Sequence[float] = DEFAULT_MACRO_RATIO,
) -> MacroGrams:
    """Split a calorie target into protein, carbs and fat grams.

    ``macro_ratio`` holds the protein, carbs and fat percentages, in that
    order, and must add up to 100.
    """
    if len(macro_ratio) != 3:  # noqa: PLR2004
        raise ValueError("Macro ratio must have exactly 3 values")
    if abs(sum(macro_ratio) - 100) > RATIO_SUM_TOLERANCE:
        raise ValueError("Macro ratio must sum to 100")
    protein_pct, carbs_pct, fat_pct = macro_ratio
    return MacroGrams(
        protein_g=target_calories * protein_pct / 100 / KCAL_PER_G_PROTEIN,
        carbs_g=target_calories * carbs_pct / 100 / KCAL_PER_G_CARBS,
        fat_g=target_calories * fat_pct / 100 / KCAL_PER_G_FAT,
    )


def default_macro_ratio(goal_type: GoalType | str) -> tuple[float, float, float]:
    if str(goal_type).strip().lower() == GoalType.LOSE:
        return WEIGHT_LOSS_MACRO_RATIO
    return DEFAULT_MACRO_RATIO


def create_health_goal_for_user(
    profile: UserProfile,
    goal_type: GoalType | str = GoalType.MAINTAIN,
    weekly_weight_change: float = 0.0,
    custom_macro_ratio: Sequence[float] | None = None,
) -> HealthGoal:
    """Derive a new, unsaved goal from the profile."""
    goal = GoalType.parse(goal_type)
    target_calories = calculate_target_calories(profile, goal, weekly_weight_change)
    ratio = (
        default_macro_ratio(goal) if custom_macro_ratio is None else custom_macro_ratio
    )
    macros = calculate_macronutrients(target_calories, ratio)
    return HealthGoal(
        target_calories=target_calories,
        target_protein_g=macros.protein_g,
        target_carbs_g=macros.carbs_g,
        target_fat_g=macros.fat_g,
        created_at=datetime.now(tz=UTC),
        goal_type=goal,
    )


def validate_nutrition_data(
    calories: float, protein_g: float, carbs_g: float, fat_g: float
) -> bool:
    """Return True when the macros are consistent with the stated calories."""
    if min(calories, protein_g, carbs_g, fat_g) < 0:
        return False
    difference = abs(macro_calories(protein_g, carbs_g, fat_g) - calories)
    return difference <= calories * FOOD_CALORIE_TOLERANCE
