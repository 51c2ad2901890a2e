"""Energy expenditure and calorie target calculations.

All functions are pure. Body mass is in kilograms, height in centimetres and
energy in kilocalories.
"""

from calorie_tracker.domain.goals import GoalType
from calorie_tracker.domain.nutrition import KCAL_PER_KG_BODY_MASS
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

MIN_SAFE_CALORIES = 1200.0
DAYS_PER_WEEK = 7

# Grams of protein per kg of body weight, by goal and activity level.
PROTEIN_PER_KG: dict[GoalType, dict[ActivityLevel, float]] = {
    GoalType.LOSE: {
        ActivityLevel.SEDENTARY: 1.6,
        ActivityLevel.LIGHT: 1.8,
        ActivityLevel.MODERATE: 2.0,
        ActivityLevel.ACTIVE: 2.0,
        ActivityLevel.VERY_ACTIVE: 2.0,
    },
    GoalType.GAIN: {
        ActivityLevel.SEDENTARY: 1.4,
        ActivityLevel.LIGHT: 1.4,
        ActivityLevel.MODERATE: 1.6,
        ActivityLevel.ACTIVE: 1.8,
        ActivityLevel.VERY_ACTIVE: 1.8,
    },
    GoalType.MAINTAIN: {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.4,
        ActivityLevel.MODERATE: 1.6,
        ActivityLevel.ACTIVE: 1.8,
        ActivityLevel.VERY_ACTIVE: 1.8,
    },
}

WATER_ML_PER_KG = 35.0
WATER_ACTIVITY_ADJUSTMENT_L: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 0.0,
    ActivityLevel.LIGHT: 0.3,
    ActivityLevel.MODERATE: 0.5,
    ActivityLevel.ACTIVE: 0.7,
    ActivityLevel.VERY_ACTIVE: 1.0,
}

COMMON_MET_VALUES: dict[str, float] = {
    "walking_slow": 2.5,
    "walking_moderate": 3.5,
    "walking_fast": 4.3,
    "running_6mph": 9.8,
    "running_8mph": 11.8,
    "cycling_moderate": 5.8,
    "cycling_vigorous": 8.0,
    "swimming_moderate": 5.8,
    "swimming_vigorous": 9.8,
    "strength_training": 3.5,
    "yoga": 2.5,
    "dancing": 4.8,
    "cleaning": 3.3,
    "gardening": 4.0,
}


def calculate_bmr(profile: UserProfile) -> float:
    """Return the basal metabolic rate using the Mifflin-St Jeor equation."""
    if profile.weight_kg <= 0 or profile.height_cm <= 0 or profile.age <= 0:
        raise ValueError("Weight, height and age must be positive")
    gender = Gender.parse(profile.gender)
    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    if gender is Gender.MALE:
        return base + 5
    return base - 161


def activity_multiplier(activity_level: ActivityLevel | str) -> float:
    return ACTIVITY_MULTIPLIERS[ActivityLevel.parse(activity_level)]


def calculate_tdee(profile: UserProfile) -> float:
    """Return total daily energy expenditure for the profile."""
    return calculate_bmr(profile) * activity_multiplier(profile.activity_level)


def calculate_target_calories(
    profile: UserProfile,
    goal_type: GoalType | str = GoalType.MAINTAIN,
    weekly_weight_change: float = 0.0,
) -> float:
    """Return the daily calorie target for a goal.

    ``weekly_weight_change`` is in kg per week. Loss targets never drop below
    1200 kcal, and never exceed maintenance either.
    """
    goal = GoalType.parse(goal_type)
    tdee = calculate_tdee(profile)
    daily_change = _daily_calorie_change(weekly_weight_change)
    if goal is GoalType.MAINTAIN:
        return tdee
    if goal is GoalType.LOSE:
        return min(max(tdee - abs(daily_change), MIN_SAFE_CALORIES), tdee)
    if goal is GoalType.GAIN:
        return tdee + daily_change
    raise ValueError(f"Cannot derive calories for goal type: {goal}")


def calculate_weight_change(daily_calorie_change: float, days: int) -> float:
    """Return the expected body mass change in kg."""
    return daily_calorie_change * days / KCAL_PER_KG_BODY_MASS


def calculate_protein_requirement(
    profile: UserProfile, goal_type: GoalType | str = GoalType.MAINTAIN
) -> float:
    """Return the daily protein requirement in grams."""
    try:
        goal = GoalType.parse(goal_type)
    except ValueError:
        goal = GoalType.MAINTAIN
    table = PROTEIN_PER_KG.get(goal, PROTEIN_PER_KG[GoalType.MAINTAIN])
    return profile.weight_kg * table[ActivityLevel.parse(profile.activity_level)]


def calculate_water_intake(
    profile: UserProfile, additional_for_exercise: float = 0.0
) -> float:
    """Return the recommended daily water intake in litres."""
    base = profile.weight_kg * WATER_ML_PER_KG / 1000
    adjustment = WATER_ACTIVITY_ADJUSTMENT_L[
        ActivityLevel.parse(profile.activity_level)
    ]
    return base + adjustment + additional_for_exercise


def calculate_exercise_calories(
    weight_kg: float, duration_minutes: float, met_value: float
) -> float:
    """Return calories burned for an activity with the given MET value."""
    return met_value * weight_kg * (duration_minutes / 60)


def _daily_calorie_change(weekly_weight_change: float) -> float:
    return weekly_weight_change * KCAL_PER_KG_BODY_MASS / DAYS_PER_WEEK
