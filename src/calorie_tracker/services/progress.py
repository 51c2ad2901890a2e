"""Body metrics and progress tracking calculations."""

import math
from collections.abc import Sequence

from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.nutrition import KCAL_PER_KG_BODY_MASS, WeightRange
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile
from calorie_tracker.domain.stats import AverageIntake, DailyTotals

BMI_UNDERWEIGHT = 18.5
BMI_OVERWEIGHT = 25.0
BMI_OBESE = 30.0
BMI_IDEAL_MAX = 24.9

MAX_GOAL_PROGRESS = 200.0
UNREACHABLE_GOAL_DAYS = -1

SENIOR_AGE = 50
YOUNG_ADULT_AGE = 25

# U.S. Navy circumference method, metric form.
NAVY_MALE_DENSITY = (1.0324, 0.19077, 0.15456)
NAVY_FEMALE_DENSITY = (1.29579, 0.35004, 0.22100)
SIRI_NUMERATOR = 495.0
SIRI_OFFSET = 450.0

_GOAL_RECOMMENDATIONS: dict[GoalType, tuple[str, ...]] = {
    GoalType.LOSE: (
        "Create a moderate calorie deficit for sustainable weight loss",
        "Focus on protein-rich foods to preserve muscle mass",
    ),
    GoalType.GAIN: (
        "Eat in a controlled calorie surplus with quality foods",
        "Include strength training to build lean muscle mass",
    ),
    GoalType.MAINTAIN: (
        "Continue your current balanced approach",
        "Monitor your weight and adjust as needed",
    ),
}


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    if weight_kg <= 0 or height_cm <= 0:
        raise ValueError("Weight and height must be positive")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    if bmi < BMI_UNDERWEIGHT:
        return "Underweight"
    if bmi < BMI_OVERWEIGHT:
        return "Normal weight"
    if bmi < BMI_OBESE:
        return "Overweight"
    return "Obese"


def bmi_status(bmi: float) -> str:
    """Return a short status key for the BMI band."""
    if bmi < BMI_UNDERWEIGHT:
        return "low"
    if bmi < BMI_OVERWEIGHT:
        return "normal"
    if bmi < BMI_OBESE:
        return "high"
    return "very_high"


def calculate_ideal_weight_range(height_cm: float) -> WeightRange:
    """Return the body weight range for a healthy BMI at this height."""
    if height_cm <= 0:
        raise ValueError("Height must be positive")
    height_m = height_cm / 100
    return WeightRange(
        min_kg=BMI_UNDERWEIGHT * height_m * height_m,
        max_kg=BMI_IDEAL_MAX * height_m * height_m,
    )


def weight_status(weight_kg: float, height_cm: float) -> str:
    ideal = calculate_ideal_weight_range(height_cm)
    if weight_kg < ideal.min_kg:
        return "underweight"
    if weight_kg > ideal.max_kg:
        return "overweight"
    return "normal"


def calculate_body_fat_percentage(
    profile: UserProfile,
    neck_cm: float,
    waist_cm: float,
    hip_cm: float | None = None,
) -> float | None:
    """Estimate body fat percentage from neck, waist and (for women) hip girth.

    Returns None when the measurements cannot produce an estimate.
    """
    if Gender.parse(profile.gender) is Gender.MALE:
        girth = waist_cm - neck_cm
        constant, girth_factor, height_factor = NAVY_MALE_DENSITY
    else:
        if hip_cm is None:
            return None
        girth = waist_cm + hip_cm - neck_cm
        constant, girth_factor, height_factor = NAVY_FEMALE_DENSITY
    if girth <= 0 or profile.height_cm <= 0:
        return None
    density = (
        constant
        - girth_factor * math.log10(girth)
        + height_factor * math.log10(profile.height_cm)
    )
    return SIRI_NUMERATOR / density - SIRI_OFFSET


def calculate_goal_progress(actual: float, target: float) -> float:
    """Return progress towards a target in percent, capped at 200."""
    if target <= 0:
        return 0.0
    return min(max(actual / target * 100, 0.0), MAX_GOAL_PROGRESS)


def calculate_remaining_calories(consumed: float, target: float) -> float:
    return target - consumed


def calculate_time_to_goal(
    current_weight_kg: float, target_weight_kg: float, daily_calorie_delta: float
) -> int:
    """Return the number of days to reach a target weight.

    Returns -1 when the daily calorie delta is zero.
    """
    if daily_calorie_delta == 0:
        return UNREACHABLE_GOAL_DAYS
    weight_delta = abs(target_weight_kg - current_weight_kg)
    return math.ceil(weight_delta * KCAL_PER_KG_BODY_MASS / abs(daily_calorie_delta))


def calculate_average_intake(daily_intakes: Sequence[DailyTotals]) -> AverageIntake:
    if not daily_intakes:
        return AverageIntake(
            avg_calories=0.0, avg_protein_g=0.0, avg_carbs_g=0.0, avg_fat_g=0.0
        )
    count = len(daily_intakes)
    return AverageIntake(
        avg_calories=sum(day.calories for day in daily_intakes) / count,
        avg_protein_g=sum(day.protein_g for day in daily_intakes) / count,
        avg_carbs_g=sum(day.carbs_g for day in daily_intakes) / count,
        avg_fat_g=sum(day.fat_g for day in daily_intakes) / count,
    )


def health_recommendations(
    profile: UserProfile, goal: HealthGoal | None = None
) -> list[str]:
    """Return general advice for the profile and its active goal."""
    recommendations: list[str] = []
    bmi = calculate_bmi(profile.weight_kg, profile.height_cm)
    if bmi < BMI_UNDERWEIGHT:
        recommendations.append(
            "Consider gaining weight through healthy diet and exercise"
        )
        recommendations.append("Increase protein and healthy fat intake")
    elif bmi > BMI_OVERWEIGHT:
        recommendations.append(
            "Consider weight management through balanced diet and exercise"
        )
        recommendations.append(
            "Focus on portion control and regular physical activity"
        )
    else:
        recommendations.append("Maintain your current healthy weight range")

    if profile.age >= SENIOR_AGE:
        recommendations.append("Consider increasing calcium and vitamin D intake")
        recommendations.append("Include low-impact exercises and strength training")
    elif profile.age <= YOUNG_ADULT_AGE:
        recommendations.append("Great time to establish healthy eating habits")
        recommendations.append("Vary your exercise routine to build overall fitness")

    activity = ActivityLevel.parse(profile.activity_level)
    if activity is ActivityLevel.SEDENTARY:
        recommendations.append("Try to increase daily physical activity")
        recommendations.append("Start with 30 minutes of walking daily")
    elif activity is ActivityLevel.VERY_ACTIVE:
        recommendations.append("Ensure adequate recovery time between workouts")
        recommendations.append(
            "Focus on proper nutrition to support high activity levels"
        )

    if goal is not None and goal.goal_type is not None:
        recommendations.extend(_GOAL_RECOMMENDATIONS.get(goal.goal_type, ()))
    return recommendations
