"""Tests for body metrics and progress calculations."""

from datetime import UTC, date, datetime

import pytest

from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.profile import ActivityLevel, Gender
from calorie_tracker.domain.stats import DailyTotals
from calorie_tracker.services.progress import (
    UNREACHABLE_GOAL_DAYS,
    bmi_category,
    bmi_status,
    calculate_average_intake,
    calculate_bmi,
    calculate_body_fat_percentage,
    calculate_goal_progress,
    calculate_ideal_weight_range,
    calculate_remaining_calories,
    calculate_time_to_goal,
    health_recommendations,
    weight_status,
)
from tests.conftest import make_profile


def test_bmi_and_category() -> None:
    bmi = calculate_bmi(70, 175)

    assert bmi == pytest.approx(22.857, abs=1e-3)
    assert bmi_category(bmi) == "Normal weight"
    assert bmi_status(bmi) == "normal"


@pytest.mark.parametrize(
    ("bmi", "category", "status"),
    [
        (18.4, "Underweight", "low"),
        (18.5, "Normal weight", "normal"),
        (25.0, "Overweight", "high"),
        (30.0, "Obese", "very_high"),
    ],
)
def test_bmi_band_edges(bmi: float, category: str, status: str) -> None:
    assert bmi_category(bmi) == category
    assert bmi_status(bmi) == status


def test_bmi_rejects_non_positive_height() -> None:
    with pytest.raises(ValueError):
        calculate_bmi(70, 0)


def test_ideal_weight_range() -> None:
    ideal = calculate_ideal_weight_range(180)

    assert ideal.min_kg == pytest.approx(59.94)
    assert ideal.max_kg == pytest.approx(80.676)
    assert weight_status(55, 180) == "underweight"
    assert weight_status(70, 180) == "normal"
    assert weight_status(90, 180) == "overweight"


def test_goal_progress_is_monotonic_and_clamped() -> None:
    values = [calculate_goal_progress(actual, 2000) for actual in range(0, 6000, 250)]

    assert values == sorted(values)
    assert values[0] == 0
    assert max(values) == 200
    assert calculate_goal_progress(1000, 2000) == pytest.approx(50)
    assert calculate_goal_progress(-100, 2000) == 0
    assert calculate_goal_progress(500, 0) == 0


def test_remaining_calories_can_be_negative() -> None:
    assert calculate_remaining_calories(1500, 2000) == 500
    assert calculate_remaining_calories(2300, 2000) == -300


def test_time_to_goal() -> None:
    assert calculate_time_to_goal(70, 65, 500) == 77
    assert calculate_time_to_goal(65, 70, -500) == 77
    assert calculate_time_to_goal(70, 69.9, 500) == 2


def test_time_to_goal_without_calorie_delta() -> None:
    assert calculate_time_to_goal(70, 65, 0) == UNREACHABLE_GOAL_DAYS == -1


def test_average_intake() -> None:
    days = [
        DailyTotals(
            day=date(2026, 3, 1), calories=1800, protein_g=90, fat_g=60, carbs_g=200
        ),
        DailyTotals(
            day=date(2026, 3, 2), calories=2200, protein_g=110, fat_g=80, carbs_g=260
        ),
    ]

    average = calculate_average_intake(days)

    assert average.avg_calories == 2000
    assert average.avg_protein_g == 100
    assert average.avg_fat_g == 70
    assert average.avg_carbs_g == 230


def test_average_intake_of_nothing_is_zero() -> None:
    average = calculate_average_intake([])

    assert average.avg_calories == 0
    assert average.avg_protein_g == 0


def test_recommendations_for_healthy_young_sedentary_profile() -> None:
    profile = make_profile(age=22, activity_level=ActivityLevel.SEDENTARY)

    recommendations = health_recommendations(profile)

    assert recommendations == [
        "Maintain your current healthy weight range",
        "Great time to establish healthy eating habits",
        "Vary your exercise routine to build overall fitness",
        "Try to increase daily physical activity",
        "Start with 30 minutes of walking daily",
    ]


def test_recommendations_include_goal_advice() -> None:
    profile = make_profile(age=55, weight_kg=95.0)
    goal = HealthGoal(
        target_calories=2000,
        target_protein_g=150,
        target_carbs_g=200,
        target_fat_g=67,
        created_at=datetime(2026, 3, 1, tzinfo=UTC),
        goal_type=GoalType.LOSE,
    )

    recommendations = health_recommendations(profile, goal)

    assert recommendations[0] == (
        "Consider weight management through balanced diet and exercise"
    )
    assert "Consider increasing calcium and vitamin D intake" in recommendations
    assert recommendations[-1] == "Focus on protein-rich foods to preserve muscle mass"


def test_body_fat_percentage_for_men() -> None:
    profile = make_profile()

    estimate = calculate_body_fat_percentage(profile, neck_cm=38, waist_cm=85)

    assert estimate == pytest.approx(16.94, abs=0.1)
    assert calculate_body_fat_percentage(profile, neck_cm=40, waist_cm=40) is None


def test_body_fat_percentage_for_women_needs_hips() -> None:
    profile = make_profile(gender=Gender.FEMALE, height_cm=165.0, weight_kg=60.0)

    estimate = calculate_body_fat_percentage(
        profile, neck_cm=32, waist_cm=70, hip_cm=95
    )

    assert estimate == pytest.approx(24.86, abs=0.1)
    assert calculate_body_fat_percentage(profile, neck_cm=32, waist_cm=70) is None


def test_body_fat_percentage_grows_with_waist() -> None:
    profile = make_profile()

    slim = calculate_body_fat_percentage(profile, neck_cm=38, waist_cm=80)
    broad = calculate_body_fat_percentage(profile, neck_cm=38, waist_cm=100)

    assert slim is not None
    assert broad is not None
    assert broad > slim
