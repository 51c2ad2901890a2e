"""Tests for profile, goal and food validation."""

from datetime import UTC, datetime

from calorie_tracker.domain.goals import HealthGoal
from calorie_tracker.services.validation import (
    DataValidationError,
    validate_food_item,
    validate_goal,
    validate_profile,
)
from tests.conftest import make_food, make_profile


def _goal(**overrides: object) -> HealthGoal:
    values: dict[str, object] = {
        "target_calories": 2000.0,
        "target_protein_g": 125.0,
        "target_carbs_g": 225.0,
        "target_fat_g": 66.7,
        "created_at": datetime(2026, 3, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return HealthGoal(**values)


def test_valid_profile_has_no_errors() -> None:
    result = validate_profile(make_profile())

    assert result.is_valid
    assert result.errors == {}


def test_profile_bounds() -> None:
    result = validate_profile(
        make_profile(name="  ", age=12, height_cm=251.0, weight_kg=29.0)
    )

    assert not result.is_valid
    assert set(result.errors) == {"name", "age", "height_cm", "weight_kg"}
    assert result.errors["age"] == "Age must be between 13 and 120 years"


def test_profile_bounds_are_inclusive() -> None:
    result = validate_profile(
        make_profile(age=120, height_cm=100.0, weight_kg=300.0)
    )

    assert result.is_valid


def test_profile_rejects_unknown_gender_and_activity() -> None:
    result = validate_profile(make_profile(gender="other", activity_level="couch"))

    assert result.errors == {
        "gender": "Please select a valid gender",
        "activity_level": "Please select a valid activity level",
    }


def test_valid_goal() -> None:
    result = validate_goal(_goal())

    assert result.is_valid
    assert result.warnings == {}


def test_goal_calorie_bounds() -> None:
    result = validate_goal(_goal(target_calories=900.0))

    assert result.errors == {
        "target_calories": "Target calories must be between 1000 and 5000"
    }


def test_goal_rejects_unbalanced_macros() -> None:
    result = validate_goal(_goal(target_protein_g=300.0))

    assert result.errors["macros"] == (
        "Macronutrient distribution is unreasonable, please readjust"
    )


def test_goal_rejects_negative_macros() -> None:
    result = validate_goal(_goal(target_fat_g=-1.0))

    assert "target_fat_g" in result.errors


def test_goal_warns_on_unusually_high_macros() -> None:
    result = validate_goal(
        _goal(
            target_calories=4800.0,
            target_protein_g=320.0,
            target_carbs_g=500.0,
            target_fat_g=170.0,
        )
    )

    assert result.is_valid
    assert set(result.warnings) == {"target_protein_g"}


def test_food_item_errors() -> None:
    result = validate_food_item(
        make_food(
            name="", calories=-1.0, fat_g=-2.0, quantity=-5.0, meal_type="brunch"
        )
    )

    assert set(result.errors) == {
        "name",
        "calories",
        "fat_g",
        "quantity",
        "meal_type",
    }
    assert result.warnings == {}


def test_food_item_inaccurate_nutrition_is_only_a_warning() -> None:
    result = validate_food_item(make_food(calories=900.0))

    assert result.is_valid
    assert result.warnings == {"nutrition": "Nutrition data may be inaccurate"}


def test_data_validation_error_keeps_field_errors() -> None:
    error = DataValidationError({"age": "too young", "name": "missing"})

    assert isinstance(error, ValueError)
    assert error.errors == {"age": "too young", "name": "missing"}
    assert str(error) == "too young; missing"
