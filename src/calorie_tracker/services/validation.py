"""Advisory validation of profiles, goals and logged food.

Each check returns a ``ValidationResult``. Errors describe data the services
refuse to store; warnings are reported and never block.
"""

from dataclasses import dataclass, field

from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.domain.goals import HealthGoal
from calorie_tracker.domain.nutrition import macro_calories
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile

MIN_AGE = 13
MAX_AGE = 120
MIN_HEIGHT_CM = 100.0
MAX_HEIGHT_CM = 250.0
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 300.0

MIN_TARGET_CALORIES = 1000.0
MAX_TARGET_CALORIES = 5000.0
GOAL_MACRO_TOLERANCE = 0.15
HIGH_PROTEIN_G = 300.0
HIGH_CARBS_G = 600.0
HIGH_FAT_G = 250.0


@dataclass(frozen=True)
class ValidationResult:
    """Errors and warnings keyed by field name."""

    errors: dict[str, str] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class DataValidationError(ValueError):
    """Raised when a record fails validation and cannot be stored."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(errors.values()))
        self.errors = errors


def validate_profile(profile: UserProfile) -> ValidationResult:
    errors: dict[str, str] = {}
    if not profile.name.strip():
        errors["name"] = "Name cannot be empty"
    if not MIN_AGE <= profile.age <= MAX_AGE:
        errors["age"] = f"Age must be between {MIN_AGE} and {MAX_AGE} years"
    if not MIN_HEIGHT_CM <= profile.height_cm <= MAX_HEIGHT_CM:
        errors["height_cm"] = "Height must be between 100 and 250 cm"
    if not MIN_WEIGHT_KG <= profile.weight_kg <= MAX_WEIGHT_KG:
        errors["weight_kg"] = "Weight must be between 30 and 300 kg"
    if str(profile.gender) not in {gender.value for gender in Gender}:
        errors["gender"] = "Please select a valid gender"
    if not ActivityLevel.is_known(profile.activity_level):
        errors["activity_level"] = "Please select a valid activity level"
    return ValidationResult(errors=errors)


def validate_goal(goal: HealthGoal) -> ValidationResult:
    """Check calorie bounds, macro signs and the macro calorie balance."""
    errors: dict[str, str] = {}
    warnings: dict[str, str] = {}
    if not MIN_TARGET_CALORIES <= goal.target_calories <= MAX_TARGET_CALORIES:
        errors["target_calories"] = "Target calories must be between 1000 and 5000"
    for name, value, high in (
        ("protein", goal.target_protein_g, HIGH_PROTEIN_G),
        ("carbs", goal.target_carbs_g, HIGH_CARBS_G),
        ("fat", goal.target_fat_g, HIGH_FAT_G),
    ):
        key = f"target_{name}_g"
        if value < 0:
            errors[key] = f"Target {name} cannot be negative"
        elif value > high:
            warnings[key] = f"Target {name} seems unusually high (>{high:.0f}g)"

    if "target_calories" not in errors:
        macro_total = macro_calories(
            goal.target_protein_g, goal.target_carbs_g, goal.target_fat_g
        )
        allowed = goal.target_calories * GOAL_MACRO_TOLERANCE
        if abs(macro_total - goal.target_calories) > allowed:
            errors["macros"] = (
                "Macronutrient distribution is unreasonable, please readjust"
            )
    return ValidationResult(errors=errors, warnings=warnings)


def validate_food_item(item: FoodItem) -> ValidationResult:
    errors: dict[str, str] = {}
    warnings: dict[str, str] = {}
    if not item.name.strip():
        errors["name"] = "Food name cannot be empty"
    if item.calories < 0:
        errors["calories"] = "Calories cannot be negative"
    if item.protein_g < 0:
        errors["protein_g"] = "Protein cannot be negative"
    if item.carbs_g < 0:
        errors["carbs_g"] = "Carbs cannot be negative"
    if item.fat_g < 0:
        errors["fat_g"] = "Fat cannot be negative"
    if item.quantity is not None and item.quantity < 0:
        errors["quantity"] = "Quantity cannot be negative"
    if not MealType.is_known(item.meal_type):
        errors["meal_type"] = "Invalid meal type"
    if not errors and not item.is_nutrition_data_valid:
        warnings["nutrition"] = "Nutrition data may be inaccurate"
    return ValidationResult(errors=errors, warnings=warnings)
