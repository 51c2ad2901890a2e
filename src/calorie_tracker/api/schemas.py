"""Pydantic request models for the HTTP API."""

from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.domain.goals import GoalType
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile


class ProfilePayload(BaseModel):
    """Profile fields submitted by the client."""

    name: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: str = ActivityLevel.SEDENTARY.value

    def to_domain(self) -> UserProfile:
        return UserProfile(
            name=self.name,
            age=self.age,
            gender=self.gender,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=ActivityLevel.parse(self.activity_level),
        )


class GoalTypePayload(BaseModel):
    goal_type: GoalType
    weekly_weight_change: float = 0.0


class CustomGoalPayload(BaseModel):
    target_calories: float
    target_protein_g: float
    target_carbs_g: float
    target_fat_g: float
    notes: str | None = None


class FoodPayload(BaseModel):
    """Food entry fields; unknown meal types are logged as snacks."""

    name: str
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    meal_type: str = MealType.SNACK.value
    date: datetime | None = None
    quantity: float | None = None
    unit: str | None = None
    notes: str | None = None

    def to_domain(self, food_id: UUID | None = None) -> FoodItem:
        return FoodItem(
            id=food_id,
            name=self.name,
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            meal_type=MealType.parse(self.meal_type),
            date=self.date or datetime.now(tz=UTC),
            quantity=self.quantity,
            unit=self.unit,
            notes=self.notes,
        )


class ScalePayload(BaseModel):
    quantity: float = Field(ge=0)
    unit: str | None = None


class MergePayload(BaseModel):
    first_id: UUID
    second_id: UUID
    new_name: str | None = None
    replace_originals: bool = False


class CopyPayload(BaseModel):
    day: date
    meal_type: str | None = None


class CatalogLogPayload(BaseModel):
    meal_type: str = MealType.SNACK.value
    date: datetime | None = None
    serving: float | None = Field(default=None, gt=0)


class RecognitionLogPayload(BaseModel):
    """A recognition result the user chose to log."""

    label: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    index: int = Field(default=0, ge=0)
    meal_type: str | None = None
    date: datetime | None = None
    quantity: float | None = None
    unit: str | None = None
    custom_name: str | None = None


class PreferencesPayload(BaseModel):
    is_first_launch: bool | None = None
    show_onboarding: bool | None = None
    seen_features: list[str] | None = None


class ImportPayload(BaseModel):
    profile: dict[str, object] | None = None
    goal: dict[str, object] | None = None
    foods: list[dict[str, object]] = Field(default_factory=list)
    preferences: dict[str, object] | None = None
