"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.domain.goals import HealthGoal
from calorie_tracker.domain.preferences import AppPreferences
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile
from calorie_tracker.services.cache import InMemoryCache
from calorie_tracker.services.food_database import FoodDatabaseService
from calorie_tracker.services.food_log import FoodLogRepository, FoodLogService
from calorie_tracker.services.preferences import (
    PreferencesRepository,
    PreferencesService,
)
from calorie_tracker.services.profiles import ProfileRepository, ProfileService
from calorie_tracker.services.recognition import RecognitionClient, RecognitionService


def make_profile(**overrides: object) -> UserProfile:
    values: dict[str, object] = {
        "name": "Alex",
        "age": 30,
        "gender": Gender.MALE,
        "height_cm": 175.0,
        "weight_kg": 70.0,
        "activity_level": ActivityLevel.MODERATE,
    }
    values.update(overrides)
    return UserProfile(**values)


def make_food(**overrides: object) -> FoodItem:
    values: dict[str, object] = {
        "name": "Oatmeal",
        "calories": 200.0,
        "protein_g": 10.0,
        "carbs_g": 30.0,
        "fat_g": 5.0,
        "meal_type": MealType.BREAKFAST,
        "date": datetime(2026, 3, 2, 8, 30, tzinfo=UTC),
        "quantity": 100.0,
        "unit": "g",
    }
    values.update(overrides)
    return FoodItem(**values)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profile: UserProfile | None = None
    goals: list[HealthGoal] = field(default_factory=list)

    def get_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> UserProfile:
        if profile.id is not None and (
            self.profile is None or self.profile.id != profile.id
        ):
            raise RuntimeError(f"User profile not found: id={profile.id}")
        stored = replace(profile, id=profile.id or uuid4())
        self.profile = stored
        return stored

    def get_active_goal(self) -> HealthGoal | None:
        active = [goal for goal in self.goals if goal.is_active]
        return active[-1] if active else None

    def save_goal(self, goal: HealthGoal) -> HealthGoal:
        if goal.id is not None and all(g.id != goal.id for g in self.goals):
            raise RuntimeError(f"Health goal not found: id={goal.id}")
        stored = replace(goal, id=goal.id or uuid4(), is_active=True)
        self.goals = [
            replace(existing, is_active=False)
            for existing in self.goals
            if existing.id != stored.id
        ]
        self.goals.append(stored)
        return stored

    def clear(self) -> None:
        self.profile = None
        self.goals = []


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)

    def add(self, item: FoodItem) -> FoodItem:
        stored = replace(item, id=uuid4())
        self.items[stored.id] = stored
        return stored

    def update(self, item: FoodItem) -> FoodItem | None:
        if item.id not in self.items:
            return None
        self.items[item.id] = item
        return item

    def delete(self, food_id: UUID) -> bool:
        return self.items.pop(food_id, None) is not None

    def get(self, food_id: UUID) -> FoodItem | None:
        return self.items.get(food_id)

    def list_between(
        self, start: datetime, end: datetime, meal_type: MealType | None = None
    ) -> list[FoodItem]:
        matches = [
            item
            for item in self.items.values()
            if start <= item.date < end
            and (meal_type is None or item.meal_type == meal_type)
        ]
        return sorted(matches, key=lambda item: item.date)

    def list_all(self) -> list[FoodItem]:
        return sorted(self.items.values(), key=lambda item: item.date, reverse=True)

    def clear(self) -> None:
        self.items.clear()


@dataclass
class InMemoryPreferencesRepository(PreferencesRepository):
    """In-memory preferences repository for tests."""

    preferences: AppPreferences | None = None

    def get_preferences(self) -> AppPreferences | None:
        return self.preferences

    def save_preferences(self, preferences: AppPreferences) -> None:
        self.preferences = preferences

    def clear(self) -> None:
        self.preferences = None


@dataclass
class FakeRecognitionClient(RecognitionClient):
    """Fake recognition client returning canned labels."""

    items: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"label": "salad", "confidence": 0.35},
            {"label": "pizza", "confidence": 0.92},
            {"label": "noise", "confidence": 0.005},
            {"label": "hamburger", "confidence": 0.61},
        ]
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append({"model": model, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return {"items": self.items}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def recognition_client() -> FakeRecognitionClient:
    return FakeRecognitionClient()


@pytest.fixture
def recognition_service(
    settings: Settings, recognition_client: FakeRecognitionClient
) -> RecognitionService:
    return RecognitionService(
        client=recognition_client,
        cache=InMemoryCache(),
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        min_confidence=settings.recognition_min_confidence,
    )


@pytest.fixture
def container(
    settings: Settings, recognition_service: RecognitionService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=ProfileService(InMemoryProfileRepository()),
        food_log_service=FoodLogService(InMemoryFoodLogRepository()),
        food_database_service=FoodDatabaseService(),
        preferences_service=PreferencesService(InMemoryPreferencesRepository()),
        recognition_service=recognition_service,
        close_resources=close_resources,
    )
