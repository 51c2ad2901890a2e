"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from calorie_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from calorie_tracker.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.domain.food import MealType
from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.preferences import AppPreferences
from calorie_tracker.domain.profile import ActivityLevel, Gender
from calorie_tracker.services.profiles import ProfileService
from tests.conftest import make_food, make_profile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _profile_row(profile_id: str) -> dict[str, object]:
    return {
        "id": profile_id,
        "name": "Alex",
        "age": 30,
        "gender": "male",
        "height_cm": 175,
        "weight_kg": 70.5,
        "activity_level": "moderate",
        "created_at": "2026-03-01T08:00:00+00:00",
        "updated_at": None,
    }


def _goal_row(goal_id: str) -> dict[str, object]:
    return {
        "id": goal_id,
        "target_calories": 2000,
        "target_protein_g": 125,
        "target_carbs_g": 225,
        "target_fat_g": 66.7,
        "goal_type": "lose",
        "notes": None,
        "is_active": True,
        "created_at": "2026-03-01T08:00:00+00:00",
        "updated_at": None,
    }


def _food_row(food_id: str) -> dict[str, object]:
    return {
        "id": food_id,
        "name": "Oatmeal",
        "calories": 200,
        "protein_g": 10,
        "carbs_g": 30,
        "fat_g": 5,
        "meal_type": "breakfast",
        "date": "2026-03-02T08:30:00+00:00",
        "quantity": 100,
        "unit": "g",
        "notes": None,
        "created_at": "2026-03-02T08:31:00+00:00",
        "updated_at": None,
    }


def test_supabase_profile_repository_profile_roundtrip() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    profile_id = str(uuid4())
    profiles_table.queue("insert", [_profile_row(profile_id)])
    profiles_table.queue("select", [_profile_row(profile_id)])

    repository = SupabaseProfileRepository(client)
    created = repository.save_profile(make_profile(weight_kg=70.5))
    fetched = repository.get_profile()

    assert str(created.id) == profile_id
    assert isinstance(profiles_table.last_payload, dict)
    assert profiles_table.last_payload["gender"] == "male"
    assert fetched is not None
    assert fetched.gender is Gender.MALE
    assert fetched.activity_level is ActivityLevel.MODERATE
    assert fetched.weight_kg == 70.5


def test_supabase_profile_repository_updates_existing_profile() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    profile_id = uuid4()
    profiles_table.queue("update", [_profile_row(str(profile_id))])

    repository = SupabaseProfileRepository(client)
    saved = repository.save_profile(make_profile(id=profile_id, weight_kg=70.5))

    assert saved.id == profile_id
    assert saved.weight_kg == 70.5
    assert profiles_table.actions == ["update"]
    assert ("id", str(profile_id)) in profiles_table.last_filters


def test_supabase_profile_repository_update_of_missing_row_fails() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())
    goal = HealthGoal(
        id=uuid4(),
        target_calories=2000,
        target_protein_g=125,
        target_carbs_g=225,
        target_fat_g=66.7,
        created_at=datetime(2026, 3, 1, 8, tzinfo=UTC),
    )

    with pytest.raises(RuntimeError, match="not found"):
        repository.save_profile(make_profile(id=uuid4()))
    with pytest.raises(RuntimeError, match="not found"):
        repository.save_goal(goal)


def test_profile_import_inserts_rows_after_clearing() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    goals_table = client.table("health_goals")
    profiles_table.queue("insert", [_profile_row(str(uuid4()))])
    goals_table.queue("insert", [_goal_row(str(uuid4()))])
    service = ProfileService(SupabaseProfileRepository(client))

    service.import_data(
        {
            "profile": {
                "id": str(uuid4()),
                "name": "Alex",
                "age": 30,
                "gender": "male",
                "height_cm": 175,
                "weight_kg": 70.5,
                "activity_level": "moderate",
            },
            "goal": {
                "id": str(uuid4()),
                "target_calories": 2000,
                "target_protein_g": 125,
                "target_carbs_g": 225,
                "target_fat_g": 66.7,
                "goal_type": "lose",
                "created_at": "2026-03-01T08:00:00+00:00",
            },
        }
    )

    assert profiles_table.actions == ["delete", "insert"]
    assert goals_table.actions == ["delete", "update", "insert"]
    assert isinstance(profiles_table.last_payload, dict)
    assert profiles_table.last_payload["name"] == "Alex"


def test_supabase_profile_repository_new_goal_deactivates_previous() -> None:
    client = FakeSupabaseClient()
    goals_table = client.table("health_goals")
    goal_id = str(uuid4())
    goals_table.queue("insert", [_goal_row(goal_id)])

    repository = SupabaseProfileRepository(client)
    saved = repository.save_goal(
        HealthGoal(
            target_calories=2000,
            target_protein_g=125,
            target_carbs_g=225,
            target_fat_g=66.7,
            created_at=datetime(2026, 3, 1, 8, tzinfo=UTC),
            goal_type=GoalType.LOSE,
        )
    )

    assert goals_table.actions == ["update", "insert"]
    assert ("is_active", True) in goals_table.last_filters
    assert str(saved.id) == goal_id
    assert saved.goal_type is GoalType.LOSE


def test_supabase_profile_repository_active_goal_and_clear() -> None:
    client = FakeSupabaseClient()
    goals_table = client.table("health_goals")
    goals_table.queue("select", [_goal_row(str(uuid4()))])

    repository = SupabaseProfileRepository(client)
    goal = repository.get_active_goal()
    repository.clear()

    assert goal is not None
    assert goal.target_calories == 2000
    assert goal.created_at == datetime(2026, 3, 1, 8, tzinfo=UTC)
    assert goals_table.actions[-1] == "delete"
    assert client.table("user_profiles").actions == ["delete"]


def test_supabase_profile_repository_missing_rows() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_profile() is None
    assert repository.get_active_goal() is None


def test_supabase_food_log_repository_add_and_get() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("food_items")
    food_id = str(uuid4())
    foods_table.queue("insert", [_food_row(food_id)])
    foods_table.queue("select", [_food_row(food_id)])

    repository = SupabaseFoodLogRepository(client)
    created = repository.add(make_food())
    fetched = repository.get(created.id)

    assert str(created.id) == food_id
    assert isinstance(foods_table.last_payload, dict)
    assert foods_table.last_payload["meal_type"] == "breakfast"
    assert fetched is not None
    assert fetched.meal_type is MealType.BREAKFAST
    assert fetched.quantity == 100
    assert fetched.date == datetime(2026, 3, 2, 8, 30, tzinfo=UTC)


def test_supabase_food_log_repository_list_between_filters() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("food_items")
    foods_table.queue("select", [_food_row(str(uuid4())), _food_row(str(uuid4()))])
    start = datetime(2026, 3, 2, tzinfo=UTC)
    end = datetime(2026, 3, 3, tzinfo=UTC)

    repository = SupabaseFoodLogRepository(client)
    items = repository.list_between(start, end, MealType.BREAKFAST)

    assert len(items) == 2
    assert foods_table.last_filters == [
        ("date", start.isoformat()),
        ("date", end.isoformat()),
        ("meal_type", "breakfast"),
    ]


def test_supabase_food_log_repository_update_and_delete() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("food_items")
    food_id = uuid4()
    foods_table.queue("delete", [{"id": str(food_id)}])

    repository = SupabaseFoodLogRepository(client)

    assert repository.update(make_food(id=food_id)) is None
    assert repository.delete(food_id)
    assert not repository.delete(food_id)


def test_supabase_food_log_repository_clear() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("food_items")

    SupabaseFoodLogRepository(client).clear()

    assert foods_table.actions == ["delete"]
    assert foods_table.last_filters[0][0] == "id"


def test_supabase_preferences_repository() -> None:
    client = FakeSupabaseClient()
    preferences_table = client.table("app_preferences")
    preferences_table.queue(
        "select",
        [
            {
                "key": "app",
                "is_first_launch": False,
                "show_onboarding": False,
                "launch_count": 4,
                "install_date": "2026-03-01T08:00:00+00:00",
                "last_launch_date": None,
                "seen_features": ["stats"],
            }
        ],
    )

    repository = SupabasePreferencesRepository(client)
    fetched = repository.get_preferences()
    repository.save_preferences(AppPreferences(launch_count=5))

    assert fetched is not None
    assert fetched.launch_count == 4
    assert fetched.seen_features == ("stats",)
    assert fetched.install_date == datetime(2026, 3, 1, 8, tzinfo=UTC)
    assert preferences_table.actions[-1] == "upsert"
    assert isinstance(preferences_table.last_payload, dict)
    assert preferences_table.last_payload["key"] == "app"
    assert preferences_table.last_payload["launch_count"] == 5
    assert repository.get_preferences() is None
