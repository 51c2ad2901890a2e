"""Supabase repository for the user profile and health goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.profile import ActivityLevel, Gender, UserProfile
from calorie_tracker.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "id, name, age, gender, height_cm, weight_kg, activity_level, "
    "created_at, updated_at"
)
_GOAL_COLUMNS = (
    "id, target_calories, target_protein_g, target_carbs_g, target_fat_g, "
    "goal_type, notes, is_active, created_at, updated_at"
)
_NIL_ID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile and goal persistence."""

    client: Client

    def get_profile(self) -> UserProfile | None:
        response = (
            self.client.table("user_profiles")
            .select(_PROFILE_COLUMNS)
            .order("created_at", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile or update the row with the same id."""
        payload = {
            "name": profile.name,
            "age": profile.age,
            "gender": str(profile.gender),
            "height_cm": profile.height_cm,
            "weight_kg": profile.weight_kg,
            "activity_level": str(profile.activity_level),
            "created_at": _iso(profile.created_at),
            "updated_at": _iso(profile.updated_at),
        }
        table = self.client.table("user_profiles")
        if profile.id is None:
            response = table.insert(payload).execute()
            if not response.data:
                raise RuntimeError("Failed to create user profile")
        else:
            response = table.update(payload).eq("id", str(profile.id)).execute()
            if not response.data:
                raise RuntimeError(f"User profile not found: id={profile.id}")
        return _parse_profile(response.data[0])

    def get_active_goal(self) -> HealthGoal | None:
        response = (
            self.client.table("health_goals")
            .select(_GOAL_COLUMNS)
            .eq("is_active", True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def save_goal(self, goal: HealthGoal) -> HealthGoal:
        """Store the goal as the only active one."""
        payload = {
            "target_calories": goal.target_calories,
            "target_protein_g": goal.target_protein_g,
            "target_carbs_g": goal.target_carbs_g,
            "target_fat_g": goal.target_fat_g,
            "goal_type": str(goal.goal_type) if goal.goal_type else None,
            "notes": goal.notes,
            "is_active": True,
            "created_at": goal.created_at.isoformat(),
            "updated_at": _iso(goal.updated_at),
        }
        table = self.client.table("health_goals")
        if goal.id is None:
            table.update({"is_active": False}).eq("is_active", True).execute()
            response = table.insert(payload).execute()
            if not response.data:
                raise RuntimeError("Failed to create health goal")
        else:
            response = table.update(payload).eq("id", str(goal.id)).execute()
            if not response.data:
                raise RuntimeError(f"Health goal not found: id={goal.id}")
        return _parse_goal(response.data[0])

    def clear(self) -> None:
        self.client.table("health_goals").delete().neq("id", _NIL_ID).execute()
        self.client.table("user_profiles").delete().neq("id", _NIL_ID).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        age=int(row.get("age", 0)),
        gender=Gender.parse(str(row.get("gender", ""))),
        height_cm=float(row.get("height_cm", 0.0)),
        weight_kg=float(row.get("weight_kg", 0.0)),
        activity_level=ActivityLevel.parse(str(row.get("activity_level", ""))),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_goal(row: dict[str, object]) -> HealthGoal:
    goal_type = row.get("goal_type")
    created_at = _parse_datetime(row.get("created_at"))
    if created_at is None:
        raise RuntimeError("Health goal row is missing created_at")
    return HealthGoal(
        id=UUID(str(row["id"])),
        target_calories=float(row.get("target_calories", 0.0)),
        target_protein_g=float(row.get("target_protein_g", 0.0)),
        target_carbs_g=float(row.get("target_carbs_g", 0.0)),
        target_fat_g=float(row.get("target_fat_g", 0.0)),
        goal_type=GoalType.parse(str(goal_type)) if goal_type else None,
        notes=row.get("notes"),
        is_active=bool(row.get("is_active", True)),
        created_at=created_at,
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
