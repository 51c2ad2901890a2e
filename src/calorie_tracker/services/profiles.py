"""Profile and health goal management."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from pydantic import TypeAdapter

from calorie_tracker.domain.goals import GoalType, HealthGoal
from calorie_tracker.domain.nutrition import WeightRange
from calorie_tracker.domain.profile import ActivityLevel, UserProfile
from calorie_tracker.domain.stats import DailyTotals
from calorie_tracker.services.energy import (
    MIN_SAFE_CALORIES,
    calculate_bmr,
    calculate_protein_requirement,
    calculate_tdee,
    calculate_water_intake,
)
from calorie_tracker.services.macros import (
    calculate_macronutrients,
    create_health_goal_for_user,
    default_macro_ratio,
)
from calorie_tracker.services.progress import (
    bmi_category,
    bmi_status,
    calculate_bmi,
    calculate_body_fat_percentage,
    calculate_goal_progress,
    calculate_ideal_weight_range,
    calculate_remaining_calories,
    calculate_time_to_goal,
    health_recommendations,
    weight_status,
)
from calorie_tracker.services.validation import (
    DataValidationError,
    ValidationResult,
    validate_goal,
    validate_profile,
)

_logger = logging.getLogger(__name__)

_PROFILE_ADAPTER = TypeAdapter(UserProfile)
_GOAL_ADAPTER = TypeAdapter(HealthGoal)


class ProfileRepository(Protocol):
    """Persistence interface for the user profile and the active goal."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or update the profile and return the stored copy."""

    def get_active_goal(self) -> HealthGoal | None:
        """Return the active health goal, if any."""

    def save_goal(self, goal: HealthGoal) -> HealthGoal:
        """Insert or update the goal as the active one and return it."""

    def clear(self) -> None:
        """Delete the profile and every goal."""


@dataclass(frozen=True)
class GoalProgress:
    """Percent of each daily target reached."""

    calories: float
    protein: float
    carbs: float
    fat: float
    remaining_calories: float


@dataclass(frozen=True)
class ProfileSummary:
    """Body metrics and energy figures derived from the profile."""

    profile: UserProfile
    goal: HealthGoal | None
    bmi: float
    bmi_category: str
    bmi_status: str
    weight_status: str
    ideal_weight: WeightRange
    bmr: float
    tdee: float
    protein_requirement_g: float
    water_intake_l: float


@dataclass
class ProfileService:
    """Service that keeps the profile and its derived goal consistent."""

    repository: ProfileRepository

    def get_profile(self) -> UserProfile | None:
        return self.repository.get_profile()

    def get_current_goal(self) -> HealthGoal | None:
        return self.repository.get_active_goal()

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Validate and store the profile, creating a default goal if needed."""
        _raise_for_errors(validate_profile(profile))
        now = datetime.now(tz=UTC)
        existing = self.repository.get_profile()
        if existing is not None and profile.id is None:
            profile = replace(profile, id=existing.id, created_at=existing.created_at)
        saved = self.repository.save_profile(
            replace(profile, created_at=profile.created_at or now, updated_at=now)
        )
        if self.repository.get_active_goal() is None:
            goal = create_health_goal_for_user(saved, GoalType.MAINTAIN)
            self.repository.save_goal(goal)
            _logger.info(
                "Created default goal: target_calories=%.0f", goal.target_calories
            )
        return saved

    def update_weight(self, weight_kg: float) -> UserProfile | None:
        return self._update_profile(weight_kg=weight_kg)

    def update_height(self, height_cm: float) -> UserProfile | None:
        return self._update_profile(height_cm=height_cm)

    def update_activity_level(
        self, activity_level: ActivityLevel | str
    ) -> UserProfile | None:
        return self._update_profile(
            activity_level=ActivityLevel.parse(activity_level)
        )

    def set_goal_type(
        self, goal_type: GoalType | str, weekly_weight_change: float = 0.0
    ) -> HealthGoal | None:
        """Replace the active goal with one derived for the goal type.

        Returns None when there is no profile to derive the goal from.
        """
        profile = self.repository.get_profile()
        if profile is None:
            return None
        derived = create_health_goal_for_user(
            profile, goal_type, weekly_weight_change
        )
        _log_warnings(validate_goal(derived))
        return self.repository.save_goal(
            _carry_identity(derived, self.repository.get_active_goal())
        )

    def set_custom_goal(  # noqa: PLR0913
        self,
        target_calories: float,
        target_protein_g: float,
        target_carbs_g: float,
        target_fat_g: float,
        notes: str | None = None,
    ) -> HealthGoal:
        """Store user-entered targets as the active custom goal."""
        current = self.repository.get_active_goal()
        now = datetime.now(tz=UTC)
        goal = HealthGoal(
            id=current.id if current else None,
            target_calories=target_calories,
            target_protein_g=target_protein_g,
            target_carbs_g=target_carbs_g,
            target_fat_g=target_fat_g,
            created_at=current.created_at if current else now,
            updated_at=now,
            goal_type=GoalType.CUSTOM,
            notes=notes,
        )
        result = validate_goal(goal)
        _raise_for_errors(result)
        _log_warnings(result)
        return self.repository.save_goal(goal)

    def goal_progress(self, totals: DailyTotals) -> GoalProgress:
        goal = self.repository.get_active_goal()
        if goal is None:
            return GoalProgress(
                calories=0.0,
                protein=0.0,
                carbs=0.0,
                fat=0.0,
                remaining_calories=0.0,
            )
        return GoalProgress(
            calories=calculate_goal_progress(totals.calories, goal.target_calories),
            protein=calculate_goal_progress(totals.protein_g, goal.target_protein_g),
            carbs=calculate_goal_progress(totals.carbs_g, goal.target_carbs_g),
            fat=calculate_goal_progress(totals.fat_g, goal.target_fat_g),
            remaining_calories=calculate_remaining_calories(
                totals.calories, goal.target_calories
            ),
        )

    def time_to_goal_weight(self, target_weight_kg: float) -> int | None:
        """Return days to reach a weight at the active goal's calorie delta."""
        profile = self.repository.get_profile()
        goal = self.repository.get_active_goal()
        if profile is None or goal is None:
            return None
        daily_delta = calculate_tdee(profile) - goal.target_calories
        return calculate_time_to_goal(profile.weight_kg, target_weight_kg, daily_delta)

    def progress_summary(self) -> ProfileSummary | None:
        profile = self.repository.get_profile()
        if profile is None:
            return None
        goal = self.repository.get_active_goal()
        bmi = calculate_bmi(profile.weight_kg, profile.height_cm)
        goal_type = goal.goal_type if goal and goal.goal_type else GoalType.MAINTAIN
        return ProfileSummary(
            profile=profile,
            goal=goal,
            bmi=bmi,
            bmi_category=bmi_category(bmi),
            bmi_status=bmi_status(bmi),
            weight_status=weight_status(profile.weight_kg, profile.height_cm),
            ideal_weight=calculate_ideal_weight_range(profile.height_cm),
            bmr=calculate_bmr(profile),
            tdee=calculate_tdee(profile),
            protein_requirement_g=calculate_protein_requirement(profile, goal_type),
            water_intake_l=calculate_water_intake(profile),
        )

    def body_fat_percentage(
        self, neck_cm: float, waist_cm: float, hip_cm: float | None = None
    ) -> float | None:
        profile = self.repository.get_profile()
        if profile is None:
            return None
        return calculate_body_fat_percentage(profile, neck_cm, waist_cm, hip_cm)

    def recommendations(self) -> list[str]:
        profile = self.repository.get_profile()
        if profile is None:
            return ["Please complete your profile to get personalized recommendations"]
        return health_recommendations(profile, self.repository.get_active_goal())

    def export_data(self) -> dict[str, object]:
        profile = self.repository.get_profile()
        goal = self.repository.get_active_goal()
        return {
            "profile": _PROFILE_ADAPTER.dump_python(profile, mode="json")
            if profile
            else None,
            "goal": _GOAL_ADAPTER.dump_python(goal, mode="json") if goal else None,
        }

    def import_data(self, payload: dict[str, object]) -> None:
        """Restore the profile and goal from an ``export_data`` payload."""
        raw_profile = payload.get("profile")
        raw_goal = payload.get("goal")
        profile = _PROFILE_ADAPTER.validate_python(raw_profile) if raw_profile else None
        goal = _GOAL_ADAPTER.validate_python(raw_goal) if raw_goal else None
        if profile is not None:
            _raise_for_errors(validate_profile(profile))
        self.repository.clear()
        if profile is not None:
            self.repository.save_profile(replace(profile, id=None))
        if goal is not None:
            self.repository.save_goal(replace(goal, id=None))

    def reset(self) -> None:
        self.repository.clear()

    def _update_profile(self, **changes: object) -> UserProfile | None:
        profile = self.repository.get_profile()
        if profile is None:
            return None
        updated = replace(profile, **changes)
        _raise_for_errors(validate_profile(updated))
        saved = self.repository.save_profile(
            replace(updated, updated_at=datetime.now(tz=UTC))
        )
        self._refresh_goal(profile, saved)
        return saved

    def _refresh_goal(self, previous: UserProfile, profile: UserProfile) -> None:
        """Re-derive a non-custom goal, keeping its offset from maintenance."""
        current = self.repository.get_active_goal()
        if current is None:
            self.repository.save_goal(
                create_health_goal_for_user(profile, GoalType.MAINTAIN)
            )
            return
        if current.goal_type is GoalType.CUSTOM:
            return
        goal_type = current.goal_type or GoalType.MAINTAIN
        offset = calculate_tdee(previous) - current.target_calories
        tdee = calculate_tdee(profile)
        target_calories = tdee - offset
        if goal_type is GoalType.LOSE:
            target_calories = min(max(target_calories, MIN_SAFE_CALORIES), tdee)
        macros = calculate_macronutrients(
            target_calories, default_macro_ratio(goal_type)
        )
        refreshed = replace(
            current,
            target_calories=target_calories,
            target_protein_g=macros.protein_g,
            target_carbs_g=macros.carbs_g,
            target_fat_g=macros.fat_g,
            updated_at=datetime.now(tz=UTC),
        )
        self.repository.save_goal(refreshed)
        _logger.info(
            "Refreshed derived goal: goal_type=%s target_calories=%.0f",
            goal_type,
            target_calories,
        )


def _carry_identity(derived: HealthGoal, current: HealthGoal | None) -> HealthGoal:
    if current is None:
        return derived
    return replace(
        derived,
        id=current.id,
        created_at=current.created_at,
        notes=current.notes,
        updated_at=datetime.now(tz=UTC),
    )


def _raise_for_errors(result: ValidationResult) -> None:
    if not result.is_valid:
        raise DataValidationError(result.errors)


def _log_warnings(result: ValidationResult) -> None:
    for field_name, message in result.warnings.items():
        _logger.warning("Validation warning: field=%s message=%s", field_name, message)
