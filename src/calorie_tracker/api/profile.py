"""Profile and health goal endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from calorie_tracker.api.schemas import (  # noqa: TC001
    CustomGoalPayload,
    GoalTypePayload,
    ProfilePayload,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["profile"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
async def get_profile(request: Request) -> dict[str, object]:
    profile = _container(request).profile_service.get_profile()
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"profile": profile}


@router.put("/profile")
async def save_profile(payload: ProfilePayload, request: Request) -> dict[str, object]:
    """Create or replace the profile; a default goal is derived when missing."""
    service = _container(request).profile_service
    profile = service.save_profile(payload.to_domain())
    return {"profile": profile, "goal": service.get_current_goal()}


@router.get("/profile/summary")
async def profile_summary(request: Request) -> dict[str, object]:
    summary = _container(request).profile_service.progress_summary()
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"summary": summary}


@router.get("/profile/recommendations")
async def recommendations(request: Request) -> dict[str, object]:
    return {
        "recommendations": _container(request).profile_service.recommendations()
    }


@router.get("/goal")
async def get_goal(request: Request) -> dict[str, object]:
    goal = _container(request).profile_service.get_current_goal()
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {
        "goal": goal,
        "macro_distribution": goal.macro_distribution_description,
        "within_recommended_ranges": goal.is_within_recommended_ranges(),
    }


@router.post("/goal/type")
async def set_goal_type(
    payload: GoalTypePayload, request: Request
) -> dict[str, object]:
    goal = _container(request).profile_service.set_goal_type(
        payload.goal_type, payload.weekly_weight_change
    )
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"goal": goal}


@router.put("/goal/custom")
async def set_custom_goal(
    payload: CustomGoalPayload, request: Request
) -> dict[str, object]:
    goal = _container(request).profile_service.set_custom_goal(
        target_calories=payload.target_calories,
        target_protein_g=payload.target_protein_g,
        target_carbs_g=payload.target_carbs_g,
        target_fat_g=payload.target_fat_g,
        notes=payload.notes,
    )
    return {"goal": goal}


@router.get("/goal/progress")
async def goal_progress(request: Request, day: date | None = None) -> dict[str, object]:
    """Return progress towards the active goal for a day (default today)."""
    container = _container(request)
    target_day = day or datetime.now(tz=UTC).date()
    totals = container.food_log_service.daily_totals(target_day)
    return {
        "totals": totals,
        "progress": container.profile_service.goal_progress(totals),
    }


@router.get("/goal/time-to-weight")
async def time_to_weight(target_weight: float, request: Request) -> dict[str, object]:
    days = _container(request).profile_service.time_to_goal_weight(target_weight)
    if days is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"target_weight_kg": target_weight, "days": days, "reachable": days >= 0}


@router.get("/profile/body-fat")
async def body_fat(
    neck_cm: float,
    waist_cm: float,
    request: Request,
    hip_cm: float | None = None,
) -> dict[str, object]:
    """Estimate body fat; ``body_fat_percentage`` is null for unusable girths."""
    service = _container(request).profile_service
    if service.get_profile() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {
        "body_fat_percentage": service.body_fat_percentage(neck_cm, waist_cm, hip_cm)
    }
