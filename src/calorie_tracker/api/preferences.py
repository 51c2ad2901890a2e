"""Preferences and data management endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from calorie_tracker.api.schemas import (  # noqa: TC001
    ImportPayload,
    PreferencesPayload,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["preferences"])
_logger = logging.getLogger(__name__)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/preferences")
async def get_preferences(request: Request) -> dict[str, object]:
    return {"preferences": _container(request).preferences_service.get()}


@router.put("/preferences")
async def update_preferences(
    payload: PreferencesPayload, request: Request
) -> dict[str, object]:
    changes = payload.model_dump(exclude_unset=True)
    if "seen_features" in changes:
        changes["seen_features"] = tuple(changes["seen_features"] or ())
    preferences = _container(request).preferences_service.update(**changes)
    return {"preferences": preferences}


@router.post("/preferences/reset")
async def reset_preferences(request: Request) -> dict[str, object]:
    return {"preferences": _container(request).preferences_service.reset()}


@router.get("/export")
async def export_data(request: Request) -> dict[str, object]:
    container = _container(request)
    return {
        "exported_at": datetime.now(tz=UTC).isoformat(),
        **container.profile_service.export_data(),
        "foods": container.food_log_service.export_data(),
        "preferences": container.preferences_service.export_data(),
    }


@router.post("/import")
async def import_data(payload: ImportPayload, request: Request) -> dict[str, object]:
    """Replace stored data with a previous export."""
    container = _container(request)
    container.profile_service.import_data(
        {"profile": payload.profile, "goal": payload.goal}
    )
    imported_foods = container.food_log_service.import_data(payload.foods)
    if payload.preferences is not None:
        container.preferences_service.import_data(payload.preferences)
    _logger.info("Imported data: foods=%s", imported_foods)
    return {"status": "ok", "foods": imported_foods}


@router.post("/reset")
async def reset_data(request: Request) -> dict[str, str]:
    container = _container(request)
    container.food_log_service.reset()
    container.profile_service.reset()
    container.preferences_service.reset()
    _logger.info("All user data cleared")
    return {"status": "ok"}
