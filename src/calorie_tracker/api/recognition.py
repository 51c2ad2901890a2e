"""Food photo recognition endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from calorie_tracker.api.schemas import RecognitionLogPayload  # noqa: TC001
from calorie_tracker.domain.food import MealType
from calorie_tracker.domain.recognition import RecognitionResult
from calorie_tracker.services.recognition import (
    confidence_description,
    recognition_stats,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer
    from calorie_tracker.services.recognition import RecognitionService

router = APIRouter(tags=["recognition"])
_logger = logging.getLogger(__name__)


def _recognition_service(request: Request) -> RecognitionService:
    container: AppContainer = request.app.state.container
    if container.recognition_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Food recognition is not configured",
        )
    return container.recognition_service


@router.post("/recognize")
async def recognize(
    request: Request, top_k: int | None = Query(default=None, ge=1)
) -> dict[str, object]:
    """Recognize food in the raw image sent as the request body."""
    service = _recognition_service(request)
    container: AppContainer = request.app.state.container
    image_bytes = await request.body()
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image is empty"
        )
    try:
        results = await service.recognize(
            image_bytes, top_k or container.settings.recognition_top_k
        )
    except Exception as exc:
        _logger.exception("Food recognition failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Food recognition failed",
        ) from exc
    return {
        "results": [
            {
                "label": result.label,
                "name": result.display_name,
                "confidence": result.confidence,
                "confidence_description": confidence_description(result.confidence),
                "index": result.index,
                "nutrition": service.estimated_nutrition(result.label),
            }
            for result in results
        ],
        "stats": recognition_stats(results),
    }


@router.post("/recognize/log", status_code=status.HTTP_201_CREATED)
async def log_recognized(
    payload: RecognitionLogPayload, request: Request
) -> dict[str, object]:
    """Log a recognized food using its estimated nutrition."""
    service = _recognition_service(request)
    container: AppContainer = request.app.state.container
    item = service.to_food_item(
        RecognitionResult(
            label=payload.label, confidence=payload.confidence, index=payload.index
        ),
        meal_type=MealType.parse(payload.meal_type) if payload.meal_type else None,
        date=payload.date,
        quantity=payload.quantity,
        unit=payload.unit,
        custom_name=payload.custom_name,
    )
    saved = container.food_log_service.add_food(item)
    return {"item": saved, "description": saved.full_description}
