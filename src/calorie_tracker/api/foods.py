"""Food log and catalog endpoints."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from calorie_tracker.api.schemas import (  # noqa: TC001
    CatalogLogPayload,
    CopyPayload,
    FoodPayload,
    MergePayload,
    ScalePayload,
)
from calorie_tracker.domain.food import FoodItem, MealType

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["foods"])

DEFAULT_AVERAGE_DAYS = 7


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _food_view(item: FoodItem) -> dict[str, object]:
    return {
        "item": item,
        "description": item.full_description,
        "nutrition_summary": item.nutrition_summary,
        "nutrition_data_valid": item.is_nutrition_data_valid,
    }


def _found(item: FoodItem | None) -> FoodItem:
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return item


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def add_food(payload: FoodPayload, request: Request) -> dict[str, object]:
    item = _container(request).food_log_service.add_food(payload.to_domain())
    return _food_view(item)


@router.get("/foods")
async def list_foods(
    request: Request, day: date | None = None, meal_type: str | None = None
) -> dict[str, object]:
    service = _container(request).food_log_service
    target_day = day or _today()
    if meal_type:
        items = service.list_for_meal(target_day, meal_type)
    else:
        items = service.list_for_day(target_day)
    return {"day": target_day, "items": [_food_view(item) for item in items]}


@router.get("/foods/summary")
async def daily_summary(request: Request, day: date | None = None) -> dict[str, object]:
    service = _container(request).food_log_service
    target_day = day or _today()
    return {
        "totals": service.daily_totals(target_day),
        "meals": service.meal_totals(target_day),
    }


@router.get("/foods/stats")
async def nutrition_stats(
    request: Request, day: date | None = None
) -> dict[str, object]:
    stats = _container(request).food_log_service.nutrition_stats(day or _today())
    return {"stats": stats}


@router.get("/foods/averages")
async def averages(
    request: Request, start: date | None = None, end: date | None = None
) -> dict[str, object]:
    """Daily series and averages over a date range (default: last 7 days)."""
    service = _container(request).food_log_service
    range_end = end or _today()
    range_start = start or range_end - timedelta(days=DEFAULT_AVERAGE_DAYS - 1)
    return {
        "daily": service.period_totals(range_start, range_end),
        "average": service.average_intake(range_start, range_end),
    }


@router.get("/foods/recent")
async def recent_foods(request: Request, limit: int = 10) -> dict[str, object]:
    items = _container(request).food_log_service.recent_foods(limit)
    return {"items": [_food_view(item) for item in items]}


@router.get("/foods/frequent")
async def frequent_foods(request: Request, limit: int = 20) -> dict[str, object]:
    items = _container(request).food_log_service.frequent_foods(limit)
    return {"items": [_food_view(item) for item in items]}


@router.get("/foods/search")
async def search_foods(  # noqa: PLR0913
    request: Request,
    query: str,
    start: date | None = None,
    end: date | None = None,
    meal_type: str | None = None,
) -> dict[str, object]:
    items = _container(request).food_log_service.search(
        query, start, end, MealType.parse(meal_type) if meal_type else None
    )
    return {"items": [_food_view(item) for item in items]}


@router.post("/foods/merge", status_code=status.HTTP_201_CREATED)
async def merge_foods(payload: MergePayload, request: Request) -> dict[str, object]:
    merged = _container(request).food_log_service.merge_foods(
        payload.first_id,
        payload.second_id,
        payload.new_name,
        replace_originals=payload.replace_originals,
    )
    return _food_view(_found(merged))


@router.get("/foods/{food_id}")
async def get_food(food_id: UUID, request: Request) -> dict[str, object]:
    return _food_view(_found(_container(request).food_log_service.get_food(food_id)))


@router.put("/foods/{food_id}")
async def update_food(
    food_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    service = _container(request).food_log_service
    existing = _found(service.get_food(food_id))
    updated = service.update_food(
        replace(payload.to_domain(food_id), created_at=existing.created_at)
    )
    return _food_view(_found(updated))


@router.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(food_id: UUID, request: Request) -> None:
    if not _container(request).food_log_service.delete_food(food_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)


@router.post("/foods/{food_id}/scale")
async def scale_food(
    food_id: UUID, payload: ScalePayload, request: Request
) -> dict[str, object]:
    item = _container(request).food_log_service.scale_food(
        food_id, payload.quantity, payload.unit
    )
    return _food_view(_found(item))


@router.post("/foods/{food_id}/copy", status_code=status.HTTP_201_CREATED)
async def copy_food(
    food_id: UUID, payload: CopyPayload, request: Request
) -> dict[str, object]:
    item = _container(request).food_log_service.copy_to_date(
        food_id, payload.day, payload.meal_type
    )
    return _food_view(_found(item))


@router.get("/catalog")
async def catalog(
    request: Request, query: str = "", category: str | None = None
) -> dict[str, object]:
    service = _container(request).food_database_service
    foods = service.search(query)
    if category:
        foods = [food for food in foods if food.category == category]
    return {"foods": foods}


@router.get("/catalog/categories")
async def catalog_categories(request: Request) -> dict[str, object]:
    return {"categories": _container(request).food_database_service.categories()}


@router.get("/catalog/popular")
async def catalog_popular(request: Request, limit: int = 20) -> dict[str, object]:
    return {"foods": _container(request).food_database_service.popular_foods(limit)}


@router.post("/catalog/{food_id}/log", status_code=status.HTTP_201_CREATED)
async def log_catalog_food(
    food_id: str, payload: CatalogLogPayload, request: Request
) -> dict[str, object]:
    """Log a catalog food at its standard or a custom serving."""
    container = _container(request)
    item = container.food_database_service.to_food_item(
        food_id,
        MealType.parse(payload.meal_type),
        payload.date or datetime.now(tz=UTC),
        payload.serving,
    )
    return _food_view(container.food_log_service.add_food(_found(item)))
