"""Supabase repository for logged food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.services.food_log import FoodLogRepository

_COLUMNS = (
    "id, name, calories, protein_g, carbs_g, fat_g, meal_type, date, quantity, "
    "unit, notes, created_at, updated_at"
)
_NIL_ID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for the food log."""

    client: Client

    def add(self, item: FoodItem) -> FoodItem:
        response = self.client.table("food_items").insert(_payload(item)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return _parse_item(response.data[0])

    def update(self, item: FoodItem) -> FoodItem | None:
        response = (
            self.client.table("food_items")
            .update(_payload(item))
            .eq("id", str(item.id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def delete(self, food_id: UUID) -> bool:
        response = (
            self.client.table("food_items").delete().eq("id", str(food_id)).execute()
        )
        return bool(response.data)

    def get(self, food_id: UUID) -> FoodItem | None:
        response = (
            self.client.table("food_items")
            .select(_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def list_between(
        self, start: datetime, end: datetime, meal_type: MealType | None = None
    ) -> list[FoodItem]:
        query = (
            self.client.table("food_items")
            .select(_COLUMNS)
            .gte("date", start.isoformat())
            .lt("date", end.isoformat())
        )
        if meal_type is not None:
            query = query.eq("meal_type", str(meal_type))
        response = query.order("date", desc=False).execute()
        return [_parse_item(row) for row in response.data or []]

    def list_all(self) -> list[FoodItem]:
        response = (
            self.client.table("food_items")
            .select(_COLUMNS)
            .order("date", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def clear(self) -> None:
        self.client.table("food_items").delete().neq("id", _NIL_ID).execute()


def _payload(item: FoodItem) -> dict[str, object]:
    return {
        "name": item.name,
        "calories": item.calories,
        "protein_g": item.protein_g,
        "carbs_g": item.carbs_g,
        "fat_g": item.fat_g,
        "meal_type": str(item.meal_type),
        "date": item.date.isoformat(),
        "quantity": item.quantity,
        "unit": item.unit,
        "notes": item.notes,
        "created_at": item.created_at.isoformat() if item.created_at else None,
        "updated_at": item.updated_at.isoformat() if item.updated_at else None,
    }


def _parse_item(row: dict[str, object]) -> FoodItem:
    quantity = row.get("quantity")
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        meal_type=MealType.parse(str(row.get("meal_type", ""))),
        date=datetime.fromisoformat(str(row["date"])),
        quantity=float(quantity) if quantity is not None else None,
        unit=row.get("unit"),
        notes=row.get("notes"),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))
