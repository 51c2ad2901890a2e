"""Food log service: CRUD, daily aggregates and period statistics."""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from pydantic import TypeAdapter

from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.domain.nutrition import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
)
from calorie_tracker.domain.stats import (
    AverageIntake,
    DailyTotals,
    MealStats,
    NutritionStats,
)
from calorie_tracker.services.progress import calculate_average_intake
from calorie_tracker.services.validation import (
    DataValidationError,
    validate_food_item,
)

_logger = logging.getLogger(__name__)

_ITEMS_ADAPTER = TypeAdapter(list[FoodItem])

SEARCH_RESULT_LIMIT = 50


class FoodLogRepository(Protocol):
    """Persistence interface for logged food."""

    def add(self, item: FoodItem) -> FoodItem:
        """Insert an item and return it with its id."""

    def update(self, item: FoodItem) -> FoodItem | None:
        """Update an existing item, returning None when it is missing."""

    def delete(self, food_id: UUID) -> bool:
        """Delete an item and report whether it existed."""

    def get(self, food_id: UUID) -> FoodItem | None:
        """Return an item by id."""

    def list_between(
        self, start: datetime, end: datetime, meal_type: MealType | None = None
    ) -> list[FoodItem]:
        """Return items dated in [start, end), oldest first."""

    def list_all(self) -> list[FoodItem]:
        """Return every item, newest first."""

    def clear(self) -> None:
        """Delete every item."""


@dataclass
class FoodLogService:
    """Service for logging food and aggregating intake."""

    repository: FoodLogRepository

    def add_food(self, item: FoodItem) -> FoodItem:
        """Validate and store a new item."""
        self._check(item)
        return self._insert(item)

    def add_many(self, items: Iterable[FoodItem]) -> list[FoodItem]:
        pending = list(items)
        for item in pending:
            self._check(item)
        return [self._insert(item) for item in pending]

    def update_food(self, item: FoodItem) -> FoodItem | None:
        if item.id is None:
            raise ValueError("Food item id is required for updates")
        self._check(item)
        return self.repository.update(
            replace(item, date=_as_utc(item.date), updated_at=datetime.now(tz=UTC))
        )

    def delete_food(self, food_id: UUID) -> bool:
        return self.repository.delete(food_id)

    def delete_many(self, food_ids: Iterable[UUID]) -> int:
        return sum(1 for food_id in food_ids if self.repository.delete(food_id))

    def get_food(self, food_id: UUID) -> FoodItem | None:
        return self.repository.get(food_id)

    def list_for_day(
        self, day: date, meal_type: MealType | None = None
    ) -> list[FoodItem]:
        start, end = _day_bounds(day)
        return self.repository.list_between(start, end, meal_type)

    def list_for_range(self, start: date, end: date) -> list[FoodItem]:
        """Return items logged from ``start`` through ``end`` inclusive."""
        range_start, _ = _day_bounds(start)
        _, range_end = _day_bounds(end)
        return self.repository.list_between(range_start, range_end)

    def list_for_meal(self, day: date, meal_type: MealType | str) -> list[FoodItem]:
        return self.list_for_day(day, MealType.parse(meal_type))

    def daily_totals(self, day: date) -> DailyTotals:
        return _aggregate_day(day, self.list_for_day(day))

    def meal_totals(self, day: date) -> dict[MealType, DailyTotals]:
        items = self.list_for_day(day)
        return {
            meal: _aggregate_day(day, [i for i in items if i.meal_type == meal])
            for meal in MealType
        }

    def nutrition_stats(self, day: date) -> NutritionStats:
        """Return the macro split and per-meal calorie shares for a day."""
        items = self.list_for_day(day)
        totals = _aggregate_day(day, items)
        protein_kcal = totals.protein_g * KCAL_PER_G_PROTEIN
        carbs_kcal = totals.carbs_g * KCAL_PER_G_CARBS
        fat_kcal = totals.fat_g * KCAL_PER_G_FAT
        macro_kcal = protein_kcal + carbs_kcal + fat_kcal

        meals = []
        for meal in MealType:
            meal_items = [item for item in items if item.meal_type == meal]
            meal_totals = _aggregate_day(day, meal_items)
            share = (
                meal_totals.calories / totals.calories * 100
                if totals.calories > 0
                else 0.0
            )
            meals.append(
                MealStats(
                    meal_type=meal,
                    calories=meal_totals.calories,
                    protein_g=meal_totals.protein_g,
                    fat_g=meal_totals.fat_g,
                    carbs_g=meal_totals.carbs_g,
                    item_count=len(meal_items),
                    calorie_share=share,
                )
            )

        return NutritionStats(
            totals=totals,
            item_count=len(items),
            protein_percentage=_percent(protein_kcal, macro_kcal),
            carbs_percentage=_percent(carbs_kcal, macro_kcal),
            fat_percentage=_percent(fat_kcal, macro_kcal),
            meals=meals,
        )

    def period_totals(self, start: date, end: date) -> list[DailyTotals]:
        """Return one totals row per day from ``start`` through ``end``."""
        if end < start:
            raise ValueError("End date must not be before start date")
        items = self.list_for_range(start, end)
        days = (end - start).days + 1
        daily = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            daily.append(
                _aggregate_day(day, [i for i in items if _item_day(i) == day])
            )
        return daily

    def average_intake(self, start: date, end: date) -> AverageIntake:
        """Average daily intake over days that have any calories logged."""
        daily = self.period_totals(start, end)
        return calculate_average_intake([day for day in daily if day.calories > 0])

    def scale_food(
        self, food_id: UUID, quantity: float, unit: str | None = None
    ) -> FoodItem | None:
        if quantity < 0:
            raise ValueError("Quantity cannot be negative")
        item = self.repository.get(food_id)
        if item is None:
            return None
        return self.repository.update(item.adjust_by_quantity(quantity, unit))

    def merge_foods(
        self,
        first_id: UUID,
        second_id: UUID,
        new_name: str | None = None,
        *,
        replace_originals: bool = False,
    ) -> FoodItem | None:
        """Log the combination of two items, optionally removing the originals."""
        first = self.repository.get(first_id)
        second = self.repository.get(second_id)
        if first is None or second is None:
            return None
        merged = self.repository.add(first.merge(second, new_name))
        if replace_originals:
            self.repository.delete(first_id)
            self.repository.delete(second_id)
        return merged

    def copy_to_date(
        self, food_id: UUID, day: date, meal_type: MealType | str | None = None
    ) -> FoodItem | None:
        item = self.repository.get(food_id)
        if item is None:
            return None
        target = datetime.combine(day, item.date.timetz())
        return self.add_food(
            replace(
                item,
                id=None,
                date=target,
                meal_type=MealType.parse(meal_type) if meal_type else item.meal_type,
                created_at=None,
                updated_at=None,
            )
        )

    def recent_foods(self, limit: int = 10) -> list[FoodItem]:
        items = sorted(self.repository.list_all(), key=lambda i: i.date, reverse=True)
        return items[:limit]

    def frequent_foods(self, limit: int = 20) -> list[FoodItem]:
        """Return the latest entry of each of the most often logged foods."""
        counts: Counter[str] = Counter()
        latest: dict[str, FoodItem] = {}
        for item in self.repository.list_all():
            key = item.name.lower()
            counts[key] += 1
            if key not in latest or item.date > latest[key].date:
                latest[key] = item
        return [latest[key] for key, _ in counts.most_common(limit)]

    def search(
        self,
        query: str,
        start: date | None = None,
        end: date | None = None,
        meal_type: MealType | None = None,
    ) -> list[FoodItem]:
        """Find logged items by name; prefix matches rank first, then newest."""
        if start is not None and end is not None:
            items = self.list_for_range(start, end)
        else:
            items = self.repository.list_all()
        needle = query.strip().lower()
        matches = [
            item
            for item in items
            if needle in item.name.lower()
            and (meal_type is None or item.meal_type == meal_type)
        ]
        matches.sort(key=lambda i: i.date, reverse=True)
        matches.sort(key=lambda i: not i.name.lower().startswith(needle))
        return matches[:SEARCH_RESULT_LIMIT]

    def export_data(self) -> list[dict[str, object]]:
        return _ITEMS_ADAPTER.dump_python(self.repository.list_all(), mode="json")

    def import_data(self, rows: list[dict[str, object]]) -> int:
        """Replace the log with previously exported rows."""
        items = _ITEMS_ADAPTER.validate_python(rows)
        for item in items:
            self._check(item)
        self.repository.clear()
        for item in items:
            self.repository.add(item)
        return len(items)

    def reset(self) -> None:
        self.repository.clear()

    def _insert(self, item: FoodItem) -> FoodItem:
        return self.repository.add(
            replace(
                item,
                id=None,
                date=_as_utc(item.date),
                created_at=item.created_at or datetime.now(tz=UTC),
                updated_at=None,
            )
        )

    def _check(self, item: FoodItem) -> None:
        result = validate_food_item(item)
        if not result.is_valid:
            raise DataValidationError(result.errors)
        for field_name, message in result.warnings.items():
            _logger.warning(
                "Food validation warning: name=%s field=%s message=%s",
                item.name,
                field_name,
                message,
            )


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=UTC)
    return start, start + timedelta(days=1)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _item_day(item: FoodItem) -> date:
    return _as_utc(item.date).date()


def _aggregate_day(day: date, items: list[FoodItem]) -> DailyTotals:
    total = DailyTotals.empty(day)
    for item in items:
        total = DailyTotals(
            day=day,
            calories=total.calories + item.calories,
            protein_g=total.protein_g + item.protein_g,
            fat_g=total.fat_g + item.fat_g,
            carbs_g=total.carbs_g + item.carbs_g,
        )
    return total


def _percent(part: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return part / total * 100
