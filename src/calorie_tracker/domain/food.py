"""Domain models for logged food and the reference food catalog."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID

from calorie_tracker.domain.nutrition import (
    FOOD_CALORIE_TOLERANCE,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    MacroProfile,
    format_amount,
    macro_calories,
)


class MealType(StrEnum):
    """Meal a food item was eaten at."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def parse(cls, value: "MealType | str") -> "MealType":
        """Return the meal type, falling back to snack when unknown."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.SNACK

    @classmethod
    def is_known(cls, value: object) -> bool:
        return str(value).strip().lower() in {meal.value for meal in cls}

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class FoodItem:
    """A single logged consumption event."""

    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    meal_type: MealType
    date: datetime
    id: UUID | None = None
    quantity: float | None = None
    unit: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def macros(self) -> MacroProfile:
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            fat_g=self.fat_g,
            carbs_g=self.carbs_g,
        )

    @property
    def macro_calories(self) -> float:
        return macro_calories(self.protein_g, self.carbs_g, self.fat_g)

    @property
    def protein_percentage(self) -> float:
        return self._share(self.protein_g * KCAL_PER_G_PROTEIN)

    @property
    def carbs_percentage(self) -> float:
        return self._share(self.carbs_g * KCAL_PER_G_CARBS)

    @property
    def fat_percentage(self) -> float:
        return self._share(self.fat_g * KCAL_PER_G_FAT)

    @property
    def is_nutrition_data_valid(self) -> bool:
        """Return True when the macros roughly add up to the stated calories."""
        if self.calories == 0:
            return self.protein_g == 0 and self.carbs_g == 0 and self.fat_g == 0
        difference = abs(self.macro_calories - self.calories)
        return difference <= self.calories * FOOD_CALORIE_TOLERANCE

    @property
    def formatted_quantity(self) -> str:
        if not self.quantity:
            return ""
        amount = format_amount(self.quantity)
        if self.unit:
            return f"{amount}{self.unit}"
        return amount

    @property
    def nutrition_summary(self) -> str:
        """Short macro breakdown listing only the non-zero nutrients."""
        parts = []
        if self.protein_g > 0:
            parts.append(f"Protein {format_amount(self.protein_g)}g")
        if self.carbs_g > 0:
            parts.append(f"Carbs {format_amount(self.carbs_g)}g")
        if self.fat_g > 0:
            parts.append(f"Fat {format_amount(self.fat_g)}g")
        return " • ".join(parts)

    @property
    def full_description(self) -> str:
        parts = [self.name]
        if self.formatted_quantity:
            parts.append(f"({self.formatted_quantity})")
        parts.append(f"{format_amount(self.calories)} kcal")
        if self.nutrition_summary:
            parts.append(self.nutrition_summary)
        return " ".join(parts)

    def adjust_by_quantity(
        self, new_quantity: float, new_unit: str | None = None
    ) -> "FoodItem":
        """Return a copy rescaled to a new quantity.

        Nutrients scale linearly with the quantity ratio. When the current
        quantity is unknown or either quantity is zero there is nothing to
        scale against, so only the quantity and unit are replaced.
        """
        unit = new_unit or self.unit
        if not self.quantity or new_quantity == 0:
            return replace(self, quantity=new_quantity, unit=unit)
        ratio = new_quantity / self.quantity
        return replace(
            self,
            calories=self.calories * ratio,
            protein_g=self.protein_g * ratio,
            carbs_g=self.carbs_g * ratio,
            fat_g=self.fat_g * ratio,
            quantity=new_quantity,
            unit=unit,
            updated_at=datetime.now(tz=UTC),
        )

    def merge(self, other: "FoodItem", new_name: str | None = None) -> "FoodItem":
        """Combine two items into a new, not yet persisted, item."""
        if self.notes is not None and other.notes is not None:
            notes: str | None = f"{self.notes}; {other.notes}"
        else:
            notes = self.notes if self.notes is not None else other.notes
        return FoodItem(
            name=new_name or f"{self.name} + {other.name}",
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            meal_type=self.meal_type,
            date=self.date,
            notes=notes,
            created_at=datetime.now(tz=UTC),
        )

    def to_template(self, template_name: str | None = None) -> "FoodItem":
        """Return a reusable preset without identity or timestamps."""
        return FoodItem(
            name=template_name or self.name,
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            meal_type=self.meal_type,
            date=datetime.now(tz=UTC),
            quantity=self.quantity,
            unit=self.unit,
            notes=self.notes,
        )

    def _share(self, calories: float) -> float:
        total = self.macro_calories
        if total == 0:
            return 0.0
        return calories / total * 100


@dataclass(frozen=True)
class FoodDatabaseItem:
    """Catalog food with nutrition facts per 100 g (or 100 ml)."""

    id: str
    name: str
    category: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    unit: str
    serving_size: float
    tags: tuple[str, ...] = ()
    description: str | None = None

    def nutrition_for_serving(self, amount: float) -> MacroProfile:
        ratio = amount / 100.0
        return MacroProfile(
            calories=self.calories * ratio,
            protein_g=self.protein_g * ratio,
            fat_g=self.fat_g * ratio,
            carbs_g=self.carbs_g * ratio,
        )

    @property
    def standard_serving_nutrition(self) -> MacroProfile:
        return self.nutrition_for_serving(self.serving_size)

    def to_food_item(
        self,
        meal_type: MealType,
        date: datetime,
        custom_serving: float | None = None,
    ) -> FoodItem:
        """Create a loggable food item for the chosen serving."""
        serving = custom_serving if custom_serving is not None else self.serving_size
        nutrition = self.nutrition_for_serving(serving)
        return FoodItem(
            name=self.name,
            calories=nutrition.calories,
            protein_g=nutrition.protein_g,
            carbs_g=nutrition.carbs_g,
            fat_g=nutrition.fat_g,
            meal_type=meal_type,
            date=date,
            quantity=serving,
            unit=self.unit,
        )
