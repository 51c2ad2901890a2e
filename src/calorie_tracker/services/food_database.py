"""Built-in reference catalog of common foods (values per 100 g or 100 ml)."""

from dataclasses import dataclass, field
from datetime import datetime

from calorie_tracker.domain.food import FoodDatabaseItem, FoodItem, MealType


def _food(  # noqa: PLR0913
    food_id: str,
    name: str,
    category: str,
    calories: float,
    protein_g: float,
    carbs_g: float,
    fat_g: float,
    serving_size: float,
    tags: tuple[str, ...],
    unit: str = "g",
) -> FoodDatabaseItem:
    return FoodDatabaseItem(
        id=food_id,
        name=name,
        category=category,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        unit=unit,
        serving_size=serving_size,
        tags=tags,
    )


DEFAULT_CATALOG: tuple[FoodDatabaseItem, ...] = (
    _food("apple_fresh", "Apple", "Fruits", 52, 0.3, 14, 0.2, 150,
          ("fresh", "raw", "vitamin c")),
    _food("banana_fresh", "Banana", "Fruits", 89, 1.1, 23, 0.3, 120,
          ("fresh", "potassium", "energy")),
    _food("orange_fresh", "Orange", "Fruits", 47, 0.9, 12, 0.1, 130,
          ("fresh", "citrus", "vitamin c")),
    _food("avocado_fresh", "Avocado", "Fruits", 160, 2, 9, 15, 100,
          ("fresh", "healthy fat", "fiber")),
    _food("broccoli_steamed", "Broccoli (Steamed)", "Vegetables", 35, 3.7, 7, 0.4,
          100, ("green", "steamed", "vitamin k")),
    _food("spinach_fresh", "Spinach (Raw)", "Vegetables", 23, 2.9, 3.6, 0.4, 85,
          ("leafy green", "iron", "folate")),
    _food("carrot_raw", "Carrot (Raw)", "Vegetables", 41, 0.9, 10, 0.2, 60,
          ("orange", "beta carotene", "crunchy")),
    _food("tomato_fresh", "Tomato (Fresh)", "Vegetables", 18, 0.9, 3.9, 0.2, 150,
          ("red", "lycopene", "fresh")),
    _food("potato_baked", "Baked Potato (with skin)", "Vegetables", 93, 2.5, 21,
          0.1, 200, ("baked", "potassium", "fiber")),
    _food("rice_white", "White Rice (Cooked)", "Grains", 130, 2.7, 28, 0.3, 150,
          ("staple", "carbs", "cooked")),
    _food("rice_brown", "Brown Rice (Cooked)", "Grains", 111, 2.6, 23, 0.9, 150,
          ("whole grain", "fiber", "cooked")),
    _food("oats_rolled", "Rolled Oats (Dry)", "Grains", 389, 16.9, 66, 6.9, 40,
          ("breakfast", "fiber", "whole grain")),
    _food("bread_white", "White Bread", "Grains", 265, 9, 49, 3.2, 25,
          ("bread", "processed")),
    _food("pasta_cooked", "Pasta (Cooked)", "Grains", 131, 5, 25, 1.1, 100,
          ("italian", "carbs", "cooked")),
    _food("chicken_breast", "Chicken Breast (Grilled)", "Proteins", 165, 31, 0,
          3.6, 100, ("lean", "grilled", "poultry")),
    _food("salmon_grilled", "Salmon (Grilled)", "Proteins", 206, 22, 0, 12, 100,
          ("fish", "omega-3", "grilled")),
    _food("beef_lean", "Beef (Lean, Cooked)", "Proteins", 250, 26, 0, 15, 100,
          ("red meat", "iron", "cooked")),
    _food("egg_whole", "Egg (Whole, Large)", "Proteins", 155, 13, 1.1, 11, 50,
          ("breakfast", "complete protein")),
    _food("tofu_firm", "Tofu (Firm)", "Proteins", 144, 17, 3, 9, 100,
          ("vegetarian", "soy", "plant protein")),
    _food("milk_whole", "Milk (Whole, 3.25%)", "Dairy", 61, 3.2, 4.8, 3.3, 240,
          ("dairy", "calcium", "vitamin d"), unit="ml"),
    _food("yogurt_plain", "Yogurt (Plain, Low-fat)", "Dairy", 63, 5.2, 7, 1.6,
          170, ("dairy", "probiotics", "calcium")),
    _food("cheese_cheddar", "Cheddar Cheese", "Dairy", 403, 25, 1.3, 33, 30,
          ("dairy", "aged", "calcium")),
    _food("almonds_raw", "Almonds (Raw)", "Nuts & Seeds", 579, 21, 22, 50, 25,
          ("nuts", "vitamin e", "healthy fat")),
    _food("walnuts_raw", "Walnuts (Raw)", "Nuts & Seeds", 654, 15, 14, 65, 25,
          ("nuts", "omega-3", "brain food")),
    _food("dark_chocolate", "Dark Chocolate (70% cacao)", "Snacks", 598, 7.9, 46,
          43, 20, ("chocolate", "antioxidants", "treat")),
    _food("orange_juice", "Orange Juice (Fresh)", "Beverages", 45, 0.7, 10.4, 0.2,
          240, ("juice", "vitamin c", "fresh"), unit="ml"),
)

POPULAR_FOOD_IDS: tuple[str, ...] = (
    "rice_white",
    "chicken_breast",
    "apple_fresh",
    "banana_fresh",
    "egg_whole",
    "milk_whole",
    "bread_white",
    "potato_baked",
    "salmon_grilled",
    "yogurt_plain",
    "oats_rolled",
    "broccoli_steamed",
    "pasta_cooked",
    "cheese_cheddar",
    "orange_fresh",
    "beef_lean",
    "spinach_fresh",
    "tomato_fresh",
    "avocado_fresh",
    "almonds_raw",
)


@dataclass
class FoodDatabaseService:
    """Lookup and search over the reference catalog."""

    foods: tuple[FoodDatabaseItem, ...] = DEFAULT_CATALOG
    _by_id: dict[str, FoodDatabaseItem] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_id = {food.id: food for food in self.foods}

    def all_foods(self) -> list[FoodDatabaseItem]:
        return list(self.foods)

    def categories(self) -> list[str]:
        return sorted({food.category for food in self.foods})

    def foods_by_category(self, category: str) -> list[FoodDatabaseItem]:
        return [food for food in self.foods if food.category == category]

    def search(self, query: str) -> list[FoodDatabaseItem]:
        """Match name, category or tags; an empty query returns everything."""
        needle = query.strip().lower()
        if not needle:
            return self.all_foods()
        return [
            food
            for food in self.foods
            if needle in food.name.lower()
            or needle in food.category.lower()
            or any(needle in tag.lower() for tag in food.tags)
        ]

    def popular_foods(self, limit: int = 20) -> list[FoodDatabaseItem]:
        popular = [self._by_id[i] for i in POPULAR_FOOD_IDS if i in self._by_id]
        return popular[:limit]

    def get_food(self, food_id: str) -> FoodDatabaseItem | None:
        return self._by_id.get(food_id)

    def to_food_item(
        self,
        food_id: str,
        meal_type: MealType,
        date: datetime,
        serving: float | None = None,
    ) -> FoodItem | None:
        food = self._by_id.get(food_id)
        if food is None:
            return None
        return food.to_food_item(meal_type, date, serving)
