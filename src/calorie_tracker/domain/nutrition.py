"""Nutrition domain models and unit constants."""

from dataclasses import dataclass

KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_FAT = 9.0
KCAL_PER_KG_BODY_MASS = 7700.0

# Allowed gap between stated calories and macro calories for logged food.
FOOD_CALORIE_TOLERANCE = 0.2


def macro_calories(protein_g: float, carbs_g: float, fat_g: float) -> float:
    """Return the energy carried by the given macronutrient grams."""
    return (
        protein_g * KCAL_PER_G_PROTEIN
        + carbs_g * KCAL_PER_G_CARBS
        + fat_g * KCAL_PER_G_FAT
    )


def format_amount(value: float) -> str:
    """Format a number without decimals when whole, else with one decimal."""
    if value % 1 == 0:
        return str(int(value))
    return f"{value:.1f}"


@dataclass(frozen=True)
class MacroProfile:
    """Energy and macronutrient totals."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float

    @property
    def macro_calories(self) -> float:
        return macro_calories(self.protein_g, self.carbs_g, self.fat_g)

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            fat_g=self.fat_g + other.fat_g,
            carbs_g=self.carbs_g + other.carbs_g,
        )


@dataclass(frozen=True)
class MacroGrams:
    """Gram amounts of each macronutrient for a calorie target."""

    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def calories(self) -> float:
        """Energy equivalent of the gram amounts."""
        return macro_calories(self.protein_g, self.carbs_g, self.fat_g)


@dataclass(frozen=True)
class WeightRange:
    """Body weight bounds in kilograms."""

    min_kg: float
    max_kg: float
