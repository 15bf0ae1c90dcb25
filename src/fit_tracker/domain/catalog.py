"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import StrEnum


class FoodGroup(StrEnum):
    """Food group tag used to filter the catalog."""

    MEAT = "Meat"
    VEGETABLES = "Vegetables"
    CARBS = "Carbs"
    FRUITS = "Fruits"
    DAIRY = "Dairy"
    FATS = "Fats"
    OTHER = "Other"


class MealCategory(StrEnum):
    """Meal slot a logged item belongs to."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with nutrition for one reference serving."""

    id: str
    name: str
    calories: float
    carbs: float
    protein: float
    fat: float
    fiber: float
    sugar: float
    sodium: float
    cholesterol: float
    group: FoodGroup
    category: MealCategory
    brand: str | None = None
