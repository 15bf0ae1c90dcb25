"""Domain models for meal logging."""

from dataclasses import dataclass

from fit_tracker.domain.catalog import MealCategory

AI_SCAN_FOOD_ID = "ai-scan"


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrient grams for a portion or a combination."""

    calories: float
    carbs: float
    protein: float
    fat: float


@dataclass(frozen=True)
class LoggedMeal:
    """An eaten item or combo, with portion-scaled nutrition."""

    id: str
    food_id: str
    name: str
    calories: int
    carbs: float
    protein: float
    fat: float
    portion: float
    timestamp: int
    category: MealCategory


@dataclass(frozen=True)
class CustomMeal:
    """A user-built combination of catalog foods with pre-summed totals."""

    id: str
    name: str
    calories: float
    carbs: float
    protein: float
    fat: float
    items: tuple[str, ...]
