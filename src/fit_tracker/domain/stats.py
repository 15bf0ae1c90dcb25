"""Domain models for derived daily totals and goal progress."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotals:
    """Nutrition and water totals for one day.

    ``day`` is None when the totals were summed over every logged meal.
    """

    day: date | None
    calories: float
    carbs: float
    protein: float
    fat: float
    water_ml: float


@dataclass(frozen=True)
class MacroProgress:
    """Progress of a single macronutrient against its target."""

    value: float
    target: float
    percent: float


@dataclass(frozen=True)
class GoalProgress:
    """Dashboard view of today's totals against the user's goals."""

    eaten: float
    goal: float
    remaining: float
    calorie_percent: float
    carbs: MacroProgress
    protein: MacroProgress
    fat: MacroProgress
    water_ml: float
    water_goal_ml: float


@dataclass(frozen=True)
class WeekSummary:
    """Per-day totals for the trailing week with averages."""

    daily: list[DailyTotals]
    avg_calories: float
    avg_protein: float
    avg_fat: float
    avg_carbs: float
