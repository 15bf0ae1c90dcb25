"""Daily nutrition ledger: totals, portion scaling and goal progress.

Everything here is a pure function over caller-supplied snapshots.
"""

import math
import sys
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, tzinfo

from fit_tracker.domain.catalog import FoodItem
from fit_tracker.domain.errors import InvalidPortionError
from fit_tracker.domain.meals import LoggedMeal, MacroTotals
from fit_tracker.domain.profile import UserProfile
from fit_tracker.domain.stats import DailyTotals, GoalProgress, MacroProgress

CARBS_TARGET_G = 240.0
FAT_TARGET_G = 60.0
WATER_GOAL_ML = 2500.0

_KCAL_PER_GRAM = {"carbs": 4.0, "protein": 4.0, "fat": 9.0}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def round2(value: float) -> float:
    """Round to two decimals the way the mobile client does.

    Mirrors ``Math.round((x + Number.EPSILON) * 100) / 100`` including its
    floating-point quirks, so stored values match what the user saw.
    """
    return round_half_up((value + sys.float_info.epsilon) * 100) / 100


def meal_day(meal: LoggedMeal, tz: tzinfo = UTC) -> date:
    """Return the local calendar day a meal was logged on."""
    return datetime.fromtimestamp(meal.timestamp / 1000, tz=tz).date()


def compute_daily_totals(
    meals: Iterable[LoggedMeal],
    water: float,
    day: date | None = None,
    tz: tzinfo = UTC,
) -> DailyTotals:
    """Sum calories and macros across meals, plus the water intake.

    With ``day`` set only meals logged on that local day are summed. Without it
    every meal is summed, which matches the historical behaviour of the app.
    """
    calories = 0.0
    carbs = 0.0
    protein = 0.0
    fat = 0.0
    for meal in meals:
        if day is not None and meal_day(meal, tz) != day:
            continue
        calories += meal.calories
        carbs += meal.carbs
        protein += meal.protein
        fat += meal.fat
    return DailyTotals(
        day=day,
        calories=calories,
        carbs=carbs,
        protein=protein,
        fat=fat,
        water_ml=water,
    )


def scale_portion(food: FoodItem, portion: float) -> MacroTotals:
    """Scale a catalog food's reference serving by a portion multiplier."""
    if portion <= 0:
        raise InvalidPortionError(f"Portion multiplier must be positive: {portion}")
    return MacroTotals(
        calories=round_half_up(food.calories * portion),
        carbs=round2(food.carbs * portion),
        protein=round2(food.protein * portion),
        fat=round2(food.fat * portion),
    )


def sum_foods(foods: Sequence[FoodItem]) -> MacroTotals:
    """Sum the reference-serving nutrition of several foods."""
    total = MacroTotals(0.0, 0.0, 0.0, 0.0)
    for food in foods:
        total = MacroTotals(
            calories=total.calories + food.calories,
            carbs=total.carbs + food.carbs,
            protein=total.protein + food.protein,
            fat=total.fat + food.fat,
        )
    return total


def macro_calorie_shares(food: FoodItem) -> dict[str, float]:
    """Return the percentage of a food's calories coming from each macro."""
    if food.calories <= 0:
        return {name: 0.0 for name in _KCAL_PER_GRAM}
    return {
        name: round2(getattr(food, name) * kcal / food.calories * 100)
        for name, kcal in _KCAL_PER_GRAM.items()
    }


def goal_progress(totals: DailyTotals, profile: UserProfile) -> GoalProgress:
    """Compare daily totals against the user's calorie and macro targets."""
    goal = float(profile.daily_calories)
    eaten = totals.calories
    return GoalProgress(
        eaten=eaten,
        goal=goal,
        remaining=max(0.0, goal - eaten),
        calorie_percent=_percent(eaten, goal),
        carbs=_macro(totals.carbs, CARBS_TARGET_G),
        protein=_macro(totals.protein, profile.protein_goal),
        fat=_macro(totals.fat, FAT_TARGET_G),
        water_ml=totals.water_ml,
        water_goal_ml=WATER_GOAL_ML,
    )


def _macro(value: float, target: float) -> MacroProgress:
    return MacroProgress(value=value, target=target, percent=_percent(value, target))


def _percent(value: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return min(100.0, value / target * 100)
