"""Meal logging and custom meal management."""

import logging
import secrets
import string
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo

from fit_tracker.domain.catalog import MealCategory
from fit_tracker.domain.errors import (
    EmptyMealError,
    NoFoodDetectedError,
    NotFoundError,
)
from fit_tracker.domain.meals import AI_SCAN_FOOD_ID, CustomMeal, LoggedMeal
from fit_tracker.domain.vision import FoodScanResult
from fit_tracker.services.catalog import CatalogService
from fit_tracker.services.ledger import (
    meal_day,
    round_half_up,
    scale_portion,
    sum_foods,
)
from fit_tracker.services.snapshots import (
    custom_meal_from_document,
    custom_meal_to_document,
    logged_meal_from_document,
    logged_meal_to_document,
)
from fit_tracker.services.store import CUSTOM_MEALS_KEY, LOGS_KEY, DocumentStore

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9

_logger = logging.getLogger(__name__)


@dataclass
class MealLogService:
    """Service that turns foods, combos and scans into logged meals."""

    store: DocumentStore
    catalog: CatalogService

    def list_meals(self, user_id: str) -> list[LoggedMeal]:
        """Return every logged meal in insertion order."""
        doc = self.store.get(user_id, LOGS_KEY)
        if not isinstance(doc, list):
            return []
        return [
            logged_meal_from_document(row) for row in doc if isinstance(row, dict)
        ]

    def log_food(
        self,
        user_id: str,
        food_id: str,
        portion: float,
        category: MealCategory | None = None,
        now: datetime | None = None,
    ) -> LoggedMeal:
        """Log a catalog food scaled by a portion multiplier."""
        food = self.catalog.get_food(food_id)
        scaled = scale_portion(food, portion)
        meal = LoggedMeal(
            id=new_id(),
            food_id=food.id,
            name=food.name,
            calories=int(scaled.calories),
            carbs=scaled.carbs,
            protein=scaled.protein,
            fat=scaled.fat,
            portion=portion,
            timestamp=_epoch_ms(now),
            category=category or food.category,
        )
        return self._append(user_id, meal)

    def log_custom_meal(
        self,
        user_id: str,
        meal_id: str,
        category: MealCategory = MealCategory.LUNCH,
        now: datetime | None = None,
    ) -> LoggedMeal:
        """Log one serving of a saved custom meal."""
        custom = self.get_custom_meal(user_id, meal_id)
        meal = LoggedMeal(
            id=new_id(),
            food_id=custom.id,
            name=custom.name,
            calories=round_half_up(custom.calories),
            carbs=custom.carbs,
            protein=custom.protein,
            fat=custom.fat,
            portion=1.0,
            timestamp=_epoch_ms(now),
            category=category,
        )
        return self._append(user_id, meal)

    def log_scan(
        self,
        user_id: str,
        result: FoodScanResult,
        category: MealCategory,
        now: datetime | None = None,
    ) -> LoggedMeal:
        """Log a food recognised from a photo."""
        if not result.is_food:
            raise NoFoodDetectedError("Scan result does not describe a food")
        meal = LoggedMeal(
            id=new_id(),
            food_id=AI_SCAN_FOOD_ID,
            name=result.name or "Scanned meal",
            calories=round_half_up(result.calories),
            carbs=result.carbs,
            protein=result.protein,
            fat=result.fat,
            portion=1.0,
            timestamp=_epoch_ms(now),
            category=category,
        )
        return self._append(user_id, meal)

    def clear_day(self, user_id: str, day: date, tz: tzinfo = UTC) -> int:
        """Remove every meal logged on a local day and return how many."""
        meals = self.list_meals(user_id)
        kept = [meal for meal in meals if meal_day(meal, tz) != day]
        self._save_meals(user_id, kept)
        removed = len(meals) - len(kept)
        _logger.info(
            "Cleared meals: user_id=%s day=%s removed=%s", user_id, day, removed
        )
        return removed

    def list_custom_meals(self, user_id: str) -> list[CustomMeal]:
        """Return the user's saved custom meals."""
        doc = self.store.get(user_id, CUSTOM_MEALS_KEY)
        if not isinstance(doc, list):
            return []
        return [
            custom_meal_from_document(row) for row in doc if isinstance(row, dict)
        ]

    def get_custom_meal(self, user_id: str, meal_id: str) -> CustomMeal:
        """Return a saved custom meal by id."""
        for meal in self.list_custom_meals(user_id):
            if meal.id == meal_id:
                return meal
        raise NotFoundError(f"Unknown custom meal: {meal_id}")

    def build_custom_meal(
        self, user_id: str, name: str, food_ids: list[str]
    ) -> CustomMeal:
        """Sum catalog foods into a named custom meal and save it."""
        if not name.strip():
            raise EmptyMealError("Custom meal needs a name")
        if not food_ids:
            raise EmptyMealError("Custom meal needs at least one item")
        foods = [self.catalog.get_food(food_id) for food_id in food_ids]
        totals = sum_foods(foods)
        meal = CustomMeal(
            id=new_id(),
            name=name,
            calories=totals.calories,
            carbs=totals.carbs,
            protein=totals.protein,
            fat=totals.fat,
            items=tuple(food.name for food in foods),
        )
        meals = [*self.list_custom_meals(user_id), meal]
        self._save_custom_meals(user_id, meals)
        return meal

    def delete_custom_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a saved custom meal."""
        meals = self.list_custom_meals(user_id)
        kept = [meal for meal in meals if meal.id != meal_id]
        if len(kept) == len(meals):
            raise NotFoundError(f"Unknown custom meal: {meal_id}")
        self._save_custom_meals(user_id, kept)

    def _append(self, user_id: str, meal: LoggedMeal) -> LoggedMeal:
        self._save_meals(user_id, [*self.list_meals(user_id), meal])
        _logger.info(
            "Meal logged: user_id=%s food_id=%s calories=%s",
            user_id,
            meal.food_id,
            meal.calories,
        )
        return meal

    def _save_meals(self, user_id: str, meals: list[LoggedMeal]) -> None:
        self.store.set(
            user_id, LOGS_KEY, [logged_meal_to_document(meal) for meal in meals]
        )

    def _save_custom_meals(self, user_id: str, meals: list[CustomMeal]) -> None:
        self.store.set(
            user_id,
            CUSTOM_MEALS_KEY,
            [custom_meal_to_document(meal) for meal in meals],
        )


def new_id() -> str:
    """Return a short random base36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _epoch_ms(now: datetime | None) -> int:
    moment = now or datetime.now(tz=UTC)
    return int(moment.timestamp() * 1000)
