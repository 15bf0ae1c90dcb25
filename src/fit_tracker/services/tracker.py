"""Reactive tracker that re-evaluates goals whenever the day's log changes."""

import threading
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, tzinfo

from fit_tracker.domain.catalog import MealCategory
from fit_tracker.domain.errors import InvalidArgumentError
from fit_tracker.domain.meals import CustomMeal, LoggedMeal
from fit_tracker.domain.profile import Units, UserProfile
from fit_tracker.domain.progression import GoalAward, LevelUp
from fit_tracker.domain.stats import DailyTotals, GoalProgress
from fit_tracker.domain.vision import FoodScanResult
from fit_tracker.services.gamification import Goals, evaluate_awards
from fit_tracker.services.ledger import compute_daily_totals, goal_progress
from fit_tracker.services.meals import MealLogService
from fit_tracker.services.profiles import ProfileService
from fit_tracker.services.store import WATER_KEY, DocumentStore


@dataclass(frozen=True)
class TrackerUpdate:
    """Dashboard state after a change, with any notifications it produced."""

    profile: UserProfile
    totals: DailyTotals
    progress: GoalProgress
    awards: list[GoalAward] = field(default_factory=list)
    level_ups: list[LevelUp] = field(default_factory=list)
    meal: LoggedMeal | None = None


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TrackerService:
    """Coordinates meal logging, water intake and goal awards per user.

    Evaluations for the same user are serialized, so each one reads the
    latest progression snapshot and writes the next one.
    """

    store: DocumentStore
    profiles: ProfileService
    meals: MealLogService
    tz: tzinfo = UTC
    clock: Callable[[], datetime] = _utc_now
    _locks: defaultdict[str, threading.Lock] = field(
        default_factory=lambda: defaultdict(threading.Lock), init=False, repr=False
    )
    _locks_guard: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def today(self) -> date:
        """Return the current local calendar day."""
        return self.clock().astimezone(self.tz).date()

    def get_water(self, user_id: str, day: date) -> float:
        """Return the water intake stored for the day, 0 on any other day."""
        doc = self.store.get(user_id, WATER_KEY)
        if not isinstance(doc, dict) or doc.get("day") != day.isoformat():
            return 0.0
        value = doc.get("ml")
        return float(value) if isinstance(value, int | float) else 0.0

    def daily_totals(self, user_id: str, day: date | None = None) -> DailyTotals:
        """Compute totals for a day (today by default)."""
        resolved = day or self.today()
        return compute_daily_totals(
            self.meals.list_meals(user_id),
            self.get_water(user_id, resolved),
            day=resolved,
            tz=self.tz,
        )

    def dashboard(self, user_id: str) -> TrackerUpdate:
        """Return today's totals and goal progress without granting awards."""
        today = self.today()
        profile = self.profiles.require_profile(user_id, today)
        totals = self.daily_totals(user_id, today)
        return TrackerUpdate(
            profile=profile,
            totals=totals,
            progress=goal_progress(totals, profile),
        )

    def log_food(
        self,
        user_id: str,
        food_id: str,
        portion: float,
        category: MealCategory | None = None,
    ) -> TrackerUpdate:
        """Log a catalog food and evaluate goals."""
        with self._user_lock(user_id):
            self.profiles.require_profile(user_id, self.today())
            meal = self.meals.log_food(
                user_id, food_id, portion, category, now=self.clock()
            )
            return self._evaluate(user_id, meal)

    def log_custom_meal(
        self,
        user_id: str,
        meal_id: str,
        category: MealCategory = MealCategory.LUNCH,
    ) -> TrackerUpdate:
        """Log a saved custom meal and evaluate goals."""
        with self._user_lock(user_id):
            self.profiles.require_profile(user_id, self.today())
            meal = self.meals.log_custom_meal(
                user_id, meal_id, category, now=self.clock()
            )
            return self._evaluate(user_id, meal)

    def log_scan(
        self, user_id: str, result: FoodScanResult, category: MealCategory
    ) -> TrackerUpdate:
        """Log a scanned food and evaluate goals."""
        with self._user_lock(user_id):
            self.profiles.require_profile(user_id, self.today())
            meal = self.meals.log_scan(user_id, result, category, now=self.clock())
            return self._evaluate(user_id, meal)

    def set_water(self, user_id: str, water_ml: float) -> TrackerUpdate:
        """Record today's water intake and evaluate goals."""
        if water_ml < 0:
            raise InvalidArgumentError(f"Water intake must not be negative: {water_ml}")
        with self._user_lock(user_id):
            today = self.today()
            self.profiles.require_profile(user_id, today)
            self.store.set(
                user_id, WATER_KEY, {"day": today.isoformat(), "ml": water_ml}
            )
            return self._evaluate(user_id)

    def clear_day(self, user_id: str, day: date | None = None) -> int:
        """Remove the meals logged on a day (today by default)."""
        with self._user_lock(user_id):
            return self.meals.clear_day(user_id, day or self.today(), self.tz)

    def build_custom_meal(
        self, user_id: str, name: str, food_ids: list[str]
    ) -> CustomMeal:
        """Save a custom meal built from catalog foods."""
        with self._user_lock(user_id):
            return self.meals.build_custom_meal(user_id, name, food_ids)

    def delete_custom_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a saved custom meal."""
        with self._user_lock(user_id):
            self.meals.delete_custom_meal(user_id, meal_id)

    def update_goals(  # noqa: PLR0913
        self,
        user_id: str,
        *,
        daily_calories: int | None = None,
        protein_goal: float | None = None,
        current_weight: float | None = None,
        target_weight: float | None = None,
    ) -> TrackerUpdate:
        """Change goals and evaluate today's totals against them."""
        with self._user_lock(user_id):
            self.profiles.update_goals(
                user_id,
                self.today(),
                daily_calories=daily_calories,
                protein_goal=protein_goal,
                current_weight=current_weight,
                target_weight=target_weight,
            )
            return self._evaluate(user_id)

    def change_units(self, user_id: str, units: Units) -> UserProfile:
        """Switch the unit system of the user's weights."""
        with self._user_lock(user_id):
            return self.profiles.change_units(user_id, self.today(), units)

    def create_profile(
        self, user_id: str, name: str | None = None, email: str | None = None
    ) -> UserProfile:
        """Create a profile with default goals, replacing any existing one."""
        with self._user_lock(user_id):
            return self.profiles.create_profile(
                user_id, self.today(), name=name, email=email
            )

    def delete_profile(self, user_id: str) -> None:
        """Forget the stored profile."""
        with self._user_lock(user_id):
            self.profiles.delete_profile(user_id)

    def refresh(self, user_id: str) -> TrackerUpdate:
        """Re-evaluate goals, e.g. after the user changed their targets."""
        with self._user_lock(user_id):
            return self._evaluate(user_id)

    def _evaluate(self, user_id: str, meal: LoggedMeal | None = None) -> TrackerUpdate:
        today = self.today()
        profile = self.profiles.require_profile(user_id, today)
        totals = self.daily_totals(user_id, today)
        outcome = evaluate_awards(
            profile.progression,
            totals,
            Goals(
                daily_calories=profile.daily_calories,
                protein_goal=profile.protein_goal,
            ),
            today,
        )
        if outcome.progression != profile.progression:
            profile = self.profiles.save_progression(profile, outcome.progression)
        return TrackerUpdate(
            profile=profile,
            totals=totals,
            progress=goal_progress(totals, profile),
            awards=outcome.awards,
            level_ups=outcome.level_ups,
            meal=meal,
        )

    def _user_lock(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[user_id]
