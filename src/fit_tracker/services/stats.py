"""Trend statistics over the meal log."""

from dataclasses import dataclass
from datetime import UTC, date, timedelta, tzinfo

from fit_tracker.domain.meals import LoggedMeal
from fit_tracker.domain.stats import DailyTotals, WeekSummary
from fit_tracker.services.ledger import compute_daily_totals
from fit_tracker.services.meals import MealLogService

WEEK_DAYS = 7


@dataclass
class StatsService:
    """Service for computing calorie and macro trends."""

    meals: MealLogService

    def get_week(
        self, user_id: str, today: date, tz: tzinfo = UTC
    ) -> WeekSummary:
        """Return totals for the seven days ending today, oldest first."""
        logs = self.meals.list_meals(user_id)
        start = today - timedelta(days=WEEK_DAYS - 1)
        return _aggregate_period(start, WEEK_DAYS, logs, tz)


def _aggregate_period(
    start: date, days: int, logs: list[LoggedMeal], tz: tzinfo
) -> WeekSummary:
    daily: list[DailyTotals] = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        daily.append(compute_daily_totals(logs, 0.0, day=day, tz=tz))

    total_days = max(len(daily), 1)
    return WeekSummary(
        daily=daily,
        avg_calories=sum(entry.calories for entry in daily) / total_days,
        avg_protein=sum(entry.protein for entry in daily) / total_days,
        avg_fat=sum(entry.fat for entry in daily) / total_days,
        avg_carbs=sum(entry.carbs for entry in daily) / total_days,
    )
