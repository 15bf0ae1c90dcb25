"""Tests for the daily nutrition ledger."""

from datetime import UTC, date, datetime, timedelta

import pytest

from fit_tracker.domain.catalog import FoodGroup, FoodItem, MealCategory
from fit_tracker.domain.errors import InvalidArgumentError, InvalidPortionError
from fit_tracker.domain.meals import LoggedMeal
from fit_tracker.domain.profile import Units, UserProfile
from fit_tracker.domain.progression import UserProgression
from fit_tracker.domain.stats import DailyTotals
from fit_tracker.services.catalog import FOODS
from fit_tracker.services.ledger import (
    compute_daily_totals,
    goal_progress,
    macro_calorie_shares,
    round2,
    round_half_up,
    scale_portion,
    sum_foods,
)


def _meal(
    calories: int, protein: float = 0.0, at: datetime | None = None
) -> LoggedMeal:
    moment = at or datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    return LoggedMeal(
        id=f"meal-{calories}",
        food_id="m1",
        name="Chicken Breast (100g)",
        calories=calories,
        carbs=1.5,
        protein=protein,
        fat=2.25,
        portion=1.0,
        timestamp=int(moment.timestamp() * 1000),
        category=MealCategory.LUNCH,
    )


def _profile(daily_calories: int = 2000, protein_goal: float = 150.0) -> UserProfile:
    return UserProfile(
        id="user-1",
        name="Alex",
        email="alex@example.com",
        current_weight=165.0,
        target_weight=155.0,
        daily_calories=daily_calories,
        protein_goal=protein_goal,
        activity_level="Moderately Active",
        units=Units.IMPERIAL,
        progression=UserProgression.start(date(2024, 3, 10)),
    )


def test_daily_totals_sum_meal_calories() -> None:
    meals = [_meal(165, protein=31), _meal(210, protein=12.5), _meal(95)]

    totals = compute_daily_totals(meals, 750.0)

    assert totals.calories == 470
    assert totals.protein == pytest.approx(43.5)
    assert totals.carbs == pytest.approx(4.5)
    assert totals.fat == pytest.approx(6.75)
    assert totals.water_ml == 750.0


@pytest.mark.parametrize("water", [0.0, 1200.0, 5000.0])
def test_daily_totals_of_no_meals_are_zero(water: float) -> None:
    totals = compute_daily_totals([], water)

    assert totals.protein == 0
    assert totals.calories == 0
    assert totals.water_ml == water


def test_daily_totals_are_repeatable() -> None:
    meals = [_meal(165, protein=31), _meal(210)]

    first = compute_daily_totals(meals, 500.0)
    second = compute_daily_totals(meals, 500.0)

    assert first == second
    assert meals[0].calories == 165


def test_daily_totals_filter_to_local_day() -> None:
    today = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    meals = [_meal(300, at=today), _meal(500, at=today - timedelta(days=1))]

    totals = compute_daily_totals(meals, 0.0, day=date(2024, 3, 10), tz=UTC)
    everything = compute_daily_totals(meals, 0.0)

    assert totals.calories == 300
    assert totals.day == date(2024, 3, 10)
    assert everything.calories == 800
    assert everything.day is None


def test_scale_portion_of_one_keeps_base_values() -> None:
    for food in FOODS:
        scaled = scale_portion(food, 1.0)

        assert scaled.calories == food.calories
        assert scaled.carbs == pytest.approx(food.carbs)
        assert scaled.protein == pytest.approx(food.protein)
        assert scaled.fat == pytest.approx(food.fat)


def test_scale_portion_rounds_calories_and_macros() -> None:
    chicken = FOODS[0]

    scaled = scale_portion(chicken, 1.5)

    assert scaled.calories == 248
    assert scaled.protein == 46.5
    assert scaled.fat == 5.4


@pytest.mark.parametrize("portion", [0, -1.0])
def test_scale_portion_rejects_non_positive(portion: float) -> None:
    with pytest.raises(InvalidPortionError):
        scale_portion(FOODS[0], portion)


def test_invalid_portion_is_an_invalid_argument() -> None:
    with pytest.raises(InvalidArgumentError):
        scale_portion(FOODS[0], 0)


def test_round_half_up_moves_halves_upwards() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


def test_round2_matches_client_rounding() -> None:
    assert round2(1.005) == 1.01
    assert round2(3.6) == 3.6


def test_sum_foods_adds_reference_servings() -> None:
    rice, broccoli = FOODS[13], FOODS[8]

    total = sum_foods([rice, broccoli])

    assert total.calories == 164
    assert total.carbs == pytest.approx(35)
    assert total.protein == pytest.approx(5.5)


def test_macro_calorie_shares() -> None:
    chicken = FOODS[0]

    shares = macro_calorie_shares(chicken)

    assert shares == {"carbs": 0.0, "protein": 75.15, "fat": 19.64}


def test_macro_calorie_shares_without_calories() -> None:
    water = FoodItem(
        "x", "Water", 0, 0, 0, 0, 0, 0, 0, 0, FoodGroup.OTHER, MealCategory.SNACK
    )

    assert macro_calorie_shares(water) == {"carbs": 0.0, "protein": 0.0, "fat": 0.0}


def test_goal_progress_caps_percent_and_remaining() -> None:
    totals = DailyTotals(
        day=date(2024, 3, 10),
        calories=2500,
        carbs=120,
        protein=75,
        fat=90,
        water_ml=1000,
    )

    progress = goal_progress(totals, _profile(daily_calories=2000))

    assert progress.calorie_percent == 100.0
    assert progress.remaining == 0.0
    assert progress.carbs.percent == 50.0
    assert progress.protein.percent == 50.0
    assert progress.fat.percent == 100.0
    assert progress.water_goal_ml == 2500.0


def test_goal_progress_reports_remaining_calories() -> None:
    totals = DailyTotals(
        day=None, calories=1500, carbs=0, protein=0, fat=0, water_ml=0
    )

    progress = goal_progress(totals, _profile(daily_calories=2000))

    assert progress.remaining == 500.0
    assert progress.calorie_percent == 75.0
