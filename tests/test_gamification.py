"""Tests for goal awards and level progression."""

from datetime import date

import pytest

from fit_tracker.domain.errors import InvalidXpGrantError, StaleSnapshotError
from fit_tracker.domain.progression import (
    AwardLedger,
    GoalAward,
    GoalTag,
    LevelUp,
    UserProgression,
)
from fit_tracker.domain.stats import DailyTotals
from fit_tracker.services.gamification import (
    Goals,
    apply_xp,
    evaluate_awards,
    goals_met,
    roll_over,
)

TODAY = date(2024, 1, 2)
GOALS = Goals(daily_calories=2000, protein_goal=150)


def _totals(
    calories: float = 0.0,
    protein: float = 0.0,
    water_ml: float = 0.0,
    day: date | None = TODAY,
) -> DailyTotals:
    return DailyTotals(
        day=day,
        calories=calories,
        carbs=0.0,
        protein=protein,
        fat=0.0,
        water_ml=water_ml,
    )


def test_roll_over_resets_claims_on_new_day() -> None:
    progression = UserProgression(
        level=1,
        xp=0,
        awards=AwardLedger(day=date(2024, 1, 1), claimed=frozenset(GoalTag)),
    )

    rolled = roll_over(progression, date(2024, 1, 2))

    assert rolled.awards.day == date(2024, 1, 2)
    assert not any(rolled.awards.is_claimed(tag) for tag in GoalTag)
    assert progression.awards.claimed == frozenset(GoalTag)


def test_roll_over_same_day_is_noop() -> None:
    progression = UserProgression(
        level=1,
        xp=0,
        awards=AwardLedger(day=TODAY, claimed=frozenset({GoalTag.WATER})),
    )

    assert roll_over(progression, TODAY) is progression


def test_apply_xp_rolls_into_next_level() -> None:
    progression = UserProgression(level=1, xp=480, awards=AwardLedger(day=TODAY))

    outcome = apply_xp(progression, 150)

    assert outcome.progression.level == 2
    assert outcome.progression.xp == 130
    assert outcome.progression.xp_next_level == 1000
    assert outcome.level_ups == [LevelUp(level=2)]


def test_apply_xp_stops_when_below_next_threshold() -> None:
    progression = UserProgression.start(TODAY)

    outcome = apply_xp(progression, 1300)

    assert outcome.progression.level == 2
    assert outcome.progression.xp == 800
    assert outcome.progression.xp_next_level == 1000


def test_apply_xp_crosses_several_levels_with_one_event() -> None:
    progression = UserProgression.start(TODAY)

    outcome = apply_xp(progression, 1600)

    assert outcome.progression.level == 3
    assert outcome.progression.xp == 100
    assert outcome.level_ups == [LevelUp(level=3)]


def test_apply_xp_without_level_change() -> None:
    outcome = apply_xp(UserProgression.start(TODAY), 50)

    assert outcome.progression.xp == 50
    assert outcome.level_ups == []


def test_apply_xp_rejects_negative_grant() -> None:
    with pytest.raises(InvalidXpGrantError):
        apply_xp(UserProgression.start(TODAY), -10)


@pytest.mark.parametrize(
    ("calories", "met"),
    [(1600, True), (1599, False), (2000, True), (2001, False)],
)
def test_calorie_goal_band(calories: float, met: bool) -> None:
    assert (GoalTag.CALORIES in goals_met(_totals(calories=calories), GOALS)) is met


def test_goals_met_in_award_order() -> None:
    totals = _totals(calories=1800, protein=150, water_ml=2500)

    assert goals_met(totals, GOALS) == [
        GoalTag.WATER,
        GoalTag.PROTEIN,
        GoalTag.CALORIES,
    ]


def test_calorie_award_is_granted_once_per_day() -> None:
    totals = _totals(calories=1800)

    first = evaluate_awards(UserProgression.start(TODAY), totals, GOALS, TODAY)
    second = evaluate_awards(first.progression, totals, GOALS, TODAY)

    assert first.awards == [GoalAward(goal=GoalTag.CALORIES, xp=150)]
    assert first.progression.xp == 150
    assert second.awards == []
    assert second.progression == first.progression


def test_evaluate_awards_grants_all_goals_and_levels_up() -> None:
    progression = UserProgression(level=1, xp=400, awards=AwardLedger(day=TODAY))
    totals = _totals(calories=1900, protein=160, water_ml=3000)

    outcome = evaluate_awards(progression, totals, GOALS, TODAY)

    assert [award.goal for award in outcome.awards] == [
        GoalTag.WATER,
        GoalTag.PROTEIN,
        GoalTag.CALORIES,
    ]
    assert outcome.progression.level == 2
    assert outcome.progression.xp == 200
    assert outcome.level_ups == [LevelUp(level=2)]
    assert outcome.progression.awards.claimed == frozenset(GoalTag)


def test_evaluate_awards_rolls_over_before_awarding() -> None:
    progression = UserProgression(
        level=1,
        xp=0,
        awards=AwardLedger(
            day=date(2024, 1, 1), claimed=frozenset({GoalTag.WATER})
        ),
    )

    outcome = evaluate_awards(progression, _totals(water_ml=2600), GOALS, TODAY)

    assert outcome.awards == [GoalAward(goal=GoalTag.WATER, xp=50)]
    assert outcome.progression.awards.day == TODAY


def test_evaluate_awards_leaves_input_untouched() -> None:
    progression = UserProgression.start(TODAY)

    evaluate_awards(progression, _totals(water_ml=2500), GOALS, TODAY)

    assert progression.xp == 0
    assert progression.awards.claimed == frozenset()


def test_evaluate_awards_rejects_stale_totals() -> None:
    progression = UserProgression.start(TODAY)

    with pytest.raises(StaleSnapshotError):
        evaluate_awards(
            progression, _totals(calories=1800, day=date(2024, 1, 1)), GOALS, TODAY
        )


def test_evaluation_day_before_ledger_day_is_rejected() -> None:
    claimed = UserProgression(
        level=1,
        xp=300,
        awards=AwardLedger(day=TODAY, claimed=frozenset(GoalTag)),
    )
    totals = _totals(calories=1800, protein=160, water_ml=3000, day=None)

    with pytest.raises(StaleSnapshotError):
        evaluate_awards(claimed, totals, GOALS, date(2024, 1, 1))

    again = evaluate_awards(claimed, totals, GOALS, TODAY)
    assert again.awards == []
    assert again.progression == claimed


def test_ledger_keeps_claims_for_earlier_day() -> None:
    ledger = AwardLedger(day=TODAY, claimed=frozenset({GoalTag.WATER}))

    assert ledger.for_day(date(2024, 1, 1)) is ledger
    assert ledger.for_day(date(2024, 1, 3)).claimed == frozenset()
