"""Gamification engine: daily goal awards and level progression."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date

from fit_tracker.domain.errors import InvalidXpGrantError, StaleSnapshotError
from fit_tracker.domain.progression import (
    XP_PER_LEVEL,
    GoalAward,
    GoalTag,
    LevelUp,
    UserProgression,
)
from fit_tracker.domain.stats import DailyTotals
from fit_tracker.services.ledger import WATER_GOAL_ML

CALORIE_BAND_LOWER = 0.8

GOAL_XP = {
    GoalTag.WATER: 50,
    GoalTag.PROTEIN: 100,
    GoalTag.CALORIES: 150,
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Goals:
    """Thresholds the daily totals are evaluated against."""

    daily_calories: float
    protein_goal: float


@dataclass(frozen=True)
class XpOutcome:
    """Result of granting experience."""

    progression: UserProgression
    level_ups: list[LevelUp] = field(default_factory=list)


@dataclass(frozen=True)
class AwardOutcome:
    """Result of evaluating daily goals."""

    progression: UserProgression
    awards: list[GoalAward] = field(default_factory=list)
    level_ups: list[LevelUp] = field(default_factory=list)


def apply_xp(progression: UserProgression, amount: int) -> XpOutcome:
    """Add experience, rolling overflow into as many levels as it covers."""
    if amount < 0:
        raise InvalidXpGrantError(f"XP grant must not be negative: {amount}")
    level = progression.level
    xp = progression.xp + amount
    while xp >= level * XP_PER_LEVEL:
        xp -= level * XP_PER_LEVEL
        level += 1
    updated = replace(progression, level=level, xp=xp)
    if level == progression.level:
        return XpOutcome(progression=updated)
    return XpOutcome(progression=updated, level_ups=[LevelUp(level=level)])


def roll_over(progression: UserProgression, today: date) -> UserProgression:
    """Reset claimed goals when the evaluation day moved forward.

    Raises StaleSnapshotError when ``today`` is earlier than the ledger day,
    since that day's claims are already spent.
    """
    if today < progression.awards.day:
        raise StaleSnapshotError(
            f"Evaluation day {today} is older than awards for "
            f"{progression.awards.day}"
        )
    awards = progression.awards.for_day(today)
    if awards is progression.awards:
        return progression
    return replace(progression, awards=awards)


def goals_met(totals: DailyTotals, goals: Goals) -> list[GoalTag]:
    """Return the goals satisfied by the totals, in award order."""
    met: list[GoalTag] = []
    if totals.water_ml >= WATER_GOAL_ML:
        met.append(GoalTag.WATER)
    if totals.protein >= goals.protein_goal:
        met.append(GoalTag.PROTEIN)
    lower = CALORIE_BAND_LOWER * goals.daily_calories
    if lower <= totals.calories <= goals.daily_calories:
        met.append(GoalTag.CALORIES)
    return met


def evaluate_awards(
    progression: UserProgression,
    totals: DailyTotals,
    goals: Goals,
    today: date,
) -> AwardOutcome:
    """Grant experience for goals newly met today.

    Each goal is granted at most once per calendar day. The returned
    progression is a new snapshot; the input is left untouched.
    """
    current = roll_over(progression, today)
    if totals.day is not None and totals.day < current.awards.day:
        raise StaleSnapshotError(
            f"Totals for {totals.day} are older than awards for {current.awards.day}"
        )

    awards: list[GoalAward] = []
    level_ups: list[LevelUp] = []
    for goal in goals_met(totals, goals):
        if current.awards.is_claimed(goal):
            continue
        amount = GOAL_XP[goal]
        outcome = apply_xp(current, amount)
        current = replace(outcome.progression, awards=current.awards.claim(goal))
        awards.append(GoalAward(goal=goal, xp=amount))
        level_ups.extend(outcome.level_ups)
        _logger.info("Goal award: goal=%s xp=%s", goal, amount)

    for level_up in level_ups:
        _logger.info("Level up: level=%s", level_up.level)
    return AwardOutcome(progression=current, awards=awards, level_ups=level_ups)
