"""Domain models for experience, levels and daily goal awards."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import StrEnum

XP_PER_LEVEL = 500


class GoalTag(StrEnum):
    """Daily goals that grant experience once per day."""

    WATER = "water"
    PROTEIN = "protein"
    CALORIES = "calories"


@dataclass(frozen=True)
class AwardLedger:
    """Goals claimed on a single calendar day.

    The claimed set is only meaningful for ``day``; moving to another day
    replaces the whole ledger so the reset cannot be observed half done.
    """

    day: date
    claimed: frozenset[GoalTag] = field(default_factory=frozenset)

    def is_claimed(self, goal: GoalTag) -> bool:
        """Return True when the goal was already awarded on this day."""
        return goal in self.claimed

    def claim(self, goal: GoalTag) -> "AwardLedger":
        """Return a ledger with the goal marked as claimed."""
        return replace(self, claimed=self.claimed | {goal})

    def for_day(self, day: date) -> "AwardLedger":
        """Return an empty ledger for a later day, otherwise this one.

        Claims never reset when the clock moves backwards.
        """
        if day <= self.day:
            return self
        return AwardLedger(day=day)


@dataclass(frozen=True)
class UserProgression:
    """Level and experience state attached to a user."""

    level: int
    xp: int
    awards: AwardLedger

    @property
    def xp_next_level(self) -> int:
        """Experience needed to leave the current level."""
        return self.level * XP_PER_LEVEL

    @classmethod
    def start(cls, day: date) -> "UserProgression":
        """Return the progression of a brand new user."""
        return cls(level=1, xp=0, awards=AwardLedger(day=day))


@dataclass(frozen=True)
class GoalAward:
    """Notification that a daily goal granted experience."""

    goal: GoalTag
    xp: int


@dataclass(frozen=True)
class LevelUp:
    """Notification that the user reached a new level."""

    level: int
