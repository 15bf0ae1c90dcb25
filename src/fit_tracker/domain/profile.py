"""Domain models for user profiles and goals."""

from dataclasses import dataclass
from enum import StrEnum

from fit_tracker.domain.progression import UserProgression


class Units(StrEnum):
    """Unit system used to display body weight."""

    IMPERIAL = "Imperial"
    METRIC = "Metric"

    @property
    def weight_label(self) -> str:
        """Short label for weights in this unit system."""
        return "lbs" if self is Units.IMPERIAL else "kg"


@dataclass(frozen=True)
class UserProfile:
    """A user's body metrics, daily goals and progression."""

    id: str
    name: str
    email: str
    current_weight: float
    target_weight: float
    daily_calories: int
    protein_goal: float
    activity_level: str
    units: Units
    progression: UserProgression
