"""User profile lifecycle and goal management."""

import logging
from dataclasses import dataclass, replace
from datetime import date

from fit_tracker.domain.errors import InvalidGoalError, NotFoundError
from fit_tracker.domain.profile import Units, UserProfile
from fit_tracker.domain.progression import UserProgression
from fit_tracker.services.ledger import round_half_up
from fit_tracker.services.snapshots import profile_from_document, profile_to_document
from fit_tracker.services.store import PROFILE_KEY, DocumentStore

DEFAULT_NAME = "Alex Johnson"
DEFAULT_EMAIL = "alex.j@example.com"
DEFAULT_CURRENT_WEIGHT = 165.0
DEFAULT_TARGET_WEIGHT = 155.0
DEFAULT_DAILY_CALORIES = 2400
DEFAULT_PROTEIN_GOAL = 150.0
DEFAULT_ACTIVITY_LEVEL = "Moderately Active"

LBS_TO_KG = 0.453592
KG_TO_LBS = 2.20462

_logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Application service for user profiles."""

    store: DocumentStore

    def create_profile(
        self,
        user_id: str,
        today: date,
        name: str | None = None,
        email: str | None = None,
    ) -> UserProfile:
        """Create and persist a profile with default goals."""
        profile = UserProfile(
            id=user_id,
            name=name or DEFAULT_NAME,
            email=email or DEFAULT_EMAIL,
            current_weight=DEFAULT_CURRENT_WEIGHT,
            target_weight=DEFAULT_TARGET_WEIGHT,
            daily_calories=DEFAULT_DAILY_CALORIES,
            protein_goal=DEFAULT_PROTEIN_GOAL,
            activity_level=DEFAULT_ACTIVITY_LEVEL,
            units=Units.IMPERIAL,
            progression=UserProgression.start(today),
        )
        self._save(profile)
        _logger.info("Profile created: user_id=%s", user_id)
        return profile

    def get_profile(self, user_id: str, today: date) -> UserProfile | None:
        """Return the stored profile, if any."""
        doc = self.store.get(user_id, PROFILE_KEY)
        if not isinstance(doc, dict):
            return None
        return profile_from_document(doc, today)

    def require_profile(self, user_id: str, today: date) -> UserProfile:
        """Return the stored profile or raise NotFoundError."""
        profile = self.get_profile(user_id, today)
        if profile is None:
            raise NotFoundError(f"No profile for user {user_id}")
        return profile

    def update_goals(  # noqa: PLR0913
        self,
        user_id: str,
        today: date,
        *,
        daily_calories: int | None = None,
        protein_goal: float | None = None,
        current_weight: float | None = None,
        target_weight: float | None = None,
    ) -> UserProfile:
        """Update goal and body metric fields; every value must be positive."""
        profile = self.require_profile(user_id, today)
        changes: dict[str, float | int] = {}
        for field_name, value in (
            ("daily_calories", daily_calories),
            ("protein_goal", protein_goal),
            ("current_weight", current_weight),
            ("target_weight", target_weight),
        ):
            if value is None:
                continue
            if value <= 0:
                raise InvalidGoalError(f"{field_name} must be positive: {value}")
            changes[field_name] = value
        updated = replace(profile, **changes)
        self._save(updated)
        return updated

    def change_units(self, user_id: str, today: date, units: Units) -> UserProfile:
        """Switch unit system, converting stored weights to one decimal."""
        profile = self.require_profile(user_id, today)
        if units == profile.units:
            return profile
        factor = LBS_TO_KG if units is Units.METRIC else KG_TO_LBS
        updated = replace(
            profile,
            units=units,
            current_weight=_round1(profile.current_weight * factor),
            target_weight=_round1(profile.target_weight * factor),
        )
        self._save(updated)
        return updated

    def save_progression(
        self, profile: UserProfile, progression: UserProgression
    ) -> UserProfile:
        """Persist a new progression snapshot for the profile."""
        updated = replace(profile, progression=progression)
        self._save(updated)
        return updated

    def delete_profile(self, user_id: str) -> None:
        """Remove the stored profile."""
        self.store.remove(user_id, PROFILE_KEY)

    def _save(self, profile: UserProfile) -> None:
        self.store.set(profile.id, PROFILE_KEY, profile_to_document(profile))


def _round1(value: float) -> float:
    return round_half_up(value * 10) / 10
