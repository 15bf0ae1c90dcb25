"""Conversion between domain objects and persisted JSON documents.

Documents keep the camelCase shape the mobile client stores locally, so
snapshots written by either side stay readable by the other.
"""

from datetime import date

from fit_tracker.domain.catalog import MealCategory
from fit_tracker.domain.meals import CustomMeal, LoggedMeal
from fit_tracker.domain.profile import Units, UserProfile
from fit_tracker.domain.progression import AwardLedger, GoalTag, UserProgression
from fit_tracker.services.gamification import apply_xp


def logged_meal_to_document(meal: LoggedMeal) -> dict[str, object]:
    """Serialize a logged meal."""
    return {
        "id": meal.id,
        "foodId": meal.food_id,
        "name": meal.name,
        "calories": meal.calories,
        "carbs": meal.carbs,
        "protein": meal.protein,
        "fat": meal.fat,
        "portion": meal.portion,
        "timestamp": meal.timestamp,
        "category": meal.category.value,
    }


def logged_meal_from_document(doc: dict[str, object]) -> LoggedMeal:
    """Parse a logged meal."""
    return LoggedMeal(
        id=str(doc["id"]),
        food_id=str(doc.get("foodId", "")),
        name=str(doc.get("name", "")),
        calories=int(_to_float(doc.get("calories"))),
        carbs=_to_float(doc.get("carbs")),
        protein=_to_float(doc.get("protein")),
        fat=_to_float(doc.get("fat")),
        portion=_to_float(doc.get("portion"), default=1.0),
        timestamp=int(_to_float(doc.get("timestamp"))),
        category=MealCategory(str(doc.get("category") or MealCategory.SNACK)),
    )


def custom_meal_to_document(meal: CustomMeal) -> dict[str, object]:
    """Serialize a custom meal."""
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "carbs": meal.carbs,
        "protein": meal.protein,
        "fat": meal.fat,
        "items": list(meal.items),
    }


def custom_meal_from_document(doc: dict[str, object]) -> CustomMeal:
    """Parse a custom meal."""
    items = doc.get("items")
    return CustomMeal(
        id=str(doc["id"]),
        name=str(doc.get("name", "")),
        calories=_to_float(doc.get("calories")),
        carbs=_to_float(doc.get("carbs")),
        protein=_to_float(doc.get("protein")),
        fat=_to_float(doc.get("fat")),
        items=tuple(str(item) for item in items) if isinstance(items, list) else (),
    )


def progression_to_document(progression: UserProgression) -> dict[str, object]:
    """Serialize progression fields as they appear on the profile document."""
    return {
        "level": progression.level,
        "xp": progression.xp,
        "xpNextLevel": progression.xp_next_level,
        "lastAwardedDate": progression.awards.day.isoformat(),
        "awardsClaimed": {
            tag.value: progression.awards.is_claimed(tag) for tag in GoalTag
        },
    }


def progression_from_document(
    doc: dict[str, object], today: date
) -> UserProgression:
    """Parse progression fields, defaulting to a fresh progression for today."""
    raw_day = doc.get("lastAwardedDate")
    day = date.fromisoformat(raw_day) if isinstance(raw_day, str) and raw_day else today
    raw_claimed = doc.get("awardsClaimed")
    claimed = (
        frozenset(tag for tag in GoalTag if raw_claimed.get(tag.value))
        if isinstance(raw_claimed, dict)
        else frozenset()
    )
    loaded = UserProgression(
        level=max(1, int(_to_float(doc.get("level"), default=1.0))),
        xp=max(0, int(_to_float(doc.get("xp")))),
        awards=AwardLedger(day=day, claimed=claimed),
    )
    # Hand-edited documents may hold xp past the level threshold.
    return apply_xp(loaded, 0).progression


def profile_to_document(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile together with its progression."""
    return {
        "id": profile.id,
        "name": profile.name,
        "email": profile.email,
        "currentWeight": profile.current_weight,
        "targetWeight": profile.target_weight,
        "dailyCalories": profile.daily_calories,
        "proteinGoal": profile.protein_goal,
        "activityLevel": profile.activity_level,
        "units": profile.units.value,
        **progression_to_document(profile.progression),
    }


def profile_from_document(doc: dict[str, object], today: date) -> UserProfile:
    """Parse a profile document."""
    return UserProfile(
        id=str(doc["id"]),
        name=str(doc.get("name", "")),
        email=str(doc.get("email", "")),
        current_weight=_to_float(doc.get("currentWeight")),
        target_weight=_to_float(doc.get("targetWeight")),
        daily_calories=int(_to_float(doc.get("dailyCalories"))),
        protein_goal=_to_float(doc.get("proteinGoal")),
        activity_level=str(doc.get("activityLevel", "")),
        units=Units(str(doc.get("units") or Units.IMPERIAL)),
        progression=progression_from_document(doc, today),
    )


def _to_float(value: object, default: float = 0.0) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default
