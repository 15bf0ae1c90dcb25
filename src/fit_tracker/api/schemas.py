"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from fit_tracker.domain.catalog import MealCategory
from fit_tracker.domain.profile import Units


class CreateProfileRequest(BaseModel):
    """Profile creation payload."""

    name: str | None = None
    email: str | None = None


class UpdateGoalsRequest(BaseModel):
    """Partial update of goals and body metrics."""

    daily_calories: int | None = Field(default=None, alias="dailyCalories")
    protein_goal: float | None = Field(default=None, alias="proteinGoal")
    current_weight: float | None = Field(default=None, alias="currentWeight")
    target_weight: float | None = Field(default=None, alias="targetWeight")


class UnitsRequest(BaseModel):
    units: Units


class LogFoodRequest(BaseModel):
    """Log a catalog food with a portion multiplier."""

    food_id: str = Field(alias="foodId")
    portion: float = 1.0
    category: MealCategory | None = None


class LogScanRequest(BaseModel):
    """Log the result of a food photo scan.

    ``result`` is the model output, either parsed or as raw JSON text.
    """

    result: dict[str, object] | str
    category: MealCategory


class BodyScanRequest(BaseModel):
    """Body composition result returned by the image model."""

    result: dict[str, object] | str


class CustomMealRequest(BaseModel):
    """Build a custom meal from catalog food ids."""

    name: str
    food_ids: list[str] = Field(alias="foodIds")


class LogCustomMealRequest(BaseModel):
    category: MealCategory = MealCategory.LUNCH


class WaterRequest(BaseModel):
    """Today's total water intake in milliliters."""

    water_ml: float = Field(alias="waterMl")
