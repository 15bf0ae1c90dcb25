"""Models for image classification results."""

from pydantic import BaseModel, ConfigDict, Field


class FoodScanResult(BaseModel):
    """Structured estimate of the food visible in a photo."""

    model_config = ConfigDict(populate_by_name=True)

    is_food: bool = Field(default=True, alias="isFood")
    name: str = ""
    calories: float = Field(default=0.0, ge=0.0)
    protein: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)
    confidence: float | None = Field(default=None, ge=0.0, le=100.0)
    reasoning: str | None = None


class BodyScanResult(BaseModel):
    """Structured body composition estimate from a photo."""

    muscle_ratio: float = Field(ge=0.0, le=100.0)
    fat_percentage: float = Field(ge=0.0, le=100.0)
    health_score: int = Field(ge=0, le=100)
    visual_assessment: str
    recommendation: str
