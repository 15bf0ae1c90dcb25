"""Image classification prompts, schemas and result validation.

The client runs the multimodal model itself; this module hands it the
prompt and schema to use and validates whatever JSON comes back.
"""

import json
import logging

from pydantic import ValidationError

from fit_tracker.domain.errors import NoFoodDetectedError, ScanResultError
from fit_tracker.domain.profile import Units
from fit_tracker.domain.vision import BodyScanResult, FoodScanResult

FOOD_SCAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "isFood": {"type": "boolean"},
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "confidence": {"type": "number", "minimum": 0, "maximum": 100},
        "reasoning": {"type": "string"},
    },
    "required": ["isFood", "name", "calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}

BODY_SCAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "muscle_ratio": {"type": "number", "minimum": 0, "maximum": 100},
        "fat_percentage": {"type": "number", "minimum": 0, "maximum": 100},
        "health_score": {"type": "integer", "minimum": 0, "maximum": 100},
        "visual_assessment": {"type": "string"},
        "recommendation": {"type": "string"},
    },
    "required": [
        "muscle_ratio",
        "fat_percentage",
        "health_score",
        "visual_assessment",
        "recommendation",
    ],
    "additionalProperties": False,
}

FOOD_SCAN_PROMPT = (
    "Identify the food in this image. "
    "If there is food, estimate its name, calories and protein, carbs and fat "
    "in grams, with a confidence and a short reasoning. "
    "If the image shows no food, set isFood to false."
)

_logger = logging.getLogger(__name__)


def body_scan_prompt(weight: float, units: Units) -> str:
    """Build the body composition prompt for a user's current weight."""
    return (
        "Analyze this person's physical health composition based on the image. "
        f"User stats: Weight {weight:g} {units.weight_label}. "
        "Estimate muscle_ratio and fat_percentage as percentages, a health_score "
        "from 0 to 100, a short visual_assessment and one recommendation. "
        "Be encouraging and professional."
    )


def parse_food_scan(raw: dict[str, object] | str) -> FoodScanResult:
    """Validate a food scan result, rejecting images without food."""
    try:
        result = FoodScanResult.model_validate(_load_json(raw))
    except ValidationError as exc:
        raise ScanResultError(f"Invalid food scan result: {exc}") from exc
    if not result.is_food:
        _logger.warning("Food scan rejected: no food detected")
        raise NoFoodDetectedError(
            "No food detected. Ensure food is in frame and well lit."
        )
    return result


def parse_body_scan(raw: dict[str, object] | str) -> BodyScanResult:
    """Validate a body composition result."""
    try:
        return BodyScanResult.model_validate(_load_json(raw))
    except ValidationError as exc:
        raise ScanResultError(f"Invalid body scan result: {exc}") from exc


def _load_json(raw: dict[str, object] | str) -> object:
    """Accept a parsed dict or JSON text, tolerating markdown code fences."""
    if isinstance(raw, dict):
        return raw
    text = raw.replace("```json", "").replace("```", "").strip() or "{}"
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScanResultError(f"Scan result is not valid JSON: {exc}") from exc
