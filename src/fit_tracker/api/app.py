"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, Header, Request, status
from fastapi.responses import JSONResponse

from fit_tracker.api.schemas import (
    BodyScanRequest,
    CreateProfileRequest,
    CustomMealRequest,
    LogCustomMealRequest,
    LogFoodRequest,
    LogScanRequest,
    UnitsRequest,
    UpdateGoalsRequest,
    WaterRequest,
)
from fit_tracker.app_logging import configure_logging
from fit_tracker.containers import AppContainer
from fit_tracker.domain.catalog import FoodItem
from fit_tracker.domain.errors import (
    FitTrackerError,
    InvalidArgumentError,
    NoFoodDetectedError,
    NotFoundError,
    ScanResultError,
    StaleSnapshotError,
)
from fit_tracker.domain.profile import UserProfile
from fit_tracker.domain.stats import DailyTotals, GoalProgress, MacroProgress
from fit_tracker.services.ledger import macro_calorie_shares
from fit_tracker.services.snapshots import (
    custom_meal_to_document,
    logged_meal_to_document,
    profile_to_document,
)
from fit_tracker.services.tracker import TrackerUpdate
from fit_tracker.services.vision import (
    BODY_SCAN_SCHEMA,
    FOOD_SCAN_PROMPT,
    FOOD_SCAN_SCHEMA,
    body_scan_prompt,
    parse_body_scan,
    parse_food_scan,
)

_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[FitTrackerError], int] = {
    InvalidArgumentError: _UNPROCESSABLE,
    NoFoodDetectedError: _UNPROCESSABLE,
    ScanResultError: _UNPROCESSABLE,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StaleSnapshotError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fit Tracker")
    app.state.container = container

    @app.exception_handler(FitTrackerError)
    async def handle_domain_error(
        request: Request, exc: FitTrackerError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Unhandled domain error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    def _today(request: Request) -> date:
        return _container(request).tracker_service.today()

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/profile", status_code=status.HTTP_201_CREATED)
    async def create_profile(
        payload: CreateProfileRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Create a profile with default goals."""
        profile = _container(request).tracker_service.create_profile(
            x_user_id, name=payload.name, email=payload.email
        )
        return _profile_payload(profile)

    @app.get("/profile")
    async def get_profile(
        request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Return the user's profile and progression."""
        profile = _container(request).profile_service.require_profile(
            x_user_id, _today(request)
        )
        return _profile_payload(profile)

    @app.patch("/profile/goals")
    async def update_goals(
        payload: UpdateGoalsRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Update goals and re-evaluate today's awards against them."""
        update = _container(request).tracker_service.update_goals(
            x_user_id,
            daily_calories=payload.daily_calories,
            protein_goal=payload.protein_goal,
            current_weight=payload.current_weight,
            target_weight=payload.target_weight,
        )
        return _update_payload(update)

    @app.put("/profile/units")
    async def change_units(
        payload: UnitsRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Switch between imperial and metric weights."""
        profile = _container(request).tracker_service.change_units(
            x_user_id, payload.units
        )
        return _profile_payload(profile)

    @app.delete("/profile", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_profile(request: Request, x_user_id: str = Header()) -> None:
        """Forget the stored profile."""
        _container(request).tracker_service.delete_profile(x_user_id)

    @app.get("/foods")
    async def list_foods(
        request: Request, query: str | None = None, group: str | None = None
    ) -> dict[str, object]:
        """Search the food catalog."""
        foods = _container(request).catalog_service.search(query, group)
        return {"foods": [_food_payload(food) for food in foods]}

    @app.get("/foods/{food_id}")
    async def food_detail(food_id: str, request: Request) -> dict[str, object]:
        """Return a catalog food with its macro calorie shares."""
        food = _container(request).catalog_service.get_food(food_id)
        return {**_food_payload(food), "macroShares": macro_calorie_shares(food)}

    @app.get("/meals")
    async def list_meals(
        request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Return every logged meal."""
        meals = _container(request).meal_log_service.list_meals(x_user_id)
        return {"meals": [logged_meal_to_document(meal) for meal in meals]}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def log_food(
        payload: LogFoodRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Log a catalog food scaled by a portion."""
        update = _container(request).tracker_service.log_food(
            x_user_id, payload.food_id, payload.portion, payload.category
        )
        return _update_payload(update)

    @app.post("/meals/scan", status_code=status.HTTP_201_CREATED)
    async def log_scan(
        payload: LogScanRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Log a food recognised from a photo."""
        update = _container(request).tracker_service.log_scan(
            x_user_id, parse_food_scan(payload.result), payload.category
        )
        return _update_payload(update)

    @app.get("/scans/food/request")
    async def food_scan_request() -> dict[str, object]:
        """Return the prompt and result schema for a food photo scan."""
        return {"prompt": FOOD_SCAN_PROMPT, "schema": FOOD_SCAN_SCHEMA}

    @app.get("/scans/body/request")
    async def body_scan_request(
        request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Return the body scan prompt for the user's current weight."""
        profile = _container(request).profile_service.require_profile(
            x_user_id, _today(request)
        )
        return {
            "prompt": body_scan_prompt(profile.current_weight, profile.units),
            "schema": BODY_SCAN_SCHEMA,
        }

    @app.post("/scans/body")
    async def body_scan(
        payload: BodyScanRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Validate a body composition estimate for display."""
        _container(request).profile_service.require_profile(
            x_user_id, _today(request)
        )
        result = parse_body_scan(payload.result)
        logger.info("Body scan validated: user_id=%s", x_user_id)
        return result.model_dump()

    @app.delete("/meals")
    async def clear_meals(
        request: Request, x_user_id: str = Header(), day: date | None = None
    ) -> dict[str, object]:
        """Clear the meals logged on a day (today by default)."""
        removed = _container(request).tracker_service.clear_day(x_user_id, day)
        return {"removed": removed}

    @app.get("/custom-meals")
    async def list_custom_meals(
        request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Return the user's saved custom meals."""
        meals = _container(request).meal_log_service.list_custom_meals(x_user_id)
        return {"customMeals": [custom_meal_to_document(meal) for meal in meals]}

    @app.post("/custom-meals", status_code=status.HTTP_201_CREATED)
    async def create_custom_meal(
        payload: CustomMealRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Build and save a custom meal from catalog foods."""
        meal = _container(request).tracker_service.build_custom_meal(
            x_user_id, payload.name, payload.food_ids
        )
        return custom_meal_to_document(meal)

    @app.delete("/custom-meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_custom_meal(
        meal_id: str, request: Request, x_user_id: str = Header()
    ) -> None:
        """Delete a saved custom meal."""
        _container(request).tracker_service.delete_custom_meal(x_user_id, meal_id)

    @app.post("/custom-meals/{meal_id}/log", status_code=status.HTTP_201_CREATED)
    async def log_custom_meal(
        meal_id: str,
        payload: LogCustomMealRequest,
        request: Request,
        x_user_id: str = Header(),
    ) -> dict[str, object]:
        """Log one serving of a saved custom meal."""
        update = _container(request).tracker_service.log_custom_meal(
            x_user_id, meal_id, payload.category
        )
        return _update_payload(update)

    @app.put("/water")
    async def set_water(
        payload: WaterRequest, request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Record today's water intake."""
        update = _container(request).tracker_service.set_water(
            x_user_id, payload.water_ml
        )
        return _update_payload(update)

    @app.get("/today")
    async def today(request: Request, x_user_id: str = Header()) -> dict[str, object]:
        """Return today's dashboard."""
        return _update_payload(
            _container(request).tracker_service.dashboard(x_user_id)
        )

    @app.get("/trends/week")
    async def week_trend(
        request: Request, x_user_id: str = Header()
    ) -> dict[str, object]:
        """Return per-day totals for the trailing week."""
        state = _container(request)
        summary = state.stats_service.get_week(
            x_user_id, _today(request), state.timezone
        )
        return {
            "daily": [_totals_payload(entry) for entry in summary.daily],
            "avgCalories": summary.avg_calories,
            "avgProtein": summary.avg_protein,
            "avgFat": summary.avg_fat,
            "avgCarbs": summary.avg_carbs,
        }

    return app


def _status_for(exc: FitTrackerError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return profile_to_document(profile)


def _food_payload(food: FoodItem) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "brand": food.brand,
        "calories": food.calories,
        "carbs": food.carbs,
        "protein": food.protein,
        "fat": food.fat,
        "fiber": food.fiber,
        "sugar": food.sugar,
        "sodium": food.sodium,
        "cholesterol": food.cholesterol,
        "group": food.group.value,
        "category": food.category.value,
    }


def _totals_payload(totals: DailyTotals) -> dict[str, object]:
    return {
        "day": totals.day.isoformat() if totals.day else None,
        "calories": totals.calories,
        "carbs": totals.carbs,
        "protein": totals.protein,
        "fat": totals.fat,
        "waterMl": totals.water_ml,
    }


def _macro_payload(macro: MacroProgress) -> dict[str, float]:
    return {"value": macro.value, "target": macro.target, "percent": macro.percent}


def _progress_payload(progress: GoalProgress) -> dict[str, object]:
    return {
        "eaten": progress.eaten,
        "goal": progress.goal,
        "remaining": progress.remaining,
        "caloriePercent": progress.calorie_percent,
        "carbs": _macro_payload(progress.carbs),
        "protein": _macro_payload(progress.protein),
        "fat": _macro_payload(progress.fat),
        "waterMl": progress.water_ml,
        "waterGoalMl": progress.water_goal_ml,
    }


def _update_payload(update: TrackerUpdate) -> dict[str, object]:
    payload: dict[str, object] = {
        "profile": _profile_payload(update.profile),
        "totals": _totals_payload(update.totals),
        "progress": _progress_payload(update.progress),
        "awards": [
            {"goal": award.goal.value, "xp": award.xp} for award in update.awards
        ],
        "levelUps": [{"level": level_up.level} for level_up in update.level_ups],
    }
    if update.meal is not None:
        payload["meal"] = logged_meal_to_document(update.meal)
    return payload
