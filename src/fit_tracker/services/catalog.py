"""Static food catalog and lookups."""

from dataclasses import dataclass

from fit_tracker.domain.catalog import FoodGroup, FoodItem, MealCategory
from fit_tracker.domain.errors import InvalidArgumentError, NotFoundError

_G = FoodGroup
_C = MealCategory

# Nutrition per reference serving, as printed in each food's name.
FOODS: tuple[FoodItem, ...] = (
    FoodItem("m1", "Chicken Breast (100g)", 165, 0, 31, 3.6, 0, 0, 74, 85, _G.MEAT, _C.LUNCH),
    FoodItem("m2", "Ground Beef 90% (100g)", 176, 0, 20, 10, 0, 0, 66, 71, _G.MEAT, _C.DINNER),
    FoodItem("m3", "Salmon Fillet (100g)", 208, 0, 20, 13, 0, 0, 59, 55, _G.MEAT, _C.DINNER),
    FoodItem("m4", "Turkey Breast (100g)", 135, 0, 30, 1, 0, 0, 50, 70, _G.MEAT, _C.LUNCH),
    FoodItem("m5", "Egg (Large)", 78, 0.6, 6, 5, 0, 0.6, 62, 186, _G.MEAT, _C.BREAKFAST),
    FoodItem("m6", "Sirloin Steak (100g)", 244, 0, 27, 15, 0, 0, 58, 80, _G.MEAT, _C.DINNER),
    FoodItem("m7", "Shrimp (100g)", 99, 0.2, 24, 0.3, 0, 0, 111, 189, _G.MEAT, _C.DINNER),
    FoodItem("m8", "Tofu Firm (100g)", 144, 3, 15, 8, 2, 1, 12, 0, _G.MEAT, _C.LUNCH),
    FoodItem("v1", "Broccoli (100g)", 34, 7, 2.8, 0.4, 2.6, 1.7, 33, 0, _G.VEGETABLES, _C.LUNCH),
    FoodItem("v2", "Carrots (100g)", 41, 10, 0.9, 0.2, 2.8, 4.7, 69, 0, _G.VEGETABLES, _C.LUNCH),
    FoodItem("v3", "Spinach (100g)", 23, 3.6, 2.9, 0.4, 2.2, 0.4, 79, 0, _G.VEGETABLES, _C.DINNER),
    FoodItem("v4", "Asparagus (100g)", 20, 3.9, 2.2, 0.1, 2.1, 1.9, 2, 0, _G.VEGETABLES, _C.DINNER),
    FoodItem("v5", "Mushrooms (100g)", 22, 3.3, 3.1, 0.3, 1, 2, 5, 0, _G.VEGETABLES, _C.LUNCH),
    FoodItem("c1", "White Rice (100g cooked)", 130, 28, 2.7, 0.3, 0.4, 0.1, 1, 0, _G.CARBS, _C.LUNCH),
    FoodItem("c2", "Sweet Potato (100g)", 86, 20, 1.6, 0.1, 3, 4.2, 55, 0, _G.CARBS, _C.DINNER),
    FoodItem("c3", "Quinoa (100g cooked)", 120, 21, 4.4, 1.9, 2.8, 0.9, 7, 0, _G.CARBS, _C.LUNCH),
    FoodItem("c4", "Whole Wheat Pasta (100g)", 124, 27, 5.3, 0.5, 4.5, 0.5, 1, 0, _G.CARBS, _C.DINNER),
    FoodItem("c5", "Oatmeal (1 cup)", 150, 27, 5, 3, 4, 1, 2, 0, _G.CARBS, _C.BREAKFAST),
    FoodItem("f1", "Banana (Medium)", 105, 27, 1.3, 0.4, 3.1, 14, 1, 0, _G.FRUITS, _C.SNACK),
    FoodItem("f2", "Blueberries (100g)", 57, 14, 0.7, 0.3, 2.4, 10, 1, 0, _G.FRUITS, _C.BREAKFAST),
    FoodItem("f3", "Strawberries (100g)", 32, 7.7, 0.7, 0.3, 2, 4.9, 1, 0, _G.FRUITS, _C.SNACK),
    FoodItem("d1", "Greek Yogurt (150g)", 120, 6, 15, 4, 0, 6, 50, 10, _G.DAIRY, _C.BREAKFAST),
    FoodItem("d2", "Cottage Cheese (100g)", 98, 3.4, 11, 4.3, 0, 2.7, 364, 17, _G.DAIRY, _C.SNACK),
    FoodItem("fa1", "Avocado (Half)", 160, 8.5, 2, 14.7, 6.7, 0.7, 7, 0, _G.FATS, _C.BREAKFAST),
    FoodItem("fa2", "Almonds (28g)", 164, 6.1, 6, 14.2, 3.5, 1.2, 0, 0, _G.FATS, _C.SNACK),
    FoodItem("fa3", "Peanut Butter (1 tbsp)", 94, 3, 4, 8, 1, 1, 75, 0, _G.FATS, _C.BREAKFAST),
)  # fmt: skip


@dataclass
class CatalogService:
    """Read-only access to the reference food catalog."""

    foods: tuple[FoodItem, ...] = FOODS

    def list_foods(self) -> list[FoodItem]:
        """Return every catalog food."""
        return list(self.foods)

    def get_food(self, food_id: str) -> FoodItem:
        """Return a catalog food by id."""
        for food in self.foods:
            if food.id == food_id:
                return food
        raise NotFoundError(f"Unknown food: {food_id}")

    def search(
        self, query: str | None = None, group: FoodGroup | str | None = None
    ) -> list[FoodItem]:
        """Filter foods by a name substring and an optional group.

        A group of ``None`` or ``"All"`` matches every group.
        """
        needle = (query or "").strip().lower()
        wanted = None if group in {None, "", "All"} else _parse_group(group)
        return [
            food
            for food in self.foods
            if needle in food.name.lower() and (wanted is None or food.group == wanted)
        ]


def _parse_group(raw: FoodGroup | str) -> FoodGroup:
    try:
        return FoodGroup(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown food group: {raw}") from exc
