from typing import Final, Tuple

DAYS: Final[Tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)
MEAL_TYPES: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner")

# Droppable id of the trash area on the planner board
REMOVE_ZONE_ID: Final[str] = "trash"

MACRO_KEYS: Final[Tuple[str, ...]] = ("protein", "carbs", "fats")
# Alternative spellings accepted when reading recipe macros
MACRO_SYNONYMS: Final[dict[str, str]] = {
    "carbohydrates": "carbs",
    "fat": "fats",
}

RECIPES_FILENAME: Final[str] = "recipes.json"
PLAN_FILENAME: Final[str] = "plan.json"
