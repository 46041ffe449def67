"""Calendar grid view: groups plan entries into DAYS x MEAL_TYPES cells."""
from typing import Dict, Iterable, List, Sequence

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.Recipe import Recipe
from mealboard.domain.RecipeRef import Found, index_recipes, resolve_recipe
from mealboard.utilities.constants import DAYS, MEAL_TYPES


def build_grid(plan: Iterable[PlanEntry], recipes: Iterable[Recipe],
               days: Sequence[str] = DAYS) -> Dict[str, Dict[str, List[dict]]]:
    """Return {day: {meal_type: [card, ...]}} for the given days.

    Entries dated outside ``days`` are left out, and so are entries whose
    recipe was deleted. Cards keep plan order within a cell.
    """
    index = index_recipes(recipes)
    grid = {day: {meal: [] for meal in MEAL_TYPES} for day in days}
    for entry in plan:
        cells = grid.get(entry.date)
        if cells is None or entry.meal_type not in cells:
            continue
        ref = resolve_recipe(index, entry.recipe_id)
        if not isinstance(ref, Found):
            continue
        cells[entry.meal_type].append({
            'entry_id': entry.id,
            'recipe_id': ref.recipe.id,
            'name': ref.recipe.name,
            'calories': ref.recipe.calories,
            'image': ref.recipe.image,
            'color': ref.recipe.color,
        })
    return grid


__all__ = ["build_grid"]
