"""Nutrition aggregation logic.

All figures are per serving and every planned recipe counts as one serving.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.Recipe import Recipe
from mealboard.domain.RecipeRef import Found, index_recipes, resolve_recipe
from mealboard.utilities.constants import DAYS, MACRO_KEYS

TOTAL_KEYS = MACRO_KEYS + ("calories",)


def _empty_totals() -> Dict[str, float]:
    return {k: 0 for k in TOTAL_KEYS}


def _add_recipe(totals: Dict[str, float], recipe: Recipe):
    if recipe.macros is not None:
        for k in MACRO_KEYS:
            totals[k] += recipe.macros.get(k) or 0
    # calories count even for recipes without a macros block
    if recipe.calories is not None:
        totals["calories"] += recipe.calories


def aggregate_day(plan: Iterable[PlanEntry], recipes: Iterable[Recipe], day: str) -> Dict[str, float]:
    """Sum protein, carbs, fats and calories of the recipes planned on ``day``."""
    index = index_recipes(recipes)
    totals = _empty_totals()
    for entry in plan:
        if entry.date != day:
            continue
        ref = resolve_recipe(index, entry.recipe_id)
        if isinstance(ref, Found):
            _add_recipe(totals, ref.recipe)
    return totals


def day_breakdown(plan: Iterable[PlanEntry], recipes: Iterable[Recipe], day: str) -> List[dict]:
    """Per-entry nutrition rows for one day, dangling entries omitted."""
    index = index_recipes(recipes)
    rows = []
    for entry in plan:
        if entry.date != day:
            continue
        ref = resolve_recipe(index, entry.recipe_id)
        if not isinstance(ref, Found):
            continue
        recipe = ref.recipe
        rows.append({
            'entry_id': entry.id,
            'meal_type': entry.meal_type,
            'name': recipe.name,
            'calories': recipe.calories,
            'protein': recipe.get_protein(),
            'carbs': recipe.get_carbs(),
            'fats': recipe.get_fats(),
        })
    return rows


def compute_week_nutrition(plan: Iterable[PlanEntry], recipes: Iterable[Recipe],
                           days: Optional[Sequence[str]] = None):
    """Aggregate nutrition for each day of the week plus week totals.

    Returns structure:
    {
      'days': { 'Monday': {'calories': n, 'protein': g, 'carbs': g, 'fats': g}, ... },
      'week_totals': { 'calories': n, 'protein': g, 'carbs': g, 'fats': g }
    }
    """
    plan = list(plan)
    recipes = list(recipes)
    days_result = {}
    totals = defaultdict(int)
    for day in (days or DAYS):
        day_totals = aggregate_day(plan, recipes, day)
        days_result[day] = day_totals
        for k, v in day_totals.items():
            totals[k] += v
    return {
        'days': days_result,
        'week_totals': {k: totals[k] for k in TOTAL_KEYS},
    }


__all__ = ["aggregate_day", "day_breakdown", "compute_week_nutrition"]
