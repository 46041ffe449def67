"""Grocery list builder.

Provides aggregate_groceries(plan, recipes): merges the ingredients of every
planned recipe into one line per (name, unit), both compared case-insensitively.
"""
from typing import Dict, Iterable, List, Tuple

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.Recipe import Recipe
from mealboard.domain.RecipeRef import Found, index_recipes, resolve_recipe
from mealboard.domain.ShoppingList import AggregatedIngredient


def _sort_key(item: AggregatedIngredient):
    # locale-style ordering: case-folded name first, exact spelling and unit break ties
    return item.name.casefold(), item.name, item.unit.casefold()


def aggregate_groceries(plan: Iterable[PlanEntry], recipes: Iterable[Recipe]) -> List[AggregatedIngredient]:
    """Compute the shopping list for a plan.

    Args:
        plan: plan entries; each one counts once, duplicates included.
        recipes: the recipe collection used to resolve entries.

    Returns:
        AggregatedIngredient list sorted by display name. Entries whose recipe
        no longer exists are skipped. Amounts are summed without rounding.
    """
    index = index_recipes(recipes)
    buckets: Dict[Tuple[str, str], AggregatedIngredient] = {}

    for entry in plan:
        ref = resolve_recipe(index, entry.recipe_id)
        if not isinstance(ref, Found):
            continue
        recipe = ref.recipe
        for ing in recipe.ingredients:
            key = ing.merge_key()
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = AggregatedIngredient(ing.name, ing.unit)
            bucket.add(ing.amount, recipe.name)

    return sorted(buckets.values(), key=_sort_key)


__all__ = ['aggregate_groceries']
