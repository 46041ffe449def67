"""Resolution of the weak recipe reference carried by a plan entry.

A lookup returns either ``Found(recipe)`` or ``MISSING``; callers branch with
``isinstance(ref, Found)`` and treat anything else as "recipe unavailable".
"""
from __future__ import annotations
from typing import Dict, Iterable, Union

from mealboard.domain.Recipe import Recipe


class Found:
    __slots__ = ("recipe",)

    def __init__(self, recipe: Recipe):
        self.recipe = recipe

    def __repr__(self) -> str:
        return f"Found({self.recipe.name!r})"


class Missing:
    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing()

RecipeRef = Union[Found, Missing]


def index_recipes(recipes: Iterable[Recipe]) -> Dict[str, Recipe]:
    # first occurrence wins if an id is ever duplicated
    index: Dict[str, Recipe] = {}
    for r in recipes:
        index.setdefault(r.id, r)
    return index


def resolve_recipe(index: Dict[str, Recipe], recipe_id: str) -> RecipeRef:
    recipe = index.get(recipe_id)
    return Found(recipe) if recipe is not None else MISSING


__all__ = ["Found", "Missing", "MISSING", "RecipeRef", "index_recipes", "resolve_recipe"]
