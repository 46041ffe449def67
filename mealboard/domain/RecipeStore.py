"""Recipe Store: owns the recipe collection (insertion ordered)."""
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from mealboard.domain.Recipe import Recipe
from mealboard.events.Event_Bus import EventBus, RECIPES_CHANGED

logger = logging.getLogger(__name__)


class RecipeStore:
    def __init__(self, recipes: Optional[Iterable[Recipe]] = None, event_bus: Optional[EventBus] = None):
        self._recipes: List[Recipe] = list(recipes or [])
        self._event_bus = event_bus or EventBus()

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def _notify(self, action: str, recipe_id: Optional[str] = None):
        self._event_bus.publish(RECIPES_CHANGED, {"action": action, "id": recipe_id})

    def add(self, data: Union[Recipe, Dict[str, Any]]) -> Recipe:
        '''
        Adds a recipe under a freshly generated id and returns it.
        Any id present in the input is discarded.
        '''
        fields = data.to_dict() if isinstance(data, Recipe) else dict(data)
        fields.pop("id", None)
        recipe = Recipe.from_dict(fields)
        self._recipes.append(recipe)
        logger.debug("Recipe added: %s (%s)", recipe.name, recipe.id)
        self._notify("add", recipe.id)
        return recipe

    def update(self, recipe_id: str, fields: Dict[str, Any]) -> None:
        '''
        Merges partial fields into the recipe. Unknown ids are ignored.
        '''
        recipe = self.get(recipe_id)
        if recipe is None:
            logger.debug("Recipe update ignored, unknown id %s", recipe_id)
            return
        recipe.apply_update(fields)
        self._notify("update", recipe_id)

    def delete(self, recipe_id: str) -> None:
        '''
        Removes the recipe. Plan entries pointing at it are left in place.
        '''
        remaining = [r for r in self._recipes if r.id != recipe_id]
        if len(remaining) == len(self._recipes):
            logger.debug("Recipe delete ignored, unknown id %s", recipe_id)
            return
        self._recipes = remaining
        self._notify("delete", recipe_id)

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def list(self) -> List[Recipe]:
        return list(self._recipes)

    def replace_all(self, recipes: Iterable[Recipe]) -> None:
        '''Swap the whole collection, used when reloading from storage.'''
        self._recipes = list(recipes)
        self._notify("replace")

    def tags(self) -> List[str]:
        all_tags = set()
        for r in self._recipes:
            all_tags.update(r.tags)
        return sorted(all_tags)

    def __len__(self) -> int:
        return len(self._recipes)

    def to_dict(self):
        return [r.to_dict() for r in self._recipes]
