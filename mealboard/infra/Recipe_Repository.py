import logging
from pathlib import Path
from typing import Iterable, List

from mealboard.domain.Recipe import Recipe
from mealboard.infra.json_store import read_json, atomic_write
from mealboard.infra.paths import DATA_DIR, recipes_file
from mealboard.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)


class RecipeRepository:
    """Per-user recipes file; each recipe is stored with its ingredients embedded."""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def path_for(self, user_id: str) -> Path:
        return recipes_file(user_id, self.data_dir)

    def load(self, user_id: str) -> List[Recipe]:
        data = read_json(self.path_for(user_id), [], "load")
        if not isinstance(data, list):
            raise StorageError("Recipes file must hold a list", "load", {"user_id": user_id})
        recipes = [Recipe.from_dict(entry) for entry in data if isinstance(entry, dict)]
        logger.debug("Loaded %d recipes for %s", len(recipes), user_id)
        return recipes

    def save(self, user_id: str, recipes: Iterable[Recipe]) -> None:
        atomic_write(self.path_for(user_id), [r.to_dict() for r in recipes], "save_recipes")
