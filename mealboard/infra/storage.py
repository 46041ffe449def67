"""Storage collaborator used by PlannerSession.

Any object with ``load``, ``save_recipes`` and ``save_plan`` works; failures
must surface as StorageError.
"""
from pathlib import Path
from typing import Iterable, List, Protocol, Tuple

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.Recipe import Recipe
from mealboard.infra.Plan_Repository import PlanRepository
from mealboard.infra.Recipe_Repository import RecipeRepository
from mealboard.infra.paths import DATA_DIR


class PlannerStorage(Protocol):
    def load(self, user_id: str) -> Tuple[List[Recipe], List[PlanEntry]]: ...

    def save_recipes(self, user_id: str, recipes: Iterable[Recipe]) -> None: ...

    def save_plan(self, user_id: str, entries: Iterable[PlanEntry]) -> None: ...


class JsonPlannerStorage:
    def __init__(self, data_dir: Path = DATA_DIR):
        self.recipes = RecipeRepository(data_dir)
        self.plans = PlanRepository(data_dir)

    def load(self, user_id: str) -> Tuple[List[Recipe], List[PlanEntry]]:
        return self.recipes.load(user_id), self.plans.load(user_id)

    def save_recipes(self, user_id: str, recipes: Iterable[Recipe]) -> None:
        self.recipes.save(user_id, recipes)

    def save_plan(self, user_id: str, entries: Iterable[PlanEntry]) -> None:
        self.plans.save(user_id, entries)
