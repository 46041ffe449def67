import logging
from pathlib import Path
from typing import Iterable, List

from mealboard.domain.Plan import PlanEntry
from mealboard.infra.json_store import read_json, atomic_write
from mealboard.infra.paths import DATA_DIR, plan_file
from mealboard.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)


class PlanRepository:
    """Per-user plan file: a list of {id, recipe_id, date, meal_type} records."""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def path_for(self, user_id: str) -> Path:
        return plan_file(user_id, self.data_dir)

    def load(self, user_id: str) -> List[PlanEntry]:
        data = read_json(self.path_for(user_id), [], "load")
        if not isinstance(data, list):
            raise StorageError("Plan file must hold a list", "load", {"user_id": user_id})
        entries = [PlanEntry.from_dict(d) for d in data if isinstance(d, dict)]
        logger.debug("Loaded %d plan entries for %s", len(entries), user_id)
        return entries

    def save(self, user_id: str, entries: Iterable[PlanEntry]) -> None:
        atomic_write(self.path_for(user_id), [e.to_dict() for e in entries], "save_plan")
