"""Plan Store: owns the plan entries. Slots are multisets, so nothing is deduplicated."""
import logging
from typing import Iterable, List, Optional

from mealboard.domain.Plan import PlanEntry
from mealboard.events.Event_Bus import EventBus, PLAN_CHANGED

logger = logging.getLogger(__name__)


class PlanStore:
    def __init__(self, entries: Optional[Iterable[PlanEntry]] = None, event_bus: Optional[EventBus] = None):
        self._entries: List[PlanEntry] = list(entries or [])
        self._event_bus = event_bus or EventBus()

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def _notify(self, action: str, entry_id: Optional[str] = None):
        self._event_bus.publish(PLAN_CHANGED, {"action": action, "id": entry_id})

    def add_entry(self, entry: PlanEntry) -> None:
        '''
        Adds an entry. The caller generates the id.
        '''
        self._entries.append(entry)
        logger.debug("Plan entry added: %s", entry)
        self._notify("add", entry.id)

    def move_entry(self, entry_id: str, new_date: str, new_meal_type: str) -> None:
        '''
        Moves an entry to another slot in place. Unknown ids are ignored.
        '''
        entry = self.get(entry_id)
        if entry is None:
            logger.debug("Plan move ignored, unknown id %s", entry_id)
            return
        entry.date = new_date
        entry.meal_type = new_meal_type
        self._notify("move", entry_id)

    def remove_entry(self, entry_id: str) -> None:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug("Plan remove ignored, unknown id %s", entry_id)
            return
        self._entries = remaining
        self._notify("delete", entry_id)

    def get(self, entry_id: str) -> Optional[PlanEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def contains(self, entry_id: str) -> bool:
        return self.get(entry_id) is not None

    def list(self) -> List[PlanEntry]:
        return list(self._entries)

    def entries_for_slot(self, date: str, meal_type: str) -> List[PlanEntry]:
        return [e for e in self._entries if e.date == date and e.meal_type == meal_type]

    def replace_all(self, entries: Iterable[PlanEntry]) -> None:
        self._entries = list(entries)
        self._notify("replace")

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self):
        return [e.to_dict() for e in self._entries]
