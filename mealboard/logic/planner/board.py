"""Planner board drag-and-drop orchestration.

The board is a small state machine driven by discrete gesture events:

    IDLE --start(subject)--> DRAGGING --end(target)--> IDLE
                                 |  over(target) keeps DRAGGING
                                 +--cancel()--> IDLE

Stores are only touched inside ``end``. What happens there depends on the
target and on whether the subject id is already an entry of the plan:

    slot         + new subject     -> insert a PlanEntry with a fresh id
    slot         + placed subject  -> move that entry
    remove zone  + placed subject  -> remove that entry
    remove zone  + new subject     -> nothing
    no target                      -> nothing

When a gesture reports several targets at once, a slot wins over the
remove zone (see ``resolve_drop_target``).
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, NamedTuple, Optional, Union
from uuid import uuid4

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.PlanStore import PlanStore
from mealboard.domain.Recipe import Recipe
from mealboard.domain.RecipeStore import RecipeStore
from mealboard.utilities.constants import MEAL_TYPES, REMOVE_ZONE_ID

logger = logging.getLogger(__name__)

IDLE = "idle"
DRAGGING = "dragging"

INSERTED = "inserted"
MOVED = "moved"
REMOVED = "removed"
NOTHING = "none"


class SlotTarget(NamedTuple):
    date: str
    meal_type: str


class RemoveZone:
    __slots__ = ()

    def __repr__(self) -> str:
        return "REMOVE_ZONE"


REMOVE_ZONE = RemoveZone()

DropTarget = Union[SlotTarget, RemoveZone, None]


class DragSubject:
    """What is being dragged.

    ``id`` is the draggable id: the recipe id for a library card, the plan
    entry id for a card already on the calendar.
    """

    def __init__(self, id: str, recipe_id: str, from_library: bool):
        self.id = id
        self.recipe_id = recipe_id
        self.from_library = from_library

    @classmethod
    def library(cls, recipe: Recipe) -> "DragSubject":
        return cls(recipe.id, recipe.id, True)

    @classmethod
    def placed(cls, entry: PlanEntry) -> "DragSubject":
        return cls(entry.id, entry.recipe_id, False)

    def to_dict(self):
        return {"id": self.id, "recipe_id": self.recipe_id, "from_library": self.from_library}

    def __repr__(self) -> str:
        kind = "library" if self.from_library else "placed"
        return f"DragSubject({kind}, {self.id})"


class DropOutcome(NamedTuple):
    kind: str
    entry_id: Optional[str] = None

    def to_dict(self):
        return {"kind": self.kind, "entry_id": self.entry_id}


def parse_target(droppable_id: Optional[str], data: Optional[dict] = None) -> DropTarget:
    """Map a droppable (id, data) pair reported by a UI toolkit to a target."""
    if droppable_id is None and not data:
        return None
    data = data or {}
    date = data.get("date")
    meal_type = data.get("meal_type", data.get("mealType"))
    if date and meal_type in MEAL_TYPES:
        return SlotTarget(date, meal_type)
    if droppable_id == REMOVE_ZONE_ID:
        return REMOVE_ZONE
    return None


def resolve_drop_target(candidates: Iterable[DropTarget]) -> DropTarget:
    """Pick exactly one target out of everything under the pointer. Slots win."""
    remove = None
    for c in candidates:
        if isinstance(c, SlotTarget):
            return c
        if isinstance(c, RemoveZone):
            remove = c
    return remove


_UNSET: Any = object()


class PlannerBoard:
    def __init__(self, recipe_store: RecipeStore, plan_store: PlanStore,
                 id_factory: Optional[Callable[[], str]] = None):
        self._recipes = recipe_store
        self._plan = plan_store
        self._new_id = id_factory or (lambda: str(uuid4()))
        self.state = IDLE
        self.subject: Optional[DragSubject] = None
        self.hover: DropTarget = None

    def pick_recipe(self, recipe_id: str) -> bool:
        '''Start dragging a library card. Returns False (and stays put) for unknown ids.'''
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            return False
        self.start(DragSubject.library(recipe))
        return True

    def pick_entry(self, entry_id: str) -> bool:
        '''Start dragging a card that is already on the calendar.'''
        entry = self._plan.get(entry_id)
        if entry is None:
            return False
        self.start(DragSubject.placed(entry))
        return True

    def start(self, subject: DragSubject) -> None:
        if self.state == DRAGGING:
            logger.debug("Drag restarted, dropping previous subject %r", self.subject)
        self.state = DRAGGING
        self.subject = subject
        self.hover = None

    def over(self, target: DropTarget) -> None:
        if self.state != DRAGGING:
            return
        self.hover = target

    def cancel(self) -> None:
        self._reset()

    def end(self, target: DropTarget = _UNSET) -> DropOutcome:
        '''
        Finish the gesture. Without an explicit target the last hovered one is used.
        '''
        if self.state != DRAGGING or self.subject is None:
            return DropOutcome(NOTHING)
        subject = self.subject
        if target is _UNSET:
            target = self.hover
        try:
            outcome = self._drop(subject, target)
        finally:
            self._reset()
        logger.debug("Drop %r on %r -> %s", subject, target, outcome.kind)
        return outcome

    def _drop(self, subject: DragSubject, target: DropTarget) -> DropOutcome:
        placed = self._plan.contains(subject.id)
        if isinstance(target, SlotTarget):
            if not placed:
                entry = PlanEntry(subject.recipe_id, target.date, target.meal_type, id=self._new_id())
                self._plan.add_entry(entry)
                return DropOutcome(INSERTED, entry.id)
            self._plan.move_entry(subject.id, target.date, target.meal_type)
            return DropOutcome(MOVED, subject.id)
        if isinstance(target, RemoveZone) and placed:
            self._plan.remove_entry(subject.id)
            return DropOutcome(REMOVED, subject.id)
        return DropOutcome(NOTHING)

    def _reset(self):
        self.state = IDLE
        self.subject = None
        self.hover = None

    def to_dict(self):
        hover = None
        if isinstance(self.hover, SlotTarget):
            hover = {"date": self.hover.date, "meal_type": self.hover.meal_type}
        elif isinstance(self.hover, RemoveZone):
            hover = REMOVE_ZONE_ID
        return {
            "state": self.state,
            "subject": self.subject.to_dict() if self.subject else None,
            "hover": hover,
        }


__all__ = [
    "PlannerBoard", "DragSubject", "DropOutcome", "SlotTarget", "REMOVE_ZONE", "RemoveZone",
    "parse_target", "resolve_drop_target", "IDLE", "DRAGGING",
    "INSERTED", "MOVED", "REMOVED", "NOTHING",
]
