"""Planner session: the in-memory stores of one user plus their storage mirror.

The stores are authoritative for the running session. Every mutation is
applied locally first and then the whole affected collection is saved.
A failed save or load is logged and announced on the event bus
(``storage.sync_failed``); local state is never rolled back and nothing is
retried, so local and stored data may differ until the next successful save.
``refresh()`` replaces the local collections with what storage holds.
"""
import logging
from typing import Dict, Optional

from mealboard.domain.PlanStore import PlanStore
from mealboard.domain.RecipeStore import RecipeStore
from mealboard.events.Event_Bus import EventBus, RECIPES_CHANGED, PLAN_CHANGED, STORAGE_SYNC_FAILED
from mealboard.events.web_observers import ChangeFeed
from mealboard.infra.storage import PlannerStorage
from mealboard.logic.planner.board import PlannerBoard
from mealboard.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)


class PlannerSession:
    def __init__(self, storage: Optional[PlannerStorage], user_id: Optional[str], id_factory=None):
        self.storage = storage
        self.user_id = user_id
        self.event_bus = EventBus()
        self.recipes = RecipeStore(event_bus=self.event_bus)
        self.plan = PlanStore(event_bus=self.event_bus)
        self.board = PlannerBoard(self.recipes, self.plan, id_factory=id_factory)
        self.feed = ChangeFeed(self.event_bus)
        self.event_bus.subscribe(RECIPES_CHANGED, self._on_recipes_changed)
        self.event_bus.subscribe(PLAN_CHANGED, self._on_plan_changed)

    # --- persistence -------------------------------------------------------
    def _can_sync(self) -> bool:
        if self.storage is None:
            return False
        if not self.user_id:
            logger.debug("No user id, skipping storage round-trip")
            return False
        return True

    def _sync_failed(self, operation: str, error: StorageError):
        logger.error("Storage %s failed for user %s: %s", operation, self.user_id, error)
        self.event_bus.publish(STORAGE_SYNC_FAILED, {"operation": operation, "error": str(error)})

    def _on_recipes_changed(self, event_name, payload):
        if (payload or {}).get("action") == "replace" or not self._can_sync():
            return
        try:
            self.storage.save_recipes(self.user_id, self.recipes.list())
        except StorageError as e:
            self._sync_failed("save_recipes", e)

    def _on_plan_changed(self, event_name, payload):
        if (payload or {}).get("action") == "replace" or not self._can_sync():
            return
        try:
            self.storage.save_plan(self.user_id, self.plan.list())
        except StorageError as e:
            self._sync_failed("save_plan", e)

    def restore(self, recipes, entries) -> None:
        '''Replace both collections (e.g. from an imported archive) and save them.'''
        self.recipes.replace_all(recipes)
        self.plan.replace_all(entries)
        self._on_recipes_changed(RECIPES_CHANGED, {"action": "restore"})
        self._on_plan_changed(PLAN_CHANGED, {"action": "restore"})

    def refresh(self) -> bool:
        '''Reload both collections from storage. Returns False when local state was kept.'''
        if not self._can_sync():
            return False
        try:
            recipes, entries = self.storage.load(self.user_id)
        except StorageError as e:
            self._sync_failed("load", e)
            return False
        self.recipes.replace_all(recipes)
        self.plan.replace_all(entries)
        logger.info("Session for %s loaded %d recipes, %d plan entries",
                    self.user_id, len(recipes), len(entries))
        return True


class SessionRegistry:
    """One PlannerSession per user id, loaded from storage on first use."""

    def __init__(self, storage: Optional[PlannerStorage]):
        self.storage = storage
        self._sessions: Dict[str, PlannerSession] = {}

    def get(self, user_id: str) -> PlannerSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = PlannerSession(self.storage, user_id)
            session.refresh()
            self._sessions[user_id] = session
        return session

    def clear(self):
        self._sessions.clear()


__all__ = ["PlannerSession", "SessionRegistry"]
