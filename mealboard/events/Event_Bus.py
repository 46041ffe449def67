"""Simple Event Bus / Observer implementation for store change notifications.

Event names:
  recipes.changed -> payload {"action": "add"|"update"|"delete"|"replace", "id": str | None}
  plan.changed -> payload {"action": "add"|"move"|"delete"|"replace", "id": str | None}
  storage.sync_failed -> payload {"operation": str, "error": str}

Subscribers are callables taking (event_name, payload). Each store receives
its bus through the constructor; there is no process-wide instance.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
RECIPES_CHANGED = "recipes.changed"
PLAN_CHANGED = "plan.changed"
STORAGE_SYNC_FAILED = "storage.sync_failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# one failing observer must not stop delivery to the others
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = ['EventBus', 'RECIPES_CHANGED', 'PLAN_CHANGED', 'STORAGE_SYNC_FAILED']
