"""Web-facing observer for store change events.

ChangeFeed subscribes to a session's EventBus for:
  - recipes.changed
  - plan.changed
  - storage.sync_failed

and keeps a bounded buffer of recent events that the web layer serves to
polling clients, so an open page knows when to re-fetch the plan or show a
"not saved" warning.

Design:
  * Each event gets an auto-increment integer id (cursor) so clients can ask
    only for newer events (since=<last_id_seen>).
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any
from datetime import datetime, timezone

from .Event_Bus import EventBus, RECIPES_CHANGED, PLAN_CHANGED, STORAGE_SYNC_FAILED

MAX_EVENTS = 300  # keep a few hundred recent events
FEED_EVENTS = (RECIPES_CHANGED, PLAN_CHANGED, STORAGE_SYNC_FAILED)


class ChangeFeed:
    def __init__(self, bus: EventBus, max_events: int = MAX_EVENTS):
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self.max_events = max_events
        for name in FEED_EVENTS:
            bus.subscribe(name, self._record)

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        evt = {
            'id': self._next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            for k in ('action', 'id', 'operation', 'error'):
                if k in payload:
                    # payload id is the entity id; the event id stays the cursor
                    evt['target_id' if k == 'id' else k] = payload[k]
        self._events.append(evt)
        self._next_id += 1
        if len(self._events) > self.max_events:
            del self._events[: len(self._events) - self.max_events]

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns the whole buffer. Response includes
        next_cursor (largest id) so client can poll with since=next_cursor.
        """
        if since is None:
            data = list(self._events)
        else:
            data = [e for e in self._events if e['id'] > since]
        next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['ChangeFeed', 'MAX_EVENTS']
