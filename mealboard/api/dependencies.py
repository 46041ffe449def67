"""
API dependencies for dependency injection.

Dependencies are ``async def`` so session lookup and every store mutation run
on the event-loop thread, one request at a time.
"""
from typing import Optional

from fastapi import Depends, Header

from mealboard.infra.session import PlannerSession, SessionRegistry
from mealboard.infra.storage import JsonPlannerStorage
from mealboard.utilities.config import DATA_DIR, DEFAULT_USER_ID

_registry: Optional[SessionRegistry] = None


async def get_registry() -> SessionRegistry:
    global _registry
    if _registry is None:
        _registry = SessionRegistry(JsonPlannerStorage(DATA_DIR))
    return _registry


async def get_session(
    x_user_id: Optional[str] = Header(default=None),
    registry: SessionRegistry = Depends(get_registry),
) -> PlannerSession:
    """
    Session of the calling user.

    Usage:
        @router.get("/example")
        async def example(session: PlannerSession = Depends(get_session)):
            session.plan.list()
    """
    return registry.get(x_user_id or DEFAULT_USER_ID)
