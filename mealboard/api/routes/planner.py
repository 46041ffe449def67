"""Drag-and-drop endpoints.

A client forwards its toolkit's gesture callbacks here: start when a card is
picked up, over whenever the hovered droppable changes, end on release, cancel
on escape. Only ``end`` changes the plan.
"""
from fastapi import APIRouter, Depends

from mealboard.api.dependencies import get_session
from mealboard.infra.session import PlannerSession
from mealboard.logic.planner.board import parse_target, resolve_drop_target
from mealboard.utilities.validators import DragStartInput, DragTargetInput

router = APIRouter(prefix="/api/planner", tags=["planner"])


def _target(payload: DragTargetInput):
    return resolve_drop_target(parse_target(c.id, c.model_dump()) for c in payload.targets)


@router.get("/state")
async def board_state(session: PlannerSession = Depends(get_session)):
    return session.board.to_dict()


@router.post("/drag/start")
async def drag_start(payload: DragStartInput, session: PlannerSession = Depends(get_session)):
    board = session.board
    if payload.entry_id:
        started = board.pick_entry(payload.entry_id)
    elif payload.recipe_id:
        started = board.pick_recipe(payload.recipe_id)
    else:
        started = False
    return {"started": started, **board.to_dict()}


@router.post("/drag/over")
async def drag_over(payload: DragTargetInput, session: PlannerSession = Depends(get_session)):
    session.board.over(_target(payload))
    return session.board.to_dict()


@router.post("/drag/end")
async def drag_end(payload: DragTargetInput, session: PlannerSession = Depends(get_session)):
    outcome = session.board.end(_target(payload))
    entries = session.plan.list()
    return {
        "outcome": outcome.to_dict(),
        **session.board.to_dict(),
        "entries": [e.to_dict() for e in entries],
    }


@router.post("/drag/cancel")
async def drag_cancel(session: PlannerSession = Depends(get_session)):
    session.board.cancel()
    return session.board.to_dict()
