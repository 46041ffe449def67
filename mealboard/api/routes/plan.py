from fastapi import APIRouter, Depends, HTTPException

from mealboard.api.dependencies import get_session
from mealboard.domain.Plan import PlanEntry
from mealboard.infra.session import PlannerSession
from mealboard.logic.planner.grid import build_grid
from mealboard.utilities.validators import PlanEntryInput, MoveEntryInput

router = APIRouter(prefix="/api/plan", tags=["plan"])


def _plan_payload(session: PlannerSession):
    entries = session.plan.list()
    return {"count": len(entries), "entries": [e.to_dict() for e in entries]}


@router.get("")
async def list_plan(session: PlannerSession = Depends(get_session)):
    """Raw plan entries, dangling ones included."""
    return _plan_payload(session)


@router.get("/slots")
async def plan_slots(session: PlannerSession = Depends(get_session)):
    """Calendar grid: {day: {meal_type: [card, ...]}}."""
    return {"grid": build_grid(session.plan.list(), session.recipes.list())}


@router.post("", status_code=201)
async def add_entry(payload: PlanEntryInput, session: PlannerSession = Depends(get_session)):
    if payload.id and session.plan.contains(payload.id):
        raise HTTPException(status_code=409, detail=f"Plan entry {payload.id} already exists")
    entry =PlanEntry(payload.recipe_id, payload.date, payload.meal_type, id=payload.id)
    session.plan.add_entry(entry)
    return {"entry": entry.to_dict(), **_plan_payload(session)}


@router.put("/{entry_id}/move")
async def move_entry(entry_id: str, payload: MoveEntryInput, session: PlannerSession = Depends(get_session)):
    session.plan.move_entry(entry_id, payload.date, payload.meal_type)
    return _plan_payload(session)


@router.delete("/{entry_id}")
async def remove_entry(entry_id: str, session: PlannerSession = Depends(get_session)):
    session.plan.remove_entry(entry_id)
    return _plan_payload(session)
