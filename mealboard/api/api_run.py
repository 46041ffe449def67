from fastapi import FastAPI, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from mealboard.api.dependencies import get_session
from mealboard.api.routes import recipes, plan, planner, reports
from mealboard.infra.session import PlannerSession
from mealboard.utilities.exceptions import StorageError
from mealboard.utilities.export_import import export_snapshot, import_snapshot

# Logging
logger = logging.getLogger("mealboard_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Board API")

# Include routers
app.include_router(recipes.router)
app.include_router(plan.router)
app.include_router(planner.router)
app.include_router(reports.router)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": exc.to_dict()})


# -------------------- API: Health --------------------
@app.get("/api/health")
async def health():
    return {"status": "ok"}


# -------------------- API: Sync --------------------
@app.post("/api/refresh")
async def refresh(session: PlannerSession = Depends(get_session)):
    """Reload recipes and plan from storage, replacing the in-memory copy."""
    reloaded = session.refresh()
    return {
        "reloaded": reloaded,
        "recipes": len(session.recipes),
        "entries": len(session.plan),
    }


# -------------------- API: Change events (polled by frontend) --------------------
@app.get("/api/events")
async def events(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    session: PlannerSession = Depends(get_session),
):
    """
    Return recent change events (recipes.changed, plan.changed, storage.sync_failed).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/events?since=<next_cursor>
    """
    return session.feed.get_events(since)


# -------------------- API: Backup --------------------
@app.get("/api/export")
async def export_all(session: PlannerSession = Depends(get_session)):
    data = export_snapshot(session.recipes.list(), session.plan.list())
    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": 'attachment; filename="mealboard_backup.zip"'},
    )


@app.post("/api/import")
async def import_all(request: Request, session: PlannerSession = Depends(get_session)):
    """Replace recipes and plan with the content of a ZIP produced by /api/export."""
    recipes_in, entries_in = import_snapshot(await request.body())
    session.restore(recipes_in, entries_in)
    logger.info("Imported %d recipes, %d entries for %s", len(recipes_in), len(entries_in), session.user_id)
    return {"recipes": len(session.recipes), "entries": len(session.plan)}
