from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from mealboard.api.dependencies import get_session
from mealboard.infra.pdf_utils import generate_pdf_for_grocery_list, generate_pdf_for_week
from mealboard.infra.session import PlannerSession
from mealboard.logic.planner.grid import build_grid
from mealboard.logic.reporting.nutrition import aggregate_day, day_breakdown, compute_week_nutrition
from mealboard.logic.shopping.list_builder import aggregate_groceries
from mealboard.utilities.constants import DAYS
from mealboard.utilities.export_import import export_grocery_csv, export_grocery_text

router = APIRouter(prefix="/api", tags=["reports"])


def _groceries(session: PlannerSession):
    return aggregate_groceries(session.plan.list(), session.recipes.list())


# -------------------- Grocery list --------------------
@router.get("/grocery-list")
async def grocery_list(session: PlannerSession = Depends(get_session)):
    items = _groceries(session)
    return {"items": [i.to_dict() for i in items], "count": len(items)}


@router.get("/grocery-list.csv")
async def grocery_list_csv(session: PlannerSession = Depends(get_session)):
    return Response(
        content=export_grocery_csv(_groceries(session)),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="grocery_list.csv"'},
    )


@router.get("/grocery-list.txt", response_class=PlainTextResponse)
async def grocery_list_text(session: PlannerSession = Depends(get_session)):
    return export_grocery_text(_groceries(session))


@router.get("/grocery-list.pdf")
async def grocery_list_pdf(session: PlannerSession = Depends(get_session)):
    pdf = generate_pdf_for_grocery_list(_groceries(session))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="grocery_list.pdf"'},
    )


@router.get("/plan.pdf")
async def plan_pdf(session: PlannerSession = Depends(get_session)):
    grid = build_grid(session.plan.list(), session.recipes.list())
    return Response(
        content=generate_pdf_for_week(grid),
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="meal_plan.pdf"'},
    )


# -------------------- Macros --------------------
@router.get("/macros")
async def macros_for_day(day: str = Query(default=DAYS[0]), session: PlannerSession = Depends(get_session)):
    plan = session.plan.list()
    recipes = session.recipes.list()
    return {
        "day": day,
        "totals": aggregate_day(plan, recipes, day),
        "meals": day_breakdown(plan, recipes, day),
    }


@router.get("/macros/week")
async def macros_for_week(session: PlannerSession = Depends(get_session)):
    return compute_week_nutrition(session.plan.list(), session.recipes.list())
