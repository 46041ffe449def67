from fastapi import APIRouter, Depends, HTTPException, Query

from mealboard.api.dependencies import get_session
from mealboard.infra.session import PlannerSession
from mealboard.utilities.validators import RecipeInput, RecipeUpdateInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _recipes_payload(session: PlannerSession, tag: str = ""):
    recipes = session.recipes.list()
    if tag:
        recipes = [r for r in recipes if tag in r.tags]
    return {"count": len(recipes), "recipes": [r.to_dict() for r in recipes]}


@router.get("")
async def list_recipes(tag: str = Query(default=""), session: PlannerSession = Depends(get_session)):
    """All recipes in insertion order, optionally filtered by tag."""
    return _recipes_payload(session, tag)


@router.get("/tags")
async def list_tags(session: PlannerSession = Depends(get_session)):
    return {"tags": session.recipes.tags()}


@router.post("", status_code=201)
async def add_recipe(payload: RecipeInput, session: PlannerSession = Depends(get_session)):
    recipe = session.recipes.add(payload.model_dump())
    return {"status": "success", "recipe": recipe.to_dict()}


@router.patch("/{recipe_id}")
async def update_recipe(recipe_id: str, payload: RecipeUpdateInput,
                        session: PlannerSession = Depends(get_session)):
    # unknown ids are a no-op, the response shows the unchanged collection
    session.recipes.update(recipe_id, payload.changes())
    recipe = session.recipes.get(recipe_id)
    return {"recipe": recipe.to_dict() if recipe else None, **_recipes_payload(session)}


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, session: PlannerSession = Depends(get_session)):
    """Remove a recipe. Plan entries that point to it stay and are hidden from every view."""
    session.recipes.delete(recipe_id)
    return _recipes_payload(session)


@router.get("/{recipe_id}")
async def recipe_detail(recipe_id: str, session: PlannerSession = Depends(get_session)):
    recipe = session.recipes.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe": recipe.to_dict()}
