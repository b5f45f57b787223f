# recipe_jsonizer/app/routers/recipes.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from recipe_jsonizer.app.config import Settings, get_settings
from recipe_jsonizer.app.domain.errors import CatalogError, InvalidRecipeDocumentError, RecipeNotFoundError
from recipe_jsonizer.app.domain.models import Recipe
from recipe_jsonizer.app.schemas.recipes import ConvertRequest, RecipeSummary, ScaleRequest
from recipe_jsonizer.services.assembler import build_recipe
from recipe_jsonizer.services.catalog import find_recipe, load_catalog, search_recipes, sort_recipes
from recipe_jsonizer.services.persistence import parse_recipe_document
from recipe_jsonizer.services.render import RenderedRecipe, render_recipe

log = logging.getLogger(__name__)
router = APIRouter(prefix="/recipes", tags=["recipes"])


def _catalog_recipes(settings: Settings) -> list[Recipe]:
    try:
        return load_catalog(Path(settings.recipes_dir)).recipes
    except CatalogError as exc:
        log.error("Catalog unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=exc.reason)


@router.post("/convert")
def convert_recipe(
    payload: ConvertRequest,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    recipe = build_recipe(payload.text, payload.to_overrides(), settings=settings)
    log.info("Converted recipe %s (%d ingredients)", recipe.id, len(recipe.ingredients))
    return recipe.to_document()


@router.post("/scale", response_model=RenderedRecipe)
def scale_recipe(
    payload: ScaleRequest,
    settings: Settings = Depends(get_settings),
) -> RenderedRecipe:
    try:
        recipe = parse_recipe_document(payload.recipe, source="request body")
    except InvalidRecipeDocumentError as exc:
        raise HTTPException(status_code=422, detail=exc.reason)
    return render_recipe(recipe, payload.target_servings, settings)


@router.get("", response_model=list[RecipeSummary])
def list_recipes(
    q: Optional[str] = Query(default=None),
    sort: str = Query(default="title"),
    settings: Settings = Depends(get_settings),
) -> list[RecipeSummary]:
    recipes = sort_recipes(search_recipes(_catalog_recipes(settings), q or ""), sort)
    return [
        RecipeSummary(id=r.id, title=r.title, base_servings=r.base_servings, tags=r.tags)
        for r in recipes
    ]


@router.get("/{recipe_id}")
def get_recipe(
    recipe_id: str,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    try:
        return find_recipe(_catalog_recipes(settings), recipe_id).to_document()
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
