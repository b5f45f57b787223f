# recipe_jsonizer/services/catalog.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from recipe_jsonizer.app.domain.errors import CatalogError, InvalidRecipeDocumentError, RecipeNotFoundError
from recipe_jsonizer.app.domain.models import Recipe
from recipe_jsonizer.services.persistence import load_recipe

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"

SORT_TITLE = "title"
SORT_RECENT = "recent"
SORT_TAGS = "tags"


@dataclass
class SkippedDocument:
    file_name: str
    reason: str


@dataclass
class CatalogLoadResult:
    recipes: list[Recipe] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)


def read_index(directory: Path) -> list[str]:
    index_path = Path(directory) / INDEX_FILE
    try:
        payload = json.loads(index_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogError(str(index_path), "index file not found") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(str(index_path), f"JSON parse failed: {exc}") from exc

    if not isinstance(payload, list) or not all(isinstance(name, str) for name in payload):
        raise CatalogError(str(index_path), "index must be a list of file names")
    return payload


def load_catalog(directory: Path) -> CatalogLoadResult:
    """Load every document listed in index.json, in index order."""
    directory = Path(directory)
    result = CatalogLoadResult()

    for file_name in read_index(directory):
        path = directory / file_name
        if not path.is_file():
            logger.warning("[skip] missing recipe file: %s", file_name)
            result.skipped.append(SkippedDocument(file_name, "file not found"))
            continue
        try:
            result.recipes.append(load_recipe(path))
        except InvalidRecipeDocumentError as exc:
            logger.warning("[skip] %s", exc)
            result.skipped.append(SkippedDocument(file_name, exc.reason))

    logger.info("Catalog loaded: %d recipes, %d skipped", len(result.recipes), len(result.skipped))
    return result


def find_recipe(recipes: Iterable[Recipe], recipe_id: str) -> Recipe:
    for recipe in recipes:
        if recipe.id == recipe_id:
            return recipe
    raise RecipeNotFoundError(recipe_id)


def search_recipes(recipes: Iterable[Recipe], query: str) -> list[Recipe]:
    """Case-insensitive match on title, tags and ingredient names."""
    q = (query or "").strip().lower()
    if not q:
        return list(recipes)

    matches: list[Recipe] = []
    for recipe in recipes:
        title = recipe.title.lower()
        tags = " ".join(recipe.tags).lower()
        names = " ".join(item.name for item in recipe.all_ingredients()).lower()
        if q in title or q in tags or q in names:
            matches.append(recipe)
    return matches


def _id_stamp(recipe: Recipe) -> str:
    return recipe.id.split("_")[-1] if recipe.id else "0"


def sort_recipes(recipes: Iterable[Recipe], by: str = SORT_TITLE) -> list[Recipe]:
    items = list(recipes)
    if by == SORT_TITLE:
        return sorted(items, key=lambda r: r.title)
    if by == SORT_RECENT:
        return sorted(items, key=_id_stamp, reverse=True)
    if by == SORT_TAGS:
        return sorted(items, key=lambda r: ", ".join(r.tags))
    return items
