# recipe_jsonizer/services/persistence.py
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from recipe_jsonizer.app.domain.errors import InvalidRecipeDocumentError
from recipe_jsonizer.app.domain.models import ImageCredit, Recipe

logger = logging.getLogger(__name__)

UNSAFE_FILE_CHARS = re.compile(r"[^\w\-.]")


def detect_eol(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def has_trailing_newline(text: str) -> bool:
    return text.endswith("\n")


def serialize_recipe(recipe: Recipe, existing_text: Optional[str] = None) -> str:
    """
    JSON text for a recipe.

    With existing_text the line endings and trailing newline of that file
    are kept, so rewriting a document does not churn its diff.
    """
    text = json.dumps(recipe.to_document(), ensure_ascii=False, indent=2)
    if existing_text is None:
        return text
    eol = detect_eol(existing_text)
    text = text.replace("\n", eol)
    if has_trailing_newline(existing_text):
        text += eol
    return text


def recipe_file_name(recipe: Recipe) -> str:
    return UNSAFE_FILE_CHARS.sub("_", f"{recipe.title or '레시피'}_{recipe.id}.json")


def parse_recipe_document(payload: Any, source: str = "<memory>") -> Recipe:
    if not isinstance(payload, dict):
        raise InvalidRecipeDocumentError(source, "document must be a JSON object")
    try:
        return Recipe.model_validate(payload)
    except ValidationError as exc:
        raise InvalidRecipeDocumentError(source, str(exc)) from exc


def load_recipe(path: Path) -> Recipe:
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidRecipeDocumentError(path.name, f"JSON parse failed: {exc}") from exc
    return parse_recipe_document(payload, source=path.name)


def save_recipe(recipe: Recipe, directory: Path, file_name: Optional[str] = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / (file_name or recipe_file_name(recipe))

    existing = None
    if target.exists():
        # newline="" so "\r\n" reaches detect_eol untranslated
        with target.open(encoding="utf-8", newline="") as fh:
            existing = fh.read()
    # newline="" keeps "\r\n" from being translated again on Windows
    with target.open("w", encoding="utf-8", newline="") as fh:
        fh.write(serialize_recipe(recipe, existing))

    logger.info("Recipe written: %s", target)
    return target


def has_image(recipe: Recipe) -> bool:
    return bool((recipe.image or "").strip())


def attach_image(recipe: Recipe, image: str, credit: ImageCredit) -> Recipe:
    """Copy of recipe with the image fields an image lookup produces."""
    return recipe.model_copy(update={"image": image, "image_credit": credit})
