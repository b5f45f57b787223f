# recipe_jsonizer/services/assembler.py
"""
Raw recipe text -> Recipe document.

Never raises for content: unparseable text yields an impoverished but
well-formed document (placeholder title, default servings, empty lists).
"""
from __future__ import annotations

import logging
from typing import Optional

from recipe_jsonizer.app.config import Settings, get_settings
from recipe_jsonizer.app.domain.models import Ingredient, IngredientGroup, Recipe, RecipeOverrides
from recipe_jsonizer.app.domain.vocabulary import DEFAULT_VOCABULARY, TO_TASTE_NOTE, Vocabulary
from recipe_jsonizer.services.classifier import (
    LineKind,
    classify_lines,
    detect_title,
    extract_base_servings,
    is_vague_line,
)
from recipe_jsonizer.services.ingredient_parser import parse_ingredient_line
from recipe_jsonizer.services.slugify import slugify, unique_slug
from recipe_jsonizer.services.steps import extract_steps, extract_trailing_memo, merge_memo, split_lines

logger = logging.getLogger(__name__)


def _apply_vague_fallback(ingredient: Ingredient, line: str, vocab: Vocabulary) -> Ingredient:
    if not is_vague_line(line, vocab):
        return ingredient
    return ingredient.model_copy(
        update={
            "amount": None,
            "unit": "",
            "note": ingredient.note or TO_TASTE_NOTE,
            "scalable": False,
        }
    )


def group_ingredients(
    lines: list[str],
    settings: Optional[Settings] = None,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
) -> list[IngredientGroup]:
    """Ingredient groups in order of first appearance."""
    settings = settings or get_settings()
    groups: dict[str, list[Ingredient]] = {}

    for classified in classify_lines(lines, settings, vocab):
        if classified.kind is not LineKind.INGREDIENT:
            continue
        group = classified.group or settings.default_group_name
        ingredient = parse_ingredient_line(classified.text, group, settings, vocab)
        if ingredient is None or not ingredient.name:
            continue
        groups.setdefault(group, []).append(_apply_vague_fallback(ingredient, classified.text, vocab))

    return [IngredientGroup(name=name, items=items) for name, items in groups.items()]


def build_recipe(
    raw_text: str,
    overrides: Optional[RecipeOverrides] = None,
    *,
    settings: Optional[Settings] = None,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
    now_ms: Optional[int] = None,
) -> Recipe:
    settings = settings or get_settings()
    overrides = overrides or RecipeOverrides()
    raw = raw_text or ""
    lines = split_lines(raw)

    title = (overrides.title or "").strip() or detect_title(lines) or settings.title_placeholder
    base_servings = overrides.base_servings or extract_base_servings(raw, settings.default_base_servings)
    logger.debug("Detected title=%r base_servings=%d", title, base_servings)

    ingredient_groups = group_ingredients(lines, settings, vocab)
    steps = extract_steps(raw)
    memo = merge_memo(overrides.memo, extract_trailing_memo(raw))

    recipe = Recipe(
        id=unique_slug(slugify(title, settings.slug_max_length), settings.id_suffix_digits, now_ms),
        title=title,
        base_servings=base_servings,
        tags=list(overrides.tags or []),
        ingredient_groups=ingredient_groups,
        ingredients=[item for group in ingredient_groups for item in group.items],
        steps=steps,
        memo=memo,
        source=overrides.source or "",
    )
    logger.debug(
        "Built recipe %s: %d groups, %d ingredients, %d steps",
        recipe.id,
        len(recipe.ingredient_groups),
        len(recipe.ingredients),
        len(recipe.steps),
    )
    return recipe
