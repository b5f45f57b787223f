# recipe_jsonizer/services/render.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from recipe_jsonizer.app.config import Settings
from recipe_jsonizer.app.domain.models import ImageCredit, Ingredient, Number, Recipe
from recipe_jsonizer.app.domain.vocabulary import TO_TASTE_MARK
from recipe_jsonizer.services.formatting import (
    format_amount_unit,
    format_ingredient_note,
    format_time_total,
    format_weight,
    is_weight_unit,
)
from recipe_jsonizer.services.scaling import clamp_servings, normalize_amount_unit, scale_ingredient_amount


class RenderedIngredient(BaseModel):
    name: str
    amount: Optional[Number] = None
    unit: str = ""
    amount_text: str = ""
    note: str = ""
    to_taste: bool = False
    display: str


class RenderedGroup(BaseModel):
    name: str
    items: list[RenderedIngredient] = Field(default_factory=list)


class RenderedRecipe(BaseModel):
    id: str
    title: str
    base_servings: int
    target_servings: Number
    tags: list[str] = Field(default_factory=list)
    source: str = ""
    image: Optional[str] = None
    image_credit: Optional[ImageCredit] = None
    time_total: str = ""
    groups: list[RenderedGroup] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    memo: str = ""


def format_scaled_amount(amount: Optional[Number], unit: str) -> str:
    if is_weight_unit(unit):
        return format_weight(amount, unit)
    return format_amount_unit(amount, unit)


def render_ingredient(
    ingredient: Ingredient,
    group_name: str,
    base_servings: Any,
    target_servings: Any,
    settings: Optional[Settings] = None,
) -> RenderedIngredient:
    _, unit = normalize_amount_unit(ingredient.amount, ingredient.unit)
    scaled = scale_ingredient_amount(ingredient, base_servings, target_servings, settings)
    amount_text = format_scaled_amount(scaled, unit) if scaled is not None else ""
    note = format_ingredient_note(ingredient.note, group_name)
    to_taste = not ingredient.scalable

    display = ingredient.name
    if amount_text:
        display += f": {amount_text}"
    if note:
        display += f" ({note})"
    if to_taste:
        display += f" {TO_TASTE_MARK}"

    return RenderedIngredient(
        name=ingredient.name,
        amount=scaled,
        unit=unit,
        amount_text=amount_text,
        note=note,
        to_taste=to_taste,
        display=display,
    )


def render_recipe(recipe: Recipe, target_servings: Any, settings: Optional[Settings] = None) -> RenderedRecipe:
    target = clamp_servings(target_servings)
    base = recipe.base_servings or 1
    groups = [
        RenderedGroup(
            name=name,
            items=[render_ingredient(item, name, base, target, settings) for item in items],
        )
        for name, items in recipe.display_groups()
    ]
    return RenderedRecipe(
        id=recipe.id,
        title=recipe.title,
        base_servings=base,
        target_servings=target,
        tags=list(recipe.tags),
        source=recipe.source,
        image=recipe.image,
        image_credit=recipe.image_credit,
        time_total=format_time_total(recipe.time_total_min),
        groups=groups,
        steps=[step.text for step in recipe.steps],
        memo=recipe.memo,
    )
