# recipe_jsonizer/app/domain/models.py
"""
Recipe document models.

These mirror the persisted JSON document one to one; field names are the
JSON keys except where an alias says otherwise.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class ScaleMode(str, Enum):
    """How an ingredient amount follows the serving count."""
    LINEAR = "linear"
    SUBLINEAR = "sublinear"
    CAPPED = "capped"
    FIXED = "fixed"
    TO_TASTE = "to_taste"


class IngredientType(str, Enum):
    """Physical form of an ingredient, used for rice-spoon volumes."""
    LIQUID = "liquid"
    PASTE = "paste"
    SEMI_SOLID = "semi_solid"
    SOLID = "solid"


_OPTIONAL_INGREDIENT_KEYS = ("scale_mode", "scale_power", "max_amount", "min_amount")
_OPTIONAL_RECIPE_KEYS = ("time_total_min", "image", "imageCredit")


def _finite_or_none(value: Optional[Number]) -> Optional[Number]:
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class Ingredient(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    amount: Optional[Number] = None  # None means "to taste", not zero
    unit: str = ""
    note: str = ""
    scalable: bool = True
    ingredient_type: Optional[IngredientType] = None
    approx_ml: Optional[Number] = None

    # Scale policy extension, all optional
    scale_mode: Optional[str] = None
    scale_power: Optional[float] = None
    max_amount: Optional[float] = None
    min_amount: Optional[float] = None

    @field_validator("unit", "note", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("amount", "approx_ml", mode="after")
    @classmethod
    def _drop_non_finite(cls, value: Optional[Number]) -> Optional[Number]:
        return _finite_or_none(value)


class IngredientGroup(BaseModel):
    name: str = Field(min_length=1)
    items: list[Ingredient] = Field(default_factory=list)


class RecipeStep(BaseModel):
    text: str
    timer_sec: Optional[int] = None  # reserved, parsing never fills it


class ImageCredit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str = ""
    source_url: str = Field(default="", alias="sourceUrl")
    creator: str = ""
    license: str = ""
    license_url: str = Field(default="", alias="licenseUrl")


class RecipeOverrides(BaseModel):
    """Caller-supplied values that win over whatever the text says."""
    title: Optional[str] = None
    base_servings: Optional[int] = Field(default=None, ge=1)
    tags: Optional[list[str]] = None
    memo: Optional[str] = None
    source: Optional[str] = None


class Recipe(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str = Field(min_length=1)
    base_servings: int = Field(default=1, ge=1)
    tags: list[str] = Field(default_factory=list)
    ingredient_groups: list[IngredientGroup] = Field(default_factory=list)
    ingredients: list[Ingredient] = Field(default_factory=list)  # flat view for older readers
    steps: list[RecipeStep] = Field(default_factory=list)
    memo: str = ""
    source: str = ""

    time_total_min: Optional[float] = None
    image: Optional[str] = None
    image_credit: Optional[ImageCredit] = Field(default=None, alias="imageCredit")

    @field_validator("base_servings", mode="before")
    @classmethod
    def _default_servings(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("memo", "source", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def display_groups(self) -> list[tuple[str, list[Ingredient]]]:
        """Groups to show; documents written before grouping get one unnamed group."""
        if self.ingredient_groups:
            return [(group.name, group.items) for group in self.ingredient_groups]
        if self.ingredients:
            return [("", self.ingredients)]
        return []

    def all_ingredients(self) -> list[Ingredient]:
        return [item for _, items in self.display_groups() for item in items]

    def to_document(self) -> dict[str, Any]:
        doc = self.model_dump(mode="json", by_alias=True)
        for key in _OPTIONAL_RECIPE_KEYS:
            if doc.get(key) is None:
                doc.pop(key, None)
        for group in doc["ingredient_groups"]:
            for item in group["items"]:
                _drop_absent_extensions(item)
        for item in doc["ingredients"]:
            _drop_absent_extensions(item)
        return doc


def _drop_absent_extensions(item: dict[str, Any]) -> None:
    for key in _OPTIONAL_INGREDIENT_KEYS:
        if item.get(key) is None:
            item.pop(key, None)
