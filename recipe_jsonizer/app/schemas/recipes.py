from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from recipe_jsonizer.app.domain.models import RecipeOverrides


class ConvertRequest(BaseModel):
    text: str
    title: Optional[str] = None
    base_servings: Optional[int] = Field(default=None, ge=1)
    tags: list[str] = Field(default_factory=list)
    memo: Optional[str] = None
    source: Optional[str] = None

    def to_overrides(self) -> RecipeOverrides:
        return RecipeOverrides(
            title=self.title,
            base_servings=self.base_servings,
            tags=[t.strip() for t in self.tags if t and t.strip()],
            memo=self.memo,
            source=self.source,
        )


class ScaleRequest(BaseModel):
    recipe: dict[str, Any]
    target_servings: Optional[float] = None


class RecipeSummary(BaseModel):
    id: str
    title: str
    base_servings: int
    tags: list[str] = Field(default_factory=list)
