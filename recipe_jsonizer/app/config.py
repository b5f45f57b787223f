from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECIPE_",
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    # Ingestion defaults
    default_group_name: str = Field(default="메인", min_length=1)
    default_base_servings: int = Field(default=3, ge=1)
    title_placeholder: str = "제목없음"
    slug_max_length: int = 40
    id_suffix_digits: int = 6
    header_max_length: int = 18
    header_suffix_max_length: int = 10

    # Rice-spoon volume per ingredient type (ml)
    spoon_ml: dict[str, float] = Field(
        default_factory=lambda: {"liquid": 10, "semi_solid": 15, "paste": 20, "solid": 15},
    )
    default_spoon_ml: float = 15

    # Scaling
    sublinear_power: float = 0.85

    # Outer surfaces
    recipes_dir: str = "public/recipes"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    def spoon_ml_for(self, ingredient_type: str | None) -> float:
        if ingredient_type is None:
            return self.default_spoon_ml
        return self.spoon_ml.get(ingredient_type, self.default_spoon_ml)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
