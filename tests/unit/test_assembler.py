from __future__ import annotations

import pytest

from recipe_jsonizer.app.config import Settings
from recipe_jsonizer.app.domain.models import RecipeOverrides
from recipe_jsonizer.services.assembler import build_recipe, group_ingredients

NOW_MS = 1700000123456

CHICKEN_NOODLES = """제목: 닭한마리 칼국수
재료 3~4인분 기준
닭 닭도리탕용 1마리
감자 1개 (3~4등분)
대파 1대
양념장
고춧가루 3큰술
간장 2숟가락
다진마늘 1큰술
미원 톡톡
1. 닭을 찬물에 데친다
2. 물을 붓고 30분 끓인다
3. 양념장을 풀어 넣는다
4. 칼국수를 넣고 마무리한다
"""


@pytest.fixture
def recipe():
    return build_recipe(CHICKEN_NOODLES, now_ms=NOW_MS)


class TestBuildRecipe:
    def test_title_and_servings(self, recipe) -> None:
        assert recipe.title == "닭한마리 칼국수"
        assert recipe.base_servings == 4

    def test_id_from_title_and_clock(self, recipe) -> None:
        assert recipe.id == "닭한마리_칼국수_123456"

    def test_groups_in_order(self, recipe) -> None:
        assert [g.name for g in recipe.ingredient_groups] == ["메인", "양념장"]
        assert [i.name for i in recipe.ingredient_groups[1].items] == ["고춧가루", "간장", "다진마늘", "미원"]

    def test_flat_list_matches_groups(self, recipe) -> None:
        grouped = [i for g in recipe.ingredient_groups for i in g.items]
        assert recipe.ingredients == grouped

    def test_vague_ingredient(self, recipe) -> None:
        miwon = next(i for i in recipe.ingredients if i.name == "미원")

        assert miwon.amount is None
        assert miwon.scalable is False
        assert miwon.note == "양념장 - 톡톡"

    def test_steps_in_order(self, recipe) -> None:
        assert [s.text for s in recipe.steps] == [
            "닭을 찬물에 데친다",
            "물을 붓고 30분 끓인다",
            "양념장을 풀어 넣는다",
            "칼국수를 넣고 마무리한다",
        ]

    def test_no_trailing_memo(self, recipe) -> None:
        assert recipe.memo == ""
        assert recipe.tags == []
        assert recipe.source == ""

    def test_trailing_memo(self) -> None:
        recipe = build_recipe(CHICKEN_NOODLES + "김치랑 먹으면 맛있다\n", now_ms=NOW_MS)

        assert recipe.memo == "김치랑 먹으면 맛있다"
        assert len(recipe.steps) == 4

    def test_overrides_win(self) -> None:
        overrides = RecipeOverrides(
            title="우리집 칼국수",
            base_servings=2,
            tags=["면", "국물"],
            memo="엄마 레시피",
            source="https://example.com/kalguksu",
        )

        recipe = build_recipe(CHICKEN_NOODLES + "김치랑 먹으면 맛있다", overrides, now_ms=NOW_MS)

        assert recipe.title == "우리집 칼국수"
        assert recipe.id == "우리집_칼국수_123456"
        assert recipe.base_servings == 2
        assert recipe.tags == ["면", "국물"]
        assert recipe.memo == "엄마 레시피\n\n김치랑 먹으면 맛있다"
        assert recipe.source == "https://example.com/kalguksu"

    def test_blank_title_override_is_ignored(self) -> None:
        recipe = build_recipe(CHICKEN_NOODLES, RecipeOverrides(title="   "), now_ms=NOW_MS)

        assert recipe.title == "닭한마리 칼국수"

    @pytest.mark.parametrize("raw", ["", "   \n\n  "])
    def test_empty_text(self, raw: str) -> None:
        recipe = build_recipe(raw, now_ms=NOW_MS)

        assert recipe.title == "제목없음"
        assert recipe.base_servings == 3
        assert recipe.ingredient_groups == []
        assert recipe.ingredients == []
        assert recipe.steps == []
        assert recipe.memo == ""

    def test_first_line_is_title_without_marker(self) -> None:
        recipe = build_recipe("된장찌개\n두부 1모\n1. 끓인다", now_ms=NOW_MS)

        assert recipe.title == "된장찌개"

    def test_settings_drive_defaults(self) -> None:
        settings = Settings(default_group_name="main", default_base_servings=2, id_suffix_digits=3)

        recipe = build_recipe("두부 1모", settings=settings, now_ms=NOW_MS)

        assert recipe.base_servings == 2
        assert recipe.ingredient_groups[0].name == "main"
        assert recipe.id.endswith("_456")

    def test_document_shape(self, recipe) -> None:
        doc = recipe.to_document()

        assert set(doc) == {
            "id", "title", "base_servings", "tags", "ingredient_groups",
            "ingredients", "steps", "memo", "source",
        }
        assert doc["steps"][0] == {"text": "닭을 찬물에 데친다", "timer_sec": None}


class TestGroupIngredients:
    def test_lines_before_header_use_default_group(self) -> None:
        groups = group_ingredients(["두부 1모", "소스", "간장 1큰술", "소금 (약간)"])

        assert [g.name for g in groups] == ["메인", "소스"]
        salt = groups[1].items[1]
        assert salt.name == "소금 (약간)"
        assert salt.scalable is False
        assert salt.amount is None

    def test_empty_header_group_is_dropped(self) -> None:
        groups = group_ingredients(["두부 1모", "토핑"])

        assert [g.name for g in groups] == ["메인"]
