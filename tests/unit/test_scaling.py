from __future__ import annotations

import math

import pytest

from recipe_jsonizer.app.config import Settings
from recipe_jsonizer.app.domain.models import Ingredient
from recipe_jsonizer.services.scaling import (
    clamp_servings,
    normalize_amount_unit,
    round_by_unit,
    round_half_up,
    scale_ingredient_amount,
)


def ing(amount, unit: str = "TB", **kwargs) -> Ingredient:
    return Ingredient(name="재료", amount=amount, unit=unit, **kwargs)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, step, expected",
        [
            (1.25, 0.5, 1.5),
            (1.24, 0.5, 1.0),
            (1.006, 0.01, 1.01),
            (145, 10, 150),
            (1.16, 0.1, 1.2),
            (2.5, 1, 3),
        ],
    )
    def test_values(self, value: float, step: float, expected: float) -> None:
        assert round_half_up(value, step) == pytest.approx(expected)

    def test_count_units_use_half_steps(self) -> None:
        assert round_by_unit(1.3333, "개") == 1.5
        assert round_by_unit(1.3333, "TB") == 1.33


class TestClampServings:
    @pytest.mark.parametrize("value", [0, -2, 0.5, None, "abc", float("nan"), float("inf")])
    def test_invalid_becomes_one(self, value) -> None:
        assert clamp_servings(value) == 1

    def test_numeric_string(self) -> None:
        assert clamp_servings("4") == 4

    def test_fractional_servings_kept(self) -> None:
        assert clamp_servings(2.5) == 2.5


class TestNormalizeAmountUnit:
    def test_folds_quantity_in_unit(self) -> None:
        amount, unit = normalize_amount_unit(2, "0.7컵")

        assert amount == pytest.approx(1.4)
        assert unit == "컵"

    def test_integer_prefix(self) -> None:
        assert normalize_amount_unit(1, "1뿌리") == (1, "뿌리")

    def test_plain_unit_untouched(self) -> None:
        assert normalize_amount_unit(2, "TB") == (2, "TB")

    def test_no_amount(self) -> None:
        assert normalize_amount_unit(None, "1뿌리") == (None, "1뿌리")

    def test_idempotent(self) -> None:
        once = normalize_amount_unit(3, "2 0.5컵")
        twice = normalize_amount_unit(*once)

        assert once[0] == pytest.approx(3.0)
        assert once[1] == "컵"
        assert twice == once


class TestScaleIngredientAmount:
    def test_linear(self) -> None:
        assert scale_ingredient_amount(ing(1), 3, 6) == 2

    def test_same_servings_is_identity(self) -> None:
        assert scale_ingredient_amount(ing(1.25), 3, 3) == 1.25

    @pytest.mark.parametrize("servings", [1, 2, 3, 7, 2.5])
    @pytest.mark.parametrize(
        "item",
        [
            ing(1.25),
            ing(1.3, "개"),
            ing(2, "0.7컵"),
            ing(1.3, scale_mode="fixed"),
            ing(1.3, "개", scale_mode="fixed"),
            ing(0.7, scale_mode="sublinear"),
            ing(3, "마리", scale_mode="sublinear", scale_power=0.5),
            ing(100, "g", scale_mode="capped", max_amount=250, min_amount=5),
            ing(2.2, "대", scale_mode="capped", max_amount=10, min_amount=1),
        ],
    )
    def test_same_servings_gives_rounded_base_amount(self, item: Ingredient, servings: float) -> None:
        amount, unit = normalize_amount_unit(item.amount, item.unit)

        assert scale_ingredient_amount(item, servings, servings) == round_by_unit(amount, unit)

    def test_round_trip_up_and_down(self) -> None:
        up = scale_ingredient_amount(ing(2), 2, 4)
        down = scale_ingredient_amount(ing(up), 4, 2)

        assert down == 2

    def test_count_unit_rounds_to_half(self) -> None:
        assert scale_ingredient_amount(ing(1, "개"), 3, 4) == 1.5

    def test_other_units_round_to_hundredths(self) -> None:
        assert scale_ingredient_amount(ing(1), 3, 4) == 1.33

    def test_unit_quantity_is_folded_before_scaling(self) -> None:
        assert scale_ingredient_amount(ing(2, "0.5컵"), 1, 2) == 2

    def test_missing_amount(self) -> None:
        assert scale_ingredient_amount(ing(None, ""), 2, 4) is None

    def test_non_scalable_ignores_servings(self) -> None:
        item = ing(2, "0.5컵", scalable=False)

        assert scale_ingredient_amount(item, 2, 8) == 1.0
        assert scale_ingredient_amount(item, 2, 1) == 1.0

    def test_non_scalable_folded_amount_is_rounded(self) -> None:
        item = ing(3, "0.1컵", scalable=False)

        assert scale_ingredient_amount(item, 2, 4) == 0.3

    def test_non_scalable_count_keeps_literal(self) -> None:
        item = ing(1.3, "개", scalable=False)

        assert scale_ingredient_amount(item, 2, 4) == 1.3

    def test_fixed(self) -> None:
        assert scale_ingredient_amount(ing(1, scale_mode="fixed"), 2, 10) == 1

    def test_to_taste(self) -> None:
        assert scale_ingredient_amount(ing(1, scale_mode="to_taste"), 2, 4) is None

    def test_sublinear_default_power(self) -> None:
        result = scale_ingredient_amount(ing(1, scale_mode="sublinear"), 1, 2)

        assert result == pytest.approx(1.8)

    def test_sublinear_power_from_settings(self) -> None:
        settings = Settings(sublinear_power=0.5)

        assert scale_ingredient_amount(ing(3, scale_mode="sublinear"), 1, 4, settings) == 6

    def test_sublinear_own_power(self) -> None:
        assert scale_ingredient_amount(ing(3, scale_mode="sublinear", scale_power=0.5), 1, 4) == 6

    def test_capped_max(self) -> None:
        item = ing(100, "g", scale_mode="capped", max_amount=250)

        assert scale_ingredient_amount(item, 2, 6) == 250

    def test_capped_min(self) -> None:
        item = ing(10, "g", scale_mode="capped", min_amount=5)

        assert scale_ingredient_amount(item, 4, 1) == 5

    def test_capped_within_bounds(self) -> None:
        item = ing(100, "g", scale_mode="capped", max_amount=250, min_amount=5)

        assert scale_ingredient_amount(item, 2, 4) == 200

    def test_unknown_mode_is_linear(self) -> None:
        assert scale_ingredient_amount(ing(1, scale_mode="exponential"), 3, 6) == 2

    def test_zero_base_servings(self) -> None:
        assert scale_ingredient_amount(ing(1), 0, 2) == 2

    @pytest.mark.parametrize("target", [0, -1, "abc", float("nan")])
    def test_invalid_target_means_one(self, target) -> None:
        assert scale_ingredient_amount(ing(2), 2, target) == 1

    def test_result_is_finite(self) -> None:
        result = scale_ingredient_amount(ing(0.3), 7, 3)

        assert result is not None and math.isfinite(result)
