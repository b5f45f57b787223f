# recipe_jsonizer/services/scaling.py
from __future__ import annotations

import math
import re
from typing import Any, Optional

from recipe_jsonizer.app.config import Settings, get_settings
from recipe_jsonizer.app.domain.models import Ingredient, Number, ScaleMode
from recipe_jsonizer.app.domain.vocabulary import COUNT_UNITS

LEADING_QUANTITY = re.compile(r"^([0-9]+(?:\.[0-9]+)?)\s*(.+)$")
LITERAL_PRECISION = 9


def round_half_up(value: float, step: float) -> float:
    """Nearest multiple of step, halves rounded up."""
    if step >= 1:
        return math.floor(value / step + 0.5) * step
    inverse = round(1 / step)
    return math.floor(value * inverse + 0.5) / inverse


def round_by_unit(value: Number, unit: Optional[str]) -> Number:
    if not math.isfinite(value):
        return value
    if (unit or "") in COUNT_UNITS:
        return round_half_up(value, 0.5)
    return round_half_up(value, 0.01)


def clamp_servings(value: Any) -> Number:
    """Serving counts below 1, NaN or garbage become 1."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number) or number < 1:
        return 1
    return int(number) if number.is_integer() else number


def normalize_amount_unit(amount: Optional[Number], unit: Optional[str]) -> tuple[Optional[Number], str]:
    """
    Fold a quantity written into the unit back into the amount.

    (2, "0.7컵") -> (1.4, "컵"); (1, "1뿌리") -> (1, "뿌리").
    Without an amount the unit is left as written.
    """
    u = (unit or "").strip()
    if not u or amount is None or isinstance(amount, bool) or not math.isfinite(amount):
        return amount, unit or ""

    folded = False
    while True:
        m = LEADING_QUANTITY.match(u)
        if not m:
            break
        factor = float(m.group(1))
        pure_unit = m.group(2).strip()
        if factor == 0 or not pure_unit:
            break
        amount = amount * factor
        u = pure_unit
        folded = True

    if not folded:
        return amount, unit or ""
    return amount, u


def scale_ingredient_amount(
    ingredient: Ingredient,
    base_servings: Any,
    target_servings: Any,
    settings: Optional[Settings] = None,
) -> Optional[Number]:
    """Amount for target_servings under the ingredient's scale policy, or None for "to taste"."""
    amount, unit = normalize_amount_unit(ingredient.amount, ingredient.unit)
    if amount is None:
        return None
    if not math.isfinite(amount):
        return amount

    if not ingredient.scalable:
        # literal amount; only float noise from folding is removed
        return round(amount, LITERAL_PRECISION)

    k = clamp_servings(target_servings) / clamp_servings(base_servings)
    mode = ingredient.scale_mode

    if not mode or mode == ScaleMode.LINEAR.value:
        scaled = amount * k
    elif mode == ScaleMode.FIXED.value:
        scaled = amount
    elif mode == ScaleMode.TO_TASTE.value:
        return None
    elif mode == ScaleMode.SUBLINEAR.value:
        power = ingredient.scale_power
        if power is None:
            power = (settings or get_settings()).sublinear_power
        scaled = amount * math.pow(k, power)
    elif mode == ScaleMode.CAPPED.value:
        scaled = amount * k
        if ingredient.max_amount is not None:
            scaled = min(scaled, ingredient.max_amount)
        if ingredient.min_amount is not None:
            scaled = max(scaled, ingredient.min_amount)
    else:
        scaled = amount * k

    return round_by_unit(scaled, unit)
