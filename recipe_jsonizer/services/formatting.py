# recipe_jsonizer/services/formatting.py
"""
Display strings for amounts, weights, notes and cooking time.

Everything here is a pure function of its arguments.
"""
from __future__ import annotations

import math
import re
from typing import Any, Optional

from recipe_jsonizer.app.domain.models import Number
from recipe_jsonizer.app.domain.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from recipe_jsonizer.services.scaling import round_half_up

WEIGHT_UNITS = ("g", "kg")
SPOON_TO_TEASPOON = 2  # 1 rice spoon shown as 2t

_TYPE_LABEL_PATTERN = r"(고체|액체|반고형|점성\s*재료|페이스트)"
_INNER_SPOON_NOTE = re.compile(r"\s*-\s*밥숟가락\s*기준,\s*" + _TYPE_LABEL_PATTERN + r"\s*", re.IGNORECASE)
_LEADING_SPOON_NOTE = re.compile(r"^밥숟가락\s*기준,\s*" + _TYPE_LABEL_PATTERN + r"\s*", re.IGNORECASE)


def format_number(value: Any) -> str:
    """2.0 -> "2", 0.5 -> "0.5"."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_amount_unit(
    amount: Optional[Number],
    unit: Optional[str],
    vocab: Vocabulary = DEFAULT_VOCABULARY,
) -> str:
    if amount is None:
        return ""
    u = (unit or "").strip()

    if u == vocab.rice_spoon:
        if not math.isfinite(amount):
            return f"{format_number(amount)}숟가락"
        if amount >= 1:
            return f"{format_number(amount)}숟가락"
        # under one spoon: teaspoons, nearest 0.5t, at least 0.5t
        teaspoons = round_half_up(amount * SPOON_TO_TEASPOON, 0.5)
        teaspoons = max(0.5, teaspoons) if amount > 0 else 0
        return f"{format_number(teaspoons)}{vocab.teaspoon}"

    return f"{format_number(amount)}{u}"


def is_weight_unit(unit: Optional[str]) -> bool:
    return (unit or "").strip().lower() in WEIGHT_UNITS


def format_weight(amount: Optional[Number], unit: Optional[str]) -> str:
    """
    Gram/kilogram display with step rounding.

    >= 1000g shows kilograms (1kg steps from 5kg, else 0.1kg); below that
    0.5g steps under 30g, 1g steps up to 100g, 10g steps above; a gram
    value that rounds up to 1000g is shown as kilograms.
    Other units fall through to format_amount_unit.
    """
    if amount is None:
        return ""
    if not is_weight_unit(unit) or not math.isfinite(amount):
        return format_amount_unit(amount, unit)

    grams = amount * 1000 if unit.strip().lower() == "kg" else amount
    if grams == 0:
        return "0g"

    if grams < 1000:
        if grams < 30:
            step = 0.5
        elif grams < 100:
            step = 1
        else:
            step = 10
        grams = round_half_up(grams, step)
        if grams < 1000:
            return f"{format_number(grams)}g"

    kilograms = grams / 1000
    step = 1 if kilograms >= 5 else 0.1
    return f"{format_number(round_half_up(kilograms, step))}kg"


def format_ingredient_note(raw_note: Optional[str], group_name: Optional[str] = None) -> str:
    """Drop the group prefix and rice-spoon hint that parsing wrote into a note."""
    note = (raw_note or "").strip()
    if not note:
        return ""

    cleaned = note
    if group_name:
        cleaned = re.sub(rf"^{re.escape(group_name)}\s*-\s*", "", cleaned)

    cleaned = _INNER_SPOON_NOTE.sub("", cleaned)
    cleaned = _LEADING_SPOON_NOTE.sub("", cleaned).strip()

    if group_name and cleaned in (group_name, ""):
        return ""
    return cleaned


def format_time_total(minutes: Any) -> str:
    if minutes is None:
        return ""
    try:
        m = float(minutes)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(m) or m <= 0:
        return ""

    hours = int(m // 60)
    mins = int(round_half_up(m % 60, 1))
    if hours > 0 and mins > 0:
        return f"약 {hours}시간 {mins}분"
    if hours > 0:
        return f"약 {hours}시간"
    return f"약 {mins}분"
