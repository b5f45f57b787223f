# recipe_jsonizer/services/steps.py
from __future__ import annotations

import re

from recipe_jsonizer.app.domain.models import RecipeStep

# "1. ", "2)", "10.끓인다"
STEP_MARKER = re.compile(r"^([0-9]+)[.)]\s*")


def split_lines(raw: str) -> list[str]:
    """Trimmed, non-empty lines of raw text."""
    return [line.strip() for line in re.split(r"\r?\n", raw or "") if line.strip()]


def is_step_line(line: str) -> bool:
    return STEP_MARKER.match(line) is not None


def last_step_index(lines: list[str]) -> int:
    for index in range(len(lines) - 1, -1, -1):
        if is_step_line(lines[index]):
            return index
    return -1


def extract_steps(raw: str) -> list[RecipeStep]:
    return [
        RecipeStep(text=STEP_MARKER.sub("", line, count=1).strip(), timer_sec=None)
        for line in split_lines(raw)
        if is_step_line(line)
    ]


def extract_trailing_memo(raw: str) -> str:
    """Lines after the last numbered step; empty when there are no steps."""
    lines = split_lines(raw)
    last = last_step_index(lines)
    if last < 0:
        return ""
    return "\n".join(lines[last + 1:])


def merge_memo(override_memo: str | None, trailing_memo: str) -> str:
    return "\n\n".join(part for part in (override_memo or "", trailing_memo) if part)
