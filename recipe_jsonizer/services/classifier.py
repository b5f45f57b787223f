# recipe_jsonizer/services/classifier.py
"""
Line-level classification of hand-typed recipe text.

Positional rules decide the coarse region (title marker, ingredient region
before the first numbered step, steps, trailing memo); lexical rules decide
what a line inside the ingredient region is.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from recipe_jsonizer.app.config import Settings, get_settings
from recipe_jsonizer.app.domain.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from recipe_jsonizer.services.steps import is_step_line, last_step_index
from recipe_jsonizer.services.tokenizer import parse_fraction

logger = logging.getLogger(__name__)

TITLE_MARKER = re.compile(r"^제목\s*[:：]\s*")
TRAILING_SEPARATOR = re.compile(r"\s*[:：]\s*$")
SERVINGS_RANGE = re.compile(r"([0-9]+)\s*[~-]\s*([0-9]+)\s*인분")
SERVINGS_SINGLE = re.compile(r"([0-9]+)\s*인분")
DIGIT = re.compile(r"[0-9]")


class LineKind(str, Enum):
    TITLE = "title"
    HEADER = "header"
    INGREDIENT = "ingredient"
    STEP = "step"
    MEMO = "memo"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ClassifiedLine:
    index: int
    text: str
    kind: LineKind
    group: Optional[str] = None  # header name for HEADER, owning group for INGREDIENT


def is_title_line(line: str) -> bool:
    return TITLE_MARKER.match(line) is not None


def detect_title(lines: list[str]) -> str:
    for line in lines:
        if is_title_line(line):
            return TITLE_MARKER.sub("", line, count=1).strip()
    return lines[0].strip() if lines else ""


def extract_base_servings(raw: str, default: int = 3) -> int:
    """Servings declared anywhere in the text; upper bound for "3~4인분"."""
    text = raw or ""
    m = SERVINGS_RANGE.search(text)
    if m:
        return max(1, int(m.group(2)))
    m = SERVINGS_SINGLE.search(text)
    if m:
        return max(1, int(m.group(1)))
    return default


def _contains_any(text: str, words: tuple[str, ...], ignore_case: bool = False) -> bool:
    if ignore_case:
        lowered = text.lower()
        return any(word.lower() in lowered for word in words)
    return any(word in text for word in words)


def clean_header_text(line: str) -> str:
    return TRAILING_SEPARATOR.sub("", line).strip()


def detect_section_header(
    line: str,
    settings: Optional[Settings] = None,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
) -> Optional[str]:
    """Group name if the line labels an ingredient section, else None."""
    settings = settings or get_settings()
    text = clean_header_text(line)

    if not text:
        return None
    if len(text) > settings.header_max_length:
        return None
    if DIGIT.search(text):
        return None
    if _contains_any(text, vocab.header_exclusions, ignore_case=True):
        return None

    if _contains_any(text, vocab.section_keywords):
        return text
    if len(text) <= settings.header_suffix_max_length and text.endswith(vocab.header_suffixes):
        return text
    return None


def looks_like_ingredient(line: str, vocab: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return (
        "\t" in line
        or DIGIT.search(line) is not None
        or vocab.half_piece in line
        or _contains_any(line, vocab.ingredient_hints, ignore_case=True)
        or vocab.has_vague_word(line)
    )


def is_vague_line(line: str, vocab: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    """Vague keyword present and nothing numeric anywhere in the line."""
    return (
        vocab.has_vague_word(line)
        and DIGIT.search(line) is None
        and vocab.half_piece not in line
        and parse_fraction(line) is None
    )


def classify_lines(
    lines: list[str],
    settings: Optional[Settings] = None,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
) -> list[ClassifiedLine]:
    settings = settings or get_settings()
    last_step = last_step_index(lines)
    in_ingredient_region = True
    group = settings.default_group_name
    out: list[ClassifiedLine] = []

    for index, line in enumerate(lines):
        if is_step_line(line):
            in_ingredient_region = False
            out.append(ClassifiedLine(index, line, LineKind.STEP))
            continue
        if 0 <= last_step < index:
            out.append(ClassifiedLine(index, line, LineKind.MEMO))
            continue
        if not in_ingredient_region:
            # unnumbered line between numbered steps
            out.append(ClassifiedLine(index, line, LineKind.SKIPPED))
            continue
        if is_title_line(line):
            out.append(ClassifiedLine(index, line, LineKind.TITLE))
            continue

        header = detect_section_header(line, settings, vocab)
        if header:
            group = header
            logger.debug("Section header at line %d: %s", index, header)
            out.append(ClassifiedLine(index, line, LineKind.HEADER, group=header))
            continue

        if looks_like_ingredient(line, vocab):
            out.append(ClassifiedLine(index, line, LineKind.INGREDIENT, group=group))
        else:
            logger.debug("Discarding non-ingredient line %d: %r", index, line)
            out.append(ClassifiedLine(index, line, LineKind.SKIPPED))

    return out
