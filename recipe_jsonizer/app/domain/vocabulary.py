# recipe_jsonizer/app/domain/vocabulary.py
"""
Closed keyword and synonym tables used by the ingestion pipeline.

The parser only reads these tables; extending the vocabulary (another
spelling of a unit, another section name) never requires touching the
parsing code.
"""
from __future__ import annotations

from dataclasses import dataclass, field

TABLESPOON = "TB"
TEASPOON = "t"
RICE_SPOON = "밥숟가락"
HALF_PIECE = "반개"
COUNT_PIECE = "개"

# raw spelling (lower-cased) -> canonical unit
UNIT_SYNONYMS: dict[str, str] = {
    # measuring spoons
    "큰술": TABLESPOON,
    "tb": TABLESPOON,
    "tbl": TABLESPOON,
    "tbsp": TABLESPOON,
    "tablespoon": TABLESPOON,
    "t": TABLESPOON,
    "작은술": TEASPOON,
    "ts": TEASPOON,
    "tsp": TEASPOON,
    "teaspoon": TEASPOON,
    # colloquial spoons, volume depends on the ingredient
    "숟가락": RICE_SPOON,
    "숟갈": RICE_SPOON,
    "스푼": RICE_SPOON,
    # weight / volume
    "kg": "kg",
    "킬로": "kg",
    "킬로그램": "kg",
    "g": "g",
    "그램": "g",
    "ml": "ml",
    "밀리": "ml",
    "밀리리터": "ml",
    "l": "L",
    "리터": "L",
    "컵": "컵",
    "cup": "컵",
    # counts
    "개": "개",
    "대": "대",
    "마리": "마리",
    "줄": "줄",
    "조각": "조각",
}

# Spellings recognised when glued to a number ("1.5리터", "1/2큰술").
# Order matters: the first spelling that matches at a position wins.
CONCATENATED_UNITS: tuple[str, ...] = (
    "리터", "L", "ml", "g", "kg", "큰술", "작은술", "tsp", "tbsp",
    "대", "개", "마리", "컵", "숟가락", "숟갈", "스푼", "T", "t", "줄", "조각",
)

# Substrings that make a region line look like an ingredient.
INGREDIENT_HINTS: tuple[str, ...] = (
    "큰술", "작은술", "tbsp", "tsp", "리터", "L", "ml", "g", "kg", "개", "대", "마리",
)

VAGUE_WORDS: tuple[str, ...] = ("톡톡", "한줌", "왕창", "취향", "취향껏", "약간", "조금", "적당량")

SECTION_KEYWORDS: tuple[str, ...] = (
    "양념장", "양념", "소스", "찍먹", "디핑", "드레싱", "마리네이드",
    "토핑", "고명", "곁들임", "사이드", "옵션", "추가", "마무리",
    "칼국수", "면", "죽", "볶음밥",
)

HEADER_SUFFIXES: tuple[str, ...] = ("장", "소스", "양념")

# Anything in here rules a line out as a section header.
HEADER_EXCLUSIONS: tuple[str, ...] = (
    "큰술", "작은술", "tbsp", "tsp", "리터", "l", "ml", "g", "kg",
    "개", "대", "마리", "한줌", "톡톡", "약간", "취향",
)

COUNT_UNITS: tuple[str, ...] = ("개", "대", "마리")

LIQUID_KEYWORDS: tuple[str, ...] = (
    "간장", "식초", "물", "기름", "참기름", "들기름", "식용유", "맛술", "청주", "소주", "물엿", "꿀", "시럽",
)
PASTE_KEYWORDS: tuple[str, ...] = ("고추장", "된장", "쌈장", "고추", "추장", "장", "버터", "마요네즈", "케첩")
SEMI_SOLID_KEYWORDS: tuple[str, ...] = (
    "다진마늘", "다진양파", "다진파", "마늘", "양파", "파", "생강", "생강가루", "고춧가루", "설탕", "소금",
)

# Korean label for each ingredient type, used in rice-spoon notes.
TYPE_LABELS: dict[str, str] = {
    "liquid": "액체",
    "paste": "점성 재료",
    "semi_solid": "반고형",
    "solid": "고체",
}

TO_TASTE_NOTE = "취향"
TO_TASTE_MARK = "[취향]"


@dataclass(frozen=True)
class Vocabulary:
    unit_synonyms: dict[str, str] = field(default_factory=lambda: dict(UNIT_SYNONYMS))
    concatenated_units: tuple[str, ...] = CONCATENATED_UNITS
    ingredient_hints: tuple[str, ...] = INGREDIENT_HINTS
    vague_words: tuple[str, ...] = VAGUE_WORDS
    section_keywords: tuple[str, ...] = SECTION_KEYWORDS
    header_suffixes: tuple[str, ...] = HEADER_SUFFIXES
    header_exclusions: tuple[str, ...] = HEADER_EXCLUSIONS
    count_units: tuple[str, ...] = COUNT_UNITS
    liquid_keywords: tuple[str, ...] = LIQUID_KEYWORDS
    paste_keywords: tuple[str, ...] = PASTE_KEYWORDS
    semi_solid_keywords: tuple[str, ...] = SEMI_SOLID_KEYWORDS
    type_labels: dict[str, str] = field(default_factory=lambda: dict(TYPE_LABELS))
    half_piece: str = HALF_PIECE
    half_piece_unit: str = COUNT_PIECE
    rice_spoon: str = RICE_SPOON
    teaspoon: str = TEASPOON

    def normalize_unit(self, raw: str | None) -> str:
        if not raw:
            return ""
        key = str(raw).strip().lower()
        return self.unit_synonyms.get(key, raw)

    def has_vague_word(self, text: str) -> bool:
        return any(word in text for word in self.vague_words)


DEFAULT_VOCABULARY = Vocabulary()
