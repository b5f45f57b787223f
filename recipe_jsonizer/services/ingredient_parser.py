# recipe_jsonizer/services/ingredient_parser.py
from __future__ import annotations

import re
from typing import Optional

from recipe_jsonizer.app.config import Settings, get_settings
from recipe_jsonizer.app.domain.models import Ingredient, IngredientType, Number
from recipe_jsonizer.app.domain.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from recipe_jsonizer.services.tokenizer import Token, TokenKind, parse_fraction, tokenize

PAREN_NOTE = re.compile(r"\(([^)]+)\)")
SEPARATORS = re.compile(r"[:：]")
DIGIT = re.compile(r"[0-9]")
NOTE_JOINER = " - "

_NUMERIC = (TokenKind.NUMBER, TokenKind.FRACTION)


def clean_line(line: str) -> str:
    text = re.sub(r"\t+", " ", str(line))
    return re.sub(r"\s{2,}", " ", text).strip()


def infer_ingredient_type(name: str, vocab: Vocabulary = DEFAULT_VOCABULARY) -> IngredientType:
    n = str(name).lower().strip()
    if any(word in n for word in vocab.liquid_keywords):
        return IngredientType.LIQUID
    if any(word in n for word in vocab.paste_keywords):
        return IngredientType.PASTE
    if any(word in n for word in vocab.semi_solid_keywords):
        return IngredientType.SEMI_SOLID
    return IngredientType.SOLID


def rice_spoon_note(ingredient_type: IngredientType, vocab: Vocabulary = DEFAULT_VOCABULARY) -> str:
    label = vocab.type_labels.get(ingredient_type.value, vocab.type_labels["solid"])
    return f"{vocab.rice_spoon} 기준, {label}"


def _join_note(*parts: Optional[str]) -> str:
    return NOTE_JOINER.join(p for p in parts if p)


def _has_numeric(text: str, vocab: Vocabulary) -> bool:
    return DIGIT.search(text) is not None or vocab.half_piece in text or parse_fraction(text) is not None


def _is_half(token: Token, vocab: Vocabulary) -> bool:
    return token.kind is TokenKind.KEYWORD and token.text == vocab.half_piece


def _extract_amount(tokens: list[Token], vocab: Vocabulary) -> Optional[Number]:
    if any(_is_half(t, vocab) for t in tokens):
        return 0.5
    for kind in (TokenKind.FRACTION, TokenKind.NUMBER):
        for token in tokens:
            if token.kind is kind:
                return token.value
    return None


def _attached_unit(tokens: list[Token], after: TokenKind) -> Optional[str]:
    for previous, token in zip(tokens, tokens[1:]):
        if token.kind is TokenKind.UNIT and token.attached and previous.kind is after:
            return token.text
    return None


def _extract_unit(tokens: list[Token], text: str, vocab: Vocabulary) -> str:
    unit = _attached_unit(tokens, TokenKind.FRACTION) or _attached_unit(tokens, TokenKind.NUMBER)
    if unit:
        return unit
    if any(_is_half(t, vocab) for t in tokens):
        return vocab.half_piece_unit
    words = text.split()
    return words[1] if len(words) >= 2 else ""


def _extract_name(tokens: list[Token], vocab: Vocabulary) -> str:
    head: list[str] = []
    for token in tokens:
        if token.kind in _NUMERIC:
            break
        if not _is_half(token, vocab):
            head.append(token.text)
    name = SEPARATORS.sub("", "".join(head))
    return re.sub(r"\s{2,}", " ", name).strip()


def parse_ingredient_line(
    line: str,
    group: Optional[str] = None,
    settings: Optional[Settings] = None,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
) -> Optional[Ingredient]:
    """
    Parse one ingredient-candidate line into an Ingredient.

    Lines without any usable amount are kept as non-scalable text rather
    than dropped. Returns None only for a line with nothing in it.
    """
    settings = settings or get_settings()
    clean = clean_line(line)
    if not clean:
        return None

    paren = PAREN_NOTE.search(clean)
    paren_note = paren.group(1).strip() if paren else ""
    text = PAREN_NOTE.sub("", clean).strip()

    # "후추 톡톡", "깨 왕창": keep, but never scale
    if vocab.has_vague_word(text) and not _has_numeric(text, vocab):
        words = text.split()
        first = words[0] if words else clean
        rest = text.replace(first, "", 1).strip()
        return Ingredient(
            name=first,
            amount=None,
            unit="",
            note=_join_note(group, rest),
            scalable=False,
        )

    tokens = tokenize(text, vocab)
    amount = _extract_amount(tokens, vocab)
    unit = vocab.normalize_unit(_extract_unit(tokens, text, vocab))
    name = _extract_name(tokens, vocab)
    ingredient_type = infer_ingredient_type(name, vocab)

    if amount is None:
        return Ingredient(
            name=clean,
            amount=None,
            unit="",
            note=group or "",
            scalable=False,
            ingredient_type=ingredient_type,
            approx_ml=None,
        )

    is_rice_spoon = unit == vocab.rice_spoon
    approx_ml = settings.spoon_ml_for(ingredient_type.value) * amount if is_rice_spoon else None

    return Ingredient(
        name=name or clean,
        amount=amount,
        unit=unit,
        note=_join_note(group, paren_note, rice_spoon_note(ingredient_type, vocab) if is_rice_spoon else None),
        scalable=True,
        ingredient_type=ingredient_type,
        approx_ml=approx_ml,
    )
