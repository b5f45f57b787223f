# recipe_jsonizer/services/tokenizer.py
"""
Tagged token stream for a single ingredient line.

A line such as "치킨스톡 1/2큰술" becomes
TEXT("치킨스톡 ") FRACTION("1/2") UNIT("큰술", attached). The parser reads
amounts, units and names off this stream instead of running one regex per
question, so precedence between competing readings is decided in one place.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

from recipe_jsonizer.app.domain.vocabulary import DEFAULT_VOCABULARY, Vocabulary

FRACTION_PATTERN = re.compile(r"([0-9]+)\s*/\s*([0-9]+)")
NUMBER_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class TokenKind(str, Enum):
    NUMBER = "NUMBER"
    FRACTION = "FRACTION"
    UNIT = "UNIT"
    KEYWORD = "KEYWORD"
    TEXT = "TEXT"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    value: Optional[float] = None
    attached: bool = False  # UNIT glued to the preceding NUMBER/FRACTION


@lru_cache(maxsize=8)
def _alternation(words: tuple[str, ...], longest_first: bool) -> Optional[re.Pattern[str]]:
    if not words:
        return None
    ordered = sorted(words, key=len, reverse=True) if longest_first else list(words)
    return re.compile("|".join(re.escape(w) for w in ordered), re.IGNORECASE)


def parse_fraction(text: str) -> Optional[float]:
    """Value of the first "a/b" in text, or None (also for b == 0)."""
    m = FRACTION_PATTERN.search(text)
    if not m:
        return None
    denominator = int(m.group(2))
    if not denominator:
        return None
    return int(m.group(1)) / denominator


def _number_value(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


def tokenize(text: str, vocab: Vocabulary = DEFAULT_VOCABULARY) -> list[Token]:
    units = _alternation(vocab.concatenated_units, longest_first=False)
    keywords = _alternation((vocab.half_piece, *vocab.vague_words), longest_first=True)

    tokens: list[Token] = []
    pending_text: list[str] = []
    pos = 0

    def flush() -> None:
        if pending_text:
            tokens.append(Token(TokenKind.TEXT, "".join(pending_text)))
            pending_text.clear()

    while pos < len(text):
        fraction = FRACTION_PATTERN.match(text, pos)
        if fraction and not int(fraction.group(2)):
            fraction = None
        number = None if fraction else NUMBER_PATTERN.match(text, pos)
        numeric = fraction or number
        if numeric:
            flush()
            if fraction:
                value = int(fraction.group(1)) / int(fraction.group(2))
                tokens.append(Token(TokenKind.FRACTION, fraction.group(0), value))
            else:
                tokens.append(Token(TokenKind.NUMBER, number.group(0), _number_value(number.group(0))))
            pos = numeric.end()
            unit = units.match(text, pos) if units else None
            if unit:
                tokens.append(Token(TokenKind.UNIT, unit.group(0), attached=True))
                pos = unit.end()
            continue

        keyword = keywords.match(text, pos) if keywords else None
        if keyword:
            flush()
            tokens.append(Token(TokenKind.KEYWORD, keyword.group(0)))
            pos = keyword.end()
            continue

        pending_text.append(text[pos])
        pos += 1

    flush()
    return tokens
