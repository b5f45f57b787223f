# recipe_jsonizer/services/slugify.py
import re
import time
from typing import Optional


def slugify(text: str, max_length: int = 40) -> str:
    """Lower-cased slug; runs of anything but letters/digits become "_"."""
    base = (text or "recipe").strip().lower()
    slug = re.sub(r"[\W_]+", "_", base).strip("_")[:max_length]
    return slug or "recipe"


def unique_slug(base: str, suffix_digits: int = 6, now_ms: Optional[int] = None) -> str:
    """Appends the low-order digits of the millisecond clock."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{base}_{str(stamp)[-suffix_digits:]}"  # ex.: 닭한마리_칼국수_482913
