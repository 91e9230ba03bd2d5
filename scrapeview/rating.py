"""Normalize heterogeneous rating values to a 0-5 star count."""
import math
from typing import Any

RATING_WORDS = {"one": 1, "two": 2, "three": 3, "four": 4, "five": 5}
MAX_RATING = 5


def normalize_rating(value: Any) -> int:
    """
    Map a rating to an integer between 0 and 5.

    Numbers are rounded half up and clamped. Strings are looked up in the
    word lexicon ("Three" -> 3) after trimming and lower-casing; anything
    unrecognized, missing or empty becomes 0.

    Args:
        value: Numeric rating, word token or None

    Returns:
        Integer in [0, 5]
    """
    if isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return 0
        clamped = max(0, min(MAX_RATING, value))
        return int(math.floor(clamped + 0.5))

    if not value:
        return 0

    return RATING_WORDS.get(str(value).strip().lower(), 0)


def render_stars(value: Any, filled: str = "★", empty: str = "☆") -> str:
    """Render a rating as five star glyphs."""
    count = normalize_rating(value)
    return filled * count + empty * (MAX_RATING - count)
