"""Text-to-value helpers for free-text intake answers.

None of these helpers raise on malformed text; they return ``None`` (or an
empty list) and leave it to the caller to keep the previous value.
"""

import math
import re
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

KeywordTable = Sequence[tuple[tuple[str, ...], T]]

_NUMBER_TOKEN = re.compile(r"[0-9.]+")
_NON_NUMERIC = re.compile(r"[^0-9.]")

LB_TO_KG = 0.453592
M_TO_CM = 100.0
FT_TO_CM = 30.48
IN_TO_CM = 2.54


def split_list(text: str) -> list[str]:
    """Split a comma separated answer into trimmed, non-empty tokens."""
    return [token.strip() for token in text.split(",") if token.strip()]


def parse_number(text: str) -> float | None:
    """Parse a finite float, returning None for anything that isn't one."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def first_number(text: str) -> float | None:
    """Return the first run of digits and dots that parses as a number."""
    for token in _NUMBER_TOKEN.findall(text):
        value = parse_number(token)
        if value is not None:
            return value
    return None


def digits_only(text: str) -> int | None:
    """Concatenate every digit in the text into an integer."""
    digits = "".join(char for char in text if char.isdigit())
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # Longer than the interpreter's integer string conversion limit.
        return None


def extract_measurement(
    text: str, keywords: Sequence[str]
) -> tuple[float, str] | None:
    """Find the number written right before a unit keyword.

    Keywords are tried in order. For each one the token immediately preceding
    its first occurrence is stripped to digits and dots and parsed; the first
    keyword yielding a number wins.
    """
    for keyword in keywords:
        index = text.find(keyword)
        if index < 0:
            continue
        preceding = text[:index].split()
        if not preceding:
            continue
        value = parse_number(_NON_NUMERIC.sub("", preceding[-1]))
        if value is not None:
            return value, keyword
    return None


def to_kg(value: float, unit: str) -> float:
    """Convert a weight to kilograms."""
    if "lb" in unit:
        return value * LB_TO_KG
    return value


def to_cm(value: float, unit: str) -> float:
    """Convert a height to centimetres."""
    if unit == "m":
        return value * M_TO_CM
    if unit == "ft":
        return value * FT_TO_CM
    if unit == "in":
        return value * IN_TO_CM
    return value


def classify(text: str, table: KeywordTable[T], default: T) -> T:
    """Return the value of the first row with a keyword found in the text."""
    lowered = text.lower()
    for keywords, value in table:
        if any(keyword in lowered for keyword in keywords):
            return value
    return default


def classify_words(text: str, table: KeywordTable[T]) -> T | None:
    """Like ``classify`` but keywords must match whole words."""
    words = set(re.findall(r"[a-z][a-z-]*", text.lower()))
    for keywords, value in table:
        if any(keyword in words for keyword in keywords):
            return value
    return None


def match_members(text: str, table: KeywordTable[T]) -> list[T]:
    """Return every value whose keywords occur in the text, in table order."""
    lowered = text.lower()
    return [
        value
        for keywords, value in table
        if any(keyword in lowered for keyword in keywords)
    ]


def contains_any(values: Sequence[str], keywords: Sequence[str]) -> bool:
    """Return True when any value mentions any keyword, case-insensitively."""
    return any(
        keyword in value.lower() for value in values for keyword in keywords
    )
