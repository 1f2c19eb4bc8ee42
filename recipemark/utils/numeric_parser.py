import math
import re
from typing import Dict, Optional, Pattern

from recipemark.core.errors import DivisionByZero, InvalidFormat, RecipeMarkError

UNICODE_FRACTIONS: Dict[str, float] = {
    "\u00bc": 1 / 4,   # ¼
    "\u00bd": 1 / 2,   # ½
    "\u00be": 3 / 4,   # ¾
    "\u2150": 1 / 7,   # ⅐
    "\u2151": 1 / 9,   # ⅑
    "\u2152": 1 / 10,  # ⅒
    "\u2153": 1 / 3,   # ⅓
    "\u2154": 2 / 3,   # ⅔
    "\u2155": 1 / 5,   # ⅕
    "\u2156": 2 / 5,   # ⅖
    "\u2157": 3 / 5,   # ⅗
    "\u2158": 4 / 5,   # ⅘
    "\u2159": 1 / 6,   # ⅙
    "\u215a": 5 / 6,   # ⅚
    "\u215b": 1 / 8,   # ⅛
    "\u215c": 3 / 8,   # ⅜
    "\u215d": 5 / 8,   # ⅝
    "\u215e": 7 / 8,   # ⅞
}

_GLYPHS = "".join(re.escape(glyph) for glyph in UNICODE_FRACTIONS)

# Token alternatives, longest notations first.
_TOKEN_PATTERNS = (
    rf"\d+\s*[{_GLYPHS}]",   # 1½, 1 ½
    rf"[{_GLYPHS}]",         # ½
    r"\d+\s+\d+/\d+",        # 1 1/2
    r"\d+/\d+",              # 1/2
    r"\d+(?:\.\d+)?",        # 1, 1.25
)

_MIXED_UNICODE = re.compile(rf"^(\d+)\s*([{_GLYPHS}])$")
_MIXED_FRACTION = re.compile(r"^(\d+) (\d+)/(\d+)$")
_FRACTION = re.compile(r"^(\d+)/(\d+)$")
_DECIMAL = re.compile(r"^\d+(?:\.\d+)?$")


def build_numeric_token_pattern() -> Pattern[str]:
    """Compile a pattern matching one numeric token in any supported notation.

    The source is a single non-capturing group so it can be embedded in
    larger expressions via ``.pattern``.
    """
    return re.compile("(?:" + "|".join(_TOKEN_PATTERNS) + ")")


def parse_numeric_literal(text: str) -> float:
    """Parse a decimal, fraction, mixed number or Unicode fraction into a float.

    Raises:
        InvalidFormat: when the text is empty, matches no notation, or is too
            large to represent as a finite float.
        DivisionByZero: when a fraction has a zero denominator.
    """
    if not isinstance(text, str):
        raise InvalidFormat(f"Expected a string, got {type(text).__name__}")

    normalized = re.sub(r"\s+", " ", text.strip())
    if not normalized:
        raise InvalidFormat("Empty numeric literal")

    try:
        value = _parse_normalized(normalized)
    except RecipeMarkError:
        raise
    except (OverflowError, ValueError) as exc:
        # int() refuses very long digit runs, int/int overflows past float range
        raise InvalidFormat(f"Number out of range: {text[:40]}", detail=str(exc)) from exc

    if value is None:
        raise InvalidFormat(f"Invalid number format: {text}")
    if not math.isfinite(value):
        raise InvalidFormat(f"Number out of range: {text[:40]}")
    return value


def _parse_normalized(normalized: str) -> Optional[float]:
    match = _MIXED_UNICODE.match(normalized)
    if match:
        return int(match.group(1)) + UNICODE_FRACTIONS[match.group(2)]

    if normalized in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[normalized]

    match = _MIXED_FRACTION.match(normalized)
    if match:
        whole, numerator, denominator = (int(part) for part in match.groups())
        return whole + _divide(numerator, denominator, normalized)

    match = _FRACTION.match(normalized)
    if match:
        numerator, denominator = (int(part) for part in match.groups())
        return _divide(numerator, denominator, normalized)

    if _DECIMAL.match(normalized):
        return float(normalized)

    return None


def _divide(numerator: int, denominator: int, source: str) -> float:
    if denominator == 0:
        raise DivisionByZero(f"Division by zero in fraction: {source}")
    return numerator / denominator


def format_number(value: float) -> str:
    """Render a number the way annotations expect: no trailing .0 for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def normalize_numbers(text: str) -> str:
    """Replace every numeric token in free text with its decimal value.

    >>> normalize_numbers("Mix 1½ cups with 2 1/4 tsp")
    'Mix 1.5 cups with 2.25 tsp'
    """
    pattern = build_numeric_token_pattern()

    def _replace(match: "re.Match[str]") -> str:
        try:
            return format_number(parse_numeric_literal(match.group(0)))
        except (InvalidFormat, DivisionByZero):
            return match.group(0)

    return pattern.sub(_replace, text)
