import math
import re
from dataclasses import dataclass
from typing import Dict, List, Pattern, Tuple

from recipemark.core.errors import RecipeMarkError
from recipemark.core.logging_config import get_logger
from recipemark.models import DurationMatch
from recipemark.utils.numeric_parser import format_number

logger = get_logger(__name__)


@dataclass(frozen=True)
class DurationUnit:
    name: str
    variations: Tuple[str, ...]
    seconds_multiplier: int


DURATION_UNITS: Tuple[DurationUnit, ...] = (
    DurationUnit("SECONDS", ("seconds", "second", "secs", "sec"), 1),
    DurationUnit("MINUTES", ("minutes", "minute", "mins", "min"), 60),
    DurationUnit("HOURS", ("hours", "hour", "hrs", "hr"), 3600),
)

_NUMBER = r"\d+(?:\.\d+)?"
_RANGE_SEPARATOR = r"(?:-|–|to)"
_RANGE_VALUE = re.compile(rf"^({_NUMBER})\s*{_RANGE_SEPARATOR}\s*({_NUMBER})$", re.IGNORECASE)
_SINGLE_VALUE = re.compile(rf"^({_NUMBER})$")


class DurationScanner:
    """Finds "5 minutes" / "35-40 minutes" / "10 to 12 minutes" phrases in text."""

    def __init__(self, units: Tuple[DurationUnit, ...] = DURATION_UNITS):
        self.multipliers: Dict[str, int] = {
            variation.lower(): unit.seconds_multiplier
            for unit in units
            for variation in unit.variations
        }
        self.pattern = self._build_pattern()

    def _build_pattern(self) -> Pattern[str]:
        # Longest spellings first so "hours" is never cut short by "hr"
        spellings = sorted(self.multipliers, key=lambda s: (-len(s), s))
        alternation = "|".join(re.escape(s) for s in spellings)
        return re.compile(
            rf"({_NUMBER}(?:\s*{_RANGE_SEPARATOR}\s*{_NUMBER})?)\s+({alternation})\b",
            re.IGNORECASE
        )

    def to_seconds(self, amount: str, unit: str) -> float:
        """Convert an amount ("5", "1.5", "35-40") in a unit to seconds; ranges use the lower bound."""
        multiplier = self.multipliers.get(unit.strip().lower())
        if multiplier is None:
            raise RecipeMarkError(f"Unknown duration unit: {unit}")

        amount = amount.strip()
        match = _RANGE_VALUE.match(amount) or _SINGLE_VALUE.match(amount)
        if not match:
            raise RecipeMarkError(f"Unparseable duration amount: {amount}")

        seconds = float(match.group(1)) * multiplier
        if not math.isfinite(seconds):
            raise RecipeMarkError(f"Duration out of range: {amount[:40]}")
        return seconds

    def find(self, text: str) -> List[DurationMatch]:
        matches = []
        for match in self.pattern.finditer(text):
            try:
                seconds = self.to_seconds(match.group(1), match.group(2))
            except RecipeMarkError as exc:
                logger.debug(f"Skipping duration {match.group(0)!r}: {exc}")
                continue
            matches.append(DurationMatch(
                matched_text=match.group(0),
                total_seconds=seconds,
                start=match.start(),
                end=match.end()
            ))
        return matches

    def annotate(self, text: str) -> str:
        """Wrap each duration phrase in a span carrying its length in seconds."""
        def _replace(match: "re.Match[str]") -> str:
            try:
                seconds = self.to_seconds(match.group(1), match.group(2))
            except RecipeMarkError as exc:
                logger.debug(f"Leaving duration {match.group(0)!r} unannotated: {exc}")
                return match.group(0)
            return render_duration(match.group(0), seconds)

        return self.pattern.sub(_replace, text)


def render_duration(matched_text: str, seconds: float) -> str:
    value = f"SEC={format_number(seconds)}"
    return f'<span class="duration" title="{value}" data-value="duration:{value}">{matched_text}</span>'
