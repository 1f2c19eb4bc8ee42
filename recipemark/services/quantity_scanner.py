import math
import re
from typing import List, Pattern, Tuple

from recipemark.core.errors import InvalidArgument, RecipeMarkError
from recipemark.core.logging_config import get_logger
from recipemark.core.units import (
    CANONICAL_TEMPERATURE_UNITS,
    KIND_TEMPERATURE,
    SYSTEM_METRIC,
    UnitDefinition,
)
from recipemark.models import QuantityMatch
from recipemark.services.unit_catalog import UnitCatalog, default_catalog
from recipemark.utils.numeric_parser import build_numeric_token_pattern, format_number, parse_numeric_literal
from recipemark.utils.rounding import round_half_up, round_satisfying as round_to_satisfying

logger = get_logger(__name__)

# Decimal places kept (half-up) when converted values are not rounded satisfyingly.
UNROUNDED_PRECISION = 7
UNROUNDED_TEMPERATURE_PRECISION = 1


class QuantityScanner:
    """Finds "<number> <unit>" phrases and optionally adds metric equivalents."""

    def __init__(self, catalog: UnitCatalog = default_catalog, tolerance: float = 0.05):
        self.catalog = catalog
        self.tolerance = tolerance
        self.pattern = self._build_pattern()

    def _build_pattern(self) -> Pattern[str]:
        number = build_numeric_token_pattern().pattern
        # variations() is longest-first, so "fl oz" wins over "oz" and "gal." over "gal"
        units = "|".join(re.escape(spelling) for spelling in self.catalog.variations())
        # The unit must start on a word boundary (or at a degree sign) and end
        # before any word character, so "8 garlic" is never read as grams.
        return re.compile(rf"({number})\s*(?:\b|(?=°))({units})(?!\w)", re.IGNORECASE)

    def find(self, text: str, convert_to_metric: bool = False, round_satisfying: bool = True) -> List[QuantityMatch]:
        matches = []
        for match in self.pattern.finditer(text):
            try:
                matches.append(self._evaluate(match, convert_to_metric, round_satisfying))
            except RecipeMarkError as exc:
                logger.debug(f"Skipping quantity {match.group(0)!r}: {exc}")
        return matches

    def annotate(self, text: str, convert_to_metric: bool = False, round_satisfying: bool = True) -> str:
        """Wrap quantities in spans; with conversion, append a metric span when the unit changes."""
        def _replace(match: "re.Match[str]") -> str:
            try:
                quantity = self._evaluate(match, convert_to_metric, round_satisfying)
            except RecipeMarkError as exc:
                logger.debug(f"Leaving quantity {match.group(0)!r} unannotated: {exc}")
                return match.group(0)
            return self.render(quantity)

        return self.pattern.sub(_replace, text)

    def render(self, quantity: QuantityMatch) -> str:
        original = f"{quantity.original_unit}={format_number(quantity.original_value)}"
        html = (
            f'<span class="quantity" title="{original}" data-value="quantity:{original}">'
            f"{quantity.matched_text}</span>"
        )
        if quantity.converted_unit is None or quantity.converted_value is None:
            return html

        display_value = format_number(quantity.converted_value)
        display_name = self.catalog.get(quantity.converted_unit).display_name
        converted = f"{quantity.converted_unit}={display_value}"
        return (
            f'{html} <span class="quantity-metric" title="{converted}" data-value="quantity:{converted}">'
            f"({display_value} {display_name})</span>"
        )

    def _evaluate(self, match: "re.Match[str]", convert_to_metric: bool, round_satisfying: bool) -> QuantityMatch:
        unit = self.catalog.resolve(match.group(2))
        value = parse_numeric_literal(match.group(1))
        quantity = QuantityMatch(
            matched_text=match.group(0),
            original_unit=unit.key,
            original_value=value,
            start=match.start(),
            end=match.end()
        )
        if not convert_to_metric or unit.is_metric:
            return quantity

        converted_value, converted_unit = self.to_metric(value, unit, round_satisfying)
        if converted_unit.key != unit.key:
            quantity.converted_unit = converted_unit.key
            quantity.converted_value = converted_value
        return quantity

    def to_metric(self, value: float, unit: UnitDefinition, round_satisfying: bool = True) -> Tuple[float, UnitDefinition]:
        """Convert a US quantity into the most readable metric unit."""
        if unit.measurement_kind == KIND_TEMPERATURE:
            target = self.catalog.get(CANONICAL_TEMPERATURE_UNITS[SYSTEM_METRIC])
            converted, target = self.catalog.convert(value, unit, target)
            precision = UNROUNDED_TEMPERATURE_PRECISION
        else:
            base_value, base_unit = self.catalog.convert(value, unit, self.catalog.metric_base_unit(unit))
            optimal = self.catalog.find_optimal_unit(base_value, base_unit, SYSTEM_METRIC)
            converted, target = self.catalog.convert(base_value, base_unit, optimal)
            precision = UNROUNDED_PRECISION

        if not math.isfinite(converted):
            raise InvalidArgument(f"Converted value out of range: {value} {unit.key}")
        if round_satisfying:
            # Sub-zero Celsius values are rounded on their magnitude
            rounded = round_to_satisfying(abs(converted), self.tolerance)
            return (rounded if converted >= 0 else -rounded), target
        return round_half_up(converted, precision), target
