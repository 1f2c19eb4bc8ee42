from typing import Dict, Iterable, List, Optional, Tuple

from recipemark.core.errors import IncompatibleUnits, UnknownUnit, UnsupportedPath
from recipemark.core.units import (
    CANONICAL_TEMPERATURE_UNITS,
    KIND_TEMPERATURE,
    MEASUREMENT_SYSTEMS,
    METRIC_BASE_UNITS,
    PRESERVED_UNIT_KEYS,
    UNIT_DEFINITIONS,
    UnitDefinition,
)


class UnitCatalog:
    """Immutable lookup and conversion over a fixed table of unit definitions."""

    def __init__(self, definitions: Iterable[UnitDefinition] = UNIT_DEFINITIONS):
        self._definitions: Tuple[UnitDefinition, ...] = tuple(definitions)
        self._by_key: Dict[str, UnitDefinition] = {}
        self._by_variation: Dict[str, UnitDefinition] = {}

        for unit in self._definitions:
            if unit.key in self._by_key:
                raise ValueError(f"Duplicate unit key: {unit.key}")
            self._by_key[unit.key] = unit
            for variation in unit.variations:
                spelling = variation.lower()
                owner = self._by_variation.get(spelling)
                if owner is not None and owner.key != unit.key:
                    raise ValueError(f"Spelling {variation!r} claimed by {owner.key} and {unit.key}")
                self._by_variation[spelling] = unit

    @property
    def definitions(self) -> Tuple[UnitDefinition, ...]:
        return self._definitions

    def get(self, key: str) -> UnitDefinition:
        try:
            return self._by_key[key]
        except KeyError:
            raise UnknownUnit(f"Unknown unit key: {key}") from None

    def resolve(self, spelling: str) -> UnitDefinition:
        """Find the unit a written spelling refers to, ignoring case and surrounding space."""
        unit = self._by_variation.get(spelling.strip().lower())
        if unit is None:
            raise UnknownUnit(f"Unknown unit spelling: {spelling}")
        return unit

    def variations(self) -> List[str]:
        """All spellings, longest first, for embedding in scanning patterns."""
        spellings = {variation for unit in self._definitions for variation in unit.variations}
        return sorted(spellings, key=lambda s: (-len(s), s))

    def units_of(self, system: str, kind: str) -> List[UnitDefinition]:
        """Units of one system and kind, smallest conversion factor first."""
        matching = [
            unit for unit in self._definitions
            if unit.measurement_system == system and unit.measurement_kind == kind
        ]
        return sorted(matching, key=lambda unit: unit.base_factor or 0.0)

    def convert(self, value: float, source: UnitDefinition, target: UnitDefinition) -> Tuple[float, UnitDefinition]:
        """Convert a value between two units of the same measurement kind.

        Raises:
            IncompatibleUnits: if the kinds differ (e.g. volume to mass).
            UnsupportedPath: for a temperature pair without a formula.
        """
        if source.measurement_kind != target.measurement_kind:
            raise IncompatibleUnits(
                f"Cannot convert {source.key} to {target.key}: "
                f"{source.measurement_kind} vs {target.measurement_kind}"
            )

        if source.measurement_kind == KIND_TEMPERATURE:
            return self._convert_temperature(value, source, target), target

        base_value = value * source.base_factor
        return base_value / target.base_factor, target

    def _convert_temperature(self, value: float, source: UnitDefinition, target: UnitDefinition) -> float:
        if source.key == target.key:
            return value
        if source.key == "F" and target.key == "C":
            return (value - 32) * 5 / 9
        if source.key == "C" and target.key == "F":
            return value * 9 / 5 + 32
        raise UnsupportedPath(f"Unsupported temperature conversion: {source.key} to {target.key}")

    def find_optimal_unit(self, value: float, current: UnitDefinition, system: Optional[str] = None) -> UnitDefinition:
        """Pick the unit that renders ``value`` most readably in ``system``.

        Notes:
            - Teaspoons and tablespoons are always kept as-is.
            - Temperatures map to the canonical unit of the requested system;
              without a system the current unit is returned.
            - Volumes and masses take the largest unit whose converted value is
              at least 1, falling back to the smallest unit for tiny amounts.
        """
        if current.key in PRESERVED_UNIT_KEYS:
            return current

        if system is not None and system not in MEASUREMENT_SYSTEMS:
            raise UnknownUnit(f"Unknown measurement system: {system}")

        if current.measurement_kind == KIND_TEMPERATURE:
            if system is None:
                return current
            return self.get(CANONICAL_TEMPERATURE_UNITS[system])

        target_system = system or current.measurement_system
        candidates = self.units_of(target_system, current.measurement_kind)
        if not candidates:
            return current

        base_value = value * current.base_factor
        optimal = candidates[0]
        for candidate in candidates:
            if base_value / candidate.base_factor >= 1:
                optimal = candidate
            else:
                break
        return optimal

    def metric_base_unit(self, unit: UnitDefinition) -> UnitDefinition:
        """Liters for volumes, kilograms for masses."""
        key = METRIC_BASE_UNITS.get(unit.measurement_kind)
        if key is None:
            raise UnsupportedPath(f"No metric base unit for {unit.measurement_kind}")
        return self.get(key)


default_catalog = UnitCatalog()
