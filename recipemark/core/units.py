from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

# --- Measurement systems and kinds ---
SYSTEM_US = "US"
SYSTEM_METRIC = "METRIC"

KIND_VOLUME = "VOLUME"
KIND_MASS = "MASS"
KIND_TEMPERATURE = "TEMPERATURE"

MEASUREMENT_SYSTEMS: Tuple[str, ...] = (SYSTEM_US, SYSTEM_METRIC)
MEASUREMENT_KINDS: Tuple[str, ...] = (KIND_VOLUME, KIND_MASS, KIND_TEMPERATURE)


@dataclass(frozen=True)
class UnitDefinition:
    key: str
    variations: FrozenSet[str]
    display_name: str
    measurement_system: str
    measurement_kind: str
    liter_volume_factor: Optional[float] = None
    kilogram_mass_factor: Optional[float] = None

    def __post_init__(self) -> None:
        if self.measurement_system not in MEASUREMENT_SYSTEMS:
            raise ValueError(f"{self.key}: unknown measurement system {self.measurement_system}")
        if self.measurement_kind not in MEASUREMENT_KINDS:
            raise ValueError(f"{self.key}: unknown measurement kind {self.measurement_kind}")

        has_volume = self.liter_volume_factor is not None
        has_mass = self.kilogram_mass_factor is not None
        expected = {
            KIND_VOLUME: (True, False),
            KIND_MASS: (False, True),
            KIND_TEMPERATURE: (False, False),
        }[self.measurement_kind]
        if (has_volume, has_mass) != expected:
            raise ValueError(f"{self.key}: conversion factors do not match kind {self.measurement_kind}")

    @property
    def base_factor(self) -> Optional[float]:
        """Factor to the kind's base unit (liters or kilograms), None for temperature."""
        if self.liter_volume_factor is not None:
            return self.liter_volume_factor
        return self.kilogram_mass_factor

    @property
    def is_metric(self) -> bool:
        return self.measurement_system == SYSTEM_METRIC


def _unit(key, variations, display_name, system, kind, to_l=None, to_kg=None) -> UnitDefinition:
    return UnitDefinition(
        key=key,
        variations=frozenset(variations),
        display_name=display_name,
        measurement_system=system,
        measurement_kind=kind,
        liter_volume_factor=to_l,
        kilogram_mass_factor=to_kg,
    )


# --- Unit table ---
# Spellings are matched case-insensitively. Volume factors convert one unit to
# liters, mass factors convert one unit to kilograms.
UNIT_DEFINITIONS: Tuple[UnitDefinition, ...] = (
    # US volume
    _unit("TSP", ["teaspoons", "teaspoon", "tsp"], "teaspoons", SYSTEM_US, KIND_VOLUME, to_l=0.005),
    _unit("TBSP", ["tablespoons", "tablespoon", "tbsp"], "tablespoons", SYSTEM_US, KIND_VOLUME, to_l=0.015),
    _unit("US_FLOZ", ["fl oz", "fl. oz.", "fluid ounces", "fluid ounce"], "fl oz", SYSTEM_US, KIND_VOLUME, to_l=0.02957),
    _unit("US_CUP", ["cup", "cups"], "cup", SYSTEM_US, KIND_VOLUME, to_l=0.23659),
    _unit("US_PINT", ["pt", "pint", "pints"], "pt", SYSTEM_US, KIND_VOLUME, to_l=0.47318),
    _unit("US_QT", ["qt", "quart", "quarts"], "qt", SYSTEM_US, KIND_VOLUME, to_l=0.94635),
    _unit("US_GAL", ["gal", "gal.", "gallon", "gallons"], "gal", SYSTEM_US, KIND_VOLUME, to_l=3.78541),
    # US mass
    _unit("US_OZ", ["oz", "ounce", "ounces"], "oz", SYSTEM_US, KIND_MASS, to_kg=0.02835),
    _unit("US_LB", ["lb", "pound", "pounds"], "lb", SYSTEM_US, KIND_MASS, to_kg=0.45359),
    # Metric volume
    _unit("METRIC_ML", ["ml", "milliliter", "milliliters"], "ml", SYSTEM_METRIC, KIND_VOLUME, to_l=0.001),
    _unit("METRIC_L", ["l", "liter", "liters"], "l", SYSTEM_METRIC, KIND_VOLUME, to_l=1.0),
    # Metric mass
    _unit("METRIC_G", ["g", "gram", "grams"], "g", SYSTEM_METRIC, KIND_MASS, to_kg=0.001),
    _unit("METRIC_KG", ["kg", "kilogram", "kilograms"], "kg", SYSTEM_METRIC, KIND_MASS, to_kg=1.0),
    # Temperature (linear formulas, no factors)
    _unit("F", ["F", "°F", "Fahrenheit", "degrees Fahrenheit"], "°F", SYSTEM_US, KIND_TEMPERATURE),
    _unit("C", ["C", "°C", "Celsius", "degrees Celsius"], "°C", SYSTEM_METRIC, KIND_TEMPERATURE),
)

# Culinary units that stay as written whatever system is requested.
PRESERVED_UNIT_KEYS: FrozenSet[str] = frozenset({"TSP", "TBSP"})

# Canonical unit per system for temperatures.
CANONICAL_TEMPERATURE_UNITS = {
    SYSTEM_METRIC: "C",
    SYSTEM_US: "F",
}

# Base unit per kind for metric conversion.
METRIC_BASE_UNITS = {
    KIND_VOLUME: "METRIC_L",
    KIND_MASS: "METRIC_KG",
}
