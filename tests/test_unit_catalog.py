import pytest
from recipemark.core.errors import IncompatibleUnits, UnknownUnit, UnsupportedPath
from recipemark.core.units import (
    KIND_TEMPERATURE,
    KIND_VOLUME,
    SYSTEM_METRIC,
    SYSTEM_US,
    UNIT_DEFINITIONS,
    UnitDefinition,
)
from recipemark.services.unit_catalog import UnitCatalog


class TestLookup:

    def test_table_has_all_units(self, unit_catalog):
        keys = {unit.key for unit in unit_catalog.definitions}
        assert keys == {
            "TSP", "TBSP", "US_FLOZ", "US_CUP", "US_PINT", "US_QT", "US_GAL",
            "US_OZ", "US_LB", "METRIC_ML", "METRIC_L", "METRIC_G", "METRIC_KG", "F", "C",
        }

    def test_resolve_is_case_insensitive(self, unit_catalog):
        assert unit_catalog.resolve("Cups").key == "US_CUP"
        assert unit_catalog.resolve(" tbsp ").key == "TBSP"
        assert unit_catalog.resolve("°F").key == "F"
        assert unit_catalog.resolve("pounds").key == "US_LB"

    def test_unknown_spelling_and_key(self, unit_catalog):
        with pytest.raises(UnknownUnit):
            unit_catalog.resolve("handful")
        with pytest.raises(LookupError):
            unit_catalog.get("NOPE")

    def test_variations_longest_first(self, unit_catalog):
        spellings = unit_catalog.variations()
        lengths = [len(s) for s in spellings]
        assert lengths == sorted(lengths, reverse=True)
        assert spellings.index("fl oz") < spellings.index("oz")

    def test_units_of_sorted_by_factor(self, unit_catalog):
        keys = [unit.key for unit in unit_catalog.units_of(SYSTEM_METRIC, KIND_VOLUME)]
        assert keys == ["METRIC_ML", "METRIC_L"]
        us_keys = [unit.key for unit in unit_catalog.units_of(SYSTEM_US, KIND_VOLUME)]
        assert us_keys[0] == "TSP"
        assert us_keys[-1] == "US_GAL"

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError):
            UnitCatalog(UNIT_DEFINITIONS + (UNIT_DEFINITIONS[0],))

    def test_definition_factors_must_match_kind(self):
        with pytest.raises(ValueError):
            UnitDefinition("BAD", frozenset({"bad"}), "bad", SYSTEM_US, KIND_TEMPERATURE, liter_volume_factor=1.0)


class TestConvert:

    def test_volume_via_liters(self, unit_catalog):
        value, unit = unit_catalog.convert(1, unit_catalog.get("US_CUP"), unit_catalog.get("METRIC_ML"))
        assert unit.key == "METRIC_ML"
        assert value == pytest.approx(236.59)

    @pytest.mark.parametrize("source, target", [
        ("US_CUP", "METRIC_ML"),
        ("US_LB", "METRIC_G"),
        ("US_GAL", "TSP"),
        ("F", "C"),
    ])
    def test_round_trip(self, unit_catalog, source, target):
        a, b = unit_catalog.get(source), unit_catalog.get(target)
        there, _ = unit_catalog.convert(3.7, a, b)
        back, _ = unit_catalog.convert(there, b, a)
        assert back == pytest.approx(3.7)

    def test_temperature_formulas(self, unit_catalog):
        fahrenheit, celsius = unit_catalog.get("F"), unit_catalog.get("C")
        assert unit_catalog.convert(212, fahrenheit, celsius)[0] == pytest.approx(100)
        assert unit_catalog.convert(100, celsius, fahrenheit)[0] == pytest.approx(212)
        assert unit_catalog.convert(20, celsius, celsius)[0] == 20

    def test_incompatible_kinds(self, unit_catalog):
        with pytest.raises(IncompatibleUnits):
            unit_catalog.convert(1, unit_catalog.get("US_CUP"), unit_catalog.get("METRIC_G"))

    def test_unsupported_temperature_pair(self):
        kelvin = UnitDefinition("K", frozenset({"kelvin"}), "K", SYSTEM_METRIC, KIND_TEMPERATURE)
        catalog = UnitCatalog(UNIT_DEFINITIONS + (kelvin,))
        with pytest.raises(UnsupportedPath):
            catalog.convert(300, kelvin, catalog.get("C"))


class TestFindOptimalUnit:

    @pytest.mark.parametrize("key", ["TSP", "TBSP"])
    def test_spoons_are_preserved(self, unit_catalog, key):
        unit = unit_catalog.get(key)
        assert unit_catalog.find_optimal_unit(100, unit, SYSTEM_METRIC) is unit
        assert unit_catalog.find_optimal_unit(0.1, unit, SYSTEM_US) is unit

    def test_temperature_uses_canonical_unit(self, unit_catalog):
        fahrenheit = unit_catalog.get("F")
        assert unit_catalog.find_optimal_unit(350, fahrenheit, SYSTEM_METRIC).key == "C"
        assert unit_catalog.find_optimal_unit(350, fahrenheit, SYSTEM_US).key == "F"
        assert unit_catalog.find_optimal_unit(350, fahrenheit) is fahrenheit

    def test_largest_unit_at_least_one(self, unit_catalog):
        liters = unit_catalog.get("METRIC_L")
        assert unit_catalog.find_optimal_unit(1.5, liters, SYSTEM_METRIC).key == "METRIC_L"
        assert unit_catalog.find_optimal_unit(0.25, liters, SYSTEM_METRIC).key == "METRIC_ML"
        grams = unit_catalog.get("METRIC_G")
        assert unit_catalog.find_optimal_unit(1500, grams, SYSTEM_METRIC).key == "METRIC_KG"

    def test_tiny_values_fall_back_to_smallest_unit(self, unit_catalog):
        liters = unit_catalog.get("METRIC_L")
        assert unit_catalog.find_optimal_unit(0.0000001, liters, SYSTEM_METRIC).key == "METRIC_ML"

    def test_us_system(self, unit_catalog):
        cups = unit_catalog.get("US_CUP")
        assert unit_catalog.find_optimal_unit(8, cups, SYSTEM_US).key == "US_QT"

    def test_unknown_system(self, unit_catalog):
        with pytest.raises(UnknownUnit):
            unit_catalog.find_optimal_unit(1, unit_catalog.get("US_CUP"), "IMPERIAL")
