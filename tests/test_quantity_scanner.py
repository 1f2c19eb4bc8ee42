import pytest
from recipemark.services.quantity_scanner import QuantityScanner


def test_original_unit_only_without_conversion(quantity_scanner):
    assert quantity_scanner.annotate("2 cups", convert_to_metric=False) == (
        '<span class="quantity" title="US_CUP=2" data-value="quantity:US_CUP=2">2 cups</span>'
    )


def test_metric_conversion_is_appended(quantity_scanner):
    html = quantity_scanner.annotate("1/2 cup milk", convert_to_metric=True)
    assert html == (
        '<span class="quantity" title="US_CUP=0.5" data-value="quantity:US_CUP=0.5">1/2 cup</span> '
        '<span class="quantity-metric" title="METRIC_ML=120" data-value="quantity:METRIC_ML=120">(120 ml)</span>'
        ' milk'
    )


def test_unrounded_conversion_keeps_precision(quantity_scanner):
    html = quantity_scanner.annotate("1/2 cup", convert_to_metric=True, round_satisfying=False)
    assert 'title="METRIC_ML=118.295"' in html
    assert "(118.295 ml)" in html


def test_metric_units_are_not_converted(quantity_scanner):
    html = quantity_scanner.annotate("500 g flour", convert_to_metric=True)
    assert 'title="METRIC_G=500"' in html
    assert "quantity-metric" not in html


def test_unit_letters_inside_words_are_ignored(quantity_scanner):
    assert quantity_scanner.annotate("8 garlic cloves") == "8 garlic cloves"
    assert quantity_scanner.annotate("2 large eggs") == "2 large eggs"
    assert 'title="METRIC_G=8"' in quantity_scanner.annotate("8 g garlic")


@pytest.mark.parametrize("text, unit, value", [
    ("1½ cups", "US_CUP", 1.5),
    ("1 1/4 tsp", "TSP", 1.25),
    ("2 fl oz", "US_FLOZ", 2),
    ("3 Tablespoons", "TBSP", 3),
    ("1.5 kg", "METRIC_KG", 1.5),
    ("350°F", "F", 350),
    ("350 °F", "F", 350),
])
def test_find_notations_and_spellings(quantity_scanner, text, unit, value):
    matches = quantity_scanner.find(f"Use {text} here")
    assert len(matches) == 1
    assert matches[0].matched_text == text
    assert matches[0].original_unit == unit
    assert matches[0].original_value == pytest.approx(value)


def test_temperature_converts_to_celsius(quantity_scanner):
    match = quantity_scanner.find("Bake at 350°F", convert_to_metric=True)[0]
    assert match.converted_unit == "C"
    assert match.converted_value == 175
    html = quantity_scanner.annotate("Bake at 350°F", convert_to_metric=True)
    assert "(175 °C)" in html


def test_mass_picks_grams(quantity_scanner):
    match = quantity_scanner.find("2 lb potatoes", convert_to_metric=True)[0]
    assert match.converted_unit == "METRIC_G"
    assert match.converted_value == 905


def test_large_volume_picks_liters(quantity_scanner):
    match = quantity_scanner.find("8 cups stock", convert_to_metric=True)[0]
    assert match.converted_unit == "METRIC_L"
    assert match.converted_value == pytest.approx(1.9)


def test_spoons_convert_to_millilitres(quantity_scanner):
    html = quantity_scanner.annotate("1 tsp vanilla", convert_to_metric=True)
    assert 'title="TSP=1"' in html
    assert "(5 ml)" in html


def test_find_without_conversion_has_no_converted_values(quantity_scanner):
    matches = quantity_scanner.find("Add 2 cups flour and 1 tsp salt")
    assert [(m.original_unit, m.original_value) for m in matches] == [("US_CUP", 2), ("TSP", 1)]
    assert all(m.converted_unit is None for m in matches)


def test_bad_number_is_left_unchanged(quantity_scanner):
    assert quantity_scanner.annotate("1/0 cup sugar", convert_to_metric=True) == "1/0 cup sugar"
    assert quantity_scanner.find("1/0 cup sugar") == []


def test_tolerance_is_applied(unit_catalog):
    loose = QuantityScanner(unit_catalog, tolerance=0.1)
    match = loose.find("1/2 cup", convert_to_metric=True)[0]
    assert match.converted_value == 120


@pytest.mark.parametrize("text", [
    "1" + "0" * 400 + "/1 cup milk, then 2 cups flour",
    "1" * 5000 + " 1/2 cup and 2 cups",
])
def test_out_of_range_number_does_not_stop_the_line(quantity_scanner, text):
    html = quantity_scanner.annotate(text, convert_to_metric=True)
    assert html.startswith(text.split(" cup")[0])
    assert html.count('class="quantity"') == 1
    assert 'title="US_CUP=2"' in html
    assert [m.original_value for m in quantity_scanner.find(text)] == [2]


def test_unrounded_conversion_rounds_ties_up(quantity_scanner):
    match = quantity_scanner.find("Chill to 34.25°F", convert_to_metric=True, round_satisfying=False)[0]
    assert match.converted_unit == "C"
    assert match.converted_value == 1.3
    html = quantity_scanner.annotate("Chill to 34.25°F", convert_to_metric=True, round_satisfying=False)
    assert "(1.3 °C)" in html
