import pytest
from recipemark.services.duration_scanner import DurationScanner
from recipemark.services.ingredient_matcher import IngredientMatcher
from recipemark.services.markdown_renderer import MarkdownRenderer
from recipemark.services.quantity_scanner import QuantityScanner
from recipemark.services.unit_catalog import UnitCatalog

SAMPLE_DATABASE = [
    "# sample ingredients",
    "",
    "gorgonzola [cheese]",
    "almond~",
    "red pepper flakes",
    "pepper",
    "milk",
]

@pytest.fixture
def unit_catalog():
    """Fixture for a UnitCatalog over the bundled unit table."""
    return UnitCatalog()

@pytest.fixture
def duration_scanner():
    """Fixture for DurationScanner instance."""
    return DurationScanner()

@pytest.fixture
def quantity_scanner(unit_catalog):
    """Fixture for QuantityScanner with the default tolerance."""
    return QuantityScanner(unit_catalog)

@pytest.fixture
def ingredient_matcher():
    """Fixture for IngredientMatcher loaded with a small sample database."""
    return IngredientMatcher(SAMPLE_DATABASE)

@pytest.fixture
def renderer(quantity_scanner, duration_scanner, ingredient_matcher):
    """Fixture for MarkdownRenderer with metric conversion and rounding on."""
    return MarkdownRenderer(quantity_scanner, duration_scanner, ingredient_matcher)
