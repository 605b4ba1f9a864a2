import pytest

from grocery_utils.shopping.coverage import COVERAGE_RULES, covers, evaluate_coverage
from grocery_utils.shopping.models import InventoryItem


@pytest.mark.parametrize(
    "needed, item, expected_covered, expected_rule",
    [
        ("16 oz", InventoryItem("penne", 1, "box"), True, "pasta staple"),
        ("16 oz", InventoryItem("spaghetti", 0, "box"), False, "pasta staple"),
        ("2 tbsp", InventoryItem("olive oil", 1, "bottle"), True, "oil in small units"),
        ("1 teaspoon", InventoryItem("sesame oil", 1, "bottle"), True, "oil in small units"),
        ("to taste", InventoryItem("table salt", 1, "item"), True, "spice to taste"),
        ("1 tsp, to taste", InventoryItem("black pepper", 1, "jar"), True, "spice to taste"),
        ("4 cups", InventoryItem("flour", 5, "cups"), True, "same unit"),
        ("4 cups", InventoryItem("flour", 2, "cup"), False, "same unit"),
        ("2 lbs", InventoryItem("ground beef", 1, "pound"), False, "same unit"),
        ("1 cup", InventoryItem("olive oil", 1, "bottle"), True, "small amount"),
        ("2", InventoryItem("eggs", 1, "item"), True, "small amount"),
        ("6", InventoryItem("eggs", 12, "item"), True, "generic item"),
        ("6", InventoryItem("eggs", 0, "item"), False, "generic item"),
        ("5 lbs", InventoryItem("potatoes", 2, "bag"), False, None),
    ],
)
def test_evaluate_coverage(needed, item, expected_covered, expected_rule):
    """Test which coverage rule decides and whether the item covers the need."""
    decision = evaluate_coverage(needed, item)
    assert decision.covered is expected_covered
    assert decision.rule == expected_rule
    assert covers(needed, item) is expected_covered


@pytest.mark.parametrize(
    "needed, name, unit",
    [
        ("16 oz", "penne", "box"),
        ("2 tbsp", "olive oil", "bottle"),
        ("to taste", "sea salt", "item"),
        ("4 cups", "flour", "cups"),
        ("2 lbs", "ground beef", "lb"),
        ("1 cup", "milk", "gallon"),
        ("6", "eggs", "item"),
        ("5 lbs", "potatoes", "bag"),
        ("8 oz, 1 lb", "cheddar cheese", "oz"),
    ],
)
def test_coverage_is_monotone_in_quantity(needed, name, unit):
    """Test that adding stock never turns a covered item into an uncovered one."""
    results = [covers(needed, InventoryItem(name, quantity, unit)) for quantity in [0, 0.5, 1, 2, 5, 16, 100]]
    # Once covered, more stock never uncovers
    first_covered = results.index(True) if True in results else len(results)
    assert all(results[first_covered:])


def test_rule_names_are_unique():
    """Test that coverage rule names are unique."""
    names = [rule.name for rule in COVERAGE_RULES]
    assert len(names) == len(set(names))
