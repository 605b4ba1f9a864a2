import json

import pytest

from grocery_utils.shopping.categories import KeywordCategorizer


@pytest.fixture
def categorizer():
    return KeywordCategorizer()


@pytest.mark.parametrize(
    "name, expected_category",
    [
        ("tomato paste", "Canned Tomatoes"),
        ("tomatoes", "Fresh Vegetables"),
        ("pasta", "Pasta"),
        ("salt", "Spices & Seasonings"),
        ("salt and pepper", "Spices & Seasonings"),
        ("garlic", "Fresh Vegetables"),
        ("garlic powder", "Spices & Seasonings"),
        ("olive oil", "Cooking Oil"),
        ("peanut butter", "Sauces & Condiments"),
        ("butter", "Dairy"),
        ("cream cheese", "Cheese"),
        ("chicken breast", "Fresh Poultry"),
        ("ground beef", "Fresh Meat"),
        ("red bell pepper", "Fresh Vegetables"),
        ("cayenne pepper", "Spices & Seasonings"),
        ("flour tortillas", "Breads"),
        ("cilantro", "Fresh Produce"),
        ("Chicken Broth", "Soups & Broth"),
        ("dragon fruit", "Other"),
    ],
)
def test_categorize(categorizer, name, expected_category):
    """Test best matches, keyword order and the Other fallback."""
    assert categorizer.categorize(name) == expected_category


@pytest.mark.parametrize("value", ["", "   ", None, 12])
def test_categorize_invalid_name(categorizer, value):
    """Test that empty and non-string names go to Other."""
    assert categorizer.categorize(value) == "Other"


@pytest.mark.parametrize(
    "label, expected",
    [("Pasta", True), ("Other", True), ("Canned Tomatoes", True), ("Nonsense", False), (None, False)],
)
def test_is_valid_category(categorizer, label, expected):
    """Test known labels, Other and unknown labels."""
    assert categorizer.is_valid_category(label) is expected


def test_get_category_names(categorizer):
    """Test that category names are unique and end with Other."""
    names = categorizer.get_category_names()
    assert names[-1] == "Other"
    assert "Pasta" in names
    assert len(names) == len(set(names))


def test_custom_taxonomy_file(tmp_path, caplog):
    """Test loading a custom taxonomy and warning on unknown best-match labels."""
    taxonomy_file = tmp_path / "categories.json"
    taxonomy_file.write_text(
        json.dumps(
            {
                "categories": {"Snacks": ["Chips"]},
                "best_matches": {"Salsa": "Dips"},
            }
        )
    )

    with caplog.at_level("WARNING", logger="grocery_utils.shopping.categories"):
        categorizer = KeywordCategorizer(taxonomy_file=str(taxonomy_file))

    assert "unknown category 'Dips'" in caplog.text
    assert categorizer.categorize("tortilla chips") == "Snacks"
    assert categorizer.categorize("salsa") == "Dips"
    assert categorizer.get_category_names() == ["Snacks", "Other"]


def test_missing_taxonomy_file(tmp_path):
    """Test that a missing taxonomy file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        KeywordCategorizer(taxonomy_file=str(tmp_path / "missing.json"))


def test_invalid_taxonomy_file(tmp_path):
    """Test that a malformed taxonomy file raises JSONDecodeError."""
    taxonomy_file = tmp_path / "broken.json"
    taxonomy_file.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        KeywordCategorizer(taxonomy_file=str(taxonomy_file))
