import pytest

from grocery_utils.ingredients.keys import (
    KEY_RULES,
    ingredient_key,
    match_key_rule,
    strip_connectors,
)


@pytest.mark.parametrize(
    "name, expected_key",
    [
        # Pasta family
        ("penne", "pasta"),
        ("penne pasta", "pasta"),
        ("spaghetti", "pasta"),
        ("Whole Wheat Spaghetti", "pasta"),
        ("elbow macaroni", "pasta"),
        ("spaghetti squash", "spaghetti squash"),
        ("spaghetti sauce", "pasta sauce"),
        # Tomatoes
        ("tomato paste", "tomato paste"),
        ("Tomato Paste (6 oz can)", "tomato paste"),
        ("diced tomatoes", "diced tomatoes"),
        ("fresh tomatoes", "fresh tomatoes"),
        ("whole tomatoes", "whole tomatoes"),
        ("tomatoes", "tomatoes"),
        ("tomato", "tomatoes"),
        ("grape tomatoes", "cherry tomatoes"),
        ("marinara sauce", "tomato sauce"),
        # Peppers, salt
        ("red pepper flakes", "red pepper flakes"),
        ("crushed red pepper", "red pepper flakes"),
        ("red bell pepper", "red bell pepper"),
        ("red peppers", "red bell pepper"),
        ("green bell peppers", "green bell pepper"),
        ("bell pepper", "bell pepper"),
        ("salt and pepper", "salt and pepper"),
        ("kosher salt", "salt"),
        ("Freshly ground black pepper", "black pepper"),
        ("garlic salt", "garlic salt"),
        ("ground red pepper", "cayenne pepper"),
        ("cayenne", "cayenne pepper"),
        # Garlic, onion
        ("cloves of garlic", "garlic"),
        ("minced garlic", "garlic"),
        ("garlic powder", "garlic powder"),
        ("scallions", "green onions"),
        ("yellow onion", "onion"),
        ("red onions", "red onion"),
        ("onion powder", "onion powder"),
        # Cheese, oils, staples
        ("shredded mozzarella", "mozzarella cheese"),
        ("cream cheese", "cream cheese"),
        ("extra virgin olive oil", "olive oil"),
        ("toasted sesame oil", "sesame oil"),
        ("low sodium soy sauce", "soy sauce"),
        ("ground ginger", "ground ginger"),
        ("fresh ginger", "ginger"),
        ("ginger root", "ginger"),
        ("celery root", "celery root"),
        ("beet root", "beet root"),
        ("flour tortillas", "flour tortillas"),
        ("jalapenos", "jalapeno"),
        ("black beans", "black beans"),
        # Default stemming
        ("carrots", "carrot"),
        ("berries", "berry"),
        ("potatoes", "potato"),
        ("peaches", "peach"),
        ("hummus", "hummus"),
        ("asparagus", "asparagus"),
    ],
)
def test_ingredient_key(name, expected_key):
    """Test that ingredient families collapse to one key and products stay apart."""
    assert ingredient_key(name) == expected_key


def test_ingredient_key_keeps_tomato_products_apart():
    """Test that tomato paste, diced tomatoes and fresh tomatoes never merge."""
    keys = {ingredient_key(name) for name in ["tomato paste", "diced tomatoes", "fresh tomatoes"]}
    assert len(keys) == 3


@pytest.mark.parametrize("value, expected", [("", ""), ("   ", ""), (None, ""), ("(note)", "(note)")])
def test_ingredient_key_empty(value, expected):
    """Test keys for empty names and names that normalize to nothing."""
    assert ingredient_key(value) == expected


@pytest.mark.parametrize("rule", KEY_RULES, ids=[rule.name for rule in KEY_RULES])
def test_each_rule_maps_its_own_key(rule):
    """Test that no earlier rule shadows a later rule's key."""
    assert match_key_rule(rule.key) is rule


def test_rule_names_are_unique():
    """Test that key rule names are unique."""
    names = [rule.name for rule in KEY_RULES]
    assert len(names) == len(set(names))


def test_match_key_rule_returns_none_without_rule():
    """Test that names outside every family have no rule."""
    assert match_key_rule("carrots") is None


@pytest.mark.parametrize(
    "text, expected",
    [("cloves of garlic", "cloves garlic"), ("salt and pepper", "salt pepper"), ("carrots", "carrots"), ("", "")],
)
def test_strip_connectors(text, expected):
    """Test that connector words are dropped."""
    assert strip_connectors(text) == expected
