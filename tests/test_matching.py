import pytest

from grocery_utils.ingredients.guards import NEVER_CROSS_MATCH
from grocery_utils.ingredients.matching import can_match, partial_similarity
from grocery_utils.ingredients.models import MatchReason


@pytest.mark.parametrize(
    "first, second, expected_matched, expected_reason",
    [
        ("Penne", "penne", True, MatchReason.EXACT),
        ("Fresh Basil", "basil", True, MatchReason.EXACT),
        ("salt", "table salt", True, MatchReason.VARIATION),
        ("garlic", "minced garlic", True, MatchReason.VARIATION),
        ("chicken breast", "chicken breasts", True, MatchReason.VARIATION),
        ("italian seasoning", "italian seasoning blend", True, MatchReason.PARTIAL),
        ("peanut butter", "butter", False, MatchReason.BLOCKED),
        ("tomato paste", "whole tomatoes", False, MatchReason.BLOCKED),
        ("vegan butter", "butter", False, MatchReason.BLOCKED),
        ("rice", "brown rice", False, MatchReason.NONE),
        ("carrots", "celery", False, MatchReason.NONE),
        (None, "salt", False, MatchReason.NONE),
        ("salt", "", False, MatchReason.NONE),
    ],
)
def test_can_match(first, second, expected_matched, expected_reason):
    """Test each step of the match cascade and the reason it reports."""
    matched, decision = can_match(first, second)
    assert matched is expected_matched
    assert decision.reason == expected_reason
    assert bool(decision) is expected_matched


@pytest.mark.parametrize(
    "ingredient, target",
    [(ingredient, target) for ingredient, targets in NEVER_CROSS_MATCH.items() for target in targets],
)
def test_blocked_pairs_never_match(ingredient, target):
    """Test that block table pairs never match in either direction."""
    assert can_match(ingredient, target)[0] is False
    assert can_match(target, ingredient)[0] is False


@pytest.mark.parametrize(
    "specialty, other",
    [
        ("almond milk", "almond"),
        ("almond milk", "almond milk unsweetened"),
        ("vanilla extract", "vanilla"),
        ("baking powder", "baking"),
        ("coconut flour", "coconut"),
        ("cream cheese", "cream cheese spread"),
        ("tomato paste", "tomato"),
    ],
)
def test_specialty_only_matches_variations(specialty, other):
    """Test that specialty ingredients do not partially match their base words."""
    assert can_match(specialty, other)[0] is False
    assert can_match(other, specialty)[0] is False


def test_specialty_matches_its_own_variation():
    """Test that a specialty ingredient still matches a listed variation."""
    matched, decision = can_match("tomato paste", "double concentrated tomato paste")
    assert matched
    assert decision.reason == MatchReason.VARIATION


def test_partial_threshold_is_configurable():
    """Test that a stricter threshold rejects a looser containment match."""
    # 17 / 23 characters
    assert can_match("italian seasoning", "italian seasoning blend", partial_threshold=0.8)[0] is False


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("chicken breast", "chicken breasts", True),
        ("butter", "peanut butter", False),
        ("oil", "olive oil", False),
        ("cheddar", "swiss", False),
        ("lemon", "lemon", True),
    ],
)
def test_partial_similarity(first, second, expected):
    """Test containment with the default length ratio."""
    assert partial_similarity(first, second) is expected


def test_partial_similarity_threshold():
    """Test containment with an explicit threshold."""
    assert partial_similarity("italian seasoning", "italian seasoning blend", threshold=0.75) is False
    assert partial_similarity("garlic powder", "garlic powder 8oz", threshold=0.75) is True


def test_can_match_logs_decisions(caplog):
    """Test that match decisions are logged at debug level."""
    with caplog.at_level("DEBUG", logger="grocery_utils.ingredients.matching"):
        can_match("peanut butter", "butter")
    assert "never cross-match" in caplog.text
