"""Ingredient normalization, matching and amount utilities."""

from .guards import (
    NEVER_CROSS_MATCH,
    SPECIALTY_INGREDIENTS,
    contains_as_words,
    is_blocked,
    is_dietary_conflict,
    is_specialty,
)
from .keys import KEY_RULES, KeyRule, ingredient_key
from .matching import can_match, partial_similarity
from .models import MatchDecision, MatchReason, ParsedAmount, RawIngredient
from .normalization import (
    extract_ingredient_name,
    normalize_ingredient_name,
    normalize_unit,
)
from .parsing import (
    clean_ingredient_name,
    combine_amounts,
    parse_amount,
    parse_ingredient_line,
)
from .variations import (
    INGREDIENT_VARIATIONS,
    INTELLIGENT_SUBSTITUTIONS,
    Substitution,
    can_substitute,
    get_substitutions,
    get_variations,
)

__all__ = [
    "normalize_ingredient_name",
    "normalize_unit",
    "extract_ingredient_name",
    "get_variations",
    "get_substitutions",
    "can_substitute",
    "is_specialty",
    "is_blocked",
    "is_dietary_conflict",
    "contains_as_words",
    "can_match",
    "partial_similarity",
    "parse_amount",
    "combine_amounts",
    "parse_ingredient_line",
    "clean_ingredient_name",
    "ingredient_key",
    "KeyRule",
    "KEY_RULES",
    "RawIngredient",
    "ParsedAmount",
    "MatchReason",
    "MatchDecision",
    "Substitution",
    "INGREDIENT_VARIATIONS",
    "INTELLIGENT_SUBSTITUTIONS",
    "NEVER_CROSS_MATCH",
    "SPECIALTY_INGREDIENTS",
]
