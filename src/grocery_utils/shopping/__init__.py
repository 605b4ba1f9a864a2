"""Shopping list aggregation, coverage and categorization."""

from .aggregation import (
    FALLBACK_MATCH_THRESHOLD,
    ShoppingListAggregator,
    aggregate,
    is_pantry_staple,
)
from .categories import KeywordCategorizer
from .coverage import COVERAGE_RULES, CoverageDecision, covers, evaluate_coverage
from .export import shopping_list_to_dataframe, write_shopping_list_csv
from .models import AggregatedIngredient, InventoryItem, Recipe, ShoppingList, Summary

__all__ = [
    "aggregate",
    "ShoppingListAggregator",
    "FALLBACK_MATCH_THRESHOLD",
    "is_pantry_staple",
    "KeywordCategorizer",
    "covers",
    "evaluate_coverage",
    "CoverageDecision",
    "COVERAGE_RULES",
    "shopping_list_to_dataframe",
    "write_shopping_list_csv",
    "Recipe",
    "InventoryItem",
    "AggregatedIngredient",
    "ShoppingList",
    "Summary",
]
