"""Grocery Utils - Ingredient matching and shopping list aggregation."""

__version__ = "0.1.0"

from . import ingredients, shopping

__all__ = ["ingredients", "shopping"]
