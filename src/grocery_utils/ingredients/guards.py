"""Rules that stop unsafe ingredient matches before any fuzzy matching runs."""

import re
from types import MappingProxyType
from typing import Iterable, Tuple

from grocery_utils.ingredients.normalization import normalize_ingredient_name

# Processed or derived ingredients that may only match their own variations
SPECIALTY_INGREDIENTS = frozenset(
    {
        # Specialty flours
        "almond flour",
        "coconut flour",
        "cake flour",
        "bread flour",
        "self rising flour",
        "gluten free flour",
        "oat flour",
        "rice flour",
        # Specialty sugars
        "powdered sugar",
        "confectioners sugar",
        "coconut sugar",
        "maple sugar",
        "swerve",
        "stevia",
        "erythritol",
        "monk fruit",
        "xylitol",
        "sugar substitute",
        # Alternative milks
        "almond milk",
        "oat milk",
        "soy milk",
        "coconut milk",
        "rice milk",
        "cashew milk",
        # Compound dairy products
        "buttermilk",
        "sour cream",
        "heavy cream",
        "half and half",
        "cream cheese",
        # Vegan/diet-specific ingredients
        "vegan butter",
        "vegan cheese",
        "vegan milk",
        "vegan bacon",
        "vegan sausage",
        "plant butter",
        "plant milk",
        # Extracts and seasonings
        "vanilla extract",
        "almond extract",
        "garlic powder",
        "onion powder",
        # Baking
        "baking powder",
        "baking soda",
        "cream of tartar",
        "xanthan gum",
        # Tomato products
        "tomato paste",
        "tomato sauce",
        "crushed tomatoes",
        "diced tomatoes",
        "tomato puree",
        "sun dried tomatoes",
        "cherry tomatoes",
        "roma tomatoes",
    }
)

_TOMATO_TARGETS = ["tomato", "tomatoes", "whole tomatoes", "fresh tomatoes"]
_TOMATO_PRODUCTS = ["tomato paste", "tomato sauce", "crushed tomatoes", "diced tomatoes"]

# ingredient -> names it must never match, checked in both directions
NEVER_CROSS_MATCH = MappingProxyType(
    {
        "peanut butter": ("butter",),
        "almond butter": ("butter",),
        "green onions": ("onion", "onions"),
        "scallions": ("onion", "onions"),
        "red bell pepper": ("pepper",),
        "green bell pepper": ("pepper",),
        "red pepper flakes": ("pepper", "black pepper"),
        "buttermilk": ("milk", "butter"),
        "heavy cream": ("milk",),
        "sour cream": ("cream", "milk"),
        "cream cheese": ("cheese", "cream"),
        "vegan bacon": ("bacon",),
        "sugar substitute": ("sugar",),
        "brown sugar": ("sugar",),
        "packed brown sugar": ("sugar",),
        # Tomato products
        "tomato paste": tuple(_TOMATO_TARGETS),
        "tomato sauce": tuple(_TOMATO_TARGETS),
        "crushed tomatoes": tuple(_TOMATO_TARGETS),
        "diced tomatoes": tuple(_TOMATO_TARGETS),
        "tomato puree": tuple(_TOMATO_TARGETS),
        "sun dried tomatoes": tuple(_TOMATO_TARGETS),
        "cherry tomatoes": ("tomato", "tomatoes", "whole tomatoes"),
        "roma tomatoes": ("tomato", "tomatoes", "whole tomatoes"),
        "whole tomatoes": tuple(_TOMATO_PRODUCTS),
        "fresh tomatoes": tuple(_TOMATO_PRODUCTS),
        # Beef cuts
        "cube steaks": ("ground beef", "steak", "roast"),
        "cubed steaks": ("ground beef", "steak", "roast"),
        "ground beef": ("cube steaks", "cubed steaks", "steak", "roast"),
        "ribeye steak": ("ground beef", "chuck roast", "round steak"),
        "strip steak": ("ground beef", "chuck roast", "round steak"),
        "sirloin steak": ("ground beef", "chuck roast"),
        "chuck roast": ("steak", "ground beef"),
        "brisket": ("steak", "ground beef", "roast"),
        "short ribs": ("steak", "ground beef"),
        "stew meat": ("steak", "roast"),
        # Pork cuts
        "pork shoulder": ("pork chops", "pork tenderloin", "ground pork", "bacon"),
        "boston butt": ("pork chops", "pork tenderloin", "ground pork", "bacon"),
        "pork chops": ("ground pork", "pork shoulder", "pork belly", "bacon"),
        "pork tenderloin": ("ground pork", "pork shoulder", "pork chops", "bacon"),
        "ground pork": ("pork chops", "pork tenderloin", "pork shoulder", "bacon"),
        "pork belly": ("pork chops", "pork tenderloin", "ground pork"),
        "bacon": ("pork chops", "pork tenderloin", "ground pork", "pork shoulder"),
        "italian sausage": ("ground pork", "pork chops", "pork tenderloin"),
        "baby back ribs": ("spare ribs", "pork chops", "ground pork"),
        "spare ribs": ("baby back ribs", "pork chops", "ground pork"),
        # Poultry cuts
        "chicken breast": ("ground chicken", "chicken thighs", "chicken wings", "chicken legs"),
        "chicken thighs": ("chicken breast", "ground chicken", "chicken wings"),
        "chicken legs": ("chicken breast", "chicken thighs", "ground chicken", "chicken wings"),
        "chicken wings": ("chicken breast", "chicken thighs", "chicken legs", "ground chicken"),
        "ground chicken": ("chicken breast", "chicken thighs", "chicken legs", "chicken wings"),
        "turkey breast": ("ground turkey", "turkey thighs", "turkey legs"),
        "ground turkey": ("turkey breast", "turkey thighs", "turkey legs"),
        # Cross-species
        "pork": ("chicken", "turkey", "beef", "duck"),
        "chicken": ("pork", "beef", "turkey", "duck"),
        "turkey": ("chicken", "pork", "beef", "duck"),
        "beef": ("pork", "chicken", "turkey", "duck"),
        "duck": ("chicken", "turkey", "pork", "beef"),
    }
)

VEGAN_KEYWORDS = ("vegan", "plant", "plant based", "dairy free")
DIETARY_BASE_INGREDIENTS = ("butter", "milk", "cheese", "beef", "chicken", "sausage", "bacon")


def _normalized_specialties() -> Tuple[str, ...]:
    return tuple(
        sorted({normalize_ingredient_name(s) for s in SPECIALTY_INGREDIENTS} - {""})
    )


def _normalized_blocks() -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    # A list of pairs, not a dict: several keys share a normalized form
    # ("whole tomatoes" and "fresh tomatoes" both become "tomatoes").
    entries = []
    for ingredient, blocked in NEVER_CROSS_MATCH.items():
        key = normalize_ingredient_name(ingredient)
        targets = tuple(
            t for t in dict.fromkeys(normalize_ingredient_name(b) for b in blocked) if t
        )
        if key and targets:
            entries.append((key, targets))
    return tuple(entries)


_SPECIALTIES = _normalized_specialties()
_BLOCKS = _normalized_blocks()


def contains_as_words(text: str, terms: Iterable[str]) -> bool:
    """Check if any term exists as complete words in text.

    Args:
        text: The text to search within.
        terms: Terms to search for as complete words (not substrings).

    Returns:
        True if any term is found as a complete word, False otherwise.
    """
    for term in terms:
        if not term:
            continue
        pattern = r"\b" + re.escape(term) + r"\b"
        if re.search(pattern, text, re.IGNORECASE):
            return True
    return False


def is_specialty(name) -> bool:
    """Check if an ingredient is a specialty that only matches its own variations.

    Examples:
        >>> is_specialty("Tomato Paste (6 oz can)")
        True
        >>> is_specialty("tomatoes")
        False
    """
    normalized = normalize_ingredient_name(name)
    if not normalized:
        return False
    return contains_as_words(normalized, _SPECIALTIES)


def _blocked_one_way(first: str, second: str) -> bool:
    for key, targets in _BLOCKS:
        if not contains_as_words(first, [key]):
            continue
        # "creamy peanut butter" names the key itself, it is not a cross-match
        if contains_as_words(second, [key]):
            continue
        if contains_as_words(second, targets):
            return True
    return False


def is_blocked(first, second) -> bool:
    """Check the never-cross-match table in both directions.

    A pair is blocked when one side equals or contains a table key and the
    other side equals or contains one of that key's blocked targets. A
    blocked pair must never match, whatever any other rule says.

    Examples:
        >>> is_blocked("peanut butter", "butter")
        True
        >>> is_blocked("whole tomatoes", "tomato paste")
        True
        >>> is_blocked("peanut butter", "creamy peanut butter")
        False
    """
    first_norm = normalize_ingredient_name(first)
    second_norm = normalize_ingredient_name(second)
    if not first_norm or not second_norm:
        return False
    return _blocked_one_way(first_norm, second_norm) or _blocked_one_way(
        second_norm, first_norm
    )


def is_dietary_conflict(first, second) -> bool:
    """Check for a vegan/plant-based item paired with its animal-based counterpart."""
    first_norm = normalize_ingredient_name(first)
    second_norm = normalize_ingredient_name(second)
    if not first_norm or not second_norm:
        return False

    first_vegan = contains_as_words(first_norm, VEGAN_KEYWORDS)
    second_vegan = contains_as_words(second_norm, VEGAN_KEYWORDS)
    if first_vegan == second_vegan:
        return False

    return any(
        contains_as_words(first_norm, [base]) and contains_as_words(second_norm, [base])
        for base in DIETARY_BASE_INGREDIENTS
    )
