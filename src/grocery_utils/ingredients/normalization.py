"""Ingredient normalization utilities."""

import re
from typing import List

# Unit normalization mapping
UNIT_MAP = {
    # Volume
    "tablespoon": [
        "tablespoon",
        "tablespoons",
        "tbsp",
        "tbsp.",
        "tbs",
        "tbl",
        "tablespoonful",
        "tablespoonfuls",
    ],
    "teaspoon": ["teaspoon", "teaspoons", "tsp", "tsp.", "teaspoonful", "teaspoonfuls"],
    "cup": ["cup", "cups", "c"],
    "fluid ounce": ["fl oz", "fl. oz.", "fluid ounce", "fluid ounces"],
    "pint": ["pint", "pints", "pt", "pt."],
    "quart": ["quart", "quarts", "qt", "qt."],
    "gallon": ["gallon", "gallons", "gal", "gal."],
    "ml": ["milliliter", "milliliters", "millilitre", "millilitres", "ml", "ml."],
    "l": ["liter", "liters", "litre", "litres", "l", "l."],
    # Weight
    "ounce": ["ounce", "ounces", "oz", "oz."],
    "pound": ["pound", "pounds", "lb", "lb.", "lbs", "lbs."],
    "g": ["gram", "grams", "g", "g."],
    "kg": ["kilogram", "kilograms", "kg", "kg."],
    # Count/measure
    "clove": ["clove", "cloves"],
    "pinch": ["pinch", "pinches"],
    "dash": ["dash", "dashes"],
    "slice": ["slice", "slices"],
    "piece": ["piece", "pieces"],
    "stick": ["stick", "sticks"],
    "bunch": ["bunch", "bunches"],
    "sprig": ["sprig", "sprigs"],
    "head": ["head", "heads"],
    "item": ["item", "items", "each", "ea"],
    "package": ["package", "packages", "pkg", "pkgs", "packet", "packets"],
    "can": ["can", "cans"],
    "jar": ["jar", "jars"],
    "box": ["box", "boxes"],
    "bag": ["bag", "bags"],
    "bottle": ["bottle", "bottles"],
    "container": ["container", "containers"],
}

# Create reverse mapping for lookup
UNIT_LOOKUP = {v: k for k, vs in UNIT_MAP.items() for v in vs}

# Size and quality words that never change what gets bought
DESCRIPTOR_WORDS = frozenset(
    {
        "organic",
        "natural",
        "pure",
        "fresh",
        "freshly",
        "raw",
        "whole",
        "fine",
        "coarse",
        "small",
        "medium",
        "large",
        "jumbo",
        "mini",
        "thick",
        "thin",
    }
)

PACKAGING_WORDS = frozenset(
    {
        "can",
        "cans",
        "jar",
        "jars",
        "bottle",
        "bottles",
        "bag",
        "bags",
        "box",
        "boxes",
        "package",
        "packages",
        "container",
        "containers",
    }
)

NORMALIZE_STOP_WORDS = DESCRIPTOR_WORDS | PACKAGING_WORDS

# Preparation words removed when pulling a name out of an ingredient line
PREPARATION_WORDS = frozenset(
    {
        "beaten",
        "melted",
        "softened",
        "minced",
        "chopped",
        "sliced",
        "grated",
        "shredded",
        "packed",
        "cold",
        "warm",
        "uncooked",
        "cooked",
        "finely",
        "roughly",
        "coarsely",
        "thinly",
        "pounded",
        "flattened",
        "tenderized",
        "marinated",
        "seasoned",
        "trimmed",
        "halved",
        "quartered",
        "peeled",
        "rinsed",
        "drained",
        "divided",
        "optional",
        "approximately",
        "about",
        "around",
    }
)

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_NON_WORD = re.compile(r"[^\w\s]")


def normalize_unit(unit: str) -> str:
    """Normalize unit names to their standard form.

    Args:
        unit: Raw unit string

    Returns:
        Normalized unit name, or the lowercased input if it is not a known alias

    Examples:
        >>> normalize_unit("Tbsp.")
        'tablespoon'
        >>> normalize_unit("lbs")
        'pound'
    """
    if not isinstance(unit, str):
        return ""
    unit = " ".join(unit.lower().split())
    if unit in UNIT_LOOKUP:
        return UNIT_LOOKUP[unit]
    unit = unit.strip(".")
    return UNIT_LOOKUP.get(unit, unit)  # Return original if not found


def _normalize_once(text: str) -> str:
    text = _PARENTHETICAL.sub(" ", text.lower())
    text = _NON_WORD.sub(" ", text)
    words = [word for word in text.split() if word not in NORMALIZE_STOP_WORDS]
    return " ".join(words)


def normalize_ingredient_name(name) -> str:
    """Canonicalize an ingredient name for matching.

    Lowercases, drops parenthetical asides, replaces punctuation with spaces,
    removes size/quality descriptors and packaging nouns, and collapses
    whitespace. The cleanup is repeated until nothing changes, so the result
    is stable under a second call.

    Args:
        name: Raw ingredient or inventory item name. Non-strings are allowed.

    Returns:
        The canonical name, or an empty string for empty or non-string input.

    Examples:
        >>> normalize_ingredient_name("Fresh Basil (about 1 bunch)")
        'basil'
        >>> normalize_ingredient_name("Organic Black Beans (15 oz can)")
        'black beans'
        >>> normalize_ingredient_name(None)
        ''
    """
    if not isinstance(name, str):
        return ""

    text = name.strip()
    while True:
        cleaned = _normalize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def extract_ingredient_name(ingredient_text) -> str:
    """Pull the purchasable item name out of a full ingredient line.

    Drops parenthetical notes, anything after the first comma (preparation
    instructions), leading quantities, units and preparation words.

    Examples:
        >>> extract_ingredient_name("2 cups onions, diced")
        'onions'
        >>> extract_ingredient_name("4 cube steaks (pounded thin)")
        'cube steaks'
        >>> extract_ingredient_name("1 1/2 lbs boneless chicken breast")
        'boneless chicken breast'
    """
    if not isinstance(ingredient_text, str):
        return ""

    text = _PARENTHETICAL.sub(" ", ingredient_text.lower())
    text = text.split(",")[0]
    text = re.sub(r"\d+\s*/\s*\d+|\d*\.\d+|\d+|[¼½¾⅓⅔⅛]", " ", text)
    text = text.replace("fl. oz.", " ").replace("fl oz", " ")
    text = _NON_WORD.sub(" ", text)

    words: List[str] = []
    for word in text.split():
        if word in PREPARATION_WORDS:
            continue
        if word in UNIT_LOOKUP and word not in PACKAGING_WORDS:
            continue
        if word in {"to", "taste", "a", "an", "of", "the", "pinch", "dash"}:
            continue
        words.append(word)

    cleaned = " ".join(words)
    return cleaned if cleaned else " ".join(ingredient_text.lower().split())
