"""Heuristics deciding whether an inventory item covers a recipe's need.

These rules are coarse approximations, not unit conversion: an item either
obviously covers the need or it goes on the shopping list.
"""

import dataclasses
import logging
import re
from typing import Callable, Optional, Tuple

from grocery_utils.ingredients.guards import contains_as_words
from grocery_utils.ingredients.keys import PASTA_TERMS
from grocery_utils.ingredients.normalization import normalize_unit
from grocery_utils.ingredients.parsing import TO_TASTE, parse_amount
from grocery_utils.shopping.models import InventoryItem

logger = logging.getLogger(__name__)

# Needed amounts at or below this count are covered by any stocked item
SMALL_AMOUNT_THRESHOLD = 3

GENERIC_UNIT = "item"

SPICE_KEYWORDS = (
    "salt",
    "pepper",
    "paprika",
    "cumin",
    "oregano",
    "basil",
    "thyme",
    "cinnamon",
    "nutmeg",
    "chili powder",
    "garlic powder",
    "onion powder",
    "spice",
    "seasoning",
)

SMALL_UNITS = frozenset({"tablespoon", "teaspoon"})

_TO_TASTE_TEXT = re.compile(r",?\s*to taste", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class NeededAmount:
    text: str
    value: float
    unit: str
    to_taste: bool

    @staticmethod
    def from_text(needed_amount) -> "NeededAmount":
        text = " ".join(str(needed_amount or "").split())
        # "2 tbsp, to taste" still needs 2 tbsp
        parsed = parse_amount(_TO_TASTE_TEXT.sub("", text))
        return NeededAmount(
            text=text.lower(),
            value=parsed.numeric_value if parsed.is_numeric else 0.0,
            unit=parsed.unit,
            to_taste=TO_TASTE in text.lower(),
        )


@dataclasses.dataclass(frozen=True)
class CoverageRule:
    """One coverage heuristic.

    ``applies`` must not look at the item quantity; only ``satisfied`` does.
    That keeps coverage monotone in quantity.
    """

    name: str
    applies: Callable[[NeededAmount, InventoryItem], bool]
    satisfied: Callable[[NeededAmount, InventoryItem], bool]


@dataclasses.dataclass(frozen=True)
class CoverageDecision:
    covered: bool
    rule: Optional[str] = None

    def __bool__(self) -> bool:
        return self.covered


def _has_any(needed, item) -> bool:
    return item.quantity >= 1


def _is_pasta(needed, item) -> bool:
    return contains_as_words(item.name.lower(), PASTA_TERMS)


def _is_oil_in_small_units(needed, item) -> bool:
    if not contains_as_words(item.name.lower(), ["oil"]):
        return False
    if normalize_unit(needed.unit) in SMALL_UNITS:
        return True
    return contains_as_words(needed.text, ["tbsp", "tsp", "tablespoon", "tablespoons", "teaspoon", "teaspoons"])


def _is_spice_to_taste(needed, item) -> bool:
    return needed.to_taste and contains_as_words(item.name.lower(), SPICE_KEYWORDS)


def _unit_in_needed_text(needed, item) -> bool:
    unit = (item.unit or "").strip().lower()
    if not unit or unit == GENERIC_UNIT:
        return False
    if needed.unit and normalize_unit(needed.unit) == normalize_unit(unit):
        return True
    # "cup" appears in "2 cups"
    return re.search(r"\b" + re.escape(unit), needed.text) is not None


def _has_needed_quantity(needed, item) -> bool:
    return item.quantity >= needed.value


def _is_small_amount(needed, item) -> bool:
    return needed.value <= SMALL_AMOUNT_THRESHOLD


def _is_generic_unit(needed, item) -> bool:
    return (item.unit or GENERIC_UNIT).strip().lower() == GENERIC_UNIT


# The first rule that applies decides
COVERAGE_RULES: Tuple[CoverageRule, ...] = (
    CoverageRule("pasta staple", _is_pasta, _has_any),
    CoverageRule("oil in small units", _is_oil_in_small_units, _has_any),
    CoverageRule("spice to taste", _is_spice_to_taste, _has_any),
    CoverageRule("same unit", _unit_in_needed_text, _has_needed_quantity),
    CoverageRule("small amount", _is_small_amount, _has_any),
    CoverageRule("generic item", _is_generic_unit, _has_any),
)


def evaluate_coverage(needed_amount, item) -> CoverageDecision:
    """Decide whether an inventory item satisfies a needed amount.

    Args:
        needed_amount: The amount text the recipes need, e.g. "2 cups" or
            "1 tsp, to taste".
        item: An InventoryItem (or anything with name, quantity and unit).

    Returns:
        A CoverageDecision naming the rule that decided, or an uncovered
        decision with no rule when none applies.

    Examples:
        >>> evaluate_coverage("16 oz", InventoryItem("penne", quantity=1, unit="box"))
        CoverageDecision(covered=True, rule='pasta staple')
    """
    needed = NeededAmount.from_text(needed_amount)
    for rule in COVERAGE_RULES:
        if rule.applies(needed, item):
            covered = bool(rule.satisfied(needed, item))
            logger.debug(
                f"[COVERAGE] '{item.name}' ({item.quantity} {item.unit}) for "
                f"'{needed.text}' -> {covered} via {rule.name}"
            )
            return CoverageDecision(covered, rule.name)

    logger.debug(f"[COVERAGE] '{item.name}' for '{needed.text}' -> no rule applies")
    return CoverageDecision(False)


def covers(needed_amount, item) -> bool:
    """Return True if the item covers the needed amount."""
    return evaluate_coverage(needed_amount, item).covered
