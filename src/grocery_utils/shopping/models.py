import dataclasses
import math
from typing import Dict, List, Optional

from grocery_utils.ingredients.models import MatchReason, ParsedAmount, RawIngredient


def _to_float(value, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


@dataclasses.dataclass
class Recipe:
    title: str
    ingredients: List[RawIngredient] = dataclasses.field(default_factory=list)

    @staticmethod
    def from_dict(data: dict) -> "Recipe":
        """Build a Recipe from a dict with ``title`` and ``ingredients``.

        Ingredients may be dicts or ingredient line strings.
        """
        ingredients = data.get("ingredients") or []
        return Recipe(
            title=str(data.get("title") or data.get("name") or "Untitled Recipe"),
            ingredients=[RawIngredient.from_value(value) for value in ingredients],
        )


@dataclasses.dataclass
class InventoryItem:
    name: str
    quantity: float = 1.0
    unit: str = "item"
    location: Optional[str] = None
    expiration_date: Optional[str] = None
    brand: Optional[str] = None

    @staticmethod
    def from_dict(data: dict) -> "InventoryItem":
        """Build an InventoryItem, defaulting quantity to 1 and unit to "item".

        Examples:
            >>> InventoryItem.from_dict({"name": "Olive Oil", "quantity": "2"})
            InventoryItem(name='Olive Oil', quantity=2.0, unit='item', location=None, expiration_date=None, brand=None)
        """
        return InventoryItem(
            name=str(data.get("name") or data.get("item_name") or "").strip(),
            quantity=_to_float(data.get("quantity"), 1.0),
            unit=str(data.get("unit") or "item").strip(),
            location=data.get("location"),
            expiration_date=data.get("expiration_date"),
            brand=data.get("brand"),
        )

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclasses.dataclass
class AggregatedIngredient:
    """One row of the shopping list.

    Created on the first occurrence of a key and updated in place on later
    occurrences during a single aggregation.
    """

    key: str
    display_name: str
    amount: ParsedAmount
    unit: str = ""
    category: str = "Other"
    source_recipes: List[str] = dataclasses.field(default_factory=list)
    optional: bool = False
    instance_count: int = 1
    in_inventory: bool = False
    inventory_item: Optional[InventoryItem] = None
    match_reason: MatchReason = MatchReason.NONE
    coverage_rule: Optional[str] = None
    is_pantry_staple: bool = False
    substitution_note: Optional[str] = None

    @property
    def amount_display(self) -> str:
        return self.amount.display

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.display_name,
            "amount": self.amount_display,
            "unit": self.unit,
            "category": self.category,
            "recipes": list(self.source_recipes),
            "optional": self.optional,
            "instance_count": self.instance_count,
            "in_inventory": self.in_inventory,
            "inventory_item": self.inventory_item.to_dict() if self.inventory_item else None,
            "match_reason": self.match_reason.value,
            "coverage_rule": self.coverage_rule,
            "is_pantry_staple": self.is_pantry_staple,
            "substitution_note": self.substitution_note,
        }


@dataclasses.dataclass
class Summary:
    total_items: int = 0
    need_to_buy: int = 0
    already_have: int = 0
    categories: int = 0
    combined_count: int = 0


@dataclasses.dataclass
class ShoppingList:
    items_by_category: Dict[str, List[AggregatedIngredient]]
    summary: Summary
    recipes: List[str]

    def items(self) -> List[AggregatedIngredient]:
        """All rows, category by category."""
        return [item for items in self.items_by_category.values() for item in items]

    def to_dict(self) -> dict:
        return {
            "items_by_category": {
                category: [item.to_dict() for item in items]
                for category, items in self.items_by_category.items()
            },
            "summary": dataclasses.asdict(self.summary),
            "recipes": list(self.recipes),
        }
