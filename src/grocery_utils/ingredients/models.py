import dataclasses
import enum
from typing import Optional

from grocery_utils.ingredients.number_utils import format_quantity


@dataclasses.dataclass(frozen=True)
class RawIngredient:
    """An ingredient entry as authored in a recipe."""

    name: str
    amount: str = ""
    unit: str = ""
    optional: bool = False

    @staticmethod
    def from_value(value) -> "RawIngredient":
        """Build a RawIngredient from a dict or an ingredient line string.

        Extra dict keys are ignored. A plain string such as
        ``"2 cups diced onions"`` is split into amount, unit and name.

        Examples:
            >>> RawIngredient.from_value({"name": "penne", "amount": 8, "unit": "oz"})
            RawIngredient(name='penne', amount='8', unit='oz', optional=False)
            >>> RawIngredient.from_value("1/2 cup sugar")
            RawIngredient(name='sugar', amount='1/2', unit='cup', optional=False)
        """
        if isinstance(value, RawIngredient):
            return value
        if isinstance(value, str):
            # Imported here, parsing builds on this module.
            from grocery_utils.ingredients.parsing import parse_ingredient_line

            return parse_ingredient_line(value)
        if not isinstance(value, dict):
            return RawIngredient(name="")

        amount = value.get("amount")
        if amount is None:
            amount = value.get("quantity", "")
        if isinstance(amount, (int, float)) and not isinstance(amount, bool):
            amount = format_quantity(amount)
        return RawIngredient(
            name=str(value.get("name") or "").strip(),
            amount=str(amount or "").strip(),
            unit=str(value.get("unit") or "").strip(),
            optional=bool(value.get("optional", False)),
        )


@dataclasses.dataclass(frozen=True)
class ParsedAmount:
    """A structured quantity derived from free amount text.

    ``is_composite`` marks a display-only amount made by joining amounts
    that could not be summed; it is never summed again.
    """

    raw_text: str
    numeric_value: float = 0.0
    unit: str = ""
    is_to_taste: bool = False
    is_numeric: bool = False
    is_composite: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.raw_text.strip() and not self.is_numeric

    @property
    def display(self) -> str:
        if self.is_composite:
            return self.raw_text
        if self.is_to_taste:
            return "to taste"
        if self.is_numeric:
            quantity = format_quantity(self.numeric_value)
            return f"{quantity} {self.unit}".strip()
        return self.raw_text.strip()

    def __str__(self) -> str:
        return self.display


class MatchReason(enum.Enum):
    """Why two ingredient names did or did not match."""

    EXACT = "exact"
    VARIATION = "variation"
    PARTIAL = "partial"
    BLOCKED = "blocked"
    NONE = "none"


@dataclasses.dataclass(frozen=True)
class MatchDecision:
    """The outcome of a match check; truthy when the names matched."""

    matched: bool
    reason: MatchReason
    detail: Optional[str] = None

    def __bool__(self) -> bool:
        return self.matched
