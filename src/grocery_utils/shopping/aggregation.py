"""Shopping list aggregation across recipes and inventory."""

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

from grocery_utils.ingredients.guards import is_blocked, is_dietary_conflict
from grocery_utils.ingredients.keys import ingredient_key
from grocery_utils.ingredients.matching import (
    MIN_PARTIAL_LENGTH,
    PARTIAL_MATCH_THRESHOLD,
    can_match,
    partial_similarity,
)
from grocery_utils.ingredients.models import MatchReason, RawIngredient
from grocery_utils.ingredients.normalization import normalize_ingredient_name
from grocery_utils.ingredients.parsing import combine_amounts, parse_amount
from grocery_utils.ingredients.variations import can_substitute, get_substitutions
from grocery_utils.shopping.categories import DEFAULT_CATEGORY, KeywordCategorizer
from grocery_utils.shopping.coverage import evaluate_coverage
from grocery_utils.shopping.models import (
    AggregatedIngredient,
    InventoryItem,
    Recipe,
    ShoppingList,
    Summary,
)

logger = logging.getLogger(__name__)

# Looser threshold for the last-chance pass over raw names
FALLBACK_MATCH_THRESHOLD = 0.75

PANTRY_STAPLE_KEYS = frozenset(
    {"salt", "black pepper", "salt and pepper", "garlic powder", "onion powder"}
)


def is_pantry_staple(name) -> bool:
    """Check if an ingredient is a common pantry staple like salt or pepper."""
    return ingredient_key(name) in PANTRY_STAPLE_KEYS


def _to_recipe(value) -> Recipe:
    if isinstance(value, Recipe):
        return value
    return Recipe.from_dict(value)


def _to_inventory_item(value) -> InventoryItem:
    if isinstance(value, InventoryItem):
        return value
    return InventoryItem.from_dict(value)


@dataclasses.dataclass(frozen=True)
class _Occurrence:
    recipe_title: str
    ingredient: RawIngredient
    key: str


class ShoppingListAggregator:
    """Builds a categorized shopping list from recipes and an inventory.

    Ingredients sharing an aggregation key are merged into one row, each row
    is matched against the inventory and checked for coverage, and the rows
    are grouped by category.

    Recipes and ingredients are processed in input order. That order is
    visible in the output: the longer display name wins on a merge and
    amounts that cannot be summed are joined in the order they were seen.

    Attributes:
        categorizer: Object with ``categorize(name)`` and
            ``is_valid_category(label)``.
        include_optional (bool): Whether optional ingredients are listed.
        partial_threshold (float): Length ratio for containment matches.
        fallback_threshold (float): Length ratio for the raw-name fallback.
        max_workers (int): Threads used to collect ingredients per recipe.
    """

    def __init__(
        self,
        categorizer=None,
        include_optional: bool = False,
        partial_threshold: float = PARTIAL_MATCH_THRESHOLD,
        fallback_threshold: float = FALLBACK_MATCH_THRESHOLD,
        max_workers: int = 1,
    ):
        self.categorizer = categorizer if categorizer is not None else KeywordCategorizer()
        self.include_optional = include_optional
        self.partial_threshold = partial_threshold
        self.fallback_threshold = fallback_threshold
        self.max_workers = max(1, int(max_workers))

    def _collect(self, recipe: Recipe) -> List[_Occurrence]:
        occurrences = []
        for value in recipe.ingredients:
            ingredient = RawIngredient.from_value(value)
            if ingredient.optional and not self.include_optional:
                logger.debug(f"Skipping optional ingredient '{ingredient.name}'")
                continue
            occurrences.append(
                _Occurrence(recipe.title, ingredient, ingredient_key(ingredient.name))
            )
        return occurrences

    def collect_occurrences(self, recipes: List[Recipe]) -> List[List[_Occurrence]]:
        """Compute aggregation keys for every recipe, keeping recipe order."""
        if self.max_workers > 1 and len(recipes) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(self._collect, recipes))
        return [self._collect(recipe) for recipe in recipes]

    def merge(
        self, occurrences_by_recipe: Iterable[List[_Occurrence]]
    ) -> Dict[str, AggregatedIngredient]:
        """Merge occurrences into one row per key, in first-seen order."""
        rows: Dict[str, AggregatedIngredient] = {}
        for occurrences in occurrences_by_recipe:
            for occurrence in occurrences:
                ingredient = occurrence.ingredient
                amount = parse_amount(f"{ingredient.amount} {ingredient.unit}")
                row = rows.get(occurrence.key)

                if row is None:
                    rows[occurrence.key] = AggregatedIngredient(
                        key=occurrence.key,
                        display_name=ingredient.name,
                        amount=amount,
                        unit=ingredient.unit,
                        source_recipes=[occurrence.recipe_title],
                        optional=ingredient.optional,
                    )
                    continue

                logger.debug(
                    f"[COMBINE] '{ingredient.name}' into '{row.display_name}' "
                    f"(key '{occurrence.key}')"
                )
                row.amount = combine_amounts(row.amount, amount)
                row.unit = row.unit or ingredient.unit
                if len(ingredient.name) > len(row.display_name):
                    row.display_name = ingredient.name
                if occurrence.recipe_title not in row.source_recipes:
                    row.source_recipes.append(occurrence.recipe_title)
                row.optional = row.optional and ingredient.optional
                row.instance_count += 1
        return rows

    def _fallback_match(self, name: str, item_name: str) -> bool:
        first = " ".join(name.lower().split())
        second = " ".join(item_name.lower().split())
        if is_blocked(first, second) or is_dietary_conflict(first, second):
            return False
        return partial_similarity(
            first, second, threshold=self.fallback_threshold, min_length=MIN_PARTIAL_LENGTH
        )

    def find_inventory_match(
        self, name: str, inventory: List[InventoryItem]
    ) -> Tuple[Optional[InventoryItem], MatchReason]:
        """Find the inventory item that satisfies an ingredient, if any.

        Tries an exact normalized match, then the first ``can_match`` hit,
        then a looser containment match on the raw names. The block table
        still vetoes the last pass. Inventory order breaks ties.

        Returns:
            The matched item (or None) and the reason it matched.
        """
        normalized = normalize_ingredient_name(name)
        if normalized:
            for item in inventory:
                if normalize_ingredient_name(item.name) == normalized:
                    return item, MatchReason.EXACT

        for item in inventory:
            matched, decision = can_match(
                name, item.name, partial_threshold=self.partial_threshold
            )
            if matched:
                return item, decision.reason

        for item in inventory:
            if self._fallback_match(name, item.name):
                logger.debug(f"[MATCH] fallback '{name}' -> '{item.name}'")
                return item, MatchReason.PARTIAL

        return None, MatchReason.NONE

    def _categorize(self, key: str) -> str:
        category = self.categorizer.categorize(key) or DEFAULT_CATEGORY
        if not self.categorizer.is_valid_category(category):
            # Host taxonomies may return labels we do not know; keep them
            logger.debug(f"Unknown category '{category}' for '{key}'")
        return category

    def _resolve(self, row: AggregatedIngredient, inventory: List[InventoryItem]) -> None:
        row.category = self._categorize(row.key)
        row.is_pantry_staple = is_pantry_staple(row.key)

        item, reason = self.find_inventory_match(row.display_name, inventory)
        row.match_reason = reason
        if item is None:
            return

        decision = evaluate_coverage(row.amount.display, item)
        row.inventory_item = item
        row.in_inventory = decision.covered
        row.coverage_rule = decision.rule

        if can_substitute(row.display_name, item.name):
            substitution = get_substitutions(row.display_name)
            if substitution is not None:
                row.substitution_note = substitution.conversion_note

    def aggregate(self, recipes, inventory=None) -> ShoppingList:
        """Build a shopping list from recipes and inventory.

        Args:
            recipes: Recipe objects or dicts with ``title`` and ``ingredients``.
            inventory: InventoryItem objects or dicts. May be None.

        Returns:
            A ShoppingList grouped by category, with summary counters.
        """
        recipes = [_to_recipe(recipe) for recipe in recipes or []]
        inventory = [_to_inventory_item(item) for item in inventory or []]

        rows = self.merge(self.collect_occurrences(recipes))

        items_by_category: Dict[str, List[AggregatedIngredient]] = {}
        for row in rows.values():
            self._resolve(row, inventory)
            items_by_category.setdefault(row.category, []).append(row)

        instance_total = sum(row.instance_count for row in rows.values())
        already_have = sum(1 for row in rows.values() if row.in_inventory)
        summary = Summary(
            total_items=len(rows),
            need_to_buy=len(rows) - already_have,
            already_have=already_have,
            categories=len(items_by_category),
            combined_count=instance_total - len(rows),
        )

        logger.info(
            f"Aggregated {instance_total} ingredients from {len(recipes)} recipes into "
            f"{summary.total_items} items ({summary.need_to_buy} to buy, "
            f"{summary.already_have} in inventory)"
        )
        return ShoppingList(
            items_by_category=items_by_category,
            summary=summary,
            recipes=[recipe.title for recipe in recipes],
        )


def aggregate(recipes, inventory=None, categorizer=None) -> ShoppingList:
    """Aggregate recipes into a shopping list with the default settings.

    Examples:
        >>> shopping_list = aggregate(
        ...     [{"title": "A", "ingredients": [{"name": "penne", "amount": "8", "unit": "oz"}]},
        ...      {"title": "B", "ingredients": [{"name": "penne pasta", "amount": "1", "unit": "lb"}]}],
        ...     [],
        ... )
        >>> [item.amount_display for item in shopping_list.items()]
        ['8 oz, 1 lb']
    """
    return ShoppingListAggregator(categorizer=categorizer).aggregate(recipes, inventory)
