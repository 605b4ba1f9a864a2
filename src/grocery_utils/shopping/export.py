"""Tabular export of shopping lists."""

import logging

import pandas as pd

from grocery_utils.shopping.models import ShoppingList

logger = logging.getLogger(__name__)

COLUMNS = [
    "category",
    "name",
    "amount",
    "recipes",
    "in_inventory",
    "inventory_item",
    "match_reason",
    "is_pantry_staple",
    "substitution_note",
]


def shopping_list_to_dataframe(shopping_list: ShoppingList) -> pd.DataFrame:
    """Flatten a shopping list into one row per item.

    Rows keep the shopping list order: category by category, items in the
    order they were first seen. Source recipes are joined with "; ".
    """
    data = []
    for category, items in shopping_list.items_by_category.items():
        for item in items:
            data.append(
                {
                    "category": category,
                    "name": item.display_name,
                    "amount": item.amount_display,
                    "recipes": "; ".join(item.source_recipes),
                    "in_inventory": item.in_inventory,
                    "inventory_item": item.inventory_item.name if item.inventory_item else "",
                    "match_reason": item.match_reason.value,
                    "is_pantry_staple": item.is_pantry_staple,
                    "substitution_note": item.substitution_note or "",
                }
            )
    return pd.DataFrame(data, columns=COLUMNS)


def write_shopping_list_csv(
    shopping_list: ShoppingList, output_file: str, include_covered: bool = True
) -> None:
    """Write a shopping list to CSV.

    Args:
        shopping_list: The aggregated shopping list.
        output_file: Path to output CSV file.
        include_covered: If False, items already in inventory are left out.
    """
    df = shopping_list_to_dataframe(shopping_list)
    if not include_covered:
        df = df[~df["in_inventory"].astype(bool)]

    df.to_csv(output_file, index=False)
    logger.info(f"Wrote {len(df)} shopping list items to {output_file}")
