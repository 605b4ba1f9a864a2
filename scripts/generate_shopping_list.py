#!/usr/bin/env python3
"""
Generate a categorized shopping list from recipe JSON files and an inventory.

Each recipe file holds one recipe object or a list of them:
    {"title": "...", "ingredients": [{"name": "...", "amount": "...", "unit": "..."}, "2 cups flour"]}
The inventory file holds a list of items:
    [{"name": "...", "quantity": 1, "unit": "item"}]
"""

import argparse
import json
import logging
import sys
from typing import List

from grocery_utils.shopping import (
    KeywordCategorizer,
    ShoppingListAggregator,
    write_shopping_list_csv,
)
from grocery_utils.shopping.categories import DEFAULT_TAXONOMY_FILE
from tqdm import tqdm

logger = logging.getLogger(__name__)


def load_recipes(paths: List[str]) -> List[dict]:
    """Load recipes from JSON files, flattening files that hold lists."""
    recipes = []
    for path in tqdm(paths, desc="Loading recipes", disable=len(paths) < 2):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, list):
            recipes.extend(data)
        else:
            recipes.append(data)
    return recipes


def load_inventory(path: str) -> List[dict]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # Accept {"items": [...]} as well as a bare list
    if isinstance(data, dict):
        data = data.get("items", [])
    return data


def print_shopping_list(shopping_list) -> None:
    for category, items in shopping_list.items_by_category.items():
        print(f"\n{category}")
        for item in items:
            status = "[have]" if item.in_inventory else "[ ]"
            amount = f" - {item.amount_display}" if item.amount_display else ""
            note = " (pantry staple)" if item.is_pantry_staple else ""
            print(f"  {status} {item.display_name}{amount}{note}")
            if item.substitution_note:
                print(f"        {item.substitution_note}")

    summary = shopping_list.summary
    print(
        f"\n{summary.total_items} items in {summary.categories} categories: "
        f"{summary.need_to_buy} to buy, {summary.already_have} already in inventory, "
        f"{summary.combined_count} combined across recipes"
    )


def main():
    parser_args = argparse.ArgumentParser(
        description="Generate a shopping list from recipes and an inventory"
    )
    parser_args.add_argument(
        "recipes", nargs="+", help="Recipe JSON files (one recipe or a list per file)"
    )
    parser_args.add_argument(
        "--inventory", help="Inventory JSON file (list of items)", default=None
    )
    parser_args.add_argument(
        "--categories",
        help="Category taxonomy JSON file",
        default=DEFAULT_TAXONOMY_FILE,
    )
    parser_args.add_argument(
        "--include-optional",
        action="store_true",
        help="Include ingredients marked optional",
    )
    parser_args.add_argument(
        "--max-workers",
        type=int,
        default=1,
        help="Threads used to process recipes (default: 1)",
    )
    parser_args.add_argument("--csv", help="Also write the list to this CSV file")
    parser_args.add_argument(
        "--only-needed",
        action="store_true",
        help="Leave items already in inventory out of the CSV",
    )
    parser_args.add_argument(
        "--verbose", "-v", action="store_true", help="Log every match decision"
    )
    args = parser_args.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        recipes = load_recipes(args.recipes)
        inventory = load_inventory(args.inventory) if args.inventory else []
        categorizer = KeywordCategorizer(taxonomy_file=args.categories)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        sys.exit(1)

    aggregator = ShoppingListAggregator(
        categorizer=categorizer,
        include_optional=args.include_optional,
        max_workers=args.max_workers,
    )
    shopping_list = aggregator.aggregate(recipes, inventory)
    print_shopping_list(shopping_list)

    if args.csv:
        write_shopping_list_csv(
            shopping_list, args.csv, include_covered=not args.only_needed
        )


if __name__ == "__main__":
    main()
