"""Keyword-based grocery category assignment."""

import json
import logging
import os
from typing import Dict, List

from grocery_utils.ingredients.guards import contains_as_words

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"

DEFAULT_TAXONOMY_FILE = os.path.join(
    os.path.dirname(__file__), "data", "grocery_categories.json"
)


class KeywordCategorizer:
    """Assigns shopping list items to grocery store categories.

    Any object with ``categorize(name)`` and ``is_valid_category(label)``
    can stand in for this class when aggregating; this is the default used
    when the host application has no taxonomy of its own.

    Attributes:
        categories (dict): Category label to keyword list, in lookup order.
        best_matches (dict): Exact item name to category label overrides.
    """

    def __init__(self, taxonomy_file: str = DEFAULT_TAXONOMY_FILE):
        """Load the category taxonomy.

        Args:
            taxonomy_file (str): Path to a JSON file with a ``categories``
                mapping of label to keywords and an optional ``best_matches``
                mapping of item name to label. Defaults to the bundled file.

        Raises:
            FileNotFoundError: If the taxonomy file does not exist.
            json.JSONDecodeError: If the taxonomy file is not valid JSON.
        """
        with open(taxonomy_file, "r", encoding="utf-8") as f:
            taxonomy = json.load(f)

        self.categories: Dict[str, List[str]] = {
            label: [keyword.lower() for keyword in keywords]
            for label, keywords in taxonomy.get("categories", {}).items()
        }
        self.best_matches: Dict[str, str] = {
            name.lower(): label for name, label in taxonomy.get("best_matches", {}).items()
        }

        for name, label in self.best_matches.items():
            if not self.is_valid_category(label):
                logger.warning(
                    f"Best match '{name}' points to unknown category '{label}'"
                )

    def categorize(self, name) -> str:
        """Map an ingredient name to a category label.

        Exact best matches win, then categories are tried in file order and
        the first one with a keyword present as whole words is used.

        Args:
            name: Ingredient name, usually an aggregation key.

        Returns:
            The category label, or "Other" when nothing matches.

        Examples:
            >>> KeywordCategorizer().categorize("tomato paste")
            'Canned Tomatoes'
            >>> KeywordCategorizer().categorize("dragon fruit")
            'Other'
        """
        if not isinstance(name, str) or not name.strip():
            logger.warning(f"Invalid ingredient name for categorization: {name!r}")
            return DEFAULT_CATEGORY

        text = " ".join(name.lower().split())
        if text in self.best_matches:
            return self.best_matches[text]

        for label, keywords in self.categories.items():
            if contains_as_words(text, keywords):
                return label

        logger.debug(f"No category for '{text}', using {DEFAULT_CATEGORY}")
        return DEFAULT_CATEGORY

    def is_valid_category(self, label) -> bool:
        """Check if a label is one of the known categories (or "Other")."""
        return label == DEFAULT_CATEGORY or label in self.categories

    def get_category_names(self) -> List[str]:
        """Return every category label, "Other" last."""
        names = list(self.categories)
        if DEFAULT_CATEGORY not in names:
            names.append(DEFAULT_CATEGORY)
        return names
