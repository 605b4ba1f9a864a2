"""Amount parsing and combination utilities."""

import re
from typing import List, Optional, Tuple

from grocery_utils.ingredients.models import ParsedAmount, RawIngredient
from grocery_utils.ingredients.normalization import UNIT_LOOKUP, normalize_unit
from grocery_utils.ingredients.number_utils import (
    _is_fraction,
    _is_integer,
    _is_number,
    _parse_fraction,
    _replace_unicode_fractions,
    format_quantity,
)

# --- Constants ---

TO_TASTE = "to taste"

# Digits glued to a unit, e.g. "8oz"
_GLUED_UNIT = re.compile(r"^(\d+(?:\.\d+)?)([a-zA-Z])")
_TO_TASTE_PATTERN = re.compile(r",?\s*to taste", re.IGNORECASE)
_OPTIONAL_PATTERN = re.compile(r"\(?\boptional\b\)?", re.IGNORECASE)

# --- Functions ---


def _parse_number_range(words: List[str]) -> Tuple[Optional[float], int]:
    """Parse number ranges like '2 to 3' or '2-3'."""
    # Pattern: "2 to 3"
    if (
        len(words) >= 3
        and _is_number(words[0])
        and words[1].lower() == "to"
        and _is_number(words[2])
    ):
        amount = (float(words[0]) + float(words[2])) / 2
        return amount, 3

    # Pattern: "2-3"
    if len(words) >= 1 and "-" in words[0] and len(words[0].split("-")) == 2:
        parts = words[0].split("-")
        if _is_number(parts[0]) and _is_number(parts[1]):
            amount = (float(parts[0]) + float(parts[1])) / 2
            return amount, 1

    return None, 0


def _parse_mixed_number(words: List[str]) -> Tuple[Optional[float], int]:
    """Parse mixed numbers like '1 1/2' or '1 .5'."""
    if len(words) < 2 or not _is_integer(words[0]):
        return None, 0

    whole_part = int(words[0])

    # Pattern: "1 1/2" (whole number + fraction)
    if _is_fraction(words[1]):
        fraction_part = _parse_fraction(words[1])
        amount = float(whole_part + fraction_part)
        return amount, 2

    # Pattern: "1 .5" (whole number + decimal, after unicode conversion)
    if _is_number(words[1]):
        decimal_part = float(words[1])
        # Only treat as mixed number if the decimal part is less than 1
        if 0 < decimal_part < 1:
            amount = float(whole_part + decimal_part)
            return amount, 2

    return None, 0


def _parse_simple_number(words: List[str]) -> Tuple[Optional[float], int]:
    """Parse simple numbers like '1/2', '2.5', or '3'."""
    if len(words) < 1:
        return None, 0

    # Pattern: "1/2" (simple fraction)
    if _is_fraction(words[0]):
        amount = float(_parse_fraction(words[0]))
        return amount, 1

    # Pattern: "2.5" or "3" (decimal or integer)
    if _is_number(words[0]):
        amount = float(words[0])
        return amount, 1

    return None, 0


def _split_words(text: str) -> List[str]:
    text = _replace_unicode_fractions(text.strip())
    text = _GLUED_UNIT.sub(r"\1 \2", text)
    return text.split()


def _parse_leading_number(words: List[str]) -> Tuple[Optional[float], int]:
    """Parse a number from the start of a word list.

    Returns:
        A tuple of the parsed value (None if there is no number) and the
        number of words it consumed.
    """
    if not words:
        return None, 0

    try:
        # Try different parsing patterns in order of complexity
        for parser in [_parse_number_range, _parse_mixed_number, _parse_simple_number]:
            amount, consumed_words = parser(words)
            if amount is not None:
                return amount, consumed_words
    except (ValueError, ZeroDivisionError):
        # If any parsing fails, no amount can be parsed
        pass

    return None, 0


def _parse_unit(text: str) -> Tuple[Optional[str], str]:
    """Parse a known unit from the start of a string.

    The unit is returned as written (e.g. "oz", not "ounce").
    """
    words = text.split()
    if not words:
        return None, text

    if len(words) >= 2:
        two_words = f"{words[0]} {words[1]}".lower()
        if two_words in UNIT_LOOKUP:
            return f"{words[0]} {words[1]}", " ".join(words[2:])

    potential_unit = words[0].lower().rstrip(",")
    if potential_unit in UNIT_LOOKUP or potential_unit.strip(".") in UNIT_LOOKUP:
        return words[0].rstrip(","), " ".join(words[1:])

    # No unit found - return None for unit and the original text
    return None, text


def parse_amount(text) -> ParsedAmount:
    """Parse a free-text quantity and unit into a ParsedAmount.

    Handles "to taste" (anywhere in the text), simple fractions, decimals,
    integers, mixed numbers, ranges and unicode fractions. Whatever follows
    the number is kept as the unit. Text without a leading number is kept
    as-is with a value of 0.

    Args:
        text: Amount text such as "1 1/2 cups", "8 oz" or "to taste".

    Returns:
        The parsed amount. This function never raises.

    Examples:
        >>> parse_amount("1/2 cup").numeric_value
        0.5
        >>> parse_amount("Salt to taste").is_to_taste
        True
        >>> parse_amount("a handful").is_numeric
        False
    """
    if isinstance(text, bool) or text is None:
        text = ""
    elif isinstance(text, (int, float)):
        text = format_quantity(text)
    elif not isinstance(text, str):
        text = str(text)

    raw_text = " ".join(text.split())

    if TO_TASTE in raw_text.lower():
        leftover = _TO_TASTE_PATTERN.sub(" ", raw_text)
        words = _split_words(leftover)
        _, consumed = _parse_leading_number(words)
        unit, _ = _parse_unit(" ".join(words[consumed:]))
        return ParsedAmount(raw_text=raw_text, unit=unit or "", is_to_taste=True)

    words = _split_words(raw_text)
    amount, consumed = _parse_leading_number(words)
    if amount is None:
        return ParsedAmount(raw_text=raw_text)

    unit = " ".join(words[consumed:]).strip(" ,")
    return ParsedAmount(
        raw_text=raw_text,
        numeric_value=amount,
        unit=unit,
        is_numeric=True,
    )


def _composite(*parts: str) -> ParsedAmount:
    text = ", ".join(part for part in parts if part)
    return ParsedAmount(raw_text=text, is_composite=True)


def same_unit(first: ParsedAmount, second: ParsedAmount) -> bool:
    """Check whether two amounts use the same unit, allowing aliases."""
    return normalize_unit(first.unit) == normalize_unit(second.unit)


def combine_amounts(existing: ParsedAmount, new: ParsedAmount) -> ParsedAmount:
    """Combine two amounts of the same ingredient.

    Same-unit (or unit-less) numeric amounts are summed. Amounts in
    different units are never converted; they are joined for display as
    "<a> <unitA>, <b> <unitB>". A numeric amount meeting a "to taste" one
    becomes "<numeric> <unit>, to taste". Composite and unparseable amounts
    are joined in processing order.

    Args:
        existing: The amount accumulated so far.
        new: The amount being added.

    Returns:
        The combined amount.

    Examples:
        >>> combine_amounts(parse_amount("1 cup"), parse_amount("1/2 cups")).display
        '1.5 cup'
        >>> combine_amounts(parse_amount("8 oz"), parse_amount("1 lb")).display
        '8 oz, 1 lb'
    """
    if new.is_empty:
        return existing
    if existing.is_empty:
        return new

    if existing.is_to_taste and new.is_to_taste:
        unit = existing.unit or new.unit
        return ParsedAmount(raw_text=TO_TASTE, unit=unit, is_to_taste=True)

    if existing.is_to_taste and new.is_numeric:
        return _composite(new.display, TO_TASTE)
    if new.is_to_taste and existing.is_numeric:
        return _composite(existing.display, TO_TASTE)

    if existing.is_numeric and new.is_numeric:
        if same_unit(existing, new):
            total = existing.numeric_value + new.numeric_value
            unit = existing.unit or new.unit
            return ParsedAmount(
                raw_text=f"{format_quantity(total)} {unit}".strip(),
                numeric_value=total,
                unit=unit,
                is_numeric=True,
            )
        return _composite(existing.display, new.display)

    return _composite(existing.display, new.display)


def clean_ingredient_name(name: str) -> str:
    """Clean up ingredient names by removing formatting and notes.

    Removes parenthetical notes, anything after the first comma, extra
    whitespace and optional markers.

    Examples:
        >>> clean_ingredient_name("onions (about 2 medium), diced")
        'onions'
        >>> clean_ingredient_name("  fresh   basil ")
        'fresh basil'
    """
    name = _OPTIONAL_PATTERN.sub("", name)

    # Remove parenthetical notes
    name = re.sub(r"\s*\([^)]*\)", "", name)

    # Preparation notes follow the first comma
    name = name.split(",")[0]

    name = re.sub(r"\s+", " ", name)
    return name.strip()


def parse_ingredient_line(text: str) -> RawIngredient:
    """Split an ingredient line into a RawIngredient.

    Args:
        text: Raw ingredient text (e.g., "2 cups diced onions" or
            "Salt, to taste").

    Returns:
        A RawIngredient. The amount keeps its original spelling ("1/2"),
        the unit is returned as written and the name is cleaned.

    Examples:
        >>> parse_ingredient_line("1 1/2 lbs ground beef")
        RawIngredient(name='ground beef', amount='1 1/2', unit='lbs', optional=False)
        >>> parse_ingredient_line("Salt and pepper, to taste")
        RawIngredient(name='Salt and pepper', amount='to taste', unit='', optional=False)
    """
    if not isinstance(text, str):
        return RawIngredient(name="")

    original_text = " ".join(text.split())
    optional = bool(_OPTIONAL_PATTERN.search(original_text))

    if TO_TASTE in original_text.lower():
        ingredient_part = _TO_TASTE_PATTERN.split(original_text)[0]
        return RawIngredient(
            name=clean_ingredient_name(ingredient_part) or original_text,
            amount=TO_TASTE,
            unit="",
            optional=optional,
        )

    # Leading parenthetical quantities like "(15 oz)" belong to the unit, not the name
    body = re.sub(r"^\([^)]*\)\s*", "", original_text)
    words = _split_words(body)
    amount, consumed = _parse_leading_number(words)
    amount_text = " ".join(words[:consumed]) if amount is not None else ""

    unit, rest = _parse_unit(" ".join(words[consumed:]))
    name = clean_ingredient_name(rest)

    # If cleaning results in an empty string, fall back to the original text
    if not name:
        name = original_text
    return RawIngredient(
        name=name,
        amount=amount_text,
        unit=unit or "",
        optional=optional,
    )
