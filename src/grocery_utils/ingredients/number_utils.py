import math
from decimal import Decimal

# Unicode fraction mappings
UNICODE_FRAC = {
    "¼": ".25",
    "½": ".5",
    "¾": ".75",
    "⅓": ".333",
    "⅔": ".667",
    "⅛": ".125",
}


def _is_integer(text: str) -> bool:
    """Check if a string represents a valid integer."""
    try:
        int(text)
        return True
    except ValueError:
        return False


def _is_number(text: str) -> bool:
    """Check if a string represents a valid finite number (int or float).

    "nan", "inf" and "Infinity" are not amounts.
    """
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


def _is_fraction(text: str) -> bool:
    """Check if a string represents a valid fraction (e.g., '1/2')."""
    if "/" not in text:
        return False
    parts = text.split("/")
    return len(parts) == 2 and all(_is_integer(part) for part in parts)


def _parse_fraction(text: str) -> Decimal:
    """Parse a fraction string (e.g., '1/2') into a Decimal."""
    if "/" not in text:
        raise ValueError(f"Not a fraction: {text}")

    numerator_str, denominator_str = text.split("/")
    numerator = Decimal(numerator_str)
    denominator = Decimal(denominator_str)

    if denominator == 0:
        raise ZeroDivisionError("Division by zero in fraction")

    return numerator / denominator


def _replace_unicode_fractions(text: str) -> str:
    """Expand unicode vulgar fractions, keeping '1½' apart as '1 .5'."""
    out = []
    for c in text:
        if c in UNICODE_FRAC:
            out.append(" " + UNICODE_FRAC[c])
        else:
            out.append(c)
    return "".join(out)


def format_quantity(value: float) -> str:
    """Render a quantity without trailing zeros.

    Examples:
        >>> format_quantity(8.0)
        '8'
        >>> format_quantity(1.5)
        '1.5'
        >>> format_quantity(1 / 3)
        '0.33'
        >>> format_quantity(float("nan"))
        'nan'
    """
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")
