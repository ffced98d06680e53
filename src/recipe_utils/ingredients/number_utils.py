from fractions import Fraction
from typing import Optional

UNICODE_FRACTIONS = {
    "¼": Fraction(1, 4),
    "½": Fraction(1, 2),
    "¾": Fraction(3, 4),
    "⅓": Fraction(1, 3),
    "⅔": Fraction(2, 3),
    "⅛": Fraction(1, 8),
    "⅜": Fraction(3, 8),
    "⅝": Fraction(5, 8),
    "⅞": Fraction(7, 8),
}


def _parse_single(text: str) -> Optional[Fraction]:
    """Parse '3', '2.5', '1/2', '½' or '1½' into a Fraction."""
    if not text:
        return None
    if text[-1] in UNICODE_FRACTIONS:
        whole = text[:-1]
        if whole and not whole.isdigit():
            return None
        return int(whole or 0) + UNICODE_FRACTIONS[text[-1]]
    if not (text[0].isdigit() or text[0] == "."):
        return None
    try:
        return Fraction(text)
    except (ValueError, ZeroDivisionError):
        return None


def amount_to_float(amount: str) -> Optional[float]:
    """Convert an amount string as written in a recipe into a number.

    Handles integers, decimals, fractions, unicode fractions, mixed numbers
    ("1 1/2") and ranges ("2-3", "2 to 3"), which are averaged.

    Returns None when the text is empty or not a quantity.

    Examples:
        >>> amount_to_float("1 1/2")
        1.5
        >>> amount_to_float("2-3")
        2.5
    """
    text = (amount or "").strip().lower()
    if not text:
        return None

    for separator in (" to ", "-"):
        if separator in text:
            low, _, high = text.partition(separator)
            low_value = amount_to_float(low)
            high_value = amount_to_float(high)
            if low_value is None or high_value is None:
                return None
            return (low_value + high_value) / 2

    parts = text.split()
    if len(parts) == 2:
        whole, fraction = parts
        if not whole.isdigit():
            return None
        fraction_value = _parse_single(fraction)
        if fraction_value is None or fraction_value >= 1:
            return None
        return float(int(whole) + fraction_value)
    if len(parts) == 1:
        value = _parse_single(parts[0])
        return float(value) if value is not None else None
    return None
