"""Splitting raw ingredient lines into amount, unit and name."""

import re
from typing import List, Optional, Tuple

from recipe_utils.ingredients.models import ParsedIngredient
from recipe_utils.ingredients.number_utils import amount_to_float

# --- Constants ---

UNIT_MAP = {
    # Volume
    "cup": ["cup", "cups", "c"],
    "tablespoon": ["tablespoon", "tablespoons", "tbsp", "tbs", "tb"],
    "teaspoon": ["teaspoon", "teaspoons", "tsp", "ts"],
    "fluid ounce": ["fluid ounce", "fluid ounces", "fl oz", "fl. oz"],
    "pint": ["pint", "pints", "pt"],
    "quart": ["quart", "quarts", "qt"],
    "gallon": ["gallon", "gallons", "gal"],
    "milliliter": ["milliliter", "milliliters", "millilitre", "millilitres", "ml"],
    "liter": ["liter", "liters", "litre", "litres", "l"],
    "deciliter": ["deciliter", "deciliters", "decilitre", "decilitres", "dl"],
    # Weight
    "pound": ["pound", "pounds", "lb", "lbs"],
    "ounce": ["ounce", "ounces", "oz"],
    "gram": ["gram", "grams", "gramme", "grammes", "g"],
    "kilogram": ["kilogram", "kilograms", "kilogramme", "kilogrammes", "kg"],
    "milligram": ["milligram", "milligrams", "milligramme", "milligrammes", "mg"],
    # Length
    "inch": ["inch", "inches", "in"],
    "centimeter": ["centimeter", "centimeters", "centimetre", "centimetres", "cm"],
    # Count/measure
    "pinch": ["pinch", "pinches"],
    "dash": ["dash", "dashes"],
    "clove": ["clove", "cloves"],
    "slice": ["slice", "slices"],
    "piece": ["piece", "pieces"],
    "can": ["can", "cans"],
    "jar": ["jar", "jars"],
    "package": ["package", "packages", "pkg"],
    "box": ["box", "boxes"],
    "bag": ["bag", "bags"],
    "bunch": ["bunch", "bunches"],
    "head": ["head", "heads"],
    "sprig": ["sprig", "sprigs"],
    "stalk": ["stalk", "stalks"],
    "stick": ["stick", "sticks"],
    "sheet": ["sheet", "sheets"],
    "leaf": ["leaf", "leaves"],
    "whole": ["whole", "wholes"],
    "small": ["small"],
    "medium": ["medium"],
    "large": ["large"],
}

# Create reverse mapping for lookup
UNIT_LOOKUP = {v: k for k, vs in UNIT_MAP.items() for v in vs}

_LEADING_BULLETS = re.compile(r"^[•▢\-\s]+")
_LEADING_PARENTHETICAL = re.compile(r"^\(([^)]+)\)\s+")

# --- Functions ---


def normalize_unit(unit: str) -> str:
    """Normalize unit names to their standard form.

    Examples:
        >>> normalize_unit("Tbsp.")
        'tablespoon'
        >>> normalize_unit("lbs")
        'pound'
    """
    unit = " ".join(unit.lower().strip(".").split())
    return UNIT_LOOKUP.get(unit, unit)  # Return original if not found


def parse_ingredient_line(text: Optional[str]) -> ParsedIngredient:
    """Split an ingredient line into amount, unit and ingredient name.

    The amount is kept as written ("1/2", "1 1/2", "2-3", "½"); use
    ``amount_to_float`` to get a number. The unit is returned in its
    canonical form. A leading parenthetical that names a unit becomes the
    unit when no plain unit follows the amount.

    Args:
        text: Raw ingredient text (e.g., "2 tablespoons olive oil").

    Returns:
        A ParsedIngredient. Missing parts are empty strings; the name falls
        back to the original text when nothing else is left.

    Examples:
        >>> parse_ingredient_line("1/2 teaspoon salt")
        ParsedIngredient(amount='1/2', unit='teaspoon', name='salt', original='1/2 teaspoon salt')
        >>> parse_ingredient_line("1 (14 ounce) can tomatoes").unit
        '14 ounce'
    """
    original = (text or "").strip()
    if not original:
        return ParsedIngredient(amount="", unit="", name="", original=original)

    stripped = _LEADING_BULLETS.sub("", original)
    words = stripped.split()

    amount, consumed = _parse_amount(words)
    unit, consumed = _parse_unit(words, consumed)

    name = " ".join(words[consumed:])
    name = re.sub(r"^[,\-\s]+", "", name).strip()

    if not unit:
        unit, name = _parse_parenthetical_unit(name)

    return ParsedIngredient(
        amount=amount,
        unit=unit,
        name=name or original,
        original=original,
    )


def _parse_amount(words: List[str]) -> Tuple[str, int]:
    """Parse the amount from the start of a tokenized line.

    Tries ranges ("2 to 3"), mixed numbers ("1 1/2") and single quantities
    ("2", "1/2", "1-2", "1½") in that order.

    Returns:
        The amount as written and the number of words it consumed.
    """
    if (
        len(words) >= 3
        and words[1].lower() == "to"
        and amount_to_float(words[0]) is not None
        and amount_to_float(words[2]) is not None
    ):
        return " ".join(words[:3]), 3

    if len(words) >= 2 and words[0].isdigit():
        mixed = " ".join(words[:2])
        if amount_to_float(mixed) is not None:
            return mixed, 2

    if words and amount_to_float(words[0]) is not None:
        return words[0], 1

    return "", 0


def _parse_unit(words: List[str], start: int) -> Tuple[str, int]:
    """Parse a unit starting at ``words[start]``; two-word units win."""
    if start + 1 < len(words):
        pair = normalize_unit(" ".join(words[start : start + 2]))
        if " " in pair and pair in UNIT_MAP:
            return pair, start + 2

    if start < len(words):
        potential_unit = words[start].lower().strip(".,")
        if potential_unit in UNIT_LOOKUP:
            return normalize_unit(potential_unit), start + 1

    return "", start


def _parse_parenthetical_unit(name: str) -> Tuple[str, str]:
    """Take "(14 ounce) can tomatoes" apart into ("14 ounce", "can tomatoes")."""
    match = _LEADING_PARENTHETICAL.match(name)
    if not match:
        return "", name

    content = match.group(1).strip()
    if any(word.lower().strip(".,") in UNIT_LOOKUP for word in content.split()):
        return content, name[match.end() :].strip()
    return "", name
