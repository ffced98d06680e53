"""Ingredient text normalization.

Raw ingredient lines are reduced to a comparison key by an ordered table of
regular-expression substitutions. Each rule operates on the output of the
previous one, so the order of ``STRIP_RULES`` is significant: later rules
assume earlier ones have already removed overlapping noise.
"""

import re
from typing import List, NamedTuple, Pattern


class StripRule(NamedTuple):
    name: str
    pattern: Pattern
    replacement: str = ""


def _words(*terms: str, abbreviations: bool = False) -> Pattern:
    """Compile a case-insensitive, word-boundary alternation of ``terms``.

    Terms are regex fragments (``room\\s*temperature``), not literals. When
    ``abbreviations`` is set, a trailing period after the term is removed too
    (``tbsp.``, ``pkg.``).
    """
    suffix = r"\.?" if abbreviations else ""
    return re.compile(r"\b(?:" + "|".join(terms) + r")\b" + suffix, re.IGNORECASE)


_FRACTION_CHARS = "¼-¾⅐-⅞"

# Bare numbers, decimals, simple fractions/ranges and unicode vulgar
# fractions, optionally followed by a linear dimension ("2-3 inch").
_QUANTITY = re.compile(
    r"\b(?:\d+(?:\.\d+)?[" + _FRACTION_CHARS + r"]?|[" + _FRACTION_CHARS + r"])"
    r"(?:[/-]\d+(?:\.\d+)?)?"
    r"(?:\s*(?:inch|inches|cm|centimeter|centimeters|mm))?\b",
    re.IGNORECASE,
)

STRIP_RULES: List[StripRule] = [
    StripRule("quantity", _QUANTITY),
    StripRule(
        "volume_unit",
        _words(
            "cup", "cups", "c",
            "tablespoon", "tablespoons", "tbsp", "tbs", "tb",
            "teaspoon", "teaspoons", "tsp", "ts",
            r"fluid\s*ounce", r"fluid\s*ounces", r"fl\.?\s*oz",
            "pint", "pints", "pt",
            "quart", "quarts", "qt",
            "gallon", "gallons", "gal",
            "milliliter", "milliliters", "millilitre", "millilitres", "ml",
            "liter", "liters", "litre", "litres", "l",
            "deciliter", "deciliters", "dl",
            abbreviations=True,
        ),
    ),
    StripRule(
        "weight_unit",
        _words(
            "pound", "pounds", "lb", "lbs",
            "ounce", "ounces", "oz",
            "gram", "grams", "gramme", "grammes", "g",
            "kilogram", "kilograms", "kg",
            "milligram", "milligrams", "mg",
            abbreviations=True,
        ),
    ),
    StripRule(
        "count_unit",
        _words(
            "clove", "cloves", "stalk", "stalks", "stick", "sticks",
            "piece", "pieces", "chunk", "chunks", "strip", "strips",
            "wedge", "wedges", "slice", "slices", "head", "heads",
            "bunch", "bunches", "sprig", "sprigs", "leaf", "leaves",
            "bulb", "bulbs", "can", "cans", "jar", "jars",
            "package", "packages", "pkg", "box", "boxes", "bag", "bags",
            "container", "containers",
            abbreviations=True,
        ),
    ),
    StripRule(
        "prep_state",
        _words(
            "diced", "chopped", "peeled", "minced", "sliced", "grated",
            "shredded", "crushed", "mashed", "pureed", "ground", "crumbled",
            "julienned", "ribboned", "cubed", "halved", "quartered",
            "sectioned", "segmented", "torn", "broken",
        ),
    ),
    StripRule(
        "prep_instruction",
        _words(
            "cut", "cutting", "slice", "slicing", "chop", "chopping",
            "dice", "dicing", "mince", "mincing",
            "into", "in", "to", "about", "approximately",
        ),
    ),
    StripRule(
        "cleaning_state",
        _words(
            "washed", "rinsed", "cleaned", "scrubbed", "dried", "drained",
            "patted", "trimmed", "deveined", "deseeded", "pitted", "cored",
            "stemmed", "husked", "shucked", "picked", "sorted",
        ),
    ),
    StripRule(
        "storage_state",
        _words(
            "fresh", "freshly", "dried", "frozen", "defrosted", "thawed",
            "bottled", "packaged", "jarred", "smoked", "cured", "aged",
        ),
    ),
    StripRule(
        "cooking_state",
        _words(
            "raw", "cooked", "uncooked", "precooked", "blanched",
            "parboiled", "steamed", "boiled", "simmered", "poached",
            "roasted", "baked", "grilled", "broiled", "fried", "sauteed",
            "sautéed", "pan-fried", "deep-fried", "stir-fried", "braised",
            "stewed", "caramelized",
        ),
    ),
    StripRule(
        "sourcing",
        _words(
            "organic", "non-organic", "natural", "wild", "farm-raised",
            "free-range", "grass-fed", "hormone-free", "antibiotic-free",
            "gmo-free", "non-gmo", "gluten-free", "low-sodium", "no-salt",
            "unsalted", "salted", "sweetened", "unsweetened", "sugar-free",
        ),
    ),
    StripRule(
        "temperature_texture",
        _words(
            "cold", "hot", "warm", r"room\s*temperature", "chilled",
            "refrigerated", "softened", "melted", "hardened", "firm", "soft",
            "tender", "crisp", "crispy", "crunchy",
        ),
    ),
    StripRule(
        "intensity",
        _words(
            "very", "extra", "super", "ultra", "lightly", "slightly",
            "moderately", "highly", "well", "thoroughly", "completely",
            "fully", "partly", "partially", "finely", "coarsely", "roughly",
            "thinly", "thickly",
        ),
    ),
    StripRule(
        "size",
        _words(
            "large", "medium", "small", "mini", "baby", "jumbo", "giant",
            "extra-large", "x-large", "xl", "extra-small", "x-small", "xs",
            "bite-sized", "bite-size",
        ),
    ),
    StripRule(
        "color",
        _words(
            "red", "green", "yellow", "orange", "purple", "white", "black",
            "brown", "golden", "dark", "light", "pale",
        ),
    ),
    StripRule(
        "ripeness",
        _words(
            "ripe", "unripe", "overripe", "mature", "young", "new", "old",
            "aged", "day-old",
        ),
    ),
    StripRule(
        "cuisine",
        _words(
            "italian", "french", "spanish", "mexican", "asian", "chinese",
            "japanese", "thai", "indian", "greek", "mediterranean",
            "english", "american",
        ),
    ),
    StripRule(
        "anatomy",
        _words(
            "top", "bottom", "end", "ends", "tip", "tips", "root", "roots",
            "skin", "peel", "flesh", "meat", "bone", "bones", "boneless",
            "skinless", "seedless",
        ),
    ),
    StripRule(
        "optionality",
        _words(
            "optional", r"to\s*taste", r"as\s*needed", r"for\s*serving",
            r"for\s*garnish", r"if\s*desired", "preferably", "ideally",
        ),
    ),
    StripRule(
        "stopword",
        _words(
            "and", "or", "with", "without", "plus", "a", "an", "the", "of",
            "from", "for", "on", "at", "by",
        ),
    ),
    StripRule("parenthetical", re.compile(r"\([^)]*\)"), " "),
    StripRule("bracketed", re.compile(r"\[[^\]]*\]"), " "),
    StripRule("punctuation", re.compile(r"[,\-–—&/]"), " "),
    StripRule("whitespace", re.compile(r"\s+"), " "),
]


def _apply_rules(text: str) -> str:
    text = (
        text.replace("’", "'")
        .replace("‘", "'")
        .lower()
        .strip()
    )
    for rule in STRIP_RULES:
        text = rule.pattern.sub(rule.replacement, text)
    return text.strip()


def normalize_ingredient_text(ingredient_text: str) -> str:
    """Normalize a raw ingredient line into a catalog comparison key.

    Lowercases the text and strips quantities, units, container nouns and
    descriptive adjectives (preparation, storage, cooking, size, color and
    so on), asides in parentheses or brackets, and punctuation. Whitespace
    is collapsed to single spaces.

    The rule table is reapplied until the text stops changing, so the
    result is a fixed point: normalizing it again returns it unchanged.

    Args:
        ingredient_text: The raw ingredient line as entered or scraped.

    Returns:
        The normalized comparison key. May be empty when every token was
        noise.

    Examples:
        >>> normalize_ingredient_text("2 cups diced yellow onion")
        'onion'
        >>> normalize_ingredient_text("3 cloves garlic, minced")
        'garlic'
    """
    if not ingredient_text:
        return ""

    text = _apply_rules(ingredient_text)
    while True:
        again = _apply_rules(text)
        if again == text:
            return text
        text = again
