"""Ingredient normalization, catalog matching and analysis utilities."""

from .analysis import analyze_recipe_ingredients, match_ingredient_lines
from .matching import (
    ACCEPTANCE_FLOOR,
    EXACT_THRESHOLD,
    CatalogMatcher,
    classify_match_type,
    match_ingredient,
    suggest_matches,
)
from .models import (
    AnalysisResult,
    CatalogIngredient,
    CatalogMatch,
    MatchRecord,
    ParsedIngredient,
    RawIngredientLine,
    RecipeSummary,
)
from .normalization import STRIP_RULES, normalize_ingredient_text
from .number_utils import amount_to_float
from .parsing import normalize_unit, parse_ingredient_line
from .reanalysis import ReanalysisReport, reanalyze_recipes
from .reporting import unmatched_frequency, write_match_records_csv

__all__ = [
    "ACCEPTANCE_FLOOR",
    "EXACT_THRESHOLD",
    "STRIP_RULES",
    "AnalysisResult",
    "CatalogIngredient",
    "CatalogMatch",
    "CatalogMatcher",
    "MatchRecord",
    "ParsedIngredient",
    "RawIngredientLine",
    "ReanalysisReport",
    "RecipeSummary",
    "amount_to_float",
    "analyze_recipe_ingredients",
    "classify_match_type",
    "match_ingredient",
    "match_ingredient_lines",
    "normalize_ingredient_text",
    "normalize_unit",
    "parse_ingredient_line",
    "reanalyze_recipes",
    "suggest_matches",
    "unmatched_frequency",
    "write_match_records_csv",
]
