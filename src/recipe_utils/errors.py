"""Errors raised at the ingredient analysis load/persist boundary.

Unmatched ingredient lines are not errors; they are reported as data.
"""

from typing import Any


class AnalysisError(Exception):
    """Base class for failures at the analysis load/persist boundary."""

    def __init__(self, message: str, recipe_id: Any = None):
        super().__init__(message)
        self.recipe_id = recipe_id


class NoIngredientsFound(AnalysisError):
    """The recipe has no raw ingredient lines."""


class IngredientLoadFailed(AnalysisError):
    """The recipe's raw ingredient lines could not be read."""


class CatalogLoadFailed(AnalysisError):
    """The ingredient catalog could not be loaded."""


class PersistFailed(AnalysisError):
    """Match records were computed but could not be written."""
