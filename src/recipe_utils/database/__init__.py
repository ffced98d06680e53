"""Database utilities for recipe ingredient databases."""

from .schema import DDL, create_schema
from .store import SQLiteIngredientStore
from .utils import (
    get_connection,
    get_match_report,
    insert_recipe,
    transaction,
    upsert_category,
    upsert_ingredient,
)

__all__ = [
    "DDL",
    "create_schema",
    "SQLiteIngredientStore",
    "get_connection",
    "get_match_report",
    "insert_recipe",
    "transaction",
    "upsert_category",
    "upsert_ingredient",
]
