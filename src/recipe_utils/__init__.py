"""Recipe Utils - Ingredient normalization and catalog matching for recipes."""

__version__ = "0.1.0"

from . import batching, database, errors, ingredients

__all__ = ["batching", "database", "errors", "ingredients"]
