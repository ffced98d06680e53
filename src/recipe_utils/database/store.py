"""SQLite-backed store for ingredient analysis."""

import pathlib
import sqlite3
from typing import List, Optional, Sequence, Union

from recipe_utils.database.schema import create_schema
from recipe_utils.database.utils import get_connection, transaction
from recipe_utils.ingredients.models import (
    CatalogIngredient,
    MatchRecord,
    RawIngredientLine,
    RecipeSummary,
)


class SQLiteIngredientStore:
    """Loads raw lines and the catalog, and persists match records.

    Each call opens its own connection, so one store can be shared by
    threads handling separate requests.

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Union[str, pathlib.Path], create: bool = False):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
            create: Create the schema if it does not exist yet.
        """
        self.db_path = db_path
        if create:
            conn = get_connection(db_path)
            try:
                create_schema(conn)
            finally:
                conn.close()

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def load_raw_lines(self, recipe_id) -> List[RawIngredientLine]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, recipe_id, raw_name, amount, unit "
                "FROM recipe_ingredient WHERE recipe_id = ? ORDER BY id",
                (recipe_id,),
            ).fetchall()
        finally:
            conn.close()
        return [
            RawIngredientLine(
                id=row[0],
                recipe_id=row[1],
                raw_text=row[2],
                amount=row[3] or "",
                unit=row[4] or "",
            )
            for row in rows
        ]

    def load_catalog(self) -> List[CatalogIngredient]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, name, category_id FROM ingredient ORDER BY id"
            ).fetchall()
        finally:
            conn.close()
        return [CatalogIngredient(id=row[0], name=row[1], category_id=row[2]) for row in rows]

    def save_match_records(self, records: Sequence[MatchRecord]) -> None:
        """Insert all records in one transaction; nothing is written on failure."""
        conn = self._connect()
        try:
            with transaction(conn) as cur:
                cur.executemany(
                    "INSERT INTO recipe_ingredient_detail("
                    "recipe_id, recipe_ingredient_id, ingredient_id, original_text, "
                    "matched_term, match_type, matched_alias"
                    ") VALUES (?, ?, ?, ?, ?, ?, ?)",
                    [
                        (
                            record.recipe_id,
                            record.recipe_ingredient_id,
                            record.ingredient_id,
                            record.original_text,
                            record.matched_term,
                            record.match_type,
                            record.matched_alias,
                        )
                        for record in records
                    ],
                )
        finally:
            conn.close()

    def delete_match_records(self, recipe_id) -> int:
        """Delete every match record of a recipe, return how many were removed."""
        conn = self._connect()
        try:
            with transaction(conn) as cur:
                cur.execute(
                    "DELETE FROM recipe_ingredient_detail WHERE recipe_id = ?",
                    (recipe_id,),
                )
                return cur.rowcount
        finally:
            conn.close()

    def load_match_records(self, recipe_id) -> List[MatchRecord]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT recipe_id, recipe_ingredient_id, ingredient_id, original_text, "
                "matched_term, match_type, matched_alias "
                "FROM recipe_ingredient_detail WHERE recipe_id = ? ORDER BY id",
                (recipe_id,),
            ).fetchall()
        finally:
            conn.close()
        return [MatchRecord(*row) for row in rows]

    def get_recipe(self, recipe_id) -> Optional[RecipeSummary]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, title FROM recipe WHERE id = ?", (recipe_id,)
            ).fetchone()
        finally:
            conn.close()
        return RecipeSummary(id=row[0], title=row[1]) if row else None

    def list_recipes(self) -> List[RecipeSummary]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT id, title FROM recipe ORDER BY id").fetchall()
        finally:
            conn.close()
        return [RecipeSummary(id=row[0], title=row[1]) for row in rows]

    def find_recipes_needing_reanalysis(self) -> List[RecipeSummary]:
        """Recipes owning match records whose raw-line link has been lost."""
        conn = self._connect()
        try:
            rows = conn.execute(
                """
                SELECT DISTINCT r.id, r.title
                FROM recipe r
                JOIN recipe_ingredient_detail d ON d.recipe_id = r.id
                WHERE d.recipe_ingredient_id IS NULL
                ORDER BY r.id
                """
            ).fetchall()
        finally:
            conn.close()
        return [RecipeSummary(id=row[0], title=row[1]) for row in rows]
