"""Database utility functions for recipe ingredient databases."""

import contextlib
import logging
import pathlib
import sqlite3
from typing import Generator, Iterable, Optional, Union

import pandas as pd

from recipe_utils.ingredients.parsing import parse_ingredient_line

logger = logging.getLogger(__name__)


def get_connection(db_path: Union[str, pathlib.Path]) -> sqlite3.Connection:
    """Get a SQLite database connection with foreign keys enabled.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection with foreign keys enabled
    """
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Cursor, None, None]:
    """Context manager for database transactions.

    Args:
        conn: SQLite database connection

    Yields:
        Database cursor for executing queries

    Example:
        with transaction(conn) as cur:
            cur.execute("INSERT INTO ingredient(name) VALUES (?)", ("onion",))
    """
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def upsert_category(cur: sqlite3.Cursor, name: str) -> int:
    """Insert an ingredient category if it doesn't exist, return its ID."""
    cur.execute(
        "INSERT INTO ingredient_category(name) VALUES (?) ON CONFLICT(name) DO NOTHING",
        (name,),
    )
    cur.execute("SELECT id FROM ingredient_category WHERE name = ?", (name,))
    return cur.fetchone()[0]


def upsert_ingredient(cur: sqlite3.Cursor, name: str, category: Optional[str] = None) -> int:
    """Insert a catalog ingredient if it doesn't exist, return its ID.

    Args:
        cur: Database cursor
        name: Canonical ingredient name
        category: Optional category name, created on first use

    Returns:
        Integer ID of the ingredient
    """
    category_id = upsert_category(cur, category) if category else None
    cur.execute(
        "INSERT INTO ingredient(name, category_id) VALUES (?, ?) "
        "ON CONFLICT(name) DO NOTHING",
        (name, category_id),
    )
    cur.execute("SELECT id FROM ingredient WHERE name = ?", (name,))
    return cur.fetchone()[0]


def insert_recipe(
    cur: sqlite3.Cursor,
    title: str,
    ingredient_lines: Iterable[str],
    owner_id: Optional[str] = None,
) -> int:
    """Insert a recipe with its raw ingredient lines, return the recipe ID.

    Each line is stored verbatim as ``raw_name``; the amount and unit split
    off by ``parse_ingredient_line`` are stored alongside it.
    """
    cur.execute("INSERT INTO recipe(title, owner_id) VALUES (?, ?)", (title, owner_id))
    recipe_id = cur.lastrowid

    rows = []
    for line in ingredient_lines:
        parsed = parse_ingredient_line(line)
        rows.append((recipe_id, line, parsed.amount, parsed.unit))

    cur.executemany(
        "INSERT INTO recipe_ingredient(recipe_id, raw_name, amount, unit) "
        "VALUES (?, ?, ?, ?)",
        rows,
    )
    return recipe_id


def get_match_report(db_path: Union[str, pathlib.Path]) -> pd.DataFrame:
    """Get all persisted match records with catalog names and categories.

    Args:
        db_path: Path to the SQLite database

    Returns:
        DataFrame with columns: recipe_id, recipe_title, original_text,
        matched_term, match_type, matched_alias, ingredient_id, category,
        linked (False where the raw-line link has been lost)
    """
    conn = get_connection(db_path)

    query = """
    SELECT
        d.recipe_id,
        r.title AS recipe_title,
        d.original_text,
        d.matched_term,
        d.match_type,
        d.matched_alias,
        d.ingredient_id,
        c.name AS category,
        d.recipe_ingredient_id IS NOT NULL AS linked
    FROM recipe_ingredient_detail d
    JOIN recipe r ON r.id = d.recipe_id
    LEFT JOIN ingredient i ON i.id = d.ingredient_id
    LEFT JOIN ingredient_category c ON c.id = i.category_id
    ORDER BY d.recipe_id, d.id
    """

    try:
        df = pd.read_sql_query(query, conn)
        df["linked"] = df["linked"].astype(bool)
        logger.info(
            f"Loaded {len(df)} match records across {df['recipe_id'].nunique()} recipes"
        )
        return df
    finally:
        conn.close()
