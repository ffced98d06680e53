"""Database schema definitions for recipe ingredient databases."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS ingredient_category(
    id   INTEGER PRIMARY KEY,
    name TEXT UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS ingredient(
    id          INTEGER PRIMARY KEY,
    name        TEXT UNIQUE NOT NULL,
    category_id INTEGER,
    FOREIGN KEY(category_id) REFERENCES ingredient_category(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS recipe(
    id       INTEGER PRIMARY KEY,
    title    TEXT NOT NULL,
    owner_id TEXT
);

CREATE TABLE IF NOT EXISTS recipe_ingredient(
    id        INTEGER PRIMARY KEY,
    recipe_id INTEGER NOT NULL,
    raw_name  TEXT,
    amount    TEXT NOT NULL DEFAULT '',
    unit      TEXT NOT NULL DEFAULT '',
    FOREIGN KEY(recipe_id) REFERENCES recipe(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS recipe_ingredient_detail(
    id                   INTEGER PRIMARY KEY,
    recipe_id            INTEGER NOT NULL,
    recipe_ingredient_id INTEGER,
    ingredient_id        INTEGER,
    original_text        TEXT NOT NULL,
    matched_term         TEXT NOT NULL,
    match_type           TEXT NOT NULL CHECK (match_type IN ('exact', 'alias')),
    matched_alias        TEXT,
    FOREIGN KEY(recipe_id)            REFERENCES recipe(id)            ON DELETE CASCADE,
    FOREIGN KEY(recipe_ingredient_id) REFERENCES recipe_ingredient(id) ON DELETE SET NULL,
    FOREIGN KEY(ingredient_id)        REFERENCES ingredient(id)        ON DELETE SET NULL
);

CREATE INDEX IF NOT EXISTS idx_recipe_ingredient_recipe
    ON recipe_ingredient(recipe_id);
CREATE INDEX IF NOT EXISTS idx_recipe_ingredient_detail_recipe
    ON recipe_ingredient_detail(recipe_id);
CREATE INDEX IF NOT EXISTS idx_recipe_ingredient_detail_matched_alias
    ON recipe_ingredient_detail(matched_alias);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the database schema for recipe ingredient matching.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
    conn.execute("PRAGMA foreign_keys = ON")
