import sqlite3

import pytest

from recipe_utils.database import (
    SQLiteIngredientStore,
    get_connection,
    get_match_report,
    transaction,
    upsert_ingredient,
)
from recipe_utils.ingredients.analysis import analyze_recipe_ingredients
from recipe_utils.ingredients.models import MatchRecord


def test_schema_tables(db_path):
    conn = get_connection(db_path)
    try:
        tables = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
    finally:
        conn.close()
    assert {
        "ingredient_category",
        "ingredient",
        "recipe",
        "recipe_ingredient",
        "recipe_ingredient_detail",
    } <= tables


def test_upsert_ingredient_is_idempotent(db_path):
    conn = get_connection(db_path)
    try:
        with transaction(conn) as cur:
            first = upsert_ingredient(cur, "paprika", "spices")
            second = upsert_ingredient(cur, "paprika", "spices")
            salt = upsert_ingredient(cur, "salt")
    finally:
        conn.close()
    assert first == second
    assert salt == 5


def test_transaction_rolls_back(db_path):
    conn = get_connection(db_path)
    try:
        with pytest.raises(RuntimeError):
            with transaction(conn) as cur:
                upsert_ingredient(cur, "paprika")
                raise RuntimeError("boom")
        count = conn.execute(
            "SELECT COUNT(*) FROM ingredient WHERE name = 'paprika'"
        ).fetchone()[0]
    finally:
        conn.close()
    assert count == 0


def test_insert_recipe_stores_raw_and_split_lines(store, add_recipe):
    recipe_id = add_recipe("Soup", ["1 1/2 cups chicken stock", "salt"])
    lines = store.load_raw_lines(recipe_id)

    assert [line.raw_text for line in lines] == ["1 1/2 cups chicken stock", "salt"]
    assert (lines[0].amount, lines[0].unit) == ("1 1/2", "cup")
    assert (lines[1].amount, lines[1].unit) == ("", "")
    assert all(line.recipe_id == recipe_id for line in lines)


def test_load_catalog_in_id_order(store):
    names = [entry.name for entry in store.load_catalog()]
    assert names == ["onion", "garlic", "tomato", "olive oil", "salt"]


def test_get_recipe_and_list_recipes(store, add_recipe):
    first = add_recipe("Soup", ["salt"])
    second = add_recipe("Salad", ["olive oil"])

    assert store.get_recipe(first).title == "Soup"
    assert store.get_recipe(9999) is None
    assert [r.id for r in store.list_recipes()] == [first, second]


def test_save_match_records_is_all_or_nothing(store, add_recipe):
    recipe_id = add_recipe("Soup", ["salt"])
    good = MatchRecord(recipe_id, None, 5, "salt", "salt", "exact")
    bad = MatchRecord(recipe_id, None, 5, "salt", "salt", "fuzzy")

    with pytest.raises(sqlite3.IntegrityError):
        store.save_match_records([good, bad])
    assert store.load_match_records(recipe_id) == []


def test_delete_match_records(store, add_recipe):
    recipe_id = add_recipe("Soup", ["salt", "2 onions"])
    other_id = add_recipe("Salad", ["olive oil"])
    analyze_recipe_ingredients(recipe_id, store)
    analyze_recipe_ingredients(other_id, store)

    assert store.delete_match_records(recipe_id) == 2
    assert store.load_match_records(recipe_id) == []
    assert len(store.load_match_records(other_id)) == 1


def test_find_recipes_needing_reanalysis(store, add_recipe, db_path):
    broken = add_recipe("Soup", ["salt", "2 onions"])
    intact = add_recipe("Salad", ["olive oil"])
    analyze_recipe_ingredients(broken, store)
    analyze_recipe_ingredients(intact, store)
    assert store.find_recipes_needing_reanalysis() == []

    # Re-importing raw lines unlinks the existing match records.
    conn = get_connection(db_path)
    try:
        with transaction(conn) as cur:
            cur.execute("DELETE FROM recipe_ingredient WHERE recipe_id = ?", (broken,))
    finally:
        conn.close()

    needing = store.find_recipes_needing_reanalysis()
    assert [r.id for r in needing] == [broken]
    assert all(r.recipe_ingredient_id is None for r in store.load_match_records(broken))


def test_get_match_report(db_path, store, add_recipe):
    recipe_id = add_recipe("Salsa", ["2 onions", "1 dragonfruit", "salt"])
    analyze_recipe_ingredients(recipe_id, store)

    df = get_match_report(db_path)
    assert list(df["matched_term"]) == ["onion", "salt"]
    assert list(df["category"]) == ["produce", "spices"]
    assert list(df["match_type"]) == ["alias", "exact"]
    assert df["linked"].all()
    assert set(df["recipe_title"]) == {"Salsa"}


def test_store_create_is_idempotent(db_path):
    SQLiteIngredientStore(db_path, create=True)
    assert len(SQLiteIngredientStore(db_path).load_catalog()) == 5
