import pytest

from recipe_utils.database import (
    SQLiteIngredientStore,
    get_connection,
    insert_recipe,
    transaction,
    upsert_ingredient,
)
from recipe_utils.ingredients.models import CatalogIngredient

CATALOG_NAMES = [
    ("onion", "produce"),
    ("garlic", "produce"),
    ("tomato", "produce"),
    ("olive oil", "oils"),
    ("salt", "spices"),
]


@pytest.fixture
def catalog():
    return [
        CatalogIngredient(id=i, name=name)
        for i, (name, _) in enumerate(CATALOG_NAMES, start=1)
    ]


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "test_recipes.db"
    SQLiteIngredientStore(path, create=True)
    conn = get_connection(path)
    try:
        with transaction(conn) as cur:
            for name, category in CATALOG_NAMES:
                upsert_ingredient(cur, name, category)
    finally:
        conn.close()
    return path


@pytest.fixture
def store(db_path):
    return SQLiteIngredientStore(db_path)


@pytest.fixture
def add_recipe(db_path):
    """Insert a recipe with raw ingredient lines, return its ID."""

    def _add(title, lines):
        conn = get_connection(db_path)
        try:
            with transaction(conn) as cur:
                return insert_recipe(cur, title, lines)
        finally:
            conn.close()

    return _add
