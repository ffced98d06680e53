"""Flask application exposing recipe ingredient analysis."""

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, current_app, jsonify, request

from recipe_utils.config import Settings
from recipe_utils.database import SQLiteIngredientStore
from recipe_utils.errors import AnalysisError, NoIngredientsFound
from recipe_utils.ingredients.analysis import analyze_recipe_ingredients
from recipe_utils.ingredients.matching import suggest_matches

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 20


def create_app(settings: Optional[Settings] = None, store=None) -> Flask:
    """Create the Flask app.

    Args:
        settings: Runtime settings. Read from the environment (and a
            ``.env`` file) when omitted.
        store: Backing store. Defaults to a SQLiteIngredientStore on
            ``settings.db_path``.
    """
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()
    if store is None:
        store = SQLiteIngredientStore(settings.db_path)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["INGREDIENT_STORE"] = store

    app.add_url_rule(
        "/api/ingredients/analyze", view_func=analyze_ingredients, methods=["POST"]
    )
    app.add_url_rule("/api/ingredients/search", view_func=search_ingredients)
    return app


def analyze_ingredients():
    """Re-analyze one recipe's ingredients, replacing its match records"""
    data = request.get_json(silent=True) or {}
    recipe_id = data.get("recipe_id")
    if recipe_id is None or recipe_id == "":
        return jsonify({"error": "Missing recipe_id"}), 400

    settings = current_app.config["SETTINGS"]
    store = current_app.config["INGREDIENT_STORE"]

    try:
        recipe = store.get_recipe(recipe_id)
    except Exception as e:
        logger.error(f"Failed to look up recipe {recipe_id}: {e}")
        return jsonify({"error": "Failed to load recipe"}), 500
    if recipe is None:
        return jsonify({"error": "Recipe not found"}), 404

    try:
        store.delete_match_records(recipe.id)
    except Exception as e:
        logger.error(f"Failed to delete match records for recipe {recipe.id}: {e}")
        return jsonify({"error": "Failed to clear previous analysis"}), 500

    try:
        result = analyze_recipe_ingredients(
            recipe.id, store, **settings.analysis_options()
        )
    except NoIngredientsFound as e:
        return jsonify({"error": str(e)}), 404
    except AnalysisError as e:
        return jsonify({"error": str(e)}), 500

    return jsonify(
        {
            "success": True,
            "matched_count": result.matched_count,
            "unmatched_count": result.unmatched_count,
            "matched_ingredients": [
                record.to_dict() for record in result.match_records
            ],
            "unmatched_ingredients": result.unmatched_ingredients,
        }
    )


def search_ingredients():
    """Rank catalog ingredients against a free-text query"""
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify([])

    limit = request.args.get("limit", DEFAULT_SEARCH_LIMIT, type=int)
    limit = max(1, min(limit, MAX_SEARCH_LIMIT))

    store = current_app.config["INGREDIENT_STORE"]
    try:
        catalog = store.load_catalog()
    except Exception as e:
        logger.error(f"Failed to load ingredient catalog: {e}")
        return jsonify({"error": "Failed to load ingredient database"}), 500

    results = [
        {
            "id": entry.id,
            "name": entry.name,
            "category_id": entry.category_id,
            "similarity": round(similarity, 3),
        }
        for entry, similarity in suggest_matches(query, catalog, limit=limit)
    ]
    return jsonify(results)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    app = create_app()
    settings = app.config["SETTINGS"]

    print("\n" + "=" * 60)
    print("Recipe Ingredient Analysis API")
    print("=" * 60)
    print(f"Database: {settings.db_path}")
    print("Starting web server at http://localhost:5002")
    print("=" * 60 + "\n")

    app.run(debug=True, port=5002)
