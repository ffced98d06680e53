"""Per-recipe ingredient analysis.

Loads a recipe's raw ingredient lines and the full ingredient catalog from a
store, matches every non-blank line, and persists the resulting match records
in a single bulk write. The analysis only ever appends records: callers that
re-run it for a recipe delete that recipe's existing records first.

A store is any object providing::

    load_raw_lines(recipe_id) -> List[RawIngredientLine]
    load_catalog() -> List[CatalogIngredient]
    save_match_records(records: List[MatchRecord]) -> None

``recipe_utils.database.SQLiteIngredientStore`` is the bundled implementation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence, Tuple

from recipe_utils.errors import (
    CatalogLoadFailed,
    IngredientLoadFailed,
    NoIngredientsFound,
    PersistFailed,
)
from recipe_utils.ingredients.matching import CatalogMatcher
from recipe_utils.ingredients.models import (
    ALIAS,
    AnalysisResult,
    CatalogIngredient,
    MatchRecord,
    RawIngredientLine,
)

logger = logging.getLogger(__name__)


def _match_line(
    line: RawIngredientLine, matcher: CatalogMatcher
) -> Optional[MatchRecord]:
    match = matcher.match(line.raw_text)
    if match is None:
        return None

    match_type = matcher.match_type(match)
    return MatchRecord(
        recipe_id=line.recipe_id,
        recipe_ingredient_id=line.id,
        ingredient_id=match.ingredient.id,
        original_text=line.raw_text,
        matched_term=match.ingredient.name,
        match_type=match_type,
        matched_alias=match.ingredient.name if match_type == ALIAS else None,
    )


def match_ingredient_lines(
    lines: Sequence[RawIngredientLine],
    catalog: Sequence[CatalogIngredient],
    matcher: Optional[CatalogMatcher] = None,
    max_workers: Optional[int] = None,
) -> Tuple[List[MatchRecord], List[str]]:
    """Match raw ingredient lines against a catalog snapshot.

    Blank lines are skipped and counted nowhere. Lines are independent of
    each other, so with ``max_workers`` > 1 they are matched on a thread
    pool; output order always follows input order.

    Args:
        lines: Raw ingredient lines of one recipe.
        catalog: The ingredient catalog. Ignored when ``matcher`` is given.
        matcher: A prepared CatalogMatcher to reuse across calls.
        max_workers: Thread pool size for line-level matching.

    Returns:
        A tuple of (match_records, unmatched_texts).
    """
    if matcher is None:
        matcher = CatalogMatcher(catalog)

    candidates = [line for line in lines if not line.is_blank]

    if max_workers and max_workers > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(
                executor.map(lambda line: _match_line(line, matcher), candidates)
            )
    else:
        outcomes = [_match_line(line, matcher) for line in candidates]

    records = []
    unmatched = []
    for line, record in zip(candidates, outcomes):
        if record is None:
            unmatched.append(line.raw_text)
        else:
            records.append(record)

    return records, unmatched


def analyze_recipe_ingredients(
    recipe_id: Any,
    store,
    acceptance_floor: Optional[float] = None,
    exact_threshold: Optional[float] = None,
    max_workers: Optional[int] = None,
) -> AnalysisResult:
    """Match a recipe's raw ingredient lines and persist the match records.

    Args:
        recipe_id: Identifier of the recipe to analyze.
        store: Backing store (see module docstring).
        acceptance_floor: Override for the matcher's minimum score.
        exact_threshold: Override for the exact/alias classification cut-off.
        max_workers: Thread pool size for line-level matching.

    Returns:
        AnalysisResult with the persisted records and unmatched texts.

    Raises:
        IngredientLoadFailed: If the raw lines could not be read.
        NoIngredientsFound: If the recipe has no raw ingredient lines.
        CatalogLoadFailed: If the catalog could not be loaded.
        PersistFailed: If the match records could not be written.
    """
    try:
        lines = store.load_raw_lines(recipe_id)
    except Exception as e:
        logger.error(f"Failed to load raw ingredients for recipe {recipe_id}: {e}")
        raise IngredientLoadFailed(
            f"Failed to load ingredients: {e}", recipe_id=recipe_id
        ) from e

    if not lines:
        raise NoIngredientsFound("No ingredients found", recipe_id=recipe_id)

    try:
        catalog = store.load_catalog()
    except Exception as e:
        logger.error(f"Failed to load ingredient catalog for recipe {recipe_id}: {e}")
        raise CatalogLoadFailed(
            f"Failed to load ingredient database: {e}", recipe_id=recipe_id
        ) from e

    matcher_options = {}
    if acceptance_floor is not None:
        matcher_options["acceptance_floor"] = acceptance_floor
    if exact_threshold is not None:
        matcher_options["exact_threshold"] = exact_threshold
    matcher = CatalogMatcher(catalog, **matcher_options)

    records, unmatched = match_ingredient_lines(
        lines, catalog, matcher=matcher, max_workers=max_workers
    )

    if records:
        try:
            store.save_match_records(records)
        except Exception as e:
            logger.error(f"Failed to save match records for recipe {recipe_id}: {e}")
            raise PersistFailed(f"Failed to save: {e}", recipe_id=recipe_id) from e

    logger.info(
        f"Recipe {recipe_id}: matched {len(records)}, unmatched {len(unmatched)}"
    )
    for text in unmatched:
        logger.debug(f"Recipe {recipe_id}: no catalog match for '{text}'")

    return AnalysisResult(
        recipe_id=recipe_id, match_records=records, unmatched_ingredients=unmatched
    )
