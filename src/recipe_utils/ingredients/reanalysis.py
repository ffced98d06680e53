"""Throttled re-analysis of many recipes against the backing store."""

import dataclasses
import logging
from typing import Any, Dict, List, Sequence

from tqdm.auto import tqdm

from recipe_utils.batching import FixedDelayThrottle, retry_on_store_error
from recipe_utils.errors import AnalysisError, IngredientLoadFailed, NoIngredientsFound
from recipe_utils.ingredients.analysis import analyze_recipe_ingredients
from recipe_utils.ingredients.models import AnalysisResult, RecipeSummary

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ReanalysisReport:
    success: List[Dict[str, Any]] = dataclasses.field(default_factory=list)
    failed: List[Dict[str, Any]] = dataclasses.field(default_factory=list)
    skipped: List[Dict[str, Any]] = dataclasses.field(default_factory=list)
    results: List[AnalysisResult] = dataclasses.field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.success) + len(self.failed) + len(self.skipped)


def _reanalyze_recipe(store, recipe: RecipeSummary, analysis_options: Dict) -> AnalysisResult:
    """Delete a recipe's match records and analyze it again from scratch.

    Recipes without raw lines keep their records and raise NoIngredientsFound.
    """
    try:
        lines = store.load_raw_lines(recipe.id)
    except Exception as e:
        raise IngredientLoadFailed(
            f"Failed to load ingredients: {e}", recipe_id=recipe.id
        ) from e
    if not lines:
        raise NoIngredientsFound("No ingredients found", recipe_id=recipe.id)

    store.delete_match_records(recipe.id)
    return analyze_recipe_ingredients(recipe.id, store, **analysis_options)


def reanalyze_recipes(
    store,
    recipes: Sequence[RecipeSummary],
    batch_size: int = 5,
    throttle=None,
    max_retries: int = 1,
    retry_delay: float = 1.0,
    show_progress: bool = False,
    **analysis_options,
) -> ReanalysisReport:
    """Re-run ingredient analysis for each recipe, in throttled batches.

    Every recipe is handled as one replace: its raw lines are checked, its
    existing match records are deleted and the analysis runs again. Retries
    repeat that whole unit. A failing recipe is recorded and the run moves
    on to the next one.

    Args:
        store: Backing store; must also provide ``delete_match_records``.
        recipes: Recipes to re-analyze, in processing order.
        batch_size: Recipes per batch; the throttle waits between batches.
        throttle: Object with a ``wait()`` method. Defaults to a fixed
            2 second delay.
        max_retries: Attempts per recipe on transient store errors.
        retry_delay: Initial backoff between attempts in seconds.
        show_progress: Display a tqdm progress bar.
        **analysis_options: Passed through to ``analyze_recipe_ingredients``.

    Returns:
        ReanalysisReport with success, failed and skipped entries.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    if throttle is None:
        throttle = FixedDelayThrottle(2.0)

    attempt = retry_on_store_error(max_retries=max_retries, initial_delay=retry_delay)(
        _reanalyze_recipe
    )

    report = ReanalysisReport()
    total_batches = (len(recipes) + batch_size - 1) // batch_size

    with tqdm(total=len(recipes), desc="Re-analyzing recipes", disable=not show_progress) as pbar:
        for i in range(0, len(recipes), batch_size):
            batch = recipes[i : i + batch_size]
            batch_num = (i // batch_size) + 1
            logger.info(
                f"Processing batch {batch_num}/{total_batches} ({len(batch)} recipes)"
            )

            for recipe in batch:
                _process_recipe(store, recipe, attempt, analysis_options, report)
                pbar.update(1)

            if i + batch_size < len(recipes):
                throttle.wait()

    logger.info(
        f"Re-analysis complete: {len(report.success)} succeeded, "
        f"{len(report.failed)} failed, {len(report.skipped)} skipped"
    )
    return report


def _process_recipe(
    store,
    recipe: RecipeSummary,
    attempt,
    analysis_options: Dict,
    report: ReanalysisReport,
) -> None:
    entry = {"recipe_id": recipe.id, "title": recipe.title}

    try:
        result = attempt(store, recipe, analysis_options)
    except NoIngredientsFound:
        logger.warning(f"[{recipe.id}] {recipe.title}: skipped, no raw ingredients")
        report.skipped.append({**entry, "reason": "No raw ingredients"})
        return
    except AnalysisError as e:
        logger.error(f"[{recipe.id}] {recipe.title}: analysis failed: {e}")
        report.failed.append({**entry, "error": str(e)})
        return
    except Exception as e:
        # Failed to delete old records, or an unexpected store error
        logger.error(f"[{recipe.id}] {recipe.title}: {e}")
        report.failed.append({**entry, "error": str(e)})
        return

    logger.info(
        f"[{recipe.id}] {recipe.title}: matched {result.matched_count}/"
        f"{result.matched_count + result.unmatched_count} ingredients"
    )
    report.success.append(
        {
            **entry,
            "matched": result.matched_count,
            "unmatched": result.unmatched_count,
            "unmatched_ingredients": list(result.unmatched_ingredients),
        }
    )
    report.results.append(result)
