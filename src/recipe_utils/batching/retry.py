"""Retry decorators for handling transient store failures."""

import logging
import time
from functools import wraps
from typing import Any, Callable, Tuple, Type

from recipe_utils.errors import (
    CatalogLoadFailed,
    IngredientLoadFailed,
    PersistFailed,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    CatalogLoadFailed,
    IngredientLoadFailed,
    PersistFailed,
)


def retry_on_store_error(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    errors: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
) -> Callable:
    """Decorator that retries a function on store errors with exponential backoff.

    The decorated function must be safe to run again from the start; for
    ingredient analysis that means deleting the recipe's match records
    before analyzing.

    Args:
        max_retries: Maximum number of attempts, including the first
        initial_delay: Initial delay between retries in seconds
        errors: Exception types that trigger a retry

    Returns:
        Decorated function that retries on store errors

    Example:
        @retry_on_store_error(max_retries=3, initial_delay=1.0)
        def reanalyze(recipe_id):
            store.delete_match_records(recipe_id)
            return analyze_recipe_ingredients(recipe_id, store)
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except errors as e:
                    if attempt < max_retries - 1:
                        logger.warning(
                            f"Store error on attempt {attempt + 1}/{max_retries}: {e}. "
                            f"Retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        delay *= 2  # Exponential backoff
                    else:
                        logger.error(f"Failed after {max_retries} attempts: {e}")
                        raise

        return wrapper

    return decorator
